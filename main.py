import argparse
import logging
import sys

import pygame

from config import GameConfig
from engine import TurnEngine
from map_generator import GenerationExhausted
from render import PygameRenderer, PygameInputSource

logger = logging.getLogger(__name__)

def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Wrap-around dungeon roguelike")
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible dungeons")
    parser.add_argument("--width", type=int, default=None, help="Grid width in tiles")
    parser.add_argument("--height", type=int, default=None, help="Grid height in tiles")
    parser.add_argument("--enemies", type=int, default=None, help="Number of enemies to spawn")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)

def build_config(args: argparse.Namespace) -> GameConfig:
    config = GameConfig()
    if args.width is not None:
        config.grid_width = args.width
    if args.height is not None:
        config.grid_height = args.height
    if args.enemies is not None:
        config.enemy_count = args.enemies
    return config

def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    config = build_config(args)
    try:
        config.validate()
    except ValueError as exc:
        logger.error("Invalid configuration: %s", exc)
        return 1

    renderer = PygameRenderer(config)
    input_source = PygameInputSource()
    engine = TurnEngine(config, renderer=renderer, hud=renderer, seed=args.seed)

    try:
        engine.start()
        while engine.session.running:
            for action in input_source.poll():
                engine.handle(action)
            if input_source.quit_requested:
                engine.session.running = False
            renderer.tick()
    except GenerationExhausted as exc:
        logger.error("Could not generate a dungeon: %s", exc)
        return 1
    finally:
        # Clean up pygame
        pygame.quit()

    logger.info("Session over: %d runs, %d wins, %d losses",
                engine.session.runs_started, engine.session.wins, engine.session.losses)
    return 0

if __name__ == "__main__":
    sys.exit(main())
