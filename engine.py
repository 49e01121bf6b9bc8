from __future__ import annotations
import logging
import random
from enum import Enum, auto
from typing import Dict, List, Optional, Tuple

from config import GameConfig
from ecs import System, World
from components import Velocity, WantsToAttack, Moved, Retaliated
from game_state import Session
from interfaces import Renderer, HUDReporter, HudStats
from spawner import generate_world
from systems import (MovementSystem, ItemPickupSystem, ContactDamageSystem, MeleeCombatSystem,
                     DeathSystem, EnemyAISystem)

logger = logging.getLogger(__name__)

class Action(Enum):
    MOVE_UP = auto()
    MOVE_DOWN = auto()
    MOVE_LEFT = auto()
    MOVE_RIGHT = auto()
    ATTACK = auto()
    RESTART = auto()

DIRECTIONS: Dict[Action, Tuple[int, int]] = {
    Action.MOVE_UP: (0, -1),
    Action.MOVE_DOWN: (0, 1),
    Action.MOVE_LEFT: (-1, 0),
    Action.MOVE_RIGHT: (1, 0),
}

# Markers that only live for the duration of one player action
TRANSIENT_COMPONENTS = (WantsToAttack, Moved, Retaliated)

class InvalidAction(Exception):
    """An action was submitted that the current phase does not accept."""

class TurnEngine:
    """Owns the current world and resolves one player action at a time.

    Each action runs the turn systems in a fixed order: hero movement,
    pickups, contact damage, hero attack (with the win check), death, and
    finally the enemy turn. Renderer and HUD are notified afterwards.
    """

    def __init__(self, config: GameConfig, renderer: Optional[Renderer] = None,
                 hud: Optional[HUDReporter] = None, seed: Optional[int] = None,
                 rng: Optional[random.Random] = None, world: Optional[World] = None):
        self.config = config
        self.renderer = renderer
        self.hud = hud
        self.rng = rng if rng is not None else random.Random(seed)
        self.session = Session()
        self.world = world
        # The order is very important for turn-based games!
        self.systems: List[System] = [
            MovementSystem(),
            ItemPickupSystem(),
            ContactDamageSystem(),
            MeleeCombatSystem(),
            DeathSystem(),
            EnemyAISystem(),
        ]

    def start(self) -> World:
        """Generates a fresh world and publishes it.

        Raises GenerationExhausted if the map can't hold every entity; the
        previous world, if any, is kept.
        """
        world = generate_world(self.config, self.rng)
        self.world = world
        self.session.runs_started += 1
        logger.info("Run %d started", self.session.runs_started)
        self._publish()
        return world

    def restart(self) -> World:
        return self.start()

    def perform(self, action: Action):
        """Resolves a single action to completion, including the enemy turn."""
        if action is Action.RESTART:
            self.restart()
            return

        world = self.world
        if world is None:
            raise InvalidAction("No game in progress")
        if world.is_over:
            raise InvalidAction(f"{action.name} is not accepted once the game is {world.phase.name}")

        hero = world.player_entity
        if action in DIRECTIONS:
            vel = world.get_component(hero, Velocity)
            vel.dx, vel.dy = DIRECTIONS[action]
        else:
            world.add_component(hero, WantsToAttack())

        world.player_took_turn = True
        world.turn += 1
        for system in self.systems:
            system.update(world)
        self._end_turn(world)

        if world.is_over:
            self.session.record_outcome(world.phase)
            logger.info("Run %d ended: %s after %d turns, %d killed",
                        self.session.runs_started, world.phase.name, world.turn, world.counters.killed)
        self._publish()

    def handle(self, action: Action) -> bool:
        """Input adapter entry point. Actions the engine can't take are ignored."""
        try:
            self.perform(action)
        except InvalidAction as exc:
            logger.debug("Ignored input: %s", exc)
            return False
        return True

    def _end_turn(self, world: World):
        hero = world.player_entity
        vel = world.get_component(hero, Velocity)
        if vel:
            vel.dx, vel.dy = 0, 0
        for component_type in TRANSIENT_COMPONENTS:
            world.components.get(component_type, {}).clear()
        world.player_took_turn = False

    def _publish(self):
        if self.world is None:
            return
        if self.hud is not None:
            self.hud.update(HudStats.from_world(self.world))
        if self.renderer is not None:
            self.renderer.render(self.world)
