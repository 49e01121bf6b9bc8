import logging
import random
from typing import Optional, Tuple

from config import GameConfig
from ecs import World
from components import Position
from entities import create_hero, create_enemy
from map_generator import MapGenerator, Tile, GenerationExhausted

logger = logging.getLogger(__name__)

def place_hero(world: World, map_gen: MapGenerator) -> Tuple[int, int]:
    """Ставит героя на случайную пустую клетку."""
    x, y = map_gen.find_random_floor_tile(max_attempts=world.config.max_placement_attempts)
    create_hero(world, x, y)
    return x, y

def _spawn_items(world: World, map_gen: MapGenerator, tile: Tile, count: int):
    """Раскладывает предметы прямо на сетке; занятая клетка перестает быть пустой."""
    hero_pos = world.get_component(world.player_entity, Position)

    def is_free(x: int, y: int) -> bool:
        return (x, y) != (hero_pos.x, hero_pos.y)

    for _ in range(count):
        x, y = map_gen.find_random_floor_tile(is_free, world.config.max_placement_attempts)
        map_gen.map[y, x] = tile

def _spawn_enemies(world: World, map_gen: MapGenerator):
    """Спавнит врагов на пустых клетках, не занятых героем и другими врагами."""
    hero_pos = world.get_component(world.player_entity, Position)
    taken = {(hero_pos.x, hero_pos.y)}

    for _ in range(world.config.enemy_count):
        x, y = map_gen.find_random_floor_tile(lambda x, y: (x, y) not in taken,
                                              world.config.max_placement_attempts)
        create_enemy(world, x, y)
        taken.add((x, y))

def spawn_entities(world: World, map_gen: MapGenerator):
    """Главная функция для спавна всех сущностей на уровне."""
    config = world.config
    required = 1 + config.sword_count + config.potion_count + config.enemy_count
    available = map_gen.count_floor_tiles()
    if available < required:
        raise GenerationExhausted(
            f"Map has {available} floor tiles but {required} are needed for the hero, items and enemies")

    place_hero(world, map_gen)
    _spawn_items(world, map_gen, Tile.SWORD, config.sword_count)
    _spawn_items(world, map_gen, Tile.POTION, config.potion_count)
    _spawn_enemies(world, map_gen)

def generate_world(config: GameConfig, rng: Optional[random.Random] = None) -> World:
    """Creates a new world: map, hero, items and enemies."""
    config.validate()
    rng = rng if rng is not None else random.Random()

    map_gen = MapGenerator(config.grid_width, config.grid_height, rng)
    world = World(config, rng)
    world.game_map = map_gen.generate(config.room_count_range, config.room_size_range,
                                      config.corridor_count_range)
    try:
        spawn_entities(world, map_gen)
    except GenerationExhausted:
        logger.error("Entity placement failed on a %dx%d map with %d floor tiles",
                     config.grid_width, config.grid_height, map_gen.count_floor_tiles())
        raise

    world.log.append("You enter the dungeon. Kill every goblin to win.")
    logger.debug("World ready: hero at %s, %d enemies",
                 world.get_component(world.player_entity, Position), len(world.enemies))
    return world
