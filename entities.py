from ecs import World, Entity
from components import (Position, Velocity, Renderable, Health, Player, Enemy, CombatStats, Name)

def create_hero(world: World, x: int, y: int) -> Entity:
    config = world.config
    hero = world.create_entity()
    world.add_component(hero, Position(x, y))
    world.add_component(hero, Velocity())
    world.add_component(hero, Renderable("@", "red"))
    world.add_component(hero, Health(config.hero_hp, config.hero_hp))
    world.add_component(hero, Player())
    world.add_component(hero, CombatStats(attack=config.hero_attack))
    world.add_component(hero, Name("Hero"))
    world.player_entity = hero # Сохраняем ссылку на героя
    return hero

def create_enemy(world: World, x: int, y: int) -> Entity:
    config = world.config
    enemy = world.create_entity()
    world.add_component(enemy, Position(x, y))
    world.add_component(enemy, Renderable("g", "green"))
    world.add_component(enemy, Health(config.enemy_hp, config.enemy_hp))
    world.add_component(enemy, Enemy())
    world.add_component(enemy, CombatStats(attack=config.enemy_attack))
    world.add_component(enemy, Name("Goblin"))
    return enemy
