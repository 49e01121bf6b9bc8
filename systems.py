from typing import List, Tuple

from ecs import System, World, Entity
from components import (Position, Velocity, Player, Health, CombatStats, Name, WantsToAttack, Moved, Retaliated)
from game_state import Phase
from map_generator import Tile

# Stay, west, east, north, south
ENEMY_STEPS: List[Tuple[int, int]] = [(0, 0), (-1, 0), (1, 0), (0, -1), (0, 1)]

def damage_hero(world: World, amount: int):
    """Снимает здоровье героя, не опуская его ниже нуля."""
    health = world.get_component(world.player_entity, Health)
    health.current = max(0, health.current - amount)

def resolve_hero_death(world: World) -> bool:
    """Переводит игру в LOST, если герой погиб. Возвращает True при смерти."""
    health = world.get_component(world.player_entity, Health)
    if health.current > 0:
        return False
    health.current = 0
    world.phase = Phase.LOST
    world.log.append("You die... GAME OVER")
    return True

class MovementSystem(System):
    """Moves the hero one tile, wrapping around the map edges."""
    def update(self, world: World):
        if not world.player_took_turn or world.is_over:
            return

        hero = world.player_entity
        vel = world.get_component(hero, Velocity)
        if not vel or (vel.dx == 0 and vel.dy == 0):
            return

        pos = world.get_component(hero, Position)
        target_x, target_y = world.wrap(pos.x + vel.dx, pos.y + vel.dy)

        if world.game_map[target_y, target_x] == Tile.WALL:
            world.log.append("You bump into a wall.")
            return

        blocker = world.enemy_at(target_x, target_y)
        if blocker is not None:
            world.log.append(f"The {world.get_component(blocker, Name).name.lower()} blocks your way.")
            return

        pos.x = target_x
        pos.y = target_y
        world.add_component(hero, Moved())

class ItemPickupSystem(System):
    """Handles picking up items by walking over them."""
    def update(self, world: World):
        if world.is_over:
            return

        for hero in world.get_entities_with(Moved, Player, Position):
            pos = world.get_component(hero, Position)
            tile = world.game_map[pos.y, pos.x]

            if tile == Tile.POTION:
                health = world.get_component(hero, Health)
                world.counters.potions_carried += 1
                health.current = min(health.max, health.current + world.config.potion_heal)
                world.game_map[pos.y, pos.x] = Tile.EMPTY
                world.log.append(f"You drink a potion. HP {health.current}/{health.max}.")
            elif tile == Tile.SWORD:
                stats = world.get_component(hero, CombatStats)
                stats.attack += world.config.sword_attack_bonus
                world.game_map[pos.y, pos.x] = Tile.EMPTY
                world.log.append(f"You pick up a sword. Attack is now {stats.attack}.")

class ContactDamageSystem(System):
    """Every enemy next to the hero's new tile hits the hero once."""
    def update(self, world: World):
        if world.is_over:
            return

        for hero in world.get_entities_with(Moved, Player, Position):
            pos = world.get_component(hero, Position)
            for x, y in world.neighbors(pos.x, pos.y):
                enemy = world.enemy_at(x, y)
                if enemy is None:
                    continue
                attack = world.get_component(enemy, CombatStats).attack
                damage_hero(world, attack)
                world.log.append(f"The {world.get_component(enemy, Name).name.lower()} hits you for {attack}.")

class MeleeCombatSystem(System):
    """Разрешает атаку героя по всем соседним врагам."""
    def update(self, world: World):
        if world.is_over:
            return

        for hero in world.get_entities_with(WantsToAttack, Position):
            pos = world.get_component(hero, Position)
            hero_attack = world.get_component(hero, CombatStats).attack

            for x, y in world.neighbors(pos.x, pos.y):
                enemy = world.enemy_at(x, y)
                if enemy is None:
                    continue
                self._strike(world, enemy, hero_attack)

            world.remove_component(hero, WantsToAttack)

            if not world.enemies or world.counters.killed >= world.config.enemy_count:
                world.phase = Phase.WON
                world.log.append("The last goblin falls. YOU WIN!")
                return

    def _strike(self, world: World, enemy: Entity, hero_attack: int):
        name = world.get_component(enemy, Name).name.lower()
        health = world.get_component(enemy, Health)
        health.current -= hero_attack
        world.log.append(f"You hit the {name} for {hero_attack}.")

        if health.current > 0:
            attack = world.get_component(enemy, CombatStats).attack
            damage_hero(world, attack)
            world.add_component(enemy, Retaliated())
            world.log.append(f"The {name} strikes back for {attack}.")
        else:
            world.destroy_entity(enemy)
            world.counters.killed += 1
            world.log.append(f"The {name} dies.")

class DeathSystem(System):
    """Checks whether the hero has died from this turn's damage."""
    def update(self, world: World):
        if world.is_over or world.player_entity is None:
            return
        resolve_hero_death(world)

class EnemyAISystem(System):
    """Enemies hit an adjacent hero or wander one random step."""
    def update(self, world: World):
        # The AI only acts if the player has taken a turn.
        if not world.player_took_turn or world.is_over:
            return

        hero_pos = world.get_component(world.player_entity, Position)

        for entity in world.enemies:
            # A goblin that just struck back doesn't attack twice in one round
            if world.get_component(entity, Retaliated):
                world.remove_component(entity, Retaliated)
                continue

            enemy_pos = world.get_component(entity, Position)

            if world.is_adjacent(enemy_pos, hero_pos):
                attack = world.get_component(entity, CombatStats).attack
                damage_hero(world, attack)
                world.log.append(f"The {world.get_component(entity, Name).name.lower()} hits you for {attack}.")
                if resolve_hero_death(world):
                    return
                continue

            # Wander randomly
            dx, dy = world.rng.choice(ENEMY_STEPS)
            if dx == 0 and dy == 0:
                continue

            target_x, target_y = world.wrap(enemy_pos.x + dx, enemy_pos.y + dy)
            if world.game_map[target_y, target_x] != Tile.EMPTY:
                continue
            if (target_x, target_y) == (hero_pos.x, hero_pos.y):
                continue
            if world.enemy_at(target_x, target_y) is not None:
                continue

            enemy_pos.x = target_x
            enemy_pos.y = target_y
