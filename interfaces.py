from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, TYPE_CHECKING

from components import Health, CombatStats

if TYPE_CHECKING:
    from ecs import World
    from engine import Action

@dataclass(frozen=True)
class HudStats:
    hp: int
    attack: int
    potions_carried: int
    killed: int

    @classmethod
    def from_world(cls, world: World) -> "HudStats":
        hero = world.player_entity
        return cls(
            hp=world.get_component(hero, Health).current,
            attack=world.get_component(hero, CombatStats).attack,
            potions_carried=world.counters.potions_carried,
            killed=world.counters.killed,
        )

class Renderer(ABC):
    """Draws the authoritative world state."""

    @abstractmethod
    def render(self, world: World) -> None:
        """Called after generation, restart and every processed action.

        Must show the grid, hero and enemy positions with their health ratios,
        and a WON/LOST overlay with a way to restart once the run is over.
        """

class InputSource(ABC):
    """Delivers discrete player actions."""

    quit_requested: bool = False

    @abstractmethod
    def poll(self) -> List[Action]:
        """Returns the actions received since the last poll; unknown input is dropped."""

class HUDReporter(ABC):
    """Pure display of the run counters; never feeds back into the engine."""

    @abstractmethod
    def update(self, stats: HudStats) -> None:
        ...
