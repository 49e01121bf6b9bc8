from __future__ import annotations
from dataclasses import dataclass

# Компоненты - чистые данные
@dataclass
class Position:
    x: int
    y: int

@dataclass
class Velocity:
    # Direction the hero wants to move this turn
    dx: int = 0
    dy: int = 0

@dataclass
class Renderable:
    char: str
    color: str

@dataclass
class Health:
    current: int
    max: int

@dataclass
class Player:
    pass

@dataclass
class Enemy:
    pass

@dataclass
class CombatStats:
    attack: int

@dataclass
class Name:
    name: str

@dataclass
class WantsToAttack:
    """The hero strikes every orthogonally adjacent enemy this turn."""
    pass

@dataclass
class Moved:
    """Marker added when the hero actually changed tiles this turn."""
    pass

@dataclass
class Retaliated:
    """The enemy hit back during the hero's attack and skips its next turn."""
    pass
