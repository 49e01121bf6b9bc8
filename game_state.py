from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, auto

class Phase(Enum):
    PLAYING = auto()
    WON = auto()
    LOST = auto()

@dataclass
class Counters:
    """Run counters shown on the HUD."""
    potions_carried: int = 0
    killed: int = 0

@dataclass
class Session:
    """Holds the state of the game that persists between runs."""
    runs_started: int = 0
    wins: int = 0
    losses: int = 0
    running: bool = True

    def record_outcome(self, phase: Phase):
        if phase is Phase.WON:
            self.wins += 1
        elif phase is Phase.LOST:
            self.losses += 1
