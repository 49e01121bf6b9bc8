from dataclasses import dataclass
from typing import Tuple

@dataclass
class GameConfig:
    grid_width: int = 40
    grid_height: int = 24
    cell_size: int = 30
    info_panel_height: int = 120
    fps: int = 30

    # Items placed on the map
    sword_count: int = 1
    potion_count: int = 10

    room_count_range: Tuple[int, int] = (5, 10)
    room_size_range: Tuple[int, int] = (3, 8)
    corridor_count_range: Tuple[int, int] = (3, 5) # per direction

    enemy_count: int = 10
    enemy_hp: int = 5
    enemy_attack: int = 1

    hero_hp: int = 10
    hero_attack: int = 1

    potion_heal: int = 2
    sword_attack_bonus: int = 1

    max_placement_attempts: int = 10000

    @property
    def screen_width(self) -> int:
        return self.grid_width * self.cell_size

    @property
    def screen_height(self) -> int:
        return self.grid_height * self.cell_size + self.info_panel_height

    def validate(self):
        """Raises ValueError if a map can't be generated with these settings."""
        for name in ('room_count_range', 'room_size_range', 'corridor_count_range'):
            low, high = getattr(self, name)
            if low < 0 or low > high:
                raise ValueError(f"{name} must be an ordered non-negative range, got {(low, high)}")
        if self.room_size_range[0] < 1:
            raise ValueError("Rooms must be at least 1 tile wide")

        # A room of maximum size still needs a wall margin on both sides
        room_max = self.room_size_range[1]
        if self.grid_width < room_max + 3 or self.grid_height < room_max + 3:
            raise ValueError(
                f"Grid {self.grid_width}x{self.grid_height} is too small for rooms of size {room_max}")

        for name in ('sword_count', 'potion_count', 'enemy_count'):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must not be negative")
        if self.hero_hp <= 0 or self.enemy_hp <= 0:
            raise ValueError("Hit points must be positive")
        if self.max_placement_attempts <= 0:
            raise ValueError("max_placement_attempts must be positive")
