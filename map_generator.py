import logging
import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, List, Optional, Tuple

import numpy as np

logger = logging.getLogger(__name__)

class Tile(IntEnum):
    EMPTY = 0
    WALL = 1
    SWORD = 2
    POTION = 3

class GenerationExhausted(RuntimeError):
    """Placement could not find a free tile within the allowed number of attempts."""

@dataclass
class Rect:
    """A rectangle on the map. used for rooms."""
    x1: int
    y1: int
    x2: int
    y2: int

    @classmethod
    def from_size(cls, x: int, y: int, w: int, h: int) -> "Rect":
        return cls(x, y, x + w, y + h)

    @property
    def width(self) -> int:
        return self.x2 - self.x1

    @property
    def height(self) -> int:
        return self.y2 - self.y1

    @property
    def center(self) -> Tuple[int, int]:
        """Returns the center coordinates of the rectangle."""
        return self.x1 + self.width // 2, self.y1 + self.height // 2

class MapGenerator:
    """
    Генерирует карту-тор: комнаты, L-образные коридоры между ними
    и сквозные коридоры через всю карту.
    """
    def __init__(self, width: int, height: int, rng: Optional[random.Random] = None):
        self.width = width
        self.height = height
        self.rng = rng if rng is not None else random.Random()
        self.map = np.full((height, width), Tile.WALL, dtype=np.uint8)
        self.rooms: List[Rect] = []

    def generate(self, room_count_range: Tuple[int, int], room_size_range: Tuple[int, int],
                 corridor_count_range: Tuple[int, int]) -> np.ndarray:
        """Генерирует карту и возвращает сетку тайлов (height x width)."""
        self.map.fill(Tile.WALL)
        self._place_rooms(room_count_range, room_size_range)
        self._connect_rooms()
        self._carve_through_corridors(corridor_count_range)
        logger.debug("Generated %dx%d map with %d rooms, %d floor tiles",
                     self.width, self.height, len(self.rooms), self.count_floor_tiles())
        return self.map

    def _place_rooms(self, room_count_range: Tuple[int, int], room_size_range: Tuple[int, int]):
        # Rooms may overlap, carving twice is harmless
        self.rooms = []
        room_min_size, room_max_size = room_size_range
        for _ in range(self.rng.randint(*room_count_range)):
            w = self.rng.randint(room_min_size, room_max_size)
            h = self.rng.randint(room_min_size, room_max_size)
            x = self.rng.randint(1, self.width - w - 2)
            y = self.rng.randint(1, self.height - h - 2)
            room = Rect.from_size(x, y, w, h)
            self._create_room(room)
            self.rooms.append(room)

    def _connect_rooms(self):
        for prev_room, room in zip(self.rooms, self.rooms[1:]):
            prev_x, prev_y = prev_room.center
            new_x, new_y = room.center
            self._create_h_tunnel(prev_x, new_x, prev_y)
            self._create_v_tunnel(prev_y, new_y, new_x)

    def _carve_through_corridors(self, corridor_count_range: Tuple[int, int]):
        h_count = self.rng.randint(*corridor_count_range)
        v_count = self.rng.randint(*corridor_count_range)
        for _ in range(h_count):
            self.map[self.rng.randint(1, self.height - 2), :] = Tile.EMPTY
        for _ in range(v_count):
            self.map[:, self.rng.randint(1, self.width - 2)] = Tile.EMPTY

    def _create_room(self, room: Rect):
        self.map[room.y1:room.y2, room.x1:room.x2] = Tile.EMPTY

    def _create_h_tunnel(self, x1: int, x2: int, y: int):
        self.map[y, min(x1, x2):max(x1, x2) + 1] = Tile.EMPTY

    def _create_v_tunnel(self, y1: int, y2: int, x: int):
        self.map[min(y1, y2):max(y1, y2) + 1, x] = Tile.EMPTY

    def count_floor_tiles(self) -> int:
        return int(np.count_nonzero(self.map == Tile.EMPTY))

    def find_random_floor_tile(self, is_free: Optional[Callable[[int, int], bool]] = None,
                               max_attempts: int = 10000) -> Tuple[int, int]:
        """Находит случайную пустую клетку, отбрасывая неподходящие кандидаты."""
        for _ in range(max_attempts):
            x = self.rng.randint(0, self.width - 1)
            y = self.rng.randint(0, self.height - 1)
            if self.map[y, x] != Tile.EMPTY:
                continue
            if is_free is None or is_free(x, y):
                return x, y
        raise GenerationExhausted(f"No free floor tile found after {max_attempts} attempts")
