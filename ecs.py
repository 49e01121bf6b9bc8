from __future__ import annotations
import random
import numpy as np
from typing import Dict, List, Type, Set, Any, Optional, Tuple

from config import GameConfig
from game_state import Phase, Counters
from components import Position, Enemy

# Entity - просто уникальный идентификатор
Entity = int

# West, east, north, south
ORTHOGONAL_OFFSETS: List[Tuple[int, int]] = [(-1, 0), (1, 0), (0, -1), (0, 1)]

# Базовый класс для систем
class System:
    def update(self, world: "World"):
        pass

# Мир, который хранит всё состояние одного забега
class World:
    def __init__(self, config: GameConfig, rng: Optional[random.Random] = None):
        self.entities: Set[Entity] = set()
        self.next_entity = 0
        self.available_entities: List[Entity] = []
        self.components: Dict[Type, Dict[Entity, Any]] = {}
        self.config = config
        self.rng = rng if rng is not None else random.Random()
        self.player_entity: Optional[Entity] = None
        self.player_took_turn: bool = False
        self.game_map: Optional[np.ndarray] = None
        self.counters = Counters()
        self.phase = Phase.PLAYING
        self.log: List[str] = []
        self.turn = 0

    @property
    def width(self) -> int:
        return self.game_map.shape[1]

    @property
    def height(self) -> int:
        return self.game_map.shape[0]

    @property
    def is_over(self) -> bool:
        return self.phase is not Phase.PLAYING

    def create_entity(self) -> Entity:
        if self.available_entities:
            entity_id = self.available_entities.pop()
        else:
            entity_id = self.next_entity
            self.next_entity += 1
        self.entities.add(entity_id)
        return entity_id

    def destroy_entity(self, entity: Entity):
        """Полностью удаляет сущность и все ее компоненты, делая ее ID доступным для переиспользования."""
        if entity not in self.entities:
            return

        for component_pool in self.components.values():
            if entity in component_pool:
                del component_pool[entity]

        self.entities.remove(entity)
        self.available_entities.append(entity)

    def add_component(self, entity: Entity, component: Any):
        component_type = type(component)
        if component_type not in self.components:
            self.components[component_type] = {}
        self.components[component_type][entity] = component

    def remove_component(self, entity: Entity, component_type: Type):
        self.components.get(component_type, {}).pop(entity, None)

    def get_component(self, entity: Entity, component_type: Type) -> Any:
        return self.components.get(component_type, {}).get(entity)

    def get_entities_with(self, *component_types: Type) -> List[Entity]:
        """Entities owning every given component, in the order the first pool was filled."""
        if not component_types:
            return list(self.entities)

        first_pool = self.components.get(component_types[0], {})
        return [entity for entity in first_pool
                if all(entity in self.components.get(ct, {}) for ct in component_types[1:])]

    # --- Grid helpers ---

    def wrap(self, x: int, y: int) -> Tuple[int, int]:
        """Normalises a coordinate onto the torus."""
        return x % self.width, y % self.height

    def neighbors(self, x: int, y: int) -> List[Tuple[int, int]]:
        """The orthogonal neighbours of a tile, wrapped, without duplicates."""
        cells = [self.wrap(x + dx, y + dy) for dx, dy in ORTHOGONAL_OFFSETS]
        return list(dict.fromkeys(cells))

    def is_adjacent(self, a: Position, b: Position) -> bool:
        """True when exactly one axis differs by one step, across the wrap seam too."""
        dx = abs(a.x - b.x) % self.width
        dy = abs(a.y - b.y) % self.height
        dx = min(dx, self.width - dx)
        dy = min(dy, self.height - dy)
        return dx + dy == 1

    # --- Actor helpers ---

    @property
    def enemies(self) -> List[Entity]:
        """Surviving enemies in spawn order."""
        return self.get_entities_with(Enemy, Position)

    def enemy_at(self, x: int, y: int) -> Optional[Entity]:
        for entity in self.enemies:
            pos = self.get_component(entity, Position)
            if pos.x == x and pos.y == y:
                return entity
        return None
