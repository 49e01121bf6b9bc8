import pygame
from typing import Dict, List, Optional, Tuple

from config import GameConfig
from ecs import World
from components import Position, Renderable, Health
from game_state import Phase
from interfaces import Renderer, InputSource, HUDReporter, HudStats
from engine import Action
from map_generator import Tile

KEY_BINDINGS: Dict[int, Action] = {
    pygame.K_w: Action.MOVE_UP,
    pygame.K_UP: Action.MOVE_UP,
    pygame.K_s: Action.MOVE_DOWN,
    pygame.K_DOWN: Action.MOVE_DOWN,
    pygame.K_a: Action.MOVE_LEFT,
    pygame.K_LEFT: Action.MOVE_LEFT,
    pygame.K_d: Action.MOVE_RIGHT,
    pygame.K_RIGHT: Action.MOVE_RIGHT,
    pygame.K_SPACE: Action.ATTACK,
    pygame.K_r: Action.RESTART,
}

# Русская раскладка: ЦФЫВ на месте WASD, К на месте R
UNICODE_BINDINGS: Dict[str, Action] = {
    'ц': Action.MOVE_UP,
    'ы': Action.MOVE_DOWN,
    'ф': Action.MOVE_LEFT,
    'в': Action.MOVE_RIGHT,
    'к': Action.RESTART,
}

QUIT_KEYS = (pygame.K_q, pygame.K_ESCAPE)

class PygameInputSource(InputSource):
    """Эта система отвечает за превращение событий Pygame в действия игрока."""
    def __init__(self):
        self.quit_requested = False

    def poll(self) -> List[Action]:
        actions: List[Action] = []
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.quit_requested = True
            elif event.type == pygame.KEYDOWN:
                action = self.translate(event)
                if action is not None:
                    actions.append(action)
                elif event.key in QUIT_KEYS:
                    self.quit_requested = True
        return actions

    @staticmethod
    def translate(event) -> Optional[Action]:
        if event.key in KEY_BINDINGS:
            return KEY_BINDINGS[event.key]
        return UNICODE_BINDINGS.get(getattr(event, 'unicode', '').lower())

class PygameRenderer(Renderer, HUDReporter):
    def __init__(self, config: GameConfig):
        self.config = config
        pygame.init()
        self.screen = pygame.display.set_mode((config.screen_width, config.screen_height))
        pygame.display.set_caption("Wrap Dungeon")
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont('Arial', 16)
        self.big_font = pygame.font.SysFont('Arial', 40, bold=True)
        self.stats: Optional[HudStats] = None

        self.colors = {
            'black': (0, 0, 0),
            'red': (255, 0, 0),
            'green': (0, 200, 0),
            'lime': (50, 255, 50),
            'log_text': (200, 200, 200),
            'white': (255, 255, 255),
            'gray': (50, 50, 50),
            'floor': (30, 30, 30),
            'wall': (130, 110, 90),
            'sword': (192, 192, 192),
            'potion': (200, 40, 160),
        }
        self.tile_colors = {
            Tile.EMPTY: self.colors['floor'],
            Tile.WALL: self.colors['wall'],
            Tile.SWORD: self.colors['floor'],
            Tile.POTION: self.colors['floor'],
        }
        self.item_glyphs = {
            Tile.SWORD: ('/', self.colors['sword']),
            Tile.POTION: ('!', self.colors['potion']),
        }
        # Кэш для рендеринга текста
        self.text_cache: Dict[Tuple[str, Tuple[int, int, int]], pygame.Surface] = {}

    def update(self, stats: HudStats) -> None:
        self.stats = stats

    def tick(self):
        self.clock.tick(self.config.fps)

    def render(self, world: World) -> None:
        self.screen.fill(self.colors['black'])
        if world.is_over:
            self.draw_overlay(world)
        else:
            self.draw_grid(world)
            self.draw_actors(world)
        self.draw_info_panel(world)
        pygame.display.flip()

    def _glyph(self, char: str, color: Tuple[int, int, int]) -> pygame.Surface:
        cache_key = (char, color)
        if cache_key not in self.text_cache:
            self.text_cache[cache_key] = self.font.render(char, True, color)
        return self.text_cache[cache_key]

    def draw_grid(self, world: World):
        cs = self.config.cell_size
        for y in range(world.height):
            for x in range(world.width):
                tile = Tile(int(world.game_map[y, x]))
                rect = pygame.Rect(x * cs, y * cs, cs, cs)
                pygame.draw.rect(self.screen, self.tile_colors[tile], rect)
                pygame.draw.rect(self.screen, self.colors['gray'], rect, 1)
                if tile in self.item_glyphs:
                    surface = self._glyph(*self.item_glyphs[tile])
                    self.screen.blit(surface, surface.get_rect(center=rect.center))

    def draw_actors(self, world: World):
        cs = self.config.cell_size
        for entity in world.get_entities_with(Position, Renderable, Health):
            pos = world.get_component(entity, Position)
            render = world.get_component(entity, Renderable)
            health = world.get_component(entity, Health)
            rect = pygame.Rect(pos.x * cs, pos.y * cs, cs, cs)

            surface = self._glyph(render.char, self.colors.get(render.color, self.colors['white']))
            self.screen.blit(surface, surface.get_rect(center=rect.center))

            # Полоска здоровья над клеткой
            ratio = max(0.0, health.current / health.max) if health.max else 0.0
            bar = pygame.Rect(rect.x + 1, rect.y + 1, int((cs - 2) * ratio), 3)
            pygame.draw.rect(self.screen, self.colors['green'], bar)

    def draw_overlay(self, world: World):
        viewport_h = self.config.screen_height - self.config.info_panel_height
        won = world.phase is Phase.WON
        title = "YOU WIN!" if won else "GAME OVER"
        title_surface = self.big_font.render(title, True, self.colors['lime' if won else 'red'])
        hint_surface = self.font.render("Press R to restart", True, self.colors['white'])
        center_x = self.config.screen_width // 2
        self.screen.blit(title_surface, title_surface.get_rect(center=(center_x, viewport_h // 2 - 20)))
        self.screen.blit(hint_surface, hint_surface.get_rect(center=(center_x, viewport_h // 2 + 25)))

    def draw_info_panel(self, world: World):
        panel_y = self.config.screen_height - self.config.info_panel_height
        panel = pygame.Rect(0, panel_y, self.config.screen_width, self.config.info_panel_height)
        pygame.draw.rect(self.screen, self.colors['gray'], panel)

        if self.stats is not None:
            hud = (f"HP: {self.stats.hp}   Attack: {self.stats.attack}   "
                   f"Potions: {self.stats.potions_carried}   Killed: {self.stats.killed}")
            self.screen.blit(self.font.render(hud, True, self.colors['white']), (20, panel_y + 5))

        # --- Отрисовка лога ---
        for i, msg in enumerate(world.log[-4:]): # Показываем последние 4 сообщения
            log_surface = self.font.render(msg, True, self.colors['log_text'])
            self.screen.blit(log_surface, (20, panel_y + 30 + i * 20))
