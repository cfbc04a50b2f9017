# robopath/app/viewer.py
#!/usr/bin/env python3
"""
Robot Path Planning Viewer — grid + metrics panel + controls

- Keyboard:
    [ARROWS]/[WASD] -> move robot
    [Q][E][Z][C]    -> diagonal moves (when --diagonal-moves)
    [ENTER]         -> solve (animate path)
    [H]             -> hint (next step)
    [R]             -> reset
    [T]             -> toggle wall editing (click cells to add/remove)
    [M]/[U]/[O]     -> heuristic: manhattan / euclidean / octile
    [G]/[J]         -> algorithm: A* / Dijkstra
    [1]/[2]/[3]     -> switch map
    [ESC]           -> quit

Settings: see robopath.config (ROBOPATH_* env vars or --key=value flags).
"""

import logging
import random
import sys
from typing import Dict, List, Optional, Tuple

import pygame

from robopath.config import Settings, resolve_settings
from robopath.core.maps import MapError, MapSpec, blank_map, bundled_maps, load_map
from robopath.core.types import Cell, NoFreeCellError
from robopath.core.world import WorldState

logger = logging.getLogger(__name__)

# ---------- Layout ----------
PANEL_W = 360            # right band: metrics + buttons
GRID_MARGIN = 16
FONT_NAME = None  # default pygame font
ANIM_EVENT = pygame.USEREVENT + 1

# Colors
WHITE       = (255,255,255)
BG_TOP      = (10, 14, 39)
BG_BOTTOM   = (22, 33, 62)
GRID_LINE   = (26, 40, 71)
WALL_FILL   = (26, 26, 46)
WALL_EDGE   = (15, 52, 96)
PATH_CYAN   = (0, 212, 255)
HINT_MAG    = (255, 0, 255)
START_GREEN = (0, 255, 0)
GOAL_RED    = (255, 0, 0)

CARD_BG     = (24,28,36,220)
CARD_HI     = (255,255,255,18)
TEXT_LIGHT  = (230,235,240)
ACCENT_GOLD = (255,210,0)
WARN_ORANGE = (255,140,60)

KEY_MOVES: Dict[int, Tuple[int, int]] = {
    pygame.K_UP: (0, -1), pygame.K_w: (0, -1),
    pygame.K_DOWN: (0, 1), pygame.K_s: (0, 1),
    pygame.K_LEFT: (-1, 0), pygame.K_a: (-1, 0),
    pygame.K_RIGHT: (1, 0), pygame.K_d: (1, 0),
}
KEY_DIAGONALS: Dict[int, Tuple[int, int]] = {
    pygame.K_q: (-1, -1), pygame.K_e: (1, -1),
    pygame.K_z: (-1, 1), pygame.K_c: (1, 1),
}
KEY_HEURISTICS = {pygame.K_m: "manhattan", pygame.K_u: "euclidean", pygame.K_o: "octile"}


# ---------- Simple UI Button ----------
BUTTON_FILL = {                  # state -> RGBA
    "idle":   (30, 38, 58, 215),
    "hover":  (40, 52, 80, 230),
    "active": (0, 96, 128, 235),
}
BUTTON_ACCENT = PATH_CYAN
BUTTON_TEXT = (235, 238, 242)


class UIButton:
    """Flat panel button. Togglable buttons show a cyan bar on their left edge when active."""

    def __init__(self, label: str, rect: pygame.Rect, callback, *, togglable: bool = False):
        self.label = label
        self.rect = rect
        self.callback = callback
        self.togglable = togglable
        self.hover = False
        self.active = False

    def set_active(self, value: bool):
        self.active = bool(value)

    @property
    def state(self) -> str:
        if self.togglable and self.active:
            return "active"
        return "hover" if self.hover else "idle"

    def press(self):
        self.callback()

    def draw(self, screen: pygame.Surface, font: pygame.font.Font):
        state = self.state
        body = pygame.Surface(self.rect.size, pygame.SRCALPHA)
        pygame.draw.rect(body, BUTTON_FILL[state], body.get_rect(), border_radius=6)
        pygame.draw.line(body, (255, 255, 255, 24), (6, self.rect.height - 1),
                         (self.rect.width - 7, self.rect.height - 1))
        screen.blit(body, self.rect.topleft)

        if state == "active":
            bar = pygame.Rect(self.rect.x, self.rect.y + 4, 4, self.rect.height - 8)
            pygame.draw.rect(screen, BUTTON_ACCENT, bar, border_radius=2)

        text = font.render(self.label, True, BUTTON_TEXT)
        screen.blit(text, text.get_rect(midleft=(self.rect.x + 14, self.rect.centery)))

    def handle_mouse(self, event: pygame.event.Event) -> bool:
        if event.type == pygame.MOUSEMOTION:
            self.hover = self.rect.collidepoint(event.pos)
            return False
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1 and self.rect.collidepoint(event.pos):
            self.press()
            return True
        return False


# ---------- Viewer ----------
class Viewer:
    def __init__(self, settings: Settings):
        pygame.init()

        self.settings = settings
        self.maps = bundled_maps()
        self.map_keys: List[str] = list(self.maps)[:3]
        self.rng = random.Random(settings.seed)

        spec, self.selected_map_key = self._initial_map()
        self.world = self._make_world(spec)

        self.font_small = pygame.font.Font(FONT_NAME, 14)
        self.font = pygame.font.Font(FONT_NAME, 18)
        self.font_big = pygame.font.Font(FONT_NAME, 22)

        self.cell_size = settings.cell_size
        grid_px = GRID_MARGIN*2 + spec.size * self.cell_size
        win_w = grid_px + PANEL_W
        win_h = max(grid_px, 680)
        self.screen = pygame.display.set_mode((win_w, win_h), pygame.RESIZABLE)
        pygame.display.set_caption(f"Robot Path Planning — {spec.name}")

        self._buttons: List[UIButton] = []
        self._layout(win_w, win_h)

        self.clock = pygame.time.Clock()
        self.message = "Use arrow keys or WASD to move"

    # ---------- world setup ----------
    def _initial_map(self) -> Tuple[MapSpec, str]:
        s = self.settings
        if s.map_path:
            return load_map(s.map_path), "custom"
        if s.map_name == "blank":
            return blank_map(s.grid_size), "blank"
        if s.map_name not in self.maps:
            raise MapError(f"unknown map {s.map_name!r}; bundled: {', '.join(self.maps)}")
        return load_map(self.maps[s.map_name]), s.map_name

    def _make_world(self, spec: MapSpec) -> WorldState:
        return WorldState.from_map(
            spec,
            heuristic=self.world.heuristic if hasattr(self, "world") else self.settings.heuristic,
            algo=self.world.algo if hasattr(self, "world") else "A*",
            diagonal_moves=self.settings.diagonal_moves,
            max_expansions=self.settings.max_expansions,
            rng=self.rng,
        )

    # ---------- layout ----------
    def _layout(self, win_w: int, win_h: int):
        """Compute integer cell_size that fits window and center the grid."""
        size = self.world.size
        avail_w = max(1, win_w - PANEL_W - 2 * GRID_MARGIN)
        avail_h = max(1, win_h - 2 * GRID_MARGIN)
        self.cell_size = int(max(8, min(avail_w // size, avail_h // size)))

        plate = size * self.cell_size + 2 * GRID_MARGIN
        left_x = max(0, (win_w - (plate + PANEL_W)) // 2)
        top_y  = max(0, (win_h - plate) // 2)

        self.canvas_rect = pygame.Rect(left_x, top_y, plate, plate)
        self._grid_origin = (self.canvas_rect.x + GRID_MARGIN,
                             self.canvas_rect.y + GRID_MARGIN)
        self._right_band = pygame.Rect(self.canvas_rect.right, 0,
                                       max(PANEL_W, win_w - self.canvas_rect.right), win_h)
        self._build_buttons()

    def _cell_at(self, pos: Tuple[int, int]) -> Optional[Cell]:
        ox, oy = self._grid_origin
        x = (pos[0] - ox) // self.cell_size
        y = (pos[1] - oy) // self.cell_size
        if 0 <= x < self.world.size and 0 <= y < self.world.size:
            return (x, y)
        return None

    # ---------- loop ----------
    def run(self):
        while True:
            self._handle_events()
            self._draw()
            self.clock.tick(60)

    def _handle_events(self):
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                pygame.quit(); sys.exit(0)
            elif e.type == ANIM_EVENT:
                try:
                    running = self.world.advance()
                except NoFreeCellError as ex:
                    pygame.time.set_timer(ANIM_EVENT, 0)
                    self._no_free_cell(ex)
                    continue
                if not running:
                    pygame.time.set_timer(ANIM_EVENT, 0)
                    self.message = f"Goals reached: {self.world.goals_reached}"
            elif e.type == pygame.KEYDOWN:
                try:
                    self._handle_key(e.key)
                except NoFreeCellError as ex:
                    self._no_free_cell(ex)
            elif e.type == pygame.VIDEORESIZE:
                self.screen = pygame.display.set_mode((e.w, e.h), pygame.RESIZABLE)
                self._layout(e.w, e.h)
            elif e.type in (pygame.MOUSEMOTION, pygame.MOUSEBUTTONDOWN):
                clicked = any([b.handle_mouse(e) for b in self._buttons])
                if not clicked and e.type == pygame.MOUSEBUTTONDOWN and e.button == 1:
                    cell = self._cell_at(e.pos)
                    if cell is not None and self.world.toggle_wall(cell):
                        self.message = f"Walls: {len(self.world.walls)}"

    def _handle_key(self, key: int):
        if key == pygame.K_ESCAPE:
            pygame.quit(); sys.exit(0)
        elif key in KEY_MOVES:
            self.world.move(*KEY_MOVES[key])
        elif key in KEY_DIAGONALS and self.world.diagonal_moves:
            self.world.move(*KEY_DIAGONALS[key])
        elif key in (pygame.K_RETURN, pygame.K_KP_ENTER):
            self._solve()
        elif key == pygame.K_h:
            self._hint()
        elif key == pygame.K_r:
            self._reset()
        elif key == pygame.K_t:
            self._toggle_edit()
        elif key in KEY_HEURISTICS:
            self._switch_heuristic(KEY_HEURISTICS[key])
        elif key == pygame.K_g:
            self._switch_algo("A*")
        elif key == pygame.K_j:
            self._switch_algo("Dijkstra")
        elif key == pygame.K_1 and len(self.map_keys) > 0:
            self._switch_map(self.map_keys[0])
        elif key == pygame.K_2 and len(self.map_keys) > 1:
            self._switch_map(self.map_keys[1])
        elif key == pygame.K_3 and len(self.map_keys) > 2:
            self._switch_map(self.map_keys[2])

    # ---------- actions ----------
    def _solve(self):
        if self.world.animating:
            return
        path = self.world.solve()
        if not path:
            self.message = "No path found" if self.world.last_status != "budget" else "Search budget exhausted"
            return
        self.message = f"Path: {len(path)} cells, cost {self.world.last_result.cost:.2f}"
        if self.world.animating:
            pygame.time.set_timer(ANIM_EVENT, self.settings.step_ms)
        self._refresh_active_states()

    def _no_free_cell(self, ex: Exception):
        logger.warning("cannot place a new goal: %s", ex)
        self.message = "Grid is full: remove some walls"

    def _hint(self):
        step = self.world.request_hint()
        self.message = f"Next step: {step}" if step else "No hint available"

    def _reset(self):
        pygame.time.set_timer(ANIM_EVENT, 0)
        try:
            self.world.reset()
        except NoFreeCellError as ex:
            self._no_free_cell(ex)
            return
        self.message = "Reset"

    def _toggle_edit(self):
        self.world.set_edit_mode(not self.world.edit_mode)
        self.message = "Click cells to add/remove walls" if self.world.edit_mode else "Use arrow keys or WASD to move"
        self._refresh_active_states()

    def _switch_heuristic(self, kind: str):
        self.world.set_heuristic(kind)
        self._refresh_active_states()

    def _switch_algo(self, label: str):
        self.world.set_algo(label)
        self._refresh_active_states()

    def _switch_map(self, key: str):
        if key not in self.maps:
            return
        try:
            spec = load_map(self.maps[key])
        except MapError as ex:
            logger.error("Failed to load map %s: %s", key, ex)
            self.message = f"Map {key} failed to load"
            return
        pygame.time.set_timer(ANIM_EVENT, 0)
        self.world = self._make_world(spec)
        self.selected_map_key = key
        pygame.display.set_caption(f"Robot Path Planning — {spec.name}")
        self._layout(*self.screen.get_size())
        logger.info("switched to map %s (%dx%d)", key, spec.size, spec.size)

    # ---------- drawing ----------
    def _draw(self):
        self._draw_backdrop()
        self._draw_grid()
        self._draw_metrics_and_buttons()
        pygame.display.flip()

    def _draw_backdrop(self):
        w, h = self.screen.get_size()
        for y in range(h):
            t = y / max(1, h-1)
            c = tuple(int(BG_TOP[i] + (BG_BOTTOM[i]-BG_TOP[i]) * t) for i in range(3))
            pygame.draw.line(self.screen, c, (0, y), (w, y))

    def _cell_center(self, cell: Cell) -> Tuple[int, int]:
        cs = self.cell_size
        ox, oy = self._grid_origin
        return ox + cell[0]*cs + cs//2, oy + cell[1]*cs + cs//2

    def _draw_grid(self):
        cs = self.cell_size
        ox, oy = self._grid_origin
        size = self.world.size

        for i in range(size + 1):
            pygame.draw.line(self.screen, GRID_LINE, (ox + i*cs, oy), (ox + i*cs, oy + size*cs))
            pygame.draw.line(self.screen, GRID_LINE, (ox, oy + i*cs), (ox + size*cs, oy + i*cs))

        for (col, row) in self.world.walls:
            rect = pygame.Rect(ox + col*cs, oy + row*cs, cs, cs)
            pygame.draw.rect(self.screen, WALL_FILL, rect)
            pygame.draw.rect(self.screen, WALL_EDGE, rect, 1)

        for path in (self.world.animated_path, self.world.path):
            self._draw_path(path)

        if self.world.hint is not None:
            pygame.draw.circle(self.screen, HINT_MAG, self._cell_center(self.world.hint), max(3, cs//3))

        self._draw_badge(self.world.start, START_GREEN, max(3, cs//3))
        self._draw_badge(self.world.goal, GOAL_RED, max(3, cs//3))
        self._draw_badge(self.world.robot, PATH_CYAN, max(4, int(cs/2.5)), label="R")

    def _draw_path(self, path: List[Cell]):
        if len(path) < 2:
            return
        pts = [self._cell_center(c) for c in path]
        glow = pygame.Surface(self.screen.get_size(), pygame.SRCALPHA)
        pygame.draw.lines(glow, (0, 212, 255, 60), False, pts, 7)
        self.screen.blit(glow, (0,0), special_flags=pygame.BLEND_ADD)
        pygame.draw.lines(self.screen, PATH_CYAN, False, pts, 3)

    def _draw_badge(self, cell: Cell, color: Tuple[int,int,int], radius: int, label: str = ""):
        center = self._cell_center(cell)
        pygame.draw.circle(self.screen, color, center, radius)
        if label:
            txt = self.font_small.render(label, True, WHITE)
            self.screen.blit(txt, txt.get_rect(center=center))

    # ---------- buttons + metrics ----------
    def _build_buttons(self):
        self._buttons.clear()
        rb = self._right_band
        x = rb.x + 16
        y = rb.y + 290  # below the metrics card
        w = max(160, rb.width - 32)
        h = 30
        gap = 8
        half = (w - 8) // 2

        def add(label, cb, rect, *, togglable=False, store_as: str | None = None):
            btn = UIButton(label, rect, cb, togglable=togglable)
            self._buttons.append(btn)
            if store_as:
                setattr(self, store_as, btn)

        add("Solve", self._solve, pygame.Rect(x, y, half, h))
        add("Hint", self._hint, pygame.Rect(x + half + 8, y, half, h)); y += h + gap
        add("Reset", self._reset, pygame.Rect(x, y, half, h))
        add("Edit Walls", self._toggle_edit, pygame.Rect(x + half + 8, y, half, h),
            togglable=True, store_as="btn_edit"); y += h + gap

        self._heuristic_buttons: Dict[str, UIButton] = {}
        for kind in ("manhattan", "euclidean", "octile"):
            add(f"Heuristic: {kind}", lambda k=kind: self._switch_heuristic(k),
                pygame.Rect(x, y, w, h), togglable=True)
            self._heuristic_buttons[kind] = self._buttons[-1]
            y += h + gap

        add("Algo: A*", lambda: self._switch_algo("A*"), pygame.Rect(x, y, half, h),
            togglable=True, store_as="btn_algo_a")
        add("Algo: Dijkstra", lambda: self._switch_algo("Dijkstra"), pygame.Rect(x + half + 8, y, half, h),
            togglable=True, store_as="btn_algo_d"); y += h + gap

        self._map_buttons: Dict[str, UIButton] = {}
        for i, key in enumerate(self.map_keys, start=1):
            add(f"Map {i}: {key}", lambda k=key: self._switch_map(k), pygame.Rect(x, y, w, h), togglable=True)
            self._map_buttons[key] = self._buttons[-1]
            y += h + gap

        self._refresh_active_states()

    def _refresh_active_states(self):
        if hasattr(self, "btn_edit"):
            self.btn_edit.set_active(self.world.edit_mode)
        for kind, btn in getattr(self, "_heuristic_buttons", {}).items():
            btn.set_active(self.world.heuristic == kind)
        if hasattr(self, "btn_algo_a"):
            self.btn_algo_a.set_active(self.world.algo == "A*")
            self.btn_algo_d.set_active(self.world.algo == "Dijkstra")
        for key, btn in getattr(self, "_map_buttons", {}).items():
            btn.set_active(self.selected_map_key == key)

    def _draw_metrics_and_buttons(self):
        rb = self._right_band

        card_h = 270
        card = pygame.Surface((rb.width - 20, card_h), pygame.SRCALPHA)
        pygame.draw.rect(card, CARD_BG, card.get_rect(), border_radius=14)
        hi = pygame.Surface((card.get_width(), 24), pygame.SRCALPHA)
        pygame.draw.rect(hi, CARD_HI, hi.get_rect(), border_radius=14)
        card.blit(hi, (0,0))
        self.screen.blit(card, (rb.x + 10, rb.y + 10))

        x0 = rb.x + 24
        y0 = rb.y + 18

        def line(text, big=False, color=TEXT_LIGHT):
            nonlocal y0
            f = self.font_big if big else self.font
            surf = f.render(text, True, color)
            self.screen.blit(surf, (x0, y0))
            y0 += surf.get_height() + 6

        st = self.world.stats()
        line("Game Info", big=True, color=ACCENT_GOLD)
        line(f"Robot: {st['robot'][0]}, {st['robot'][1]}")
        line(f"Goal: {st['goal'][0]}, {st['goal'][1]}")
        line(f"Distance: {st['distance']}")
        line(f"Path Len: {st['path_len']}   Walls: {st['walls']}")
        res = self.world.last_result
        if res is not None:
            m = res.metrics()
            line(f"{m['algo']} [{m['status']}]: popped {m['popped']}, open {m['open_size']}")
            if m["total_cost"] is not None:
                line(f"Cost: {m['total_cost']:.2f} over {m['path_len']} cells")
        line(f"Goals reached: {st['goals_reached']}")
        line(self.message, color=WARN_ORANGE if self.world.edit_mode else TEXT_LIGHT)

        for b in self._buttons:
            b.draw(self.screen, self.font_small)


# ---------- main ----------
def main(argv: Optional[List[str]] = None):
    try:
        settings = resolve_settings(argv)
    except ValueError as ex:
        print(f"robopath: {ex}", file=sys.stderr)
        sys.exit(2)
    logging.basicConfig(level=getattr(logging, settings.log_level),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    try:
        viewer = Viewer(settings)
    except (MapError, OSError) as ex:
        logger.error("Failed to load map: %s", ex)
        sys.exit(1)
    viewer.run()


if __name__ == "__main__":
    main()
