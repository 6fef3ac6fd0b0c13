# mazelab/app/viewer.py
#!/usr/bin/env python3
"""
Maze Pathfinding Viewer - edit, run, pause, compare

- Mouse:
    click / drag on grid -> edit (wall toggle, or place start / end)
- Keyboard:
    [SPACE]      -> run / pause / resume
    [R]          -> reset overlays
    [G]          -> new random maze (keeps start / end)
    [C]          -> clear walls
    [1]/[2]/[3]  -> select algorithm (A* / BFS / DFS)
    [K]          -> compare all three
    [+]/[-]      -> speed preset
    '[' / ']'    -> rows - / +  (5..30, clears the grid)
    ',' / '.'    -> cols - / +  (5..40, clears the grid)
    [V]          -> show / hide visited overlay
    [W]/[S]/[E]  -> edit mode (wall / start / end)
    [Q]/[ESC]    -> quit

Settings come from mazelab.app.config (env vars or --flags).
"""

import logging
import random
import sys
import time
from typing import Any, Dict, List, Optional, Tuple

import pygame

from mazelab.app.config import MAX_COLS, MAX_ROWS, ViewerSettings, resolve_settings
from mazelab.core.generator import generate_maze
from mazelab.core.grid import Grid
from mazelab.core.search import ALGORITHM_LABELS, COMPARE_ORDER
from mazelab.core.session import FAST_PRESET, SPEED_PRESETS, SessionState, SolveSession
from mazelab.core.types import PathResult, Position

log = logging.getLogger(__name__)

# ---------- Config ----------
PANEL_W = 420            # right band: metrics + buttons
GRID_MARGIN = 16
CELL_SIZE_DEFAULT = 28
FONT_NAME = None  # default pygame font
PRESET_ORDER = list(SPEED_PRESETS)
SHORT_NAMES = {"astar": "A*", "bfs": "BFS", "dfs": "DFS"}
MIN_SIZE = 5

# Colors
WHITE       = (255,255,255)
BLACK       = (  0,  0,  0)
WALL_DARK   = ( 31, 41, 55)
OPEN_LIGHT  = (236,239,244)
START_GREEN = ( 16,185,129)
END_ROSE    = (244, 63, 94)
VISITED_A   = ( 56,189,248,120)
PATH_AMBER  = (251,191, 36)

CARD_BG     = (24,28,36,220)
CARD_HI     = (255,255,255,18)
TEXT_LIGHT  = (230,235,240)
TEXT_DIM    = (160,168,180)
ACCENT_GOLD = (255,210,0)


# ---------- Simple UI Button ----------
class UIButton:
    def __init__(self, label: str, rect: pygame.Rect, callback, *, togglable: bool = False):
        self.label = label
        self.rect = rect
        self.callback = callback
        self.hover = False
        self.togglable = togglable
        self.active = False  # highlight state

    def set_active(self, value: bool):
        self.active = bool(value)

    def draw(self, screen: pygame.Surface, font: pygame.font.Font):
        base = pygame.Surface(self.rect.size, pygame.SRCALPHA)
        bg_idle   = (36, 40, 48, 220)
        bg_hover  = (46, 50, 60, 230)
        bg_active = (58, 86, 160, 235)
        border_active = (120, 170, 255, 255)

        if self.active and self.togglable:
            bg = bg_active
        elif self.hover:
            bg = bg_hover
        else:
            bg = bg_idle

        pygame.draw.rect(base, bg, base.get_rect(), border_radius=10)
        hi = pygame.Surface((self.rect.width, 16), pygame.SRCALPHA)
        pygame.draw.rect(hi, (255,255,255,20), hi.get_rect(), border_radius=10)
        base.blit(hi, (0,0))
        screen.blit(base, self.rect.topleft)

        if self.active and self.togglable:
            pygame.draw.rect(screen, border_active, self.rect, width=2, border_radius=10)

        text = font.render(self.label, True, (235,238,242))
        screen.blit(text, text.get_rect(center=self.rect.center))

    def handle_mouse(self, event: pygame.event.Event) -> bool:
        if event.type == pygame.MOUSEMOTION:
            self.hover = self.rect.collidepoint(event.pos)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                self.callback()
                return True
        return False


# ---------- Viewer ----------
class Viewer:
    def __init__(self, grid: Grid, settings: Optional[ViewerSettings] = None,
                 rng: Optional[random.Random] = None):
        pygame.init()

        self.grid = grid
        self.settings = settings or ViewerSettings(rows=grid.rows, cols=grid.cols)
        self._rng = rng or random.Random(self.settings.seed)
        self.font_small = pygame.font.Font(FONT_NAME, 16)
        self.font = pygame.font.Font(FONT_NAME, 20)
        self.font_big = pygame.font.Font(FONT_NAME, 24)

        self.cell_size = self._auto_cell_size(grid)
        grid_px_w = GRID_MARGIN*2 + grid.cols * self.cell_size
        grid_px_h = GRID_MARGIN*2 + grid.rows * self.cell_size
        win_w = grid_px_w + PANEL_W
        win_h = max(grid_px_h, 700)
        self.screen = pygame.display.set_mode((win_w, win_h), pygame.RESIZABLE)
        pygame.display.set_caption("Maze Pathfinding Visualizer")

        self._buttons: List[UIButton] = []

        self.selected_algo = self.settings.algorithm
        self.speed_preset = self.settings.speed_preset
        self.edit_mode = "wall"

        self.session: Optional[SolveSession] = None
        self.visited: List[Position] = []
        self.path: List[Position] = []
        self.state = "Idle"
        self.last_result: Optional[PathResult] = None
        self.last_metrics: Dict[str, Any] = {}
        self.show_visited = True

        self.compare_queue: List[str] = []
        self.comparison: Dict[str, PathResult] = {}
        self.comparing = False

        self._mouse_down = False
        self._last_edit: Optional[Position] = None
        self.clock = pygame.time.Clock()

        self._layout(win_w, win_h)

    # ---------- layout ----------
    def _layout(self, win_w: int, win_h: int):
        """Compute integer cell_size that fits window and center the grid."""
        avail_w = max(1, win_w - PANEL_W - 2 * GRID_MARGIN)
        avail_h = max(1, win_h - 2 * GRID_MARGIN)
        self.cell_size = int(max(6, min(avail_w // self.grid.cols, avail_h // self.grid.rows)))

        plate_w = self.grid.cols * self.cell_size + 2 * GRID_MARGIN
        plate_h = self.grid.rows * self.cell_size + 2 * GRID_MARGIN
        left_x = max(0, min((win_w - (plate_w + PANEL_W)) // 2, win_w - PANEL_W - plate_w))
        top_y = max(0, (win_h - plate_h) // 2)

        self.canvas_rect = pygame.Rect(left_x, top_y, plate_w, plate_h)
        self._grid_origin = (self.canvas_rect.x + GRID_MARGIN, self.canvas_rect.y + GRID_MARGIN)
        self._right_band = pygame.Rect(self.canvas_rect.right, 0,
                                       max(PANEL_W, win_w - self.canvas_rect.right), win_h)
        self._build_buttons()

    def _auto_cell_size(self, grid: Grid) -> int:
        target_h = 720 - GRID_MARGIN*2
        return max(10, min(CELL_SIZE_DEFAULT, target_h // grid.rows))

    def cell_at(self, px: int, py: int) -> Optional[Position]:
        ox, oy = self._grid_origin
        cs = self.cell_size
        if px < ox or py < oy:
            return None
        pos = ((py - oy) // cs, (px - ox) // cs)
        return pos if self.grid.in_bounds(pos) else None

    # ---------- main loop ----------
    def run(self):
        while True:
            self._handle_events()
            self._tick_algorithm(time.time())
            self._draw()
            self.clock.tick(60)

    def _tick_algorithm(self, now: float):
        if self.session is None:
            return
        self.session.speed = SPEED_PRESETS[self.speed_preset]
        self.session.fast = self.speed_preset == FAST_PRESET
        self.session.tick(now)
        self.last_metrics = self.session.metrics
        if self.session.result is not None and not self.session.result.cancelled:
            self._on_finished(self.session.result)

    def _on_visited(self, cells: List[Position]):
        self.visited = cells

    def _on_path(self, cells: List[Position]):
        self.path = cells

    def _on_finished(self, result: PathResult):
        self.session = None
        self.last_result = result
        if self.comparing:
            self.comparison[result.algorithm] = result
            if self.compare_queue:
                self._launch(self.compare_queue.pop(0))
                return
            self.comparing = False
        self.state = "Done" if result.found else "No path"
        self._refresh_active_states()

    # ---------- session control ----------
    def _launch(self, algo: str):
        self.visited = []
        self.path = []
        self.last_result = None
        self.last_metrics = {}
        self.session = SolveSession(self.grid.copy(), algo, self._on_visited, self._on_path,
                                    speed=SPEED_PRESETS[self.speed_preset],
                                    fast=self.speed_preset == FAST_PRESET)
        self.session.start()
        self.state = "Running"
        self._refresh_active_states()

    def _toggle_run(self):
        if self.session is not None and self.session.active:
            if self.session.state is SessionState.PAUSED:
                self.session.resume()
                self.state = "Running"
            else:
                self.session.pause()
                self.state = "Paused"
        else:
            self.comparing = False
            self._launch(self.selected_algo)
        self._refresh_active_states()

    def _start_compare(self):
        self._cancel()
        self.comparison = {}
        self.comparing = True
        self.compare_queue = list(COMPARE_ORDER)
        self._launch(self.compare_queue.pop(0))

    def _cancel(self):
        if self.session is not None:
            self.session.cancel()
            self.session = None
        self.comparing = False
        self.compare_queue = []

    def _reset_overlays(self):
        self.visited = []
        self.path = []
        self.last_result = None
        self.last_metrics = {}

    def _reset(self):
        self._cancel()
        self._reset_overlays()
        self.comparison = {}
        self.state = "Idle"
        self._refresh_active_states()

    def _new_maze(self):
        self._reset()
        self.grid = generate_maze(self.grid.rows, self.grid.cols,
                                  self.settings.wall_probability, rng=self._rng,
                                  start=self.grid.start, end=self.grid.end)
        log.info("new %dx%d maze, %d walls", self.grid.rows, self.grid.cols, self.grid.wall_count())
        self._layout(*self.screen.get_size())

    def _resize_grid(self, d_rows: int, d_cols: int) -> bool:
        """Empty grid of the new size; endpoints are pulled inside the bounds."""
        if self.session is not None and self.session.active:
            return False
        rows = max(MIN_SIZE, min(MAX_ROWS, self.grid.rows + d_rows))
        cols = max(MIN_SIZE, min(MAX_COLS, self.grid.cols + d_cols))
        if (rows, cols) == (self.grid.rows, self.grid.cols):
            return False
        self._reset()
        start = (min(self.grid.start[0], rows - 1), min(self.grid.start[1], cols - 1))
        end = (min(self.grid.end[0], rows - 1), min(self.grid.end[1], cols - 1))
        if start == end:
            start, end = (0, 0), (rows - 1, cols - 1)
        self.grid = Grid.empty(rows, cols, start, end)
        self.settings.rows, self.settings.cols = rows, cols
        log.info("grid resized to %dx%d", rows, cols)
        self._layout(*self.screen.get_size())
        return True

    def _toggle_visited(self):
        self.show_visited = not self.show_visited

    def _clear_walls(self):
        self._reset()
        self.grid.clear_walls()

    def _switch_algo(self, name: str):
        self._reset()
        self.selected_algo = name
        self._refresh_active_states()

    def _bump_speed(self, dv: int):
        i = PRESET_ORDER.index(self.speed_preset) + dv
        self.speed_preset = PRESET_ORDER[max(0, min(len(PRESET_ORDER) - 1, i))]

    def _set_edit_mode(self, mode: str):
        self.edit_mode = mode
        self._refresh_active_states()

    def _edit_cell(self, pos: Position) -> bool:
        if self.session is not None and self.session.active:
            return False
        if self.visited or self.path:
            self._reset_overlays()
            self.state = "Idle"
        if self.edit_mode == "start":
            return self.grid.set_start(pos)
        if self.edit_mode == "end":
            return self.grid.set_end(pos)
        return self.grid.toggle_wall(pos)

    # ---------- events ----------
    def _apply_resize(self, req_w: int, req_h: int):
        self.screen = pygame.display.set_mode((max(640, req_w), max(480, req_h)), pygame.RESIZABLE)
        self._layout(*self.screen.get_size())

    def _handle_events(self):
        for e in pygame.event.get():
            self.handle_event(e)

    def handle_event(self, e: pygame.event.Event):
        if e.type == pygame.QUIT:
            pygame.quit(); sys.exit(0)
        elif e.type == pygame.KEYDOWN:
            self._handle_key(e.key)
        elif e.type == pygame.VIDEORESIZE:
            self._apply_resize(e.w, e.h)
        elif e.type in (pygame.MOUSEMOTION, pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP):
            if any(b.handle_mouse(e) for b in self._buttons):
                return
            self._handle_grid_mouse(e)

    def _handle_key(self, key: int):
        if key in (pygame.K_ESCAPE, pygame.K_q):
            pygame.quit(); sys.exit(0)
        elif key == pygame.K_SPACE:
            self._toggle_run()
        elif key == pygame.K_r:
            self._reset()
        elif key == pygame.K_g:
            self._new_maze()
        elif key == pygame.K_c:
            self._clear_walls()
        elif key == pygame.K_k:
            self._start_compare()
        elif key in (pygame.K_PLUS, pygame.K_EQUALS):
            self._bump_speed(+1)
        elif key in (pygame.K_MINUS, pygame.K_UNDERSCORE):
            self._bump_speed(-1)
        elif key == pygame.K_LEFTBRACKET:
            self._resize_grid(-1, 0)
        elif key == pygame.K_RIGHTBRACKET:
            self._resize_grid(+1, 0)
        elif key == pygame.K_COMMA:
            self._resize_grid(0, -1)
        elif key == pygame.K_PERIOD:
            self._resize_grid(0, +1)
        elif key == pygame.K_v:
            self._toggle_visited()
        elif key == pygame.K_1:
            self._switch_algo("astar")
        elif key == pygame.K_2:
            self._switch_algo("bfs")
        elif key == pygame.K_3:
            self._switch_algo("dfs")
        elif key == pygame.K_w:
            self._set_edit_mode("wall")
        elif key == pygame.K_s:
            self._set_edit_mode("start")
        elif key == pygame.K_e:
            self._set_edit_mode("end")

    def _handle_grid_mouse(self, e: pygame.event.Event):
        if e.type == pygame.MOUSEBUTTONUP:
            self._mouse_down = False
            self._last_edit = None
            return
        if e.type == pygame.MOUSEBUTTONDOWN:
            if e.button != 1:
                return
            self._mouse_down = True
        elif not self._mouse_down:
            return
        pos = self.cell_at(*e.pos)
        # one edit per cell per drag
        if pos is not None and pos != self._last_edit:
            self._last_edit = pos
            self._edit_cell(pos)

    # ---------- drawing ----------
    def _draw(self):
        self._draw_backdrop()
        self._draw_grid()
        self._draw_metrics_and_buttons()
        pygame.display.flip()

    def _draw_backdrop(self):
        w, h = self.screen.get_size()
        top = (24, 26, 32); bot = (36, 40, 48)
        for y in range(h):
            t = y / max(1, h-1)
            c = (
                int(top[0] + (bot[0]-top[0]) * t),
                int(top[1] + (bot[1]-top[1]) * t),
                int(top[2] + (bot[2]-top[2]) * t),
            )
            pygame.draw.line(self.screen, c, (0, y), (w, y))

    def _cell_rect(self, pos: Position) -> pygame.Rect:
        ox, oy = self._grid_origin
        cs = self.cell_size
        row, col = pos
        return pygame.Rect(ox + col*cs, oy + row*cs, cs, cs)

    def _draw_grid(self):
        cs = self.cell_size
        for row in range(self.grid.rows):
            for col in range(self.grid.cols):
                rect = self._cell_rect((row, col))
                color = WALL_DARK if self.grid.cells[row][col] else OPEN_LIGHT
                pygame.draw.rect(self.screen, color, rect)
                pygame.draw.rect(self.screen, BLACK, rect, 1)

        if self.show_visited:
            overlay = pygame.Surface((cs, cs), pygame.SRCALPHA)
            overlay.fill(VISITED_A)
            for pos in self.visited:
                self.screen.blit(overlay, self._cell_rect(pos).topleft)

        for pos in self.path:
            pygame.draw.rect(self.screen, PATH_AMBER, self._cell_rect(pos).inflate(-2, -2))

        if self.path and self.last_result is not None and self.last_result.found:
            pts = [self._cell_rect(p).center for p in [self.grid.start] + self.path + [self.grid.end]]
            pygame.draw.lines(self.screen, BLACK, False, pts, 2)

        self._draw_badge(self.grid.start, START_GREEN, "S")
        self._draw_badge(self.grid.end, END_ROSE, "E")

    def _draw_badge(self, cell: Position, color: Tuple[int,int,int], label: str):
        rect = self._cell_rect(cell)
        pygame.draw.circle(self.screen, color, rect.center, max(4, self.cell_size//2 - 2))
        txt = self.font_small.render(label, True, WHITE)
        self.screen.blit(txt, txt.get_rect(center=rect.center))

    # ---------- buttons + metrics ----------
    def _build_buttons(self):
        self._buttons.clear()
        rb = self._right_band
        x = rb.x + 16
        y = rb.y + 390  # leaves space for metrics card above
        w = max(240, rb.width - 32)
        h = 36
        gap = 8

        def row(items, *, togglable=False):
            nonlocal y
            n = len(items)
            bw = (w - gap * (n - 1)) // n
            for i, (label, cb, store_as) in enumerate(items):
                btn = UIButton(label, pygame.Rect(x + i * (bw + gap), y, bw, h), cb, togglable=togglable)
                self._buttons.append(btn)
                if store_as:
                    setattr(self, store_as, btn)
            y += h + gap

        row([("Run / Pause", self._toggle_run, "btn_run")], togglable=True)
        row([("Reset", self._reset, None), ("Compare All", self._start_compare, None)])
        row([("New Maze", self._new_maze, None), ("Clear Walls", self._clear_walls, None)])
        row([("A*", lambda: self._switch_algo("astar"), "btn_algo_astar"),
             ("BFS", lambda: self._switch_algo("bfs"), "btn_algo_bfs"),
             ("DFS", lambda: self._switch_algo("dfs"), "btn_algo_dfs")], togglable=True)
        row([("Speed -", lambda: self._bump_speed(-1), None),
             ("Speed +", lambda: self._bump_speed(+1), None)])
        row([("Wall", lambda: self._set_edit_mode("wall"), "btn_edit_wall"),
             ("Start", lambda: self._set_edit_mode("start"), "btn_edit_start"),
             ("End", lambda: self._set_edit_mode("end"), "btn_edit_end")], togglable=True)

        self._refresh_active_states()

    def _refresh_active_states(self):
        if hasattr(self, "btn_run"):
            self.btn_run.set_active(self.session is not None and self.session.state is SessionState.RUNNING)
        for name in SHORT_NAMES:
            btn = getattr(self, f"btn_algo_{name}", None)
            if btn:
                btn.set_active(self.selected_algo == name)
        for mode in ("wall", "start", "end"):
            btn = getattr(self, f"btn_edit_{mode}", None)
            if btn:
                btn.set_active(self.edit_mode == mode)

    def _draw_metrics_and_buttons(self):
        rb = self._right_band

        card_h = 370
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
            y0 += surf.get_height() + 5

        line("Results", big=True, color=ACCENT_GOLD)
        r = self.last_result
        line(f"State: {self.state}")
        line(f"Visited: {len(self.visited)}")
        if r is not None:
            line(f"Path Len: {r.path_length if r.found else 'no path'}")
            line(f"Time: {r.elapsed_ms:.2f} ms")
        else:
            line(f"Path Len: {len(self.path)}")
            line("Time: -")
        m = self.last_metrics
        line(f"Frontier: {m.get('frontier', '-')}   Popped: {m.get('popped', '-')}")
        line("-" * 26, color=TEXT_DIM)
        line(f"Algo: {ALGORITHM_LABELS[self.selected_algo]}")
        line(f"Speed: {self.speed_preset}")
        line(f"Edit: {self.edit_mode}   Walls: {self.grid.wall_count()}")
        line(f"Size: {self.grid.rows}x{self.grid.cols}   Visited: {'on' if self.show_visited else 'off'}")

        if self.comparison:
            line("-" * 26, color=TEXT_DIM)
            for name in COMPARE_ORDER:
                res = self.comparison.get(name)
                if res is None:
                    continue
                plen = res.path_length if res.found else "-"
                line(f"{SHORT_NAMES[name]:<4} len {plen}  nodes {res.visited_count}  {res.elapsed_ms:.1f}ms",
                     color=TEXT_DIM)

        for b in self._buttons:
            b.draw(self.screen, self.font_small)


# ---------- main ----------
def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    try:
        settings = resolve_settings()
    except ValueError as ex:
        print(f"Bad settings: {ex}")
        sys.exit(2)
    rng = random.Random(settings.seed)
    grid = generate_maze(settings.rows, settings.cols, settings.wall_probability, rng=rng)
    Viewer(grid, settings, rng=rng).run()

if __name__ == "__main__":
    main()
