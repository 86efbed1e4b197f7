# pathfinder/app/viewer.py
#!/usr/bin/env python3
"""
Pathfinding Viewer: grid editor + step-by-step search animation

- Mouse:
    left click / drag      -> draw walls (off while a generated maze is shown)
    right click / drag     -> erase
    drag Start / End       -> move the endpoint (walls and the other endpoint refuse it)
- Keyboard:
    [SPACE]      -> start search
    [1]..[5]     -> Dijkstra / A* / Breadth First / Depth First / Greedy Best First
    [S]/[D]/[F]  -> slow / medium / fast
    [M]          -> generate maze
    [C]          -> clear grid (cancels a running search)
    [Q]/[ESC]    -> quit

Settings come from pathfinder.core.config (ENV PATHFINDER_* or --key=value).

Searches and mazes run on the driver's worker thread. The worker only
posts (run, kind, payload) tuples to self.events; the frame loop drains them,
drops anything left over from an earlier run and updates the overlay sets
that are actually drawn.
"""

import logging
import queue
import sys
from typing import Dict, List, Optional, Set, Tuple

import pygame

from pathfinder.core.config import SPEED_PRESETS, Settings, load_settings
from pathfinder.core.driver import SearchDriver
from pathfinder.core.grid import Grid
from pathfinder.core.log import PathfinderLogger
from pathfinder.core.maze import check_maze_dimensions
from pathfinder.core.registry import DISPLAY_NAMES, algorithm_names
from pathfinder.core.types import (
    CellKind, Coord, PathResult, FOUND, NOT_FOUND, CANCELLED, MISSING_ENDPOINTS,
)

log = logging.getLogger(__name__)

# ---------- Config ----------
PANEL_W = 300            # right band: metrics + buttons
GRID_MARGIN = 16
CELL_SIZE_DEFAULT = 25
FONT_NAME = None  # default pygame font
MAX_EVENTS_PER_FRAME = 2000

# Colors
WHITE       = (255,255,255)
LIGHT_GRAY  = (200,200,200)
START_GREEN = ( 46,204,113)
END_RED     = (231, 76, 60)
WALL_NAVY   = ( 52, 73, 94)
SEARCH_ORANGE = (255,165,  0)
VISITED_BLUE  = ( 52,152,219)
PATH_YELLOW   = (241,196, 15)

CARD_BG     = (24,28,36,220)
CARD_HI     = (255,255,255,18)
TEXT_LIGHT  = (230,235,240)
ACCENT_GOLD = (255,210,0)

ALGO_KEYS = {
    pygame.K_1: "Dijkstra",
    pygame.K_2: "A*",
    pygame.K_3: "BreadthFirst",
    pygame.K_4: "DepthFirst",
    pygame.K_5: "GreedyBestFirst",
}
SPEED_KEYS = {pygame.K_s: "slow", pygame.K_d: "medium", pygame.K_f: "fast"}

STATUS_TEXT = {
    FOUND: "Path found",
    NOT_FOUND: "No path found.",
    CANCELLED: "Cancelled",
    MISSING_ENDPOINTS: "Please set a start and end point.",
}


# ---------- Simple UI Button ----------
class UIButton:
    def __init__(self, label: str, rect: pygame.Rect, callback, *, togglable: bool = False):
        self.label = label
        self.rect = rect
        self.callback = callback
        self.hover = False
        self.togglable = togglable
        self.active = False  # highlight state
        self.enabled = True

    def set_active(self, value: bool):
        self.active = bool(value)

    def draw(self, screen: pygame.Surface, font: pygame.font.Font):
        base = pygame.Surface(self.rect.size, pygame.SRCALPHA)
        bg_idle   = (36, 40, 48, 220)
        bg_hover  = (46, 50, 60, 230)
        bg_active = (58, 86, 160, 235)  # bluish active
        bg_off    = (30, 32, 38, 160)
        border_active = (120, 170, 255, 255)

        if not self.enabled:
            bg = bg_off
        elif self.active and self.togglable:
            bg = bg_active
        elif self.hover:
            bg = bg_hover
        else:
            bg = bg_idle

        pygame.draw.rect(base, bg, base.get_rect(), border_radius=10)

        # subtle highlight top band
        hi = pygame.Surface((self.rect.width, 18), pygame.SRCALPHA)
        pygame.draw.rect(hi, (255,255,255,20), hi.get_rect(), border_radius=10)
        base.blit(hi, (0,0))

        screen.blit(base, self.rect.topleft)

        if self.active and self.togglable:
            pygame.draw.rect(screen, border_active, self.rect, width=2, border_radius=10)

        color = (235,238,242) if self.enabled else (120,124,130)
        text = font.render(self.label, True, color)
        screen.blit(text, text.get_rect(center=self.rect.center))

    def handle_mouse(self, event: pygame.event.Event) -> bool:
        if event.type == pygame.MOUSEMOTION:
            self.hover = self.rect.collidepoint(event.pos)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                if self.enabled:
                    self.callback()
                return True
        return False


# ---------- Viewer ----------
class Viewer:
    def __init__(self, settings: Settings):
        pygame.init()

        self.settings = settings
        self.grid = Grid(settings.rows, settings.cols)
        self.driver = SearchDriver(self.grid)
        self.events: "queue.Queue[Tuple[int, str, object]]" = queue.Queue()
        self._run = 0                 # id of the run whose events are drawn

        self.cell_size = self._auto_cell_size(self.grid)
        self.font = pygame.font.Font(FONT_NAME, 18)
        self.font_big = pygame.font.Font(FONT_NAME, 22)

        grid_px_w = GRID_MARGIN*2 + self.grid.cols * self.cell_size
        grid_px_h = GRID_MARGIN*2 + self.grid.rows * self.cell_size
        win_w = grid_px_w + PANEL_W
        win_h = max(grid_px_h, 620)

        self.screen = pygame.display.set_mode((win_w, win_h), pygame.RESIZABLE)
        pygame.display.set_caption("Pathfinding Visualizer")

        self._buttons: List[UIButton] = []

        # overlays drawn on top of the cell kinds; only the frame loop touches them
        self.current: Optional[Coord] = None
        self.closed_set: Set[Coord] = set()
        self.path: List[Coord] = []
        self.maze_open: Optional[Set[Coord]] = None   # set while a maze is being carved

        self.selected_algo = settings.algorithm
        self.speed = settings.speed
        self.maze_locked = False      # generated maze on screen -> no wall drawing
        self.state = "Idle"
        self.steps = 0

        # mouse gestures: "start" | "end" | "draw" | "erase" | None
        self._drag: Optional[str] = None

        self.clock = pygame.time.Clock()
        self._layout(win_w, win_h)

    # ---------- layout ----------
    def _layout(self, win_w: int, win_h: int):
        """Compute integer cell_size that fits window and place the grid."""
        avail_w = max(1, win_w - PANEL_W - 2 * GRID_MARGIN)
        avail_h = max(1, win_h - 2 * GRID_MARGIN)

        cs_by_w = avail_w // self.grid.cols
        cs_by_h = avail_h // self.grid.rows
        self.cell_size = int(max(6, min(cs_by_w, cs_by_h)))

        grid_plate_w = self.grid.cols * self.cell_size + 2 * GRID_MARGIN
        grid_plate_h = self.grid.rows * self.cell_size + 2 * GRID_MARGIN
        top_y = max(0, (win_h - grid_plate_h) // 2)

        self.canvas_rect = pygame.Rect(0, top_y, grid_plate_w, grid_plate_h)
        self._grid_origin = (self.canvas_rect.x + GRID_MARGIN,
                             self.canvas_rect.y + GRID_MARGIN)

        self._right_band = pygame.Rect(self.canvas_rect.right, 0,
                                       max(PANEL_W, win_w - self.canvas_rect.right),
                                       win_h)
        self._build_buttons()

    def _auto_cell_size(self, grid: Grid) -> int:
        target_h = 720 - GRID_MARGIN*2
        return max(10, min(CELL_SIZE_DEFAULT, target_h // grid.rows))

    def _cell_at(self, pos: Tuple[int, int]) -> Optional[Coord]:
        ox, oy = self._grid_origin
        x, y = pos
        if x < ox or y < oy:
            return None
        c = ((y - oy) // self.cell_size, (x - ox) // self.cell_size)
        return c if self.grid.in_bounds(c) else None

    # ---------- main loop ----------
    def run(self):
        while True:
            self._handle_events()
            self._drain_worker_events()
            self._refresh_active_states()
            self._draw()
            self.clock.tick(60)

    def _drain_worker_events(self):
        for _ in range(MAX_EVENTS_PER_FRAME):
            try:
                run, kind, payload = self.events.get_nowait()
            except queue.Empty:
                return
            if run != self._run:
                continue
            if kind == "step":
                if self.current is not None:
                    self.closed_set.add(self.current)
                self.current = payload
                self.steps += 1
            elif kind == "carve":
                if self.maze_open is not None:
                    self.maze_open.add(payload)
            elif kind == "search_done":
                self._finish_search(payload)
            elif kind == "maze_done":
                self.maze_open = None
                self.state = "Maze ready" if payload else "Idle"

    def _finish_search(self, result: PathResult):
        if self.current is not None:
            self.closed_set.add(self.current)
        self.current = None
        if result.status == FOUND:
            self.path = list(result.path)
            self.state = f"Path: {len(result.path)} cells"
        else:
            self.state = STATUS_TEXT.get(result.status, result.status)

    # ---------- actions ----------
    def _poster(self, kind: str):
        run = self._run
        return lambda payload: self.events.put((run, kind, payload))

    def _begin_run(self):
        self._run += 1
        self.maze_open = None
        self._reset_overlays()

    def _reset_overlays(self):
        self.current = None
        self.closed_set.clear()
        self.path = []
        self.steps = 0

    def _start_search(self):
        if self.driver.busy:
            return
        self._begin_run()
        self.state = "Searching…"
        self.driver.start_search(
            self.selected_algo, self.settings.step_delay,
            on_step=self._poster("step"),
            on_done=self._poster("search_done"),
        )

    def _generate_maze(self):
        if self.driver.busy:
            return
        try:
            check_maze_dimensions(self.grid.rows, self.grid.cols)
        except ValueError as ex:
            log.warning("%s", ex)
            self.state = "Maze needs an odd grid above 3x3"
            return
        self._begin_run()
        self.maze_open = set()
        self.maze_locked = True
        self.state = "Generating maze…"
        self.driver.start_maze(
            delay_ms=self.settings.maze_delay_ms,
            on_carve=self._poster("carve"),
            on_done=self._poster("maze_done"),
        )

    def _clear(self):
        self.driver.cancel()
        self.driver.join()
        self.grid.clear()
        self.maze_locked = False
        self._begin_run()
        self.state = "Idle"

    def _switch_algo(self, name: str):
        self.selected_algo = name

    def _set_speed(self, speed: str):
        self.speed = speed
        self.settings = self.settings.with_speed(speed)

    # ---------- events ----------
    def _handle_events(self):
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                self._quit()
            elif e.type == pygame.KEYDOWN:
                if e.key in (pygame.K_ESCAPE, pygame.K_q):
                    self._quit()
                elif e.key == pygame.K_SPACE:
                    self._start_search()
                elif e.key == pygame.K_c:
                    self._clear()
                elif e.key == pygame.K_m:
                    self._generate_maze()
                elif e.key in ALGO_KEYS:
                    self._switch_algo(ALGO_KEYS[e.key])
                elif e.key in SPEED_KEYS:
                    self._set_speed(SPEED_KEYS[e.key])
            elif e.type == pygame.VIDEORESIZE:
                self.screen = pygame.display.set_mode((e.w, e.h), pygame.RESIZABLE)
                self._layout(e.w, e.h)
            elif e.type in (pygame.MOUSEMOTION, pygame.MOUSEBUTTONDOWN):
                hit = False
                for b in self._buttons:
                    hit = b.handle_mouse(e) or hit
                if not hit:
                    self._handle_grid_mouse(e)
            elif e.type == pygame.MOUSEBUTTONUP:
                self._drag = None

    def _handle_grid_mouse(self, e: pygame.event.Event):
        # no editing while a worker owns the grid
        if self.driver.busy:
            return
        c = self._cell_at(e.pos)
        if c is None:
            return

        if e.type == pygame.MOUSEBUTTONDOWN:
            if e.button == 1:
                if c == self.grid.start:
                    self._drag = "start"
                elif c == self.grid.end:
                    self._drag = "end"
                elif not self.maze_locked:
                    self._drag = "draw"
                    self.grid.set_wall(c)
            elif e.button == 3:
                self._drag = "erase"
                self.grid.erase(c)
            return

        if self._drag == "start":
            self.grid.move_start(c)
        elif self._drag == "end":
            self.grid.move_end(c)
        elif self._drag == "draw" and not self.maze_locked:
            self.grid.set_wall(c)
        elif self._drag == "erase":
            self.grid.erase(c)

    def _quit(self):
        self.driver.cancel()
        pygame.quit()
        sys.exit(0)

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

    def _cell_color(self, c: Coord, kind: CellKind, on_path: Set[Coord]) -> Tuple[int, int, int]:
        if self.maze_open is not None and kind not in (CellKind.START, CellKind.END):
            return WHITE if c in self.maze_open else WALL_NAVY
        if kind is CellKind.START:
            return START_GREEN
        if kind is CellKind.END:
            return END_RED
        if kind is CellKind.WALL:
            return WALL_NAVY
        if c in on_path:
            return PATH_YELLOW
        if c == self.current:
            return SEARCH_ORANGE
        if c in self.closed_set:
            return VISITED_BLUE
        return WHITE

    def _draw_grid(self):
        cs = self.cell_size
        ox, oy = self._grid_origin
        on_path = set(self.path)

        for row in range(self.grid.rows):
            for col in range(self.grid.cols):
                kind = self.grid.cells[row][col].kind
                rect = pygame.Rect(ox + col*cs, oy + row*cs, cs, cs)
                pygame.draw.rect(self.screen, self._cell_color((row, col), kind, on_path), rect)
                pygame.draw.rect(self.screen, LIGHT_GRAY, rect, 1)

    # ---------- buttons + metrics ----------
    def _build_buttons(self):
        self._buttons.clear()
        rb = self._right_band
        x = rb.x + 16
        y = rb.y + 200  # leaves space for metrics card above
        w = max(160, rb.width - 32)
        h = 32
        gap = 8

        def add(label, cb, *, togglable=False, store_as: Optional[str] = None):
            btn = UIButton(label, pygame.Rect(x, y, w, h), cb, togglable=togglable)
            self._buttons.append(btn)
            if store_as:
                setattr(self, store_as, btn)
            return btn

        add("Start Search", self._start_search, store_as="btn_start"); y += h + gap
        add("Clear Grid", self._clear); y += h + gap
        add("Generate Maze", self._generate_maze, store_as="btn_maze"); y += h + gap + 6

        self._algo_buttons: Dict[str, UIButton] = {}
        for name in algorithm_names():
            self._algo_buttons[name] = add(DISPLAY_NAMES.get(name, name),
                                           lambda n=name: self._switch_algo(n),
                                           togglable=True)
            y += h + gap
        y += 6

        # Slow / Medium / Fast side by side
        self._speed_buttons: Dict[str, UIButton] = {}
        bw = (w - 2 * gap) // 3
        for i, speed in enumerate(SPEED_PRESETS):
            rect = pygame.Rect(x + i * (bw + gap), y, bw, h)
            btn = UIButton(speed.capitalize(), rect, lambda s=speed: self._set_speed(s), togglable=True)
            self._buttons.append(btn)
            self._speed_buttons[speed] = btn

        self._refresh_active_states()

    def _refresh_active_states(self):
        busy = self.driver.busy
        if hasattr(self, "btn_start"):
            self.btn_start.enabled = not busy
            self.btn_start.set_active(busy and self.maze_open is None)
        if hasattr(self, "btn_maze"):
            self.btn_maze.enabled = not busy
        for name, btn in getattr(self, "_algo_buttons", {}).items():
            btn.set_active(self.selected_algo == name)
        for speed, btn in getattr(self, "_speed_buttons", {}).items():
            btn.set_active(self.speed == speed)

    def _draw_metrics_and_buttons(self):
        rb = self._right_band

        card_h = 180
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

        line("Metrics", big=True, color=ACCENT_GOLD)
        line(f"Examined: {self.steps}")
        line(f"Path Len: {len(self.path)}")
        line(f"Walls: {self.grid.wall_count()}")
        line(f"Algo: {DISPLAY_NAMES.get(self.selected_algo, self.selected_algo)}")
        line(f"Speed: {self.speed}")
        line(self.state, color=ACCENT_GOLD)

        for b in self._buttons:
            b.draw(self.screen, self.font)


# ---------- main ----------
def main():
    try:
        settings = load_settings()
    except ValueError as ex:
        print(f"Invalid settings: {ex}")
        sys.exit(1)
    PathfinderLogger.setup_logging(settings.log_level)
    Viewer(settings).run()


if __name__ == "__main__":
    main()
