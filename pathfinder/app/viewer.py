#!/usr/bin/env python3
"""
Pathfinder Viewer — paint walls, run a search, watch the replay.

- Mouse:
    left drag      -> toggle walls
    shift + click  -> place start
    ctrl + click   -> place target
- Keyboard:
    [SPACE]/[V]    -> visualize
    [C]            -> clear grid
    [M]            -> generate maze
    [D]/[B]/[A]    -> select algorithm (Dijkstra / BFS / A*)
    [W]            -> swarm (dev mode only)
    [F12]          -> unlock dev mode
    [+]/[-]        -> steps/sec
    [Q]/[ESC]      -> quit

Config:
- ENV: PATHFINDER_ROWS, PATHFINDER_COLS, PATHFINDER_ALGO, PATHFINDER_SPEED,
       PATHFINDER_SEED, PATHFINDER_DEV, PATHFINDER_LOG_LEVEL
- CLI: --rows --cols --algo --speed --seed --dev --log-level
"""

import logging
import random
import sys
import time
from typing import List, Tuple, Optional, Sequence

import pygame

from pathfinder.core.config import Settings, resolve_settings, configure_logging
from pathfinder.core.errors import PathfinderError
from pathfinder.core.runner import Session, LABELS, IDLE, RUNNING, DONE, FAILED
from pathfinder.core.types import Grid, Cell, RunResult

logger = logging.getLogger(__name__)

# ---------- Layout ----------
PANEL_W = 320            # right band: HUD + buttons
GRID_MARGIN = 16
FONT_NAME = None  # default pygame font

# Colors
WHITE        = (255,255,255)
BLACK        = (  0,  0,  0)
CELL_BG      = ( 18, 22, 30)
CELL_LINE    = ( 34, 40, 52)
WALL_COLOR   = ( 12, 14, 20)
WALL_EDGE    = ( 70, 80,100)
START_COLOR  = (  0,243,255)
TARGET_COLOR = (255,  0, 85)
VISITED_A    = (  0,150,255,110)
FRONTIER_A   = (255,  0,120, 90)
PATH_COLOR   = (255,210,  0)

CARD_BG     = (24,28,36,220)
CARD_HI     = (255,255,255,18)
TEXT_LIGHT  = (230,235,240)
ACCENT_CYAN = (  0,243,255)

STATUS_TEXT = {IDLE: "IDLE", RUNNING: "RUNNING", DONE: "DONE", FAILED: "FAIL"}
STATUS_COLOR = {IDLE: TEXT_LIGHT, RUNNING: (255,210,0), DONE: (0,255,200), FAILED: (255,80,80)}

ALGO_KEYS = ("dijkstra", "bfs", "astar")
MAZE_EDITS_PER_SEC = 500


def steps_due(last_t: float, now: float, rate: float) -> Tuple[int, float]:
    """Whole steps owed since last_t at rate per second, and the advanced clock.

    The clock moves by exactly the steps taken, so the leftover fraction of a
    step carries into the next frame.
    """
    due = int((now - last_t) * rate)
    if due <= 0:
        return 0, last_t
    return due, last_t + due / rate


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
        bg_active = (20, 90, 120, 235)

        if self.active and self.togglable:
            bg = bg_active
        elif self.hover:
            bg = bg_hover
        else:
            bg = bg_idle
        pygame.draw.rect(base, bg, base.get_rect(), border_radius=10)
        screen.blit(base, self.rect.topleft)

        if self.active and self.togglable:
            pygame.draw.rect(screen, ACCENT_CYAN, self.rect, width=2, border_radius=10)

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
    def __init__(self, settings: Settings):
        pygame.init()

        self.settings = settings
        self.rng = random.Random(settings.seed)
        self.grid = Grid.create(settings.rows, settings.cols)
        self.session = Session(self.grid, rng=self.rng, swarm_cap=settings.swarm_cap)

        self.font_small = pygame.font.Font(FONT_NAME, 14)
        self.font = pygame.font.Font(FONT_NAME, 18)
        self.font_big = pygame.font.Font(FONT_NAME, 22)

        cs = settings.cell_size
        win_w = GRID_MARGIN*2 + self.grid.cols * cs + PANEL_W
        win_h = max(GRID_MARGIN*2 + self.grid.rows * cs, 560)
        self.screen = pygame.display.set_mode((win_w, win_h), pygame.RESIZABLE)
        pygame.display.set_caption("Neural Pathfinder")

        self._buttons: List[UIButton] = []

        self.dev_mode = settings.dev_mode
        self.selected_algo = settings.algorithm
        self.steps_per_sec = settings.steps_per_sec
        self.clock = pygame.time.Clock()

        # replay state
        self.visited_shown: set = set()
        self.path_shown: List[Cell] = []
        self._replay: List[Tuple[str, Cell]] = []
        self._replay_idx = 0
        self._last_step_t = 0.0
        self._maze_edits: List[Tuple[Cell, bool]] = []
        self._maze_idx = 0
        self._maze_shown: Optional[set] = None   # walls drawn so far while a maze is revealed
        self._maze_t = 0.0
        self._run_t0 = 0.0
        self.result: Optional[RunResult] = None
        self.hud_algo = LABELS[self.selected_algo]
        self.hud_nodes = 0
        self.hud_time_ms = 0

        # mouse painting
        self._painting = False
        self._last_paint: Optional[Cell] = None

        self._layout(win_w, win_h)
        logger.info("viewer ready: %s", self.session.grid_summary())

    # ---------- layout ----------
    def _layout(self, win_w: int, win_h: int):
        """Compute integer cell_size that fits window and center the grid."""
        avail_w = max(1, win_w - PANEL_W - 2 * GRID_MARGIN)
        avail_h = max(1, win_h - 2 * GRID_MARGIN)

        cs_by_w = avail_w // self.grid.cols
        cs_by_h = avail_h // self.grid.rows
        self.cell_size = int(max(6, min(cs_by_w, cs_by_h)))

        grid_plate_w = self.grid.cols * self.cell_size + 2 * GRID_MARGIN
        grid_plate_h = self.grid.rows * self.cell_size + 2 * GRID_MARGIN

        left_x = max(0, (win_w - (grid_plate_w + PANEL_W)) // 2)
        top_y  = max(0, (win_h - grid_plate_h) // 2)

        self.canvas_rect = pygame.Rect(left_x, top_y, grid_plate_w, grid_plate_h)
        self._grid_origin = (self.canvas_rect.x + GRID_MARGIN,
                             self.canvas_rect.y + GRID_MARGIN)
        self._right_band = pygame.Rect(self.canvas_rect.right, 0,
                                       max(PANEL_W, win_w - self.canvas_rect.right),
                                       win_h)
        self._build_buttons()

    def _cell_at(self, pos: Tuple[int, int]) -> Optional[Cell]:
        ox, oy = self._grid_origin
        x, y = pos
        if x < ox or y < oy:
            return None
        c = (y - oy) // self.cell_size, (x - ox) // self.cell_size
        return c if self.grid.in_bounds(c) else None

    @property
    def building_maze(self) -> bool:
        return self._maze_shown is not None

    @property
    def busy(self) -> bool:
        return self.session.running or self.building_maze

    # ---------- main loop ----------
    def run(self):
        while True:
            self._handle_events()
            if self.session.running:
                self._tick_replay()
            elif self.building_maze:
                self._tick_maze()
            self._draw()
            self.clock.tick(60)

    def _tick_replay(self):
        now = time.time()
        due, self._last_step_t = steps_due(self._last_step_t, now, self.steps_per_sec)
        if due <= 0:
            return
        for _ in range(due):
            if not self._advance():
                break
        self.hud_time_ms = int((now - self._run_t0) * 1000)

    def _advance(self) -> bool:
        if self._replay_idx >= len(self._replay):
            self._finish_run()
            return False
        kind, cell = self._replay[self._replay_idx]
        self._replay_idx += 1
        if kind == "visit":
            self.visited_shown.add(cell)
            self.hud_nodes += 1
        else:
            self.path_shown.append(cell)
        return True

    def _finish_run(self):
        status = self.session.finish_run()
        self.hud_time_ms = int((time.time() - self._run_t0) * 1000)
        logger.info("replay finished: %s (%d visited, path %d)", STATUS_TEXT[status],
                    len(self.result.visited), len(self.result.path))
        self._refresh_active_states()

    # ---------- actions ----------
    def visualize(self):
        if self.busy:
            return
        self._reset_overlays()
        try:
            self.result = self.session.start_run(self.selected_algo)
        except PathfinderError as ex:
            logger.error("run failed: %s", ex)
            return
        self._replay = [("visit", c) for c in self.result.visited]
        self._replay += [("path", c) for c in self.result.path]
        self._replay_idx = 0
        self._run_t0 = self._last_step_t = time.time()
        self.hud_algo = self.result.algorithm
        self._refresh_active_states()

    def clear(self):
        if self.busy:
            return
        self.session.clear()
        self._reset_overlays()
        self.hud_algo = "CLEARED"

    def generate_maze(self):
        if self.busy:
            return
        self._reset_overlays()
        edits: List[Tuple[Cell, bool]] = []
        self.session.generate_maze(on_wall=lambda cell, value: edits.append((cell, value)))
        self._maze_edits = edits
        self._maze_idx = 0
        self._maze_shown = set()
        self._run_t0 = self._maze_t = time.time()
        self.hud_algo = "GENERATOR"

    def _tick_maze(self):
        now = time.time()
        due, self._maze_t = steps_due(self._maze_t, now, MAZE_EDITS_PER_SEC)
        if due <= 0:
            return
        for cell, value in self._maze_edits[self._maze_idx:self._maze_idx + due]:
            if value:
                self._maze_shown.add(cell)
            else:
                self._maze_shown.discard(cell)
        self._maze_idx = min(len(self._maze_edits), self._maze_idx + due)
        self.hud_nodes = self._maze_idx
        self.hud_time_ms = int((now - self._run_t0) * 1000)
        if self._maze_idx >= len(self._maze_edits):
            self._maze_shown = None
            self._maze_edits = []
            self.hud_nodes = self.grid.rows * self.grid.cols
            logger.info("maze drawn: %d walls", self.grid.wall_count())

    def _reset_overlays(self):
        self.visited_shown.clear()
        self.path_shown = []
        self._replay = []
        self._replay_idx = 0
        self.hud_nodes = 0
        self.hud_time_ms = 0

    def _switch_algo(self, key: str):
        if self.busy:
            return
        if key == "swarm" and not self.dev_mode:
            return
        self.selected_algo = key
        self.hud_algo = LABELS[key]
        self._refresh_active_states()

    def _unlock_dev_mode(self):
        if self.dev_mode:
            return
        self.dev_mode = True
        logger.warning("ACCESS GRANTED: DEV MODE [Bi-Directional Swarm Unlocked]")
        self._build_buttons()
        self._switch_algo("swarm")

    def _bump_speed(self, dv: int):
        self.steps_per_sec = int(max(1, min(500, self.steps_per_sec + dv)))

    # ---------- input ----------
    def _handle_events(self):
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                pygame.quit(); sys.exit(0)
            elif e.type == pygame.KEYDOWN:
                self._handle_key(e)
            elif e.type == pygame.VIDEORESIZE:
                w, h = max(480, e.w), max(360, e.h)
                self.screen = pygame.display.set_mode((w, h), pygame.RESIZABLE)
                self._layout(w, h)
            elif e.type in (pygame.MOUSEMOTION, pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP):
                if any(b.handle_mouse(e) for b in self._buttons):
                    continue
                self._handle_grid_mouse(e)

    def _handle_key(self, e: pygame.event.Event):
        if e.key in (pygame.K_ESCAPE, pygame.K_q):
            pygame.quit(); sys.exit(0)
        elif e.key in (pygame.K_SPACE, pygame.K_v):
            self.visualize()
        elif e.key == pygame.K_c:
            self.clear()
        elif e.key == pygame.K_m:
            self.generate_maze()
        elif e.key == pygame.K_d:
            self._switch_algo("dijkstra")
        elif e.key == pygame.K_b:
            self._switch_algo("bfs")
        elif e.key == pygame.K_a:
            self._switch_algo("astar")
        elif e.key == pygame.K_w:
            self._switch_algo("swarm")
        elif e.key == pygame.K_F12:
            self._unlock_dev_mode()
        elif e.key in (pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS):
            self._bump_speed(+10)
        elif e.key in (pygame.K_MINUS, pygame.K_UNDERSCORE, pygame.K_KP_MINUS):
            self._bump_speed(-10)

    def _handle_grid_mouse(self, e: pygame.event.Event):
        if e.type == pygame.MOUSEBUTTONUP and e.button == 1:
            self._painting = False
            self._last_paint = None
            return
        if self.busy:
            return
        if e.type == pygame.MOUSEBUTTONDOWN and e.button == 1:
            cell = self._cell_at(e.pos)
            if cell is None:
                return
            mods = pygame.key.get_mods()
            if mods & pygame.KMOD_SHIFT:
                self.session.place_start(cell)
            elif mods & pygame.KMOD_CTRL:
                self.session.place_target(cell)
            else:
                self._painting = True
                self._paint(cell)
        elif e.type == pygame.MOUSEMOTION and self._painting:
            cell = self._cell_at(e.pos)
            if cell is not None and cell != self._last_paint:
                self._paint(cell)

    def _paint(self, cell: Cell):
        self._last_paint = cell
        self.session.toggle_wall(cell)

    # ---------- drawing ----------
    def _draw(self):
        self._draw_backdrop()
        self._draw_grid()
        self._draw_hud_and_buttons()
        pygame.display.flip()

    def _draw_backdrop(self):
        w, h = self.screen.get_size()
        top = (10, 12, 18); bot = (24, 28, 38)
        for y in range(h):
            t = y / max(1, h-1)
            c = (
                int(top[0] + (bot[0]-top[0]) * t),
                int(top[1] + (bot[1]-top[1]) * t),
                int(top[2] + (bot[2]-top[2]) * t),
            )
            pygame.draw.line(self.screen, c, (0, y), (w, y))

    def _cell_rect(self, cell: Cell) -> pygame.Rect:
        cs = self.cell_size
        ox, oy = self._grid_origin
        row, col = cell
        return pygame.Rect(ox + col*cs, oy + row*cs, cs, cs)

    def _draw_grid(self):
        cs = self.cell_size

        for cell in self.grid.cells():
            rect = self._cell_rect(cell)
            if self._maze_shown is not None:
                wall = cell in self._maze_shown
            else:
                wall = self.grid.is_wall(cell)
            if wall:
                pygame.draw.rect(self.screen, WALL_COLOR, rect)
                pygame.draw.rect(self.screen, WALL_EDGE, rect, 1)
            else:
                pygame.draw.rect(self.screen, CELL_BG, rect)
                pygame.draw.rect(self.screen, CELL_LINE, rect, 1)

        # overlays
        visit = pygame.Surface((cs, cs), pygame.SRCALPHA); visit.fill(VISITED_A)
        for cell in self.visited_shown:
            if not self.grid.is_endpoint(cell):
                self.screen.blit(visit, self._cell_rect(cell).topleft)

        if self.session.running and self._replay_idx < len(self._replay):
            head = pygame.Surface((cs, cs), pygame.SRCALPHA); head.fill(FRONTIER_A)
            self.screen.blit(head, self._cell_rect(self._replay[self._replay_idx][1]).topleft)

        # path
        if len(self.path_shown) >= 2:
            pts = [self._cell_rect(c).center for c in self.path_shown]
            glow = pygame.Surface(self.screen.get_size(), pygame.SRCALPHA)
            pygame.draw.lines(glow, (255, 210, 0, 60), False, pts, max(3, cs // 2))
            self.screen.blit(glow, (0,0), special_flags=pygame.BLEND_ADD)
            pygame.draw.lines(self.screen, PATH_COLOR, False, pts, max(2, cs // 4))

        self._draw_badge(self.grid.start, START_COLOR, "S")
        self._draw_badge(self.grid.target, TARGET_COLOR, "T")

    def _draw_badge(self, cell: Cell, color: Tuple[int,int,int], label: str):
        center = self._cell_rect(cell).center
        pygame.draw.circle(self.screen, color, center, max(4, self.cell_size//2 - 2))
        txt = self.font_small.render(label, True, BLACK)
        self.screen.blit(txt, txt.get_rect(center=center))

    # ---------- buttons + HUD ----------
    def _build_buttons(self):
        self._buttons.clear()
        rb = self._right_band
        x = rb.x + 16
        y = rb.y + 210  # leaves space for the HUD card above
        w = max(160, rb.width - 32)
        h = 36
        gap = 8

        def add(label, cb, *, togglable=False, store_as: Optional[str] = None):
            rect = pygame.Rect(x, y, w, h)
            btn = UIButton(label, rect, cb, togglable=togglable)
            self._buttons.append(btn)
            if store_as:
                setattr(self, store_as, btn)

        add("Visualize", self.visualize, togglable=True, store_as="btn_run"); y += h + gap
        add("Clear Grid", self.clear);                                      y += h + gap
        add("Generate Maze", self.generate_maze);                           y += h + gap

        minus_rect = pygame.Rect(x, y, (w-8)//2, h)
        plus_rect  = pygame.Rect(x + (w-8)//2 + 8, y, (w-8)//2, h)
        self._buttons.append(UIButton("Speed -", minus_rect, lambda: self._bump_speed(-10)))
        self._buttons.append(UIButton("Speed +", plus_rect,  lambda: self._bump_speed(+10)))
        y += h + gap

        self._algo_buttons = {}
        keys = ALGO_KEYS + (("swarm",) if self.dev_mode else ())
        for key in keys:
            rect = pygame.Rect(x, y, w, h)
            btn = UIButton(f"Algo: {LABELS[key]}", rect,
                           lambda k=key: self._switch_algo(k), togglable=True)
            self._buttons.append(btn)
            self._algo_buttons[key] = btn
            y += h + gap

        self._refresh_active_states()

    def _refresh_active_states(self):
        if hasattr(self, "btn_run"):
            self.btn_run.set_active(self.session.running)
        for key, btn in getattr(self, "_algo_buttons", {}).items():
            btn.set_active(key == self.selected_algo)

    def _draw_hud_and_buttons(self):
        rb = self._right_band

        card_h = 190
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

        status = RUNNING if self.building_maze else self.session.status
        line("NEURAL PATHFINDER", big=True, color=ACCENT_CYAN)
        line(f"Algo: {self.hud_algo.upper()}")
        line(f"Status: {STATUS_TEXT[status]}", color=STATUS_COLOR[status])
        line(f"Nodes: {self.hud_nodes}")
        line(f"Time: {self.hud_time_ms} ms")
        line(f"Speed: {self.steps_per_sec} steps/s")
        if self.dev_mode:
            line("DEV MODE", color=TARGET_COLOR)

        for b in self._buttons:
            b.draw(self.screen, self.font)


# ---------- main ----------
def main(argv: Optional[Sequence[str]] = None):
    try:
        settings = resolve_settings(argv)
    except (ValueError, PathfinderError) as ex:
        print(f"Invalid settings: {ex}", file=sys.stderr)
        sys.exit(2)
    configure_logging(settings.log_level)
    Viewer(settings).run()


if __name__ == "__main__":
    main()
