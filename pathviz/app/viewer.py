#!/usr/bin/env python3
"""
Pathfinding Visualizer - grid editor + animated search playback

- Keyboard:
    [1]..[5]     -> select algorithm (Dijkstra / BFS / DFS / A* / Greedy)
    [SPACE]      -> run / pause / resume
    [N]          -> single step
    [S]          -> stop playback
    [R]          -> reset overlays
    [C]          -> clear walls
    [W]          -> random walls
    [T]          -> toggle dark mode
    [+]/[-]      -> steps/sec
    [Q]/[ESC]    -> quit

- Mouse (while nothing is playing):
    left drag          -> toggle walls
    shift + left click -> place start
    ctrl + left click  -> place end

CLI: see `pathviz --help`.
"""

import argparse
import logging
import random
import sys
import time
from pathlib import Path
from typing import List, Optional, Tuple

import pygame

from pathviz.config import (
    CELL_SIZE_DEFAULT,
    DEFAULT_ALGORITHM,
    DEFAULT_COLS,
    DEFAULT_ROWS,
    DEFAULT_SPEED,
    DEFAULT_WALL_PROBABILITY,
    FONT_NAME,
    FPS,
    GRID_MARGIN,
    LOG_LEVEL,
    MAP_DIR,
    MAX_SPEED,
    MIN_CELL_SIZE,
    MIN_SPEED,
    PALETTES,
    PANEL_W,
    PATH_DELAY_FACTOR,
)
from pathviz.app.playback import CancelToken, Player, StepResult, apply_step, play
from pathviz.core.grid import (
    clear_grid,
    clear_walls,
    find_end,
    find_start,
    generate_random_walls,
    load_map,
    move_end,
    move_start,
    new_board,
    toggle_wall,
)
from pathviz.core.registry import ALGORITHMS, DISPLAY_NAMES, algorithm_key, run_algorithm
from pathviz.core.types import Coord, Grid, RunStats

logger = logging.getLogger(__name__)

ALGO_KEYS = {
    pygame.K_1: "dijkstra",
    pygame.K_2: "bfs",
    pygame.K_3: "dfs",
    pygame.K_4: "astar",
    pygame.K_5: "greedy",
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

    def set_active(self, value: bool):
        self.active = bool(value)

    def draw(self, screen: pygame.Surface, font: pygame.font.Font, palette: dict):
        if self.active and self.togglable:
            bg = palette["button_active"]
        elif self.hover:
            bg = palette["button_hover"]
        else:
            bg = palette["button"]
        pygame.draw.rect(screen, bg, self.rect, border_radius=10)
        if self.active and self.togglable:
            pygame.draw.rect(screen, palette["accent"], self.rect, width=2, border_radius=10)

        text = font.render(self.label, True, palette["text"])
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
    def __init__(self, grid: Grid, algo: str = DEFAULT_ALGORITHM, speed: int = DEFAULT_SPEED,
                 rng: Optional[random.Random] = None):
        pygame.init()

        self.grid = grid
        self.rng = rng or random.Random()
        self.font_small = pygame.font.Font(FONT_NAME, 16)
        self.font = pygame.font.Font(FONT_NAME, 20)
        self.font_big = pygame.font.Font(FONT_NAME, 26)

        rows, cols = len(grid), len(grid[0])
        self.cell_size = max(MIN_CELL_SIZE, min(CELL_SIZE_DEFAULT, (720 - GRID_MARGIN * 2) // rows))
        win_w = GRID_MARGIN * 2 + cols * self.cell_size + PANEL_W
        win_h = max(GRID_MARGIN * 2 + rows * self.cell_size, 600)

        self.screen = pygame.display.set_mode((win_w, win_h), pygame.RESIZABLE)
        pygame.display.set_caption("Pathfinding Visualizer")

        self._buttons: List[UIButton] = []
        self.dark_mode = False
        self.selected_algo = algo
        self.steps_per_sec = int(max(MIN_SPEED, min(MAX_SPEED, speed)))

        self.player: Optional[Player] = None
        self.token = CancelToken()
        self.stats: Optional[RunStats] = None
        self.state = "Idle"
        self._last_phase: Optional[str] = None
        self._last_step_t = 0.0
        self._drag_cells: set = set()
        self.clock = pygame.time.Clock()

        self._layout(win_w, win_h)

    @property
    def palette(self) -> dict:
        return PALETTES["dark" if self.dark_mode else "light"]

    @property
    def playing(self) -> bool:
        """A run exists and has not finished or been stopped."""
        return self.player is not None and not self.player.finished and not self.token.stopped

    # ---------- layout ----------
    def _layout(self, win_w: int, win_h: int):
        """Compute integer cell_size that fits window and place the grid on the left."""
        rows, cols = len(self.grid), len(self.grid[0])
        avail_w = max(1, win_w - PANEL_W - 2 * GRID_MARGIN)
        avail_h = max(1, win_h - 2 * GRID_MARGIN)
        self.cell_size = int(max(MIN_CELL_SIZE, min(avail_w // cols, avail_h // rows)))

        self._grid_origin = (GRID_MARGIN, GRID_MARGIN)
        grid_right = GRID_MARGIN * 2 + cols * self.cell_size
        self._right_band = pygame.Rect(grid_right, 0, max(PANEL_W, win_w - grid_right), win_h)
        self._build_buttons()

    def _cell_at(self, pos: Tuple[int, int]) -> Optional[Coord]:
        ox, oy = self._grid_origin
        col = (pos[0] - ox) // self.cell_size
        row = (pos[1] - oy) // self.cell_size
        if 0 <= row < len(self.grid) and 0 <= col < len(self.grid[0]):
            return (row, col)
        return None

    # ---------- main loop ----------
    def run(self):
        while True:
            self._handle_events()
            if self.playing and not self.token.paused:
                self._tick_algorithm()
            self._draw()
            self.clock.tick(FPS)

    def _tick_algorithm(self):
        t0 = time.time()
        step_interval = 1.0 / max(MIN_SPEED, self.steps_per_sec)
        if self._last_phase == "path":
            step_interval *= PATH_DELAY_FACTOR
        if t0 - self._last_step_t >= step_interval:
            self._last_step_t = t0
            self._do_step()

    # ---------- run control ----------
    def _start_run(self):
        start, end = find_start(self.grid), find_end(self.grid)
        self.grid = clear_grid(self.grid)
        result, self.stats = run_algorithm(self.selected_algo, self.grid, start, end)
        self.player = Player(name=DISPLAY_NAMES[self.selected_algo])
        self.player.init(result)
        self.token = CancelToken()
        self._last_phase = None

    def _do_step(self):
        if self.player is None or self.player.finished:
            self._start_run()
        res: StepResult = self.player.step()
        self._last_phase = res.phase
        self.grid = apply_step(self.grid, res)
        if res.status == "done":
            self.state = "Done"
        elif res.status == "no_path":
            self.state = "No path"
        elif res.status == "running":
            self.state = "Paused" if self.token.paused else "Running"
        self._refresh_active_states()

    def _toggle_run(self):
        if not self.playing:
            self._start_run()
            self.state = "Running"
        else:
            self.token.toggle_pause()
            self.state = "Paused" if self.token.paused else "Running"
        self._refresh_active_states()

    def _single_step(self):
        if not self.playing:
            self._start_run()
        self.token.pause()
        self._do_step()
        self._refresh_active_states()

    def _stop(self):
        if self.playing:
            self.token.stop()
            self.state = "Stopped"
            self._refresh_active_states()

    def _reset(self):
        self.token.stop()
        self.player = None
        self.stats = None
        self.state = "Idle"
        self.grid = clear_grid(self.grid)
        self._refresh_active_states()

    # ---------- board edits ----------
    def _edit(self, fn):
        if self.playing:
            return
        self._reset()
        self.grid = fn(self.grid)

    def _clear_walls(self):
        self._edit(clear_walls)

    def _random_walls(self):
        self._edit(lambda g: generate_random_walls(g, DEFAULT_WALL_PROBABILITY, self.rng))

    def _switch_algo(self, key: str):
        if self.playing:
            return
        self.selected_algo = key
        self._reset()

    def _toggle_theme(self):
        self.dark_mode = not self.dark_mode
        self._refresh_active_states()

    def _bump_speed(self, dv: int):
        self.steps_per_sec = int(max(MIN_SPEED, min(MAX_SPEED, self.steps_per_sec + dv)))

    def _handle_grid_mouse(self, e: pygame.event.Event):
        if self.playing:
            return
        if e.type == pygame.MOUSEBUTTONUP and e.button == 1:
            self._drag_cells.clear()
            return
        if e.type == pygame.MOUSEBUTTONDOWN and e.button == 1:
            cell = self._cell_at(e.pos)
            if cell is None:
                return
            mods = pygame.key.get_mods()
            if mods & pygame.KMOD_SHIFT:
                self._edit(lambda g: move_start(g, cell))
            elif mods & pygame.KMOD_CTRL:
                self._edit(lambda g: move_end(g, cell))
            else:
                self._drag_cells = {cell}
                self._edit(lambda g: toggle_wall(g, cell))
        elif e.type == pygame.MOUSEMOTION and e.buttons[0] and self._drag_cells:
            cell = self._cell_at(e.pos)
            if cell is not None and cell not in self._drag_cells:
                self._drag_cells.add(cell)
                self._edit(lambda g: toggle_wall(g, cell))

    def _handle_events(self):
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                pygame.quit(); sys.exit(0)
            elif e.type == pygame.KEYDOWN:
                if e.key in (pygame.K_ESCAPE, pygame.K_q):
                    pygame.quit(); sys.exit(0)
                elif e.key == pygame.K_SPACE:
                    self._toggle_run()
                elif e.key == pygame.K_n:
                    self._single_step()
                elif e.key == pygame.K_s:
                    self._stop()
                elif e.key == pygame.K_r:
                    self._reset()
                elif e.key == pygame.K_c:
                    self._clear_walls()
                elif e.key == pygame.K_w:
                    self._random_walls()
                elif e.key == pygame.K_t:
                    self._toggle_theme()
                elif e.key in (pygame.K_PLUS, pygame.K_EQUALS):
                    self._bump_speed(+5)
                elif e.key in (pygame.K_MINUS, pygame.K_UNDERSCORE):
                    self._bump_speed(-5)
                elif e.key in ALGO_KEYS:
                    self._switch_algo(ALGO_KEYS[e.key])
            elif e.type == pygame.VIDEORESIZE:
                self.screen = pygame.display.set_mode((e.w, e.h), pygame.RESIZABLE)
                self._layout(e.w, e.h)
            elif e.type in (pygame.MOUSEMOTION, pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP):
                handled = False
                for b in self._buttons:
                    handled = b.handle_mouse(e) or handled
                if not handled:
                    self._handle_grid_mouse(e)

    # ---------- drawing ----------
    def _draw(self):
        self.screen.fill(self.palette["background"])
        self._draw_grid()
        self._draw_stats_and_buttons()
        pygame.display.flip()

    def _draw_grid(self):
        pal = self.palette
        cs = self.cell_size
        ox, oy = self._grid_origin

        for row in self.grid:
            for cell in row:
                rect = pygame.Rect(ox + cell.col * cs, oy + cell.row * cs, cs, cs)
                if cell.is_start:
                    color = pal["start"]
                elif cell.is_end:
                    color = pal["end"]
                elif cell.is_wall:
                    color = pal["wall"]
                elif cell.is_path:
                    color = pal["path"]
                elif cell.is_current:
                    color = pal["current"]
                elif cell.is_visited:
                    color = pal["visited"]
                elif cell.is_frontier:
                    color = pal["frontier"]
                else:
                    color = pal["cell"]
                pygame.draw.rect(self.screen, color, rect)
                pygame.draw.rect(self.screen, pal["border"], rect, 1)

    # ---------- buttons + stats ----------
    def _build_buttons(self):
        self._buttons.clear()
        rb = self._right_band
        x = rb.x + 16
        y = rb.y + 230  # leaves space for the stats card above
        w = max(160, rb.width - 32)
        h = 30
        gap = 6

        def add(label, cb, *, togglable=False, store_as: Optional[str] = None):
            btn = UIButton(label, pygame.Rect(x, y, w, h), cb, togglable=togglable)
            self._buttons.append(btn)
            if store_as:
                setattr(self, store_as, btn)

        add("Run / Pause", self._toggle_run, togglable=True, store_as="btn_run"); y += h + gap
        add("Step Once", self._single_step); y += h + gap
        add("Stop", self._stop); y += h + gap
        add("Reset", self._reset); y += h + gap

        half = (w - 8) // 2
        self._buttons.append(UIButton("Speed -", pygame.Rect(x, y, half, h), lambda: self._bump_speed(-5)))
        self._buttons.append(UIButton("Speed +", pygame.Rect(x + half + 8, y, half, h), lambda: self._bump_speed(+5)))
        y += h + gap

        self._buttons.append(UIButton("Random Walls", pygame.Rect(x, y, half, h), self._random_walls))
        self._buttons.append(UIButton("Clear Walls", pygame.Rect(x + half + 8, y, half, h), self._clear_walls))
        y += h + gap

        self.algo_buttons = {}
        for key in ALGORITHMS:
            btn = UIButton(DISPLAY_NAMES[key], pygame.Rect(x, y, w, h),
                           lambda k=key: self._switch_algo(k), togglable=True)
            self._buttons.append(btn)
            self.algo_buttons[key] = btn
            y += h + gap

        add("Dark Mode", self._toggle_theme, togglable=True, store_as="btn_theme")
        self._refresh_active_states()

    def _refresh_active_states(self):
        if hasattr(self, "btn_run"):
            self.btn_run.set_active(self.playing and not self.token.paused)
        if hasattr(self, "btn_theme"):
            self.btn_theme.set_active(self.dark_mode)
        for key, btn in getattr(self, "algo_buttons", {}).items():
            btn.set_active(key == self.selected_algo)

    def _draw_stats_and_buttons(self):
        pal = self.palette
        rb = self._right_band
        card = pygame.Rect(rb.x + 10, rb.y + 10, rb.width - 20, 210)
        pygame.draw.rect(self.screen, pal["card"], card, border_radius=14)

        x0 = rb.x + 24
        y0 = rb.y + 20

        def line(text, big=False, color=None):
            nonlocal y0
            f = self.font_big if big else self.font
            surf = f.render(text, True, color or pal["text"])
            self.screen.blit(surf, (x0, y0))
            y0 += surf.get_height() + 6

        line("Algorithm Statistics", big=True, color=pal["accent"])
        line(f"Algo: {DISPLAY_NAMES[self.selected_algo]}")
        line(f"State: {self.state}")
        line(f"Speed: {self.steps_per_sec} steps/s")
        if self.stats is None:
            line("Run an algorithm to see statistics")
        else:
            line(f"Nodes visited: {self.stats.visited_nodes:,}")
            if self.stats.path_found:
                line(f"Path length: {self.stats.path_length:,}")
                line(f"Execution time: {self.stats.execution_ms:.2f} ms")
            else:
                line("No path found", color=pal["end"])

        for b in self._buttons:
            b.draw(self.screen, self.font_small, pal)


# ---------- headless ----------
def render_text(grid: Grid) -> str:
    """ASCII picture of a grid: S/E markers, # walls, * path, . visited."""
    lines = []
    for row in grid:
        chars = []
        for cell in row:
            if cell.is_start:
                chars.append("S")
            elif cell.is_end:
                chars.append("E")
            elif cell.is_wall:
                chars.append("#")
            elif cell.is_path:
                chars.append("*")
            elif cell.is_visited:
                chars.append(".")
            else:
                chars.append(" ")
        lines.append("".join(chars))
    return "\n".join(lines)


def run_headless(grid: Grid, algo: str) -> RunStats:
    """Search and replay without a window (no delays), then print the board."""
    result, stats = run_algorithm(algo, grid, find_start(grid), find_end(grid))
    board = [clear_grid(grid)]

    def on_step(step: StepResult):
        board[0] = apply_step(board[0], step)

    play(result, on_step, sleep=lambda _s: None, name=stats.algorithm)
    print(render_text(board[0]))
    return stats


# ---------- main ----------
def resolve_map(name: str) -> Path:
    """A path as given, or a bundled map by name (`maze` -> maps/maze.json)."""
    path = Path(name)
    if path.exists():
        return path
    for candidate in (MAP_DIR / name, MAP_DIR / f"{name}.json"):
        if candidate.exists():
            return candidate
    return path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pathviz", description="Grid pathfinding visualizer")
    parser.add_argument("--rows", type=int, default=DEFAULT_ROWS)
    parser.add_argument("--cols", type=int, default=DEFAULT_COLS)
    parser.add_argument("--algo", choices=list(ALGORITHMS), default=DEFAULT_ALGORITHM)
    parser.add_argument("--map", dest="map_path", default=None, help="JSON map to load instead of an empty board")
    parser.add_argument("--walls", type=float, default=None, help="random wall probability at startup")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--speed", type=int, default=DEFAULT_SPEED, help="visited cells per second")
    parser.add_argument("--headless", action="store_true", help="print the result instead of opening a window")
    parser.add_argument("--log-level", default=LOG_LEVEL)
    return parser


def main(argv: Optional[List[str]] = None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # argparse does not check a default (PATHVIZ_ALGO) against choices
    try:
        args.algo = algorithm_key(args.algo)
    except ValueError as ex:
        logger.error(str(ex))
        sys.exit(1)

    rng = random.Random(args.seed)
    if args.map_path:
        try:
            grid = load_map(resolve_map(args.map_path))
        except (OSError, ValueError) as ex:
            logger.error(f"Failed to load map {args.map_path}: {ex}")
            sys.exit(1)
    else:
        if args.rows < 1 or args.cols < 2:
            logger.error("Board needs at least 1 row and 2 columns")
            sys.exit(1)
        grid = new_board(args.rows, args.cols)
    if args.walls is not None:
        grid = generate_random_walls(grid, args.walls, rng)

    if args.headless:
        run_headless(grid, args.algo)
        return
    Viewer(grid, algo=args.algo, speed=args.speed, rng=rng).run()


if __name__ == "__main__":
    main()
