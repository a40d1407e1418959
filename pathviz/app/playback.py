#!/usr/bin/env python3
"""
Playback of a finished search, one cell per step.

The search has already run to completion; this only replays
`visited_in_order` and then `shortest_path`, so pausing, stepping or
stopping can never change what was found.

- Player.step()  -> StepResult   (driven by the viewer's frame loop)
- play(...)                       (blocking loop with delays + CancelToken)
"""

import logging
import threading
import time
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, List, Optional

from pathviz.config import MIN_SPEED, PATH_DELAY_FACTOR, PAUSE_POLL_SECONDS, DEFAULT_SPEED
from pathviz.core.grid import neighbors
from pathviz.core.types import Coord, Grid, SearchResult

logger = logging.getLogger(__name__)


@dataclass
class StepResult:
    status: str                   # "idle" | "running" | "done" | "no_path" | "stopped"
    phase: Optional[str] = None   # "visiting" | "path"
    current: Optional[Coord] = None
    closed: List[Coord] = field(default_factory=list)
    path: Optional[List[Coord]] = None
    metrics: Dict[str, Any] = field(default_factory=dict)


class CancelToken:
    """Pause/resume/stop flags shared between a playback loop and its controller."""

    def __init__(self) -> None:
        self._stop = threading.Event()
        self._running = threading.Event()
        self._running.set()

    @property
    def paused(self) -> bool:
        return not self._running.is_set()

    @property
    def stopped(self) -> bool:
        return self._stop.is_set()

    def pause(self) -> None:
        self._running.clear()

    def resume(self) -> None:
        self._running.set()

    def toggle_pause(self) -> None:
        if self.paused:
            self.resume()
        else:
            self.pause()

    def stop(self) -> None:
        self._stop.set()
        self._running.set()


@dataclass
class Player:
    name: str = ""

    # Internal state
    result: Optional[SearchResult] = None
    visit_idx: int = 0
    path_idx: int = 0
    done: bool = False
    no_path: bool = False

    # -------------------- lifecycle --------------------

    def init(self, result: SearchResult) -> None:
        self.result = result
        self.reset()

    def reset(self) -> None:
        """Rewind to the first visited cell."""
        self.visit_idx = 0
        self.path_idx = 0
        self.done = False
        self.no_path = False

    @property
    def finished(self) -> bool:
        return self.done or self.no_path

    # -------------------- stepping --------------------

    def step(self) -> StepResult:
        if self.result is None:
            return StepResult(status="idle", metrics={"algo": self.name})

        visited = self.result.visited_in_order
        path = self.result.shortest_path

        if self.visit_idx < len(visited):
            u = visited[self.visit_idx]
            self.visit_idx += 1
            return StepResult(status="running", phase="visiting", current=u,
                              closed=[u], metrics=self.metrics())

        if self.path_idx < len(path):
            c = path[self.path_idx]
            self.path_idx += 1
            return StepResult(status="running", phase="path", current=c,
                              path=path[:self.path_idx], metrics=self.metrics())

        if path:
            self.done = True
            return StepResult(status="done", path=list(path), metrics=self.metrics())
        self.no_path = True
        return StepResult(status="no_path", metrics=self.metrics())

    def metrics(self) -> dict:
        return {
            "algo": self.name,
            "visited": self.visit_idx,
            "visited_total": len(self.result.visited_in_order) if self.result else 0,
            "path_len": self.path_idx,
            "path_total": len(self.result.shortest_path) if self.result else 0,
        }


# -------------------- blocking playback --------------------

def _wait_while_paused(token: CancelToken, sleep: Callable[[float], None]) -> bool:
    """Block while paused. False once the token is stopped."""
    while token.paused and not token.stopped:
        sleep(PAUSE_POLL_SECONDS)
    return not token.stopped


def play(result: SearchResult,
         on_step: Callable[[StepResult], None],
         token: Optional[CancelToken] = None,
         speed: int = DEFAULT_SPEED,
         sleep: Callable[[float], None] = time.sleep,
         name: str = "") -> StepResult:
    """
    Replay `result` through `on_step`, waiting 1/speed s per visited cell and
    PATH_DELAY_FACTOR times that per path cell. Returns the last StepResult,
    with status "stopped" if the token was stopped first.
    """
    token = token or CancelToken()
    player = Player(name=name)
    player.init(result)
    delay = 1.0 / max(MIN_SPEED, speed)

    while True:
        if not _wait_while_paused(token, sleep):
            logger.debug(f"Playback stopped after {player.visit_idx + player.path_idx} steps")
            return StepResult(status="stopped", metrics=player.metrics())

        step = player.step()
        on_step(step)
        if player.finished:
            return step
        sleep(delay * PATH_DELAY_FACTOR if step.phase == "path" else delay)


def apply_step(grid: Grid, step: StepResult) -> Grid:
    """
    Project one StepResult onto the grid's render flags (returns a new grid).

    `closed` cells become visited. The open non-wall neighbors of a visited
    cell are flagged as frontier until they are visited themselves.
    """
    out = [[replace(cell, is_current=False) for cell in row] for row in grid]
    for r, c in step.closed:
        out[r][c].is_visited = True
        out[r][c].is_frontier = False
    if step.current is None:
        return out
    r, c = step.current
    if step.phase == "visiting":
        out[r][c].is_current = True
        for nr, nc in neighbors(step.current, out):
            cell = out[nr][nc]
            if not (cell.is_wall or cell.is_visited):
                cell.is_frontier = True
    elif step.phase == "path":
        out[r][c].is_path = True
    return out
