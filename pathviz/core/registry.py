"""
Algorithm registry.

Maps the names used by the viewer and CLI to the search functions, and
provides a timed runner that also produces the statistics panel numbers.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Dict, Tuple

from pathviz.core.astar import astar
from pathviz.core.bfs import bfs
from pathviz.core.dfs import dfs
from pathviz.core.dijkstra import dijkstra
from pathviz.core.greedy import greedy
from pathviz.core.types import Coord, Grid, RunStats, SearchResult

logger = logging.getLogger(__name__)

SearchFn = Callable[[Grid, Coord, Coord], SearchResult]

ALGORITHMS: Dict[str, SearchFn] = {
    "dijkstra": dijkstra,
    "bfs": bfs,
    "dfs": dfs,
    "astar": astar,
    "greedy": greedy,
}

DISPLAY_NAMES: Dict[str, str] = {
    "dijkstra": "Dijkstra",
    "bfs": "BFS",
    "dfs": "DFS",
    "astar": "A*",
    "greedy": "Greedy Best-First",
}


def algorithm_key(name: str) -> str:
    """Registry key for `name` (case and surrounding space ignored). ValueError if unknown."""
    key = name.strip().lower()
    if key not in ALGORITHMS:
        available = ", ".join(ALGORITHMS.keys())
        raise ValueError(f"Unknown algorithm '{name}'. Available: {available}")
    return key


def get_algorithm(name: str) -> SearchFn:
    """
    Get a search function by name.

    Args:
        name: Algorithm identifier (dijkstra, bfs, dfs, astar, greedy), any case

    Returns:
        The search function

    Raises:
        ValueError: If the name is unknown
    """
    return ALGORITHMS[algorithm_key(name)]


def run_algorithm(name: str, grid: Grid, start: Coord, end: Coord) -> Tuple[SearchResult, RunStats]:
    """Run one search and time it. Timing covers the search only, not playback."""
    key = algorithm_key(name)
    search = ALGORITHMS[key]

    t0 = time.perf_counter()
    result = search(grid, start, end)
    elapsed_ms = (time.perf_counter() - t0) * 1000.0

    stats = RunStats(
        algorithm=DISPLAY_NAMES[key],
        visited_nodes=len(result.visited_in_order),
        path_length=len(result.shortest_path),
        execution_ms=elapsed_ms,
    )
    if stats.path_found:
        logger.info(
            f"{stats.algorithm}: visited {stats.visited_nodes}, "
            f"path {stats.path_length} ({elapsed_ms:.2f} ms)"
        )
    else:
        logger.info(
            f"{stats.algorithm}: no path from {start} to {end} "
            f"after visiting {stats.visited_nodes} cells"
        )
    return result, stats
