#!/usr/bin/env python3
from typing import Dict, List, Set

from pathviz.core.grid import is_searchable, is_wall, neighbors
from pathviz.core.paths import reconstruct_path
from pathviz.core.types import Coord, Grid, SearchResult


def dfs(grid: Grid, start: Coord, end: Coord) -> SearchResult:
    """Depth-first search (LIFO stack). Finds a route, not necessarily a short one."""
    if not is_searchable(grid, start, end):
        return SearchResult()

    stack: List[Coord] = [start]
    seen: Set[Coord] = {start}
    parent: Dict[Coord, Coord] = {}
    visited_in_order: List[Coord] = []

    while stack:
        u = stack.pop()
        visited_in_order.append(u)
        if u == end:
            break

        # the last neighbor pushed (right) is explored first
        for v in neighbors(u, grid):
            if v not in seen and not is_wall(grid, v):
                seen.add(v)
                parent[v] = u
                stack.append(v)

    return SearchResult(visited_in_order, reconstruct_path(parent, end))
