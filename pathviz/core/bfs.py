#!/usr/bin/env python3
from collections import deque
from typing import Deque, Dict, List, Set

from pathviz.core.grid import is_searchable, is_wall, neighbors
from pathviz.core.paths import reconstruct_path
from pathviz.core.types import Coord, Grid, SearchResult


def bfs(grid: Grid, start: Coord, end: Coord) -> SearchResult:
    """
    Breadth-first search with a FIFO frontier.

    Cells are marked visited when discovered, not when dequeued, so each is
    enqueued at most once and the first route to `end` is a shortest one.
    """
    if not is_searchable(grid, start, end):
        return SearchResult()

    queue: Deque[Coord] = deque([start])
    seen: Set[Coord] = {start}
    parent: Dict[Coord, Coord] = {}
    visited_in_order: List[Coord] = []

    while queue:
        u = queue.popleft()
        visited_in_order.append(u)
        if u == end:
            break

        for v in neighbors(u, grid):
            if v not in seen and not is_wall(grid, v):
                seen.add(v)
                parent[v] = u
                queue.append(v)

    return SearchResult(visited_in_order, reconstruct_path(parent, end))
