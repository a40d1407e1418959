#!/usr/bin/env python3
"""
A* on a uniform-cost 4-connected grid.

Heuristic:
- Manhattan distance to the end; admissible and consistent with unit steps.

Queue key is f = g + h. Ties fall back to queue order (see PriorityQueue).

Known gap: when a neighbor that is already queued gets a better g, its
parent/g/f are updated but its queued priority is NOT. The stale entry is
popped at its old f, so on some layouts the returned path is not the shortest.
"""

from math import inf
from typing import Dict, List, Set

from pathviz.core.grid import is_searchable, is_wall, manhattan, neighbors
from pathviz.core.paths import reconstruct_path
from pathviz.core.pqueue import PriorityQueue
from pathviz.core.types import Coord, Grid, SearchResult


def astar(grid: Grid, start: Coord, end: Coord) -> SearchResult:
    if not is_searchable(grid, start, end):
        return SearchResult()

    g: Dict[Coord, float] = {start: 0}
    f: Dict[Coord, float] = {start: manhattan(start, end)}
    parent: Dict[Coord, Coord] = {}
    closed_set: Set[Coord] = set()
    visited_in_order: List[Coord] = []

    open_pq = PriorityQueue()
    open_pq.enqueue(start, f[start])

    while not open_pq.is_empty():
        u = open_pq.dequeue().coord

        # Stop on pop, not on push; the end is never expanded
        if u == end:
            visited_in_order.append(u)
            break

        closed_set.add(u)
        visited_in_order.append(u)

        for v in neighbors(u, grid):
            if v in closed_set or is_wall(grid, v):
                continue
            tentative = g[u] + 1
            if tentative < g.get(v, inf):
                parent[v] = u
                g[v] = tentative
                f[v] = tentative + manhattan(v, end)
                if not open_pq.has_node(v):
                    open_pq.enqueue(v, f[v])

    return SearchResult(visited_in_order, reconstruct_path(parent, end))
