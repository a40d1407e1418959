#!/usr/bin/env python3
"""
Dijkstra on a uniform-cost 4-connected grid (every step costs 1).

Lazy deletion: a coordinate popped after it was finalized is skipped.
Returns the per-cell distance table alongside the visit order and path.
"""

import logging
from math import inf
from typing import Dict, List, Set

from pathviz.core.grid import is_searchable, is_wall, neighbors
from pathviz.core.paths import reconstruct_path
from pathviz.core.pqueue import PriorityQueue
from pathviz.core.types import Coord, Grid, SearchResult

logger = logging.getLogger(__name__)


def dijkstra(grid: Grid, start: Coord, end: Coord) -> SearchResult:
    if not is_searchable(grid, start, end):
        return SearchResult(distances=[])

    rows, cols = len(grid), len(grid[0])
    dist: List[List[float]] = [[inf] * cols for _ in range(rows)]
    parent: Dict[Coord, Coord] = {}
    finalized: Set[Coord] = set()
    visited_in_order: List[Coord] = []

    open_pq = PriorityQueue()
    dist[start[0]][start[1]] = 0
    open_pq.enqueue(start, 0)

    while not open_pq.is_empty():
        u = open_pq.dequeue().coord
        if u in finalized:
            continue

        finalized.add(u)
        visited_in_order.append(u)
        if u == end:
            break

        # Relax neighbors
        g_u = dist[u[0]][u[1]]
        for v in neighbors(u, grid):
            if v in finalized or is_wall(grid, v):
                continue
            alt = g_u + 1
            if alt < dist[v[0]][v[1]]:
                dist[v[0]][v[1]] = alt
                parent[v] = u
                if open_pq.has_node(v):
                    open_pq.update_priority(v, alt)
                else:
                    open_pq.enqueue(v, alt)

    path = reconstruct_path(parent, end)
    if not path:
        logger.debug(f"Dijkstra: end {end} unreachable from {start}")
    return SearchResult(visited_in_order, path, dist)
