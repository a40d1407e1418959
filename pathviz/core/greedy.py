#!/usr/bin/env python3
from typing import Dict, List, Set

from pathviz.core.grid import is_searchable, is_wall, manhattan, neighbors
from pathviz.core.paths import reconstruct_path
from pathviz.core.pqueue import PriorityQueue
from pathviz.core.types import Coord, Grid, SearchResult


def greedy(grid: Grid, start: Coord, end: Coord) -> SearchResult:
    """
    Greedy best-first search: priority is the Manhattan distance to `end` only.

    Ignores distance travelled, so the route can be far from shortest. Every
    open neighbor's parent is overwritten by the node that saw it last.
    """
    if not is_searchable(grid, start, end):
        return SearchResult()

    parent: Dict[Coord, Coord] = {}
    closed_set: Set[Coord] = set()
    visited_in_order: List[Coord] = []

    open_pq = PriorityQueue()
    open_pq.enqueue(start, 0)

    while not open_pq.is_empty():
        u = open_pq.dequeue().coord

        if u == end:
            visited_in_order.append(u)
            break

        closed_set.add(u)
        visited_in_order.append(u)

        for v in neighbors(u, grid):
            if v in closed_set or is_wall(grid, v):
                continue
            parent[v] = u
            if not open_pq.has_node(v):
                open_pq.enqueue(v, manhattan(v, end))

    return SearchResult(visited_in_order, reconstruct_path(parent, end))
