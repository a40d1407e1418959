#!/usr/bin/env python3
from typing import Dict, List

from pathviz.core.types import Coord


def reconstruct_path(parent: Dict[Coord, Coord], end: Coord) -> List[Coord]:
    """
    Walk the predecessor map back from `end`.

    Returns the route start-side first, end included, start excluded
    (start is the only node on the route without a predecessor).
    Empty when `end` was never reached.
    """
    path: List[Coord] = []
    cur = end
    while cur in parent:
        path.append(cur)
        cur = parent[cur]
    path.reverse()
    return path
