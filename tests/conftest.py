"""
Pytest configuration and shared fixtures.

Grids in tests are drawn as ASCII: '#' wall, 'S' start, 'E' end, '.' open.
"""

from pathlib import Path
from typing import List, Optional, Tuple

import pytest

from pathviz.core.grid import create_grid
from pathviz.core.registry import ALGORITHMS
from pathviz.core.types import Coord, Grid


def parse_grid(rows: List[str]) -> Tuple[Grid, Optional[Coord], Optional[Coord]]:
    grid = create_grid(len(rows), len(rows[0]))
    start = end = None
    for r, line in enumerate(rows):
        for c, ch in enumerate(line):
            cell = grid[r][c]
            if ch == "#":
                cell.is_wall = True
            elif ch == "S":
                cell.is_start = True
                start = (r, c)
            elif ch == "E":
                cell.is_end = True
                end = (r, c)
    return grid, start, end


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).resolve().parent.parent


@pytest.fixture
def open_5x5():
    """5x5 grid with no walls, start (0,0), end (4,4)."""
    return parse_grid([
        "S....",
        ".....",
        ".....",
        ".....",
        "....E",
    ])


@pytest.fixture
def walled_off():
    """3x3 grid whose middle row is solid wall between start and end."""
    return parse_grid([
        ".S.",
        "###",
        ".E.",
    ])


@pytest.fixture(params=list(ALGORITHMS))
def algo_name(request) -> str:
    """Each registered algorithm name in turn."""
    return request.param
