#!/usr/bin/env python3
"""
Grid model helpers: bounds, 4-neighborhood, heuristic, and the board
utilities the viewer uses (create, random walls, clear, edit, locate).

Every function that "changes" a grid returns a new grid of copied cells and
leaves its argument untouched, so a snapshot handed to a search stays valid.
"""

import json
import logging
import random
from dataclasses import replace
from pathlib import Path
from typing import Callable, List, Optional, Union

from pathviz.core.types import Cell, Coord, Grid

logger = logging.getLogger(__name__)

# up, down, left, right; order drives tie-breaking in every algorithm
DIRECTIONS = ((-1, 0), (1, 0), (0, -1), (0, 1))


# -------------------- shape & neighborhood --------------------

def is_valid_grid(grid: Optional[Grid]) -> bool:
    """Non-empty and rectangular."""
    if not grid or not grid[0]:
        return False
    width = len(grid[0])
    return all(len(row) == width for row in grid)


def in_bounds(c: Coord, grid: Grid) -> bool:
    r, col = c
    return 0 <= r < len(grid) and 0 <= col < len(grid[0])


def is_searchable(grid: Optional[Grid], start: Optional[Coord], end: Optional[Coord]) -> bool:
    """Whether a search request is well-formed; algorithms return an empty result otherwise."""
    if not is_valid_grid(grid) or start is None or end is None:
        return False
    return in_bounds(start, grid) and in_bounds(end, grid)


def neighbors(c: Coord, grid: Grid) -> List[Coord]:
    """In-bounds 4-neighbors in [up, down, left, right] order. Walls included."""
    r, col = c
    out: List[Coord] = []
    for dr, dc in DIRECTIONS:
        n = (r + dr, col + dc)
        if in_bounds(n, grid):
            out.append(n)
    return out


def is_wall(grid: Grid, c: Coord) -> bool:
    r, col = c
    return grid[r][col].is_wall


def manhattan(a: Coord, b: Coord) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


# -------------------- construction --------------------

def create_grid(rows: int, cols: int) -> Grid:
    return [[Cell(r, c) for c in range(cols)] for r in range(rows)]


def new_board(rows: int, cols: int) -> Grid:
    """Fresh grid with start at (rows//2, cols//4) and end at (rows//2, 3*cols//4)."""
    grid = create_grid(rows, cols)
    grid[rows // 2][cols // 4].is_start = True
    grid[rows // 2][(3 * cols) // 4].is_end = True
    return grid


def _map_cells(grid: Grid, fn: Callable[[Cell], Cell]) -> Grid:
    return [[fn(cell) for cell in row] for row in grid]


def generate_random_walls(grid: Grid, wall_probability: float = 0.3,
                          rng: Optional[random.Random] = None) -> Grid:
    """Each cell becomes a wall with probability p; start/end are cleared afterwards."""
    rng = rng or random.Random()
    new_grid = _map_cells(grid, lambda cell: replace(cell, is_wall=rng.random() < wall_probability))

    for found in (find_start(new_grid), find_end(new_grid)):
        if found is not None:
            r, c = found
            new_grid[r][c].is_wall = False
    return new_grid


def clear_grid(grid: Grid) -> Grid:
    """Drop every render flag; walls and markers stay."""
    return _map_cells(grid, lambda cell: replace(
        cell, is_visited=False, is_path=False, is_frontier=False, is_current=False))


def clear_walls(grid: Grid) -> Grid:
    return _map_cells(grid, lambda cell: replace(cell, is_wall=False))


# -------------------- editing --------------------

def toggle_wall(grid: Grid, c: Coord) -> Grid:
    if not in_bounds(c, grid):
        return grid
    r, col = c
    target = grid[r][col]
    if target.is_start or target.is_end:
        return grid
    return _map_cells(grid, lambda cell: replace(cell, is_wall=not cell.is_wall)
                      if cell is target else replace(cell))


def move_start(grid: Grid, c: Coord) -> Grid:
    """Relocate the start marker. Ignored onto a wall, the end, or out of bounds."""
    if not in_bounds(c, grid):
        return grid
    r, col = c
    if grid[r][col].is_end or grid[r][col].is_wall:
        return grid
    return _map_cells(grid, lambda cell: replace(cell, is_start=cell.coord == c))


def move_end(grid: Grid, c: Coord) -> Grid:
    """Relocate the end marker. Ignored onto a wall, the start, or out of bounds."""
    if not in_bounds(c, grid):
        return grid
    r, col = c
    if grid[r][col].is_start or grid[r][col].is_wall:
        return grid
    return _map_cells(grid, lambda cell: replace(cell, is_end=cell.coord == c))


# -------------------- lookup --------------------

def find_start(grid: Grid) -> Optional[Coord]:
    for row in grid:
        for cell in row:
            if cell.is_start:
                return cell.coord
    return None


def find_end(grid: Grid) -> Optional[Coord]:
    for row in grid:
        for cell in row:
            if cell.is_end:
                return cell.coord
    return None


# -------------------- loader --------------------

def load_map(path: Union[str, Path]) -> Grid:
    """
    Load a JSON demo map:
        {"rows": R, "cols": C, "cells": [[0|1, ...], ...], "start": [r, c], "end": [r, c]}
    where 1 marks a wall. Raises ValueError on a malformed map.
    """
    with open(path, "r") as f:
        data = json.load(f)
    try:
        rows = int(data["rows"])
        cols = int(data["cols"])
        cells = data["cells"]
        start = (int(data["start"][0]), int(data["start"][1]))
        end = (int(data["end"][0]), int(data["end"][1]))
    except (KeyError, IndexError, TypeError, ValueError) as ex:
        raise ValueError(f"{path}: malformed map ({ex})") from ex

    if rows < 1 or cols < 1:
        raise ValueError(f"{path}: rows/cols must be positive")
    if (not isinstance(cells, list) or len(cells) != rows
            or not all(isinstance(r, list) and len(r) == cols for r in cells)):
        raise ValueError(f"{path}: cells size mismatch")

    grid = create_grid(rows, cols)
    for r in range(rows):
        for c in range(cols):
            grid[r][c].is_wall = cells[r][c] == 1
    for label, (r, c) in (("start", start), ("end", end)):
        if not in_bounds((r, c), grid):
            raise ValueError(f"{path}: {label} out of bounds")
        if grid[r][c].is_wall:
            raise ValueError(f"{path}: {label} sits on a wall")
    if start == end:
        raise ValueError(f"{path}: start and end coincide")

    grid[start[0]][start[1]].is_start = True
    grid[end[0]][end[1]].is_end = True
    logger.debug(f"Loaded map {path} ({rows}x{cols})")
    return grid
