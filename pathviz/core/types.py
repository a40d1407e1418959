#!/usr/bin/env python3
from dataclasses import dataclass, field
from typing import List, Tuple, Optional, NamedTuple

Coord = Tuple[int, int]  # (row, col)


class EmptyQueueError(IndexError):
    """Raised by PriorityQueue.dequeue() on an empty queue."""


@dataclass
class Cell:
    row: int
    col: int
    is_wall: bool = False
    is_start: bool = False
    is_end: bool = False
    # render flags, owned by the UI; algorithms never read these
    is_visited: bool = False
    is_path: bool = False
    is_frontier: bool = False
    is_current: bool = False

    @property
    def coord(self) -> Coord:
        return (self.row, self.col)


Grid = List[List[Cell]]  # [row][col]


class QueueEntry(NamedTuple):
    coord: Coord
    priority: float


@dataclass
class SearchResult:
    visited_in_order: List[Coord] = field(default_factory=list)
    shortest_path: List[Coord] = field(default_factory=list)
    distances: Optional[List[List[float]]] = None  # Dijkstra only

    def is_empty(self) -> bool:
        return not self.visited_in_order and not self.shortest_path


@dataclass
class RunStats:
    algorithm: str
    visited_nodes: int = 0
    path_length: int = 0
    execution_ms: float = 0.0

    @property
    def path_found(self) -> bool:
        return self.path_length > 0
