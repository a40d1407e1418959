#!/usr/bin/env python3
"""
Min-priority queue keyed by grid coordinate.

Backed by heapq with lazy invalidation. Each entry is
[priority, seq, coord, live]; the seq counter makes equal priorities come out
in the same order as a stable re-sort of an insertion-ordered list would:
- enqueue: fresh (largest) seq, so it lands behind its equals.
- update_priority down: re-keyed with a fresh largest seq.
- update_priority up: re-keyed with a seq below every existing one.
"""

import heapq
import itertools
from typing import Dict, List

from pathviz.core.types import Coord, EmptyQueueError, QueueEntry


class PriorityQueue:
    def __init__(self) -> None:
        self._heap: List[list] = []
        self._entries: Dict[Coord, List[list]] = {}  # coord -> live entries
        self._seq_up = itertools.count()
        self._seq_down = itertools.count(-1, -1)
        self._size = 0

    def __len__(self) -> int:
        return self._size

    def is_empty(self) -> bool:
        return self._size == 0

    def enqueue(self, coord: Coord, priority: float) -> None:
        """Insert coord. Duplicates are allowed; check has_node() first if needed."""
        entry = [priority, next(self._seq_up), coord, True]
        heapq.heappush(self._heap, entry)
        self._entries.setdefault(coord, []).append(entry)
        self._size += 1

    def dequeue(self) -> QueueEntry:
        """Remove and return the lowest-priority entry."""
        while self._heap:
            entry = heapq.heappop(self._heap)
            if not entry[3]:
                continue
            self._forget(entry)
            return QueueEntry(entry[2], entry[0])
        raise EmptyQueueError("dequeue from an empty PriorityQueue")

    def has_node(self, coord: Coord) -> bool:
        return coord in self._entries

    def update_priority(self, coord: Coord, new_priority: float) -> None:
        """Re-key the first matching entry (in extraction order). No-op if absent."""
        live = self._entries.get(coord)
        if not live:
            return
        first = min(live, key=lambda e: (e[0], e[1]))
        if new_priority == first[0]:
            return
        seq = next(self._seq_up) if new_priority < first[0] else next(self._seq_down)
        first[3] = False
        entry = [new_priority, seq, coord, True]
        live[live.index(first)] = entry
        heapq.heappush(self._heap, entry)

    def _forget(self, entry: list) -> None:
        coord = entry[2]
        live = self._entries[coord]
        live.remove(entry)
        if not live:
            del self._entries[coord]
        self._size -= 1
