"""Priority queue with decrease-key, used by the routing searches."""

from __future__ import annotations

import heapq
import itertools
from dataclasses import dataclass
from functools import total_ordering
from typing import Dict, List


@total_ordering
@dataclass(frozen=True)
class HeapNode:
    """A node index with its priority; ordered by value, then index."""

    index: int
    value: float

    def __lt__(self, other: "HeapNode") -> bool:
        return (self.value, self.index) < (other.value, other.index)


class Heap:
    """Min-heap of node indices supporting decrease_key."""

    def __init__(self) -> None:
        self._entries: List[list] = []
        self._handles: Dict[int, list] = {}
        self._counter = itertools.count()
        self._size = 0

    def push(self, index: int, value: float) -> None:
        """Push a node with the given value."""
        entry = [value, index, next(self._counter), True]
        heapq.heappush(self._entries, entry)
        self._handles.setdefault(index, entry)
        self._size += 1

    def _prune(self) -> None:
        while self._entries and not self._entries[0][3]:
            heapq.heappop(self._entries)

    def top(self) -> HeapNode:
        """Return the node with the smallest value without removing it."""
        self._prune()
        if not self._entries:
            raise IndexError("top of an empty heap")
        value, index, _, _ = self._entries[0]
        return HeapNode(index, value)

    def pop(self) -> HeapNode:
        """Remove and return the node with the smallest value."""
        self._prune()
        if not self._entries:
            raise IndexError("pop from an empty heap")
        value, index, _, _ = heapq.heappop(self._entries)
        self._handles.pop(index, None)
        self._size -= 1
        return HeapNode(index, value)

    def decrease_key(self, index: int, value: float) -> None:
        """Give a node in the heap a new value."""
        try:
            old = self._handles[index]
        except KeyError:
            raise KeyError(f"node {index} is not in the heap") from None
        old[3] = False
        entry = [value, index, next(self._counter), True]
        heapq.heappush(self._entries, entry)
        self._handles[index] = entry

    def __len__(self) -> int:
        return self._size

    def __contains__(self, index: object) -> bool:
        return index in self._handles