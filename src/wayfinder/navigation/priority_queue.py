"""Binary-heap priority queue for search frontiers."""

import heapq
import itertools
from typing import Generic, TypeVar

T = TypeVar("T")


class PriorityQueue(Generic[T]):
    """Min-priority queue with insertion-order tie-breaking.

    Entries are never updated in place. A caller that finds a better
    priority for an item pushes it again and skips the stale entry when it
    comes out.

    Examples:
        >>> queue = PriorityQueue()
        >>> queue.push("gate", 2.0)
        >>> queue.push("lounge", 1.0)
        >>> queue.pop()
        ('lounge', 1.0)
    """

    def __init__(self) -> None:
        # (priority, sequence, item)
        self._heap: list[tuple[float, int, T]] = []
        self._counter = itertools.count()

    def push(self, item: T, priority: float) -> None:
        """Add an item with the given priority."""
        heapq.heappush(self._heap, (priority, next(self._counter), item))

    def pop(self) -> tuple[T, float]:
        """Remove and return the lowest-priority item and its priority.

        Raises:
            IndexError: If the queue is empty.
        """
        if not self._heap:
            raise IndexError("pop from an empty priority queue")
        priority, _, item = heapq.heappop(self._heap)
        return item, priority

    def peek(self) -> tuple[T, float]:
        """Return the lowest-priority item without removing it.

        Raises:
            IndexError: If the queue is empty.
        """
        if not self._heap:
            raise IndexError("peek at an empty priority queue")
        priority, _, item = self._heap[0]
        return item, priority

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)
