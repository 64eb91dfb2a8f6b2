"""Priority queues used as the Dijkstra frontier."""

from __future__ import annotations

import heapq
import itertools
from typing import Dict, Generic, Hashable, List, Optional, Protocol, Tuple, TypeVar

from .exceptions import AlgorithmError

Float = float
T = TypeVar("T", bound=Hashable)


class FrontierProtocol(Protocol[T]):
    """Surface of the frontier structures consumed by the solver."""

    def offer(self, element: T, priority: Float) -> None:
        """Queue ``element`` with ``priority``."""
        ...

    def poll(self) -> Optional[T]:
        """Remove and return the minimum-priority element."""
        ...

    def change_priority(self, element: T, priority: Float) -> None:
        """Re-rank a queued element."""
        ...

    def is_empty(self) -> bool:
        """Return ``True`` when nothing is queued."""
        ...


def _parent(i: int) -> int:
    return (i - 1) // 2


class PriorityQueue(Generic[T]):
    """Binary min-heap with an element -> slot index for O(log n) decrease-key.

    The heap is a dense list of ``[element, priority]`` entries. ``_pos`` maps
    each queued element to its slot; :meth:`_swap` is the only place entries
    move, and it updates both structures at once.

    Each element may be queued at most once. Ties between equal priorities
    are resolved by heap position, not insertion order.

    Examples:
        ```python
        >>> pq = PriorityQueue()
        >>> pq.offer("low", 5)
        >>> pq.offer("high", 1)
        >>> pq.change_priority("low", 0)
        >>> pq.poll()
        'low'
        ```
    """

    def __init__(self) -> None:
        self._heap: List[List] = []
        self._pos: Dict[T, int] = {}

    # ---- internals ----------------------------------------------------

    def _swap(self, i: int, j: int) -> None:
        heap = self._heap
        heap[i], heap[j] = heap[j], heap[i]
        self._pos[heap[i][0]] = i
        self._pos[heap[j][0]] = j

    def _sift_up(self, i: int) -> None:
        heap = self._heap
        while i > 0:
            p = _parent(i)
            if heap[p][1] <= heap[i][1]:
                break
            self._swap(p, i)
            i = p

    def _sift_down(self, i: int) -> None:
        heap = self._heap
        n = len(heap)
        while True:
            left = 2 * i + 1
            if left >= n:
                break
            right = left + 1
            child = right if right < n and heap[right][1] < heap[left][1] else left
            if heap[child][1] >= heap[i][1]:
                break
            self._swap(i, child)
            i = child

    # ---- public API ---------------------------------------------------

    def offer(self, element: T, priority: Float) -> None:
        """Insert ``element`` with ``priority``.

        Raises:
            ValueError: If ``element`` is already queued; use
                :meth:`change_priority` instead.
        """
        if element in self._pos:
            raise ValueError(f"{element!r} is already queued")
        self._heap.append([element, priority])
        self._pos[element] = len(self._heap) - 1
        self._sift_up(len(self._heap) - 1)

    def poll(self) -> Optional[T]:
        """Remove and return the minimum-priority element, ``None`` if empty."""
        if not self._heap:
            return None
        self._swap(0, len(self._heap) - 1)
        element, _ = self._heap.pop()
        del self._pos[element]
        if self._heap:
            self._sift_down(0)
        return element

    def peek(self) -> Optional[T]:
        """Return the minimum-priority element without removing it."""
        return self._heap[0][0] if self._heap else None

    def change_priority(self, element: T, priority: Float) -> None:
        """Set a queued element's priority and restore heap order.

        Works for both increases and decreases.

        Raises:
            KeyError: If ``element`` is not queued.
        """
        i = self._pos[element]
        self._heap[i][1] = priority
        if i > 0 and priority < self._heap[_parent(i)][1]:
            self._sift_up(i)
        else:
            self._sift_down(i)

    def priority_of(self, element: T) -> Float:
        return self._heap[self._pos[element]][1]

    def is_empty(self) -> bool:
        return not self._heap

    def __len__(self) -> int:
        return len(self._heap)

    def __contains__(self, element: object) -> bool:
        return element in self._pos

    def values(self) -> List[T]:
        """Return queued elements in heap (array) order, not priority order."""
        return [e for e, _ in self._heap]

    def check_invariants(self) -> None:
        """Verify the position index and the heap property.

        Raises:
            AlgorithmError: If any slot recorded in the index is wrong or a
                parent outranks a child.
        """
        heap = self._heap
        if len(self._pos) != len(heap):
            raise AlgorithmError(
                f"position index has {len(self._pos)} entries for {len(heap)} slots"
            )
        for i, (element, priority) in enumerate(heap):
            if self._pos.get(element) != i:
                raise AlgorithmError(
                    f"{element!r} recorded at {self._pos.get(element)} but stored at {i}"
                )
            if i > 0 and heap[_parent(i)][1] > priority:
                raise AlgorithmError(f"heap property violated at slot {i}")


class LazyPriorityQueue(Generic[T]):
    """``heapq`` frontier that re-pushes on priority change and skips stale entries.

    Cheaper per operation than :class:`PriorityQueue` but the heap can hold
    several entries per element; only the one matching the latest priority is
    live.
    """

    def __init__(self) -> None:
        self._heap: List[Tuple[Float, int, T]] = []
        self._best: Dict[T, Float] = {}
        self._counter = itertools.count()

    def _push(self, element: T, priority: Float) -> None:
        self._best[element] = priority
        heapq.heappush(self._heap, (priority, next(self._counter), element))

    def _drop_stale(self) -> None:
        heap = self._heap
        while heap:
            priority, _, element = heap[0]
            if self._best.get(element) == priority:
                return
            heapq.heappop(heap)

    def offer(self, element: T, priority: Float) -> None:
        if element in self._best:
            raise ValueError(f"{element!r} is already queued")
        self._push(element, priority)

    def poll(self) -> Optional[T]:
        self._drop_stale()
        if not self._heap:
            return None
        _, _, element = heapq.heappop(self._heap)
        del self._best[element]
        return element

    def peek(self) -> Optional[T]:
        self._drop_stale()
        return self._heap[0][2] if self._heap else None

    def change_priority(self, element: T, priority: Float) -> None:
        if element not in self._best:
            raise KeyError(element)
        self._push(element, priority)

    def is_empty(self) -> bool:
        return not self._best

    def __len__(self) -> int:
        return len(self._best)

    def __contains__(self, element: object) -> bool:
        return element in self._best


__all__ = ["FrontierProtocol", "LazyPriorityQueue", "PriorityQueue"]
