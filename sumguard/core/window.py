from __future__ import annotations

from bisect import bisect_left, insort
from collections import Counter, deque
from typing import Deque, Generic, List, Optional

from .errors import WindowInvariantError
from .pairsum import PairSumStrategy, T, two_pointer_has_pair_sum


class PairSumWindow(Generic[T]):
    """Bounded window kept in arrival order and in sorted order at the same time.

    The arrival view decides what to evict next; the sorted view makes the
    pair-sum query linear instead of quadratic. Both hold the same multiset
    of values after every public call.

    The sorted view is a flat list, so insert and evict are O(n). For the
    window sizes this targets that beats a balanced tree.
    """

    def __init__(self, capacity: int, strategy: Optional[PairSumStrategy] = None) -> None:
        if capacity < 0:
            raise ValueError("capacity must be >= 0")
        self._capacity: int = capacity
        self._arrival: Deque[T] = deque()
        self._sorted: List[T] = []
        self._strategy: PairSumStrategy = strategy or two_pointer_has_pair_sum

    @property
    def capacity(self) -> int:
        return self._capacity

    def insert(self, value: T) -> None:
        # Capacity is the caller's job: evict first when full.
        self._arrival.append(value)
        insort(self._sorted, value)

    def evict_oldest(self) -> T:
        """Remove and return the oldest value.

        One equal value is removed from the sorted view. With duplicates it may
        not be the same logical occurrence, which keeps the multisets equal
        all the same.

        Raises:
            IndexError: if the window is empty.
            WindowInvariantError: if the sorted view has no matching value.
        """
        oldest = self._arrival.popleft()
        idx = bisect_left(self._sorted, oldest)
        if idx == len(self._sorted) or self._sorted[idx] != oldest:
            raise WindowInvariantError(
                f"evicted value {oldest} missing from sorted view"
            )
        del self._sorted[idx]
        return oldest

    def size(self) -> int:
        return len(self._arrival)

    def __len__(self) -> int:
        return len(self._arrival)

    def is_full(self) -> bool:
        return len(self._arrival) >= self._capacity

    def has_pair_sum(self, target: T) -> bool:
        return self._strategy(self._sorted, target)

    def snapshot(self) -> List[T]:
        """Copy of the values in arrival order, oldest first."""
        return list(self._arrival)

    def sorted_snapshot(self) -> List[T]:
        return list(self._sorted)

    def check_consistency(self) -> bool:
        """Whether both views hold the same multiset. Diagnostic only."""
        return Counter(self._arrival) == Counter(self._sorted)

    def __repr__(self) -> str:
        return f"PairSumWindow(capacity={self._capacity}, values={list(self._arrival)!r})"
