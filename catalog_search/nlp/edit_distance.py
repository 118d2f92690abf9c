"""Bounded Levenshtein distance with a size-capped memo.

The calculator is tuned for suggestion lookups where only distances up to a
small maximum matter:
- pairs whose lengths differ by more than the maximum short-circuit to
  ``max_distance + 1`` without building the DP table
- short strings (<= 10 characters) drop their common prefix and suffix
  before the DP runs
- the DP keeps two rows instead of the full matrix
- distances within the maximum are memoised in a ``BoundedMemo``
"""

import threading
from collections import deque
from typing import Deque, Dict, Generic, Hashable, Optional, Tuple, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

# Strings up to this length get common prefix/suffix reduction.
SHORT_STRING_LENGTH = 10


class BoundedMemo(Generic[K, V]):
    """Insertion-ordered memo that trims its oldest entries when full.

    Insertion order lives in an explicit ring of keys next to the value map.
    Once the size exceeds ``capacity`` the oldest ``trim_ratio`` share of the
    entries is dropped in one go (FIFO, not LRU).
    """

    def __init__(self, capacity: int = 1000, trim_ratio: float = 0.2):
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        self.trim_ratio = trim_ratio
        self._values: Dict[K, V] = {}
        self._order: Deque[K] = deque()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, key: K) -> bool:
        return key in self._values

    def get(self, key: K) -> Optional[V]:
        return self._values.get(key)

    def put(self, key: K, value: V) -> None:
        with self._lock:
            if key not in self._values:
                self._order.append(key)
            self._values[key] = value

            if len(self._values) > self.capacity:
                to_remove = max(1, int(len(self._values) * self.trim_ratio))
                for _ in range(to_remove):
                    oldest = self._order.popleft()
                    self._values.pop(oldest, None)

    def clear(self) -> None:
        with self._lock:
            self._values.clear()
            self._order.clear()


class EditDistanceCalculator:
    """Levenshtein distance that stops caring beyond ``max_distance``."""

    def __init__(self, max_distance: int = 2, memo_size: int = 1000):
        self.max_distance = max_distance
        self.memo: BoundedMemo[Tuple[str, str], int] = BoundedMemo(capacity=memo_size)

    def distance(self, a: str, b: str) -> int:
        """Edit distance between two strings.

        Exact for pairs whose length difference is within ``max_distance``;
        otherwise ``max_distance + 1``.
        """
        if a == b:
            return 0
        if not a:
            return len(b)
        if not b:
            return len(a)

        if len(a) > len(b):
            a, b = b, a

        key = (a, b)
        cached = self.memo.get(key)
        if cached is not None:
            return cached

        if len(b) - len(a) > self.max_distance:
            return self.max_distance + 1

        if len(a) <= SHORT_STRING_LENGTH:
            a, b = self._strip_common_affixes(a, b)
            if not a:
                result = len(b)
                self._remember(key, result)
                return result

        result = self._two_row_distance(a, b)
        self._remember(key, result)
        return result

    def _remember(self, key: Tuple[str, str], result: int) -> None:
        if result <= self.max_distance:
            self.memo.put(key, result)

    @staticmethod
    def _strip_common_affixes(a: str, b: str) -> Tuple[str, str]:
        """Drop the shared prefix and suffix; ``a`` must be the shorter string.

        One pass suffices: after it the reduced strings differ in their first
        and last characters, so reducing again would remove nothing.
        """
        prefix = 0
        while prefix < len(a) and a[prefix] == b[prefix]:
            prefix += 1

        suffix = 0
        while (suffix < len(a) - prefix
               and a[len(a) - 1 - suffix] == b[len(b) - 1 - suffix]):
            suffix += 1

        return a[prefix:len(a) - suffix], b[prefix:len(b) - suffix]

    @staticmethod
    def _two_row_distance(a: str, b: str) -> int:
        previous_row = list(range(len(b) + 1))
        current_row = [0] * (len(b) + 1)

        for i, c1 in enumerate(a):
            current_row[0] = i + 1
            for j, c2 in enumerate(b):
                cost = 0 if c1 == c2 else 1
                current_row[j + 1] = min(
                    current_row[j] + 1,       # insertion
                    previous_row[j + 1] + 1,  # deletion
                    previous_row[j] + cost    # substitution
                )
            previous_row, current_row = current_row, previous_row

        return previous_row[len(b)]
