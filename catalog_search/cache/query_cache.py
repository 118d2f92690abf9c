"""TTL and size bounded cache for search responses."""

import json
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional, Union

from ..models import SearchOptions


@dataclass
class CacheEntry:
    """Single cached response with its insertion time."""

    value: Any
    inserted_at: float

    def age(self, now: float) -> float:
        return now - self.inserted_at


def build_cache_key(
    query: str,
    options: Union[SearchOptions, Mapping[str, Any], None] = None
) -> str:
    """Canonical key for a query and its options.

    Options are validated first so that equivalent option mappings (different
    key order, omitted defaults) share a key.
    """
    validated = SearchOptions.coerce(options)
    payload = {"q": query, "o": validated.model_dump(mode="json")}
    return json.dumps(payload, sort_keys=True, ensure_ascii=False, default=str)


class QueryCache:
    """Insertion-ordered response cache with time-based expiry.

    At most ``max_entries`` responses are kept; inserting a new key at
    capacity evicts the oldest insertion. Entries whose age reaches
    ``ttl_seconds`` are never returned, but they are only removed by
    ``purge_expired``, eviction or ``invalidate_all``.
    """

    def __init__(
        self,
        max_entries: int = 100,
        ttl_seconds: float = 3600.0,
        clock: Callable[[], float] = time.monotonic
    ):
        self.max_entries = max(1, max_entries)
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: "OrderedDict[str, CacheEntry]" = OrderedDict()
        self._lock = threading.RLock()
        self._stats = {
            'hits': 0,
            'misses': 0,
            'evictions': 0,
        }

    @property
    def size(self) -> int:
        with self._lock:
            return len(self._entries)

    @property
    def hits(self) -> int:
        return self._stats['hits']

    @property
    def misses(self) -> int:
        return self._stats['misses']

    def get(self, key: str) -> Optional[Any]:
        """Return the cached value, or None when absent or expired."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None or entry.age(self._clock()) >= self.ttl_seconds:
                self._stats['misses'] += 1
                return None

            self._stats['hits'] += 1
            return entry.value

    def put(self, key: str, value: Any) -> None:
        """Store a value, evicting the oldest entry if a new key needs room."""
        with self._lock:
            now = self._clock()
            if key in self._entries:
                # Overwrites keep their slot count; the entry becomes the newest.
                del self._entries[key]
            elif len(self._entries) >= self.max_entries:
                self._entries.popitem(last=False)
                self._stats['evictions'] += 1

            self._entries[key] = CacheEntry(value=value, inserted_at=now)

    def invalidate_all(self) -> None:
        with self._lock:
            self._entries.clear()

    def purge_expired(self) -> int:
        """Remove every entry whose age has reached the TTL.

        Returns:
            Number of entries removed
        """
        with self._lock:
            now = self._clock()
            expired = [
                key for key, entry in self._entries.items()
                if entry.age(now) >= self.ttl_seconds
            ]
            for key in expired:
                del self._entries[key]
            return len(expired)

    def get_stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        with self._lock:
            total_requests = self._stats['hits'] + self._stats['misses']
            hit_rate = self._stats['hits'] / total_requests if total_requests > 0 else 0.0

            return {
                'entry_count': len(self._entries),
                'max_entries': self.max_entries,
                'ttl_seconds': self.ttl_seconds,
                'hit_rate': hit_rate,
                'hits': self._stats['hits'],
                'misses': self._stats['misses'],
                'evictions': self._stats['evictions'],
            }
