"""Tests for the query response cache."""

import threading

import pytest

from catalog_search.cache import QueryCache, build_cache_key
from catalog_search.models import SearchOptions, SortSpec


class FakeClock:
    """Manually advanced time source."""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class TestQueryCache:
    """Test suite for QueryCache."""

    @pytest.fixture
    def clock(self):
        return FakeClock()

    @pytest.fixture
    def cache(self, clock):
        return QueryCache(max_entries=3, ttl_seconds=10.0, clock=clock)

    def test_put_and_get_returns_same_object(self, cache):
        value = {"results": []}
        cache.put("k", value)
        assert cache.get("k") is value

    def test_hit_and_miss_counters(self, cache):
        cache.put("k", 1)
        cache.get("k")
        cache.get("missing")

        assert cache.hits == 1
        assert cache.misses == 1
        assert cache.get_stats()["hit_rate"] == 0.5

    def test_entry_valid_until_ttl(self, cache, clock):
        cache.put("k", 1)
        clock.advance(9.999)
        assert cache.get("k") == 1

    def test_entry_expires_at_ttl(self, cache, clock):
        cache.put("k", 1)
        clock.advance(10.0)

        assert cache.get("k") is None
        # Stale entries stay until purged.
        assert cache.size == 1

    def test_purge_expired(self, cache, clock):
        cache.put("old", 1)
        clock.advance(6)
        cache.put("new", 2)
        clock.advance(4)

        assert cache.purge_expired() == 1
        assert cache.size == 1
        assert cache.get("new") == 2

    def test_purge_with_nothing_expired(self, cache):
        cache.put("k", 1)
        assert cache.purge_expired() == 0

    def test_evicts_oldest_at_capacity(self, cache):
        for key in ("a", "b", "c", "d"):
            cache.put(key, key)

        assert cache.size == 3
        assert cache.get("a") is None
        assert cache.get("d") == "d"
        assert cache.get_stats()["evictions"] == 1

    def test_overwrite_at_capacity_evicts_nothing(self, cache):
        for key in ("a", "b", "c"):
            cache.put(key, key)
        cache.put("a", "A")

        assert cache.size == 3
        assert cache.get("a") == "A"
        assert cache.get("b") == "b"

    def test_overwritten_entry_becomes_newest(self, cache):
        for key in ("a", "b", "c"):
            cache.put(key, key)
        cache.put("a", "A")
        cache.put("d", "d")

        assert cache.get("b") is None
        assert cache.get("a") == "A"

    def test_overwrite_refreshes_age(self, cache, clock):
        cache.put("k", 1)
        clock.advance(8)
        cache.put("k", 2)
        clock.advance(8)
        assert cache.get("k") == 2

    def test_invalidate_all(self, cache):
        cache.put("a", 1)
        cache.put("b", 2)
        cache.invalidate_all()

        assert cache.size == 0
        assert cache.get("a") is None

    def test_concurrent_puts_respect_capacity(self):
        cache = QueryCache(max_entries=50, ttl_seconds=60)

        def writer(offset):
            for i in range(200):
                cache.put(f"{offset}-{i}", i)
                cache.get(f"{offset}-{i}")

        threads = [threading.Thread(target=writer, args=(n,)) for n in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert cache.size == 50


class TestBuildCacheKey:
    """Test canonical cache keys."""

    def test_default_options_equivalent(self):
        assert build_cache_key("bolo") == build_cache_key("bolo", {})
        assert build_cache_key("bolo", None) == build_cache_key("bolo", SearchOptions())
        assert build_cache_key("bolo", {"page": 1}) == build_cache_key("bolo")

    def test_filter_order_irrelevant(self):
        first = build_cache_key("bolo", {"filters": {"a": 1, "b": {"min": 2, "max": 3}}})
        second = build_cache_key("bolo", {"filters": {"b": {"max": 3, "min": 2}, "a": 1}})
        assert first == second

    def test_sort_direction_normalized(self):
        upper = build_cache_key("bolo", {"sort": {"field": "preco", "direction": "DESC"}})
        model = build_cache_key("bolo", SearchOptions(sort=SortSpec(field="preco", direction="desc")))
        assert upper == model

    def test_different_inputs_differ(self):
        assert build_cache_key("bolo") != build_cache_key("torta")
        assert build_cache_key("bolo", {"page": 2}) != build_cache_key("bolo")
        assert build_cache_key("bolo", {"page_size": 5}) != build_cache_key("bolo")
