"""Query result caching."""

from .query_cache import CacheEntry, QueryCache, build_cache_key

__all__ = ["CacheEntry", "QueryCache", "build_cache_key"]
