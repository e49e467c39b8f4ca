"""
Query result caching for the SAP engine

This module provides in-memory caching of ancestral path results with:
- LRU (Least Recently Used) eviction policy
- Thread-safe operations for concurrent access
- Per-key critical sections so concurrent misses compute once
"""

from collections import OrderedDict
from typing import Any, Callable, Hashable, Optional
import threading
import logging

logger = logging.getLogger(__name__)


class SAPCache:
    """
    In-memory LRU cache for query results

    Results are computed over an immutable graph, so an entry never goes
    stale. Eviction only means the query is recomputed on its next use.
    """

    def __init__(self, max_size: Optional[int] = 10000):
        """
        Initialize the cache

        Args:
            max_size: Maximum number of keys to keep, or None for no limit
        """
        if max_size is not None and max_size < 1:
            raise ValueError("max_size must be positive or None")
        self.max_size = max_size
        self._cache = OrderedDict()
        self._lock = threading.RLock()
        self._key_locks = {}
        self._hits = 0
        self._misses = 0

        logger.info(f"SAPCache initialized with max_size={max_size}")

    def __len__(self):
        with self._lock:
            return len(self._cache)

    def __contains__(self, key: Hashable) -> bool:
        with self._lock:
            return key in self._cache

    def get(self, key: Hashable) -> Optional[Any]:
        """
        Retrieve a cached result

        Args:
            key: Canonical query key

        Returns:
            The stored result, or None if not cached
        """
        with self._lock:
            if key in self._cache:
                self._cache.move_to_end(key)
                self._hits += 1
                logger.debug(f"Cache HIT: {key}")
                return self._cache[key]

            self._misses += 1
            logger.debug(f"Cache MISS: {key}")
            return None

    def put(self, key: Hashable, value: Any):
        """
        Store a result

        Args:
            key: Canonical query key
            value: Immutable result
        """
        with self._lock:
            self._put_internal(key, value)

    def _put_internal(self, key: Hashable, value: Any):
        """Store one entry (caller holds the lock)"""
        if key in self._cache:
            self._cache.move_to_end(key)
            return

        self._cache[key] = value
        if self.max_size is not None and len(self._cache) > self.max_size:
            evicted_key, _ = self._cache.popitem(last=False)
            logger.debug(f"Evicted LRU entry: {evicted_key}")

    def get_or_compute(self, key: Hashable, compute: Callable[[], Any]) -> Any:
        """
        Return the cached result for key, computing and storing it on a miss

        Concurrent callers that miss on the same key wait for the first one
        instead of repeating the computation.

        Args:
            key: Canonical query key
            compute: Zero-argument callable producing the result

        Returns:
            The cached or freshly computed result
        """
        value = self.get(key)
        if value is not None:
            return value

        with self._lock:
            key_lock = self._key_locks.setdefault(key, threading.Lock())

        with key_lock:
            with self._lock:
                if key in self._cache:
                    self._cache.move_to_end(key)
                    return self._cache[key]

            try:
                value = compute()
                self.put(key, value)
            finally:
                with self._lock:
                    self._key_locks.pop(key, None)

        return value

    def get_stats(self) -> dict:
        """
        Get cache statistics

        Returns:
            Dictionary with cache metrics
        """
        with self._lock:
            total_requests = self._hits + self._misses
            hit_rate = (self._hits / total_requests * 100) if total_requests > 0 else 0

            return {
                'size': len(self._cache),
                'max_size': self.max_size,
                'hits': self._hits,
                'misses': self._misses,
                'hit_rate': round(hit_rate, 2),
                'total_requests': total_requests
            }

    def clear(self):
        """Clear all cached results"""
        with self._lock:
            self._cache.clear()
            self._hits = 0
            self._misses = 0
            logger.info("Cache cleared")
