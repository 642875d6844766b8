"""TTL cache for storage endpoint responses.

The product query uses it to serve a repeated id list within its staleness
window instead of calling the storage endpoint again.
"""

import asyncio
import time
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from grid_builder.logging_config import get_logger, log_with_context

logger = get_logger(__name__)

T = TypeVar("T")


class CacheEntry:
    """A cached value and the monotonic time it expires at."""

    __slots__ = ("value", "expires_at")

    def __init__(self, value: Any, expires_at: float):
        self.value = value
        self.expires_at = expires_at

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at


class SimpleCache:
    """In-memory cache with per-entry TTL.

    Coroutine-safe via asyncio.Lock. ``clock`` is injectable for tests.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._entries: dict[str, CacheEntry] = {}
        self._lock = asyncio.Lock()
        self._clock = clock
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    async def get(self, key: str) -> Any | None:
        """Return the live value for ``key``, or None when missing or expired.

        Expired entries are evicted on read.
        """
        async with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self.misses += 1
                return None
            if entry.is_expired(self._clock()):
                del self._entries[key]
                self.misses += 1
                log_with_context(logger, "debug", "Cache entry expired", cache_key=key, event_type="cache_expired")
                return None
            self.hits += 1
            return entry.value

    async def set(self, key: str, value: Any, ttl_seconds: float) -> None:
        async with self._lock:
            self._entries[key] = CacheEntry(value, self._clock() + ttl_seconds)
        log_with_context(logger, "debug", "Cache set", cache_key=key, ttl_seconds=ttl_seconds, event_type="cache_set")

    async def clear(self, key: str | None = None) -> None:
        """Drop one entry, or every entry when ``key`` is None."""
        async with self._lock:
            if key is not None:
                self._entries.pop(key, None)
                return
            dropped = len(self._entries)
            self._entries.clear()
            self.hits = self.misses = 0
        log_with_context(logger, "info", "Cache cleared", entries=dropped, event_type="cache_clear_all")

    async def get_or_fetch(self, key: str, ttl_seconds: float, fetch: Callable[[], Awaitable[T]]) -> T:
        """Return the cached value for ``key`` or await ``fetch`` and cache its result.

        Exceptions from ``fetch`` propagate and nothing is cached.
        """
        value = await self.get(key)
        if value is not None:
            return value

        fresh = await fetch()
        await self.set(key, fresh, ttl_seconds)
        return fresh


_cache = SimpleCache()


def get_cache() -> SimpleCache:
    """Process-wide cache shared by the services."""
    return _cache
