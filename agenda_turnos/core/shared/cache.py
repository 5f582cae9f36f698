"""
Cache Utilities

In-process TTL cache used for the scheduling read models (availability,
slot windows, appointment and payment lists). Entries expire after a TTL
and the least recently read entry is evicted when the cache is full.
"""

import asyncio
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)


@dataclass
class CacheEntry:
    """Cached value plus its bookkeeping (monotonic seconds)."""

    value: Any
    stored_at: float
    expires_at: float | None = None  # None = no expiration
    last_read: float = 0.0
    reads: int = 0

    def expired(self, now: float) -> bool:
        return self.expires_at is not None and now >= self.expires_at


@dataclass
class CacheStats:
    """Hit/miss counters."""

    hits: int = 0
    misses: int = 0
    evictions: int = 0
    expirations: int = 0
    invalidations: int = 0

    @property
    def hit_rate(self) -> float:
        lookups = self.hits + self.misses
        return self.hits / lookups if lookups else 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "hits": self.hits,
            "misses": self.misses,
            "evictions": self.evictions,
            "expirations": self.expirations,
            "invalidations": self.invalidations,
            "hit_rate": round(self.hit_rate, 4),
        }


class MemoryCache:
    """
    TTL + LRU memory cache.

    ``clock`` returns seconds and defaults to ``time.monotonic``; tests pass
    a fake to expire entries without sleeping.

    Example:
        ```python
        cache = MemoryCache(max_size=500, default_ttl=30)

        cache.set("appointments:patient:ana@mail.com", turnos)
        cache.get("appointments:patient:ana@mail.com")
        cache.delete_prefix("appointments:")
        ```
    """

    def __init__(
        self,
        max_size: int = 1000,
        default_ttl: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        self.max_size = max_size
        self.default_ttl = default_ttl
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._stats = CacheStats()
        self._lock = asyncio.Lock()

    def _live_entry(self, key: str) -> CacheEntry | None:
        entry = self._entries.get(key)
        if entry is not None and entry.expired(self._clock()):
            del self._entries[key]
            self._stats.expirations += 1
            return None
        return entry

    def get(self, key: str, default: Any = None) -> Any:
        entry = self._live_entry(key)
        if entry is None:
            self._stats.misses += 1
            return default

        entry.reads += 1
        entry.last_read = self._clock()
        self._stats.hits += 1
        return entry.value

    async def async_get(self, key: str, default: Any = None) -> Any:
        async with self._lock:
            return self.get(key, default)

    def set(self, key: str, value: Any, ttl: float | None = None) -> None:
        """Store ``value``; ``ttl`` overrides the default TTL for this key."""
        if key not in self._entries and len(self._entries) >= self.max_size:
            self._evict_lru()

        now = self._clock()
        effective_ttl = self.default_ttl if ttl is None else ttl
        self._entries[key] = CacheEntry(
            value=value,
            stored_at=now,
            expires_at=now + effective_ttl if effective_ttl else None,
            last_read=now,
        )

    async def async_set(self, key: str, value: Any, ttl: float | None = None) -> None:
        async with self._lock:
            self.set(key, value, ttl)

    def delete(self, key: str) -> bool:
        if self._entries.pop(key, None) is None:
            return False
        self._stats.invalidations += 1
        return True

    def delete_prefix(self, prefix: str) -> int:
        """Drop every key starting with ``prefix`` (e.g. ``"slots:medico@mail.com:"``)."""
        matching = [key for key in self._entries if key.startswith(prefix)]
        for key in matching:
            del self._entries[key]
        self._stats.invalidations += len(matching)
        return len(matching)

    def has(self, key: str) -> bool:
        return self._live_entry(key) is not None

    def clear(self) -> int:
        count = len(self._entries)
        self._entries.clear()
        self._stats.invalidations += count
        return count

    def _evict_lru(self) -> None:
        lru_key = min(self._entries, key=lambda k: self._entries[k].last_read)
        del self._entries[lru_key]
        self._stats.evictions += 1
        logger.debug(f"Cache full, evicted {lru_key}")

    @property
    def stats(self) -> CacheStats:
        return self._stats

    @property
    def size(self) -> int:
        return len(self._entries)

    def get_info(self) -> dict[str, Any]:
        return {
            "size": self.size,
            "max_size": self.max_size,
            "default_ttl": self.default_ttl,
            "stats": self._stats.to_dict(),
        }
