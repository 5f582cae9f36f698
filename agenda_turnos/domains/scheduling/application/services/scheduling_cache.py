# ============================================================================
# SCOPE: APPLICATION LAYER (Scheduling)
# Description: Client-side caches with invalidation and stale-response guard.
# ============================================================================
"""Scheduling Cache.

Wraps MemoryCache with the engine's key scheme, prefix invalidation and a
per-key generation counter. A read records the generation when it starts; if
an invalidation or a newer read of the same key happened before it finishes,
its result is returned to the caller flagged ``stale`` and never written.
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from agenda_turnos.core.shared.cache import MemoryCache

from ...domain.value_objects import PartyRole

logger = logging.getLogger(__name__)

T = TypeVar("T")

_MISSING = object()


@dataclass
class CacheRead(Generic[T]):
    """Value returned by ``SchedulingCache.fetch``."""

    value: T
    stale: bool = False
    hit: bool = False


def _ref(value: str) -> str:
    return value.strip().lower()


class SchedulingCache:
    """
    Query cache for the scheduling use cases.

    Keys:
        availability:<professional>
        slots:<professional>:<week_offset>
        appointments:<party>
        express:<party>
        payments:<party>
    """

    def __init__(self, cache: MemoryCache | None = None, ttl: float = 30.0, max_size: int = 500):
        self._cache = cache or MemoryCache(max_size=max_size, default_ttl=ttl)
        self._generations: dict[str, int] = {}

    # Key builders
    @staticmethod
    def availability_key(professional_ref: str) -> str:
        return f"availability:{_ref(professional_ref)}"

    @staticmethod
    def slots_key(professional_ref: str, week_offset: int) -> str:
        return f"slots:{_ref(professional_ref)}:{week_offset}"

    @staticmethod
    def appointments_key(party: PartyRole) -> str:
        return f"appointments:{party.value}"

    @staticmethod
    def express_key(party: PartyRole = PartyRole.PROFESSIONAL) -> str:
        return f"express:{party.value}"

    @staticmethod
    def payments_key(party: PartyRole) -> str:
        return f"payments:{party.value}"

    # Stale guard
    def begin_read(self, key: str) -> int:
        """Register a read of ``key`` and return its generation ticket."""
        generation = self._generations.get(key, 0) + 1
        self._generations[key] = generation
        return generation

    def is_current(self, key: str, ticket: int) -> bool:
        return self._generations.get(key, 0) == ticket

    async def get(self, key: str) -> Any:
        return await self._cache.async_get(key, _MISSING)

    async def store(self, key: str, ticket: int, value: Any) -> bool:
        """Write ``value`` only if no newer read or invalidation happened."""
        if not self.is_current(key, ticket):
            logger.debug(f"Discarding stale result for {key}")
            return False
        await self._cache.async_set(key, value)
        return True

    async def fetch(self, key: str, loader: Callable[[], Awaitable[T]]) -> CacheRead[T]:
        """
        Cached read.

        Args:
            key: Cache key
            loader: Coroutine factory producing the fresh value; exceptions
                propagate and nothing is cached

        Returns:
            CacheRead with the value and whether it was a hit or stale
        """
        cached = await self.get(key)
        if cached is not _MISSING:
            return CacheRead(value=cached, hit=True)

        ticket = self.begin_read(key)
        value = await loader()
        stored = await self.store(key, ticket, value)
        return CacheRead(value=value, stale=not stored)

    # Invalidation
    def invalidate(self, key: str) -> None:
        self._cache.delete(key)
        self._generations[key] = self._generations.get(key, 0) + 1

    def invalidate_prefix(self, prefix: str) -> int:
        removed = self._cache.delete_prefix(prefix)
        for key in self._generations:
            if key.startswith(prefix):
                self._generations[key] += 1
        return removed

    def invalidate_professional(self, professional_ref: str) -> None:
        """Availability and every slot window of a professional."""
        self.invalidate(self.availability_key(professional_ref))
        self.invalidate_prefix(f"slots:{_ref(professional_ref)}:")

    def invalidate_after_booking_change(self, professional_ref: str | None) -> None:
        """Availability/slots of the professional, both parties' appointments and express lists."""
        if professional_ref:
            self.invalidate_professional(professional_ref)
        else:
            self.invalidate_prefix("slots:")
        self.invalidate_prefix("appointments:")
        self.invalidate_prefix("express:")

    def invalidate_payments(self) -> None:
        self.invalidate_prefix("payments:")

    def clear(self) -> None:
        self._cache.clear()
        for key in self._generations:
            self._generations[key] += 1

    @property
    def stats(self) -> dict[str, Any]:
        return self._cache.get_info()
