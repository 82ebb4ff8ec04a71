"""In-memory cache for the two registry lists, with expiration."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field

from brewsetup.core.logging import get_logger
from brewsetup.core.models import CatalogEntry, RawRecord, RegistrySource
from brewsetup.core.scheduler import Clock, monotonic

log = get_logger(__name__)

DEFAULT_TTL = 60 * 60


@dataclass(frozen=True)
class CacheSlot:
    """One completed fetch: raw records, their entries and when they arrived."""

    records: list[RawRecord] = field(default_factory=list)
    entries: list[CatalogEntry] = field(default_factory=list)
    fetched_at: float = 0.0


class CatalogCache:
    """Holds the latest snapshot and the in-flight fetch for each source.

    A slot is only ever replaced whole, so readers never observe a
    half-written list. ``clear`` bumps the generation so that fetches
    started before the clear cannot write their results back.
    """

    def __init__(self, ttl: float = DEFAULT_TTL, clock: Clock = monotonic) -> None:
        self.ttl = ttl
        self.clock = clock
        self.generation = 0
        self._slots: dict[RegistrySource, CacheSlot] = {}
        self._inflight: dict[RegistrySource, asyncio.Task] = {}
        self._errors: dict[RegistrySource, str] = {}

    def get(self, source: RegistrySource) -> CacheSlot | None:
        """Return the last snapshot for a source, fresh or not."""
        return self._slots.get(source)

    def fresh(self, source: RegistrySource) -> CacheSlot | None:
        """Return the snapshot for a source if it is younger than the TTL.

        Args:
            source: The registry list to look up.

        Returns:
            The cached slot, or None on a miss or when it has expired.
        """
        slot = self._slots.get(source)
        if slot is None:
            log.debug("cache_miss", source=source.value)
            return None

        age_seconds = self.clock() - slot.fetched_at
        if age_seconds < self.ttl:
            log.debug("cache_hit", source=source.value, age_seconds=int(age_seconds))
            return slot

        log.debug("cache_invalid", source=source.value, reason="expired", age_seconds=int(age_seconds))
        return None

    def store(self, source: RegistrySource, slot: CacheSlot, generation: int) -> bool:
        """Replace a source's snapshot unless the cache was cleared meanwhile.

        Returns:
            True if the slot was written.
        """
        if generation != self.generation:
            log.info("cache_write_discarded", source=source.value, reason="cleared")
            return False
        self._slots[source] = slot
        self._errors.pop(source, None)
        log.info("cache_set", source=source.value, count=len(slot.entries))
        return True

    def inflight(self, source: RegistrySource) -> asyncio.Task | None:
        return self._inflight.get(source)

    def set_inflight(self, source: RegistrySource, task: asyncio.Task) -> None:
        self._inflight[source] = task

    def release(self, source: RegistrySource, task: asyncio.Task | None) -> None:
        """Drop the in-flight marker if it still points at ``task``."""
        if self._inflight.get(source) is task:
            del self._inflight[source]

    def record_error(self, source: RegistrySource, message: str) -> None:
        self._errors[source] = message

    @property
    def last_error(self) -> str | None:
        """Most relevant fetch error across sources, if any."""
        for source in RegistrySource:
            if source in self._errors:
                return self._errors[source]
        return None

    def clear(self) -> None:
        """Forget every snapshot, error and in-flight marker."""
        self.generation += 1
        self._slots.clear()
        self._inflight.clear()
        self._errors.clear()
        log.info("cache_cleared", generation=self.generation)
