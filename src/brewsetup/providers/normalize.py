"""Normalize raw registry records into catalog entries."""

from __future__ import annotations

import time
from typing import Any, Iterable

from brewsetup.analysis.popularity import POPULARITY_THRESHOLD
from brewsetup.core.logging import get_logger
from brewsetup.core.models import CatalogEntry, RawRecord, RegistrySource
from brewsetup.providers import brew_cask, brew_formula
from brewsetup.providers.base import EntryProvider

log = get_logger(__name__)

PROVIDERS: dict[RegistrySource, EntryProvider] = {
    RegistrySource.FORMULA: brew_formula,  # type: ignore[dict-item]
    RegistrySource.CASK: brew_cask,  # type: ignore[dict-item]
}


def normalize(
    raw: RawRecord, source: RegistrySource, popularity_threshold: int = POPULARITY_THRESHOLD
) -> CatalogEntry:
    """Normalize a single record of the given source kind.

    Raises:
        MalformedRecordError: If the record cannot be normalized.
    """
    return PROVIDERS[source].to_entry(raw, popularity_threshold)


def normalize_all(
    records: Iterable[Any],
    source: RegistrySource,
    popularity_threshold: int = POPULARITY_THRESHOLD,
) -> list[CatalogEntry]:
    """Normalize a batch, skipping deprecated, disabled and malformed records.

    Args:
        records: Raw records as decoded from the registry.
        source: Which registry list the records came from.
        popularity_threshold: 30-day installs above which an entry is popular.

    Returns:
        The entries that normalized cleanly, in input order.
    """
    start = time.perf_counter()
    provider = PROVIDERS[source]
    entries: list[CatalogEntry] = []
    skipped = 0
    dropped = 0

    for raw in records:
        try:
            if isinstance(raw, dict) and not provider.is_available(raw):
                skipped += 1
                continue
            entries.append(provider.to_entry(raw, popularity_threshold))
        except Exception as e:
            dropped += 1
            log.warning(
                "record_dropped",
                source=source.value,
                record=raw.get("name") or raw.get("token") if isinstance(raw, dict) else None,
                error=str(e),
            )

    duration_ms = int((time.perf_counter() - start) * 1000)
    log.info(
        "normalize_complete",
        source=source.value,
        count=len(entries),
        skipped=skipped,
        dropped=dropped,
        duration_ms=duration_ms,
    )

    return entries
