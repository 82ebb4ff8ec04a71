"""Protocol definitions for registry record providers."""

from __future__ import annotations

from typing import Protocol

from brewsetup.core.models import CatalogEntry, RawRecord


class EntryProvider(Protocol):
    """Protocol for modules that turn one kind of registry record into entries."""

    def identifier(self, raw: RawRecord) -> str:
        """Return the record's formula name or cask token."""
        ...

    def is_available(self, raw: RawRecord) -> bool:
        """Return False for deprecated or disabled records."""
        ...

    def to_entry(self, raw: RawRecord, popularity_threshold: int = ...) -> CatalogEntry:
        """Normalize a raw record into a catalog entry."""
        ...
