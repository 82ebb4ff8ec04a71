"""Homebrew formula provider."""

from __future__ import annotations

from brewsetup.analysis.category import categorize
from brewsetup.analysis.popularity import POPULARITY_THRESHOLD, is_popular
from brewsetup.core.errors import MalformedRecordError
from brewsetup.core.models import CatalogEntry, EntryKind, RawRecord

NO_DESCRIPTION = "No description available"


def identifier(raw: RawRecord) -> str:
    """Return the formula name.

    Raises:
        MalformedRecordError: If the record has no usable name.
    """
    if not isinstance(raw, dict):
        raise MalformedRecordError("Formula record is not an object", kind="formula")
    name = raw.get("name")
    if not isinstance(name, str) or not name.strip():
        raise MalformedRecordError("Formula record has no name", kind="formula")
    return name.strip()


def is_available(raw: RawRecord) -> bool:
    return not (raw.get("deprecated") or raw.get("disabled"))


def install_command(name: str) -> str:
    return f"brew install {name}"


def to_entry(raw: RawRecord, popularity_threshold: int = POPULARITY_THRESHOLD) -> CatalogEntry:
    """Convert a Homebrew formula record to a catalog entry.

    Args:
        raw: Formula record as served by the registry.
        popularity_threshold: 30-day installs above which the formula is popular.

    Returns:
        A CatalogEntry for the formula.
    """
    name = identifier(raw)
    description = raw.get("desc") or NO_DESCRIPTION
    versions = raw.get("versions") or {}
    version = versions.get("stable") if isinstance(versions, dict) else None

    return CatalogEntry(
        id=f"formula-{name}",
        name=name,
        description=str(description),
        install_command=install_command(name),
        category=categorize(name, description, EntryKind.FORMULA),
        kind=EntryKind.FORMULA,
        popular=is_popular(name, raw.get("analytics"), popularity_threshold),
        version=str(version) if version else None,
        homepage=raw.get("homepage") or None,
    )
