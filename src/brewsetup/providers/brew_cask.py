"""Homebrew Cask provider."""

from __future__ import annotations

from brewsetup.analysis.category import categorize
from brewsetup.analysis.popularity import POPULARITY_THRESHOLD, is_popular
from brewsetup.core.errors import MalformedRecordError
from brewsetup.core.models import CatalogEntry, EntryKind, RawRecord
from brewsetup.providers.brew_formula import NO_DESCRIPTION


def identifier(raw: RawRecord) -> str:
    """Return the cask token.

    Raises:
        MalformedRecordError: If the record has no usable token.
    """
    if not isinstance(raw, dict):
        raise MalformedRecordError("Cask record is not an object", kind="cask")
    token = raw.get("token")
    if not isinstance(token, str) or not token.strip():
        raise MalformedRecordError("Cask record has no token", kind="cask")
    return token.strip()


def is_available(raw: RawRecord) -> bool:
    return not (raw.get("deprecated") or raw.get("disabled"))


def install_command(token: str) -> str:
    return f"brew install --cask {token}"


def display_name(raw: RawRecord, token: str) -> str:
    """Casks carry a list of display names; the first one wins."""
    names = raw.get("name")
    if isinstance(names, list) and names and isinstance(names[0], str) and names[0].strip():
        return names[0].strip()
    if isinstance(names, str) and names.strip():
        return names.strip()
    return token


def to_entry(raw: RawRecord, popularity_threshold: int = POPULARITY_THRESHOLD) -> CatalogEntry:
    """Convert a Homebrew cask record to a catalog entry.

    Args:
        raw: Cask record as served by the registry.
        popularity_threshold: 30-day installs above which the cask is popular.

    Returns:
        A CatalogEntry for the cask.
    """
    token = identifier(raw)
    description = raw.get("desc") or NO_DESCRIPTION
    version = raw.get("version")

    return CatalogEntry(
        id=f"cask-{token}",
        name=display_name(raw, token),
        description=str(description),
        install_command=install_command(token),
        category=categorize(token, description, EntryKind.CASK),
        kind=EntryKind.CASK,
        popular=is_popular(token, raw.get("analytics"), popularity_threshold),
        version=str(version) if version else None,
        homepage=raw.get("homepage") or None,
    )
