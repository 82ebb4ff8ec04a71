"""Merge curated and registry entries into one deduplicated list."""

from __future__ import annotations

from typing import Iterable

from brewsetup.core.models import CatalogEntry


def merge_by_command(
    primary: Iterable[CatalogEntry], secondary: Iterable[CatalogEntry]
) -> list[CatalogEntry]:
    """Combine two lists keyed on install command, primary entries first.

    A secondary entry is only added when no entry with the same command
    has been seen yet.
    """
    merged: dict[str, CatalogEntry] = {}
    for entry in primary:
        merged.setdefault(entry.install_command, entry)
    for entry in secondary:
        merged.setdefault(entry.install_command, entry)
    return list(merged.values())


def dedup(entries: Iterable[CatalogEntry]) -> list[CatalogEntry]:
    """Keep one entry per normalized name, preferring stable over prerelease.

    Entries are grouped by normalized name. Each group keeps its first
    stable entry, or its first entry when every member is a prerelease.
    The survivor takes the position of the group's first member, so the
    outcome does not depend on whether the stable build came first.
    """
    order: list[str] = []
    best: dict[str, CatalogEntry] = {}

    for entry in entries:
        key = entry.normalized_name
        kept = best.get(key)
        if kept is None:
            order.append(key)
            best[key] = entry
        elif kept.is_prerelease and not entry.is_prerelease:
            best[key] = entry

    return [best[key] for key in order]


def merge(
    primary: Iterable[CatalogEntry], secondary: Iterable[CatalogEntry] = ()
) -> list[CatalogEntry]:
    """Merge two entry lists; primary wins every collision.

    Args:
        primary: Preferred entries, usually the curated list.
        secondary: Fallback entries, usually from the registry.

    Returns:
        Entries with unique install commands and unique normalized names.
    """
    return dedup(merge_by_command(primary, secondary))
