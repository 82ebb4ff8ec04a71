"""Backfill curated tools with metadata from the registry catalog."""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable
from urllib.parse import urlparse

from brewsetup.core.models import CatalogEntry


def create_brew_lookup(packages: Iterable[CatalogEntry]) -> dict[str, CatalogEntry]:
    """Index registry entries by lowercase install command and lowercase name.

    Args:
        packages: Normalized registry entries.

    Returns:
        A mapping from both keys to the entry; later entries win on collisions.
    """
    lookup: dict[str, CatalogEntry] = {}
    for pkg in packages:
        lookup[pkg.install_command.lower()] = pkg
        lookup[pkg.name.lower()] = pkg
    return lookup


def is_valid_homepage(url: str | None) -> bool:
    if not url:
        return False
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def enhance_tool_with_brew_data(
    tool: CatalogEntry, lookup: dict[str, CatalogEntry]
) -> CatalogEntry:
    """Fill a curated tool's missing homepage, description and version.

    Tools that already carry a homepage are returned untouched, as are tools
    whose registry match has no usable homepage.
    """
    if tool.homepage:
        return tool

    pkg = lookup.get(tool.install_command.lower()) or lookup.get(tool.name.lower())
    if pkg is None or not is_valid_homepage(pkg.homepage):
        return tool

    return replace(
        tool,
        homepage=pkg.homepage,
        description=tool.description or pkg.description,
        version=tool.version or pkg.version,
    )


def enhance_tools_with_brew_data(
    tools: Iterable[CatalogEntry], packages: Iterable[CatalogEntry]
) -> list[CatalogEntry]:
    """Enhance every curated tool from the normalized registry catalog."""
    lookup = create_brew_lookup(packages)
    return [enhance_tool_with_brew_data(tool, lookup) for tool in tools]


enhance = enhance_tools_with_brew_data
