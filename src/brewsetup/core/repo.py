"""Repository module serving the normalized registry catalog."""

from __future__ import annotations

import asyncio
import time
from typing import List

from brewsetup.catalog.ranking import Category, resolve_category
from brewsetup.core.cache import CatalogCache
from brewsetup.core.config import CatalogSettings
from brewsetup.core.logging import get_logger
from brewsetup.core.models import CatalogEntry, RegistrySource
from brewsetup.providers.registry import RegistryFetcher

log = get_logger(__name__)


class CatalogRepository:
    """Repository for the registry catalog, backed by a RegistryFetcher."""

    def __init__(
        self,
        fetcher: RegistryFetcher | None = None,
        settings: CatalogSettings | None = None,
    ) -> None:
        self.fetcher = fetcher or RegistryFetcher(settings=settings)

    @property
    def cache(self) -> CatalogCache:
        return self.fetcher.cache

    @property
    def last_error(self) -> str | None:
        return self.cache.last_error

    async def get_all_packages(self) -> List[CatalogEntry]:
        """Get every available formula and cask as catalog entries.

        Deprecated and disabled records are already filtered out.

        Returns:
            Formula entries followed by cask entries.
        """
        start = time.perf_counter()
        log.info("fetch_packages_start")

        formulae, casks = await asyncio.gather(
            self.fetcher.fetch_entries(RegistrySource.FORMULA),
            self.fetcher.fetch_entries(RegistrySource.CASK),
        )
        pkgs = formulae + casks

        duration_ms = int((time.perf_counter() - start) * 1000)
        log.info("fetch_packages_complete", count=len(pkgs), duration_ms=duration_ms)

        return pkgs

    async def get_packages_by_category(self, category: Category) -> List[CatalogEntry]:
        """Get the entries of one category, popular first, then by name.

        Args:
            category: A ToolCategory or its string value.

        Returns:
            The sorted entries of that category.
        """
        scope = resolve_category(category)
        pkgs = await self.get_all_packages()
        if scope is not None:
            pkgs = [p for p in pkgs if p.category is scope]
        return sorted(pkgs, key=lambda p: (not p.popular, p.name.lower()))

    async def get_popular_packages(self, limit: int = 50) -> List[CatalogEntry]:
        """Get popular entries across all categories, alphabetically.

        Args:
            limit: Maximum number of entries to return.
        """
        pkgs = await self.get_all_packages()
        popular = sorted((p for p in pkgs if p.popular), key=lambda p: p.name.lower())
        return popular[:limit]

    def clear_cache(self) -> None:
        """Force the next fetch of each source to hit the network."""
        self.cache.clear()

    async def aclose(self) -> None:
        await self.fetcher.aclose()
