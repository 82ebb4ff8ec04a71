"""Reactive query state for the catalog, consumed by the presentation layer."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, List, Sequence

from brewsetup.catalog.curated import CURATED_TOOLS
from brewsetup.catalog.enhance import enhance_tools_with_brew_data
from brewsetup.catalog.ranking import Category, query_catalog, resolve_category
from brewsetup.core.logging import get_logger
from brewsetup.core.models import CatalogEntry
from brewsetup.core.repo import CatalogRepository
from brewsetup.core.scheduler import AsyncioScheduler, Handle, Scheduler

log = get_logger(__name__)

Listener = Callable[[List[CatalogEntry]], None]


@dataclass
class Filters:
    """Data class to hold filter settings."""

    search: str = ""
    category: Category = None
    show_all: bool = False


@dataclass(frozen=True)
class Snapshot:
    """Catalog data one recomputation works from."""

    curated: tuple[CatalogEntry, ...] = ()
    remote: tuple[CatalogEntry, ...] = ()


class CatalogStore:
    """Query façade: keeps filters, loading state and the ranked results.

    ``search_text`` follows every keystroke; the filters only pick it up
    once it has been stable for ``debounce`` seconds.
    """

    def __init__(
        self,
        repository: CatalogRepository | None = None,
        curated: Sequence[CatalogEntry] = CURATED_TOOLS,
        scheduler: Scheduler | None = None,
        debounce: float | None = None,
    ) -> None:
        self.repository = repository or CatalogRepository()
        self.scheduler = scheduler or AsyncioScheduler()
        self.debounce = (
            debounce if debounce is not None
            else self.repository.fetcher.settings.search_debounce
        )
        self.filters = Filters()
        self.search_text = ""
        self.loading = False
        self.error: str | None = None
        self.results: List[CatalogEntry] = []
        self._base_curated = tuple(curated)
        self._snapshot = Snapshot(curated=self._base_curated)
        self._pending: Handle | None = None
        self._listeners: list[Listener] = []
        self._recompute()

    @property
    def total_count(self) -> int:
        return len(self._snapshot.remote)

    @property
    def curated(self) -> tuple[CatalogEntry, ...]:
        return self._snapshot.curated

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a callback run after every recomputation.

        Returns:
            A function that removes the callback again.
        """
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def set_search_text(self, text: str) -> None:
        """Record a keystroke and schedule the debounced filter update."""
        self.search_text = text
        if self._pending is not None:
            self._pending.cancel()
        self._pending = self.scheduler.call_later(self.debounce, self._apply_search)

    def set_category(self, category: Category) -> None:
        """Switch category; this also resets the search."""
        self.filters.category = resolve_category(category)
        self._cancel_pending()
        self.search_text = ""
        self.filters.search = ""
        self._recompute()

    def set_show_all(self, show_all: bool) -> None:
        self.filters.show_all = show_all
        self._recompute()

    def query(
        self, search: str = "", category: Category = None, show_all: bool = False
    ) -> List[CatalogEntry]:
        """Apply all filters at once, skipping the debounce, and return the results."""
        self._cancel_pending()
        self.search_text = search
        self.filters = Filters(search=search, category=resolve_category(category), show_all=show_all)
        self._recompute()
        return self.results

    def find(self, name: str) -> CatalogEntry | None:
        """Look up one entry by id, name or install command, case-insensitively."""
        needle = name.strip().lower()
        for entry in query_catalog(self._snapshot.curated, self._snapshot.remote, show_all=True):
            if needle in (entry.id.lower(), entry.name.lower(), entry.install_command.lower()):
                return entry
            if entry.install_command.lower().split()[-1] == needle:
                return entry
        return None

    async def load(self) -> None:
        """Fetch the registry catalog and rebuild the snapshot."""
        self.loading = True
        self.error = None
        self._notify()

        try:
            remote = await self.repository.get_all_packages()
            curated = enhance_tools_with_brew_data(self._base_curated, remote)
            self._snapshot = Snapshot(curated=tuple(curated), remote=tuple(remote))
            self.error = self.repository.last_error
            if self.error:
                log.warning("catalog_degraded", error=self.error, count=len(remote))
        except Exception as e:
            log.error("catalog_load_failed", error=str(e), exc_info=True)
            self.error = str(e)
        finally:
            self.loading = False

        self._recompute()

    async def refresh(self) -> None:
        """Invalidate the cache and load again."""
        log.info("catalog_refresh")
        self.repository.clear_cache()
        await self.load()

    def _apply_search(self) -> None:
        self._pending = None
        if self.search_text == self.filters.search:
            return
        self.filters.search = self.search_text
        self._recompute()

    def _cancel_pending(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def _recompute(self) -> None:
        start = time.perf_counter()
        snapshot = self._snapshot
        f = self.filters

        self.results = query_catalog(
            snapshot.curated,
            snapshot.remote,
            search_text=f.search,
            category=f.category,
            show_all=f.show_all,
        )

        duration_ms = int((time.perf_counter() - start) * 1000)
        log.debug(
            "catalog_query",
            search=f.search or None,
            category=getattr(f.category, "value", f.category),
            show_all=f.show_all,
            count=len(self.results),
            duration_ms=duration_ms,
        )
        self._notify()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self.results)
