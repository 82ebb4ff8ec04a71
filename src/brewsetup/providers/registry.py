"""Remote registry fetcher with caching and request coalescing."""

from __future__ import annotations

import asyncio
import time
from typing import Any

import httpx

from brewsetup.core.cache import CacheSlot, CatalogCache
from brewsetup.core.config import CatalogSettings
from brewsetup.core.errors import (
    RegistryHTTPError,
    RegistryPayloadError,
    RegistryTimeoutError,
    TransientError,
)
from brewsetup.core.logging import get_logger
from brewsetup.core.models import CatalogEntry, RawRecord, RegistrySource
from brewsetup.providers.normalize import normalize_all

log = get_logger(__name__)


def build_http_client(settings: CatalogSettings) -> httpx.AsyncClient:
    """Create the HTTP client used for registry requests."""
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.request_timeout),
        follow_redirects=True,
        headers={"Accept": "application/json"},
    )


class RegistryFetcher:
    """Fetches formula and cask lists, at most one request per source at a time.

    Callers never see an exception: failures fall back to the last cached
    snapshot, or an empty list when there is none.
    """

    def __init__(
        self,
        cache: CatalogCache | None = None,
        client: httpx.AsyncClient | None = None,
        settings: CatalogSettings | None = None,
    ) -> None:
        self.settings = settings or CatalogSettings()
        self.cache = cache or CatalogCache(ttl=self.settings.cache_ttl)
        self._client = client
        self._owns_client = client is None
        self.requests_made = 0

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = build_http_client(self.settings)
        return self._client

    def url_for(self, source: RegistrySource) -> str:
        if source is RegistrySource.FORMULA:
            return self.settings.formula_url
        return self.settings.cask_url

    async def fetch(self, source: RegistrySource) -> list[RawRecord]:
        """Return the raw records for a source.

        Args:
            source: Formula or cask list.

        Returns:
            Fresh or cached records; stale or empty data on failure.
        """
        slot = await self._snapshot(source)
        return list(slot.records) if slot else []

    async def fetch_entries(self, source: RegistrySource) -> list[CatalogEntry]:
        """Return the normalized entries of the same snapshot ``fetch`` serves."""
        slot = await self._snapshot(source)
        return list(slot.entries) if slot else []

    async def aclose(self) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _snapshot(self, source: RegistrySource) -> CacheSlot | None:
        slot = self.cache.fresh(source)
        if slot is not None:
            return slot

        task = self.cache.inflight(source)
        if task is None:
            task = asyncio.ensure_future(self._refresh(source))
            self.cache.set_inflight(source, task)
        else:
            log.debug("registry_fetch_coalesced", source=source.value)

        # Shielded so a cancelled waiter leaves the shared fetch running.
        return await asyncio.shield(task)

    async def _refresh(self, source: RegistrySource) -> CacheSlot | None:
        generation = self.cache.generation
        start = time.perf_counter()
        log.info("registry_fetch_start", source=source.value)

        try:
            records = await self._download(source)
            entries = normalize_all(records, source, self.settings.popularity_threshold)
            slot = CacheSlot(records=records, entries=entries, fetched_at=self.cache.clock())
            self.cache.store(source, slot, generation)

            duration_ms = int((time.perf_counter() - start) * 1000)
            log.info(
                "registry_fetch_complete",
                source=source.value,
                count=len(records),
                duration_ms=duration_ms,
            )
            return slot

        except TransientError as e:
            log.error(
                "registry_fetch_failed",
                source=source.value,
                error=str(e),
                context=e.context,
            )
            self.cache.record_error(source, e.message)
            stale = self.cache.get(source)
            if stale is not None:
                log.warning(
                    "cache_fallback_stale",
                    source=source.value,
                    age_seconds=int(self.cache.clock() - stale.fetched_at),
                )
            return stale

        finally:
            self.cache.release(source, asyncio.current_task())

    async def _download(self, source: RegistrySource) -> list[RawRecord]:
        """Issue the HTTP request and decode the JSON list.

        Raises:
            RegistryTimeoutError: If the request exceeds the timeout.
            RegistryHTTPError: On a non-success status.
            RegistryPayloadError: If the body is not a JSON list.
            TransientError: On any other transport failure.
        """
        url = self.url_for(source)
        timeout = self.settings.request_timeout
        self.requests_made += 1

        try:
            response = await asyncio.wait_for(self.client.get(url), timeout)
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            raise RegistryTimeoutError(url=url, timeout=timeout) from e
        except (httpx.HTTPError, httpx.InvalidURL, httpx.StreamError) as e:
            raise TransientError(
                f"Registry request failed: {e}",
                context={"url": url, "error": type(e).__name__},
            ) from e

        if not response.is_success:
            raise RegistryHTTPError(url=url, status_code=response.status_code)

        try:
            data: Any = response.json()
        except ValueError as e:
            raise RegistryPayloadError(
                "Failed to parse registry JSON",
                context={"url": url, "error": str(e), "output_preview": response.text[:200]},
            ) from e

        if not isinstance(data, list):
            raise RegistryPayloadError(
                "Registry response is not a list",
                context={"url": url, "type": type(data).__name__},
            )

        return data
