"""Unit tests for brewsetup.providers.registry."""

from __future__ import annotations

import asyncio

import httpx
import respx

from brewsetup.core.cache import CatalogCache
from brewsetup.core.config import CASK_URL, FORMULA_URL, CatalogSettings
from brewsetup.core.models import RegistrySource
from brewsetup.core.scheduler import ManualScheduler
from brewsetup.providers.registry import RegistryFetcher, build_http_client

# ---------------------------------------------------------------------------
# build_http_client
# ---------------------------------------------------------------------------


class TestBuildHttpClient:
    def test_client_configuration(self) -> None:
        client = build_http_client(CatalogSettings(request_timeout=12.0))
        assert isinstance(client, httpx.AsyncClient)
        assert client.follow_redirects is True
        assert client.timeout.read == 12.0


# ---------------------------------------------------------------------------
# RegistryFetcher
# ---------------------------------------------------------------------------


class TestFetch:
    async def test_successful_fetch(self, cache: CatalogCache, formula_records) -> None:
        with respx.mock:
            route = respx.get(FORMULA_URL).mock(
                return_value=httpx.Response(200, json=formula_records)
            )
            async with httpx.AsyncClient() as client:
                fetcher = RegistryFetcher(cache=cache, client=client)
                records = await fetcher.fetch(RegistrySource.FORMULA)

        assert records == formula_records
        assert route.call_count == 1

    async def test_entries_are_normalized_and_filtered(
        self, cache: CatalogCache, cask_records
    ) -> None:
        with respx.mock:
            respx.get(CASK_URL).mock(return_value=httpx.Response(200, json=cask_records))
            async with httpx.AsyncClient() as client:
                fetcher = RegistryFetcher(cache=cache, client=client)
                entries = await fetcher.fetch_entries(RegistrySource.CASK)

        ids = [e.id for e in entries]
        assert ids == ["cask-google-chrome", "cask-firefox@nightly"]

    async def test_fresh_cache_skips_network(
        self, cache: CatalogCache, scheduler: ManualScheduler, cask_records
    ) -> None:
        with respx.mock:
            route = respx.get(CASK_URL).mock(return_value=httpx.Response(200, json=cask_records))
            async with httpx.AsyncClient() as client:
                fetcher = RegistryFetcher(cache=cache, client=client)
                await fetcher.fetch(RegistrySource.CASK)

                # An empty response would now be served, but the cache is 10 minutes old.
                route.mock(return_value=httpx.Response(200, json=[]))
                scheduler.advance(600)
                records = await fetcher.fetch(RegistrySource.CASK)

        assert records == cask_records
        assert route.call_count == 1

    async def test_expired_cache_refetches(
        self, cache: CatalogCache, scheduler: ManualScheduler, formula_records
    ) -> None:
        with respx.mock:
            route = respx.get(FORMULA_URL).mock(
                return_value=httpx.Response(200, json=formula_records)
            )
            async with httpx.AsyncClient() as client:
                fetcher = RegistryFetcher(cache=cache, client=client)
                await fetcher.fetch(RegistrySource.FORMULA)
                scheduler.advance(3600)
                await fetcher.fetch(RegistrySource.FORMULA)

        assert route.call_count == 2

    async def test_sources_cached_independently(
        self, cache: CatalogCache, formula_records, cask_records
    ) -> None:
        with respx.mock:
            formula_route = respx.get(FORMULA_URL).mock(
                return_value=httpx.Response(200, json=formula_records)
            )
            cask_route = respx.get(CASK_URL).mock(
                return_value=httpx.Response(200, json=cask_records)
            )
            async with httpx.AsyncClient() as client:
                fetcher = RegistryFetcher(cache=cache, client=client)
                await fetcher.fetch(RegistrySource.FORMULA)
                await fetcher.fetch(RegistrySource.CASK)
                await fetcher.fetch(RegistrySource.CASK)

        assert formula_route.call_count == 1
        assert cask_route.call_count == 1


class TestCoalescing:
    async def test_concurrent_calls_share_one_request(
        self, cache: CatalogCache, formula_records
    ) -> None:
        with respx.mock:
            route = respx.get(FORMULA_URL).mock(
                return_value=httpx.Response(200, json=formula_records)
            )
            async with httpx.AsyncClient() as client:
                fetcher = RegistryFetcher(cache=cache, client=client)
                results = await asyncio.gather(
                    *(fetcher.fetch(RegistrySource.FORMULA) for _ in range(8))
                )

        assert route.call_count == 1
        assert all(r == formula_records for r in results)
        assert cache.inflight(RegistrySource.FORMULA) is None

    async def test_calls_after_success_hit_cache(
        self, cache: CatalogCache, formula_records
    ) -> None:
        with respx.mock:
            route = respx.get(FORMULA_URL).mock(
                return_value=httpx.Response(200, json=formula_records)
            )
            async with httpx.AsyncClient() as client:
                fetcher = RegistryFetcher(cache=cache, client=client)
                await fetcher.fetch(RegistrySource.FORMULA)
                await asyncio.gather(*(fetcher.fetch(RegistrySource.FORMULA) for _ in range(5)))

        assert route.call_count == 1

    async def test_cancelled_waiter_does_not_cancel_shared_fetch(
        self, cache: CatalogCache, formula_records
    ) -> None:
        release = asyncio.Event()

        async def slow_response(request: httpx.Request) -> httpx.Response:
            await release.wait()
            return httpx.Response(200, json=formula_records)

        with respx.mock:
            route = respx.get(FORMULA_URL).mock(side_effect=slow_response)
            async with httpx.AsyncClient() as client:
                fetcher = RegistryFetcher(cache=cache, client=client)
                first = asyncio.create_task(fetcher.fetch(RegistrySource.FORMULA))
                second = asyncio.create_task(fetcher.fetch(RegistrySource.FORMULA))
                await asyncio.sleep(0)
                await asyncio.sleep(0)
                first.cancel()
                release.set()
                records = await second

        assert records == formula_records
        assert route.call_count == 1


class TestFailures:
    async def test_network_error_without_cache_returns_empty(self, cache: CatalogCache) -> None:
        with respx.mock:
            respx.get(FORMULA_URL).mock(side_effect=httpx.ConnectError("Connection refused"))
            async with httpx.AsyncClient() as client:
                fetcher = RegistryFetcher(cache=cache, client=client)
                records = await fetcher.fetch(RegistrySource.FORMULA)

        assert records == []
        assert cache.last_error is not None

    async def test_error_status_falls_back_to_stale_cache(
        self, cache: CatalogCache, scheduler: ManualScheduler, formula_records
    ) -> None:
        with respx.mock:
            route = respx.get(FORMULA_URL).mock(
                return_value=httpx.Response(200, json=formula_records)
            )
            async with httpx.AsyncClient() as client:
                fetcher = RegistryFetcher(cache=cache, client=client)
                await fetcher.fetch(RegistrySource.FORMULA)

                scheduler.advance(7200)
                route.mock(return_value=httpx.Response(503))
                records = await fetcher.fetch(RegistrySource.FORMULA)

        assert records == formula_records
        assert route.call_count == 2
        assert "503" in (cache.last_error or "")

    async def test_timeout_returns_empty(self, cache: CatalogCache) -> None:
        with respx.mock:
            respx.get(CASK_URL).mock(side_effect=httpx.ReadTimeout("too slow"))
            async with httpx.AsyncClient() as client:
                fetcher = RegistryFetcher(cache=cache, client=client)
                entries = await fetcher.fetch_entries(RegistrySource.CASK)

        assert entries == []
        assert "timed out" in (cache.last_error or "")

    async def test_non_list_payload_returns_empty(self, cache: CatalogCache) -> None:
        with respx.mock:
            respx.get(CASK_URL).mock(return_value=httpx.Response(200, json={"error": "nope"}))
            async with httpx.AsyncClient() as client:
                fetcher = RegistryFetcher(cache=cache, client=client)
                records = await fetcher.fetch(RegistrySource.CASK)

        assert records == []

    async def test_invalid_json_returns_empty(self, cache: CatalogCache) -> None:
        with respx.mock:
            respx.get(CASK_URL).mock(return_value=httpx.Response(200, text="<html>"))
            async with httpx.AsyncClient() as client:
                fetcher = RegistryFetcher(cache=cache, client=client)
                records = await fetcher.fetch(RegistrySource.CASK)

        assert records == []

    async def test_invalid_url_returns_empty(self, cache: CatalogCache) -> None:
        settings = CatalogSettings(formula_url="https://exa\x00mple.com/formula.json")
        fetcher = RegistryFetcher(cache=cache, settings=settings)
        try:
            records = await fetcher.fetch(RegistrySource.FORMULA)
        finally:
            await fetcher.aclose()

        assert records == []
        assert cache.last_error is not None
        assert fetcher.cache.inflight(RegistrySource.FORMULA) is None

    async def test_success_clears_previous_error(
        self, cache: CatalogCache, formula_records
    ) -> None:
        with respx.mock:
            route = respx.get(FORMULA_URL).mock(return_value=httpx.Response(500))
            async with httpx.AsyncClient() as client:
                fetcher = RegistryFetcher(cache=cache, client=client)
                await fetcher.fetch(RegistrySource.FORMULA)
                assert cache.last_error is not None

                route.mock(return_value=httpx.Response(200, json=formula_records))
                await fetcher.fetch(RegistrySource.FORMULA)

        assert cache.last_error is None


class TestClearCache:
    async def test_clear_forces_network(self, cache: CatalogCache, formula_records) -> None:
        with respx.mock:
            route = respx.get(FORMULA_URL).mock(
                return_value=httpx.Response(200, json=formula_records)
            )
            async with httpx.AsyncClient() as client:
                fetcher = RegistryFetcher(cache=cache, client=client)
                await fetcher.fetch(RegistrySource.FORMULA)
                cache.clear()
                await fetcher.fetch(RegistrySource.FORMULA)

        assert route.call_count == 2

    async def test_fetch_started_before_clear_does_not_write(
        self, cache: CatalogCache, formula_records
    ) -> None:
        release = asyncio.Event()

        async def slow_response(request: httpx.Request) -> httpx.Response:
            await release.wait()
            return httpx.Response(200, json=formula_records)

        with respx.mock:
            respx.get(FORMULA_URL).mock(side_effect=slow_response)
            async with httpx.AsyncClient() as client:
                fetcher = RegistryFetcher(cache=cache, client=client)
                pending = asyncio.create_task(fetcher.fetch(RegistrySource.FORMULA))
                await asyncio.sleep(0)
                await asyncio.sleep(0)
                cache.clear()
                release.set()
                await pending

        assert cache.get(RegistrySource.FORMULA) is None
