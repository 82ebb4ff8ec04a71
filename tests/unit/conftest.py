"""Shared fixtures for unit tests (no real network access)."""

from __future__ import annotations

import tempfile
from pathlib import Path

import pytest

from brewsetup.core.logging import configure_logging

configure_logging(level="DEBUG", log_file=Path(tempfile.gettempdir()) / "brewsetup-tests.log")

from brewsetup.core.cache import CatalogCache  # noqa: E402
from brewsetup.core.models import CatalogEntry, EntryKind, ToolCategory  # noqa: E402
from brewsetup.core.scheduler import ManualScheduler  # noqa: E402


def make_entry(
    name: str,
    install_command: str | None = None,
    category: ToolCategory = ToolCategory.CLI_TOOLS,
    kind: EntryKind = EntryKind.FORMULA,
    popular: bool = False,
    description: str = "A tool",
    **kwargs,
) -> CatalogEntry:
    """Build a catalog entry with sensible defaults for tests."""
    command = install_command or f"brew install {name.lower().replace(' ', '-')}"
    return CatalogEntry(
        id=kwargs.pop("id", f"{kind.value}-{name.lower()}"),
        name=name,
        description=description,
        install_command=command,
        category=category,
        kind=kind,
        popular=popular,
        **kwargs,
    )


@pytest.fixture()
def scheduler() -> ManualScheduler:
    return ManualScheduler(start=1_000.0)


@pytest.fixture()
def cache(scheduler: ManualScheduler) -> CatalogCache:
    return CatalogCache(ttl=3600, clock=scheduler.now)


@pytest.fixture()
def formula_records() -> list[dict]:
    return [
        {
            "name": "wget",
            "desc": "Internet file retriever",
            "homepage": "https://www.gnu.org/software/wget/",
            "versions": {"stable": "1.24.5"},
            "deprecated": False,
            "disabled": False,
        },
        {
            "name": "ripgrep",
            "desc": "Search tool like grep and The Silver Searcher",
            "homepage": "https://github.com/BurntSushi/ripgrep",
            "versions": {"stable": "14.1.0"},
            "analytics": {"install": {"30d": {"ripgrep": 45_000}}},
        },
        {
            "name": "oldtool",
            "desc": "Gone",
            "deprecated": True,
        },
    ]


@pytest.fixture()
def cask_records() -> list[dict]:
    return [
        {
            "token": "google-chrome",
            "name": ["Google Chrome"],
            "desc": "Web browser",
            "homepage": "https://www.google.com/chrome/",
            "version": "126.0",
        },
        {
            "token": "firefox@nightly",
            "name": ["Firefox Nightly"],
            "desc": "Web browser",
            "homepage": "https://www.mozilla.org/firefox/channel/desktop/#nightly",
            "version": "latest",
        },
        {
            "token": "killed-app",
            "name": ["Killed"],
            "disabled": True,
        },
    ]
