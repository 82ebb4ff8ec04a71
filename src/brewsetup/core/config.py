"""Configuration module for the brewsetup catalog."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

FORMULA_URL = "https://formulae.brew.sh/api/formula.json"
CASK_URL = "https://formulae.brew.sh/api/cask.json"


@dataclass
class CatalogSettings:
    """Configuration for the catalog engine."""
    formula_url: str = FORMULA_URL
    cask_url: str = CASK_URL
    cache_ttl: float = 60 * 60
    request_timeout: float = 30.0
    search_debounce: float = 0.3
    popularity_threshold: int = 1000


_DEF_HOME = Path.home() / ".brewsetup"


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def discover_settings() -> CatalogSettings:
    """Discover catalog settings, honouring BREWSETUP_* environment overrides."""
    return CatalogSettings(
        formula_url=os.environ.get("BREWSETUP_FORMULA_URL") or FORMULA_URL,
        cask_url=os.environ.get("BREWSETUP_CASK_URL") or CASK_URL,
        cache_ttl=_env_float("BREWSETUP_CACHE_TTL", 60 * 60),
        request_timeout=_env_float("BREWSETUP_TIMEOUT", 30.0),
        search_debounce=_env_float("BREWSETUP_DEBOUNCE", 0.3),
        popularity_threshold=int(_env_float("BREWSETUP_POPULAR_THRESHOLD", 1000)),
    )


def discover_log_level() -> str:
    return os.environ.get("BREWSETUP_LOG_LEVEL") or "INFO"


LOG_DIR = _DEF_HOME / "logs"
