"""Data models for catalog entries."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any

RawRecord = dict[str, Any]

PRERELEASE_RE = re.compile(r"[-@](beta|nightly|dev|preview|alpha|rc|canary)", re.IGNORECASE)


class RegistrySource(Enum):
    """Remote package lists served by the registry."""

    FORMULA = "formula"
    CASK = "cask"


class EntryKind(Enum):
    """Where a catalog entry came from."""

    CURATED = "curated"
    FORMULA = "formula"
    CASK = "cask"


class ToolCategory(Enum):
    """Enumeration of catalog categories."""

    BROWSERS = "browsers"
    DEV_TOOLS = "dev-tools"
    DESIGN_TOOLS = "design-tools"
    COMMUNICATION = "communication"
    PRODUCTIVITY = "productivity"
    LANGUAGES = "languages"
    DEVOPS = "devops"
    DATABASES = "databases"
    TERMINAL = "terminal"
    CLI_TOOLS = "cli-tools"
    MEDIA = "media"
    SECURITY = "security"
    UTILITIES = "utilities"
    CUSTOM = "custom"


def normalize_name(name: str) -> str:
    """Lowercase a name and strip spaces and hyphens."""
    return name.lower().replace(" ", "").replace("-", "")


@dataclass(frozen=True)
class CatalogEntry:
    """A single tool in the catalog, curated or from the registry."""

    id: str
    name: str
    description: str
    install_command: str
    category: ToolCategory
    kind: EntryKind
    popular: bool = False
    version: str | None = None
    homepage: str | None = None
    dev_pick: bool = False

    @property
    def normalized_name(self) -> str:
        return normalize_name(self.name)

    @property
    def is_prerelease(self) -> bool:
        """True for beta, nightly, dev, preview, alpha, rc and canary builds."""
        return PRERELEASE_RE.search(self.install_command) is not None
