"""Render an installation script for a selection of catalog entries."""

from __future__ import annotations

import shlex
from datetime import datetime, timezone
from typing import Iterable

from brewsetup.core.models import CatalogEntry

SCRIPT_HEADER = """#!/bin/bash
# Generated by brewsetup on {timestamp}
# Run with: bash {filename}

set -e
set -o pipefail

if ! command -v brew &> /dev/null; then
  echo "Installing Homebrew..."
  /bin/bash -c "$(curl -fsSL https://raw.githubusercontent.com/Homebrew/install/HEAD/install.sh)"
fi

brew update
"""


def render_install_script(
    entries: Iterable[CatalogEntry],
    filename: str = "setup-macos.sh",
    now: datetime | None = None,
) -> str:
    """Build a bash script installing every selected entry.

    Commands are grouped by category, keeping the selection order inside
    each group, and repeated install commands are written once.

    Args:
        entries: The selected catalog entries.
        filename: Name shown in the usage comment.
        now: Timestamp for the header; defaults to the current UTC time.

    Returns:
        The script text.
    """
    timestamp = (now or datetime.now(timezone.utc)).strftime("%Y-%m-%dT%H:%M:%SZ")
    groups: dict[str, list[CatalogEntry]] = {}
    seen: set[str] = set()

    for entry in entries:
        if entry.install_command in seen:
            continue
        seen.add(entry.install_command)
        groups.setdefault(entry.category.value, []).append(entry)

    lines = [SCRIPT_HEADER.format(timestamp=timestamp, filename=filename)]
    for category, group in groups.items():
        lines.append(f"\n# {category}")
        for entry in group:
            lines.append(f"echo {shlex.quote(f'Installing {entry.name}...')}")
            lines.append(entry.install_command)

    lines.append('\necho "Setup complete."')
    return "\n".join(lines) + "\n"
