"""Derive the popular flag from the allow-list and install analytics."""

from __future__ import annotations

from typing import Any

POPULARITY_THRESHOLD = 1000

WELL_KNOWN_TOOLS = frozenset({
    # formulae
    "git", "node", "python", "python@3.12", "python@3.13", "go", "rust", "wget", "curl",
    "jq", "ripgrep", "fd", "fzf", "bat", "htop", "tmux", "neovim", "gh", "kubectl",
    "helm", "terraform", "awscli", "postgresql@16", "mysql", "redis", "sqlite", "nvm",
    "pyenv", "yarn", "pnpm", "ffmpeg", "tree", "zsh", "starship", "lazygit",
    # casks
    "google-chrome", "firefox", "brave-browser", "arc", "chromium", "visual-studio-code",
    "cursor", "zed", "iterm2", "warp", "alacritty", "docker", "orbstack", "postman",
    "slack", "discord", "zoom", "notion", "obsidian", "raycast", "rectangle", "figma",
    "spotify", "vlc", "1password", "bitwarden", "the-unarchiver", "dbeaver-community",
    "tableplus", "github", "microsoft-teams",
})


def recent_installs(analytics: Any, identifier: str) -> int:
    """Return the 30-day install count from a registry analytics block.

    The registry nests counts as ``{"install": {"30d": {"<name>": n}}}``.
    Anything that does not fit that shape counts as zero.
    """
    if not isinstance(analytics, dict):
        return 0
    install = analytics.get("install")
    if not isinstance(install, dict):
        return 0
    bucket = install.get("30d")

    if isinstance(bucket, dict):
        if identifier in bucket:
            bucket = bucket[identifier]
        else:
            bucket = sum(v for v in bucket.values() if isinstance(v, (int, float)))

    if isinstance(bucket, bool) or not isinstance(bucket, (int, float, str)):
        return 0
    try:
        return int(str(bucket).replace(",", ""))
    except ValueError:
        return 0


def is_popular(
    identifier: str, analytics: Any = None, threshold: int = POPULARITY_THRESHOLD
) -> bool:
    """Check whether a package is well known or installed often enough.

    Args:
        identifier: Formula name or cask token.
        analytics: The record's raw analytics block, if any.
        threshold: Installs in the last 30 days above which a package is popular.

    Returns:
        True when the package is on the allow-list or above the threshold.
    """
    if identifier.lower() in WELL_KNOWN_TOOLS:
        return True
    return recent_installs(analytics, identifier) > threshold
