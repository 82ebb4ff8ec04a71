"""Hand-picked tools bundled with brewsetup."""

from __future__ import annotations

from brewsetup.core.models import CatalogEntry, EntryKind, ToolCategory


def _cask(
    token: str,
    name: str,
    description: str,
    category: ToolCategory,
    popular: bool = True,
    dev_pick: bool = False,
    homepage: str | None = None,
) -> CatalogEntry:
    return CatalogEntry(
        id=token,
        name=name,
        description=description,
        install_command=f"brew install --cask {token}",
        category=category,
        kind=EntryKind.CURATED,
        popular=popular,
        homepage=homepage,
        dev_pick=dev_pick,
    )


def _formula(
    name: str,
    description: str,
    category: ToolCategory,
    popular: bool = True,
    dev_pick: bool = False,
    homepage: str | None = None,
) -> CatalogEntry:
    return CatalogEntry(
        id=name,
        name=name,
        description=description,
        install_command=f"brew install {name}",
        category=category,
        kind=EntryKind.CURATED,
        popular=popular,
        homepage=homepage,
        dev_pick=dev_pick,
    )


C = ToolCategory

CURATED_TOOLS: tuple[CatalogEntry, ...] = (
    # Browsers
    _cask("google-chrome", "Google Chrome", "Fast, secure web browser from Google", C.BROWSERS,
          homepage="https://www.google.com/chrome/"),
    _cask("firefox", "Firefox", "Privacy-focused open-source web browser", C.BROWSERS,
          dev_pick=True, homepage="https://www.mozilla.org/firefox/"),
    _cask("arc", "Arc", "Browser built around spaces and a sidebar", C.BROWSERS),
    _cask("brave-browser", "Brave", "Web browser that blocks ads and trackers", C.BROWSERS),

    # Dev tools
    _cask("visual-studio-code", "Visual Studio Code", "Extensible code editor from Microsoft",
          C.DEV_TOOLS, dev_pick=True, homepage="https://code.visualstudio.com/"),
    _cask("cursor", "Cursor", "AI-first code editor", C.DEV_TOOLS),
    _cask("zed", "Zed", "High-performance multiplayer code editor", C.DEV_TOOLS, dev_pick=True),
    _cask("postman", "Postman", "Collaboration platform for API development", C.DEV_TOOLS),
    _cask("github", "GitHub Desktop", "Desktop client for GitHub repositories", C.DEV_TOOLS),
    _formula("git", "Distributed version control system", C.DEV_TOOLS, dev_pick=True,
             homepage="https://git-scm.com/"),
    _formula("gh", "GitHub command-line tool", C.DEV_TOOLS),

    # Design
    _cask("figma", "Figma", "Collaborative interface design tool", C.DESIGN_TOOLS),
    _cask("blender", "Blender", "3D creation suite", C.DESIGN_TOOLS, popular=False),

    # Communication
    _cask("slack", "Slack", "Team communication and collaboration", C.COMMUNICATION),
    _cask("discord", "Discord", "Voice and text chat for communities", C.COMMUNICATION),
    _cask("zoom", "Zoom", "Video conferencing and web meetings", C.COMMUNICATION),

    # Productivity
    _cask("notion", "Notion", "Notes, docs and project management workspace", C.PRODUCTIVITY),
    _cask("obsidian", "Obsidian", "Markdown knowledge base", C.PRODUCTIVITY, dev_pick=True),
    _cask("raycast", "Raycast", "Extendable launcher for macOS", C.PRODUCTIVITY, dev_pick=True),
    _cask("rectangle", "Rectangle", "Move and resize windows with keyboard shortcuts",
          C.PRODUCTIVITY),

    # Languages
    _formula("node", "JavaScript runtime built on V8", C.LANGUAGES,
             homepage="https://nodejs.org/"),
    _formula("python@3.12", "Interpreted, interactive, object-oriented programming language",
             C.LANGUAGES),
    _formula("go", "Open source programming language", C.LANGUAGES),
    _formula("rustup", "Rust toolchain installer", C.LANGUAGES),
    _formula("pyenv", "Python version management", C.LANGUAGES),
    _formula("nvm", "Manage multiple Node.js versions", C.LANGUAGES),

    # DevOps
    _cask("docker", "Docker", "Container platform for building and running apps", C.DEVOPS,
          dev_pick=True, homepage="https://www.docker.com/products/docker-desktop/"),
    _cask("orbstack", "OrbStack", "Fast, light Docker and Linux on macOS", C.DEVOPS),
    _formula("kubectl", "Kubernetes command-line interface", C.DEVOPS),
    _formula("helm", "Kubernetes package manager", C.DEVOPS),
    _formula("terraform", "Infrastructure as code tool", C.DEVOPS),
    _formula("awscli", "Official Amazon AWS command-line interface", C.DEVOPS),

    # Databases
    _formula("postgresql@16", "Object-relational database system", C.DATABASES),
    _formula("redis", "In-memory key-value store", C.DATABASES),
    _cask("tableplus", "TablePlus", "Native GUI for relational databases", C.DATABASES),
    _cask("dbeaver-community", "DBeaver Community", "Universal database tool", C.DATABASES),

    # Terminal
    _cask("iterm2", "iTerm2", "Terminal emulator as alternative to Apple's Terminal app",
          C.TERMINAL, dev_pick=True, homepage="https://iterm2.com/"),
    _cask("warp", "Warp", "Rust-based terminal with AI built in", C.TERMINAL),
    _cask("ghostty", "Ghostty", "Fast, native, feature-rich terminal emulator", C.TERMINAL),
    _formula("tmux", "Terminal multiplexer", C.TERMINAL),
    _formula("starship", "Cross-shell prompt", C.TERMINAL),

    # CLI tools
    _formula("jq", "Lightweight and flexible command-line JSON processor", C.CLI_TOOLS),
    _formula("ripgrep", "Search tool like grep and The Silver Searcher", C.CLI_TOOLS,
             dev_pick=True),
    _formula("fzf", "Command-line fuzzy finder", C.CLI_TOOLS),
    _formula("bat", "Clone of cat with syntax highlighting and Git integration", C.CLI_TOOLS),
    _formula("htop", "Improved top (interactive process viewer)", C.CLI_TOOLS),
    _formula("wget", "Internet file retriever", C.CLI_TOOLS),

    # Media
    _cask("spotify", "Spotify", "Music streaming service", C.MEDIA),
    _cask("vlc", "VLC", "Multimedia player", C.MEDIA),
    _cask("iina", "IINA", "Modern media player for macOS", C.MEDIA, popular=False),

    # Security
    _cask("1password", "1Password", "Password manager that keeps all passwords secure",
          C.SECURITY, dev_pick=True),
    _cask("bitwarden", "Bitwarden", "Open-source password manager", C.SECURITY),
    _cask("tailscale", "Tailscale", "Mesh VPN based on WireGuard", C.SECURITY, popular=False),

    # Utilities
    _cask("the-unarchiver", "The Unarchiver", "Unpacks archive files", C.UTILITIES),
    _cask("appcleaner", "AppCleaner", "Application uninstaller", C.UTILITIES, popular=False),
    _cask("stats", "Stats", "System monitor for the menu bar", C.UTILITIES, popular=False),
)
