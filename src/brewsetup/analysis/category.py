"""Derive a catalog category from a package name and description."""

from __future__ import annotations

import re
from dataclasses import dataclass

from brewsetup.core.models import EntryKind, ToolCategory


@dataclass(frozen=True)
class CategoryRule:
    """A name pattern and a description keyword pattern mapped to a category."""

    category: ToolCategory
    name: re.Pattern[str] | None = None
    keywords: re.Pattern[str] | None = None

    def matches(self, name: str, desc: str) -> bool:
        if self.name is not None and self.name.search(name):
            return True
        return self.keywords is not None and self.keywords.search(desc) is not None


def _names(*names: str) -> re.Pattern[str]:
    return re.compile(r"^(" + "|".join(names) + r")")


def _words(*words: str) -> re.Pattern[str]:
    """Match any of the regex fragments in ``words`` as whole words."""
    return re.compile(r"\b(?:" + "|".join(words) + r")\b")


# Evaluated in order, first match wins.
CATEGORY_RULES: tuple[CategoryRule, ...] = (
    CategoryRule(
        ToolCategory.BROWSERS,
        _names("google-chrome", "chromium", "firefox", "brave-browser", "arc$", "opera",
               "vivaldi", "microsoft-edge", "safari", "orion", "zen-browser", "tor-browser"),
        _words("web browser"),
    ),
    CategoryRule(
        ToolCategory.DEV_TOOLS,
        _names("visual-studio-code", "cursor$", "zed$", "sublime-text", "intellij", "pycharm",
               "webstorm", "goland", "android-studio", "xcode", "postman", "insomnia",
               "github", "sourcetree", "fork$", "gitkraken", "neovim", "vim$", "emacs"),
        _words("code editor", "text editor", "ide", "integrated development",
               "api client", "git client", "debugger"),
    ),
    CategoryRule(
        ToolCategory.DESIGN_TOOLS,
        _names("figma", "sketch$", "affinity", "adobe", "blender", "inkscape", "gimp",
               "pixelmator", "framer", "zeplin"),
        _words("design tools?", "vector graphics", "image editors?", "prototyping", "3d creation"),
    ),
    CategoryRule(
        ToolCategory.COMMUNICATION,
        _names("slack", "discord", "zoom", "microsoft-teams", "telegram", "whatsapp", "signal",
               "skype", "thunderbird"),
        _words("chat", "messaging", "messenger", r"video conferenc\w*", "email client"),
    ),
    CategoryRule(
        ToolCategory.PRODUCTIVITY,
        _names("notion", "obsidian", "raycast", "alfred", "rectangle", "todoist", "evernote",
               "microsoft-office", "libreoffice", "logseq"),
        _words("note-taking", "note taking", "productivity", "launcher", r"window manag\w*",
               "calendar", "to-do", "todo list"),
    ),
    CategoryRule(
        ToolCategory.LANGUAGES,
        _names("node", "python", "ruby", "go$", "rust", "java", "openjdk", "php", "perl",
               "nvm", "pyenv", "rbenv", "asdf", "deno", "bun$", "kotlin", "scala", "elixir",
               "erlang", "lua", "zig", "swift", "dotnet"),
        _words("programming language", "runtime", "version managers?", "compilers?",
               "interpreters?"),
    ),
    CategoryRule(
        ToolCategory.DEVOPS,
        _names("docker", "kubectl", "kubernetes", "helm", "terraform", "ansible", "vagrant",
               "awscli", "azure-cli", "google-cloud-sdk", "minikube", "k9s", "podman",
               "orbstack", "pulumi", "packer"),
        _words("kubernetes", "containers?", "cloud", "deployments?", "infrastructure",
               "provisioning", "orchestration"),
    ),
    CategoryRule(
        ToolCategory.DATABASES,
        _names("postgresql", "mysql", "mariadb", "redis", "mongodb", "sqlite", "dbeaver",
               "tableplus", "sequel", "pgadmin", "elasticsearch", "cassandra"),
        _words("databases?", "sql client", "key-value store"),
    ),
    CategoryRule(
        ToolCategory.TERMINAL,
        _names("iterm2", "warp$", "alacritty", "kitty", "wezterm", "hyper$", "ghostty",
               "tmux", "zellij", "starship", "oh-my-zsh"),
        _words("terminal emulators?", "terminal multiplexers?", "shell prompt"),
    ),
    CategoryRule(
        ToolCategory.CLI_TOOLS,
        None,
        _words("command-line", "command line", "cli"),
    ),
    CategoryRule(
        ToolCategory.MEDIA,
        _names("vlc", "spotify", "iina", "obs", "handbrake", "audacity", "ffmpeg", "mpv"),
        _words("media players?", "videos?", "audio", "music", "streaming", "podcasts?"),
    ),
    CategoryRule(
        ToolCategory.SECURITY,
        _names("1password", "bitwarden", "keepassxc", "lulu", "little-snitch", "gnupg",
               "gpg", "tailscale", "wireguard", "nordvpn", "protonvpn", "mullvad"),
        _words("passwords?", "encryption", "vpn", "firewall", "security", r"authenticat\w*"),
    ),
    CategoryRule(
        ToolCategory.UTILITIES,
        _names("the-unarchiver", "appcleaner", "keka", "stats$", "karabiner", "bartender",
               "hiddenbar", "caffeine", "amphetamine", "monitorcontrol"),
        _words("utility", "menu bar", "clipboard", r"archiv\w*", "screenshots?", "system monitor"),
    ),
)

DEFAULT_CATEGORY = {
    EntryKind.FORMULA: ToolCategory.CLI_TOOLS,
    EntryKind.CASK: ToolCategory.UTILITIES,
}


def categorize(name: str, desc: str | None, kind: EntryKind) -> ToolCategory:
    """Classify a package by running the ordered rules against it.

    Args:
        name: The formula name or cask token.
        desc: The package description, may be empty.
        kind: Formula or cask; selects the fallback category.

    Returns:
        The first matching category, or the kind's default.
    """
    lower_name = name.lower()
    lower_desc = (desc or "").lower()

    for rule in CATEGORY_RULES:
        if rule.matches(lower_name, lower_desc):
            return rule.category

    return DEFAULT_CATEGORY.get(kind, ToolCategory.UTILITIES)
