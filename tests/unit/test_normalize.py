"""Unit tests for the formula and cask normalizers."""

from __future__ import annotations

import pytest

from brewsetup.analysis.category import categorize
from brewsetup.analysis.popularity import is_popular, recent_installs
from brewsetup.core.errors import MalformedRecordError
from brewsetup.core.models import EntryKind, RegistrySource, ToolCategory
from brewsetup.providers import brew_cask, brew_formula
from brewsetup.providers.normalize import normalize, normalize_all

# ---------------------------------------------------------------------------
# Formulae
# ---------------------------------------------------------------------------


class TestFormula:
    def test_basic_fields(self) -> None:
        entry = brew_formula.to_entry({
            "name": "wget",
            "desc": "Internet file retriever",
            "homepage": "https://www.gnu.org/software/wget/",
            "versions": {"stable": "1.24.5"},
        })
        assert entry.id == "formula-wget"
        assert entry.name == "wget"
        assert entry.install_command == "brew install wget"
        assert entry.kind is EntryKind.FORMULA
        assert entry.version == "1.24.5"
        assert entry.homepage == "https://www.gnu.org/software/wget/"

    def test_missing_description_uses_placeholder(self) -> None:
        entry = brew_formula.to_entry({"name": "mystery", "desc": None})
        assert entry.description == "No description available"

    def test_unmatched_formula_defaults_to_cli_tools(self) -> None:
        entry = brew_formula.to_entry({"name": "zzz-thing", "desc": "Does a thing"})
        assert entry.category is ToolCategory.CLI_TOOLS

    def test_missing_name_raises(self) -> None:
        with pytest.raises(MalformedRecordError):
            brew_formula.to_entry({"desc": "nameless"})


# ---------------------------------------------------------------------------
# Casks
# ---------------------------------------------------------------------------


class TestCask:
    def test_basic_fields(self) -> None:
        entry = brew_cask.to_entry({
            "token": "google-chrome",
            "name": ["Google Chrome"],
            "desc": "Web browser",
            "version": "126.0",
        })
        assert entry.id == "cask-google-chrome"
        assert entry.name == "Google Chrome"
        assert entry.install_command == "brew install --cask google-chrome"
        assert entry.kind is EntryKind.CASK
        assert entry.category is ToolCategory.BROWSERS

    def test_name_falls_back_to_token(self) -> None:
        entry = brew_cask.to_entry({"token": "some-app", "name": []})
        assert entry.name == "some-app"

    def test_unmatched_cask_defaults_to_utilities(self) -> None:
        entry = brew_cask.to_entry({"token": "zzz-thing", "desc": "Does a thing"})
        assert entry.category is ToolCategory.UTILITIES

    def test_not_a_dict_raises(self) -> None:
        with pytest.raises(MalformedRecordError):
            brew_cask.to_entry(["not", "a", "record"])  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# normalize / normalize_all
# ---------------------------------------------------------------------------


class TestNormalizeAll:
    def test_dispatches_on_source(self) -> None:
        assert normalize({"name": "jq"}, RegistrySource.FORMULA).id == "formula-jq"
        assert normalize({"token": "slack"}, RegistrySource.CASK).id == "cask-slack"

    def test_deprecated_and_disabled_are_dropped(self, formula_records, cask_records) -> None:
        formulae = normalize_all(formula_records, RegistrySource.FORMULA)
        casks = normalize_all(cask_records, RegistrySource.CASK)
        assert [e.name for e in formulae] == ["wget", "ripgrep"]
        assert "Killed" not in [e.name for e in casks]

    def test_malformed_records_dropped_without_aborting(self) -> None:
        records = [{"name": "jq"}, {"desc": "no name"}, "garbage", None, {"name": "fd"}]
        entries = normalize_all(records, RegistrySource.FORMULA)
        assert [e.name for e in entries] == ["jq", "fd"]

    def test_popular_from_analytics(self, formula_records) -> None:
        entries = {e.name: e for e in normalize_all(formula_records, RegistrySource.FORMULA)}
        assert entries["ripgrep"].popular is True

    def test_custom_threshold(self) -> None:
        record = {"name": "niche", "analytics": {"install": {"30d": {"niche": 500}}}}
        assert normalize_all([record], RegistrySource.FORMULA, popularity_threshold=100)[0].popular
        assert not normalize_all([record], RegistrySource.FORMULA)[0].popular


# ---------------------------------------------------------------------------
# Popularity
# ---------------------------------------------------------------------------


class TestPopularity:
    def test_allow_list(self) -> None:
        assert is_popular("git")
        assert is_popular("Visual-Studio-Code")

    def test_above_threshold(self) -> None:
        assert is_popular("tool", {"install": {"30d": {"tool": 1001}}})

    def test_at_threshold_is_not_popular(self) -> None:
        assert not is_popular("tool", {"install": {"30d": {"tool": 1000}}})

    def test_count_with_commas(self) -> None:
        assert recent_installs({"install": {"30d": {"tool": "12,345"}}}, "tool") == 12345

    def test_plain_number_bucket(self) -> None:
        assert recent_installs({"install": {"30d": 2500}}, "tool") == 2500

    @pytest.mark.parametrize(
        "analytics",
        [None, "oops", {"install": None}, {"install": {"30d": None}}, {"install": {"30d": "n/a"}},
         {"install": {"90d": {"tool": 99_999}}}, {"install": {"30d": True}}],
    )
    def test_malformed_analytics_not_popular(self, analytics) -> None:
        assert not is_popular("tool", analytics)


# ---------------------------------------------------------------------------
# Category classifier
# ---------------------------------------------------------------------------


class TestCategorize:
    @pytest.mark.parametrize(
        ("name", "desc", "kind", "expected"),
        [
            ("firefox", "", EntryKind.CASK, ToolCategory.BROWSERS),
            ("somebrowser", "Fast web browser", EntryKind.CASK, ToolCategory.BROWSERS),
            ("visual-studio-code", "", EntryKind.CASK, ToolCategory.DEV_TOOLS),
            ("figma", "", EntryKind.CASK, ToolCategory.DESIGN_TOOLS),
            ("slack", "", EntryKind.CASK, ToolCategory.COMMUNICATION),
            ("notion", "", EntryKind.CASK, ToolCategory.PRODUCTIVITY),
            ("node", "Platform built on V8", EntryKind.FORMULA, ToolCategory.LANGUAGES),
            ("kubectl", "", EntryKind.FORMULA, ToolCategory.DEVOPS),
            ("redis", "", EntryKind.FORMULA, ToolCategory.DATABASES),
            ("alacritty", "", EntryKind.CASK, ToolCategory.TERMINAL),
            ("xyz", "A command-line helper", EntryKind.CASK, ToolCategory.CLI_TOOLS),
            ("vlc", "", EntryKind.CASK, ToolCategory.MEDIA),
            ("bitwarden", "", EntryKind.CASK, ToolCategory.SECURITY),
            ("the-unarchiver", "", EntryKind.CASK, ToolCategory.UTILITIES),
        ],
    )
    def test_rules(self, name, desc, kind, expected) -> None:
        assert categorize(name, desc, kind) is expected

    def test_first_match_wins(self) -> None:
        # Matches both the browser keyword and the devops "cloud" keyword.
        assert categorize("x", "Web browser synced to the cloud", EntryKind.CASK) is (
            ToolCategory.BROWSERS
        )

    @pytest.mark.parametrize(
        "desc",
        [
            "Guide for writing manpages",
            "Server-side rendering helper",
            "Tool to provide consistent formatting",
            "Downloader for SoundCloud tracks",
            "Chatter box generator",
        ],
    )
    def test_keywords_match_whole_words_only(self, desc) -> None:
        assert categorize("foo", desc, EntryKind.FORMULA) is ToolCategory.CLI_TOOLS

    @pytest.mark.parametrize(
        ("desc", "expected"),
        [
            ("Lightweight IDE for Lua", ToolCategory.DEV_TOOLS),
            ("Run containers without a daemon", ToolCategory.DEVOPS),
            ("Two-factor authentication codes", ToolCategory.SECURITY),
            ("Tiling window manager", ToolCategory.PRODUCTIVITY),
        ],
    )
    def test_keyword_stems_and_plurals(self, desc, expected) -> None:
        assert categorize("foo", desc, EntryKind.FORMULA) is expected

    def test_none_description(self) -> None:
        assert categorize("zzz", None, EntryKind.FORMULA) is ToolCategory.CLI_TOOLS
