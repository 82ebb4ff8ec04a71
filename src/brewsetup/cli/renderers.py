"""Renderers for displaying catalog entries in the CLI using Rich."""

from __future__ import annotations

from typing import Iterable

from rich import box
from rich.console import Console
from rich.table import Table

from brewsetup.core.models import CatalogEntry, EntryKind

console = Console()

KIND_LABELS = {
    EntryKind.CURATED: "[magenta]curated[/magenta]",
    EntryKind.FORMULA: "[cyan]formula[/cyan]",
    EntryKind.CASK: "[blue]cask[/blue]",
}


def popular_marker(entry: CatalogEntry) -> str:
    return "[yellow]★[/yellow]" if entry.popular else ""


def entry_table(entries: Iterable[CatalogEntry], title: str | None = None) -> Table:
    """Create a Rich Table listing catalog entries.

    Args:
        entries: The entries to display, already ranked.
        title: Optional table title.

    Returns:
        A Rich Table with one row per entry.
    """
    table = Table(box=box.MINIMAL_HEAVY_HEAD, title=title)
    table.add_column("", width=1)
    table.add_column("Name", style="bold")
    table.add_column("Category")
    table.add_column("Kind")
    table.add_column("Install")
    table.add_column("Description", style="dim", overflow="ellipsis", max_width=60)

    for e in entries:
        table.add_row(
            popular_marker(e),
            e.name,
            e.category.value,
            KIND_LABELS.get(e.kind, e.kind.value),
            e.install_command,
            e.description,
        )

    return table


def entry_details(entry: CatalogEntry) -> Table:
    """Display detailed information about a catalog entry.

    Args:
        entry: The entry to display.

    Returns:
        A Rich Table with one row per field.
    """
    t = Table(box=box.MINIMAL_HEAVY_HEAD)
    t.add_column("Field", style="bold")
    t.add_column("Value")
    t.add_row("Name", entry.name)
    t.add_row("Id", entry.id)
    t.add_row("Kind", entry.kind.value)
    t.add_row("Category", entry.category.value)
    t.add_row("Description", entry.description)
    t.add_row("Install", entry.install_command)
    t.add_row("Popular", "yes" if entry.popular else "no")
    if entry.version:
        t.add_row("Version", entry.version)
    if entry.homepage:
        t.add_row("Homepage", entry.homepage)
    if entry.dev_pick:
        t.add_row("Editor's pick", "yes")

    return t
