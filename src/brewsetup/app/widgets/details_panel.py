"""Details panel widget for displaying catalog entry information."""

from __future__ import annotations

from textual.containers import Vertical
from textual.widgets import Static

from brewsetup.core.models import CatalogEntry


class DetailsPanel(Vertical):
    """Panel to show details of the highlighted entry."""

    def compose(self):
        yield Static("Details", classes="details_title")
        yield Static("Select a tool to see details", id="details_body")

    def show_entry(self, entry: CatalogEntry) -> None:
        """Update the panel to show an entry.

        Args:
            entry: The highlighted catalog entry.
        """
        lines = [
            f"[b]{entry.name}[/b]",
            entry.description,
            "",
            f"Category: {entry.category.value}",
            f"Kind: {entry.kind.value}",
            f"Install: {entry.install_command}",
        ]
        if entry.version:
            lines.append(f"Version: {entry.version}")
        if entry.homepage:
            lines.append(f"Homepage: {entry.homepage}")
        if entry.popular:
            lines.append("[yellow]Popular[/yellow]")
        self.query_one("#details_body", Static).update("\n".join(lines))
