"""Widget to display a table of catalog entries."""

from __future__ import annotations

from textual.message import Message
from textual.widgets import DataTable

from brewsetup.core.models import CatalogEntry


class PackageTable(DataTable):
    """Widget to display a table of catalog entries."""

    class EntryHighlighted(Message):
        """Message sent when the cursor moves onto an entry."""
        def __init__(self, entry: CatalogEntry) -> None:
            self.entry = entry
            super().__init__()

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._entries: dict[str, CatalogEntry] = {}

    def on_mount(self) -> None:
        """Called when the widget is mounted."""
        self.zebra_stripes = True
        self.cursor_type = "row"

        self.add_column("", key="selected", width=1)
        self.add_column("★", key="popular", width=1)
        self.add_column("Name", key="name")
        self.add_column("Category", key="category")
        self.add_column("Kind", key="kind")
        self.add_column("Description", key="description")

    def load_entries(self, entries: list[CatalogEntry], selected: set[str]) -> None:
        """Replace the rows, keeping the ranking order of ``entries``."""
        self.clear()
        self._entries = {}
        for e in entries:
            self._entries[e.install_command] = e
            self.add_row(
                "✓" if e.install_command in selected else "",
                "★" if e.popular else "",
                e.name,
                e.category.value,
                e.kind.value,
                e.description,
                key=e.install_command,
            )

    def current_entry(self) -> CatalogEntry | None:
        if not self._entries or self.cursor_row < 0 or self.cursor_row >= self.row_count:
            return None
        row_key, _ = self.coordinate_to_cell_key(self.cursor_coordinate)
        return self._entries.get(str(row_key.value))

    def on_data_table_row_highlighted(self, event: DataTable.RowHighlighted) -> None:
        """Handle cursor movement."""
        if event.row_key is not None and event.row_key.value in self._entries:
            self.post_message(self.EntryHighlighted(self._entries[event.row_key.value]))
