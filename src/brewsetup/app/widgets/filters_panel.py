"""Widget for the filters panel in the brewsetup application."""

from __future__ import annotations

from textual.containers import Vertical
from textual.widgets import Checkbox, Input, Label, Select

from brewsetup.catalog.ranking import EDITORS_PICKS
from brewsetup.core.models import ToolCategory

CATEGORY_OPTIONS = [("All", "all"), ("Editor's picks", EDITORS_PICKS)] + [
    (c.value.replace("-", " ").title(), c.value) for c in ToolCategory
]


class FiltersPanel(Vertical):
    """Panel for filtering the catalog."""

    def compose(self):
        """Compose the filters panel UI."""
        yield Label("Filters", id="filters_title")
        yield Input(placeholder="Search tools...", id="search_input")
        yield Select(CATEGORY_OPTIONS, value="all", allow_blank=False, id="filters_category")
        yield Checkbox("Show all", id="filters_show_all")
