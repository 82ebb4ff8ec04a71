"""Main application module for brewsetup."""

from __future__ import annotations

from pathlib import Path

from textual.app import App, ComposeResult
from textual.containers import Horizontal, Vertical
from textual.widgets import Checkbox, Footer, Header, Input, Select

from brewsetup.catalog.script import render_install_script
from brewsetup.core.config import discover_settings
from brewsetup.core.logging import get_logger
from brewsetup.core.models import CatalogEntry
from brewsetup.core.repo import CatalogRepository
from brewsetup.core.store import CatalogStore

from .keymap import KEY_BINDINGS
from .widgets.details_panel import DetailsPanel
from .widgets.filters_panel import FiltersPanel
from .widgets.package_table import PackageTable

log = get_logger(__name__)

SCRIPT_PATH = Path("setup-macos.sh")


class BrewSetup(App):
    """Main application class for brewsetup."""

    TITLE = "brewsetup"
    BINDINGS = KEY_BINDINGS

    def __init__(self, store: CatalogStore | None = None) -> None:
        super().__init__()
        self.store = store or CatalogStore(CatalogRepository(settings=discover_settings()))
        self.selection: dict[str, CatalogEntry] = {}

    def compose(self) -> ComposeResult:
        """Compose the UI layout.

        Returns:
            ComposeResult: The composed UI elements.
        """
        yield Header()
        with Horizontal(id="main"):
            yield FiltersPanel(id="filters")
            with Vertical(id="center"):
                yield PackageTable(id="table")
            yield DetailsPanel(id="details")
        yield Footer()

    def on_mount(self) -> None:
        """Called when the app is mounted."""
        self.store.subscribe(self._show_results)
        self.call_after_refresh(self._show_results, self.store.results)
        self.run_worker(self.store.load(), exclusive=True)

    async def on_unmount(self) -> None:
        await self.store.repository.aclose()

    def _show_results(self, results: list[CatalogEntry]) -> None:
        table = self.query_one("#table", PackageTable)
        table.load_entries(results, set(self.selection))
        status = "loading…" if self.store.loading else f"{len(results)} tools"
        if self.store.error:
            status += " · registry unavailable"
        self.sub_title = f"{status} · {len(self.selection)} selected"

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "search_input":
            self.store.set_search_text(event.value)

    def on_select_changed(self, event: Select.Changed) -> None:
        if event.select.id == "filters_category":
            self.query_one("#search_input", Input).value = ""
            self.store.set_category(str(event.value))

    def on_checkbox_changed(self, event: Checkbox.Changed) -> None:
        if event.checkbox.id == "filters_show_all":
            self.store.set_show_all(event.value)

    def on_package_table_entry_highlighted(self, event: PackageTable.EntryHighlighted) -> None:
        self.query_one("#details", DetailsPanel).show_entry(event.entry)

    def action_focus_search(self) -> None:
        self.query_one("#search_input", Input).focus()

    def action_toggle_selected(self) -> None:
        entry = self.query_one("#table", PackageTable).current_entry()
        if entry is None:
            return
        if entry.install_command in self.selection:
            del self.selection[entry.install_command]
        else:
            self.selection[entry.install_command] = entry
        self._show_results(self.store.results)

    async def action_refresh_all(self) -> None:
        self.notify("Refreshing Homebrew catalog...")
        await self.store.refresh()
        if self.store.error:
            self.notify(f"Refresh failed: {self.store.error}", severity="warning")

    def action_export(self) -> None:
        if not self.selection:
            self.notify("No tools selected.", severity="warning")
            return
        SCRIPT_PATH.write_text(render_install_script(self.selection.values(), SCRIPT_PATH.name))
        log.info("script_exported", path=str(SCRIPT_PATH), count=len(self.selection))
        self.notify(f"Script written to {SCRIPT_PATH}. Run it with: bash {SCRIPT_PATH}")


def run() -> None:
    """Run the brewsetup application."""
    BrewSetup().run()


if __name__ == "__main__":
    run()
