"""Key mappings for the brewsetup application."""

from textual.binding import Binding

KEY_BINDINGS = [
    Binding("q", "quit", "Quit"),
    Binding("/", "focus_search", "Search"),
    Binding("space", "toggle_selected", "Select"),
    Binding("r", "refresh_all", "Refresh"),
    Binding("e", "export", "Export script"),
]
