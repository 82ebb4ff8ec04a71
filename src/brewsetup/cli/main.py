"""CLI entry point for the brewsetup catalog."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from typing import Awaitable, Callable, List, Optional, TypeVar

import typer

from brewsetup.catalog.ranking import EDITORS_PICKS
from brewsetup.catalog.script import render_install_script
from brewsetup.cli.renderers import console, entry_details, entry_table
from brewsetup.core.config import discover_settings
from brewsetup.core.errors import (
    EXIT_SYSTEM_ERROR,
    EXIT_TRANSIENT_ERROR,
    EXIT_USER_ERROR,
    BrewSetupError,
    SystemError,
    ToolNotFoundError,
    TransientError,
    UserError,
    format_error_message,
    suggest_search,
)
from brewsetup.core.logging import configure_logging, get_logger
from brewsetup.core.models import ToolCategory
from brewsetup.core.repo import CatalogRepository
from brewsetup.core.store import CatalogStore

configure_logging(enable_console=True)

log = get_logger(__name__)

app = typer.Typer(help="brewsetup: pick developer tools and generate an install script.")

T = TypeVar("T")

CATEGORY_HELP = ", ".join([c.value for c in ToolCategory] + [EDITORS_PICKS])


def handle_error(error: Exception) -> int:
    """Handle errors and return appropriate exit codes.

    Args:
        error: The exception to handle.

    Returns:
        An integer exit code.
    """
    if isinstance(error, BrewSetupError):
        log.error(
            "cli_error",
            error_type=type(error).__name__,
            message=error.message,
            context=error.context,
        )
        console.print(f"\n{format_error_message(error)}\n", style="bold red")

        if isinstance(error, ToolNotFoundError):
            tool = error.context.get("tool", "")
            console.print(suggest_search(tool), style="dim")

        if isinstance(error, TransientError):
            return EXIT_TRANSIENT_ERROR
        elif isinstance(error, UserError):
            return EXIT_USER_ERROR
        elif isinstance(error, SystemError):
            return EXIT_SYSTEM_ERROR
        else:
            return EXIT_USER_ERROR
    else:
        log.error(
            "unexpected_error",
            error=str(error),
            exc_info=True
        )
        console.print(
            f"\n⚠️ Unexpected error occurred: {error}\n",
            style="bold red"
        )
        return EXIT_SYSTEM_ERROR


def with_store(action: Callable[[CatalogStore], T | Awaitable[T]]) -> T:
    """Load the catalog, run ``action`` against the store and clean up."""

    async def runner() -> T:
        store = CatalogStore(CatalogRepository(settings=discover_settings()))
        try:
            with console.status("Fetching Homebrew catalog..."):
                await store.load()
            if store.error:
                console.print(
                    f"⚠️ Registry unavailable ({store.error}); showing cached or curated tools.\n",
                    style="bold yellow",
                )
            result = action(store)
            if asyncio.iscoroutine(result):
                result = await result
            return result  # type: ignore[return-value]
        finally:
            await store.repository.aclose()

    return asyncio.run(runner())


@app.command()
def search(
    term: str,
    limit: int = typer.Option(25, "--limit", "-n", help="Maximum rows to show"),
) -> None:
    """Fuzzy search the whole catalog.

    Args:
        term: Search text.
        limit: Maximum number of rows.
    """
    try:
        results = with_store(lambda store: store.query(search=term))
        console.print(entry_table(results[:limit], title=f"Results for '{term}'"))
        if len(results) > limit:
            console.print(f"[dim]{len(results) - limit} more not shown[/dim]")
    except Exception as e:
        sys.exit(handle_error(e))


@app.command()
def browse(
    category: Optional[str] = typer.Option(
        None, "--category", "-c", help=CATEGORY_HELP
    ),
    show_all: bool = typer.Option(False, "--all", "-a", help="Show every entry"),
) -> None:
    """Browse the catalog, popular tools first.

    Args:
        category: Category to browse; all categories when omitted.
        show_all: Disable the showcase window.
    """
    try:
        results = with_store(lambda store: store.query(category=category, show_all=show_all))
        console.print(entry_table(results, title=category or "All tools"))
    except Exception as e:
        sys.exit(handle_error(e))


@app.command()
def picks(
    show_all: bool = typer.Option(False, "--all", "-a", help="Show every pick"),
) -> None:
    """Show the editor's picks."""
    try:
        results = with_store(lambda store: store.query(category=EDITORS_PICKS, show_all=show_all))
        console.print(entry_table(results, title="Editor's picks"))
    except Exception as e:
        sys.exit(handle_error(e))


@app.command()
def popular(
    limit: int = typer.Option(50, "--limit", "-n", help="Maximum rows to show"),
) -> None:
    """List popular registry packages alphabetically."""
    try:
        results = with_store(lambda store: store.repository.get_popular_packages(limit))
        console.print(entry_table(results, title="Popular packages"))
    except Exception as e:
        sys.exit(handle_error(e))


@app.command()
def info(name: str) -> None:
    """Show detailed information about a tool.

    Args:
        name: Tool name, id, token or install command.
    """
    try:
        entry = with_store(lambda store: store.find(name))
        if entry is None:
            raise ToolNotFoundError(tool=name)
        console.print(entry_details(entry))
    except Exception as e:
        sys.exit(handle_error(e))


@app.command()
def script(
    names: List[str] = typer.Argument(..., help="Tools to install"),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write the script to this file"
    ),
) -> None:
    """Generate an install script for the named tools.

    Args:
        names: Tool names, ids or tokens.
        output: Optional destination file; printed to stdout otherwise.
    """
    try:
        def select(store: CatalogStore):
            chosen = []
            for name in names:
                entry = store.find(name)
                if entry is None:
                    raise ToolNotFoundError(tool=name)
                chosen.append(entry)
            return chosen

        entries = with_store(select)
        filename = output.name if output else "setup-macos.sh"
        text = render_install_script(entries, filename=filename)

        if output:
            output.write_text(text)
            output.chmod(0o755)
            console.print(f"✓ Script written to {output}", style="bold green")
        else:
            typer.echo(text)
    except Exception as e:
        sys.exit(handle_error(e))


if __name__ == "__main__":
    app()
