"""Shared console helpers for crudy.

Rich-based output for the CLI driver: a stdout console for results, a stderr
console for errors, and an optional Rich logging handler for ``--verbose``.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

console = Console()
err_console = Console(stderr=True)


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


def setup_logging(verbose: bool = False) -> None:
    """Route ``crudy`` log records through Rich.

    Args:
        verbose: Emit DEBUG records (one per directory and file written);
            otherwise only warnings and above.
    """
    logger = logging.getLogger("crudy")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        logger.addHandler(RichHandler(console=err_console, show_path=False))


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{escape(message)}[/bold green]", highlight=False, soft_wrap=True)


def print_error(message: str) -> None:
    """Print a red error message to stderr."""
    err_console.print(f"[bold red]Error:[/bold red] {escape(message)}", highlight=False, soft_wrap=True)


def print_warning(message: str) -> None:
    """Print a yellow warning message to stderr."""
    err_console.print(f"[bold yellow]{escape(message)}[/bold yellow]", highlight=False, soft_wrap=True)
