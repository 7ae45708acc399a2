"""Shared helpers for alertfmt CLI commands."""

import logging

from rich.console import Console
from rich.markup import escape

# Exit codes
EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_CONFIG_ERROR = 2

console = Console()


def _error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]Error:[/red] {escape(message)}", highlight=False)


def _success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]✓[/green] {escape(message)}", highlight=False)


def _output(text: str) -> None:
    """Print command output verbatim (no markup, no wrapping)."""
    console.print(text, markup=False, highlight=False, soft_wrap=True)


def _setup_logging(verbose: bool) -> None:
    """Configure root logging for CLI runs.

    Args:
        verbose: Log at DEBUG instead of WARNING.

    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
