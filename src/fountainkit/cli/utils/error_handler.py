"""Report command failures on stderr and exit with a non-zero status."""

from __future__ import annotations

from typing import Any, NoReturn

import typer
from rich.console import Console
from rich.markup import escape
from rich.traceback import Traceback

from fountainkit.config import get_logger
from fountainkit.exceptions import FountainKitError

logger = get_logger(__name__)
console = Console(stderr=True)


def _describe(error: Exception) -> tuple[str, str | None, dict[str, Any] | None]:
    """Message, hint and details to show for ``error``."""
    if isinstance(error, FountainKitError):
        return error.message, error.hint, error.details
    if isinstance(error, FileNotFoundError):
        return (
            f"File not found: {error}",
            "Check that the file path is correct",
            {"filename": error.filename} if error.filename else None,
        )
    return f"Unexpected error: {error!s}", None, None


def handle_cli_error(
    error: Exception, verbose: bool = False, exit_code: int = 1
) -> NoReturn:
    """Print ``error`` for the user, log it and leave the command.

    Known errors (our own and missing files) get their message and hint.
    Anything else is reported as unexpected, with a traceback in verbose
    mode.

    Args:
        error: The exception that was raised
        verbose: Show error details or the full traceback
        exit_code: Status passed to :class:`typer.Exit`

    Raises:
        typer.Exit: Always
    """
    message, hint, details = _describe(error)
    expected = isinstance(error, (FountainKitError, FileNotFoundError))

    console.print(f"[red]✗ {escape(message)}[/red]")
    if hint:
        console.print(f"[yellow]→ {escape(hint)}[/yellow]")

    if verbose and details:
        console.print("\n[dim]Details:[/dim]")
        for key, value in details.items():
            key_text, value_text = escape(str(key)), escape(str(value))
            console.print(f"  [dim]{key_text}:[/dim] {value_text}")

    if not expected:
        if verbose:
            console.print(
                Traceback.from_exception(type(error), error, error.__traceback__)
            )
        else:
            console.print("[dim]Run with --verbose for full error details[/dim]")

    logger.error(
        "Command failed",
        error_type=type(error).__name__,
        message=message,
        details=details,
        exit_code=exit_code,
        exc_info=False if expected else error,
    )
    raise typer.Exit(exit_code)
