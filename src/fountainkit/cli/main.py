"""The `fountainkit` command and its global options."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console

from fountainkit import __version__
from fountainkit.cli.commands import (
    browse_command,
    elements_command,
    locations_command,
    outline_command,
)
from fountainkit.cli.utils.error_handler import handle_cli_error
from fountainkit.config import (
    configure_logging,
    get_logger,
    get_settings_for_cli,
    set_settings,
)

logger = get_logger(__name__)
console = Console()

app = typer.Typer(
    name="fountainkit",
    help="Parse Fountain screenplays into elements, outlines and scene trees",
    pretty_exceptions_enable=False,
    add_completion=False,
    rich_markup_mode="rich",
)

app.command(name="elements")(elements_command)
app.command(name="outline")(outline_command)
app.command(name="browse")(browse_command)
app.command(name="locations")(locations_command)


@app.command()
def version() -> None:
    """Print the installed fountainkit version."""
    console.print(f"fountainkit v{__version__}")


@app.callback()
def main_callback(
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Settings file to use instead of the discovered ones "
            "(.yaml, .toml or .json)",
            envvar="FOUNTAINKIT_CONFIG",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose", "-v", help="Log progress at INFO level and show error details"
        ),
    ] = False,
    debug: Annotated[
        bool,
        typer.Option("--debug", help="Log everything at DEBUG level, with call sites"),
    ] = False,
) -> None:
    """Apply --config, --verbose and --debug before any command runs."""
    overrides: dict[str, Any] = {}
    if debug:
        overrides.update(debug=True, log_level="DEBUG")
    elif verbose:
        overrides["log_level"] = "INFO"

    if not config and not overrides:
        return

    try:
        settings = get_settings_for_cli(config_file=config, cli_overrides=overrides)
    except Exception as e:
        handle_cli_error(e, verbose=verbose or debug)

    set_settings(settings)
    configure_logging(settings)
    logger.debug("Settings loaded", config_file=str(config) if config else None)


def main() -> None:
    """Run the fountainkit command line."""
    app()


if __name__ == "__main__":
    main()
