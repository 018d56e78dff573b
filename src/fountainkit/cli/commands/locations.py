"""Location breakdown of a screenplay."""

from __future__ import annotations

import json
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from fountainkit.cli.utils.error_handler import handle_cli_error
from fountainkit.screenplay import ParsedScreenplay

console = Console()


class LocationSort(str, Enum):
    """Ordering of the location breakdown."""

    APPEARANCE = "appearance"
    FREQUENCY = "frequency"


def locations_command(
    file: Annotated[Path, typer.Argument(help="Fountain file to analyze")],
    sort: Annotated[
        LocationSort,
        typer.Option("--sort", "-s", help="Order by first appearance or scene count"),
    ] = LocationSort.APPEARANCE,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """List every location with its scene count, lighting and times of day."""
    try:
        screenplay = ParsedScreenplay.from_file(file)
    except Exception as e:
        handle_cli_error(e)

    if sort is LocationSort.FREQUENCY:
        groups = screenplay.locations_by_frequency()
    else:
        groups = screenplay.locations_by_appearance()

    if json_output:
        print(json.dumps([group.to_dict() for group in groups], indent=2))
        return

    if not groups:
        console.print("[yellow]No scene headings found.[/yellow]")
        return

    table = Table(title="Locations", show_lines=False)
    table.add_column("Location", style="cyan", no_wrap=False)
    table.add_column("Scenes", justify="right")
    table.add_column("Lighting", style="green")
    table.add_column("Times of day", style="yellow")

    for group in groups:
        lighting = sorted(
            {lt.standard_abbreviation or "?" for lt in group.lighting_types}
        )
        table.add_row(
            escape(group.representative_location.full_location),
            str(group.scene_count),
            ", ".join(lighting),
            escape(", ".join(sorted(group.times_of_day))) or "-",
        )

    console.print(table)
