"""List parsed screenplay elements."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from fountainkit.cli.utils.error_handler import handle_cli_error
from fountainkit.screenplay import ParsedScreenplay

console = Console()


def elements_command(
    file: Annotated[Path, typer.Argument(help="Fountain file to parse")],
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Show every element of a screenplay with its type."""
    try:
        screenplay = ParsedScreenplay.from_file(file)
    except Exception as e:
        handle_cli_error(e)

    if json_output:
        print(json.dumps(screenplay.to_dict(), indent=2))
        return

    if screenplay.title_page:
        for entry in screenplay.title_page:
            values = escape(" / ".join(entry.values))
            console.print(f"[bold]{escape(entry.key)}:[/bold] {values}")
        console.print()

    table = Table(title=escape(screenplay.filename), show_lines=False)
    table.add_column("#", style="dim", justify="right")
    table.add_column("Type", style="cyan")
    table.add_column("Text", no_wrap=False)
    table.add_column("Scene", style="yellow", justify="center")

    for index, element in enumerate(screenplay.elements):
        label = element.element_type.value
        if element.is_section_heading:
            label += f" ({element.level})"
        if element.is_centered:
            label += " \\[centered]"
        if element.is_dual_dialogue:
            label += " \\[dual]"
        table.add_row(
            str(index),
            label,
            escape(element.text),
            escape(element.scene_number or ""),
        )

    console.print(table)
