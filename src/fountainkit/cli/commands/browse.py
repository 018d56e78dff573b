"""Show the scene browser tree of a screenplay."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from fountainkit.cli.utils.error_handler import handle_cli_error
from fountainkit.screenplay import ParsedScreenplay

console = Console()


def browse_command(
    file: Annotated[Path, typer.Argument(help="Fountain file to browse")],
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Show chapters, scene groups and scenes with their locations."""
    try:
        screenplay = ParsedScreenplay.from_file(file)
    except Exception as e:
        handle_cli_error(e)

    browser = screenplay.extract_scene_browser()
    if json_output:
        print(json.dumps(browser.to_dict(), indent=2))
        return

    title = browser.title.clean_text if browser.title else screenplay.filename
    display = Tree(f"[bold]{escape(title)}[/bold]")

    if not browser.chapters:
        console.print(display)
        console.print("[yellow]No chapters found (use ## headings)[/yellow]")
        return

    for chapter in browser.chapters:
        chapter_branch = display.add(
            f"[bold cyan]{escape(chapter.title)}[/bold cyan]"
            f" [dim]({chapter.scene_count} scenes)[/dim]"
        )
        for group in chapter.scene_groups:
            group_branch = chapter_branch.add(
                f"[magenta]{escape(group.title)}[/magenta]"
            )
            for scene in group.scenes:
                label = f"[green]{escape(scene.title)}[/green]"
                location = scene.location
                if location.time_of_day:
                    label += f" [dim]{escape(location.time_of_day)}[/dim]"
                label += f" [dim]({len(scene.scene_elements)} elements)[/dim]"
                if scene.pre_scene_elements:
                    label += (
                        f" [yellow]+{len(scene.pre_scene_elements)} OVER BLACK[/yellow]"
                    )
                group_branch.add(label)

    console.print(display)
