"""Show the outline of a screenplay."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from fountainkit.cli.utils.error_handler import handle_cli_error
from fountainkit.outline.models import OutlineNode, OutlineTree
from fountainkit.screenplay import ParsedScreenplay

console = Console()


def _label(node: OutlineNode) -> str:
    text = escape(node.clean_text)
    if node.is_main_title:
        return f"[bold]{text}[/bold]"
    if node.is_chapter:
        label = f"[bold cyan]{text}[/bold cyan]"
        if node.has_hierarchy_error:
            label += " [red](looks like a level 3 directive)[/red]"
        return label
    if node.is_scene_directive:
        return f"[magenta]{text}[/magenta]"
    if node.is_scene_header:
        return f"[green]{text}[/green]"
    return f"[dim]{text}[/dim]"


def _add_children(branch: Tree, node: OutlineNode, tree: OutlineTree) -> None:
    for child in tree.children(node):
        _add_children(branch.add(_label(child)), child, tree)


def outline_command(
    file: Annotated[Path, typer.Argument(help="Fountain file to outline")],
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Show chapters, scene groups, scenes and notes as a tree."""
    try:
        screenplay = ParsedScreenplay.from_file(file)
    except Exception as e:
        handle_cli_error(e)

    outline = screenplay.extract_outline()
    if json_output:
        print(json.dumps([node.to_dict() for node in outline], indent=2))
        return

    tree = OutlineTree(outline)
    root = tree.root
    if root is None:
        return

    display = Tree(_label(root))
    _add_children(display, root, tree)
    console.print(display)

    end_markers = [node for node in outline if node.is_end_marker]
    for node in end_markers:
        console.print(f"[dim]end marker: {escape(node.clean_text)}[/dim]")
    for node in tree.orphans:
        console.print(
            f"[yellow]no parent: {escape(node.clean_text)}"
            f" (level {node.level})[/yellow]"
        )
