"""fountainkit CLI commands."""

from __future__ import annotations

from fountainkit.cli.commands.browse import browse_command
from fountainkit.cli.commands.elements import elements_command
from fountainkit.cli.commands.locations import locations_command
from fountainkit.cli.commands.outline import outline_command

__all__ = [
    "browse_command",
    "elements_command",
    "locations_command",
    "outline_command",
]
