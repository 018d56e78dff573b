"""Scene browser assembly."""

from __future__ import annotations

from .assembler import SceneBrowserAssembler, is_over_black
from .models import ChapterNode, SceneBrowserTree, SceneGroupNode, SceneNode

__all__ = [
    "ChapterNode",
    "SceneBrowserAssembler",
    "SceneBrowserTree",
    "SceneGroupNode",
    "SceneNode",
    "is_over_black",
]
