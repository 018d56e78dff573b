"""Screenplay outline extraction."""

from __future__ import annotations

from .builder import OutlineBuilder
from .models import NodeType, OutlineNode, OutlineTree, scene_span

__all__ = ["NodeType", "OutlineBuilder", "OutlineNode", "OutlineTree", "scene_span"]
