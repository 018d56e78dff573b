"""Scene browser tree: title, chapters, scene groups and scenes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from fountainkit.analysis.location import SceneLocation
from fountainkit.outline.models import OutlineNode
from fountainkit.parser.elements import Element


@dataclass(frozen=True)
class SceneNode:
    """A scene with its elements and any re-attached OVER BLACK content."""

    node: OutlineNode
    scene_elements: tuple[Element, ...]
    location: SceneLocation
    pre_scene_elements: tuple[Element, ...] | None = None

    @property
    def title(self) -> str:
        return self.node.clean_text

    @property
    def scene_id(self) -> str | None:
        return self.node.scene_id

    @property
    def has_pre_scene(self) -> bool:
        return bool(self.pre_scene_elements)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.node.id,
            "title": self.title,
            "scene_id": self.scene_id,
            "location": self.location.to_dict(),
            "scene_elements": [e.to_dict() for e in self.scene_elements],
            "pre_scene_elements": (
                [e.to_dict() for e in self.pre_scene_elements]
                if self.pre_scene_elements is not None
                else None
            ),
        }


@dataclass(frozen=True)
class SceneGroupNode:
    """Level-3 heading and the scenes under it."""

    node: OutlineNode
    scenes: tuple[SceneNode, ...] = ()

    @property
    def title(self) -> str:
        return self.node.clean_text

    @property
    def directive(self) -> str | None:
        return self.node.directive

    @property
    def directive_description(self) -> str | None:
        return self.node.directive_description

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.node.id,
            "title": self.title,
            "directive": self.directive,
            "directive_description": self.directive_description,
            "scenes": [scene.to_dict() for scene in self.scenes],
        }


@dataclass(frozen=True)
class ChapterNode:
    """Level-2 heading and its scene groups."""

    node: OutlineNode
    scene_groups: tuple[SceneGroupNode, ...] = ()

    @property
    def title(self) -> str:
        return self.node.clean_text

    @property
    def scene_count(self) -> int:
        return sum(len(group.scenes) for group in self.scene_groups)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.node.id,
            "title": self.title,
            "has_hierarchy_error": self.node.has_hierarchy_error,
            "scene_groups": [group.to_dict() for group in self.scene_groups],
        }


@dataclass(frozen=True)
class SceneBrowserTree:
    """Hierarchical scene view of a screenplay."""

    title: OutlineNode | None
    chapters: tuple[ChapterNode, ...] = ()

    @property
    def scenes(self) -> list[SceneNode]:
        """Every scene in document order."""
        return [
            scene
            for chapter in self.chapters
            for group in chapter.scene_groups
            for scene in group.scenes
        ]

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title.to_dict() if self.title is not None else None,
            "chapters": [chapter.to_dict() for chapter in self.chapters],
        }
