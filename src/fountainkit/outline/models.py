"""Outline node model and tree navigation helpers."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from fountainkit.parser.elements import Element

BLANK_LEVEL = -1


class NodeType(Enum):
    """Kind of an outline node."""

    SECTION_HEADER = "sectionHeader"
    SCENE_HEADER = "sceneHeader"
    NOTE = "note"
    BLANK = "blank"


@dataclass(frozen=True)
class OutlineNode:
    """One entry of the flat outline.

    Hierarchy is expressed only through ``parent_id`` and ``child_ids``, so a
    list of nodes can be serialized as-is and rebuilt without cycles.
    """

    id: str
    index: int
    level: int
    raw_text: str
    clean_text: str
    node_type: NodeType
    directive: str | None = None
    directive_description: str | None = None
    parent_id: str | None = None
    child_ids: tuple[str, ...] = ()
    is_end_marker: bool = False
    scene_id: str | None = None
    is_synthetic: bool = False
    has_hierarchy_error: bool = False
    element_index: int | None = None

    @property
    def is_main_title(self) -> bool:
        return self.level == 1 and self.node_type is NodeType.SECTION_HEADER

    @property
    def is_chapter(self) -> bool:
        return (
            self.level == 2
            and self.node_type is NodeType.SECTION_HEADER
            and not self.is_end_marker
        )

    @property
    def is_scene_directive(self) -> bool:
        return self.level == 3 and self.node_type is NodeType.SECTION_HEADER

    @property
    def is_scene_header(self) -> bool:
        return self.node_type is NodeType.SCENE_HEADER

    @property
    def is_blank(self) -> bool:
        return self.node_type is NodeType.BLANK

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "index": self.index,
            "level": self.level,
            "raw_text": self.raw_text,
            "clean_text": self.clean_text,
            "type": self.node_type.value,
            "directive": self.directive,
            "directive_description": self.directive_description,
            "parent_id": self.parent_id,
            "child_ids": list(self.child_ids),
            "is_end_marker": self.is_end_marker,
            "scene_id": self.scene_id,
            "is_synthetic": self.is_synthetic,
            "has_hierarchy_error": self.has_hierarchy_error,
            "element_index": self.element_index,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> OutlineNode:
        return cls(
            id=data["id"],
            index=int(data["index"]),
            level=int(data["level"]),
            raw_text=data.get("raw_text", ""),
            clean_text=data.get("clean_text", ""),
            node_type=NodeType(data.get("type", NodeType.SECTION_HEADER.value)),
            directive=data.get("directive"),
            directive_description=data.get("directive_description"),
            parent_id=data.get("parent_id"),
            child_ids=tuple(data.get("child_ids", ())),
            is_end_marker=bool(data.get("is_end_marker", False)),
            scene_id=data.get("scene_id"),
            is_synthetic=bool(data.get("is_synthetic", False)),
            has_hierarchy_error=bool(data.get("has_hierarchy_error", False)),
            element_index=data.get("element_index"),
        )


def scene_span(elements: Sequence[Element], scene_id: str) -> list[Element]:
    """Elements of one scene, from its heading up to the next heading.

    The scene is found by ``scene_id`` so duplicate sluglines never mix.
    Returns an empty list when no heading carries ``scene_id``.
    """
    span: list[Element] = []
    found = False
    for element in elements:
        if element.is_scene_heading:
            if found:
                break
            if element.scene_id == scene_id:
                found = True
        if found:
            span.append(element)
    return span


class OutlineTree:
    """Id-indexed view over a flat outline for navigation."""

    def __init__(self, nodes: Sequence[OutlineNode]) -> None:
        self.nodes: tuple[OutlineNode, ...] = tuple(nodes)
        self._by_id = {node.id: node for node in self.nodes}

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[OutlineNode]:
        return iter(self.nodes)

    @property
    def root(self) -> OutlineNode | None:
        """The document title node."""
        for node in self.nodes:
            if node.is_main_title:
                return node
        return None

    def node(self, node_id: str) -> OutlineNode | None:
        return self._by_id.get(node_id)

    def parent(self, node: OutlineNode) -> OutlineNode | None:
        if node.parent_id is None:
            return None
        return self._by_id.get(node.parent_id)

    def children(self, node: OutlineNode) -> list[OutlineNode]:
        return [self._by_id[cid] for cid in node.child_ids if cid in self._by_id]

    def descendants(self, node: OutlineNode) -> list[OutlineNode]:
        """All nodes below ``node``, depth first in document order."""
        result: list[OutlineNode] = []
        for child in self.children(node):
            result.append(child)
            result.extend(self.descendants(child))
        return result

    def depth(self, node: OutlineNode) -> int:
        """Number of ancestors of ``node``."""
        depth = 0
        current = self.parent(node)
        while current is not None:
            depth += 1
            current = self.parent(current)
        return depth

    @property
    def all_nodes(self) -> list[OutlineNode]:
        """The root followed by its descendants."""
        root = self.root
        if root is None:
            return []
        return [root, *self.descendants(root)]

    @property
    def leaf_nodes(self) -> list[OutlineNode]:
        return [node for node in self.all_nodes if not node.child_ids]

    @property
    def orphans(self) -> list[OutlineNode]:
        """Nodes that should have a parent but none was found."""
        return [
            node
            for node in self.nodes
            if node.parent_id is None
            and not node.is_main_title
            and not node.is_end_marker
            and not node.is_blank
        ]

    def scene_text(self, node: OutlineNode, elements: Sequence[Element]) -> str:
        """Plain text of a scene: heading plus its elements.

        Non-scene nodes return their own clean text.
        """
        if not node.is_scene_header or node.scene_id is None:
            return node.clean_text
        texts = [node.clean_text]
        texts.extend(e.text for e in scene_span(elements, node.scene_id)[1:])
        return "\n\n".join(texts)
