"""Build the flat outline (title, chapters, scene groups, scenes, notes)."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from fountainkit.config import get_logger, get_settings
from fountainkit.outline.models import BLANK_LEVEL, NodeType, OutlineNode
from fountainkit.parser.elements import Element, ElementType, TitlePage

logger = get_logger(__name__)

SCENE_LEVEL = 4
NOTE_LEVEL = 5

# Level-2 headings that look like shot or transition directives
TECHNICAL_DIRECTIVES = (
    "SHOT:",
    "CUT TO:",
    "FADE IN:",
    "FADE OUT:",
    "DISSOLVE TO:",
    "MATCH CUT:",
    "SMASH CUT:",
)


@dataclass
class _PendingNode:
    """Node under construction; children are filled in as the walk goes."""

    level: int
    raw_text: str
    clean_text: str
    node_type: NodeType
    directive: str | None = None
    directive_description: str | None = None
    parent_id: str | None = None
    child_ids: list[str] = field(default_factory=list)
    is_end_marker: bool = False
    scene_id: str | None = None
    is_synthetic: bool = False
    has_hierarchy_error: bool = False
    element_index: int | None = None


def is_end_marker_text(text: str) -> bool:
    """Whether a heading reads ``END ...`` (first word, any case)."""
    words = text.strip().split()
    return bool(words) and words[0].upper() == "END"


def split_directive(text: str) -> tuple[str | None, str | None]:
    """Split ``MUSIC: song plays`` into ``("MUSIC", "song plays")``."""
    if ":" not in text:
        return None, None
    before, _, after = text.partition(":")
    return before.strip() or None, after.strip() or None


def strip_note_prefix(text: str) -> str:
    cleaned = text.strip()
    if cleaned.upper().startswith("NOTE:"):
        cleaned = cleaned[5:].strip()
    return cleaned


class OutlineBuilder:
    """Derive the outline of a screenplay from its element sequence.

    Levels follow a fixed ladder: 1 title, 2 chapter, 3 scene group, 4 scene
    heading, 5 note, with ``-1`` for the closing blank node. Every node's
    parent is the nearest preceding structural node exactly one level up,
    never a note and never an ``END`` marker.
    """

    def __init__(self, default_title: str | None = None) -> None:
        if default_title is None:
            default_title = get_settings().default_title
        self.default_title = default_title

    def build(
        self,
        elements: Sequence[Element],
        *,
        title_page: TitlePage | None = None,
        filename: str | Path | None = None,
    ) -> list[OutlineNode]:
        """Build the outline.

        Args:
            elements: Parsed screenplay elements
            title_page: Used for the title when there is no ``#`` heading
            filename: Used for the title when there is no title page title

        Returns:
            Outline nodes in document order, title first and blank last
        """
        pending: list[_PendingNode] = []
        # Most recent structural node per level
        latest: dict[int, int] = {}

        title_index = self._first_title_index(elements)
        if title_index is not None:
            title_text = elements[title_index].text.strip()
            pending.append(
                _PendingNode(
                    level=1,
                    raw_text=f"# {title_text}",
                    clean_text=title_text,
                    node_type=NodeType.SECTION_HEADER,
                    element_index=title_index,
                )
            )
        else:
            title_text = self._synthetic_title(title_page, filename)
            pending.append(
                _PendingNode(
                    level=1,
                    raw_text=f"# {title_text}",
                    clean_text=title_text,
                    node_type=NodeType.SECTION_HEADER,
                    is_synthetic=True,
                )
            )
        latest[1] = 0

        for index, element in enumerate(elements):
            if index == title_index:
                continue
            node = self._node_for(element, index)
            if node is None:
                continue

            position = len(pending)
            parent_position = self._parent_position(node, latest)
            if parent_position is not None:
                node.parent_id = _node_id(parent_position)
                pending[parent_position].child_ids.append(_node_id(position))
            elif not node.is_end_marker:
                logger.debug(
                    "Outline node has no parent",
                    level=node.level,
                    text=node.clean_text,
                    element_index=index,
                )
            pending.append(node)

            if node.node_type is not NodeType.NOTE and not node.is_end_marker:
                latest[node.level] = position
                for deeper in [lvl for lvl in latest if lvl > node.level]:
                    del latest[deeper]

        pending.append(
            _PendingNode(
                level=BLANK_LEVEL,
                raw_text="",
                clean_text="",
                node_type=NodeType.BLANK,
            )
        )

        outline = [
            OutlineNode(
                id=_node_id(position),
                index=position,
                level=node.level,
                raw_text=node.raw_text,
                clean_text=node.clean_text,
                node_type=node.node_type,
                directive=node.directive,
                directive_description=node.directive_description,
                parent_id=node.parent_id,
                child_ids=tuple(node.child_ids),
                is_end_marker=node.is_end_marker,
                scene_id=node.scene_id,
                is_synthetic=node.is_synthetic,
                has_hierarchy_error=node.has_hierarchy_error,
                element_index=node.element_index,
            )
            for position, node in enumerate(pending)
        ]

        logger.debug(
            "Built outline",
            nodes=len(outline),
            chapters=sum(1 for n in outline if n.is_chapter),
            scenes=sum(1 for n in outline if n.is_scene_header),
        )
        return outline

    @staticmethod
    def _first_title_index(elements: Sequence[Element]) -> int | None:
        for index, element in enumerate(elements):
            if element.is_section_heading and element.level == 1:
                return index
        return None

    def _synthetic_title(
        self, title_page: TitlePage | None, filename: str | Path | None
    ) -> str:
        if title_page is not None and title_page.title:
            return title_page.title
        if filename:
            stem = Path(filename).stem
            if stem:
                return stem
        return self.default_title

    @staticmethod
    def _node_for(element: Element, index: int) -> _PendingNode | None:
        if element.is_section_heading:
            text = element.text.strip()
            raw_text = f"{'#' * element.level} {text}"
            # Only one level-1 title; later ones become chapters
            level = max(element.level, 2)
            node = _PendingNode(
                level=level,
                raw_text=raw_text,
                clean_text=text,
                node_type=NodeType.SECTION_HEADER,
                element_index=index,
            )
            if level == 2:
                node.is_end_marker = is_end_marker_text(text)
                upper = text.upper()
                node.has_hierarchy_error = upper.startswith(TECHNICAL_DIRECTIVES)
            elif level == 3:
                node.directive, node.directive_description = split_directive(text)
            return node

        if element.is_scene_heading:
            return _PendingNode(
                level=SCENE_LEVEL,
                raw_text=element.text,
                clean_text=element.text.strip(),
                node_type=NodeType.SCENE_HEADER,
                scene_id=element.scene_id,
                element_index=index,
            )

        if element.element_type is ElementType.COMMENT:
            return _PendingNode(
                level=NOTE_LEVEL,
                raw_text=f"[[{element.text}]]",
                clean_text=strip_note_prefix(element.text),
                node_type=NodeType.NOTE,
                element_index=index,
            )

        return None

    @staticmethod
    def _parent_position(node: _PendingNode, latest: dict[int, int]) -> int | None:
        if node.is_end_marker:
            return None
        return latest.get(node.level - 1)


def _node_id(position: int) -> str:
    return f"outline-{position}"
