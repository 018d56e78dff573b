"""Assemble the scene browser tree from an outline and its elements."""

from __future__ import annotations

from collections.abc import Sequence

from fountainkit.analysis.location import SceneLocation
from fountainkit.browser.models import (
    ChapterNode,
    SceneBrowserTree,
    SceneGroupNode,
    SceneNode,
)
from fountainkit.config import get_logger
from fountainkit.outline.models import OutlineNode, OutlineTree, scene_span
from fountainkit.parser.elements import Element

logger = get_logger(__name__)

OVER_BLACK = "OVER BLACK"


def is_over_black(node: OutlineNode) -> bool:
    return OVER_BLACK in node.clean_text.upper()


class SceneBrowserAssembler:
    """Turn an outline into chapters, scene groups and scenes.

    Scenes whose heading reads ``OVER BLACK`` are not shown on their own.
    Their content (without the heading) is carried forward and handed to
    the next real scene of the same group as ``pre_scene_elements``.
    OVER BLACK content with no following scene in its group is dropped.
    """

    def assemble(
        self, outline: Sequence[OutlineNode], elements: Sequence[Element]
    ) -> SceneBrowserTree:
        """Assemble the browser tree.

        Args:
            outline: Nodes from :class:`~fountainkit.outline.OutlineBuilder`
            elements: The element sequence the outline was built from

        Returns:
            Scene browser tree
        """
        tree = OutlineTree(outline)
        title = tree.root

        chapters = tuple(
            ChapterNode(
                node=chapter,
                scene_groups=tuple(
                    self._assemble_group(group, tree, elements)
                    for group in tree.children(chapter)
                    if group.level == 3
                ),
            )
            for chapter in tree.nodes
            if chapter.is_chapter
        )

        browser = SceneBrowserTree(title=title, chapters=chapters)
        logger.debug(
            "Assembled scene browser",
            chapters=len(chapters),
            scenes=len(browser.scenes),
        )
        return browser

    def _assemble_group(
        self,
        group: OutlineNode,
        tree: OutlineTree,
        elements: Sequence[Element],
    ) -> SceneGroupNode:
        scenes: list[SceneNode] = []
        pending: list[Element] = []

        for child in tree.children(group):
            if not child.is_scene_header:
                continue
            span = scene_span(elements, child.scene_id) if child.scene_id else []

            if is_over_black(child):
                pending.extend(span[1:])
                continue

            scenes.append(
                SceneNode(
                    node=child,
                    scene_elements=tuple(span),
                    location=SceneLocation.parse(child.clean_text),
                    pre_scene_elements=tuple(pending) if pending else None,
                )
            )
            pending = []

        if pending:
            logger.debug(
                "Dropping trailing OVER BLACK content",
                group=group.clean_text,
                elements=len(pending),
            )

        return SceneGroupNode(node=group, scenes=tuple(scenes))
