"""Parsed screenplay facade tying the pipeline stages together."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from fountainkit.analysis.locations import (
    LocationGroup,
    SceneWithLocation,
    extract_scene_locations,
    group_scenes_by_location,
    locations_by_appearance,
    locations_by_frequency,
)
from fountainkit.browser.assembler import SceneBrowserAssembler
from fountainkit.browser.models import SceneBrowserTree
from fountainkit.outline.builder import OutlineBuilder
from fountainkit.outline.models import OutlineNode, OutlineTree
from fountainkit.parser.elements import Element, TitlePage
from fountainkit.parser.fountain_parser import FountainParser


@dataclass(frozen=True)
class ParsedScreenplay:
    """A screenplay as elements plus title page, with derived views.

    Every ``extract_*`` method recomputes from ``elements``; nothing is
    cached on the instance.
    """

    elements: tuple[Element, ...]
    title_page: TitlePage = field(default_factory=TitlePage)
    filename: str | None = None

    @classmethod
    def from_string(
        cls,
        content: str,
        filename: str | None = None,
        parser: FountainParser | None = None,
    ) -> ParsedScreenplay:
        """Parse Fountain text.

        Raises:
            ParseError: If ``content`` is not text
        """
        document = (parser or FountainParser()).parse(content)
        return cls(
            elements=document.elements,
            title_page=document.title_page,
            filename=filename,
        )

    @classmethod
    def from_file(
        cls, file_path: Path | str, parser: FountainParser | None = None
    ) -> ParsedScreenplay:
        """Parse a Fountain file, recording its name for the outline title.

        Raises:
            FountainKitFileNotFoundError: If the file does not exist
            ParseError: If the file cannot be read as text
        """
        path = Path(file_path)
        document = (parser or FountainParser()).parse_file(path)
        return cls(
            elements=document.elements,
            title_page=document.title_page,
            filename=path.name,
        )

    @property
    def scene_headings(self) -> list[Element]:
        return [e for e in self.elements if e.is_scene_heading]

    def extract_outline(self) -> list[OutlineNode]:
        return OutlineBuilder().build(
            self.elements, title_page=self.title_page, filename=self.filename
        )

    def extract_outline_tree(self) -> OutlineTree:
        return OutlineTree(self.extract_outline())

    def extract_scene_browser(self) -> SceneBrowserTree:
        return SceneBrowserAssembler().assemble(self.extract_outline(), self.elements)

    def extract_scene_locations(self) -> list[SceneWithLocation]:
        return extract_scene_locations(self.elements)

    def group_scenes_by_location(self) -> dict[str, LocationGroup]:
        return group_scenes_by_location(self.elements)

    def locations_by_frequency(self) -> list[LocationGroup]:
        return locations_by_frequency(self.elements)

    def locations_by_appearance(self) -> list[LocationGroup]:
        return locations_by_appearance(self.elements)

    def scenes_at(self, location_key: str) -> list[SceneWithLocation]:
        group = self.group_scenes_by_location().get(location_key)
        return list(group.scenes) if group else []

    def all_locations(self) -> list[str]:
        """Sorted location keys."""
        return sorted(self.group_scenes_by_location())

    def speakable_text(self) -> str:
        """Text of every element that would be read aloud, one per paragraph."""
        return "\n\n".join(
            text for text in (e.speakable_text() for e in self.elements) if text
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "filename": self.filename,
            "title_page": self.title_page.to_list(),
            "elements": [e.to_dict() for e in self.elements],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ParsedScreenplay:
        """Rebuild from :meth:`to_dict` output or another element producer."""
        return cls(
            elements=tuple(Element.from_dict(item) for item in data.get("elements", [])),
            title_page=TitlePage.from_list(data.get("title_page", [])),
            filename=data.get("filename"),
        )
