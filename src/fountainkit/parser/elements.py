"""Data models for parsed Fountain screenplay elements."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from fountainkit.exceptions import ValidationError

MAX_SECTION_DEPTH = 6


class ElementType(Enum):
    """Kind of a screenplay element.

    Member values are the canonical display names, which are also the
    names used in the plain-dict form of an element.
    """

    SCENE_HEADING = "Scene Heading"
    ACTION = "Action"
    CHARACTER = "Character"
    DIALOGUE = "Dialogue"
    PARENTHETICAL = "Parenthetical"
    TRANSITION = "Transition"
    SECTION_HEADING = "Section Heading"
    SYNOPSIS = "Synopsis"
    COMMENT = "Comment"
    BONEYARD = "Boneyard"
    LYRICS = "Lyrics"
    PAGE_BREAK = "Page Break"

    @classmethod
    def from_string(cls, name: str) -> ElementType:
        """Map a display name back to a member.

        Unknown names fall back to ``ACTION``, the same conservative choice
        the parser makes for unrecognized markup.
        """
        try:
            return cls(name)
        except ValueError:
            return cls.ACTION

    @property
    def is_dialogue_related(self) -> bool:
        """Character, dialogue and parenthetical elements travel together."""
        return self in {
            ElementType.CHARACTER,
            ElementType.DIALOGUE,
            ElementType.PARENTHETICAL,
        }

    def __str__(self) -> str:
        return self.value


# Spoken aloud as nothing
_SILENT_TYPES = frozenset(
    {ElementType.COMMENT, ElementType.BONEYARD, ElementType.PAGE_BREAK}
)


@dataclass(frozen=True)
class Element:
    """One screenplay unit: a heading, a block of action, a dialogue line...

    ``section_depth`` is the number of ``#`` marks of a section heading and
    must be 0 for every other element type.
    """

    element_type: ElementType
    text: str
    section_depth: int = 0
    is_centered: bool = False
    is_dual_dialogue: bool = False
    scene_number: str | None = None
    scene_id: str | None = None
    summary: str | None = None

    def __post_init__(self) -> None:
        is_heading = self.element_type is ElementType.SECTION_HEADING
        depth_valid = 1 <= self.section_depth <= MAX_SECTION_DEPTH
        if is_heading != depth_valid:
            raise ValidationError(
                message=(
                    f"Invalid section depth {self.section_depth} "
                    f"for {self.element_type.value} element"
                ),
                hint=(
                    f"Section headings need a depth of 1-{MAX_SECTION_DEPTH}; "
                    "all other elements must use 0"
                ),
                details={
                    "element_type": self.element_type.value,
                    "section_depth": self.section_depth,
                    "text": self.text,
                },
            )

    @classmethod
    def section_heading(cls, level: int, text: str) -> Element:
        """Build a section heading of the given depth."""
        return cls(ElementType.SECTION_HEADING, text, section_depth=level)

    @property
    def level(self) -> int:
        """Section heading depth, or 0 for any other element type."""
        return self.section_depth

    @property
    def is_section_heading(self) -> bool:
        return self.element_type is ElementType.SECTION_HEADING

    @property
    def is_scene_heading(self) -> bool:
        return self.element_type is ElementType.SCENE_HEADING

    def speakable_text(self) -> str:
        """Text a narrator would read aloud for this element."""
        if self.element_type in _SILENT_TYPES:
            return ""
        return self.text

    def to_dict(self) -> dict[str, Any]:
        """Convert to plain data, omitting unset optional fields."""
        data: dict[str, Any] = {
            "type": self.element_type.value,
            "text": self.text,
        }
        if self.is_section_heading:
            data["level"] = self.section_depth
        if self.is_centered:
            data["is_centered"] = True
        if self.is_dual_dialogue:
            data["is_dual_dialogue"] = True
        for key in ("scene_number", "scene_id", "summary"):
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Element:
        """Rebuild an element from :meth:`to_dict` output.

        Raises:
            ValidationError: If the data describes an invalid element
        """
        element_type = ElementType.from_string(str(data.get("type", "")))
        level = int(data.get("level", 0) or 0)
        if element_type is ElementType.SECTION_HEADING and level == 0:
            level = 1
        return cls(
            element_type=element_type,
            text=str(data.get("text", "")),
            section_depth=level,
            is_centered=bool(data.get("is_centered", False)),
            is_dual_dialogue=bool(data.get("is_dual_dialogue", False)),
            scene_number=data.get("scene_number"),
            scene_id=data.get("scene_id"),
            summary=data.get("summary"),
        )

    def __str__(self) -> str:
        label = self.element_type.value
        if self.is_centered:
            label += " (centered)"
        elif self.is_dual_dialogue:
            label += " (dual dialogue)"
        elif self.section_depth > 0:
            label += f" ({self.section_depth})"
        return f"{label}: {self.text}"


@dataclass(frozen=True)
class TitlePageEntry:
    """One ``Key: value`` entry of a title page."""

    key: str
    values: tuple[str, ...] = ()


@dataclass(frozen=True)
class TitlePage:
    """Ordered title page entries.

    Order is the order keys were first seen in the source and keys may
    repeat, so this is deliberately not a mapping.
    """

    entries: tuple[TitlePageEntry, ...] = ()

    def __iter__(self) -> Iterator[TitlePageEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __bool__(self) -> bool:
        return bool(self.entries)

    @property
    def keys(self) -> list[str]:
        return [entry.key for entry in self.entries]

    def get(self, key: str) -> list[str] | None:
        """Values of the first entry with ``key`` (case-insensitive)."""
        wanted = key.lower()
        for entry in self.entries:
            if entry.key == wanted:
                return list(entry.values)
        return None

    def get_all(self, key: str) -> list[list[str]]:
        """Values of every entry with ``key``, in document order."""
        wanted = key.lower()
        return [list(entry.values) for entry in self.entries if entry.key == wanted]

    @property
    def title(self) -> str | None:
        """First non-blank ``title`` value, stripped."""
        for values in self.get_all("title"):
            if values and values[0].strip():
                return values[0].strip()
        return None

    def to_list(self) -> list[dict[str, list[str]]]:
        """Plain-data form: ``[{key: [values]}, ...]``."""
        return [{entry.key: list(entry.values)} for entry in self.entries]

    @classmethod
    def from_list(cls, data: list[dict[str, list[str]]]) -> TitlePage:
        entries = [
            TitlePageEntry(key=key, values=tuple(values))
            for item in data
            for key, values in item.items()
        ]
        return cls(entries=tuple(entries))


@dataclass(frozen=True)
class ParsedDocument:
    """Output of the line classifier."""

    elements: tuple[Element, ...] = ()
    title_page: TitlePage = field(default_factory=TitlePage)

    @property
    def scene_headings(self) -> list[Element]:
        return [e for e in self.elements if e.is_scene_heading]
