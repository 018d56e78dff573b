"""Line classifier that turns Fountain text into typed screenplay elements."""

from __future__ import annotations

import re
import uuid
from dataclasses import dataclass, replace
from pathlib import Path

from fountainkit.config import get_logger, get_settings
from fountainkit.exceptions import ParseError, check_fountain_path
from fountainkit.parser.elements import (
    MAX_SECTION_DEPTH,
    Element,
    ElementType,
    ParsedDocument,
)
from fountainkit.parser.title_page import split_title_page

logger = get_logger(__name__)

SCENE_HEADING_PATTERN = re.compile(
    r"^(INT|EXT|EST|(I|INT)\.?/(E|EXT)\.?)[.\-\s][^\n]+$", re.IGNORECASE
)
OVER_BLACK_PATTERN = re.compile(r"^OVER BLACK$", re.IGNORECASE)
SCENE_NUMBER_PATTERN = re.compile(r"#([^\n#]*?)#\s*$")
SECTION_PATTERN = re.compile(r"^\s*(#+)")
SYNOPSIS_PATTERN = re.compile(r"^\s*=")
NOTE_PATTERN = re.compile(r"^\s*\[{2}\s*([^\]\n]+?)\s*\]{2}\s*$")
PAGE_BREAK_PATTERN = re.compile(r"^={3,}\s*$")
BONEYARD_OPEN_PATTERN = re.compile(r"^/\*")
BONEYARD_CLOSE_PATTERN = re.compile(r"\*/\s*$")
CHARACTER_PATTERN = re.compile(r"^[^a-z]+(\(cont'd\))?$")
DUAL_DIALOGUE_PATTERN = re.compile(r"\s*\^\s*$")
TO_TRANSITION_PATTERN = re.compile(r"^[^a-z]*TO:$")
COLON_TRANSITION_PATTERN = re.compile(r"^[^a-z]*[A-Z][^a-z]*:$")
PARENTHETICAL_PATTERN = re.compile(r"^\s*\(")
DIALOGUE_BLANK_PATTERN = re.compile(r"^\s{2}$")
WHITESPACE_ONLY_PATTERN = re.compile(r"^\s{2,}$")
NUMERIC_SCENE_NUMBER = re.compile(r"^\d+$")

KNOWN_TRANSITIONS = frozenset({"FADE OUT.", "CUT TO BLACK.", "FADE TO BLACK."})


@dataclass
class _LineState:
    """Mutable scanner state for one parse call."""

    newlines_before: int = 0
    in_boneyard: bool = False
    in_dialogue: bool = False
    boneyard_lines: list[str] | None = None


class FountainParser:
    """Parse Fountain screenplay text into an ordered list of elements.

    The parser keeps no state between calls, so one instance can be shared
    freely. Unrecognized markup is never an error: it becomes Action.
    """

    def __init__(self, auto_number_scenes: bool | None = None) -> None:
        """Initialize the fountain parser.

        Args:
            auto_number_scenes: Number unnumbered scene headings in order.
                Defaults to the ``auto_number_scenes`` setting.
        """
        if auto_number_scenes is None:
            auto_number_scenes = get_settings().auto_number_scenes
        self.auto_number_scenes = auto_number_scenes

    def parse(self, content: str) -> ParsedDocument:
        """Parse Fountain content into elements and title page.

        Args:
            content: Raw Fountain text

        Returns:
            Parsed document

        Raises:
            ParseError: If ``content`` is not text
        """
        if not isinstance(content, str):
            raise ParseError(
                message="Fountain content must be text",
                hint="Decode bytes first, or use parse_bytes()",
                details={"received_type": type(content).__name__},
            )

        contents = re.sub(r"^\s*", "", content)
        contents = re.sub(r"\r\n|\r", "\n", contents) + "\n\n"

        title_page, body = split_title_page(contents)
        elements = self._classify_lines(("\n" + body).split("\n"))
        elements = self._assign_scene_identity(elements)

        logger.debug(
            "Parsed fountain content",
            elements=len(elements),
            title_page_entries=len(title_page),
            scenes=sum(1 for e in elements if e.is_scene_heading),
        )
        return ParsedDocument(elements=tuple(elements), title_page=title_page)

    def parse_bytes(self, data: bytes, encoding: str = "utf-8") -> ParsedDocument:
        """Decode and parse raw bytes.

        Raises:
            ParseError: If the bytes are not valid text in ``encoding``
        """
        try:
            text = data.decode(encoding)
        except (UnicodeDecodeError, LookupError) as e:
            raise ParseError(
                message=f"Content is not valid {encoding} text",
                hint="Check the file encoding (file_encoding setting)",
                details={"encoding": encoding, "decoder_error": str(e)},
            ) from e
        return self.parse(text)

    def parse_file(self, file_path: Path | str) -> ParsedDocument:
        """Parse a Fountain file.

        Args:
            file_path: Path to the Fountain file

        Returns:
            Parsed document

        Raises:
            FountainKitFileNotFoundError: If the file does not exist
            ParseError: If the file is too large or not text
        """
        settings = get_settings()
        path = Path(file_path)
        check_fountain_path(path)

        size = path.stat().st_size
        if size > settings.max_file_size:
            raise ParseError(
                message=f"Screenplay file is too large: {path}",
                hint="Raise max_file_size if this file is expected",
                details={"file": str(path), "size": size, "limit": settings.max_file_size},
            )

        logger.debug("Parsing fountain file", file=str(path))
        return self.parse_bytes(path.read_bytes(), encoding=settings.file_encoding)

    def _classify_lines(self, lines: list[str]) -> list[Element]:
        """Run the recognizers over every body line, in priority order."""
        elements: list[Element] = []
        state = _LineState()

        for index, line in enumerate(lines):
            next_line = lines[index + 1] if index + 1 < len(lines) else ""
            self._classify_line(line, next_line, state, elements)

        if state.in_boneyard and state.boneyard_lines is not None:
            # Unterminated /* keeps everything to the end of the document
            elements.append(
                Element(ElementType.BONEYARD, "\n".join(state.boneyard_lines).strip())
            )
        return elements

    def _classify_line(
        self,
        line: str,
        next_line: str,
        state: _LineState,
        elements: list[Element],
    ) -> None:
        # Everything inside an open boneyard belongs to it
        if state.in_boneyard:
            self._classify_boneyard(line, state, elements)
            return

        # Lyrics
        if line.startswith("~"):
            last = elements[-1] if elements else None
            if (
                last is not None
                and last.element_type is ElementType.LYRICS
                and state.newlines_before > 0
            ):
                elements.append(Element(ElementType.LYRICS, " "))
            text = line[1:].rstrip()
            if text.endswith("~"):
                text = text[:-1]
            elements.append(Element(ElementType.LYRICS, text.strip()))
            state.newlines_before = 0
            return

        # Forced action
        if line.startswith("!"):
            elements.append(Element(ElementType.ACTION, line[1:]))
            state.newlines_before = 0
            return

        # Forced character
        if line.startswith("@"):
            self._append_character(line[1:], elements)
            state.newlines_before = 0
            state.in_dialogue = True
            return

        # Two spaces inside a dialogue block keep the block open
        if state.in_dialogue and DIALOGUE_BLANK_PATTERN.match(line):
            state.newlines_before = 0
            self._append_dialogue(line, elements)
            return

        if WHITESPACE_ONLY_PATTERN.match(line):
            elements.append(Element(ElementType.ACTION, line))
            state.newlines_before = 0
            return

        if line == "":
            state.in_dialogue = False
            state.newlines_before += 1
            return

        if self._classify_boneyard(line, state, elements):
            return

        if PAGE_BREAK_PATTERN.match(line):
            elements.append(Element(ElementType.PAGE_BREAK, line.strip()))
            state.newlines_before = 0
            return

        if SYNOPSIS_PATTERN.match(line):
            text = SYNOPSIS_PATTERN.sub("", line, count=1)
            elements.append(Element(ElementType.SYNOPSIS, text.strip()))
            return

        note = NOTE_PATTERN.match(line)
        if state.newlines_before > 0 and note:
            elements.append(Element(ElementType.COMMENT, note.group(1).strip()))
            return

        section = SECTION_PATTERN.match(line)
        if section:
            text = line[section.end() :].strip()
            if text:
                depth = min(len(section.group(1)), MAX_SECTION_DEPTH)
                elements.append(Element.section_heading(depth, text))
                return

        # Forced scene heading: a single leading dot
        if len(line) > 1 and line[0] == "." and line[1] != ".":
            state.newlines_before = 0
            text, number = self._split_scene_number(line[1:])
            elements.append(
                Element(ElementType.SCENE_HEADING, text, scene_number=number)
            )
            return

        if state.newlines_before > 0 and (
            SCENE_HEADING_PATTERN.match(line) or OVER_BLACK_PATTERN.match(line.strip())
        ):
            state.newlines_before = 0
            text, number = self._split_scene_number(line)
            elements.append(
                Element(ElementType.SCENE_HEADING, text, scene_number=number)
            )
            return

        # Forced transition or centered text
        if line.startswith(">"):
            state.newlines_before = 0
            if len(line) > 1 and line.rstrip().endswith("<"):
                text = line.strip()[1:-1].strip()
                elements.append(Element(ElementType.ACTION, text, is_centered=True))
            else:
                elements.append(Element(ElementType.TRANSITION, line[1:].strip()))
            return

        if not state.in_dialogue and self._is_transition(line, next_line, state):
            state.newlines_before = 0
            elements.append(Element(ElementType.TRANSITION, line.strip()))
            return

        if (
            state.newlines_before > 0
            and next_line != ""
            and not self._is_all_caps(next_line)
            and self._is_character_cue(line)
        ):
            state.newlines_before = 0
            self._append_character(line, elements)
            state.in_dialogue = True
            return

        if state.in_dialogue:
            if state.newlines_before == 0 and PARENTHETICAL_PATTERN.match(line):
                elements.append(Element(ElementType.PARENTHETICAL, line.strip()))
            else:
                self._append_dialogue(line, elements)
            return

        self._append_action(line, state, elements)

    def _classify_boneyard(
        self, line: str, state: _LineState, elements: list[Element]
    ) -> bool:
        """Handle ``/* ... */`` blocks. Returns True when the line was consumed."""
        if not state.in_boneyard and BONEYARD_OPEN_PATTERN.match(line):
            opened = line[2:]
            if BONEYARD_CLOSE_PATTERN.search(opened):
                text = BONEYARD_CLOSE_PATTERN.sub("", opened)
                elements.append(Element(ElementType.BONEYARD, text.strip()))
                state.newlines_before = 0
            else:
                state.in_boneyard = True
                state.boneyard_lines = [opened.strip()] if opened.strip() else []
            return True

        if state.in_boneyard and BONEYARD_CLOSE_PATTERN.search(line):
            text = BONEYARD_CLOSE_PATTERN.sub("", line).strip()
            lines = state.boneyard_lines or []
            if text:
                lines.append(text)
            elements.append(Element(ElementType.BONEYARD, "\n".join(lines).strip()))
            state.in_boneyard = False
            state.boneyard_lines = None
            state.newlines_before = 0
            return True

        if state.in_boneyard:
            if state.boneyard_lines is None:
                state.boneyard_lines = []
            state.boneyard_lines.append(line)
            return True

        return False

    @staticmethod
    def _is_transition(line: str, next_line: str, state: _LineState) -> bool:
        stripped = line.strip()
        if not stripped:
            return False
        if TO_TRANSITION_PATTERN.match(stripped) or stripped in KNOWN_TRANSITIONS:
            return True
        # FADE IN: style, only when it stands alone between blank lines
        return (
            state.newlines_before > 0
            and next_line == ""
            and COLON_TRANSITION_PATTERN.match(stripped) is not None
        )

    @staticmethod
    def _is_all_caps(line: str) -> bool:
        """Letters and no lowercase. A parenthetical never counts."""
        stripped = line.strip()
        if stripped.startswith("("):
            return False
        return stripped.upper() == stripped and any(ch.isalpha() for ch in stripped)

    @staticmethod
    def _is_character_cue(line: str) -> bool:
        stripped = line.strip()
        if not CHARACTER_PATTERN.match(stripped):
            return False
        name = re.sub(r"\(.*?\)", "", stripped).replace("^", "")
        return any(ch.isalpha() for ch in name)

    @staticmethod
    def _split_scene_number(text: str) -> tuple[str, str | None]:
        match = SCENE_NUMBER_PATTERN.search(text)
        if match is None:
            return text.strip(), None
        number = match.group(1).strip()
        return text[: match.start()].strip(), number or None

    @staticmethod
    def _append_character(text: str, elements: list[Element]) -> None:
        is_dual = DUAL_DIALOGUE_PATTERN.search(text) is not None
        name = DUAL_DIALOGUE_PATTERN.sub("", text).strip()
        if is_dual:
            # The previous speaker becomes the other half of the pair
            for idx in range(len(elements) - 1, -1, -1):
                if elements[idx].element_type is ElementType.CHARACTER:
                    elements[idx] = replace(elements[idx], is_dual_dialogue=True)
                    break
        elements.append(Element(ElementType.CHARACTER, name, is_dual_dialogue=is_dual))

    @staticmethod
    def _append_dialogue(line: str, elements: list[Element]) -> None:
        if elements and elements[-1].element_type is ElementType.DIALOGUE:
            last = elements[-1]
            elements[-1] = replace(last, text=f"{last.text}\n{line.strip()}")
        else:
            elements.append(Element(ElementType.DIALOGUE, line.strip()))

    @staticmethod
    def _append_action(line: str, state: _LineState, elements: list[Element]) -> None:
        last = elements[-1] if elements else None
        if state.newlines_before == 0 and last is not None:
            if last.element_type is ElementType.SCENE_HEADING:
                # A scene heading needs a blank line after it
                heading_text = last.text
                if last.scene_number is not None:
                    heading_text = f"{heading_text} #{last.scene_number}#"
                elements[-1] = Element(ElementType.ACTION, f"{heading_text}\n{line}")
                return
            if last.element_type is ElementType.ACTION and not last.is_centered:
                elements[-1] = replace(last, text=f"{last.text}\n{line}")
                return
        elements.append(Element(ElementType.ACTION, line))
        state.newlines_before = 0

    def _assign_scene_identity(self, elements: list[Element]) -> list[Element]:
        """Give every scene heading a fresh id and, optionally, a number."""
        counter = 0
        result: list[Element] = []
        for element in elements:
            if not element.is_scene_heading:
                result.append(element)
                continue

            number = element.scene_number
            if number is not None and NUMERIC_SCENE_NUMBER.match(number):
                counter = int(number)
            elif number is None:
                counter += 1
                if self.auto_number_scenes:
                    number = str(counter)

            result.append(
                replace(element, scene_number=number, scene_id=str(uuid.uuid4()))
            )
        return result
