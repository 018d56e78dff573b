"""Fountain screenplay format parser for fountainkit."""

from __future__ import annotations

from .elements import (
    MAX_SECTION_DEPTH,
    Element,
    ElementType,
    ParsedDocument,
    TitlePage,
    TitlePageEntry,
)
from .fountain_parser import FountainParser
from .title_page import split_title_page

__all__ = [
    "MAX_SECTION_DEPTH",
    "Element",
    "ElementType",
    "FountainParser",
    "ParsedDocument",
    "TitlePage",
    "TitlePageEntry",
    "split_title_page",
]
