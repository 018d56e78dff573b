"""fountainkit: Fountain screenplay parsing, outlines and scene browsing.

fountainkit turns Fountain screenplay text into typed elements, derives a
flat id-linked outline from them, and assembles a chapter / scene group /
scene tree with parsed scene locations.
"""

from .analysis import LocationGroup, SceneLighting, SceneLocation, SceneWithLocation
from .browser import (
    ChapterNode,
    SceneBrowserAssembler,
    SceneBrowserTree,
    SceneGroupNode,
    SceneNode,
)
from .config import FountainKitSettings, get_logger, get_settings
from .exceptions import (
    ConfigurationError,
    FountainKitError,
    FountainKitFileNotFoundError,
    ParseError,
    ValidationError,
)
from .outline import NodeType, OutlineBuilder, OutlineNode, OutlineTree
from .parser import Element, ElementType, FountainParser, ParsedDocument, TitlePage
from .screenplay import ParsedScreenplay

__version__ = "0.1.0"

__all__ = [
    "ChapterNode",
    "ConfigurationError",
    "Element",
    "ElementType",
    "FountainKitError",
    "FountainKitFileNotFoundError",
    "FountainKitSettings",
    "FountainParser",
    "LocationGroup",
    "NodeType",
    "OutlineBuilder",
    "OutlineNode",
    "OutlineTree",
    "ParseError",
    "ParsedDocument",
    "ParsedScreenplay",
    "SceneBrowserAssembler",
    "SceneBrowserTree",
    "SceneGroupNode",
    "SceneLighting",
    "SceneLocation",
    "SceneNode",
    "SceneWithLocation",
    "TitlePage",
    "ValidationError",
    "__version__",
    "get_logger",
    "get_settings",
]
