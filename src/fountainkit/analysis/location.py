"""Scene heading (slugline) location parsing."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any


class SceneLighting(Enum):
    """Interior/exterior marker at the start of a scene heading."""

    INTERIOR = "INT"
    EXTERIOR = "EXT"
    INTERIOR_EXTERIOR = "INT/EXT"
    INTERIOR_EXTERIOR_ALT = "INT./EXT."
    INTERIOR_EXTERIOR_SHORT = "I/E"
    UNKNOWN = "UNKNOWN"

    @property
    def description(self) -> str:
        if self is SceneLighting.INTERIOR:
            return "Interior"
        if self is SceneLighting.EXTERIOR:
            return "Exterior"
        if self is SceneLighting.UNKNOWN:
            return "Unknown"
        return "Interior/Exterior"

    @property
    def standard_abbreviation(self) -> str:
        """Abbreviation with the three combined variants folded together."""
        if self in (SceneLighting.INTERIOR, SceneLighting.EXTERIOR):
            return self.value
        if self is SceneLighting.UNKNOWN:
            return ""
        return "INT/EXT"


# Longest prefixes first
_LIGHTING_PATTERNS: tuple[tuple[SceneLighting, re.Pattern[str]], ...] = (
    (SceneLighting.INTERIOR_EXTERIOR_ALT, re.compile(r"^INT\./EXT(?:\.|\b)", re.I)),
    (
        SceneLighting.INTERIOR_EXTERIOR,
        re.compile(r"^(?:INT/EXT|EXT/INT)(?:\.|\b)", re.I),
    ),
    (SceneLighting.INTERIOR_EXTERIOR_SHORT, re.compile(r"^I/E(?:\.|\b)", re.I)),
    (SceneLighting.INTERIOR, re.compile(r"^INT(?:\.|\b)", re.I)),
    (SceneLighting.EXTERIOR, re.compile(r"^EXT(?:\.|\b)", re.I)),
)

MODIFIER_PATTERN = re.compile(r"[(\[]([^)\]]*)[)\]]")
SEPARATOR_PATTERN = re.compile(r"\s+[-–—]\s+")
WHITESPACE_PATTERN = re.compile(r"\s+")
APOSTROPHE_PATTERN = re.compile("[’‘ʼ`´]")

TIME_OF_DAY_TOKENS = (
    "DAY",
    "NIGHT",
    "DAWN",
    "DUSK",
    "MORNING",
    "AFTERNOON",
    "EVENING",
    "SUNRISE",
    "SUNSET",
    "NOON",
    "MIDNIGHT",
    "CONTINUOUS",
    "LATER",
    "MOMENTS LATER",
    "SAME",
    "SAME TIME",
    "MAGIC HOUR",
    "TWILIGHT",
    "NIGHTFALL",
    "DAYBREAK",
    "FLASHBACK",
    "PRESENT",
)

_TIME_OF_DAY_PATTERN = re.compile(
    r"\b(?:"
    + "|".join(
        re.escape(token)
        for token in sorted(TIME_OF_DAY_TOKENS, key=len, reverse=True)
    )
    + r")\.?$",
    re.I,
)


def _collapse(text: str) -> str:
    return WHITESPACE_PATTERN.sub(" ", text).strip()


def _split_lighting(text: str) -> tuple[SceneLighting, str]:
    for lighting, pattern in _LIGHTING_PATTERNS:
        match = pattern.match(text)
        if match:
            return lighting, text[match.end() :].strip()
    return SceneLighting.UNKNOWN, text


@dataclass(frozen=True)
class SceneLocation:
    """Components of a scene heading.

    ``INT. COFFEE SHOP - KITCHEN - DAY (1973)`` parses to lighting
    ``INTERIOR``, scene ``COFFEE SHOP``, setup ``KITCHEN``, time of day
    ``DAY`` and modifiers ``("1973",)``.
    """

    lighting: SceneLighting
    scene: str
    setup: str | None = None
    time_of_day: str | None = None
    modifiers: tuple[str, ...] = ()
    original_text: str = ""

    @classmethod
    def parse(cls, slugline: str) -> SceneLocation:
        """Parse a scene heading into its components.

        Never fails: text without a recognized lighting prefix gives
        ``UNKNOWN`` lighting with the whole text as the scene.

        Args:
            slugline: Scene heading text (e.g., "INT. COFFEE SHOP - DAY")

        Returns:
            Parsed location
        """
        modifiers = tuple(
            _collapse(m.group(1))
            for m in MODIFIER_PATTERN.finditer(slugline)
            if m.group(1).strip()
        )
        base = _collapse(MODIFIER_PATTERN.sub(" ", slugline))

        lighting, remainder = _split_lighting(base)

        segments = [s.strip() for s in SEPARATOR_PATTERN.split(remainder)]
        segments = [s for s in segments if s] or [""]

        time_of_day = None
        if len(segments) >= 2 and _TIME_OF_DAY_PATTERN.search(segments[-1]):
            time_of_day = segments.pop()

        scene = segments[0]
        setup = " - ".join(segments[1:]) or None

        return cls(
            lighting=lighting,
            scene=scene,
            setup=setup,
            time_of_day=time_of_day,
            modifiers=modifiers,
            original_text=slugline,
        )

    @property
    def full_location(self) -> str:
        """Scene name, or ``SCENE - SETUP`` when there is a setup."""
        if self.setup:
            return f"{self.scene} - {self.setup}"
        return self.scene

    @property
    def location_key(self) -> str:
        """Grouping key: ignores case, spacing, apostrophe style, lighting and time."""
        normalized = APOSTROPHE_PATTERN.sub("'", self.full_location)
        return _collapse(normalized).casefold()

    def to_dict(self) -> dict[str, Any]:
        return {
            "lighting": self.lighting.value,
            "scene": self.scene,
            "setup": self.setup,
            "time_of_day": self.time_of_day,
            "modifiers": list(self.modifiers),
            "original_text": self.original_text,
            "full_location": self.full_location,
            "location_key": self.location_key,
        }

    def __str__(self) -> str:
        parts = []
        if self.lighting is not SceneLighting.UNKNOWN:
            parts.append(self.lighting.standard_abbreviation)
        parts.append(self.full_location)
        if self.time_of_day:
            parts.append(f"- {self.time_of_day}")
        if self.modifiers:
            parts.append(f"({', '.join(self.modifiers)})")
        return " ".join(parts)
