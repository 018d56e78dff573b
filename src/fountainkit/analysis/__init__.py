"""Screenplay analysis: scene locations and location breakdowns."""

from __future__ import annotations

from .location import TIME_OF_DAY_TOKENS, SceneLighting, SceneLocation
from .locations import (
    LocationGroup,
    SceneWithLocation,
    extract_scene_locations,
    group_scenes_by_location,
    location_for,
    locations_by_appearance,
    locations_by_frequency,
)

__all__ = [
    "TIME_OF_DAY_TOKENS",
    "LocationGroup",
    "SceneLighting",
    "SceneLocation",
    "SceneWithLocation",
    "extract_scene_locations",
    "group_scenes_by_location",
    "location_for",
    "locations_by_appearance",
    "locations_by_frequency",
]
