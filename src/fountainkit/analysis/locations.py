"""Group scenes of a screenplay by where they take place."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from fountainkit.analysis.location import SceneLighting, SceneLocation
from fountainkit.parser.elements import Element


@dataclass(frozen=True)
class SceneWithLocation:
    """A scene heading together with its parsed location."""

    location: SceneLocation
    scene_index: int
    heading: Element
    scene_number: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "scene_index": self.scene_index,
            "scene_number": self.scene_number,
            "heading": self.heading.text,
            "lighting": self.location.lighting.standard_abbreviation,
            "time_of_day": self.location.time_of_day,
            "modifiers": list(self.location.modifiers),
        }


@dataclass(frozen=True)
class LocationGroup:
    """All scenes sharing one location key, in document order."""

    location_key: str
    representative_location: SceneLocation
    scenes: tuple[SceneWithLocation, ...]

    @property
    def scene_count(self) -> int:
        return len(self.scenes)

    @property
    def first_appearance(self) -> int:
        return self.scenes[0].scene_index if self.scenes else -1

    @property
    def lighting_types(self) -> frozenset[SceneLighting]:
        return frozenset(s.location.lighting for s in self.scenes)

    @property
    def times_of_day(self) -> frozenset[str]:
        return frozenset(
            s.location.time_of_day for s in self.scenes if s.location.time_of_day
        )

    @property
    def has_multiple_lighting_types(self) -> bool:
        return len(self.lighting_types) > 1

    def to_dict(self) -> dict[str, Any]:
        return {
            "location": self.representative_location.full_location,
            "location_key": self.location_key,
            "scene_count": self.scene_count,
            "lighting": sorted(
                {lighting.standard_abbreviation for lighting in self.lighting_types}
            ),
            "times_of_day": sorted(self.times_of_day),
            "scenes": [scene.to_dict() for scene in self.scenes],
        }


def location_for(element: Element) -> SceneLocation | None:
    """Parsed location of a scene heading, None for any other element."""
    if not element.is_scene_heading:
        return None
    return SceneLocation.parse(element.text)


def extract_scene_locations(elements: Iterable[Element]) -> list[SceneWithLocation]:
    """Parse the location of every scene heading, keeping element indexes."""
    scenes = []
    for index, element in enumerate(elements):
        location = location_for(element)
        if location is not None:
            scenes.append(
                SceneWithLocation(
                    location=location,
                    scene_index=index,
                    heading=element,
                    scene_number=element.scene_number,
                )
            )
    return scenes


def group_scenes_by_location(
    elements: Iterable[Element],
) -> dict[str, LocationGroup]:
    """Group scene headings by location key.

    The dict is ordered by first appearance. The first scene of each group
    provides its representative location.
    """
    buckets: dict[str, list[SceneWithLocation]] = {}
    for scene in extract_scene_locations(elements):
        buckets.setdefault(scene.location.location_key, []).append(scene)

    return {
        key: LocationGroup(
            location_key=key,
            representative_location=scenes[0].location,
            scenes=tuple(scenes),
        )
        for key, scenes in buckets.items()
    }


def locations_by_frequency(elements: Iterable[Element]) -> list[LocationGroup]:
    """Groups with the most scenes first; ties keep appearance order."""
    groups = group_scenes_by_location(elements)
    return sorted(groups.values(), key=lambda g: -g.scene_count)


def locations_by_appearance(elements: Iterable[Element]) -> list[LocationGroup]:
    groups = group_scenes_by_location(elements)
    return sorted(groups.values(), key=lambda g: g.first_appearance)
