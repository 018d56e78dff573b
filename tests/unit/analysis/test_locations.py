"""Tests for grouping scenes by location."""

from fountainkit.analysis import (
    SceneLighting,
    extract_scene_locations,
    group_scenes_by_location,
    location_for,
    locations_by_appearance,
    locations_by_frequency,
)
from fountainkit.parser import Element, ElementType, FountainParser


def parse(text):
    return FountainParser().parse(text).elements


class TestExtractSceneLocations:
    """One entry per scene heading."""

    def test_indexes_point_at_headings(self, flat_script):
        elements = parse(flat_script)
        scenes = extract_scene_locations(elements)
        assert [s.scene_index for s in scenes] == [1, 7, 9]
        for scene in scenes:
            assert elements[scene.scene_index] is scene.heading

    def test_scene_numbers_carried(self, flat_script):
        scenes = extract_scene_locations(parse(flat_script))
        assert [s.scene_number for s in scenes] == ["1", "2", "3"]

    def test_location_for(self):
        heading = Element(ElementType.SCENE_HEADING, "EXT. PARK - DAY")
        assert location_for(heading).scene == "PARK"
        assert location_for(Element(ElementType.ACTION, "EXT. PARK")) is None

    def test_extracted_locations_match_location_for(self, flat_script):
        elements = parse(flat_script)
        scenes = extract_scene_locations(elements)
        assert [s.location for s in scenes] == [
            location_for(e) for e in elements if e.is_scene_heading
        ]


class TestGrouping:
    """Location groups and orderings."""

    def test_groups_by_key(self, flat_script):
        groups = group_scenes_by_location(parse(flat_script))
        assert list(groups) == ["park", "bob's house - kitchen"]
        park = groups["park"]
        assert park.scene_count == 2
        assert park.times_of_day == {"DAY", "NIGHT"}
        assert park.lighting_types == {SceneLighting.EXTERIOR}
        assert not park.has_multiple_lighting_types
        assert park.representative_location.time_of_day == "DAY"

    def test_mixed_lighting(self):
        elements = parse(
            "INT. COFFEE SHOP - DAY\n\nInside.\n\nEXT. COFFEE SHOP - NIGHT\n\nOutside."
        )
        group = group_scenes_by_location(elements)["coffee shop"]
        assert group.has_multiple_lighting_types
        assert group.lighting_types == {
            SceneLighting.INTERIOR,
            SceneLighting.EXTERIOR,
        }

    def test_by_frequency(self):
        elements = parse(
            "INT. OFFICE - DAY\n\nWork.\n\n"
            "EXT. PARK - DAY\n\nLunch.\n\n"
            "EXT. PARK - NIGHT\n\nWalk."
        )
        ordered = locations_by_frequency(elements)
        assert [g.location_key for g in ordered] == ["park", "office"]

    def test_by_appearance(self):
        elements = parse(
            "INT. OFFICE - DAY\n\nWork.\n\n"
            "EXT. PARK - DAY\n\nLunch.\n\n"
            "EXT. PARK - NIGHT\n\nWalk."
        )
        ordered = locations_by_appearance(elements)
        assert [g.location_key for g in ordered] == ["office", "park"]

    def test_no_scenes(self):
        assert group_scenes_by_location(parse("Just action.")) == {}

    def test_to_dict(self, flat_script):
        data = group_scenes_by_location(parse(flat_script))["park"].to_dict()
        assert data["location"] == "PARK"
        assert data["scene_count"] == 2
        assert data["lighting"] == ["EXT"]
        assert data["times_of_day"] == ["DAY", "NIGHT"]
        assert [s["heading"] for s in data["scenes"]] == [
            "EXT. PARK - DAY",
            "EXT. PARK - NIGHT",
        ]
