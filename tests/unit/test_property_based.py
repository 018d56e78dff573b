"""Property-based tests using Hypothesis.

Screenplay text is generated from a mix of realistic Fountain lines and
arbitrary text so the parser, outline builder and scene browser are
exercised on inputs nobody would write by hand.
"""

import string

from hypothesis import given, settings
from hypothesis import strategies as st

from fountainkit.analysis import SceneLighting, SceneLocation, group_scenes_by_location
from fountainkit.browser import SceneBrowserAssembler
from fountainkit.outline import OutlineBuilder, OutlineTree
from fountainkit.parser import ElementType, FountainParser

FOUNTAIN_LINES = [
    "",
    "",
    "# Title",
    "## Act One",
    "## END",
    "### MUSIC: Theme",
    "### Group",
    "#### Deep",
    "####### Too deep",
    "INT. HOUSE - DAY",
    "EXT. PARK - NIGHT #7#",
    "INT./EXT. CAR - MOMENTS LATER",
    "OVER BLACK",
    ".FORCED HEADING",
    "[[NOTE: remember]]",
    "[[a thought]]",
    "/* hidden",
    "*/",
    "= A synopsis",
    "===",
    "ALICE",
    "BOB (V.O.)",
    "@McGREGOR",
    "(beat)",
    "Some dialogue or action.",
    "CUT TO:",
    "> THE END <",
    ">SMASH CUT",
    "~Sung lyrics",
    "!FORCED ACTION",
    "Title: Not at top",
    "  ",
]

fountain_line = st.one_of(
    st.sampled_from(FOUNTAIN_LINES),
    st.text(alphabet=string.printable, max_size=40),
)
fountain_text = st.lists(fountain_line, max_size=40).map("\n".join)


class TestParserProperties:
    """The parser accepts any text."""

    @given(text=st.text())
    @settings(max_examples=200)
    def test_parse_never_raises(self, text):
        """Any string parses to a document of known element types."""
        document = FountainParser().parse(text)
        for element in document.elements:
            assert isinstance(element.element_type, ElementType)
            if element.is_section_heading:
                assert 1 <= element.level <= 6
            else:
                assert element.level == 0

    @given(text=fountain_text)
    @settings(max_examples=200)
    def test_scene_ids_unique(self, text):
        """Every scene heading gets its own id."""
        headings = FountainParser().parse(text).scene_headings
        ids = [h.scene_id for h in headings]
        assert None not in ids
        assert len(set(ids)) == len(ids)


class TestOutlineProperties:
    """Outline structure holds for generated scripts."""

    @given(text=fountain_text)
    @settings(max_examples=200)
    def test_single_title_first_blank_last(self, text):
        """Exactly one level-1 node, at the front, and a blank at the end."""
        outline = OutlineBuilder().build(FountainParser().parse(text).elements)
        assert outline[0].level == 1
        assert sum(1 for node in outline if node.level == 1) == 1
        assert outline[-1].is_blank
        assert sum(1 for node in outline if node.is_blank) == 1

    @given(text=fountain_text)
    @settings(max_examples=200)
    def test_parent_links_consistent(self, text):
        """Parents sit one level up and list their children."""
        outline = OutlineBuilder().build(FountainParser().parse(text).elements)
        tree = OutlineTree(outline)
        for node in outline:
            parent = tree.parent(node)
            if parent is not None:
                assert parent.level == node.level - 1
                assert node.id in parent.child_ids
                assert parent.index < node.index

    @given(text=fountain_text)
    @settings(max_examples=100)
    def test_notes_and_end_markers_have_no_children(self, text):
        """Notes and END markers are never parents."""
        outline = OutlineBuilder().build(FountainParser().parse(text).elements)
        for node in outline:
            if node.is_end_marker or node.node_type.value == "note":
                assert node.child_ids == ()


class TestBrowserProperties:
    """Scene browser invariants."""

    @given(text=fountain_text)
    @settings(max_examples=200)
    def test_no_over_black_scenes(self, text):
        """OVER BLACK scenes never appear as scenes of their own."""
        document = FountainParser().parse(text)
        outline = OutlineBuilder().build(document.elements)
        browser = SceneBrowserAssembler().assemble(outline, document.elements)
        for scene in browser.scenes:
            assert "OVER BLACK" not in scene.title.upper()
            assert scene.scene_elements[0].is_scene_heading
            assert scene.pre_scene_elements is None or len(scene.pre_scene_elements) > 0


class TestLocationProperties:
    """Location parsing is total."""

    @given(text=st.text(max_size=80))
    @settings(max_examples=300)
    def test_parse_never_raises(self, text):
        location = SceneLocation.parse(text)
        assert location.original_text == text
        assert isinstance(location.lighting, SceneLighting)
        assert location.location_key == location.location_key.strip()
        assert "  " not in location.location_key

    @given(
        lighting=st.sampled_from(["INT.", "EXT.", "INT/EXT.", "I/E"]),
        place=st.lists(
            st.text(alphabet=string.ascii_uppercase, min_size=1, max_size=8),
            min_size=1,
            max_size=3,
        ).map(" ".join),
        time=st.sampled_from(["DAY", "NIGHT", "MORNING", "CONTINUOUS"]),
    )
    def test_time_and_lighting_not_in_key(self, lighting, place, time):
        """Headings differing only in lighting or time share a key."""
        base = SceneLocation.parse(f"INT. {place} - DAY")
        other = SceneLocation.parse(f"{lighting} {place} - {time}")
        assert base.location_key == other.location_key

    @given(text=fountain_text)
    @settings(max_examples=100)
    def test_groups_cover_every_scene(self, text):
        """Each scene heading lands in exactly one location group."""
        elements = FountainParser().parse(text).elements
        groups = group_scenes_by_location(elements)
        total = sum(group.scene_count for group in groups.values())
        assert total == sum(1 for e in elements if e.is_scene_heading)
