"""
Tests for the drawing index lookup and index building.
"""

from gearsel.catalog.drawings import (
    build_index_from_filenames,
    find_drawings,
    parse_drawing_filename,
)
from gearsel.models.selection import DrawingFiles

INDEX = {
    "GPB|042|L1|8|M3": DrawingFiles(pdf=["pdf/a-M3.PDF"], step=["dwg/a-M3.STEP"]),
    "GPB|042|L1|8|M4": DrawingFiles(pdf=["pdf/a-M4.PDF"], step=[]),
    "GPB|042|L2|8|M3": DrawingFiles(pdf=["pdf/b-M3.PDF"], step=[]),
}


class TestFindDrawings:
    """Tests for find_drawings."""

    def test_exact_key_with_tap(self):
        files = find_drawings(INDEX, "GPB", 42, "L1", 8, "M3")

        assert files.pdf == ["pdf/a-M3.PDF"]
        assert files.step == ["dwg/a-M3.STEP"]

    def test_tap_is_case_insensitive(self):
        assert find_drawings(INDEX, "GPB", 42, "L1", 8, "m4").pdf == ["pdf/a-M4.PDF"]

    def test_known_tap_without_entry_returns_nothing(self):
        """No fallback to drawings for a different flange."""
        files = find_drawings(INDEX, "GPB", 42, "L1", 8, "M5")
        assert files.is_empty

    def test_unknown_tap_merges_prefix(self):
        files = find_drawings(INDEX, "GPB", 42, "L1", 8)

        assert sorted(files.pdf) == ["pdf/a-M3.PDF", "pdf/a-M4.PDF"]
        assert files.step == ["dwg/a-M3.STEP"]

    def test_prefix_does_not_cross_stages(self):
        files = find_drawings(INDEX, "GPB", 42, "L2", 8)
        assert files.pdf == ["pdf/b-M3.PDF"]

    def test_no_match(self):
        assert find_drawings(INDEX, "GPL", 60, "L1", 14).is_empty

    def test_sample_catalog(self, catalog):
        files = find_drawings(catalog.drawings, "GPB", 90, "L1", 19, "M6")

        assert files.pdf == ["pdf/GPB/GPB090-L1-(19-70-90-M6).PDF"]
        assert len(files.step) == 1


class TestParseDrawingFilename:
    """Tests for parse_drawing_filename."""

    def test_parses_convention(self):
        key = parse_drawing_filename("GPB042-L1-(8-30-45-M3).PDF")

        assert key is not None
        assert key.encode() == "GPB|042|L1|8|M3"

    def test_lowercase_name(self):
        key = parse_drawing_filename("gpb060-l2-(14-50-70-m4).step")
        assert key.encode() == "GPB|060|L2|14|M4"

    def test_rejects_other_names(self):
        assert parse_drawing_filename("catalog.pdf") is None
        assert parse_drawing_filename("GPB042-L1-(8-30-45).PDF") is None


class TestBuildIndex:
    """Tests for build_index_from_filenames."""

    def test_groups_pdf_and_step(self):
        index = build_index_from_filenames([
            "pdf/GPB/GPB042-L1-(8-30-45-M3).PDF",
            "dwg/GPB/GPB042-L1-(8-30-45-M3).STEP",
            "pdf/GPB/GPB060-L1-(14-50-70-M4).PDF",
        ])

        assert set(index) == {"GPB|042|L1|8|M3", "GPB|060|L1|14|M4"}
        assert index["GPB|042|L1|8|M3"].step == ["dwg/GPB/GPB042-L1-(8-30-45-M3).STEP"]
        assert index["GPB|060|L1|14|M4"].step == []

    def test_skips_unknown_folders_and_names(self):
        index = build_index_from_filenames([
            "img/GPB/GPB042-L1-(8-30-45-M3).PNG",
            "pdf/GPB/readme.txt",
        ])
        assert index == {}

    def test_built_index_feeds_lookup(self):
        index = build_index_from_filenames(["pdf/GPB/GPB042-L1-(8-30-45-M3).PDF"])
        files = find_drawings(index, "GPB", 42, "L1", 8, "M3")
        assert files.pdf == ["pdf/GPB/GPB042-L1-(8-30-45-M3).PDF"]
