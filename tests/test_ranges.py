"""
Tests for hbsnav/refactor/ranges.py: locating reference text in a changed document.
"""

from __future__ import annotations

import pytest

from hbsnav.errors import InvalidRewriteRangeError
from hbsnav.refactor import check_range, locate_path_range, locate_segment_range
from hbsnav.template import PathParser, TextRange


def _occ(text: str, node_start: int = 0):
    return PathParser().extract_reference(text, node_start)


class TestLocatePathRange:

    def test_unchanged_text(self):
        text = "{{> a/b}}"

        assert locate_path_range(text, _occ(text)) == TextRange(4, 7)

    def test_text_inserted_before(self):
        occ = _occ("{{> a/b}}")

        assert locate_path_range("xx{{> a/b}}", occ) == TextRange(6, 9)

    def test_nearest_occurrence_wins(self):
        original = "{{> a/b}} {{> a/b}}"
        occ = PathParser().find_references(original)[1]

        assert locate_path_range("zz" + original, occ) == TextRange(16, 19)

    def test_falls_back_to_recorded_range(self):
        occ = _occ("{{> a/b}}")

        assert locate_path_range("nothing here", occ) == TextRange(4, 7)

    def test_doubled_slash_is_located_by_recorded_offsets(self):
        text = "{{> a//b}}"

        # joined path 'a/b' does not occur in the text
        assert locate_path_range(text, _occ(text)) == TextRange(4, 8)

    def test_match_inside_longer_path_is_skipped(self):
        occ = _occ("{{> b/c}}")
        text = "<p>{{> ab/c}}{{> b/c}}"

        rng = locate_path_range(text, occ)

        assert rng == TextRange(17, 20)
        assert text[rng.start - 1] == " "

    def test_only_partial_matches_falls_back(self):
        occ = _occ("{{> b/c}}")

        assert locate_path_range("{{> ab/cd}}", occ) == TextRange(4, 7)


class TestLocateSegmentRange:

    def test_segment_in_unchanged_text(self):
        text = "{{> a/bb/c}}"

        assert locate_segment_range(text, _occ(text), 1) == TextRange(6, 8)

    def test_segment_after_shift(self):
        occ = _occ("{{> a/bb/c}}")
        text = "zz{{> a/bb/c}}"

        rng = locate_segment_range(text, occ, 1)

        assert rng.slice(text) == "bb"
        assert rng == TextRange(8, 10)

    def test_segment_when_path_was_edited(self):
        occ = _occ("{{> a/bb/c}}")

        assert locate_segment_range("{{> a/bb/d}}", occ, 1) == TextRange(6, 8)

    def test_segment_near_recorded_range(self):
        occ = _occ("{{> a/bb/c}}")
        text = "{{> aa/bb/d}}"

        assert locate_segment_range(text, occ, 1).slice(text) == "bb"

    def test_window_search_skips_partial_segment(self):
        occ = _occ("{{> a/bb/c}}")
        text = "{{> xbb/bb/d}}"

        assert locate_segment_range(text, occ, 1) == TextRange(8, 10)


class TestCheckRange:

    @pytest.mark.parametrize("rng", [TextRange(0, 0), TextRange(0, 5), TextRange(2, 3)])
    def test_valid(self, rng: TextRange):
        check_range(rng, 5)

    @pytest.mark.parametrize("rng", [TextRange(-1, 2), TextRange(3, 2), TextRange(0, 6)])
    def test_invalid(self, rng: TextRange):
        with pytest.raises(InvalidRewriteRangeError) as exc:
            check_range(rng, 5)

        assert exc.value.length == 5
        assert "Hint:" in str(exc.value)
