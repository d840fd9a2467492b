"""
Tests for hbsnav/template/parser.py: completion context and reference extraction.
"""

from __future__ import annotations

import pytest

from hbsnav.template import PathParser, TextRange, segment_ranges, split_segments


@pytest.fixture
def parser() -> PathParser:
    return PathParser()


class TestSplitting:

    @pytest.mark.parametrize("raw,expected", [
        ("a/b/c", ["a", "b", "c"]),
        ("a//b", ["a", "b"]),
        ("/a/", ["a"]),
        ("", []),
        ("/", []),
    ])
    def test_split_segments(self, raw, expected):
        assert split_segments(raw) == expected

    def test_segment_ranges_skip_empty_pieces(self):
        assert segment_ranges("a//bc", 10) == [TextRange(10, 11), TextRange(13, 15)]

    @pytest.mark.parametrize("raw,traverse,fragment", [
        ("", (), ""),
        ("comp", (), "comp"),
        ("components/", ("components",), ""),
        ("components/he", ("components",), "he"),
        ("a/b/c", ("a", "b"), "c"),
        ("a//b/", ("a", "b"), ""),
    ])
    def test_split_for_completion(self, raw, traverse, fragment):
        assert PathParser.split_for_completion(raw) == (traverse, fragment)


class TestCompletionContext:
    """Caret inside a partial expression being typed."""

    def test_fragment_after_slash(self, parser: PathParser):
        text = "<div>{{> components/he"
        ctx = parser.completion_context(text, len(text))

        assert ctx.traverse == ("components",)
        assert ctx.fragment == "he"
        assert ctx.raw_path == "components/he"
        assert ctx.path_start == text.index("components")

    def test_trailing_slash_means_all_traverse(self, parser: PathParser):
        text = "{{> components/"
        ctx = parser.completion_context(text, len(text))

        assert ctx.traverse == ("components",)
        assert ctx.fragment == ""

    def test_empty_path(self, parser: PathParser):
        text = "{{> }}"
        ctx = parser.completion_context(text, 4)

        assert ctx.traverse == ()
        assert ctx.fragment == ""

    def test_caret_right_after_opener(self, parser: PathParser):
        ctx = parser.completion_context("{{>", 3)

        assert ctx is not None
        assert ctx.raw_path == ""

    @pytest.mark.parametrize("offset", [0, 2, 4])
    def test_caret_before_opener(self, parser: PathParser, offset: int):
        assert parser.completion_context("abc {{> foo}}", offset) is None

    def test_caret_in_middle_of_path(self, parser: PathParser):
        text = "{{> components/header}}"
        ctx = parser.completion_context(text, text.index("header") + 3)

        assert ctx.traverse == ("components",)
        assert ctx.fragment == "hea"

    @pytest.mark.parametrize("quote", ["'", '"'])
    def test_quoted_path(self, parser: PathParser, quote: str):
        text = f"{{{{> {quote}components/he"
        ctx = parser.completion_context(text, len(text))

        assert ctx.traverse == ("components",)
        assert ctx.fragment == "he"
        assert ctx.path_start == len("{{> ") + 1

    def test_closed_mustache_before_caret(self, parser: PathParser):
        text = "{{> foo}} bar"

        assert parser.completion_context(text, len(text)) is None

    def test_caret_after_path_and_space(self, parser: PathParser):
        text = "{{> foo bar"

        assert parser.completion_context(text, len(text)) is None

    def test_no_partial_opener(self, parser: PathParser):
        assert parser.completion_context("{{foo/bar", 9) is None

    def test_offset_is_clamped(self, parser: PathParser):
        text = "{{> a/"
        ctx = parser.completion_context(text, 100)

        assert ctx.caret == len(text)
        assert ctx.traverse == ("a",)

    def test_nearest_opener_wins(self, parser: PathParser):
        text = "{{> one}} {{> two/x"
        ctx = parser.completion_context(text, len(text))

        assert ctx.traverse == ("two",)
        assert ctx.fragment == "x"


class TestExtractReference:
    """Reference occurrence inside a node's text."""

    def test_segments_and_ranges(self, parser: PathParser):
        occ = parser.extract_reference("{{> a/b/c}}")

        assert occ.segments == ("a", "b", "c")
        assert occ.segment_ranges == (TextRange(4, 5), TextRange(6, 7), TextRange(8, 9))
        assert occ.path_range == TextRange(4, 9)
        assert occ.quote == ""
        assert occ.terminal_index == 2

    def test_node_start_shifts_absolute_ranges(self, parser: PathParser):
        occ = parser.extract_reference("{{> a/b}}", node_start=100)

        assert occ.node_start == 100
        assert occ.absolute(occ.path_range) == TextRange(104, 107)

    @pytest.mark.parametrize("text", ["{{> 'a/b' }}", '{{>"a/b"}}'])
    def test_quoted(self, parser: PathParser, text: str):
        occ = parser.extract_reference(text)

        assert occ.raw_path == "a/b"
        assert occ.path_range.slice(text) == "a/b"
        assert occ.quote in ("'", '"')

    def test_hash_arguments_are_ignored(self, parser: PathParser):
        occ = parser.extract_reference("{{> cards/item title=name}}")

        assert occ.segments == ("cards", "item")

    def test_whitespace_control(self, parser: PathParser):
        text = "{{~> a/b ~}}"
        occ = parser.extract_reference(text)

        assert occ.segments == ("a", "b")
        assert occ.path_range.slice(text) == "a/b"

    def test_doubled_slash(self, parser: PathParser):
        occ = parser.extract_reference("{{> a//b}}")

        assert occ.segments == ("a", "b")
        assert occ.segment_ranges == (TextRange(4, 5), TextRange(7, 8))
        assert occ.joined_path == "a/b"

    def test_not_a_partial(self, parser: PathParser):
        assert parser.extract_reference("{{#if x}}") is None
        assert parser.extract_reference("plain text") is None

    def test_slash_only_path(self, parser: PathParser):
        assert parser.extract_reference("{{> /}}") is None

    def test_segment_at(self, parser: PathParser):
        occ = parser.extract_reference("{{> ab/cd}}")

        assert occ.segment_at(4) == 0
        assert occ.segment_at(6) == 0
        assert occ.segment_at(7) == 1
        assert occ.segment_at(9) == 1
        assert occ.segment_at(1) is None


class TestDocumentScan:

    def test_find_references(self, parser: PathParser):
        text = "{{> a/b}}\n{{#if x}}{{> 'c'}}{{/if}}"
        refs = parser.find_references(text)

        assert [r.raw_path for r in refs] == ["a/b", "c"]
        assert refs[1].path_range.slice(text) == "c"

    def test_reference_at(self, parser: PathParser):
        text = "{{> one}} {{> two/three}}"

        assert parser.reference_at(text, text.index("three")).raw_path == "two/three"
        assert parser.reference_at(text, 5).raw_path == "one"
        assert parser.reference_at(text, 0) is None
