"""
Tests for hbsnav/template/lexer.py and nodes.py: mustache scanning and block pairing.
"""

from __future__ import annotations

import pytest

from hbsnav.template import (
    BlockStatement,
    MustacheKind,
    iter_nodes,
    paired_element,
    parse_template,
    partial_at,
    scan_mustaches,
)


def _kinds(text: str):
    return [(n.kind, n.name) for n in scan_mustaches(text)]


class TestScanMustaches:

    def test_block_and_partial(self):
        assert _kinds("{{#if x}}{{> a/b}}{{/if}}") == [
            (MustacheKind.OPEN_BLOCK, "if"),
            (MustacheKind.PARTIAL, "a/b"),
            (MustacheKind.CLOSE_BLOCK, "if"),
        ]

    def test_offsets(self):
        text = "ab{{> x}}cd"
        node = scan_mustaches(text)[0]

        assert (node.start, node.end) == (2, 9)
        assert node.text == "{{> x}}"

    def test_quoted_partial_name(self):
        assert _kinds("{{> 'a/b' title=x}}") == [(MustacheKind.PARTIAL, "a/b")]

    def test_whitespace_control(self):
        assert _kinds("{{~#if x~}}{{~> p ~}}{{~/if~}}") == [
            (MustacheKind.OPEN_BLOCK, "if"),
            (MustacheKind.PARTIAL, "p"),
            (MustacheKind.CLOSE_BLOCK, "if"),
        ]

    def test_comments_hide_their_content(self):
        nodes = scan_mustaches("{{!-- {{> hidden}} --}}{{! short }}{{> shown}}")

        assert [n.kind for n in nodes] == [MustacheKind.COMMENT, MustacheKind.COMMENT, MustacheKind.PARTIAL]
        assert nodes[2].name == "shown"

    def test_triple_stash_is_plain(self):
        assert _kinds("{{{body}}}") == [(MustacheKind.PLAIN, "body")]

    @pytest.mark.parametrize("text", ["{{^}}", "{{else}}", "{{title}}"])
    def test_plain_forms(self, text: str):
        assert [k for k, _ in _kinds(text)] == [MustacheKind.PLAIN]

    def test_inverse_section_opens_block(self):
        assert _kinds("{{^if x}}") == [(MustacheKind.OPEN_BLOCK, "if")]

    def test_unterminated_mustache_stops_scan(self):
        assert _kinds("{{> a}} {{> b") == [(MustacheKind.PARTIAL, "a")]


class TestPartialAt:

    def test_offset_inside_partial(self):
        text = "x {{> a/b}} y"
        node = partial_at(text, text.index("b"))

        assert node is not None
        assert node.name == "a/b"

    def test_offset_outside(self):
        text = "x {{> a/b}} y"

        assert partial_at(text, 0) is None
        assert partial_at(text, len(text)) is None

    def test_partial_inside_comment(self):
        text = "{{!-- {{> hidden}} --}}"

        assert partial_at(text, text.index("hidden")) is None

    def test_block_tag_is_not_a_partial(self):
        assert partial_at("{{#if x}}", 3) is None


class TestPairedElement:

    def _nodes(self, text: str):
        tree = parse_template(text)
        return tree, list(iter_nodes(tree))

    def test_open_and_close_pair(self):
        tree, (opener, partial, closer) = self._nodes("{{#if x}}{{> a}}{{/if}}")

        assert paired_element(tree, opener) is closer
        assert paired_element(tree, closer) is opener
        assert paired_element(tree, partial) is None

    def test_nested_same_name(self):
        tree, (outer, inner, inner_close, outer_close) = self._nodes(
            "{{#each a}}{{#each b}}{{/each}}{{/each}}"
        )

        assert paired_element(tree, outer) is outer_close
        assert paired_element(tree, inner) is inner_close
        assert paired_element(tree, inner_close) is inner

    def test_whitespace_control_blocks(self):
        tree, (opener, closer) = self._nodes("{{~#with ctx~}}{{~/with~}}")

        assert paired_element(tree, opener) is closer

    def test_unclosed_block(self):
        tree, (opener, _) = self._nodes("{{#if x}}{{> a}}")

        assert paired_element(tree, opener) is None

    def test_mismatched_close(self):
        tree, (opener, stray) = self._nodes("{{#if x}}{{/each}}")

        assert paired_element(tree, opener) is None
        assert paired_element(tree, stray) is None

    def test_close_skips_unclosed_inner_block(self):
        tree, (outer, inner, closer) = self._nodes("{{#if a}}{{#each b}}{{/if}}")

        assert paired_element(tree, outer) is closer
        assert paired_element(tree, inner) is None

    def test_tree_shape(self):
        tree = parse_template("{{> top}}{{#if x}}{{> inner}}{{/if}}")

        assert len(tree.children) == 2
        block = tree.children[1]
        assert isinstance(block, BlockStatement)
        assert block.open.name == "if"
        assert [n.name for n in iter_nodes(tree)] == ["top", "if", "inner", "if"]
