"""
Template text handling: partial-path parsing and the mustache node model.
"""

from .types import TextRange, ReferenceOccurrence, CompletionContext
from .parser import PathParser, split_segments, segment_ranges, PARTIAL_OPEN
from .nodes import (
    MustacheKind,
    MustacheNode,
    BlockStatement,
    Statements,
    iter_nodes,
    paired_element,
)
from .lexer import scan_mustaches, build_tree, parse_template, partial_at

__all__ = [
    "TextRange",
    "ReferenceOccurrence",
    "CompletionContext",
    "PathParser",
    "split_segments",
    "segment_ranges",
    "PARTIAL_OPEN",
    "MustacheKind",
    "MustacheNode",
    "BlockStatement",
    "Statements",
    "iter_nodes",
    "paired_element",
    "scan_mustaches",
    "build_tree",
    "parse_template",
    "partial_at",
]
