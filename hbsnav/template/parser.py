"""
Partial-path parser.

Finds the raw path of a {{> path}} expression around a caret (completion)
or inside a node's text (reference extraction) and computes segment
boundaries. Only the partial syntax is understood; everything else in the
template is opaque text.
"""

from __future__ import annotations

import re
from typing import List, Optional, Tuple

from .types import CompletionContext, ReferenceOccurrence, TextRange

PARTIAL_OPEN = "{{>"
MUSTACHE_CLOSE = "}}"
QUOTES = ("'", '"')


def split_segments(raw: str) -> List[str]:
    """Split on '/', dropping empty pieces."""
    return [s for s in raw.split("/") if s]


def segment_ranges(raw: str, start: int = 0) -> List[TextRange]:
    """
    Offsets of every non-empty segment of raw, shifted by start.

    Separators are skipped one character at a time, so repeated or
    leading slashes do not misalign later segments.
    """
    ranges: List[TextRange] = []
    cursor = 0
    for piece in raw.split("/"):
        if piece:
            ranges.append(TextRange(start + cursor, start + cursor + len(piece)))
        cursor += len(piece) + 1
    return ranges


class PathParser:
    """
    Parser for partial paths.

    Transforms template text into CompletionContext / ReferenceOccurrence.
    Does NOT perform resolution.
    """

    # {{> path}} or {{~> path}}, the path optionally quoted
    _REFERENCE_PATTERN = re.compile(r"""\{\{~?>\s*(['"]?)([^\s'"}]+)\1""")

    def completion_context(self, text: str, offset: int) -> Optional[CompletionContext]:
        """
        Context for completion at a caret.

        Returns None when the caret is not inside a partial path: no '{{>'
        ends before the caret, the mustache is already closed, or the text
        between path start and caret is not a path.
        """
        caret = max(0, min(offset, len(text)))

        start = text.rfind(PARTIAL_OPEN, 0, caret)
        if start < 0:
            return None
        if text.find(MUSTACHE_CLOSE, start + len(PARTIAL_OPEN), caret) >= 0:
            return None

        idx = start + len(PARTIAL_OPEN)
        while idx < caret and text[idx].isspace():
            idx += 1
        if idx < caret and text[idx] in QUOTES:
            idx += 1
        while idx < caret and text[idx].isspace():
            idx += 1

        raw = text[idx:caret]
        if any(ch.isspace() or ch in QUOTES or ch in "{}" for ch in raw):
            return None

        traverse, fragment = self.split_for_completion(raw)
        return CompletionContext(
            raw_path=raw,
            traverse=traverse,
            fragment=fragment,
            path_start=idx,
            caret=caret,
        )

    @staticmethod
    def split_for_completion(raw: str) -> Tuple[Tuple[str, ...], str]:
        """
        (traverse, fragment) for a raw path typed so far.

        A trailing slash means every segment is complete and a fresh child
        is being chosen.
        """
        segments = split_segments(raw)
        if raw.endswith("/") or not segments:
            return tuple(segments), ""
        return tuple(segments[:-1]), segments[-1]

    def extract_reference(self, node_text: str, node_start: int = 0) -> Optional[ReferenceOccurrence]:
        """First partial reference in a node's text, or None."""
        match = self._REFERENCE_PATTERN.search(node_text)
        if match is None:
            return None
        return self._occurrence(match, node_start)

    def find_references(self, text: str) -> List[ReferenceOccurrence]:
        """Every partial reference in a document, with document offsets."""
        out: List[ReferenceOccurrence] = []
        for match in self._REFERENCE_PATTERN.finditer(text):
            occ = self._occurrence(match, 0)
            if occ is not None:
                out.append(occ)
        return out

    def reference_at(self, text: str, offset: int) -> Optional[ReferenceOccurrence]:
        """The reference whose path contains offset (document offsets)."""
        for occ in self.find_references(text):
            if occ.path_range.contains(offset):
                return occ
        return None

    def _occurrence(self, match: re.Match, node_start: int) -> Optional[ReferenceOccurrence]:
        raw = match.group(2)
        segments = split_segments(raw)
        if not segments:
            return None
        path_start = match.start(2)
        return ReferenceOccurrence(
            raw_path=raw,
            segments=tuple(segments),
            segment_ranges=tuple(segment_ranges(raw, path_start)),
            path_range=TextRange(path_start, path_start + len(raw)),
            quote=match.group(1),
            node_start=node_start,
        )


__all__ = ["PathParser", "split_segments", "segment_ranges", "PARTIAL_OPEN"]
