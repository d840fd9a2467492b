"""
Data types for partial-path parsing.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class TextRange:
    """Half-open [start, end) character range."""
    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start

    @property
    def is_valid(self) -> bool:
        return 0 <= self.start <= self.end

    def shift(self, delta: int) -> "TextRange":
        return TextRange(self.start + delta, self.end + delta)

    def contains(self, offset: int) -> bool:
        """Inclusive of end: a caret right after the last character is inside."""
        return self.start <= offset <= self.end

    def slice(self, text: str) -> str:
        return text[self.start:self.end]

    def __repr__(self) -> str:
        return f"({self.start},{self.end})"


@dataclass(frozen=True)
class ReferenceOccurrence:
    """
    A located {{> path}} expression.

    Offsets are relative to the containing node's text; node_start is
    where that text begins in the document.
    """
    raw_path: str
    segments: Tuple[str, ...]
    segment_ranges: Tuple[TextRange, ...]   # One per segment
    path_range: TextRange                   # Whole raw path
    quote: str = ""                         # "'", '"' or ""
    node_start: int = 0

    @property
    def terminal_index(self) -> int:
        return len(self.segments) - 1

    @property
    def joined_path(self) -> str:
        return "/".join(self.segments)

    def absolute(self, rng: TextRange) -> TextRange:
        """Node-relative range -> document range."""
        return rng.shift(self.node_start)

    def segment_at(self, offset: int) -> Optional[int]:
        """Index of the segment under a node-relative offset."""
        for i, rng in enumerate(self.segment_ranges):
            if rng.contains(offset):
                return i
        return None


@dataclass(frozen=True)
class CompletionContext:
    """What has been typed so far inside a partial reference."""
    raw_path: str
    traverse: Tuple[str, ...]   # Already typed, complete segments
    fragment: str               # Segment in progress ("" after a slash)
    path_start: int             # Offset where the raw path begins
    caret: int


__all__ = ["TextRange", "ReferenceOccurrence", "CompletionContext"]
