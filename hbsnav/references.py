"""
Per-segment references of a partial path (go to definition).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from .completion import CompletionEngine
from .resolver import SegmentResolver
from .template import PathParser, ReferenceOccurrence, TextRange
from .vfs import Entry


@dataclass(frozen=True)
class SegmentReference:
    """One resolved segment of a partial reference."""
    occurrence: ReferenceOccurrence
    index: int
    target: Entry

    @property
    def range(self) -> TextRange:
        """Document range of the segment text."""
        return self.occurrence.absolute(self.occurrence.segment_ranges[self.index])

    @property
    def canonical_text(self) -> str:
        return self.occurrence.segments[self.index]

    @property
    def is_terminal(self) -> bool:
        return self.index == self.occurrence.terminal_index

    @property
    def parent_segments(self) -> List[str]:
        return list(self.occurrence.segments[: self.index])


class PartialReferenceProvider:
    """Builds SegmentReferences for partial expressions."""

    def __init__(self, resolver: SegmentResolver, completion: CompletionEngine):
        self.resolver = resolver
        self.completion = completion
        self.parser = PathParser()

    def references(self, node_text: str, node_start: int = 0) -> List[SegmentReference]:
        """References for the partial in a node's text; unresolved segments are skipped."""
        occ = self.parser.extract_reference(node_text, node_start)
        if occ is None:
            return []
        return self.for_occurrence(occ)

    def for_occurrence(self, occ: ReferenceOccurrence) -> List[SegmentReference]:
        refs: List[SegmentReference] = []
        last = occ.terminal_index
        for idx in range(len(occ.segments)):
            target = self.resolver.resolve_segment(occ.segments, idx, idx == last)
            if target is not None:
                refs.append(SegmentReference(occ, idx, target))
        return refs

    def variants(self, ref: SegmentReference) -> List[str]:
        """Names that could stand at the reference's position."""
        return [e.display_name for e in self.completion.children_of(ref.parent_segments)]


__all__ = ["SegmentReference", "PartialReferenceProvider"]
