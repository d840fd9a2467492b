"""
Completion of partial paths.

Lists the children of the directory named by the already-typed segments
(or of every root when nothing is typed yet), keeps directories and
templates, and filters them by the fragment in progress.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Set, Tuple

from .resolver import RootSet, SegmentResolver
from .template import CompletionContext, PathParser
from .vfs import Entry, FileSystem

logger = logging.getLogger(__name__)


class CandidateKind(enum.Enum):
    DIRECTORY = "directory"
    FILE = "file"


@dataclass(frozen=True)
class CompletionCandidate:
    """One completion entry: what to insert and what it points at."""
    name: str
    kind: CandidateKind
    path: Path

    @property
    def is_directory(self) -> bool:
        return self.kind is CandidateKind.DIRECTORY


class CompletionEngine:
    """Produces ordered, de-duplicated candidates for a partial path."""

    def __init__(self, roots: RootSet, resolver: SegmentResolver, fs: FileSystem):
        self.roots = roots
        self.resolver = resolver
        self.fs = fs
        self.parser = PathParser()

    def complete(self, traverse: Sequence[str], fragment: str) -> List[CompletionCandidate]:
        """
        Candidates for the next segment after traverse.

        Order is root priority, then enumeration order. An unresolvable
        traverse yields no candidates.
        """
        with self.fs.read_action():
            children = self._children_for(traverse)
            if children is None:
                return []
            return self._filter(children, fragment)

    def complete_at(self, text: str, offset: int) -> List[CompletionCandidate]:
        """Candidates for the caret position in a template text."""
        ctx = self.parser.completion_context(text, offset)
        if ctx is None:
            return []
        return self.complete(ctx.traverse, ctx.fragment)

    def context_at(self, text: str, offset: int) -> Optional[CompletionContext]:
        return self.parser.completion_context(text, offset)

    def children_of(self, parent_segments: Sequence[str]) -> List[Entry]:
        """Directories and templates that may follow parent_segments."""
        with self.fs.read_action():
            return self._children_for(parent_segments) or []

    def _children_for(self, traverse: Sequence[str]) -> Optional[List[Entry]]:
        if not traverse:
            out: List[Entry] = []
            for root in self.roots.get_roots():
                out.extend(self._eligible(self.fs.list_children(root.path)))
            return out

        parent = self.resolver.resolve_segment(traverse, len(traverse) - 1, False)
        if parent is None:
            logger.debug(f"Completion parent not found: {'/'.join(traverse)}")
            return None
        return list(self._eligible(self.fs.list_children(parent.path)))

    def _eligible(self, entries: Iterable[Entry]) -> Iterable[Entry]:
        for e in entries:
            if e.is_directory or self.resolver.is_template(e):
                yield e

    def _filter(self, entries: Iterable[Entry], fragment: str) -> List[CompletionCandidate]:
        needle = fragment.lower()
        seen: Set[Tuple[Path, str]] = set()
        out: List[CompletionCandidate] = []
        for e in entries:
            name = e.display_name
            if needle not in name.lower():
                continue
            key = (e.path, name)
            if key in seen:
                continue
            seen.add(key)
            kind = CandidateKind.DIRECTORY if e.is_directory else CandidateKind.FILE
            out.append(CompletionCandidate(name=name, kind=kind, path=e.path))
        return out


__all__ = ["CandidateKind", "CompletionCandidate", "CompletionEngine"]
