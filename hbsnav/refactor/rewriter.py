"""
Reference rewriting after moves and renames.

Rebind rewrites the whole path so it keeps pointing at a moved target;
rename touches only one segment. Both validate the range against the
current document before mutating and run as one transaction.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from ..errors import RewriteError
from ..resolver import RootSet, SegmentResolver
from ..template import ReferenceOccurrence, TextRange, split_segments
from ..vfs import Entry, FileSystem
from .document import Document
from .ranges import check_range, locate_path_range, locate_segment_range

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RebindCandidate:
    """Path expression for the target relative to one base directory."""
    base: Path
    path: str
    valid: bool


@dataclass(frozen=True)
class RewriteFailure:
    occurrence: ReferenceOccurrence
    error: RewriteError


class ReferenceRewriter:
    """Keeps partial reference text consistent with the filesystem."""

    def __init__(self, roots: RootSet, resolver: SegmentResolver, fs: FileSystem):
        self.roots = roots
        self.resolver = resolver
        self.fs = fs

    # ----------------------------- rebind ----------------------------- #

    def candidate_bases(self, occ: ReferenceOccurrence, index: int, source_file: Optional[Path]) -> List[Path]:
        """
        Bases in priority order: resolved parent directory, roots,
        project base directory, the referencing file's directory.
        """
        bases: List[Path] = []
        if index > 0:
            parent = self.resolver.resolve_segment(occ.segments[:index], index - 1, False)
            if parent is not None:
                bases.append(parent.path)
        bases.extend(r.path for r in self.roots.get_roots())
        bases.append(self.roots.project.base_dir)
        if source_file is not None:
            bases.append(Path(source_file).parent)

        out: List[Path] = []
        for b in bases:
            if b not in out:
                out.append(b)
        return out

    def rebind_candidates(
        self,
        occ: ReferenceOccurrence,
        new_target: Entry,
        source_file: Optional[Path] = None,
        index: Optional[int] = None,
    ) -> List[RebindCandidate]:
        idx = occ.terminal_index if index is None else index
        out: List[RebindCandidate] = []
        with self.fs.read_action():
            for base in self.candidate_bases(occ, idx, source_file):
                rel = self.fs.relative_path(new_target, base)
                if not rel:
                    continue
                path = self._strip_last_extension(rel)
                out.append(RebindCandidate(base, path, self._validates(path, new_target)))
        return out

    def compute_rebind_text(
        self,
        occ: ReferenceOccurrence,
        new_target: Entry,
        source_file: Optional[Path] = None,
        index: Optional[int] = None,
    ) -> str:
        """
        Replacement for the whole path of occ after its target moved.

        The first validated candidate wins; otherwise the first computed one;
        otherwise the bare target name. For a directory segment the segments
        after it are kept.
        """
        idx = occ.terminal_index if index is None else index

        # {{> .../header/header}} collapses to {{> .../header}}
        if idx == occ.terminal_index and idx > 0 and occ.segments[idx - 1] == occ.segments[idx]:
            return "/".join(occ.segments[:idx])

        candidates = self.rebind_candidates(occ, new_target, source_file, idx)
        chosen = next((c for c in candidates if c.valid), None)
        if chosen is None and candidates:
            chosen = candidates[0]
            logger.debug(f"No validated rebind for {new_target.path}, using {chosen.path!r}")

        replacement = chosen.path if chosen is not None else self._strip_last_extension(new_target.name)

        tail = occ.segments[idx + 1:]
        if tail:
            replacement = "/".join([replacement, *tail])
        return replacement

    def rebind_on_move(
        self,
        document: Document,
        occ: ReferenceOccurrence,
        new_target: Entry,
        source_file: Optional[Path] = None,
        index: Optional[int] = None,
    ) -> str:
        """
        Rewrite the reference so it points at new_target.

        Returns:
            The replacement path text

        Raises:
            InvalidRewriteRangeError: The located range does not fit the document
        """
        replacement = self.compute_rebind_text(occ, new_target, source_file, index)
        rng = locate_path_range(document.text, occ)
        self._replace(document, rng, replacement)
        logger.debug(f"Rebound {occ.raw_path!r} -> {replacement!r}")
        return replacement

    def rebind_all(
        self,
        document: Document,
        moves: Sequence[Tuple[ReferenceOccurrence, Entry]],
        source_file: Optional[Path] = None,
    ) -> List[RewriteFailure]:
        """
        Rebind several references; a failing one is skipped and reported.

        Applied from the end of the document backwards so earlier offsets
        stay valid.
        """
        failures: List[RewriteFailure] = []
        ordered = sorted(moves, key=lambda m: m[0].absolute(m[0].path_range).start, reverse=True)
        for occ, target in ordered:
            try:
                self.rebind_on_move(document, occ, target, source_file)
            except RewriteError as e:
                logger.warning(f"Cannot rebind {occ.raw_path!r}: {e.message}")
                failures.append(RewriteFailure(occ, e))
        return failures

    # ----------------------------- rename ----------------------------- #

    def rename_terminal_segment(self, document: Document, occ: ReferenceOccurrence, new_name: str) -> str:
        """
        Replace only the last segment's text; a trailing extension is dropped.

        Returns:
            The text written in place of the segment
        """
        return self.rename_segment(document, occ, occ.terminal_index, new_name)

    def rename_segment(self, document: Document, occ: ReferenceOccurrence, index: int, new_name: str) -> str:
        name = new_name.strip()
        if index == occ.terminal_index:
            name = self.resolver.strip_extension(name)
        if not name or "/" in name:
            raise RewriteError(f"Invalid segment name {new_name!r}", hint="Use a single path component")

        rng = locate_segment_range(document.text, occ, index)
        self._replace(document, rng, name)
        logger.debug(f"Renamed segment {occ.segments[index]!r} -> {name!r}")
        return name

    # ----------------------------- internals ----------------------------- #

    def _replace(self, document: Document, rng: TextRange, text: str) -> None:
        def apply() -> None:
            check_range(rng, document.current_length())
            document.replace_range(rng.start, rng.end, text)

        document.run_as_transaction(apply)

    def _strip_last_extension(self, rel: str) -> str:
        head, sep, last = rel.rpartition("/")
        return f"{head}{sep}{self.resolver.strip_extension(last)}"

    def _validates(self, path: str, target: Entry) -> bool:
        segments = split_segments(path)
        if not segments:
            return False
        last = len(segments) - 1

        if target.is_directory:
            return self.resolver.resolve_segment(segments, last, False) == target

        if self.resolver.resolve_segment(segments, last, True) == target:
            return True
        # Looser: the path names the directory that contains the file
        folder = self.resolver.resolve_segment(segments, last, False)
        return folder is not None and folder.path == target.parent


__all__ = ["ReferenceRewriter", "RebindCandidate", "RewriteFailure"]
