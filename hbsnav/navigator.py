"""
Host-facing facade.

Wires roots, resolver, completion, references and rewriting for one
project. The navigator owns the RootSet subscription; close it (or use it
as a context manager) when the project session ends.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Sequence, Union

from .completion import CompletionCandidate, CompletionEngine
from .config import is_template_file
from .errors import ReferenceNotFoundError, RewriteError
from .project import Project
from .references import PartialReferenceProvider, SegmentReference
from .refactor import Document, ReferenceRewriter
from .resolver import RootSet, SegmentResolver
from .template import PathParser, ReferenceOccurrence, partial_at
from .vfs import Entry, FileSystem, LocalFileSystem

logger = logging.getLogger(__name__)


class PartialNavigator:
    """Partial-path resolution engine for one project session."""

    def __init__(self, project: Project, fs: Optional[FileSystem] = None):
        self.project = project
        self.fs: FileSystem = fs if fs is not None else LocalFileSystem()
        self.root_set = RootSet(project, self.fs)
        self.resolver = SegmentResolver(self.root_set, self.fs)
        self.completion = CompletionEngine(self.root_set, self.resolver, self.fs)
        self.references_provider = PartialReferenceProvider(self.resolver, self.completion)
        self.rewriter = ReferenceRewriter(self.root_set, self.resolver, self.fs)
        self.parser = PathParser()

    @classmethod
    def open(cls, base_dir: Path, fs: Optional[FileSystem] = None) -> "PartialNavigator":
        """Navigator for a directory, configured from hbs-cfg/project.yaml if present."""
        return cls(Project.from_config(base_dir), fs)

    # ----------------------------- lifecycle ----------------------------- #

    def close(self) -> None:
        self.root_set.close()

    def __enter__(self) -> "PartialNavigator":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # ----------------------------- roots & resolution ----------------------------- #

    def roots(self) -> List[Entry]:
        return list(self.root_set.get_roots())

    def invalidate(self) -> None:
        self.root_set.invalidate()

    def resolve_segment(self, segments: Sequence[str], index: int, is_terminal: bool) -> Optional[Entry]:
        return self.resolver.resolve_segment(segments, index, is_terminal)

    def segment_exists(self, segments: Sequence[str], index: int) -> bool:
        return self.resolver.segment_exists(segments, index)

    def collect_all_segments_under_roots(self, max_depth: Optional[int] = None) -> List[str]:
        return self.resolver.collect_all_segments(max_depth)

    # ----------------------------- completion ----------------------------- #

    def complete(self, traverse: Sequence[str], fragment: str) -> List[CompletionCandidate]:
        return self.completion.complete(traverse, fragment)

    def complete_at(self, text: str, offset: int, file: Optional[Path] = None) -> List[CompletionCandidate]:
        """Completion at a caret; non-template files get nothing."""
        if file is not None and not is_template_file(file):
            return []
        return self.completion.complete_at(text, offset)

    # ----------------------------- references ----------------------------- #

    def reference_at(self, text: str, offset: int) -> Optional[ReferenceOccurrence]:
        """The partial reference around offset, with document offsets."""
        node = partial_at(text, offset)
        if node is not None:
            return self.parser.extract_reference(node.text, node.start)
        # Unterminated partial being typed: fall back to a plain text scan
        return self.parser.reference_at(text, offset)

    def references_at(self, text: str, offset: int, file: Optional[Path] = None) -> List[SegmentReference]:
        if file is not None and not is_template_file(file):
            return []
        occ = self.reference_at(text, offset)
        if occ is None:
            return []
        return self.references_provider.for_occurrence(occ)

    def variants(self, ref: SegmentReference) -> List[str]:
        return self.references_provider.variants(ref)

    # ----------------------------- rewriting ----------------------------- #

    def rebind_on_move(
        self,
        document: Document,
        offset: int,
        new_target: Union[Path, Entry],
        source_file: Optional[Path] = None,
    ) -> str:
        """
        Rewrite the reference at offset after its target moved to new_target.

        For a directory target the segment under the caret is rebound and
        the rest of the path is kept; for a file the whole path is replaced.
        """
        occ = self._require_reference(document, offset)
        target = new_target if isinstance(new_target, Entry) else self.fs.entry(Path(new_target))
        if target is None:
            raise RewriteError(f"Move target does not exist: {new_target}")

        index: Optional[int] = None
        if target.is_directory:
            index = occ.segment_at(offset - occ.node_start)
        return self.rewriter.rebind_on_move(document, occ, target, source_file, index)

    def rename_terminal_segment(self, document: Document, offset: int, new_name: str) -> str:
        occ = self._require_reference(document, offset)
        return self.rewriter.rename_terminal_segment(document, occ, new_name)

    def _require_reference(self, document: Document, offset: int) -> ReferenceOccurrence:
        occ = self.reference_at(document.text, offset)
        if occ is None:
            raise ReferenceNotFoundError(offset)
        return occ


__all__ = ["PartialNavigator"]
