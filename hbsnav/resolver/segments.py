"""
Segment resolver.

Resolves one position of a `/`-split partial path against every root in
priority order. Intermediate positions must be directories; the terminal
position is a file found through the partial naming conventions.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Set

import pathspec

from ..config.paths import INDEX_STEM, PARTIAL_PREFIX
from ..vfs import Entry, FileSystem
from .roots import RootSet

logger = logging.getLogger(__name__)


class SegmentResolver:
    """
    Maps (segments, index) to a directory or template file.

    Resolution failure is a normal outcome and is returned as None.
    """

    def __init__(self, roots: RootSet, fs: FileSystem):
        self.roots = roots
        self.fs = fs
        resolution = roots.project.resolution
        self.extension = resolution.extension
        self.max_depth = resolution.max_depth
        self._excluded = pathspec.PathSpec.from_lines("gitwildmatch", resolution.excluded_dirs)

    # ----------------------------- naming ----------------------------- #

    def candidate_file_names(self, segment: str) -> List[str]:
        """Conventional file names probed in the parent directory, in order."""
        ext = self.extension
        return [f"{PARTIAL_PREFIX}{segment}{ext}", f"{segment}{ext}", f"{INDEX_STEM}{ext}"]

    def is_template(self, entry: Entry) -> bool:
        return not entry.is_directory and entry.name.endswith(self.extension)

    def strip_extension(self, name: str) -> str:
        """Drop a trailing template extension ('foo.hbs' -> 'foo')."""
        if name.endswith(self.extension) and len(name) > len(self.extension):
            return name[: -len(self.extension)]
        return name

    # ----------------------------- resolution ----------------------------- #

    def resolve_segment(self, segments: Sequence[str], index: int, is_terminal: bool) -> Optional[Entry]:
        """
        Resolve segments[index].

        Args:
            segments: Path segments (no empty strings)
            index: Position to resolve
            is_terminal: True to look for a file, False for a directory

        Returns:
            Matching entry from the first root that has one, or None
        """
        if not segments or index < 0 or index >= len(segments):
            return None

        with self.fs.read_action():
            if not is_terminal:
                return self._resolve_directory(segments, index)
            return self._resolve_file(segments, index)

    def segment_exists(self, segments: Sequence[str], index: int) -> bool:
        """Terminal-ness is inferred from the position."""
        is_terminal = index == len(segments) - 1
        return self.resolve_segment(segments, index, is_terminal) is not None

    def resolve_parent(self, segments: Sequence[str]) -> Optional[Entry]:
        """Directory named by the whole segment list (intermediate resolution)."""
        if not segments:
            return None
        return self.resolve_segment(segments, len(segments) - 1, False)

    def _resolve_directory(self, segments: Sequence[str], index: int) -> Optional[Entry]:
        for root in self.roots.get_roots():
            cur = self._walk(root, segments[: index + 1], require_dirs=False)
            if cur is not None and cur.is_directory:
                return cur
        return None

    def _resolve_file(self, segments: Sequence[str], index: int) -> Optional[Entry]:
        name = segments[index]
        roots = self.roots.get_roots()

        # Pass 1: naming conventions across all roots
        for root in roots:
            parent = self._walk(root, segments[:index], require_dirs=True)
            if parent is None:
                continue
            for candidate in self.candidate_file_names(name):
                found = self.fs.find_child(parent.path, candidate)
                if found is not None and not found.is_directory:
                    return found
            # 'name' as a directory holding index.hbs
            folder = self.fs.find_child(parent.path, name)
            if folder is not None and folder.is_directory:
                found = self.fs.find_child(folder.path, f"{INDEX_STEM}{self.extension}")
                if found is not None and not found.is_directory:
                    return found

        # Pass 2: literal file name typed in full (e.g. 'foo.hbs')
        for root in roots:
            parent = self._walk(root, segments[:index], require_dirs=True)
            if parent is None:
                continue
            found = self.fs.find_child(parent.path, name)
            if found is not None and not found.is_directory:
                return found

        return None

    def _walk(self, root: Entry, names: Sequence[str], *, require_dirs: bool) -> Optional[Entry]:
        """Exact-name walk from root; every step must be a directory when require_dirs."""
        cur: Optional[Entry] = root
        for name in names:
            if cur is None or not cur.is_directory:
                return None
            cur = self.fs.find_child(cur.path, name)
            if cur is None:
                return None
            if require_dirs and not cur.is_directory:
                return None
        return cur

    # ----------------------------- enumeration ----------------------------- #

    def collect_all_segments(self, max_depth: Optional[int] = None) -> List[str]:
        """
        Every directory and template path under the roots, as display paths.

        Directories nested deeper than max_depth levels below a root are not
        entered; excluded directories (node_modules/, .git/ by default) are
        skipped together with their contents.
        """
        limit = self.max_depth if max_depth is None else max_depth
        segments: Set[str] = set()
        with self.fs.read_action():
            for root in self.roots.get_roots():
                self._collect(root, root, "", segments, 0, limit)
        return sorted(segments)

    def _collect(self, root: Entry, directory: Entry, prefix: str, out: Set[str], depth: int, limit: int) -> None:
        if depth > limit:
            return
        for child in self.fs.list_children(directory.path):
            if child.is_directory:
                rel = self.fs.relative_path(child, root.path)
                if rel is not None and self._excluded.match_file(rel + "/"):
                    continue
            elif not self.is_template(child):
                continue
            path = child.display_name if not prefix else f"{prefix}/{child.display_name}"
            out.add(path)
            if child.is_directory:
                self._collect(root, child, path, out, depth + 1, limit)

    def is_excluded(self, rel_dir: str) -> bool:
        """Whether a root-relative directory path is skipped by enumeration."""
        return self._excluded.match_file(rel_dir.rstrip("/") + "/")


__all__ = ["SegmentResolver"]
