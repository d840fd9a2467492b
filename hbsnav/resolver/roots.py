"""
Resolution roots: module source folders first, project base directory last.

The list is computed lazily and cached until any change notification
arrives. Invalidation only ever clears the cache to "unknown", so a
concurrent reader sees either the previous complete list or recomputes.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple

from ..project import Project
from ..vfs import ChangeBatch, Entry, FileSystem

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _RootCache:
    """Immutable cache cell; replaced as a whole, never mutated."""
    valid: bool
    generation: int
    roots: Tuple[Entry, ...] = ()


class RootSet:
    """
    Ordered, de-duplicated set of root directories for one project.

    Subscribes to the filesystem change feed on construction and
    unsubscribes in close(). Usable as a context manager.
    """

    def __init__(self, project: Project, fs: FileSystem):
        self.project = project
        self.fs = fs
        self._lock = threading.Lock()
        self._cache = _RootCache(valid=False, generation=0)
        self._subscription = fs.subscribe(self._on_changes)

    # ----------------------------- public API ----------------------------- #

    def get_roots(self) -> Tuple[Entry, ...]:
        """Cached roots, recomputed after invalidation."""
        snapshot = self._cache
        if snapshot.valid:
            return snapshot.roots

        with self.fs.read_action():
            roots = tuple(self._collect_roots())

        with self._lock:
            # An invalidation that raced with the computation wins
            if self._cache.generation == snapshot.generation:
                self._cache = _RootCache(valid=True, generation=snapshot.generation, roots=roots)
        logger.debug(f"Computed {len(roots)} resolution roots for {self.project.base_dir}")
        return roots

    def invalidate(self) -> None:
        """Clear to unknown; the next get_roots() recomputes."""
        with self._lock:
            self._cache = _RootCache(valid=False, generation=self._cache.generation + 1)

    @property
    def is_valid(self) -> bool:
        return self._cache.valid

    def close(self) -> None:
        self._subscription.dispose()

    def __enter__(self) -> "RootSet":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # ----------------------------- internals ----------------------------- #

    def _on_changes(self, batch: ChangeBatch) -> None:
        # Any change invalidates; no relevance filtering
        self.invalidate()
        logger.debug(f"Root cache invalidated ({len(batch)} changed paths)")

    def _collect_roots(self) -> List[Entry]:
        found: List[Entry] = []

        for module in self.project.modules:
            try:
                folders = list(module.source_folders())
            except Exception as e:
                logger.warning(f"Skipping module {getattr(module, 'name', module)!r}: cannot read source folders: {e}")
                continue
            for folder in folders:
                entry = self.fs.entry(Path(folder))
                if entry is not None and entry.is_directory:
                    found.append(entry)

        base = self.fs.entry(self.project.base_dir)
        if base is not None and base.is_directory:
            found.append(base)

        return _distinct(found)


def _distinct(entries: List[Entry]) -> List[Entry]:
    seen: set[Path] = set()
    out: List[Entry] = []
    for e in entries:
        if e.path in seen:
            continue
        seen.add(e.path)
        out.append(e)
    return out


__all__ = ["RootSet"]
