"""
Local-disk implementation of the FileSystem capability.
"""

from __future__ import annotations

import logging
import os
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterable, Iterator, List, Optional

from .events import ChangeFeed, FeedSubscription
from .types import ChangeListener, Entry

logger = logging.getLogger(__name__)


class LocalFileSystem:
    """
    pathlib-backed filesystem.

    Children are listed in name order so that "enumeration order" is
    deterministic across platforms. Reads and change delivery share one
    re-entrant lock: a read action never interleaves with a notification.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._feed = ChangeFeed()

    # ----------------------------- reads ----------------------------- #

    @contextmanager
    def read_action(self) -> Iterator[None]:
        with self._lock:
            yield

    def entry(self, path: Path) -> Optional[Entry]:
        p = Path(os.path.abspath(path))
        try:
            if p.is_dir():
                return Entry(p, True)
            if p.exists():
                return Entry(p, False)
        except OSError as e:
            logger.warning(f"Cannot stat {p}: {e}")
        return None

    def list_children(self, directory: Path) -> List[Entry]:
        base = Path(os.path.abspath(directory))
        try:
            with os.scandir(base) as it:
                items = [(de.name, self._is_dir(de)) for de in it]
        except NotADirectoryError:
            return []
        except FileNotFoundError:
            return []
        except OSError as e:
            logger.warning(f"Cannot list {base}: {e}")
            return []
        items.sort(key=lambda t: t[0])
        return [Entry(base / name, is_dir) for name, is_dir in items]

    def find_child(self, directory: Path, name: str) -> Optional[Entry]:
        if not name or name in (".", "..") or "/" in name or "\\" in name:
            return None
        base = Path(os.path.abspath(directory))
        # Exact name against the listing; exists() is case-insensitive on some filesystems
        try:
            if name not in os.listdir(base):
                return None
        except OSError:
            return None
        return self.entry(base / name)

    def is_ancestor(self, root: Path, entry: Entry, strict: bool = False) -> bool:
        root_abs = Path(os.path.abspath(root))
        if entry.path == root_abs:
            return not strict
        return root_abs in entry.path.parents

    def relative_path(self, entry: Entry, base: Path) -> Optional[str]:
        try:
            rel = entry.path.relative_to(Path(os.path.abspath(base)))
        except ValueError:
            return None
        s = rel.as_posix()
        return "" if s == "." else s

    @staticmethod
    def _is_dir(de: os.DirEntry) -> bool:
        try:
            return de.is_dir()
        except OSError:
            return False

    # ----------------------------- changes ----------------------------- #

    def subscribe(self, listener: ChangeListener) -> FeedSubscription:
        return self._feed.subscribe(listener)

    def notify_changed(self, paths: Iterable[Path] = ()) -> None:
        """Host hook: report that something on disk changed."""
        with self._lock:
            self._feed.publish(paths)

    @property
    def subscriber_count(self) -> int:
        return len(self._feed)


__all__ = ["LocalFileSystem"]
