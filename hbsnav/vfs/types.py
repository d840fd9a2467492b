"""
Data types for the filesystem collaborator.

The resolver never touches the disk directly: it queries a FileSystem
for children, single lookups and relative paths, and subscribes to its
change feed for cache invalidation.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, ContextManager, List, Optional, Protocol, Tuple, runtime_checkable

# A batch of changed paths; may be empty ("something changed").
ChangeBatch = Tuple[Path, ...]
ChangeListener = Callable[[ChangeBatch], None]


@dataclass(frozen=True)
class Entry:
    """A file or directory known to the filesystem."""
    path: Path          # Absolute path
    is_directory: bool

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def stem(self) -> str:
        """Name without its last extension ('_header.hbs' -> '_header')."""
        name = self.path.name
        dot = name.rfind(".")
        return name[:dot] if dot > 0 else name

    @property
    def display_name(self) -> str:
        """Directories verbatim, files without extension."""
        return self.name if self.is_directory else self.stem

    @property
    def parent(self) -> Path:
        return self.path.parent

    def __repr__(self) -> str:
        kind = "dir" if self.is_directory else "file"
        return f"Entry({kind}, {self.path.as_posix()!r})"


@runtime_checkable
class Subscription(Protocol):
    """Handle for a change-feed subscription; dispose() releases it."""

    def dispose(self) -> None:
        ...


@runtime_checkable
class FileSystem(Protocol):
    """Capability the resolver queries for everything on disk."""

    def entry(self, path: Path) -> Optional[Entry]:
        """Entry for an absolute path, or None when it does not exist."""
        ...

    def list_children(self, directory: Path) -> List[Entry]:
        """Direct children in enumeration order (empty for files and unreadable dirs)."""
        ...

    def find_child(self, directory: Path, name: str) -> Optional[Entry]:
        """Direct child by exact name."""
        ...

    def is_ancestor(self, root: Path, entry: Entry, strict: bool = False) -> bool:
        ...

    def relative_path(self, entry: Entry, base: Path) -> Optional[str]:
        """POSIX path of entry relative to base, None when not under base."""
        ...

    def subscribe(self, listener: ChangeListener) -> Subscription:
        ...

    def read_action(self) -> ContextManager[None]:
        """Scope with a consistent point-in-time view for reads."""
        ...


__all__ = ["Entry", "FileSystem", "Subscription", "ChangeBatch", "ChangeListener"]
