"""
Document collaborator: the text buffer rewrites are applied to.
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Callable, List, Optional, Protocol, TypeVar, runtime_checkable

from ..errors import InvalidRewriteRangeError

T = TypeVar("T")


@runtime_checkable
class Document(Protocol):
    """Mutable text supplied by the host editor."""

    @property
    def text(self) -> str:
        ...

    def current_length(self) -> int:
        ...

    def replace_range(self, start: int, end: int, text: str) -> None:
        ...

    def run_as_transaction(self, fn: Callable[[], T]) -> T:
        ...


class TextDocument:
    """
    In-memory document with single-writer transactions.

    Each outermost transaction is one undoable unit. An exception inside a
    transaction restores the text as it was before the transaction and
    propagates.
    """

    def __init__(self, text: str = "", path: Optional[Path] = None):
        self._text = text
        self.path = path
        self._lock = threading.RLock()
        self._depth = 0
        self._undo: List[str] = []

    @classmethod
    def from_file(cls, path: Path) -> "TextDocument":
        return cls(path.read_text(encoding="utf-8"), path=path)

    def save(self, path: Optional[Path] = None) -> Path:
        target = path or self.path
        if target is None:
            raise RuntimeError("Document has no backing file")
        target.write_text(self._text, encoding="utf-8")
        return target

    @property
    def text(self) -> str:
        return self._text

    def current_length(self) -> int:
        return len(self._text)

    @property
    def in_transaction(self) -> bool:
        return self._depth > 0

    def run_as_transaction(self, fn: Callable[[], T]) -> T:
        with self._lock:
            before = self._text
            self._depth += 1
            try:
                result = fn()
            except BaseException:
                self._text = before
                raise
            finally:
                self._depth -= 1
            if self._depth == 0 and self._text != before:
                self._undo.append(before)
            return result

    def replace_range(self, start: int, end: int, text: str) -> None:
        with self._lock:
            if self._depth == 0:
                raise RuntimeError("replace_range() must run inside run_as_transaction()")
            if not (0 <= start <= end <= len(self._text)):
                raise InvalidRewriteRangeError(start, end, len(self._text))
            self._text = self._text[:start] + text + self._text[end:]

    def undo(self) -> bool:
        """Revert the last transaction; False when there is nothing to undo."""
        with self._lock:
            if not self._undo:
                return False
            self._text = self._undo.pop()
            return True

    @property
    def undo_depth(self) -> int:
        return len(self._undo)


__all__ = ["Document", "TextDocument"]
