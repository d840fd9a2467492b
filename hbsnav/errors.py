"""
Exceptions for user-facing errors.

All expected errors that should be displayed to the user
as clean messages (without stack traces) must inherit from HbsUserError.

"Not found" outcomes of resolution and completion are NOT errors:
they are returned as None or empty lists.
"""

from __future__ import annotations

from typing import Optional


class HbsUserError(Exception):
    """
    Base class for all user-facing errors.

    These errors indicate problems that the user can fix:
    configuration issues, broken references, refactorings that
    cannot be applied to the current text.
    """
    pass


class ConfigLoadError(HbsUserError, ValueError):
    """Project configuration could not be loaded; the message names the field path."""
    pass


class RewriteError(HbsUserError):
    """Base class for failed reference rewrites."""

    def __init__(self, message: str, *, hint: Optional[str] = None):
        self.message = message
        self.hint = hint
        super().__init__(self._format())

    def _format(self) -> str:
        parts = [self.message]
        if self.hint:
            parts.append(f"Hint: {self.hint}")
        return "\n".join(parts)


class InvalidRewriteRangeError(RewriteError):
    """
    Computed text range is out of document bounds or inverted.

    Raised before any mutation, so the document is left untouched.
    """

    def __init__(self, start: int, end: int, length: int, *, hint: Optional[str] = None):
        self.start = start
        self.end = end
        self.length = length
        super().__init__(
            f"Invalid rewrite range [{start}, {end}) for document of length {length}",
            hint=hint or "The document changed since the reference was located; retry the refactoring",
        )


class ReferenceNotFoundError(RewriteError):
    """No partial reference exists at the requested offset."""

    def __init__(self, offset: int):
        self.offset = offset
        super().__init__(
            f"No partial reference at offset {offset}",
            hint="Place the caret inside a {{> path}} expression",
        )


__all__ = [
    "HbsUserError",
    "ConfigLoadError",
    "RewriteError",
    "InvalidRewriteRangeError",
    "ReferenceNotFoundError",
]
