"""
Locating reference text in the current document.

Both rewrite operations use the same strategy: find the joined segment
path as a substring (nearest to where it was recorded), and fall back to
the recorded offsets when the text no longer contains it. A match only
counts when it is a whole path or a whole segment, never a piece of a
longer one.
"""

from __future__ import annotations

from ..errors import InvalidRewriteRangeError
from ..template import ReferenceOccurrence, TextRange

# Characters that end a partial path: whitespace, quotes, '}' and the '>' opener
_PATH_STOP = "'\"}>"


def _is_path_char(ch: str) -> bool:
    return not ch.isspace() and ch not in _PATH_STOP


def _is_whole_path(text: str, start: int, end: int) -> bool:
    before = text[start - 1] if start > 0 else " "
    after = text[end] if end < len(text) else " "
    return not _is_path_char(before) and not _is_path_char(after)


def _is_whole_segment(text: str, start: int, end: int) -> bool:
    before = text[start - 1] if start > 0 else " "
    after = text[end] if end < len(text) else " "
    return (before == "/" or not _is_path_char(before)) and (after == "/" or not _is_path_char(after))


def locate_path_range(text: str, occ: ReferenceOccurrence) -> TextRange:
    """Document range of the whole reference path."""
    joined = occ.joined_path
    recorded = occ.absolute(occ.path_range)

    if text.startswith(joined, recorded.start) and _is_whole_path(text, recorded.start, recorded.start + len(joined)):
        return TextRange(recorded.start, recorded.start + len(joined))

    best = -1
    pos = text.find(joined)
    while pos >= 0:
        if _is_whole_path(text, pos, pos + len(joined)):
            if best < 0 or abs(pos - recorded.start) < abs(best - recorded.start):
                best = pos
        pos = text.find(joined, pos + 1)
    if best >= 0:
        return TextRange(best, best + len(joined))

    return recorded


def locate_segment_range(text: str, occ: ReferenceOccurrence, index: int) -> TextRange:
    """Document range of one segment."""
    segment = occ.segments[index]

    path = locate_path_range(text, occ)
    if path.slice(text) == occ.joined_path:
        prefix = "/".join(occ.segments[:index])
        start = path.start + len(prefix) + (1 if prefix else 0)
        rng = TextRange(start, start + len(segment))
        if rng.slice(text) == segment:
            return rng

    recorded = occ.absolute(occ.segment_ranges[index])
    if recorded.slice(text) == segment:
        return recorded
    # Text shifted: search around the recorded range
    lo = max(0, recorded.start - len(segment))
    hi = recorded.end + len(segment)
    pos = text.find(segment, lo, hi)
    while pos >= 0:
        if _is_whole_segment(text, pos, pos + len(segment)):
            return TextRange(pos, pos + len(segment))
        pos = text.find(segment, pos + 1, hi)
    return recorded


def check_range(rng: TextRange, length: int) -> None:
    """Raise InvalidRewriteRangeError unless 0 <= start <= end <= length."""
    if rng.start < 0 or rng.end < rng.start or rng.end > length:
        raise InvalidRewriteRangeError(rng.start, rng.end, length)


__all__ = ["locate_path_range", "locate_segment_range", "check_range"]
