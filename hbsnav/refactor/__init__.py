"""
Rename and move support for partial references.
"""

from .document import Document, TextDocument
from .ranges import locate_path_range, locate_segment_range, check_range
from .rewriter import ReferenceRewriter, RebindCandidate, RewriteFailure

__all__ = [
    "Document",
    "TextDocument",
    "locate_path_range",
    "locate_segment_range",
    "check_range",
    "ReferenceRewriter",
    "RebindCandidate",
    "RewriteFailure",
]
