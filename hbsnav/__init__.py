"""
Partial-path navigation for Handlebars templates.

Resolves {{> path}} references segment by segment across project roots,
completes partially typed paths, and keeps reference text consistent
when partial files are moved or renamed.
"""

from .completion import CandidateKind, CompletionCandidate, CompletionEngine
from .errors import (
    HbsUserError,
    ConfigLoadError,
    RewriteError,
    InvalidRewriteRangeError,
    ReferenceNotFoundError,
)
from .navigator import PartialNavigator
from .project import ConfiguredModule, ModuleSource, Project
from .references import PartialReferenceProvider, SegmentReference
from .refactor import ReferenceRewriter, TextDocument
from .resolver import RootSet, SegmentResolver
from .template import PathParser, ReferenceOccurrence, CompletionContext, TextRange
from .vfs import Entry, LocalFileSystem

__all__ = [
    "CandidateKind",
    "CompletionCandidate",
    "CompletionEngine",
    "HbsUserError",
    "ConfigLoadError",
    "RewriteError",
    "InvalidRewriteRangeError",
    "ReferenceNotFoundError",
    "PartialNavigator",
    "ConfiguredModule",
    "ModuleSource",
    "Project",
    "PartialReferenceProvider",
    "SegmentReference",
    "ReferenceRewriter",
    "TextDocument",
    "RootSet",
    "SegmentResolver",
    "PathParser",
    "ReferenceOccurrence",
    "CompletionContext",
    "TextRange",
    "Entry",
    "LocalFileSystem",
]
