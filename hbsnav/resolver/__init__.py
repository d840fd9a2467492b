"""
Root discovery and segment resolution.
"""

from .roots import RootSet
from .segments import SegmentResolver

__all__ = ["RootSet", "SegmentResolver"]
