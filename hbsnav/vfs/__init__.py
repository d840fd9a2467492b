"""
Filesystem collaborator: entries, the FileSystem protocol, a local
implementation and the change-notification feed.
"""

from .types import Entry, FileSystem, Subscription, ChangeBatch, ChangeListener
from .events import ChangeFeed, FeedSubscription
from .local import LocalFileSystem

__all__ = [
    "Entry",
    "FileSystem",
    "Subscription",
    "ChangeBatch",
    "ChangeListener",
    "ChangeFeed",
    "FeedSubscription",
    "LocalFileSystem",
]
