"""
Change-notification feed.

Listeners receive every batch of filesystem changes. Subscriptions follow a
scoped lifetime: created by subscribe(), released by dispose() or by
leaving a `with` block.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Iterable, List, Optional

from .types import ChangeBatch, ChangeListener

logger = logging.getLogger(__name__)


class FeedSubscription:
    """Subscription handle returned by ChangeFeed.subscribe()."""

    def __init__(self, feed: "ChangeFeed", listener: ChangeListener):
        self._feed: Optional[ChangeFeed] = feed
        self.listener = listener

    @property
    def active(self) -> bool:
        return self._feed is not None

    def dispose(self) -> None:
        """Unsubscribe; calling it again is a no-op."""
        feed, self._feed = self._feed, None
        if feed is not None:
            feed._remove(self)

    def __enter__(self) -> "FeedSubscription":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.dispose()


class ChangeFeed:
    """Fan-out of change batches to subscribed listeners."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._subscriptions: List[FeedSubscription] = []

    def subscribe(self, listener: ChangeListener) -> FeedSubscription:
        sub = FeedSubscription(self, listener)
        with self._lock:
            self._subscriptions.append(sub)
        return sub

    def _remove(self, sub: FeedSubscription) -> None:
        with self._lock:
            try:
                self._subscriptions.remove(sub)
            except ValueError:
                pass

    def __len__(self) -> int:
        with self._lock:
            return len(self._subscriptions)

    def publish(self, paths: Iterable[Path] = ()) -> None:
        """Deliver one batch to every listener subscribed at call time."""
        batch: ChangeBatch = tuple(paths)
        with self._lock:
            targets = list(self._subscriptions)
        for sub in targets:
            try:
                sub.listener(batch)
            except Exception as e:
                # One broken listener must not starve the others
                logger.warning(f"Change listener {sub.listener!r} failed: {e}")


__all__ = ["ChangeFeed", "FeedSubscription"]
