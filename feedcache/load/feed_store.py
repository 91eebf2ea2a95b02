"""
Feed Store - Load Layer

Capability the local loader persists through. Every call completes once,
either returning or raising; insert is a full replace but does not clear the
store itself, callers delete first.
"""

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..transformation.models import CachedFeed, LocalFeedItem


class StoreError(Exception):
    """Raised by concrete stores when the backing medium fails"""


class FeedStore(Protocol):
    async def delete_cached_feed(self) -> None:
        ...

    async def insert(self, items: Sequence[LocalFeedItem], timestamp: datetime) -> None:
        ...

    async def retrieve(self) -> Optional[CachedFeed]:
        """Return the current snapshot, or None when the cache is empty"""
        ...
