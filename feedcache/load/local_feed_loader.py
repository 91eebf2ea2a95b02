"""
Local Feed Loader - Load Layer

Save, load and invalidate the cached feed over a FeedStore. The current time
comes from an injected callable; this module never reads the clock directly.
"""

import logging
from datetime import datetime
from typing import Callable, List, Sequence

from .feed_store import FeedStore
from ..transformation.cache_policy import validate
from ..transformation.models import FeedItem, to_local, to_models

logger = logging.getLogger(__name__)


class LocalFeedLoader:
    """Cache use cases over a FeedStore"""

    def __init__(self, store: FeedStore, current_date: Callable[[], datetime]):
        self.store = store
        self.current_date = current_date

    async def save(self, items: Sequence[FeedItem]) -> None:
        """
        Replace the cached feed with `items`

        The old snapshot is deleted first. If the delete fails its error is
        raised and nothing is inserted. If the insert fails the cache is left
        empty and the insert error is raised.
        """
        await self.store.delete_cached_feed()

        timestamp = self.current_date()
        await self.store.insert(to_local(items), timestamp)
        logger.info(f"Cached {len(items)} feed items at {timestamp.isoformat()}")

    async def load(self) -> List[FeedItem]:
        """
        Return cached items while the snapshot is fresh

        Returns:
            List[FeedItem]: Cached items, or [] when the cache is empty or expired
        """
        cache = await self.store.retrieve()
        if cache is None:
            logger.debug("Feed cache is empty")
            return []

        if not validate(cache.timestamp, self.current_date()):
            logger.info(f"Feed cache from {cache.timestamp.isoformat()} has expired")
            return []

        return to_models(cache.items)

    async def invalidate(self) -> None:
        """Clear the cached feed"""
        await self.store.delete_cached_feed()
        logger.info("Feed cache invalidated")
