"""
Feed Pipeline - Orchestration Layer

Composes the remote loader and the local loader. Neither loader knows about
the other; the decision to cache remote items, and when to fall back to the
cache, lives here.
"""

import logging
from typing import List

from ..coreutils.env import Settings
from ..coreutils.time import utc_now
from ..extract.http_client import RequestsHTTPClient
from ..extract.remote_feed_loader import FeedLoaderError, RemoteFeedLoader
from ..load.local_feed_loader import LocalFeedLoader
from ..load.local_storage import create_store
from ..transformation.models import FeedItem

logger = logging.getLogger(__name__)


class FeedPipeline:
    """Coordinates remote fetches with the local cache"""

    def __init__(self, remote: RemoteFeedLoader, local: LocalFeedLoader):
        self.remote = remote
        self.local = local

    async def refresh(self) -> List[FeedItem]:
        """
        Fetch the remote feed and replace the cache with it

        Remote failures propagate and leave the cache untouched. Cache write
        failures propagate too.

        Returns:
            List[FeedItem]: The freshly fetched items
        """
        logger.info("🔄 Refreshing feed cache...")
        items = await self.remote.load()
        await self.local.save(items)
        logger.info(f"✅ Feed cache refreshed with {len(items)} items")
        return items

    async def load_with_fallback(self) -> List[FeedItem]:
        """
        Remote feed when reachable, cached feed otherwise

        A successful remote load is written to the cache; if that write fails
        the error is logged and the remote items are still returned. Store
        errors raised while reading the fallback cache propagate.

        Returns:
            List[FeedItem]: Remote items, or cached items (possibly [])
        """
        try:
            items = await self.remote.load()
        except FeedLoaderError as e:
            logger.warning(f"⚠️ Remote feed unavailable ({e.kind.value}), using cache")
            return await self.local.load()

        try:
            await self.local.save(items)
        except Exception as e:
            logger.error(f"❌ Could not cache remote feed: {e}")

        return items


def build_pipeline(settings: Settings) -> FeedPipeline:
    """
    Compose a pipeline from configuration

    Args:
        settings: Resolved runtime settings (FEED_URL must be set)

    Returns:
        FeedPipeline: Pipeline wired to concrete collaborators
    """
    client = RequestsHTTPClient(timeout=settings.http_timeout)
    remote = RemoteFeedLoader(settings.require_feed_url(), client)
    local = build_local_loader(settings)
    return FeedPipeline(remote, local)


def build_local_loader(settings: Settings) -> LocalFeedLoader:
    """Local loader over the configured store, using the UTC wall clock"""
    store = create_store(settings.store, settings.cache_path)
    return LocalFeedLoader(store, current_date=utc_now)
