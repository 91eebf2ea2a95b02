"""
Remote Feed Loader - Extract Layer

One HTTP GET per load() call, mapped onto feed items. Every failure surfaces
as exactly one of two kinds: connectivity or invalid data.
"""

import enum
import logging
from typing import List

from .feed_items_mapper import FeedDecodingError, map_feed_items
from .http_client import HTTPClient, TransportError
from ..transformation.models import FeedItem

logger = logging.getLogger(__name__)


class LoaderErrorKind(enum.Enum):
    CONNECTIVITY = "connectivity"
    INVALID_DATA = "invalidData"


class FeedLoaderError(Exception):
    """Base class for remote load failures; branch on `kind`, not the message"""

    kind: LoaderErrorKind


class ConnectivityError(FeedLoaderError):
    """No response was obtained from the feed endpoint"""

    kind = LoaderErrorKind.CONNECTIVITY


class InvalidDataError(FeedLoaderError):
    """A response arrived but its status or body was unusable"""

    kind = LoaderErrorKind.INVALID_DATA


class RemoteFeedLoader:
    """Loads the feed from a fixed URL through an HTTPClient"""

    def __init__(self, url: str, client: HTTPClient):
        self.url = url
        self.client = client

    async def load(self) -> List[FeedItem]:
        """
        Fetch and decode the remote feed

        Returns:
            List[FeedItem]: Items in payload order

        Raises:
            ConnectivityError: The client reported a transport failure
            InvalidDataError: Non-200 status or undecodable body
        """
        try:
            response = await self.client.get(self.url)
        except TransportError as e:
            raise ConnectivityError(f"Could not reach {self.url}") from e
        except Exception as e:
            # any client failure counts as "no response obtained"
            logger.warning(f"HTTP client raised {type(e).__name__} for {self.url}")
            raise ConnectivityError(f"Could not reach {self.url}") from e

        try:
            items = map_feed_items(response.data, response.status_code)
        except FeedDecodingError as e:
            logger.debug(f"Rejected payload from {self.url}: {e}")
            raise InvalidDataError(str(e)) from e

        logger.info(f"Loaded {len(items)} feed items from {self.url}")
        return items
