"""
Shared test doubles and factories

HTTPClientSpy and FeedStoreSpy record every call they receive so tests can
assert on the exact sequence of collaborator messages.
"""

import json
import os
import sys
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional, Tuple

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from feedcache.extract.http_client import HTTPResponse, TransportError
from feedcache.transformation.cache_policy import MAX_CACHE_AGE
from feedcache.transformation.models import CachedFeed, FeedItem, LocalFeedItem, to_local

DELETE = ("delete_cached_feed",)
RETRIEVE = ("retrieve",)


def any_url() -> str:
    return "https://a-url.com"


def any_error() -> Exception:
    return RuntimeError("any error")


def fixed_now() -> datetime:
    return datetime(2026, 1, 10, 12, 0, 0, tzinfo=timezone.utc)


def minus_feed_cache_max_age(ts: datetime) -> datetime:
    return ts - MAX_CACHE_AGE


def unique_item(description: Optional[str] = None, location: Optional[str] = None) -> FeedItem:
    return FeedItem(
        id=uuid.uuid4(),
        description=description,
        location=location,
        image_url=any_url(),
    )


def unique_items() -> Tuple[List[FeedItem], List[LocalFeedItem]]:
    models = [unique_item(), unique_item("a description", "a location")]
    return models, to_local(models)


def make_item(
    description: Optional[str] = None,
    location: Optional[str] = None,
    image_url: str = "http://another-url.com",
) -> Tuple[FeedItem, Dict[str, Any]]:
    """A domain item plus its wire JSON (optional keys omitted when None)"""
    item = FeedItem(
        id=uuid.uuid4(),
        description=description,
        location=location,
        image_url=image_url,
    )
    payload = {"id": str(item.id), "image": image_url}
    if description is not None:
        payload["description"] = description
    if location is not None:
        payload["location"] = location
    return item, payload


def make_items_json(items: List[Dict[str, Any]]) -> bytes:
    return json.dumps({"items": items}).encode("utf-8")


class HTTPClientSpy:
    """HTTPClient double returning queued responses or failures in call order"""

    def __init__(self):
        self.requested_urls: List[str] = []
        self._results: List[Any] = []

    def complete_with_error(self, error: Exception = None) -> None:
        self._results.append(error or TransportError("offline"))

    def complete_with(self, status_code: int, data: bytes = b"") -> None:
        self._results.append(HTTPResponse(data=data, status_code=status_code))

    async def get(self, url: str) -> HTTPResponse:
        self.requested_urls.append(url)
        result = self._results[len(self.requested_urls) - 1]
        if isinstance(result, Exception):
            raise result
        return result


class FeedStoreSpy:
    """FeedStore double recording received messages"""

    def __init__(self):
        self.received_messages: List[tuple] = []
        self.deletion_error: Optional[Exception] = None
        self.insertion_error: Optional[Exception] = None
        self.retrieval_error: Optional[Exception] = None
        self.retrieval_result: Optional[CachedFeed] = None

    async def delete_cached_feed(self) -> None:
        self.received_messages.append(DELETE)
        if self.deletion_error:
            raise self.deletion_error

    async def insert(self, items, timestamp: datetime) -> None:
        self.received_messages.append(("insert", list(items), timestamp))
        if self.insertion_error:
            raise self.insertion_error

    async def retrieve(self) -> Optional[CachedFeed]:
        self.received_messages.append(RETRIEVE)
        if self.retrieval_error:
            raise self.retrieval_error
        return self.retrieval_result

    def complete_retrieval(self, items: List[LocalFeedItem], timestamp: datetime) -> None:
        self.retrieval_result = CachedFeed(items=tuple(items), timestamp=timestamp)


def seconds(n: int) -> timedelta:
    return timedelta(seconds=n)
