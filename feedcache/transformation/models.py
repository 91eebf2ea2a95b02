"""
Domain Models - Transform Layer

FeedItem is what callers consume; LocalFeedItem is what the load layer
persists. Keeping them apart means the persistence boundary never depends on
wire-decoding types.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List, Optional, Tuple
from uuid import UUID


@dataclass(frozen=True)
class FeedItem:
    """A single feed entry as exposed to callers"""

    id: UUID
    description: Optional[str]
    location: Optional[str]
    image_url: str


@dataclass(frozen=True)
class LocalFeedItem:
    """Persistence-facing copy of a FeedItem"""

    id: UUID
    description: Optional[str]
    location: Optional[str]
    image_url: str


@dataclass(frozen=True)
class CachedFeed:
    """The full cache contents at one point in time"""

    items: Tuple[LocalFeedItem, ...]
    timestamp: datetime


def to_local(items: Iterable[FeedItem]) -> List[LocalFeedItem]:
    """Map domain items to their persistence representation, preserving order"""
    return [
        LocalFeedItem(
            id=item.id,
            description=item.description,
            location=item.location,
            image_url=item.image_url,
        )
        for item in items
    ]


def to_models(items: Iterable[LocalFeedItem]) -> List[FeedItem]:
    """Map persisted items back to domain items, preserving order"""
    return [
        FeedItem(
            id=item.id,
            description=item.description,
            location=item.location,
            image_url=item.image_url,
        )
        for item in items
    ]
