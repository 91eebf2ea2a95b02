"""
Local Storage - Load Layer

Concrete FeedStore implementations.
- JsonFeedStore: one JSON document per snapshot
- ParquetFeedStore: one Parquet file per snapshot (Polars)
- InMemoryFeedStore: process-local, nothing touches disk

File stores write to a temporary file and rename it into place, so a reader
sees either the old snapshot or the new one.
"""

import asyncio
import json
import logging
import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional, Sequence
from uuid import UUID

import polars as pl

from .feed_store import StoreError
from ..coreutils.time import from_iso, to_iso
from ..transformation.models import CachedFeed, LocalFeedItem

logger = logging.getLogger(__name__)

FEED_CACHE_SCHEMA = pl.Schema(
    [
        ("id", pl.String()),
        ("description", pl.String()),
        ("location", pl.String()),
        ("image_url", pl.String()),
        ("timestamp", pl.Datetime("us", "UTC")),
    ]
)


def _atomic_write(filepath: Path, write) -> None:
    """Run `write(tmp_path)` then move the result over `filepath`"""
    filepath.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(
        dir=filepath.parent, prefix=f".{filepath.name}.", suffix=".tmp"
    )
    os.close(fd)
    try:
        write(Path(tmp_name))
        os.replace(tmp_name, filepath)
    except BaseException:
        if os.path.exists(tmp_name):
            os.remove(tmp_name)
        raise


def _remove_if_exists(filepath: Path) -> None:
    try:
        filepath.unlink()
    except FileNotFoundError:
        pass


def _item_to_dict(item: LocalFeedItem) -> Dict[str, Any]:
    return {
        "id": str(item.id),
        "description": item.description,
        "location": item.location,
        "image_url": item.image_url,
    }


def _item_from_dict(row: Dict[str, Any]) -> LocalFeedItem:
    return LocalFeedItem(
        id=UUID(row["id"]),
        description=row.get("description"),
        location=row.get("location"),
        image_url=row["image_url"],
    )


class JsonFeedStore:
    """FeedStore persisting the snapshot as a single JSON document"""

    def __init__(self, filepath: str):
        self.filepath = Path(filepath)

    def _delete(self) -> None:
        try:
            _remove_if_exists(self.filepath)
        except OSError as e:
            raise StoreError(f"Could not delete {self.filepath}: {e}") from e
        logger.debug(f"Deleted JSON cache: {self.filepath}")

    def _insert(self, items: Sequence[LocalFeedItem], timestamp: datetime) -> None:
        document = {
            "timestamp": to_iso(timestamp),
            "items": [_item_to_dict(item) for item in items],
        }

        def write(tmp_path: Path) -> None:
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(document, f, indent=2)

        try:
            _atomic_write(self.filepath, write)
        except OSError as e:
            raise StoreError(f"Could not write {self.filepath}: {e}") from e

        logger.info(f"Saved {len(items)} records to {self.filepath}")

    def _retrieve(self) -> Optional[CachedFeed]:
        try:
            with open(self.filepath, "r", encoding="utf-8") as f:
                document = json.load(f)
            return CachedFeed(
                items=tuple(_item_from_dict(row) for row in document["items"]),
                timestamp=from_iso(document["timestamp"]),
            )
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StoreError(f"Could not read {self.filepath}: {e}") from e
        except (ValueError, KeyError, TypeError) as e:
            raise StoreError(f"Corrupt feed cache at {self.filepath}: {e}") from e

    async def delete_cached_feed(self) -> None:
        await asyncio.to_thread(self._delete)

    async def insert(self, items: Sequence[LocalFeedItem], timestamp: datetime) -> None:
        await asyncio.to_thread(self._insert, list(items), timestamp)

    async def retrieve(self) -> Optional[CachedFeed]:
        return await asyncio.to_thread(self._retrieve)


class ParquetFeedStore:
    """
    FeedStore persisting the snapshot as a Parquet file

    The snapshot timestamp is stored on every row. A snapshot with no items
    is written as a zero-row file and reads back as an empty cache.
    """

    def __init__(self, filepath: str):
        self.filepath = Path(filepath)

    def _delete(self) -> None:
        try:
            _remove_if_exists(self.filepath)
        except OSError as e:
            raise StoreError(f"Could not delete {self.filepath}: {e}") from e
        logger.debug(f"Deleted Parquet cache: {self.filepath}")

    def _insert(self, items: Sequence[LocalFeedItem], timestamp: datetime) -> None:
        df = pl.DataFrame(
            {
                "id": [str(item.id) for item in items],
                "description": [item.description for item in items],
                "location": [item.location for item in items],
                "image_url": [item.image_url for item in items],
                "timestamp": [timestamp] * len(items),
            },
            schema=FEED_CACHE_SCHEMA,
        )

        try:
            _atomic_write(self.filepath, df.write_parquet)
        except OSError as e:
            raise StoreError(f"Could not write {self.filepath}: {e}") from e

        logger.info(f"Saved {df.height} records to {self.filepath}")

    def _retrieve(self) -> Optional[CachedFeed]:
        try:
            df = pl.read_parquet(self.filepath)
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StoreError(f"Could not read {self.filepath}: {e}") from e
        except pl.exceptions.PolarsError as e:
            raise StoreError(f"Corrupt feed cache at {self.filepath}: {e}") from e

        if df.height == 0:
            return None

        rows = df.to_dicts()
        timestamp = rows[0]["timestamp"]
        return CachedFeed(
            items=tuple(_item_from_dict(row) for row in rows),
            timestamp=timestamp.astimezone(timezone.utc),
        )

    async def delete_cached_feed(self) -> None:
        await asyncio.to_thread(self._delete)

    async def insert(self, items: Sequence[LocalFeedItem], timestamp: datetime) -> None:
        await asyncio.to_thread(self._insert, list(items), timestamp)

    async def retrieve(self) -> Optional[CachedFeed]:
        return await asyncio.to_thread(self._retrieve)


class InMemoryFeedStore:
    """FeedStore holding the snapshot in process memory"""

    def __init__(self):
        self.cache: Optional[CachedFeed] = None

    async def delete_cached_feed(self) -> None:
        self.cache = None

    async def insert(self, items: Sequence[LocalFeedItem], timestamp: datetime) -> None:
        self.cache = CachedFeed(items=tuple(items), timestamp=timestamp)

    async def retrieve(self) -> Optional[CachedFeed]:
        return self.cache


def create_store(kind: str, filepath: str = ""):
    """
    Build a FeedStore by name

    Args:
        kind: "json", "parquet" or "memory"
        filepath: Cache file location for file-backed stores

    Returns:
        FeedStore: The configured store
    """
    if kind == "json":
        return JsonFeedStore(filepath)
    elif kind == "parquet":
        return ParquetFeedStore(filepath)
    elif kind == "memory":
        return InMemoryFeedStore()
    else:
        raise ValueError(f"Unknown store kind: {kind}")
