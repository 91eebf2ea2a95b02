"""
Test Local Storage - Verify the concrete feed stores against the FeedStore contract
"""

import asyncio
import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from feedcache.load.feed_store import StoreError
from feedcache.load.local_feed_loader import LocalFeedLoader
from feedcache.load.local_storage import (
    InMemoryFeedStore,
    JsonFeedStore,
    ParquetFeedStore,
    create_store,
)
from helpers import fixed_now, minus_feed_cache_max_age, seconds, unique_items


@pytest.fixture(params=["json", "parquet", "memory"])
def store(request, tmp_path):
    suffix = {"json": "feed.json", "parquet": "feed.parquet", "memory": ""}[request.param]
    return create_store(request.param, str(tmp_path / suffix))


def test_retrieve_delivers_empty_on_empty_cache(store):
    assert asyncio.run(store.retrieve()) is None


def test_retrieve_delivers_found_values_on_non_empty_cache(store):
    _, local = unique_items()
    timestamp = fixed_now()

    async def insert_then_retrieve():
        await store.insert(local, timestamp)
        return await store.retrieve()

    cache = asyncio.run(insert_then_retrieve())

    assert list(cache.items) == local
    assert cache.timestamp == timestamp


def test_retrieve_twice_has_no_side_effects(store):
    _, local = unique_items()

    async def scenario():
        await store.insert(local, fixed_now())
        return await store.retrieve(), await store.retrieve()

    first, second = asyncio.run(scenario())

    assert first == second


def test_insert_overrides_previous_snapshot(store):
    _, first_local = unique_items()
    _, latest_local = unique_items()
    latest_timestamp = fixed_now() + seconds(60)

    async def scenario():
        await store.insert(first_local, fixed_now())
        await store.insert(latest_local, latest_timestamp)
        return await store.retrieve()

    cache = asyncio.run(scenario())

    assert list(cache.items) == latest_local
    assert cache.timestamp == latest_timestamp


def test_delete_empties_previous_cache(store):
    _, local = unique_items()

    async def scenario():
        await store.insert(local, fixed_now())
        await store.delete_cached_feed()
        return await store.retrieve()

    assert asyncio.run(scenario()) is None


def test_delete_on_empty_cache_succeeds(store):
    asyncio.run(store.delete_cached_feed())

    assert asyncio.run(store.retrieve()) is None


def test_local_loader_round_trip_over_store(store):
    models, _ = unique_items()
    now = fixed_now()
    loader = LocalFeedLoader(store, current_date=lambda: now)

    async def scenario():
        await loader.save(models)
        return await loader.load()

    assert asyncio.run(scenario()) == models


def test_local_loader_delivers_no_items_once_store_snapshot_expires(store):
    models, _ = unique_items()
    saved_at = minus_feed_cache_max_age(fixed_now())
    clock = iter([saved_at, fixed_now()])
    loader = LocalFeedLoader(store, current_date=lambda: next(clock))

    async def scenario():
        await loader.save(models)
        return await loader.load()

    assert asyncio.run(scenario()) == []


def test_json_store_raises_store_error_on_corrupt_file(tmp_path):
    path = tmp_path / "feed.json"
    path.write_text("not json")

    with pytest.raises(StoreError):
        asyncio.run(JsonFeedStore(str(path)).retrieve())


def test_parquet_store_raises_store_error_on_corrupt_file(tmp_path):
    path = tmp_path / "feed.parquet"
    path.write_bytes(b"not parquet")

    with pytest.raises(StoreError):
        asyncio.run(ParquetFeedStore(str(path)).retrieve())


def test_parquet_store_reads_empty_snapshot_as_empty_cache(tmp_path):
    store = ParquetFeedStore(str(tmp_path / "feed.parquet"))

    async def scenario():
        await store.insert([], fixed_now())
        return await store.retrieve()

    assert asyncio.run(scenario()) is None


def test_file_stores_leave_no_temporary_files(tmp_path):
    _, local = unique_items()
    json_store = JsonFeedStore(str(tmp_path / "feed.json"))
    parquet_store = ParquetFeedStore(str(tmp_path / "feed.parquet"))

    async def scenario():
        await json_store.insert(local, fixed_now())
        await parquet_store.insert(local, fixed_now())

    asyncio.run(scenario())

    assert sorted(p.name for p in tmp_path.iterdir()) == ["feed.json", "feed.parquet"]


def test_create_store_rejects_unknown_kind():
    with pytest.raises(ValueError):
        create_store("sqlite", "feed.db")


def test_in_memory_store_starts_empty():
    assert InMemoryFeedStore().cache is None


def test_failed_insert_after_successful_save_leaves_store_empty(store, monkeypatch):
    """A save that fails after its delete must not resurrect the previous snapshot"""
    first_models, _ = unique_items()
    latest_models, _ = unique_items()
    now = fixed_now()
    loader = LocalFeedLoader(store, current_date=lambda: now)

    async def failing_insert(items, timestamp):
        raise StoreError("disk full")

    asyncio.run(loader.save(first_models))
    monkeypatch.setattr(store, "insert", failing_insert)

    with pytest.raises(StoreError):
        asyncio.run(loader.save(latest_models))

    assert asyncio.run(loader.load()) == []
    assert asyncio.run(store.retrieve()) is None


def test_json_store_retrieve_treats_file_vanishing_mid_read_as_empty(tmp_path, monkeypatch):
    path = tmp_path / "feed.json"
    path.write_text("{}")

    def vanished(*args, **kwargs):
        raise FileNotFoundError(str(path))

    monkeypatch.setattr("feedcache.load.local_storage.open", vanished, raising=False)

    assert asyncio.run(JsonFeedStore(str(path)).retrieve()) is None


def test_parquet_store_retrieve_treats_file_vanishing_mid_read_as_empty(tmp_path, monkeypatch):
    path = tmp_path / "feed.parquet"
    path.write_bytes(b"placeholder")

    def vanished(*args, **kwargs):
        raise FileNotFoundError(str(path))

    monkeypatch.setattr("feedcache.load.local_storage.pl.read_parquet", vanished)

    assert asyncio.run(ParquetFeedStore(str(path)).retrieve()) is None
