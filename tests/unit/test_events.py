"""Unit tests for the in-process change feed."""

import pytest

from app.core.events import BILLS, CUSTOMERS, ChangeFeed


@pytest.mark.asyncio
async def test_publish_reaches_sync_and_async_listeners():
    feed = ChangeFeed()
    seen = []

    def sync_listener(collection):
        seen.append(("sync", collection))

    async def async_listener(collection):
        seen.append(("async", collection))

    feed.subscribe(BILLS, sync_listener)
    feed.subscribe(BILLS, async_listener)
    await feed.publish(BILLS)

    assert seen == [("sync", BILLS), ("async", BILLS)]


@pytest.mark.asyncio
async def test_publish_is_scoped_to_collection():
    feed = ChangeFeed()
    seen = []
    feed.subscribe(CUSTOMERS, seen.append)

    await feed.publish(BILLS)

    assert seen == []


@pytest.mark.asyncio
async def test_failing_listener_does_not_stop_others():
    feed = ChangeFeed()
    seen = []

    def broken(collection):
        raise RuntimeError("stale view")

    feed.subscribe(BILLS, broken)
    feed.subscribe(BILLS, seen.append)
    await feed.publish(BILLS)

    assert seen == [BILLS]


@pytest.mark.asyncio
async def test_unsubscribe_is_idempotent():
    feed = ChangeFeed()
    seen = []
    unsubscribe = feed.subscribe(BILLS, seen.append)
    assert feed.listener_count(BILLS) == 1

    unsubscribe()
    unsubscribe()
    await feed.publish(BILLS)

    assert feed.listener_count(BILLS) == 0
    assert seen == []
