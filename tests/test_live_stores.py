"""Tests against real MongoDB and PostgreSQL servers.

Skipped unless TEST_MONGO_URI or TEST_POSTGRES_URL points at a disposable
database, e.g.::

    TEST_MONGO_URI=mongodb://localhost:27017/urlshortener_test pytest tests/test_live_stores.py
"""

import asyncio
import os
import uuid

import pytest

from shortener.database.factory import create_store
from shortener.database.models import UrlRecord
from shortener.errors import DuplicateShortIdError
from shortener.shortid import ShortIdGenerator

LIVE_URLS = [
    pytest.param(
        os.environ.get("TEST_MONGO_URI"),
        id="mongodb",
        marks=pytest.mark.skipif(not os.environ.get("TEST_MONGO_URI"), reason="TEST_MONGO_URI not set"),
    ),
    pytest.param(
        os.environ.get("TEST_POSTGRES_URL"),
        id="postgresql",
        marks=pytest.mark.skipif(not os.environ.get("TEST_POSTGRES_URL"), reason="TEST_POSTGRES_URL not set"),
    ),
]


@pytest.fixture(params=LIVE_URLS)
async def live_store(request, logger):
    store = create_store(request.param, timeout_ms=3000, logger=logger)
    await store.connect()

    yield store

    await store.close()


def _fresh():
    """A short ID and URL no earlier run has used."""
    short_id = ShortIdGenerator(default_length=10).generate_random()
    return short_id, f"https://example.com/live/{uuid.uuid4().hex}"


@pytest.mark.asyncio
class TestLiveStore:
    """Record store behaviour against a real server."""

    async def test_insert_and_find(self, live_store):
        short_id, url = _fresh()
        await live_store.insert(UrlRecord.new(short_id, url))

        record = await live_store.find_by_short_id(short_id)
        assert record.original_url == url
        assert record.clicks == 0
        assert record.is_active
        assert record.created_at.tzinfo is not None

        assert (await live_store.find_by_original_url(url)).short_id == short_id
        assert await live_store.short_id_exists(short_id)

    async def test_duplicate_short_id(self, live_store):
        short_id, url = _fresh()
        await live_store.insert(UrlRecord.new(short_id, url))

        with pytest.raises(DuplicateShortIdError):
            await live_store.insert(UrlRecord.new(short_id, url + "/other"))

    async def test_concurrent_increments(self, live_store):
        short_id, url = _fresh()
        await live_store.insert(UrlRecord.new(short_id, url))

        await asyncio.gather(*[live_store.increment_clicks(short_id) for _ in range(10)])

        record = await live_store.find_by_short_id(short_id)
        assert record.clicks == 10
        assert record.last_clicked is not None

    async def test_deactivate(self, live_store):
        short_id, url = _fresh()
        await live_store.insert(UrlRecord.new(short_id, url))
        before = await live_store.count_active()

        assert await live_store.deactivate(short_id)

        assert await live_store.find_active_by_short_id(short_id) is None
        assert not (await live_store.find_by_short_id(short_id)).is_active
        assert await live_store.count_active() == before - 1

    async def test_list_active_newest_first(self, live_store):
        inserted = []
        for _ in range(2):
            short_id, url = _fresh()
            await live_store.insert(UrlRecord.new(short_id, url))
            inserted.append(short_id)

        newest = await live_store.list_active(skip=0, limit=2)

        assert [r.short_id for r in newest] == list(reversed(inserted))

    async def test_health_check(self, live_store):
        assert await live_store.health_check()
