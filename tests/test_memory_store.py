"""Tests for the in-memory record store."""

from datetime import datetime, timedelta, timezone

import pytest

from shortener.database.models import UrlRecord
from shortener.errors import DuplicateShortIdError


def _record(short_id, url, minutes_ago=0):
    created = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc) - timedelta(minutes=minutes_ago)
    return UrlRecord.new(short_id, url, created_at=created)


@pytest.mark.asyncio
class TestMemoryStore:
    """Record store behaviour shared by every backend."""

    async def test_insert_and_find(self, store):
        await store.insert(_record("abcdefgh", "https://example.com"))

        record = await store.find_by_short_id("abcdefgh")
        assert record.original_url == "https://example.com"
        assert record.clicks == 0
        assert record.last_clicked is None
        assert record.is_active

    async def test_insert_duplicate_short_id(self, store):
        await store.insert(_record("abcdefgh", "https://example.com"))

        with pytest.raises(DuplicateShortIdError):
            await store.insert(_record("abcdefgh", "https://other.example.com"))

        record = await store.find_by_short_id("abcdefgh")
        assert record.original_url == "https://example.com"

    async def test_find_by_original_url_is_exact(self, store):
        await store.insert(_record("abcdefgh", "https://example.com"))

        assert (await store.find_by_original_url("https://example.com")).short_id == "abcdefgh"
        assert await store.find_by_original_url("https://example.com/") is None
        assert await store.find_by_original_url("https://EXAMPLE.com") is None

    async def test_short_id_exists(self, store):
        await store.insert(_record("abcdefgh", "https://example.com"))

        assert await store.short_id_exists("abcdefgh")
        assert not await store.short_id_exists("zzzzzzzz")

    async def test_returned_records_are_copies(self, store):
        await store.insert(_record("abcdefgh", "https://example.com"))

        record = await store.find_by_short_id("abcdefgh")
        record.clicks = 99

        assert (await store.find_by_short_id("abcdefgh")).clicks == 0

    async def test_increment_clicks(self, store):
        await store.insert(_record("abcdefgh", "https://example.com"))

        first = await store.increment_clicks("abcdefgh")
        second = await store.increment_clicks("abcdefgh")

        assert first.clicks == 1
        assert second.clicks == 2
        assert second.last_clicked >= first.last_clicked

    async def test_increment_missing_is_noop(self, store):
        assert await store.increment_clicks("zzzzzzzz") is None
        assert await store.count_active() == 0

    async def test_list_active_most_recent_first(self, store):
        await store.insert(_record("oldest01", "https://example.com/1", minutes_ago=30))
        await store.insert(_record("newest01", "https://example.com/3", minutes_ago=0))
        await store.insert(_record("middle01", "https://example.com/2", minutes_ago=10))

        records = await store.list_active(skip=0, limit=10)
        assert [r.short_id for r in records] == ["newest01", "middle01", "oldest01"]

        page = await store.list_active(skip=1, limit=1)
        assert [r.short_id for r in page] == ["middle01"]

    async def test_deactivate_hides_record(self, store):
        await store.insert(_record("abcdefgh", "https://example.com"))
        await store.insert(_record("ijklmnop", "https://example.org"))

        assert await store.deactivate("abcdefgh")

        assert await store.find_active_by_short_id("abcdefgh") is None
        assert (await store.find_by_short_id("abcdefgh")).is_active is False
        assert [r.short_id for r in await store.list_active()] == ["ijklmnop"]
        assert await store.count_active() == 1

    async def test_deactivate_missing(self, store):
        assert not await store.deactivate("zzzzzzzz")

    async def test_statistics(self, store):
        await store.insert(_record("abcdefgh", "https://example.com"))
        await store.insert(_record("ijklmnop", "https://example.org"))
        await store.increment_clicks("abcdefgh")
        await store.deactivate("ijklmnop")

        stats = await store.get_statistics()
        assert stats == {
            "total_urls": 2,
            "active_urls": 1,
            "total_clicks": 1,
            "database": "memory",
        }

    async def test_health_follows_connection(self, store):
        assert await store.health_check()

        await store.close()
        assert not await store.health_check()
