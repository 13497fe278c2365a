"""Tests for short ID allocation."""

import asyncio

import pytest

from shortener.allocator import IdentifierAllocator
from shortener.database.memory import URLRecordStoreMemory
from shortener.database.models import UrlRecord
from shortener.errors import AllocationExhaustedError

from conftest import ScriptedGenerator


class InterleavingStore(URLRecordStoreMemory):
    """Yields to the event loop between operations so concurrent allocations interleave."""

    async def short_id_exists(self, short_id):
        exists = await super().short_id_exists(short_id)
        await asyncio.sleep(0)
        return exists

    async def insert(self, record):
        await asyncio.sleep(0)
        await super().insert(record)


class BlindStore(URLRecordStoreMemory):
    """Never reports an existing ID, leaving the unique constraint as the only guard."""

    async def short_id_exists(self, short_id):
        return False


@pytest.mark.asyncio
class TestIdentifierAllocator:
    """Test allocation, deduplication and collision handling."""

    async def test_allocates_new_id(self, allocator, store):
        allocation = await allocator.allocate("https://example.com")

        assert allocation.is_new
        assert len(allocation.short_id) == 8

        record = await store.find_by_short_id(allocation.short_id)
        assert record.original_url == "https://example.com"
        assert record.clicks == 0
        assert record.is_active
        assert record.created_at is not None

    async def test_reuses_existing_id(self, allocator, store):
        first = await allocator.allocate("https://example.com")
        second = await allocator.allocate("https://example.com")

        assert second.short_id == first.short_id
        assert not second.is_new
        assert await store.count_active() == 1

    async def test_dedup_is_exact_string(self, allocator):
        plain = await allocator.allocate("https://example.com")
        slash = await allocator.allocate("https://example.com/")

        assert slash.is_new
        assert slash.short_id != plain.short_id

    async def test_retries_on_collision(self, store, logger):
        await store.insert(UrlRecord.new("taken001", "https://example.com/a"))
        await store.insert(UrlRecord.new("taken002", "https://example.com/b"))

        allocator = IdentifierAllocator(
            store,
            generator=ScriptedGenerator(["taken001", "taken002", "freeid01"]),
            logger=logger,
        )

        allocation = await allocator.allocate("https://example.com/c")
        assert allocation.short_id == "freeid01"

    async def test_exhausted(self, store, logger):
        await store.insert(UrlRecord.new("taken001", "https://example.com/a"))

        allocator = IdentifierAllocator(
            store,
            generator=ScriptedGenerator(["taken001"] * 10),
            max_attempts=10,
            logger=logger,
        )

        with pytest.raises(AllocationExhaustedError) as exc_info:
            await allocator.allocate("https://example.com/b")

        assert exc_info.value.attempts == 10
        assert await store.find_by_original_url("https://example.com/b") is None

    async def test_retries_on_duplicate_key(self, logger):
        store = BlindStore(logger=logger)
        await store.connect()
        await store.insert(UrlRecord.new("taken001", "https://example.com/a"))

        allocator = IdentifierAllocator(
            store,
            generator=ScriptedGenerator(["taken001", "freeid01"]),
            logger=logger,
        )

        allocation = await allocator.allocate("https://example.com/b")

        assert allocation.short_id == "freeid01"
        assert (await store.find_by_short_id("taken001")).original_url == "https://example.com/a"

    async def test_duplicate_key_counts_toward_bound(self, logger):
        store = BlindStore(logger=logger)
        await store.connect()
        await store.insert(UrlRecord.new("taken001", "https://example.com/a"))

        allocator = IdentifierAllocator(
            store,
            generator=ScriptedGenerator(["taken001"] * 3),
            max_attempts=3,
            logger=logger,
        )

        with pytest.raises(AllocationExhaustedError):
            await allocator.allocate("https://example.com/b")

    async def test_concurrent_allocations_never_share_an_id(self, logger):
        """Two allocations that draw the same ID at the same time both end up with distinct IDs."""
        store = InterleavingStore(logger=logger)
        await store.connect()

        first = IdentifierAllocator(store, generator=ScriptedGenerator(["sameid01", "first002"]), logger=logger)
        second = IdentifierAllocator(store, generator=ScriptedGenerator(["sameid01", "second02"]), logger=logger)

        a, b = await asyncio.gather(
            first.allocate("https://example.com/one"),
            second.allocate("https://example.com/two"),
        )

        assert a.is_new and b.is_new
        assert a.short_id != b.short_id
        assert "sameid01" in (a.short_id, b.short_id)

        one = await store.find_by_original_url("https://example.com/one")
        two = await store.find_by_original_url("https://example.com/two")
        assert {one.short_id, two.short_id} == {a.short_id, b.short_id}
