"""Tests for service layer."""

import pytest

from shortener.errors import InvalidURLError, ShortIdNotFoundError


@pytest.mark.asyncio
class TestURLShortenerService:
    """Test URL shortener service."""

    async def test_shorten(self, service, sample_urls):
        """Test creating a short URL."""
        result = await service.shorten(sample_urls[0])

        assert result.is_new
        assert result.outcome == "created"
        assert result.original_url == sample_urls[0]
        assert len(result.short_id) == 8

    async def test_shorten_normalizes_bare_domain(self, service, store):
        result = await service.shorten("example.com")

        assert result.original_url == "https://example.com"
        record = await store.find_by_short_id(result.short_id)
        assert record.original_url == "https://example.com"

    async def test_shorten_is_idempotent(self, service, sample_urls):
        first = await service.shorten(sample_urls[1])
        second = await service.shorten(sample_urls[1])

        assert second.short_id == first.short_id
        assert second.outcome == "existing"

    async def test_bare_and_prefixed_forms_share_an_id(self, service):
        first = await service.shorten("example.com/page")
        second = await service.shorten("https://example.com/page")

        assert second.short_id == first.short_id

    @pytest.mark.parametrize("url", [None, "", "   "])
    async def test_missing_url(self, service, url):
        with pytest.raises(InvalidURLError, match="Please provide a URL"):
            await service.shorten(url)

    async def test_invalid_url(self, service, store):
        with pytest.raises(InvalidURLError) as exc_info:
            await service.shorten("not a url")

        assert exc_info.value.url == "https://not a url"
        assert await store.count_active() == 0

    async def test_invalid_url_is_value_error(self, service):
        with pytest.raises(ValueError):
            await service.shorten("ftp://example.com")

    async def test_resolve_counts_clicks(self, service, sample_urls):
        created = await service.shorten(sample_urls[0])

        clicks = []
        for _ in range(3):
            record = await service.resolve(created.short_id)
            assert record.original_url == sample_urls[0]
            clicks.append(record.clicks)

        assert clicks == [1, 2, 3]
        stats = await service.get_stats(created.short_id)
        assert stats.clicks == 3
        assert stats.last_clicked is not None

    async def test_resolve_unknown(self, service):
        with pytest.raises(ShortIdNotFoundError):
            await service.resolve("unknownid1")

    async def test_resolve_malformed(self, service):
        with pytest.raises(ShortIdNotFoundError):
            await service.resolve("bad id!")

    async def test_get_stats_does_not_count(self, service, sample_urls):
        created = await service.shorten(sample_urls[0])

        await service.get_stats(created.short_id)
        stats = await service.get_stats(created.short_id)

        assert stats.clicks == 0
        assert stats.last_clicked is None

    async def test_deactivated_is_hidden(self, service, sample_urls):
        kept = await service.shorten(sample_urls[0])
        hidden = await service.shorten(sample_urls[1])

        assert await service.deactivate(hidden.short_id)

        with pytest.raises(ShortIdNotFoundError):
            await service.resolve(hidden.short_id)
        with pytest.raises(ShortIdNotFoundError):
            await service.get_stats(hidden.short_id)

        page = await service.list_urls(page=1, limit=10)
        assert [r.short_id for r in page.urls] == [kept.short_id]
        assert page.total_urls == 1

        # still there for direct lookups
        record = await service.get_record(hidden.short_id)
        assert record is not None
        assert not record.is_active

    async def test_deactivate_unknown(self, service):
        assert not await service.deactivate("unknownid1")

    async def test_list_urls_pagination(self, service, sample_urls):
        created = [await service.shorten(url) for url in sample_urls]

        page = await service.list_urls(page=2, limit=1)

        assert [r.short_id for r in page.urls] == [created[1].short_id]
        assert page.current_page == 2
        assert page.total_pages == 3
        assert page.total_urls == 3
        assert page.has_next
        assert page.has_prev

    async def test_list_urls_empty(self, service):
        page = await service.list_urls(page=1, limit=10)

        assert page.urls == []
        assert page.total_pages == 0
        assert not page.has_next
        assert not page.has_prev

    async def test_recent_urls(self, service, sample_urls):
        created = [await service.shorten(url) for url in sample_urls]

        recent = await service.recent_urls(limit=2)

        assert [r.short_id for r in recent] == [created[2].short_id, created[1].short_id]

    async def test_health_check(self, service, store):
        assert await service.health_check()

        await service.close()
        assert not await service.health_check()
