"""Business logic service for URL shortener."""

import logging
import math
from dataclasses import dataclass
from typing import Optional, Dict, Any, List

from .allocator import Allocation, IdentifierAllocator
from .database.base import URLRecordStoreBase
from .database.models import UrlRecord
from .errors import InvalidURLError, ShortIdNotFoundError
from .common.validators import normalize_url, is_valid_url, is_valid_short_id


@dataclass
class ShortenResult:
    """Result of a shorten request."""

    short_id: str
    original_url: str
    is_new: bool

    @property
    def outcome(self) -> str:
        """Feedback keyword shown on the home page."""
        return "created" if self.is_new else "existing"


@dataclass
class Page:
    """One page of active records plus pagination metadata."""

    urls: List[UrlRecord]
    current_page: int
    total_pages: int
    total_urls: int

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages

    @property
    def has_prev(self) -> bool:
        return self.current_page > 1


class URLShortenerService:
    """Service layer for URL shortening business logic."""

    def __init__(
        self,
        store: URLRecordStoreBase,
        allocator: Optional[IdentifierAllocator] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize URL shortener service.

        Args:
            store: Record store
            allocator: Optional allocator (built over the store if omitted)
            logger: Optional logger
        """
        self.store = store
        self.logger = logger or logging.getLogger(__name__)
        self.allocator = allocator or IdentifierAllocator(store, logger=self.logger)

    async def shorten(self, original_url: Optional[str]) -> ShortenResult:
        """Shorten a submitted URL, reusing an existing short ID for the same URL.

        Args:
            original_url: URL as submitted; a missing protocol defaults to https

        Returns:
            ShortenResult

        Raises:
            InvalidURLError: If the URL is missing or malformed
            AllocationExhaustedError: If no free short ID was found
            StoreError: If the store fails
        """
        if not original_url or not original_url.strip():
            raise InvalidURLError("", reason="Please provide a URL to shorten")

        normalized = normalize_url(original_url)
        is_valid, error = is_valid_url(normalized)
        if not is_valid:
            self.logger.info(f"Rejected URL {normalized!r}: {error}")
            raise InvalidURLError(normalized, reason=error)

        allocation: Allocation = await self.allocator.allocate(normalized)
        return ShortenResult(
            short_id=allocation.short_id,
            original_url=normalized,
            is_new=allocation.is_new,
        )

    async def resolve(self, short_id: str) -> UrlRecord:
        """Look up an active record for a redirect and count the click.

        Args:
            short_id: The short ID being visited

        Returns:
            The record, with the incremented click count when available

        Raises:
            ShortIdNotFoundError: If unknown, inactive or malformed
        """
        is_valid, _ = is_valid_short_id(short_id)
        record = await self.store.find_active_by_short_id(short_id) if is_valid else None
        if record is None:
            self.logger.info(f"Short URL not found: {short_id}")
            raise ShortIdNotFoundError(short_id)

        updated = await self.store.increment_clicks(short_id)
        if updated is not None:
            record = updated

        self.logger.info(f"Redirecting: {short_id} -> {record.original_url} ({record.clicks} clicks)")
        return record

    async def get_stats(self, short_id: str) -> UrlRecord:
        """Get an active record without counting a click.

        Raises:
            ShortIdNotFoundError: If unknown or inactive
        """
        record = await self.store.find_active_by_short_id(short_id)
        if record is None:
            raise ShortIdNotFoundError(short_id)
        return record

    async def get_record(self, short_id: str) -> Optional[UrlRecord]:
        """Get a record whether or not it is active."""
        return await self.store.find_by_short_id(short_id)

    async def list_urls(self, page: int = 1, limit: int = 10) -> Page:
        """List active records, most recent first.

        Args:
            page: 1-based page number
            limit: Page size

        Returns:
            Page of records
        """
        skip = (page - 1) * limit
        urls = await self.store.list_active(skip=skip, limit=limit)
        total = await self.store.count_active()

        return Page(
            urls=urls,
            current_page=page,
            total_pages=math.ceil(total / limit),
            total_urls=total,
        )

    async def recent_urls(self, limit: int = 10) -> List[UrlRecord]:
        """Most recently created active records."""
        return await self.store.list_active(skip=0, limit=limit)

    async def deactivate(self, short_id: str) -> bool:
        """Hide a record from redirects, stats and listings without deleting it.

        Returns:
            True if a record matched
        """
        deactivated = await self.store.deactivate(short_id)
        if deactivated:
            self.logger.info(f"Deactivated short URL: {short_id}")
        else:
            self.logger.warning(f"Cannot deactivate - short ID not found: {short_id}")
        return deactivated

    async def get_statistics(self) -> Dict[str, Any]:
        """Get store-wide statistics."""
        return await self.store.get_statistics()

    async def health_check(self) -> bool:
        """Check that the store is reachable."""
        return await self.store.health_check()

    async def close(self) -> None:
        """Close store connections."""
        await self.store.close()
