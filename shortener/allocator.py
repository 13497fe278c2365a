"""Short ID allocation for normalized URLs."""

import logging
from dataclasses import dataclass
from typing import Optional

from .database.base import URLRecordStoreBase
from .database.models import UrlRecord
from .errors import AllocationExhaustedError, DuplicateShortIdError
from .shortid import ShortIdGenerator


@dataclass(frozen=True)
class Allocation:
    """Outcome of allocating a short ID."""

    short_id: str
    is_new: bool


class IdentifierAllocator:
    """Map normalized URLs to short IDs.

    Re-shortening the exact same URL string returns the existing ID. New IDs
    are drawn at random and checked against the store; the store's unique
    index is the backstop when two allocations race for the same ID.
    """

    def __init__(
        self,
        store: URLRecordStoreBase,
        generator: Optional[ShortIdGenerator] = None,
        max_attempts: int = 10,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize allocator.

        Args:
            store: Record store
            generator: Optional short ID generator
            max_attempts: Attempts before giving up on a free ID
            logger: Optional logger
        """
        self.store = store
        self.generator = generator or ShortIdGenerator()
        self.max_attempts = max_attempts
        self.logger = logger or logging.getLogger(__name__)

    async def allocate(self, normalized_url: str) -> Allocation:
        """Return the short ID for a URL, creating a record if needed.

        Args:
            normalized_url: Validated, protocol-qualified URL

        Returns:
            Allocation with the short ID and whether it was just created

        Raises:
            AllocationExhaustedError: If every attempt collided
        """
        existing = await self.store.find_by_original_url(normalized_url)
        if existing:
            self.logger.info(f"Existing URL found: {existing.short_id}")
            return Allocation(short_id=existing.short_id, is_new=False)

        for attempt in range(1, self.max_attempts + 1):
            short_id = self.generator.generate_random()

            if await self.store.short_id_exists(short_id):
                self.logger.debug(f"Short ID collision on attempt {attempt}: {short_id}")
                continue

            try:
                await self.store.insert(UrlRecord.new(short_id, normalized_url))
            except DuplicateShortIdError:
                # lost a race between the existence check and the insert
                self.logger.warning(f"Short ID taken concurrently on attempt {attempt}: {short_id}")
                continue

            self.logger.info(f"URL shortened: {normalized_url} -> {short_id}")
            return Allocation(short_id=short_id, is_new=True)

        self.logger.error(f"Unable to allocate short ID for {normalized_url}")
        raise AllocationExhaustedError(self.max_attempts)
