"""In-process record store for tests and local runs."""

import itertools
import logging
from dataclasses import replace
from typing import Optional, List, Dict, Any

from .base import URLRecordStoreBase
from .models import UrlRecord, utcnow
from ..errors import DuplicateShortIdError


class URLRecordStoreMemory(URLRecordStoreBase):
    """Dictionary-backed store.

    Nothing awaits between a check and a write, so every operation is atomic
    with respect to other coroutines on the same event loop.
    """

    backend_name = "memory"

    def __init__(self, db_config: str = "memory://", logger: Optional[logging.Logger] = None):
        super().__init__(db_config)
        self.logger = logger or logging.getLogger(__name__)
        self._records: Dict[str, UrlRecord] = {}
        # insertion order breaks createdAt ties
        self._sequence: Dict[str, int] = {}
        self._counter = itertools.count()
        self._connected = False

    async def connect(self) -> None:
        self._connected = True
        await self.ensure_indexes()

    async def ensure_indexes(self) -> None:
        pass

    async def insert(self, record: UrlRecord) -> None:
        if record.short_id in self._records:
            raise DuplicateShortIdError(record.short_id)
        self._records[record.short_id] = replace(record)
        self._sequence[record.short_id] = next(self._counter)

    async def find_by_short_id(self, short_id: str) -> Optional[UrlRecord]:
        record = self._records.get(short_id)
        return replace(record) if record else None

    async def find_active_by_short_id(self, short_id: str) -> Optional[UrlRecord]:
        record = self._records.get(short_id)
        return replace(record) if record and record.is_active else None

    async def find_by_original_url(self, original_url: str) -> Optional[UrlRecord]:
        for short_id in sorted(self._records, key=self._sequence.get):
            record = self._records[short_id]
            if record.original_url == original_url:
                return replace(record)
        return None

    async def increment_clicks(self, short_id: str) -> Optional[UrlRecord]:
        record = self._records.get(short_id)
        if record is None:
            self.logger.warning(f"Cannot increment clicks - short ID not found: {short_id}")
            return None
        record.clicks += 1
        record.last_clicked = utcnow()
        return replace(record)

    def _active_sorted(self) -> List[UrlRecord]:
        active = [r for r in self._records.values() if r.is_active]
        active.sort(key=lambda r: (r.created_at, self._sequence[r.short_id]), reverse=True)
        return active

    async def list_active(self, skip: int = 0, limit: int = 10) -> List[UrlRecord]:
        return [replace(r) for r in self._active_sorted()[skip:skip + limit]]

    async def count_active(self) -> int:
        return sum(1 for r in self._records.values() if r.is_active)

    async def deactivate(self, short_id: str) -> bool:
        record = self._records.get(short_id)
        if record is None:
            return False
        record.is_active = False
        return True

    async def get_statistics(self) -> Dict[str, Any]:
        return {
            "total_urls": len(self._records),
            "active_urls": await self.count_active(),
            "total_clicks": sum(r.clicks for r in self._records.values()),
            "database": self.backend_name,
        }

    async def health_check(self) -> bool:
        return self._connected

    async def close(self) -> None:
        self._connected = False
