"""Abstract base class for record store implementations."""

from abc import ABC, abstractmethod
from typing import Optional, List, Dict, Any

from .models import UrlRecord


class URLRecordStoreBase(ABC):
    """Abstract base class for URL record storage operations."""

    #: Short name reported by statistics and logs
    backend_name = "base"

    def __init__(self, db_config: str):
        """Initialize store.

        Args:
            db_config: Database connection string
        """
        self.db_config = db_config

    @abstractmethod
    async def connect(self) -> None:
        """Open connections and make sure indexes exist.

        Raises:
            StoreUnavailableError: If the store cannot be reached
        """
        pass

    @abstractmethod
    async def ensure_indexes(self) -> None:
        """Create indexes (or tables) the store relies on."""
        pass

    @abstractmethod
    async def insert(self, record: UrlRecord) -> None:
        """Insert a new record.

        Args:
            record: The record to store

        Raises:
            DuplicateShortIdError: If record.short_id already exists
        """
        pass

    @abstractmethod
    async def find_by_short_id(self, short_id: str) -> Optional[UrlRecord]:
        """Get a record by short ID, active or not.

        Args:
            short_id: The short ID to lookup

        Returns:
            The record if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_active_by_short_id(self, short_id: str) -> Optional[UrlRecord]:
        """Get a record by short ID only if it is active.

        Args:
            short_id: The short ID to lookup

        Returns:
            The record if found and active, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_original_url(self, original_url: str) -> Optional[UrlRecord]:
        """Get a record by exact original URL.

        Args:
            original_url: The normalized URL to lookup

        Returns:
            The record if found, None otherwise
        """
        pass

    async def short_id_exists(self, short_id: str) -> bool:
        """Check if a short ID is already taken.

        Args:
            short_id: The short ID to check

        Returns:
            True if exists, False otherwise
        """
        return await self.find_by_short_id(short_id) is not None

    @abstractmethod
    async def increment_clicks(self, short_id: str) -> Optional[UrlRecord]:
        """Atomically add one click and stamp last_clicked.

        Args:
            short_id: The short ID to update

        Returns:
            The updated record, or None if it no longer exists
        """
        pass

    @abstractmethod
    async def list_active(self, skip: int = 0, limit: int = 10) -> List[UrlRecord]:
        """List active records, most recent first.

        Args:
            skip: Number of records to skip
            limit: Maximum number of records to return

        Returns:
            List of records
        """
        pass

    @abstractmethod
    async def count_active(self) -> int:
        """Count active records."""
        pass

    @abstractmethod
    async def deactivate(self, short_id: str) -> bool:
        """Soft-delete a record.

        Args:
            short_id: The short ID to deactivate

        Returns:
            True if a record matched, False if not found
        """
        pass

    @abstractmethod
    async def get_statistics(self) -> Dict[str, Any]:
        """Get store statistics.

        Returns:
            Dictionary with total_urls, active_urls and total_clicks
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close store connections."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if store is reachable.

        Returns:
            True if healthy, False otherwise
        """
        pass
