"""Data models for URL shortener."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to naive datetimes coming back from a store."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


@dataclass
class UrlRecord:
    """Represents a shortened URL in the record store."""

    short_id: str
    original_url: str
    created_at: datetime
    clicks: int = 0
    last_clicked: Optional[datetime] = None
    is_active: bool = True

    @classmethod
    def new(cls, short_id: str, original_url: str, created_at: Optional[datetime] = None) -> "UrlRecord":
        """Create a fresh, active record with no clicks."""
        return cls(
            short_id=short_id,
            original_url=original_url,
            created_at=created_at or utcnow(),
        )

    def to_document(self) -> dict:
        """Convert to the camelCase document stored in MongoDB."""
        return {
            "shortId": self.short_id,
            "originalUrl": self.original_url,
            "createdAt": self.created_at,
            "clicks": self.clicks,
            "lastClicked": self.last_clicked,
            "isActive": self.is_active,
        }

    @classmethod
    def from_document(cls, doc: dict) -> "UrlRecord":
        """Create from a stored document."""
        return cls(
            short_id=doc["shortId"],
            original_url=doc["originalUrl"],
            created_at=as_utc(doc["createdAt"]),
            clicks=doc.get("clicks", 0),
            last_clicked=as_utc(doc.get("lastClicked")),
            is_active=doc.get("isActive", True),
        )

    def to_dict(self) -> dict:
        """Convert to a JSON-friendly dictionary."""
        doc = self.to_document()
        doc["createdAt"] = self.created_at.isoformat() if self.created_at else None
        doc["lastClicked"] = self.last_clicked.isoformat() if self.last_clicked else None
        return doc
