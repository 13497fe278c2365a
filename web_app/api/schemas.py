"""Pydantic schemas for API responses."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import List, Optional
from datetime import datetime

from shortener.database.models import UrlRecord


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class StatsResponse(CamelModel):
    """Click statistics for one short URL."""

    short_id: str = Field(..., description="The short ID")
    original_url: str = Field(..., description="The original long URL")
    clicks: int = Field(..., description="Number of redirects served")
    created_at: datetime = Field(..., description="Creation timestamp")
    last_clicked: Optional[datetime] = Field(None, description="Most recent redirect")

    @classmethod
    def from_record(cls, record: UrlRecord) -> "StatsResponse":
        return cls(
            short_id=record.short_id,
            original_url=record.original_url,
            clicks=record.clicks,
            created_at=record.created_at,
            last_clicked=record.last_clicked,
        )

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "shortId": "V1StGXR8",
                    "originalUrl": "https://example.com/very/long/path",
                    "clicks": 3,
                    "createdAt": "2024-01-01T12:00:00Z",
                    "lastClicked": "2024-01-02T08:30:00Z",
                }
            ]
        },
    )


class URLItem(StatsResponse):
    """Entry in the URL listing."""

    is_active: bool = Field(True, description="Soft-delete flag")

    @classmethod
    def from_record(cls, record: UrlRecord) -> "URLItem":
        return cls(
            short_id=record.short_id,
            original_url=record.original_url,
            clicks=record.clicks,
            created_at=record.created_at,
            last_clicked=record.last_clicked,
            is_active=record.is_active,
        )


class Pagination(CamelModel):
    """Pagination metadata."""

    current_page: int
    total_pages: int
    total_urls: int
    has_next: bool
    has_prev: bool


class URLListResponse(BaseModel):
    """Paginated listing of active URLs."""

    urls: List[URLItem]
    pagination: Pagination


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Overall status")
    timestamp: datetime = Field(..., description="Check timestamp")
    uptime: float = Field(..., description="Seconds since the app was created")
    database: str = Field(..., description="Connected or Disconnected")
    version: str = Field(..., description="Service version")


class ErrorResponse(BaseModel):
    """Error response."""

    error: str = Field(..., description="Error message")
