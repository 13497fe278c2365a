"""API routes implementation."""

from typing import Optional

from fastapi import APIRouter, Request, HTTPException, status

from .schemas import (
    StatsResponse,
    URLItem,
    URLListResponse,
    Pagination,
    ErrorResponse,
)
from shortener.errors import ShortIdNotFoundError, StoreError

router = APIRouter()


def _parse_positive_int(value: Optional[str], default: int) -> int:
    """Parse a query value, falling back to default when missing or not a positive integer."""
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return default
    return parsed if parsed > 0 else default


@router.get(
    "/stats/{short_id}",
    response_model=StatsResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Short ID not found"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
    summary="Get URL statistics",
    description="Click statistics for an active short URL. Does not count as a click.",
)
async def get_url_stats(request: Request, short_id: str):
    """Get statistics for a short URL."""
    service = request.app.state.service

    try:
        record = await service.get_stats(short_id)
    except ShortIdNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="URL not found")
    except StoreError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Server error")

    return StatsResponse.from_record(record)


@router.get(
    "/urls",
    response_model=URLListResponse,
    responses={
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
    summary="List URLs",
    description="Active short URLs, most recent first.",
)
async def list_urls(request: Request, page: Optional[str] = None, limit: Optional[str] = None):
    """List active URLs with pagination."""
    service = request.app.state.service
    config = request.app.state.config

    page_number = _parse_positive_int(page, 1)
    page_size = min(_parse_positive_int(limit, config.default_page_size), config.max_page_size)

    try:
        result = await service.list_urls(page=page_number, limit=page_size)
    except StoreError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Server error")

    return URLListResponse(
        urls=[URLItem.from_record(record) for record in result.urls],
        pagination=Pagination(
            current_page=result.current_page,
            total_pages=result.total_pages,
            total_urls=result.total_urls,
            has_next=result.has_next,
            has_prev=result.has_prev,
        ),
    )
