"""Web interface routes implementation."""

import time
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Request, HTTPException, Query, status
from fastapi.responses import HTMLResponse, RedirectResponse

from shortener.errors import (
    AllocationExhaustedError,
    InvalidURLError,
    ShortIdNotFoundError,
    StoreError,
)
from shortener.common.headers import build_base_url
from shortener.common.url_builder import build_short_url, build_feedback_url
from shortener.common.validators import is_valid_short_id
from ..api.schemas import HealthResponse
from ..templating import templates, render_error

router = APIRouter()


def _base_url(request: Request) -> str:
    return build_base_url(
        headers=request.headers,
        fallback_base_url=request.app.state.config.base_url,
        request_scheme=request.url.scheme,
        request_host=request.headers.get("host"),
    )


async def _submitted_url(request: Request):
    """Read originalUrl from a JSON or form body."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            body = await request.json()
        except ValueError:
            # malformed JSON or a body that is not UTF-8
            return None
        value = body.get("originalUrl") if isinstance(body, dict) else None
    else:
        form = await request.form()
        value = form.get("originalUrl")
    return value if isinstance(value, str) else None


@router.get("/health", response_model=HealthResponse, include_in_schema=False)
async def health_check(request: Request):
    """Liveness and readiness probe."""
    service = request.app.state.service
    config = request.app.state.config

    connected = service is not None and await service.health_check()

    return HealthResponse(
        status="OK",
        timestamp=datetime.now(timezone.utc),
        uptime=round(time.monotonic() - request.app.state.started_at, 3),
        database="Connected" if connected else "Disconnected",
        version=config.app_version,
    )


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def homepage(
    request: Request,
    success: Optional[str] = None,
    short_id: Optional[str] = Query(None, alias="shortId"),
):
    """Home page with the shorten form, recent URLs and feedback for the last action."""
    service = request.app.state.service
    config = request.app.state.config
    logger = request.app.state.logger

    try:
        urls = await service.recent_urls(limit=config.recent_urls_limit)
        details = await service.get_record(short_id) if short_id else None
    except StoreError as e:
        logger.error(f"Error loading home page: {e}")
        return render_error(
            request,
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Server Error",
            "Unable to load the page. Please try again later.",
        )

    base_url = _base_url(request)
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "title": "Home",
            "base_url": base_url,
            "urls": urls,
            "success": success,
            "short_id": details.short_id if details else None,
            "short_url": build_short_url(details.short_id, base_url) if details else None,
            "original_url": details.original_url if details else None,
        },
    )


@router.post("/shorten", include_in_schema=False)
async def shorten_url(request: Request):
    """Handle form or JSON submission to create (or reuse) a short URL."""
    service = request.app.state.service
    logger = request.app.state.logger

    try:
        result = await service.shorten(await _submitted_url(request))
    except InvalidURLError as e:
        if not e.url:
            return render_error(request, status.HTTP_400_BAD_REQUEST, "Error", e.reason)
        return render_error(
            request,
            status.HTTP_400_BAD_REQUEST,
            "Invalid URL",
            "Please enter a valid URL (e.g., https://example.com)",
        )
    except (AllocationExhaustedError, StoreError) as e:
        logger.error(f"Error shortening URL: {e}")
        return render_error(
            request,
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Server Error",
            "Something went wrong while shortening your URL. Please try again.",
        )

    return RedirectResponse(
        url=build_feedback_url(result.outcome, result.short_id),
        status_code=status.HTTP_302_FOUND,
    )


@router.get("/{short_id}", include_in_schema=False)
async def redirect_to_url(request: Request, short_id: str):
    """Redirect to the original URL and count the click."""
    service = request.app.state.service
    logger = request.app.state.logger

    is_valid, _ = is_valid_short_id(short_id)
    if not is_valid:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)

    try:
        record = await service.resolve(short_id)
    except ShortIdNotFoundError:
        return render_error(
            request,
            status.HTTP_404_NOT_FOUND,
            "URL Not Found",
            "The shortened URL you're looking for doesn't exist or has been deactivated.",
        )
    except StoreError as e:
        logger.error(f"Error redirecting: {e}")
        return render_error(
            request,
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Server Error",
            "Something went wrong while redirecting. Please try again.",
        )

    # 302 so every visit comes back through here and is counted
    return RedirectResponse(url=record.original_url, status_code=status.HTTP_302_FOUND)
