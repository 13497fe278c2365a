"""FastAPI application factory."""

import logging
import os
import time
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from shortener.common.logging_config import get_logger
from .api import api_router
from .web import web_router
from .middleware.headers import SecurityHeadersMiddleware
from .middleware.logging import LoggingMiddleware
from .templating import render_error


def _is_api_request(request: Request) -> bool:
    return request.url.path.startswith("/api/")


def _register_error_handlers(app: FastAPI) -> None:
    """Render errors as pages for browsers and as {"error": ...} under /api."""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if _is_api_request(request):
            return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)

        if exc.status_code == status.HTTP_404_NOT_FOUND:
            return render_error(request, exc.status_code, "Page Not Found", "The page you're looking for doesn't exist.")
        return render_error(request, exc.status_code, "Error", str(exc.detail))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        request.app.state.logger.exception(f"Unhandled error: {exc}")
        config = request.app.state.config

        if _is_api_request(request):
            return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": "Server error"})

        message = (
            "Something went wrong on our end. Please try again later."
            if config.is_production
            else str(exc)
        )
        return render_error(request, status.HTTP_500_INTERNAL_SERVER_ERROR, "Server Error", message)


def create_app(
    store_instance,
    service_instance,
    config,
    logger: Optional[logging.Logger] = None,
) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        store_instance: Record store (None until the lifespan connects it)
        service_instance: Service instance (None until the lifespan builds it)
        config: Configuration instance
        logger: Optional logger

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="Smart URL Shortener",
        description="Shorten long URLs and track clicks",
        version=config.app_version,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
    )

    # Routes read their dependencies from app state
    app.state.store = store_instance
    app.state.service = service_instance
    app.state.config = config
    app.state.logger = logger or get_logger()
    app.state.started_at = time.monotonic()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(LoggingMiddleware)

    _register_error_handlers(app)

    css_path = os.path.join(os.path.dirname(__file__), "..", "ux", "web", "css")
    if os.path.exists(css_path):
        app.mount("/css", StaticFiles(directory=css_path), name="css")

    # API first so /{short_id} doesn't shadow /api paths
    app.include_router(api_router, prefix="/api", tags=["API"])
    app.include_router(web_router, tags=["Web"])

    return app
