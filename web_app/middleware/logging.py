"""Request logging middleware."""

import logging
import time
from typing import Callable, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from shortener.common.headers import client_address
from shortener.common.logging_config import get_logger


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log one line per request with status, latency and client address."""

    def __init__(self, app, logger: Optional[logging.Logger] = None):
        super().__init__(app)
        self.logger = logger or get_logger("web")

    async def dispatch(self, request: Request, call_next: Callable):
        started = time.perf_counter()
        client = client_address(request.headers, request.client.host if request.client else None)

        response = await call_next(request)

        elapsed_ms = (time.perf_counter() - started) * 1000
        self.logger.info(
            f"{client} {request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.1f}ms)"
        )
        return response
