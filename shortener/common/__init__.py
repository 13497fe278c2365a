"""Common utilities for URL shortener."""

from .validators import normalize_url, is_valid_url, is_valid_short_id
from .headers import extract_forwarded_headers, client_address, build_base_url
from .url_builder import build_short_url, build_feedback_url
from .logging_config import setup_logging, get_logger

__all__ = [
    "normalize_url",
    "is_valid_url",
    "is_valid_short_id",
    "extract_forwarded_headers",
    "client_address",
    "build_base_url",
    "build_short_url",
    "build_feedback_url",
    "setup_logging",
    "get_logger",
]
