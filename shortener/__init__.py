"""Core business logic for URL shortener."""

from .shortid import ShortIdGenerator
from .allocator import Allocation, IdentifierAllocator
from .service import URLShortenerService, ShortenResult, Page

__all__ = [
    "ShortIdGenerator",
    "Allocation",
    "IdentifierAllocator",
    "URLShortenerService",
    "ShortenResult",
    "Page",
]
