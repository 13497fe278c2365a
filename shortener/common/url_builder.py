"""URL building utilities for URL shortener."""

from urllib.parse import urlencode


def build_short_url(short_id: str, base_url: str) -> str:
    """Build complete short URL.

    Args:
        short_id: The short ID
        base_url: Base URL (e.g., https://example.com)

    Returns:
        Complete short URL
    """
    return f"{base_url.rstrip('/')}/{short_id}"


def build_feedback_url(outcome: str, short_id: str) -> str:
    """Home page URL carrying the result of a shorten request."""
    return "/?" + urlencode({"success": outcome, "shortId": short_id})
