"""Validation utilities for URL shortener."""

import ipaddress
import re
from urllib.parse import urlparse
from typing import Tuple

MAX_URL_LENGTH = 2048

_LABEL = re.compile(r"^(?!-)[A-Za-z0-9-]{1,63}(?<!-)$")
# alphabetic, or the punycode form of an internationalized TLD
_TLD = re.compile(r"^(?:[A-Za-z]{2,63}|xn--[A-Za-z0-9-]{2,59})$")
_SHORT_ID = re.compile(r"^[A-Za-z0-9_-]{6,10}$")


def normalize_url(url: str) -> str:
    """Trim a submitted URL and default it to https when no protocol is given."""
    normalized = (url or "").strip()
    if normalized and not normalized.startswith(("http://", "https://")):
        normalized = "https://" + normalized
    return normalized


def _is_valid_host(host: str) -> bool:
    try:
        ipaddress.IPv4Address(host)
        return True
    except ValueError:
        pass

    # internationalized hosts are checked in their ASCII (punycode) form
    try:
        host = host.rstrip(".").encode("idna").decode("ascii")
    except UnicodeError:
        return False

    labels = host.split(".")
    if len(labels) < 2 or not _TLD.match(labels[-1]):
        return False
    return all(_LABEL.match(label) for label in labels)


def is_valid_url(url: str) -> Tuple[bool, str]:
    """Validate a URL.

    Args:
        url: The URL to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not url or not isinstance(url, str):
        return False, "URL is required"

    if len(url) > MAX_URL_LENGTH:
        return False, f"URL is too long (max {MAX_URL_LENGTH} characters)"

    if any(c.isspace() for c in url):
        return False, "URL must not contain whitespace"

    try:
        result = urlparse(url)

        if result.scheme not in ["http", "https"]:
            return False, "URL must use http or https protocol"

        if not result.netloc or not result.hostname:
            return False, "URL must have a valid domain"

        # raises ValueError on a non-numeric port
        result.port

        if not _is_valid_host(result.hostname):
            return False, "URL must have a valid domain"

        return True, ""

    except ValueError as e:
        return False, f"Invalid URL format: {str(e)}"


def is_valid_short_id(short_id: str) -> Tuple[bool, str]:
    """Validate a short ID as accepted by the redirect route.

    Args:
        short_id: The short ID to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not short_id or not isinstance(short_id, str):
        return False, "Short ID is required"

    if not _SHORT_ID.match(short_id):
        return False, "Short ID must be 6-10 letters, numbers, hyphens or underscores"

    return True, ""
