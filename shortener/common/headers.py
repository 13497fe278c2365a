"""Reverse-proxy header handling."""

from typing import Mapping, NamedTuple, Optional


class ForwardedHeaders(NamedTuple):
    """First hop of each X-Forwarded-* header, or None when absent."""

    proto: Optional[str]
    host: Optional[str]
    client: Optional[str]


def first_hop(value: Optional[str]) -> Optional[str]:
    """Leftmost entry of a comma-separated proxy chain."""
    if not value:
        return None
    return value.split(",")[0].strip() or None


def extract_forwarded_headers(headers: Mapping[str, str]) -> ForwardedHeaders:
    """Read X-Forwarded-Proto/Host/For regardless of header name case."""
    lowered = {name.lower(): value for name, value in headers.items()}
    return ForwardedHeaders(
        proto=first_hop(lowered.get("x-forwarded-proto")),
        host=first_hop(lowered.get("x-forwarded-host")),
        client=first_hop(lowered.get("x-forwarded-for")),
    )


def client_address(headers: Mapping[str, str], peer: Optional[str] = None) -> str:
    """Originating client IP, preferring X-Forwarded-For over the socket peer."""
    return extract_forwarded_headers(headers).client or peer or "unknown"


def build_base_url(
    headers: Mapping[str, str],
    fallback_base_url: str,
    request_scheme: Optional[str] = None,
    request_host: Optional[str] = None,
) -> str:
    """Base URL that short links are shown under, without a trailing slash.

    Uses the proxy's X-Forwarded-Proto and X-Forwarded-Host when both are
    present, then the request's own scheme and host, then BASE_URL.
    """
    forwarded = extract_forwarded_headers(headers)

    if forwarded.proto and forwarded.host:
        return f"{forwarded.proto}://{forwarded.host}"
    if request_scheme and request_host:
        return f"{request_scheme}://{request_host}"
    return fallback_base_url.rstrip("/")
