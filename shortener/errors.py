"""Exceptions raised by the URL shortener."""


class ShortenerError(Exception):
    """Base exception for URL shortener service."""
    pass


class InvalidURLError(ShortenerError, ValueError):
    """Raised when a submitted URL is missing or malformed."""

    def __init__(self, url: str, reason: str = "Invalid URL format"):
        self.url = url
        self.reason = reason
        super().__init__(f"{reason}: {url}" if url else reason)


class ShortIdNotFoundError(ShortenerError):
    """Raised when a short ID is unknown or has been deactivated."""

    def __init__(self, short_id: str):
        self.short_id = short_id
        super().__init__(f"Short ID '{short_id}' not found")


class AllocationExhaustedError(ShortenerError):
    """Raised when no free short ID was found within the attempt bound."""

    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__(f"Failed to generate unique short ID after {attempts} attempts")


class StoreError(ShortenerError):
    """Raised when a record store operation fails."""

    def __init__(self, message: str, original_error: Exception = None):
        self.original_error = original_error
        super().__init__(f"Store error: {message}")


class StoreUnavailableError(StoreError):
    """Raised when no record store could be reached."""


class DuplicateShortIdError(StoreError):
    """Raised by a store when the short ID is already taken."""

    def __init__(self, short_id: str, original_error: Exception = None):
        self.short_id = short_id
        super().__init__(f"short ID '{short_id}' already exists", original_error)
