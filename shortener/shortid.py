"""Short ID generation utilities."""

import secrets
import string
from typing import Optional


class ShortIdGenerator:
    """Generate random short IDs for URLs."""

    # URL-safe alphabet: a-zA-Z0-9 plus hyphen and underscore
    ALPHABET = string.ascii_letters + string.digits + "-_"

    # Bounds on configurable ID length
    MIN_LENGTH = 6
    MAX_LENGTH = 10

    def __init__(self, default_length: int = 8):
        """Initialize short ID generator.

        Args:
            default_length: Length of generated IDs
        """
        if not self.MIN_LENGTH <= default_length <= self.MAX_LENGTH:
            raise ValueError(
                f"Short ID length must be between {self.MIN_LENGTH} and {self.MAX_LENGTH}"
            )
        self.default_length = default_length

    def generate_random(self, length: Optional[int] = None) -> str:
        """Generate a random short ID from a cryptographically secure source.

        Args:
            length: Length of the ID (uses default if not specified)

        Returns:
            Random short ID
        """
        length = length or self.default_length
        return "".join(secrets.choice(self.ALPHABET) for _ in range(length))
