"""Configuration management for URL shortener."""

from typing import List, Optional
from pydantic_settings import BaseSettings
from pydantic import AliasChoices, Field


class Config(BaseSettings):
    """Application configuration."""

    # Store settings
    database_url: str = Field(
        default="mongodb://localhost:27017/urlshortener",
        validation_alias=AliasChoices("database_url", "mongo_uri"),
        description="Record store URL (mongodb://, postgresql:// or memory://)"
    )

    db_password: Optional[str] = Field(
        default=None,
        description="Substituted for a <db_password> placeholder in database_url"
    )

    fallback_database_url: Optional[str] = Field(
        default="mongodb://localhost:27017/urlshortener",
        description="Local store tried outside production when the primary is unreachable"
    )

    store_timeout_ms: int = Field(
        default=5000,
        ge=100,
        description="Store connection timeout in milliseconds"
    )

    environment: str = Field(
        default="development",
        validation_alias=AliasChoices("environment", "app_env", "node_env"),
        description="Deployment environment (development, production, ...)"
    )

    # Server settings
    host: str = Field(
        default="0.0.0.0",
        description="Host to bind to"
    )

    port: int = Field(
        default=5000,
        description="Port to listen on"
    )

    base_url: str = Field(
        default="http://localhost:5000",
        description="Base URL for displaying short URLs and the production CORS origin"
    )

    app_version: str = Field(
        default="1.0.0",
        description="Version reported by /health"
    )

    # Allocation settings
    short_id_length: int = Field(
        default=8,
        ge=6,
        le=10,
        description="Length of generated short IDs"
    )

    max_allocation_attempts: int = Field(
        default=10,
        ge=1,
        description="Maximum attempts to find a free short ID"
    )

    # Listing settings
    recent_urls_limit: int = Field(
        default=10,
        ge=1,
        description="Recent URLs shown on the home page"
    )

    default_page_size: int = Field(
        default=10,
        ge=1,
        description="Page size for /api/urls when limit is missing or invalid"
    )

    max_page_size: int = Field(
        default=100,
        ge=1,
        description="Largest page size /api/urls will serve"
    )

    # Logging settings
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    log_file: Optional[str] = Field(
        default=None,
        description="Log file path (logs to stdout if not specified)"
    )

    log_json: bool = Field(
        default=False,
        description="Use JSON format for logs"
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
        "populate_by_name": True,
    }

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def cors_origins(self) -> List[str]:
        """Origins allowed to make credentialed cross-site requests."""
        if self.is_production:
            return [self.base_url.rstrip("/")]
        return ["http://localhost:3000", "http://localhost:5000"]

    def resolved_database_url(self) -> str:
        """database_url with the <db_password> placeholder filled in."""
        if "<db_password>" in self.database_url:
            return self.database_url.replace("<db_password>", self.db_password or "")
        return self.database_url

    def safe_dump(self) -> dict:
        """Settings for logging, with secrets masked."""
        data = self.model_dump()
        data["database_url"] = "****" if self.db_password or "@" in self.database_url else self.database_url
        data["db_password"] = "****" if self.db_password else None
        return data


def load_config() -> Config:
    """Load configuration from environment."""
    return Config()
