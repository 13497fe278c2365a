"""Pick and connect a record store from a connection URL."""

import logging
from typing import Optional
from urllib.parse import urlparse

from .base import URLRecordStoreBase
from .memory import URLRecordStoreMemory
from .mongo import URLRecordStoreMongo
from .postgres import URLRecordStorePostgres
from ..errors import StoreUnavailableError


def create_store(
    db_url: str,
    timeout_ms: int = 5000,
    logger: Optional[logging.Logger] = None,
) -> URLRecordStoreBase:
    """Build an unconnected store for the URL's scheme.

    Args:
        db_url: mongodb://, mongodb+srv://, postgresql:// or memory:// URL
        timeout_ms: Connection timeout in milliseconds
        logger: Optional logger

    Returns:
        Store instance

    Raises:
        ValueError: If the scheme is not supported
    """
    scheme = urlparse(db_url).scheme.lower()

    if scheme in ("mongodb", "mongodb+srv"):
        return URLRecordStoreMongo(db_url, timeout_ms=timeout_ms, logger=logger)
    if scheme in ("postgresql", "postgres"):
        return URLRecordStorePostgres(
            db_url,
            connection_timeout_seconds=max(1, timeout_ms // 1000),
            logger=logger,
        )
    if scheme == "memory":
        return URLRecordStoreMemory(db_url, logger=logger)

    raise ValueError(f"Unsupported database URL scheme: '{scheme}'")


def _redact(db_url: str) -> str:
    """Hide the password in a connection URL for logging."""
    parsed = urlparse(db_url)
    if parsed.password:
        return db_url.replace(f":{parsed.password}@", ":****@", 1)
    return db_url


async def connect_store(config, logger: Optional[logging.Logger] = None) -> URLRecordStoreBase:
    """Connect the configured store, falling back to the local default outside production.

    Args:
        config: Application configuration
        logger: Optional logger

    Returns:
        Connected store

    Raises:
        StoreUnavailableError: If neither the primary nor the fallback store is reachable
    """
    logger = logger or logging.getLogger(__name__)
    primary_url = config.resolved_database_url()

    logger.info(f"Connecting to store at {_redact(primary_url)}")
    store = create_store(primary_url, timeout_ms=config.store_timeout_ms, logger=logger)
    try:
        await store.connect()
        return store
    except StoreUnavailableError as e:
        logger.error(f"Store connection error: {e}")
        if config.is_production or not config.fallback_database_url:
            raise

    logger.info(f"Attempting local store connection at {_redact(config.fallback_database_url)}")
    fallback = create_store(config.fallback_database_url, timeout_ms=config.store_timeout_ms, logger=logger)
    try:
        await fallback.connect()
    except StoreUnavailableError as e:
        logger.error(f"Local store connection failed: {e}")
        raise

    logger.info("Local store connected successfully")
    return fallback
