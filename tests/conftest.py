"""Pytest configuration and fixtures."""

import pytest
from typing import AsyncGenerator

from httpx import ASGITransport, AsyncClient

from config import Config
from shortener.allocator import IdentifierAllocator
from shortener.database.memory import URLRecordStoreMemory
from shortener.service import URLShortenerService
from shortener.shortid import ShortIdGenerator
from shortener.common.logging_config import setup_logging
from web_app import create_app


class ScriptedGenerator(ShortIdGenerator):
    """Generator that hands out a fixed sequence of IDs, then random ones."""

    def __init__(self, ids, default_length: int = 8):
        super().__init__(default_length=default_length)
        self._ids = list(ids)

    def generate_random(self, length=None):
        if self._ids:
            return self._ids.pop(0)
        return super().generate_random(length)


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
async def store(logger) -> AsyncGenerator[URLRecordStoreMemory, None]:
    """Create connected in-memory store."""
    store = URLRecordStoreMemory(logger=logger)
    await store.connect()

    yield store

    await store.close()


@pytest.fixture
def short_id_generator():
    """Create short ID generator."""
    return ShortIdGenerator(default_length=8)


@pytest.fixture
def allocator(store, short_id_generator, logger):
    """Create allocator over the test store."""
    return IdentifierAllocator(store, generator=short_id_generator, max_attempts=10, logger=logger)


@pytest.fixture
def service(store, allocator, logger) -> URLShortenerService:
    """Create service instance."""
    return URLShortenerService(store=store, allocator=allocator, logger=logger)


@pytest.fixture
def config():
    """Test configuration."""
    return Config(
        database_url="memory://",
        base_url="http://testserver",
        environment="test",
    )


@pytest.fixture
def app(store, service, config, logger):
    """Create test FastAPI app."""
    return create_app(
        store_instance=store,
        service_instance=service,
        config=config,
        logger=logger,
    )


@pytest.fixture
async def client(app):
    """Create test client."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/test",
        "https://github.com/user/repo",
        "https://stackoverflow.com/questions/123456",
    ]
