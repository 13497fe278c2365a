#!/usr/bin/env python3
"""
Run the URL shortener web service.

Requests are served on uvicorn's event loop and every store call is async
(pymongo AsyncMongoClient or an asyncpg pool), so one process handles many
connections. Scale out by running more instances behind a load balancer,
each with its own store connection.

Usage:
    python app.py

Environment variables (see config.py for the full list):
    DATABASE_URL / MONGO_URI - mongodb://, postgresql:// or memory:// URL
    DB_PASSWORD - Fills a <db_password> placeholder in DATABASE_URL
    ENVIRONMENT / NODE_ENV - 'production' disables the local store fallback
    BASE_URL - Public base URL, also the production CORS origin
    PORT - Listen port (default 5000)
    LOG_LEVEL, LOG_FILE, LOG_JSON - Logging output
"""

import signal
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from config import Config, load_config
from shortener.allocator import IdentifierAllocator
from shortener.database.base import URLRecordStoreBase
from shortener.database.factory import connect_store
from shortener.errors import StoreUnavailableError
from shortener.service import URLShortenerService
from shortener.shortid import ShortIdGenerator
from shortener.common.logging_config import setup_logging
from web_app import create_app


def build_service(store: URLRecordStoreBase, config: Config, logger) -> URLShortenerService:
    """Wire the allocator and service over a connected store."""
    allocator = IdentifierAllocator(
        store,
        generator=ShortIdGenerator(default_length=config.short_id_length),
        max_attempts=config.max_allocation_attempts,
        logger=logger,
    )
    return URLShortenerService(store=store, allocator=allocator, logger=logger)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Connect the store on startup and close it on shutdown."""
    config = app.state.config
    logger = app.state.logger

    try:
        store = await connect_store(config, logger=logger)
    except StoreUnavailableError as e:
        # uvicorn reports the failed startup and main() exits with status 1
        logger.error(f"No reachable record store: {e}")
        raise

    app.state.store = store
    app.state.service = build_service(store, config, logger)
    logger.info(f"Ready, storing URLs in {store.backend_name}")

    yield

    await app.state.service.close()
    logger.info("Record store closed")


def main():
    config = load_config()
    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )
    logger.info(f"Smart URL Shortener {config.app_version} ({config.environment})")
    logger.debug(f"Configuration: {config.safe_dump()}")

    # store and service are attached by the lifespan, on the server's loop
    app = create_app(
        store_instance=None,
        service_instance=None,
        config=config,
        logger=logger,
    )
    app.router.lifespan_context = lifespan

    server = uvicorn.Server(uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
        access_log=False,
    ))

    def request_shutdown(signum, frame):
        logger.info(f"Signal {signum} received, shutting down")
        server.should_exit = True

    for signum in (signal.SIGINT, signal.SIGTERM):
        signal.signal(signum, request_shutdown)

    logger.info(f"Listening on {config.host}:{config.port}, links under {config.base_url}")
    try:
        server.run()
    except OSError as e:
        logger.error(f"Cannot start server: {e}")
        sys.exit(1)

    if not server.started:
        sys.exit(1)


if __name__ == "__main__":
    main()
