#!/usr/bin/env python3
"""
Create the indexes (MongoDB) or table (PostgreSQL) the URL shortener needs.

The service also does this on startup; run this ahead of a deploy to keep the
first request from paying for it.

Usage:
    python init_database.py --db-url mongodb://localhost:27017/urlshortener
"""

import argparse
import asyncio
import sys
import os

# Add parent directories to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from config import load_config
from shortener.database.factory import create_store
from shortener.errors import StoreError
from shortener.common.logging_config import setup_logging


async def main():
    config = load_config()

    parser = argparse.ArgumentParser(description="Initialize record store indexes")
    parser.add_argument(
        "--db-url",
        default=config.resolved_database_url(),
        help="Record store URL (default: DATABASE_URL / MONGO_URI)"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    args = parser.parse_args()

    logger = setup_logging(level="DEBUG" if args.verbose else "INFO")

    store = create_store(args.db_url, timeout_ms=config.store_timeout_ms, logger=logger)
    try:
        logger.info(f"Connecting to {store.backend_name}...")
        # connect() creates indexes before returning
        await store.connect()
        logger.info("Indexes initialized successfully")

        if not await store.health_check():
            logger.error("Store health check failed")
            return 1
        logger.info("Store health check passed")

        return 0

    except StoreError as e:
        logger.error(f"Error initializing store: {e}")
        return 1

    finally:
        await store.close()


if __name__ == "__main__":
    exit_code = asyncio.run(main())
    sys.exit(exit_code)
