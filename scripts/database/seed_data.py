#!/usr/bin/env python3
"""
Fill a record store with sample short URLs and some clicks, for local demos.

Usage:
    python seed_data.py --db-url mongodb://localhost:27017/urlshortener --count 25
"""

import argparse
import asyncio
import itertools
import os
import random
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from config import load_config
from shortener.database.factory import create_store
from shortener.errors import ShortenerError
from shortener.service import URLShortenerService
from shortener.common.logging_config import setup_logging

SAMPLE_SITES = [
    "https://docs.python.org/3/library/",
    "https://fastapi.tiangolo.com/tutorial/",
    "https://www.mongodb.com/docs/manual/indexes/",
    "https://www.postgresql.org/docs/current/",
    "https://en.wikipedia.org/wiki/",
    "https://developer.mozilla.org/en-US/docs/Web/HTTP/",
]

SAMPLE_PAGES = ["overview", "getting-started", "reference", "faq", "changelog"]


async def seed(service: URLShortenerService, count: int, max_clicks: int, logger) -> int:
    """Shorten `count` sample URLs and redirect through each a random number of times."""
    combos = itertools.cycle(itertools.product(SAMPLE_SITES, SAMPLE_PAGES))
    created = 0

    for n in range(count):
        site, page = next(combos)
        # run number keeps repeats of a combination from being deduplicated
        url = f"{site}{page}?seed={n}"
        try:
            result = await service.shorten(url)
            for _ in range(random.randint(0, max_clicks)):
                await service.resolve(result.short_id)
        except ShortenerError as e:
            logger.warning(f"Skipping {url}: {e}")
            continue

        created += int(result.is_new)
        logger.debug(f"{result.outcome}: {result.short_id} -> {url}")

    return created


async def main():
    config = load_config()

    parser = argparse.ArgumentParser(description="Seed sample short URLs")
    parser.add_argument(
        "--db-url",
        default=config.resolved_database_url(),
        help="Record store URL (default: DATABASE_URL / MONGO_URI)"
    )
    parser.add_argument("--count", type=int, default=10, help="Number of URLs to shorten")
    parser.add_argument("--max-clicks", type=int, default=5, help="Upper bound of redirects per URL")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every URL")
    args = parser.parse_args()

    logger = setup_logging(level="DEBUG" if args.verbose else "INFO")
    store = create_store(args.db_url, timeout_ms=config.store_timeout_ms, logger=logger)

    try:
        await store.connect()
        service = URLShortenerService(store=store, logger=logger)

        created = await seed(service, args.count, args.max_clicks, logger)
        stats = await service.get_statistics()
        logger.info(
            f"Created {created} URLs; store now holds {stats['total_urls']} "
            f"({stats['active_urls']} active, {stats['total_clicks']} clicks)"
        )
        return 0
    except ShortenerError as e:
        logger.error(f"Seeding failed: {e}")
        return 1
    finally:
        await store.close()


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
