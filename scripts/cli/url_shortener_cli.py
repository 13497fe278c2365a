#!/usr/bin/env python3
"""
Command-line interface for URL shortener administration.

Usage:
    python url_shortener_cli.py shorten <url>
    python url_shortener_cli.py get <short_id>
    python url_shortener_cli.py stats <short_id>
    python url_shortener_cli.py list [--page N] [--limit N]
    python url_shortener_cli.py deactivate <short_id>
    python url_shortener_cli.py health
"""

import argparse
import asyncio
import json
import sys
import os
from typing import Optional

# Add parent directories to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from config import load_config
from shortener.allocator import IdentifierAllocator
from shortener.database.factory import create_store
from shortener.errors import ShortenerError, ShortIdNotFoundError
from shortener.service import URLShortenerService
from shortener.shortid import ShortIdGenerator
from shortener.common.logging_config import setup_logging


def _print_json(payload: dict, error: bool = False) -> None:
    print(json.dumps(payload, indent=2), file=sys.stderr if error else sys.stdout)


class URLShortenerCLI:
    """Command-line interface for URL shortener."""

    def __init__(self, db_url: Optional[str] = None, verbose: bool = False):
        """Initialize CLI."""
        self.config = load_config()
        self.db_url = db_url or self.config.resolved_database_url()
        self.logger = setup_logging(level="DEBUG" if verbose else "WARNING")
        self.store = None
        self.service = None

    async def initialize(self):
        """Connect the store and build the service."""
        self.store = create_store(
            self.db_url,
            timeout_ms=self.config.store_timeout_ms,
            logger=self.logger,
        )
        await self.store.connect()

        allocator = IdentifierAllocator(
            self.store,
            generator=ShortIdGenerator(default_length=self.config.short_id_length),
            max_attempts=self.config.max_allocation_attempts,
            logger=self.logger,
        )
        self.service = URLShortenerService(store=self.store, allocator=allocator, logger=self.logger)

    async def cleanup(self):
        """Cleanup resources."""
        if self.service:
            await self.service.close()

    async def shorten(self, url: str):
        """Shorten a URL."""
        result = await self.service.shorten(url)
        _print_json({
            "success": True,
            "shortId": result.short_id,
            "originalUrl": result.original_url,
            "isNew": result.is_new,
        })
        return 0

    async def get(self, short_id: str):
        """Show a record, including inactive ones. Does not count a click."""
        record = await self.service.get_record(short_id)
        if record is None:
            raise ShortIdNotFoundError(short_id)
        _print_json({"success": True, **record.to_dict()})
        return 0

    async def stats(self, short_id: str):
        """Show click statistics for an active record."""
        record = await self.service.get_stats(short_id)
        _print_json({
            "success": True,
            "shortId": record.short_id,
            "originalUrl": record.original_url,
            "clicks": record.clicks,
            "createdAt": record.created_at.isoformat(),
            "lastClicked": record.last_clicked.isoformat() if record.last_clicked else None,
        })
        return 0

    async def list_urls(self, page: int = 1, limit: int = 10):
        """List active URLs, most recent first."""
        result = await self.service.list_urls(page=page, limit=limit)
        _print_json({
            "success": True,
            "page": result.current_page,
            "totalPages": result.total_pages,
            "totalUrls": result.total_urls,
            "urls": [record.to_dict() for record in result.urls],
        })
        return 0

    async def deactivate(self, short_id: str):
        """Soft-delete a short URL."""
        if not await self.service.deactivate(short_id):
            raise ShortIdNotFoundError(short_id)
        _print_json({"success": True, "shortId": short_id, "isActive": False})
        return 0

    async def health(self):
        """Check store health and show statistics."""
        healthy = await self.service.health_check()
        stats = await self.service.get_statistics()
        _print_json({"success": healthy, "database": "Connected" if healthy else "Disconnected", "statistics": stats})
        return 0 if healthy else 1


async def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="URL Shortener CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Shorten a URL
  %(prog)s shorten example.com/long/url

  # Show a record
  %(prog)s get V1StGXR8

  # Hide a URL from redirects and listings
  %(prog)s deactivate V1StGXR8

  # List the second page of URLs
  %(prog)s list --page 2 --limit 20
        """
    )

    parser.add_argument(
        "--db-url",
        default=None,
        help="Record store URL (default: DATABASE_URL / MONGO_URI from the environment)"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output"
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    shorten_parser = subparsers.add_parser("shorten", help="Shorten a URL")
    shorten_parser.add_argument("url", help="URL to shorten")

    get_parser = subparsers.add_parser("get", help="Show a record")
    get_parser.add_argument("short_id", help="Short ID to lookup")

    stats_parser = subparsers.add_parser("stats", help="Get URL statistics")
    stats_parser.add_argument("short_id", help="Short ID to get stats for")

    list_parser = subparsers.add_parser("list", help="List active URLs")
    list_parser.add_argument("--page", type=int, default=1, help="Page number")
    list_parser.add_argument("--limit", type=int, default=10, help="Page size")

    deactivate_parser = subparsers.add_parser("deactivate", help="Deactivate a short URL")
    deactivate_parser.add_argument("short_id", help="Short ID to deactivate")

    subparsers.add_parser("health", help="Check store health")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 1

    cli = URLShortenerCLI(db_url=args.db_url, verbose=args.verbose)

    try:
        await cli.initialize()

        if args.command == "shorten":
            return await cli.shorten(args.url)
        elif args.command == "get":
            return await cli.get(args.short_id)
        elif args.command == "stats":
            return await cli.stats(args.short_id)
        elif args.command == "list":
            return await cli.list_urls(args.page, args.limit)
        elif args.command == "deactivate":
            return await cli.deactivate(args.short_id)
        elif args.command == "health":
            return await cli.health()
        else:
            parser.print_help()
            return 1

    except ShortenerError as e:
        _print_json({"success": False, "error": str(e)}, error=True)
        return 1

    finally:
        await cli.cleanup()


if __name__ == "__main__":
    exit_code = asyncio.run(main())
    sys.exit(exit_code)
