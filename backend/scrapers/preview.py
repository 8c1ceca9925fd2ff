#!/usr/bin/env python3
"""
Preview what the scrapers extract from the live sites.

Usage:
    cd backend
    python -m scrapers.preview [site_key]

Examples:
    python -m scrapers.preview seloger          # One site
    python -m scrapers.preview --all            # Full aggregation
    python -m scrapers.preview --list           # List all scrapers
    python -m scrapers.preview kyero --json     # Dump records as JSON
"""

import asyncio
import argparse
import logging
import json

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

from scrapers.manager import ScraperManager, SCRAPER_REGISTRY
from scrapers.config import get_site_config, get_site_summary


def print_records(records, limit: int, as_json: bool = False):
    if as_json:
        print(json.dumps([r.to_dict() for r in records[:limit]], indent=2, ensure_ascii=False))
        return

    for i, record in enumerate(records[:limit]):
        print(f"\n--- {i+1}. [{record.site}] {record.link_text or '(no title)'} ---")
        print(f"  Price: {record.price}")
        print(f"  Location: {record.location}")
        print(f"  Beds/Baths: {record.info_beds} / {record.info_bath}")
        print(f"  Area/Land: {record.info_habitable} / {record.info_land}")
        print(f"  Link: {record.link}")
        print(f"  Images: {len(record.images)} found")

    if len(records) > limit:
        print(f"\n... and {len(records) - limit} more records")


async def preview_site(site_key: str, limit: int, as_json: bool):
    """Run one scraper, enabled or not."""
    config = get_site_config(site_key)
    print(f"\n{'='*60}")
    print(f"Site: {config.site} ({config.scraper_type.value})")
    print(f"URL: {config.listing_url}")
    print(f"{'='*60}")

    scraper = SCRAPER_REGISTRY[site_key]()
    records = await scraper.fetch_listings()
    print(f"\nFound {len(records)} records")
    print_records(records, limit, as_json)


async def preview_all(limit: int, as_json: bool):
    manager = ScraperManager()
    records = await manager.aggregate()
    print(json.dumps(manager.get_results_summary(), indent=2, default=str))
    print_records(records, limit, as_json)


def list_scrapers():
    """List all configured scrapers."""
    print(f"\n{'='*60}")
    print("Available Scrapers")
    print(f"{'='*60}\n")

    for site in get_site_summary():
        status = "✅" if site['enabled'] else "⏳"
        impl = "IMPL" if site['key'] in SCRAPER_REGISTRY else "TODO"
        print(f"{status} [{impl}] {site['key']:16} - {site['site']}")
        print(f"                  Type: {site['type']}")
        print()


async def main():
    parser = argparse.ArgumentParser(description='Preview scraper output')
    parser.add_argument('site_key', nargs='?', help='Site key to run (e.g., seloger)')
    parser.add_argument('--list', action='store_true', help='List all scrapers')
    parser.add_argument('--all', action='store_true', help='Run the full aggregation')
    parser.add_argument('--limit', type=int, default=5, help='Records to print')
    parser.add_argument('--json', action='store_true', help='Print records as JSON')

    args = parser.parse_args()

    if args.list:
        list_scrapers()
        return

    if args.all:
        await preview_all(args.limit, args.json)
        return

    if not args.site_key:
        parser.print_help()
        print("\nExample: python -m scrapers.preview seloger")
        return

    await preview_site(args.site_key.lower(), args.limit, args.json)


if __name__ == '__main__':
    asyncio.run(main())
