#!/usr/bin/env python3
"""
Local Scrape Runner

Runs the scrape pipeline in-process and prints the JSON run report.

By default listings are written to Supabase and sources are read from
the scrape_sources table, exactly as the deployed endpoint does. With
--dry-run, sources come from config/sources.yaml and listings are kept
in memory.

Usage:
    python3 scripts/scrape_local.py --dry-run
    python3 scripts/scrape_local.py --dry-run --source https://fragbox.ca/collections/torch
    python3 scripts/scrape_local.py --dry-run --show 20
    python3 scripts/scrape_local.py
"""

import argparse
import json
import logging
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from coral_compare.catalog import display_price, shop_label, sort_listings, unit_label
from coral_compare.common.log_config import setup_logging
from coral_compare.common.settings import Settings
from coral_compare.orchestrator import build_orchestrator, build_pipeline
from coral_compare.storage import InMemoryListingStore, ListingQuery, YamlSourceRepository

logger = logging.getLogger(__name__)


def print_listings(store: InMemoryListingStore, limit: int):
    """Print the cheapest listings of a dry run."""
    listings = sort_listings(store.query(ListingQuery(limit=None)), "price_asc")[:limit]
    print("\n" + "-" * 80)
    for listing in listings:
        price = display_price(listing)
        price_text = f"${price:,.2f}" if price is not None else "-"
        print(f"  {price_text:>10}  {shop_label(listing):16} {listing.title_raw[:40]:40} {unit_label(listing)}")
    print("-" * 80)


def main() -> int:
    parser = argparse.ArgumentParser(description="Run the scrape pipeline locally")
    parser.add_argument("--dry-run", action="store_true",
                        help="Use config/sources.yaml and an in-memory store")
    parser.add_argument("--source", help="Only scrape the source with this URL")
    parser.add_argument("--show", type=int, default=0,
                        help="With --dry-run, print the N cheapest listings")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    parser.add_argument("--quiet", "-q", action="store_true", help="Only warnings and errors")
    args = parser.parse_args()

    setup_logging(verbose=args.verbose, quiet=args.quiet)

    if args.dry_run:
        store = InMemoryListingStore()
        orchestrator = build_pipeline(store, YamlSourceRepository())
    else:
        try:
            orchestrator = build_orchestrator(Settings.from_env())
        except RuntimeError as e:
            logger.error("%s", e)
            return 1

    try:
        report = orchestrator.run(only_url=args.source)
    except Exception as e:
        logger.exception("Run failed")
        print(json.dumps({"ok": False, "error": str(e)}, indent=2))
        return 1
    finally:
        orchestrator.fetcher.close()

    print(json.dumps(report.to_dict(), indent=2, ensure_ascii=False))

    if args.dry_run and args.show:
        print_listings(store, args.show)

    return 0


if __name__ == "__main__":
    sys.exit(main())
