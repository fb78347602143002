#!/usr/bin/env python3
"""
Single Product Extraction

Extracts one product page into a listing and prints a validation report.
Shopify product URLs go through the product JSON endpoint first; other
pages are parsed as WooCommerce or Shopify HTML.

Usage:
    python3 extract_single.py --url https://fragbox.ca/products/holy-grail-torch --shop fragbox --category torch
    python3 extract_single.py --url https://saltwaterpros.ca/product/dragon-soul-torch/ --json
"""

import argparse
import json
import sys

from coral_compare.catalog import discount_percent, unit_label
from coral_compare.common import domain_of, setup_logging
from coral_compare.extraction import ListingValidator
from coral_compare.models import Listing, SourceRow
from coral_compare.net import FetchError, HttpFetcher
from coral_compare.orchestrator import ScrapeOrchestrator
from coral_compare.storage import InMemoryListingStore, YamlSourceRepository


def print_report(listing: Listing, errors: list):
    """Print the extracted fields and validation result."""
    print("\n" + "=" * 80)
    print("EXTRACTION REPORT")
    print("=" * 80)

    fields = [
        ("Shop", listing.shop_id),
        ("Category", listing.category),
        ("Title", listing.title_raw),
        ("URL", listing.url),
        ("Image", listing.image_url),
        ("Price (CAD)", listing.price_cad),
        ("Sale price (CAD)", listing.sale_price_cad),
        ("Status", listing.status),
        ("Variant", listing.variant),
        ("Sale mode", listing.sale_mode),
        ("Unit", unit_label(listing)),
    ]
    for label, value in fields:
        status = "OK" if value not in (None, "") else "EMPTY"
        print(f"  [{status:5}] {label:18} {value if value not in (None, '') else '-'}")

    pct = discount_percent(listing)
    if pct:
        print(f"\n  On sale: {pct}% off")

    print("\n" + "-" * 80)
    if errors:
        print("VALIDATION ERRORS (listing would be discarded):")
        for error in errors:
            print(f"  - {error}")
    else:
        print("Listing is valid")
    print("=" * 80)


def main():
    parser = argparse.ArgumentParser(description="Extract a single product with validation report")
    parser.add_argument("--url", "-u", required=True, help="Product page URL")
    parser.add_argument("--shop", help="Shop id (default: domain without TLD)")
    parser.add_argument("--category", "-c", default="torch", help="Category (default: torch)")
    parser.add_argument("--json", action="store_true", help="Print the listing as JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    args = parser.parse_args()

    setup_logging(verbose=args.verbose)

    shop_id = args.shop or domain_of(args.url).split(".")[0]
    source = SourceRow(url=args.url, shop_id=shop_id, category=args.category.lower())

    with HttpFetcher() as fetcher:
        orchestrator = ScrapeOrchestrator(InMemoryListingStore(), YamlSourceRepository(), fetcher)
        try:
            listing = orchestrator.extract_link(args.url, source)
        except FetchError as e:
            print(f"Fetch failed: {e}", file=sys.stderr)
            sys.exit(1)

    if listing is None:
        print("No product found at this URL", file=sys.stderr)
        sys.exit(1)

    errors = ListingValidator().errors(listing)
    if args.json:
        print(json.dumps({"listing": listing.to_record(), "errors": errors}, indent=2, ensure_ascii=False))
    else:
        print_report(listing, errors)

    sys.exit(1 if errors else 0)


if __name__ == "__main__":
    main()
