#!/usr/bin/env python3
"""
URL Discovery Script

Lists the product URLs reachable from a category page, walking its
paginated continuations (?paged=N, /page/N/).

Usage:
    python3 discover_urls.py --url https://saltwaterpros.ca/product-category/corals/lps/torch/
    python3 discover_urls.py --url https://fragbox.ca/collections/torch --output data/fragbox.txt
"""

import argparse
import os

from coral_compare.common import load_scrape_settings, setup_logging
from coral_compare.discovery import LinkDiscoverer
from coral_compare.net import HttpFetcher, PacingPolicy


def main():
    parser = argparse.ArgumentParser(description="Discover product URLs from a category page")
    parser.add_argument(
        "--url", "-u",
        required=True,
        help="Category or collection page URL"
    )
    parser.add_argument(
        "--output", "-o",
        help="Output file for product URLs (default: print to stdout)"
    )
    parser.add_argument(
        "--max-pages",
        type=int,
        default=None,
        help="Maximum number of pages to walk (default: from scrape_settings.yaml)"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output"
    )

    args = parser.parse_args()
    setup_logging(verbose=args.verbose)

    settings = load_scrape_settings()
    max_pages = args.max_pages or settings["link_discovery_max_pages"]

    print("=" * 60)
    print("Product URL Discovery")
    print("=" * 60)
    print(f"  URL:       {args.url}")
    print(f"  Max pages: {max_pages}")

    with HttpFetcher(max_attempts=settings["max_fetch_attempts"]) as fetcher:
        discoverer = LinkDiscoverer(
            fetcher,
            max_pages=max_pages,
            pacing=PacingPolicy(settings["page_delay"], settings["page_jitter"]),
        )
        urls = discoverer.discover(args.url)

    if args.output:
        os.makedirs(os.path.dirname(args.output) or ".", exist_ok=True)
        discoverer.save_urls(args.output)
    else:
        print()
        for url in urls:
            print(url)

    stats = discoverer.get_stats()
    print("\n" + "=" * 60)
    print("Summary")
    print("=" * 60)
    print(f"  Pages fetched:  {stats['pages_fetched']}")
    print(f"  Products found: {stats['products_found']}")
    if args.output:
        print(f"  Output file:    {args.output}")
    print("=" * 60)


if __name__ == "__main__":
    main()
