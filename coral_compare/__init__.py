"""
Coral Price Comparison Scraper

Modules:
    models          - Data models (Listing, SourceRow, RunReport, Shopify payload shapes)
    common          - Shared utilities (settings, config loader, logging, URL/text helpers)
    net             - HTTP fetching with retry/backoff and request pacing
    discovery       - Platform detection and product link discovery
    extraction      - Shopify and HTML (WooCommerce/Shopify) listing extraction
    classification  - Category rules (torch enforcement, variant matching)
    storage         - Listing store and source configuration backends
    catalog         - Read-side helpers for browsing stored listings
    web             - HTTP trigger endpoint
"""

__version__ = "0.3.0"
