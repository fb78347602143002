"""
Listing extraction.

Modules:
    shopify_extractor - ShopifyExtractor for .js and /products.json payloads
    html_extractor - HtmlExtractor for Shopify and WooCommerce product pages
    variant_selector - one-listing-per-product variant selection
    validator - ListingValidator applied before persistence
    parsers - Specialized parsers for different data sources
"""

from .html_extractor import HtmlExtractor
from .parsers import (
    AnalyticsDataParser,
    ImageSelector,
    StructuredDataParser,
    WooCommercePageParser,
    is_bad_image_url,
)
from .shopify_extractor import PartialCatalogError, ShopifyExtractor, product_handle, product_js_url
from .validator import ListingValidator
from .variant_selector import build_listing, price_variant, select_best_variant

__all__ = [
    # Extractors
    'ShopifyExtractor',
    'PartialCatalogError',
    'HtmlExtractor',
    'product_handle',
    'product_js_url',
    # Variant selection
    'build_listing',
    'price_variant',
    'select_best_variant',
    # Validator
    'ListingValidator',
    # Parsers
    'AnalyticsDataParser',
    'ImageSelector',
    'StructuredDataParser',
    'WooCommercePageParser',
    'is_bad_image_url',
]
