"""
Specialized parsers for product data extraction.

Each parser handles a specific data source:
- shopify_json: /products/{handle}.js, /products.json and analytics payloads
- StructuredDataParser: JSON-LD structured data (schema.org)
- AnalyticsDataParser: inline ShopifyAnalytics meta object
- meta_tags: Open Graph and itemprop price/title/image tags
- WooCommercePageParser: WooCommerce HTML element extraction
- ImageSelector: product image selection with bad-image rejection
"""

from .analytics_data import AnalyticsDataParser
from .image_selector import ImageSelector, is_bad_image_url
from .meta_tags import extract_meta_price, extract_og_images, extract_og_title
from .shopify_json import (
    parse_analytics_product,
    parse_catalog_page,
    parse_catalog_product,
    parse_product_js,
)
from .structured_data import StructuredDataParser
from .woocommerce import WooCommercePageParser, looks_like_woocommerce

__all__ = [
    'AnalyticsDataParser',
    'ImageSelector',
    'is_bad_image_url',
    'extract_meta_price',
    'extract_og_images',
    'extract_og_title',
    'parse_analytics_product',
    'parse_catalog_page',
    'parse_catalog_product',
    'parse_product_js',
    'StructuredDataParser',
    'WooCommercePageParser',
    'looks_like_woocommerce',
]
