"""
Source discovery.

Modules:
    platform_detector - CrawlMode selection and the Shopify catalog probe
    link_discoverer - paginated product link discovery
"""

from .link_discoverer import (
    LinkDiscoverer,
    extract_product_links,
    is_product_path,
    page_candidates,
)
from .platform_detector import CrawlMode, PlatformDetector, is_reef_solution_source

__all__ = [
    'CrawlMode',
    'PlatformDetector',
    'is_reef_solution_source',
    'LinkDiscoverer',
    'extract_product_links',
    'is_product_path',
    'page_candidates',
]
