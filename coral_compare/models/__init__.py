"""
Data models for listing extraction.

This module contains pure data classes with no business logic.
"""

from .listing import Listing, RunReport, SourceReport, SourceRow
from .shopify import PayloadKind, PricedVariant, ShopifyProduct, ShopifyVariant

__all__ = [
    'Listing',
    'SourceRow',
    'SourceReport',
    'RunReport',
    'PayloadKind',
    'ShopifyProduct',
    'ShopifyVariant',
    'PricedVariant',
]
