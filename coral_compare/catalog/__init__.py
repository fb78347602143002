"""
Read-side helpers for displaying stored listings.
"""

from .listing_helpers import (
    SORT_MODES,
    discount_percent,
    display_price,
    domain_from_url,
    is_on_sale,
    shop_label,
    sort_listings,
    unit_label,
)

__all__ = [
    'SORT_MODES',
    'discount_percent',
    'display_price',
    'domain_from_url',
    'is_on_sale',
    'shop_label',
    'sort_listings',
    'unit_label',
]
