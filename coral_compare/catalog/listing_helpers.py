"""
Catalog Read Helpers

Display-side helpers for stored listings: the price a shopper pays,
discount percentage, unit labels, shop labels and sort orders.
"""

from functools import lru_cache
from typing import Dict, Iterable, List, Optional

from ..common.config_loader import load_shop_labels
from ..common.constants import STATUS_SOLD_OUT
from ..common.url_utils import domain_of
from ..models import Listing

SORT_MODES = ('price_asc', 'price_desc', 'sale_first', 'new_first')


def display_price(listing: Listing) -> Optional[float]:
    """Sale price when present, else the regular price."""
    if listing.sale_price_cad is not None:
        return listing.sale_price_cad
    return listing.price_cad


def is_on_sale(listing: Listing) -> bool:
    return (
        listing.price_cad is not None
        and listing.sale_price_cad is not None
        and listing.sale_price_cad < listing.price_cad
    )


def discount_percent(listing: Listing) -> Optional[int]:
    """Rounded percentage off the regular price, or None without a discount."""
    if not is_on_sale(listing) or not listing.price_cad:
        return None
    pct = round((1 - listing.sale_price_cad / listing.price_cad) * 100)
    return pct if pct > 0 else None


def unit_label(listing: Listing) -> str:
    """
    Describe what one purchase gets you.

    "WYSIWYG" for wysiwyg listings; "3 polyp" for counted units;
    "1+ head" for per-unit listings without a count.
    """
    if listing.sale_mode == 'wysiwyg':
        return 'WYSIWYG'
    if listing.sale_mode == 'per_unit':
        unit = listing.unit_type or 'head'
        if listing.unit_count:
            return f"{listing.unit_count} {unit}"
        return f"1+ {unit}"
    return ''


def domain_from_url(url: Optional[str]) -> str:
    return domain_of(url or '')


@lru_cache(maxsize=1)
def _shop_labels() -> Dict[str, str]:
    try:
        return load_shop_labels()
    except FileNotFoundError:
        return {}


def shop_label(listing: Listing, labels: Optional[Dict[str, str]] = None) -> str:
    """
    Display name for a listing's shop.

    Looks the URL's domain up in shops.yaml, falling back to the bare
    domain and then the shop_id.
    """
    labels = _shop_labels() if labels is None else labels
    domain = domain_from_url(listing.url)
    return labels.get(domain) or domain or listing.shop_id


def sort_listings(listings: Iterable[Listing], mode: str = 'price_asc') -> List[Listing]:
    """
    Sort listings for display. Sold-out listings always go last.

    Args:
        listings: Listings in store order (newest first for "new_first")
        mode: One of price_asc, price_desc, sale_first, new_first

    Raises:
        ValueError: for an unknown mode
    """
    if mode not in SORT_MODES:
        raise ValueError(f"Unknown sort mode: {mode} (expected one of {', '.join(SORT_MODES)})")

    items = list(listings)
    missing = float('inf')

    def price_key(listing: Listing) -> float:
        price = display_price(listing)
        return price if price is not None else missing

    if mode == 'price_asc':
        items.sort(key=price_key)
    elif mode == 'price_desc':
        # Unpriced listings stay at the bottom in both directions
        items.sort(key=lambda item: (display_price(item) is None, -(display_price(item) or 0)))
    elif mode == 'sale_first':
        items.sort(key=lambda item: (not is_on_sale(item), -(discount_percent(item) or 0), price_key(item)))

    # Stable sort keeps the order chosen above within each group
    items.sort(key=lambda item: item.status == STATUS_SOLD_OUT)
    return items
