"""
Variant Selection

Chooses the single variant a product is listed at and builds the listing
row from it. One listing per product: emitting a row per variant floods
the catalog with near-duplicates that differ only by size or color.
"""

from typing import List, Optional

from ..common.constants import DEFAULT_VARIANT_TITLE, STATUS_AVAILABLE, STATUS_SOLD_OUT
from ..models import Listing, PayloadKind, PricedVariant, ShopifyProduct, ShopifyVariant


def price_variant(variant: ShopifyVariant) -> PricedVariant:
    """
    Score one variant.

    When compare-at exceeds price the variant is discounted: the regular
    price is the compare-at and the sale price is the price. Otherwise
    the price is the regular price and there is no sale price.
    """
    price = variant.price
    compare = variant.compare_at_price

    if price is not None and compare is not None and compare > price:
        return PricedVariant(variant, effective_price=price, regular_price=compare, sale_price=price)
    return PricedVariant(variant, effective_price=price, regular_price=price, sale_price=None)


def select_best_variant(variants: List[ShopifyVariant]) -> Optional[PricedVariant]:
    """
    Pick the lowest effective price, preferring available variants.

    Falls back to the full set when nothing is available. Ties resolve to
    the first variant encountered. Unpriced variants never win.
    """
    pool = [v for v in variants if v.available] or list(variants)
    priced = [price_variant(v) for v in pool]
    priced = [p for p in priced if p.effective_price is not None]
    if not priced:
        return None
    # min() keeps the first of equal keys
    return min(priced, key=lambda p: p.effective_price)


def is_default_variant_title(title: Optional[str]) -> bool:
    t = (title or "").strip()
    return not t or t.lower() in (DEFAULT_VARIANT_TITLE.lower(), "default")


def listing_title(base_title: str, variant_title: Optional[str]) -> str:
    """"{base} — {variant}" unless the variant title is the default sentinel."""
    if is_default_variant_title(variant_title):
        return base_title
    return f"{base_title} — {variant_title.strip()}"


def pick_image(product: ShopifyProduct, variant: Optional[ShopifyVariant]) -> Optional[str]:
    """Variant image, then product image, then first gallery image."""
    if variant is not None and variant.image_url:
        return variant.image_url
    if product.image_url:
        return product.image_url
    if product.gallery:
        return product.gallery[0]
    return None


def build_listing(
    product: ShopifyProduct,
    url: str,
    shop_id: str,
    category: str,
    title: Optional[str] = None,
    image_url: Optional[str] = None,
    status: Optional[str] = None,
) -> Listing:
    """
    Build the one listing row for a product.

    Args:
        product: Parsed product payload
        url: Canonical product URL
        shop_id: Owning shop
        category: Source default category
        title: Base title override (defaults to the product title)
        image_url: Image override used when the payload has none
        status: Status override; otherwise sold_out is only reported for
            single-product payloads, where availability is reliable
    """
    best = select_best_variant(product.variants)
    variant = best.variant if best else None
    base_title = title or product.title

    if status is None:
        if product.kind is PayloadKind.PRODUCT_JS and product.variants and not product.any_available:
            status = STATUS_SOLD_OUT
        else:
            status = STATUS_AVAILABLE

    variant_label = None
    if variant is not None and not is_default_variant_title(variant.title):
        variant_label = variant.title

    return Listing(
        shop_id=shop_id,
        category=category,
        title_raw=listing_title(base_title, variant.title if variant else None),
        url=url,
        image_url=pick_image(product, variant) or image_url,
        price_cad=best.regular_price if best else None,
        sale_price_cad=best.sale_price if best else None,
        status=status,
        variant=variant_label,
    )
