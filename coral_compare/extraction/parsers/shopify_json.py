"""
Shopify JSON Parser

Turns the three untyped Shopify payloads into ShopifyProduct values.
Every field is optional; missing or malformed fields fall back to safe
defaults and a payload that is not a product yields None.

Payload units:
- /products/{handle}.js     prices in integer cents
- /products.json            prices as decimal strings ("30.00")
- ShopifyAnalytics meta     prices in integer cents, no compare-at, no stock
"""

from typing import Any, Dict, List, Optional

from ...common.text_utils import cents_to_amount, clean_text, decimal_to_amount
from ...models import PayloadKind, ShopifyProduct, ShopifyVariant


def _image_src(value: Any) -> Optional[str]:
    """Accept "url", {"src": url} or {"url": url}; fix protocol-relative URLs."""
    if isinstance(value, dict):
        value = value.get("src") or value.get("url")
    if not isinstance(value, str) or not value.strip():
        return None
    src = value.strip()
    if src.startswith("//"):
        src = "https:" + src
    return src


def _gallery(images: Any) -> List[str]:
    if not isinstance(images, list):
        return []
    return [src for src in (_image_src(i) for i in images) if src]


def _as_bool(value: Any, default: bool = True) -> bool:
    if value is None:
        return default
    return bool(value)


def parse_product_js(data: Any) -> Optional[ShopifyProduct]:
    """Parse the single-product payload from /products/{handle}.js."""
    if not isinstance(data, dict) or not isinstance(data.get("variants"), list):
        return None

    variants = []
    for v in data["variants"]:
        if not isinstance(v, dict):
            continue
        variants.append(ShopifyVariant(
            title=clean_text(v.get("title") or v.get("public_title") or ""),
            price=cents_to_amount(v.get("price")),
            compare_at_price=cents_to_amount(v.get("compare_at_price")),
            available=_as_bool(v.get("available"), default=False),
            image_url=_image_src(v.get("featured_image")),
        ))

    gallery = _gallery(data.get("images"))
    return ShopifyProduct(
        kind=PayloadKind.PRODUCT_JS,
        title=clean_text(data.get("title")),
        handle=str(data.get("handle") or ""),
        variants=variants,
        image_url=_image_src(data.get("featured_image")),
        gallery=gallery,
    )


def parse_catalog_product(data: Any) -> Optional[ShopifyProduct]:
    """Parse one entry of the /products.json "products" array."""
    if not isinstance(data, dict):
        return None

    images_by_id: Dict[Any, str] = {}
    raw_images = data.get("images") if isinstance(data.get("images"), list) else []
    for img in raw_images:
        src = _image_src(img)
        if src and isinstance(img, dict) and img.get("id") is not None:
            images_by_id[img["id"]] = src

    variants = []
    for v in data.get("variants") or []:
        if not isinstance(v, dict):
            continue
        image_url = _image_src(v.get("featured_image"))
        if not image_url and v.get("image_id") is not None:
            image_url = images_by_id.get(v["image_id"])
        variants.append(ShopifyVariant(
            title=clean_text(v.get("title") or ""),
            price=decimal_to_amount(v.get("price")),
            compare_at_price=decimal_to_amount(v.get("compare_at_price")),
            available=_as_bool(v.get("available"), default=True),
            image_url=image_url,
        ))

    return ShopifyProduct(
        kind=PayloadKind.CATALOG,
        title=clean_text(data.get("title")),
        handle=str(data.get("handle") or ""),
        variants=variants,
        image_url=_image_src(data.get("image")),
        gallery=_gallery(raw_images),
    )


def parse_catalog_page(data: Any) -> List[ShopifyProduct]:
    """
    Parse a /products.json page.

    Raises:
        ValueError: if the payload has no "products" array
    """
    if not isinstance(data, dict) or not isinstance(data.get("products"), list):
        raise ValueError("Catalog payload has no products array")
    products = []
    for raw in data["products"]:
        product = parse_catalog_product(raw)
        if product is not None:
            products.append(product)
    return products


def parse_analytics_product(meta: Any, title: str = "") -> Optional[ShopifyProduct]:
    """
    Parse the product block of an inline ShopifyAnalytics meta object.

    Args:
        meta: The decoded `meta` object ({"product": {...}, "page": {...}})
        title: Page title to use, since the meta object has none
    """
    if not isinstance(meta, dict):
        return None
    product = meta.get("product")
    if not isinstance(product, dict) or not isinstance(product.get("variants"), list):
        return None

    variants = []
    for v in product["variants"]:
        if not isinstance(v, dict):
            continue
        variants.append(ShopifyVariant(
            title=clean_text(v.get("public_title") or ""),
            price=cents_to_amount(v.get("price")),
            compare_at_price=None,
            available=True,
        ))

    if not variants:
        return None

    return ShopifyProduct(
        kind=PayloadKind.ANALYTICS,
        title=clean_text(title),
        variants=variants,
    )
