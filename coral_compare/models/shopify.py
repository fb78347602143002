"""
Shopify payload shapes.

Typed views over the three Shopify JSON payloads the pipeline reads.
Each product carries the kind of payload it was parsed from, since the
payloads differ in units (cents vs decimal strings) and in how far their
availability flags can be trusted.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class PayloadKind(str, Enum):
    """Which Shopify endpoint a product was read from."""

    PRODUCT_JS = "product_js"     # /products/{handle}.js (cents, reliable availability)
    CATALOG = "catalog"           # /products.json (decimal strings)
    ANALYTICS = "analytics"       # inline ShopifyAnalytics meta (cents, no compare-at)


@dataclass
class ShopifyVariant:
    """A purchasable option with prices already converted to CAD amounts."""

    title: str = ""
    price: Optional[float] = None
    compare_at_price: Optional[float] = None
    available: bool = True
    image_url: Optional[str] = None


@dataclass
class ShopifyProduct:
    """A product with its variants and image fallbacks."""

    kind: PayloadKind
    title: str = ""
    handle: str = ""
    variants: List[ShopifyVariant] = field(default_factory=list)
    image_url: Optional[str] = None
    gallery: List[str] = field(default_factory=list)

    @property
    def any_available(self) -> bool:
        return any(v.available for v in self.variants)


@dataclass
class PricedVariant:
    """Outcome of scoring one variant."""

    variant: ShopifyVariant
    effective_price: Optional[float]
    regular_price: Optional[float]
    sale_price: Optional[float]
