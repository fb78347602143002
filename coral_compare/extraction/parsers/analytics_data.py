"""
Analytics Data Parser

Extracts the product block Shopify themes inline for their analytics
tracker:

    var meta = {"product": {"variants": [{"price": 3000, ...}]}, ...};

It carries every variant with its price in cents, so it gives the same
variant fidelity as the product JSON endpoint without a second request.
"""

import json
import re
from typing import Any, Dict

_META_START = re.compile(r'var\s+meta\s*=\s*(?=\{)')
_ANALYTICS_ASSIGN = re.compile(r'ShopifyAnalytics\.meta\s*=\s*(?=\{)')


class AnalyticsDataParser:
    """
    Parses the ShopifyAnalytics meta object from page HTML.

    Usage:
        parser = AnalyticsDataParser()
        meta = parser.parse(html)
        if parser.has_product(meta): ...
    """

    def __init__(self):
        self._decoder = json.JSONDecoder()

    def parse(self, html: str) -> Dict[str, Any]:
        """
        Extract the analytics meta object from page HTML.

        Args:
            html: Raw HTML string of the page

        Returns:
            Decoded meta object, or empty dict if not found
        """
        if not html:
            return {}

        for pattern in (_META_START, _ANALYTICS_ASSIGN):
            for match in pattern.finditer(html):
                try:
                    data, _ = self._decoder.raw_decode(html, match.end())
                except json.JSONDecodeError:
                    continue
                if isinstance(data, dict) and self.has_product(data):
                    return data

        return {}

    def has_product(self, data: Dict[str, Any]) -> bool:
        product = data.get("product") if data else None
        return isinstance(product, dict) and bool(product.get("variants"))
