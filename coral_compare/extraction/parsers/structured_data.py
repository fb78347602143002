"""
Structured Data Parser

Extracts product information from JSON-LD structured data (schema.org).
Storefront themes embed it for search engines; on HTML product pages it
is the last structured price source before free-text scraping.

Supported schema types: Product, ProductGroup
"""

import json
from typing import Any, Dict, Iterator, Optional

from bs4 import BeautifulSoup

from ...common.text_utils import clean_text, parse_price


class StructuredDataParser:
    """
    Parses JSON-LD structured data from HTML pages.

    JSON-LD is embedded in <script type="application/ld+json"> tags. A
    script may hold a single object, a list of objects or an @graph.

    Usage:
        parser = StructuredDataParser()
        data = parser.parse(soup)
        price = parser.extract_price(data)
    """

    SUPPORTED_TYPES = ['Product', 'ProductGroup']

    def parse(self, soup: BeautifulSoup) -> Dict[str, Any]:
        """
        Extract the first Product object from the page.

        Args:
            soup: BeautifulSoup object of the page

        Returns:
            Parsed JSON-LD data as dictionary, or empty dict if not found
        """
        for script in soup.find_all('script', type='application/ld+json'):
            raw = script.string or script.get_text()
            if not raw or not raw.strip():
                continue
            try:
                data = json.loads(raw)
            except json.JSONDecodeError:
                continue
            for node in self._walk(data):
                if self._is_product(node):
                    return node

        return {}

    def extract_name(self, data: Dict[str, Any]) -> str:
        if not data:
            return ""
        return clean_text(data.get("name", ""))

    def extract_price(self, data: Dict[str, Any]) -> Optional[float]:
        """
        Extract the offer price from structured data.

        Reads offers.price, then offers.lowPrice for AggregateOffer, then
        the first priceSpecification.

        Args:
            data: Parsed JSON-LD data

        Returns:
            Price as float or None
        """
        offer = self._first_offer(data)
        if not offer:
            return None

        for key in ("price", "lowPrice"):
            price = parse_price(offer.get(key))
            if price is not None:
                return price

        price_spec = offer.get("priceSpecification")
        if isinstance(price_spec, list) and price_spec:
            price_spec = price_spec[0]
        if isinstance(price_spec, dict):
            return parse_price(price_spec.get("price"))

        return None

    def extract_availability(self, data: Dict[str, Any]) -> Optional[bool]:
        """
        Extract availability from the first offer.

        Returns:
            True for InStock-like values, False for OutOfStock/SoldOut,
            None when the page does not say
        """
        offer = self._first_offer(data)
        if not offer:
            return None

        availability = str(offer.get("availability") or "")
        tail = availability.rstrip("/").rsplit("/", 1)[-1].lower()
        if tail in ("outofstock", "soldout", "discontinued"):
            return False
        if tail in ("instock", "limitedavailability", "preorder", "onlineonly"):
            return True
        return None

    def extract_image(self, data: Dict[str, Any]) -> str:
        """
        Extract main image URL from structured data.

        Args:
            data: Parsed JSON-LD data

        Returns:
            Image URL or empty string
        """
        if not data:
            return ""

        image = data.get("image")
        if isinstance(image, list) and image:
            image = image[0]
        if isinstance(image, dict):
            image = image.get("url") or image.get("contentUrl")
        if isinstance(image, str):
            return image.strip()

        return ""

    def _first_offer(self, data: Dict[str, Any]) -> Dict[str, Any]:
        if not data:
            return {}
        offers = data.get("offers")
        if isinstance(offers, list):
            offers = offers[0] if offers else None
        if isinstance(offers, dict):
            nested = offers.get("offers")
            if isinstance(nested, list) and nested and isinstance(nested[0], dict):
                return nested[0]
            return offers

        # ProductGroup pages carry offers on each variant
        variants = data.get("hasVariant")
        if isinstance(variants, list):
            for variant in variants:
                if isinstance(variant, dict) and variant.get("offers"):
                    return self._first_offer(variant)
        return {}

    def _walk(self, data: Any) -> Iterator[Dict[str, Any]]:
        if isinstance(data, list):
            for item in data:
                yield from self._walk(item)
        elif isinstance(data, dict):
            yield data
            if isinstance(data.get("@graph"), list):
                yield from self._walk(data["@graph"])

    def _is_product(self, node: Dict[str, Any]) -> bool:
        node_type = node.get("@type")
        if isinstance(node_type, list):
            return any(t in self.SUPPORTED_TYPES for t in node_type)
        return node_type in self.SUPPORTED_TYPES
