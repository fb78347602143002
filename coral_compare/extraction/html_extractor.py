"""
HTML Extractor

Builds listings from rendered product pages when no product JSON is
available: Shopify themes and WooCommerce shops.

Shopify price sources, in order:
    1. Inline analytics meta (full variant data, same selection as JSON)
    2. product:price:amount / og:price:amount / itemprop="price"
    3. JSON-LD offers.price
    4. First element whose class contains "price"

Shopify stock comes from the JSON-LD offer availability when the page
declares one, otherwise from a "sold out" label anywhere on the page.
"""

import logging
from typing import Optional

from bs4 import BeautifulSoup

from ..classification.torch import enforce_torch
from ..common.constants import STATUS_AVAILABLE, STATUS_SOLD_OUT
from ..common.text_utils import clean_text, parse_price
from ..common.url_utils import canonical_product_url
from ..models import Listing
from ..net.fetcher import HttpFetcher
from .parsers.analytics_data import AnalyticsDataParser
from .parsers.image_selector import ImageSelector
from .parsers.meta_tags import extract_meta_price, extract_og_title
from .parsers.shopify_json import parse_analytics_product
from .parsers.structured_data import StructuredDataParser
from .parsers.woocommerce import WooCommercePageParser, looks_like_woocommerce
from .variant_selector import build_listing

logger = logging.getLogger(__name__)

SOLD_OUT_PHRASE = "sold out"


def _page_title(soup: BeautifulSoup) -> str:
    h1 = soup.find('h1')
    if h1 is not None:
        title = clean_text(h1.get_text(" "))
        if title:
            return title
    title = extract_og_title(soup)
    if title:
        return title
    if soup.title and soup.title.string:
        return clean_text(soup.title.string)
    return ""


def first_class_price(soup: BeautifulSoup) -> Optional[float]:
    """Parse the first element whose class name contains "price"."""
    for element in soup.select('[class*="price"]'):
        price = parse_price(element.get_text(" ", strip=True))
        if price is not None and price > 0:
            return price
    return None


class HtmlExtractor:
    """
    Extracts listings from Shopify and WooCommerce HTML product pages.

    Usage:
        extractor = HtmlExtractor(fetcher)
        listing = extractor.extract(url, "fragbox", "zoa")
    """

    def __init__(self, fetcher: HttpFetcher):
        self.fetcher = fetcher
        self.analytics_parser = AnalyticsDataParser()
        self.structured_parser = StructuredDataParser()
        self.image_selector = ImageSelector()

    def fetch_page(self, url: str):
        html = self.fetcher.fetch_html(url)
        return html, BeautifulSoup(html, 'lxml')

    def extract(self, url: str, shop_id: str, category: str) -> Optional[Listing]:
        """
        Fetch a page and route it to the WooCommerce or Shopify parser.

        Raises:
            FetchError: when the page cannot be fetched
        """
        html, soup = self.fetch_page(url)
        if looks_like_woocommerce(soup, html):
            return self.parse_woocommerce(soup, url, shop_id, category)
        return self.parse_shopify(html, soup, url, shop_id, category)

    def extract_shopify(self, url: str, shop_id: str, category: str) -> Optional[Listing]:
        """Fetch and parse a Shopify-rendered product page."""
        html, soup = self.fetch_page(url)
        return self.parse_shopify(html, soup, url, shop_id, category)

    def extract_woocommerce(self, url: str, shop_id: str, category: str) -> Optional[Listing]:
        """Fetch and parse a WooCommerce product page."""
        _, soup = self.fetch_page(url)
        return self.parse_woocommerce(soup, url, shop_id, category)

    def parse_shopify(self, html: str, soup: BeautifulSoup, url: str,
                      shop_id: str, category: str) -> Optional[Listing]:
        """
        Build a listing from a rendered Shopify product page.

        Args:
            html: Raw page HTML (analytics meta is read from scripts)
            soup: Parsed page
            url: Page URL
            shop_id: Owning shop
            category: Source default category

        Returns:
            Listing, or None when the page has no title
        """
        structured = self.structured_parser.parse(soup)
        title = _page_title(soup) or self.structured_parser.extract_name(structured)
        if not title:
            logger.debug("No title on %s", url)
            return None

        in_stock = self.structured_parser.extract_availability(structured)
        if in_stock is None:
            in_stock = SOLD_OUT_PHRASE not in html.lower()
        status = STATUS_AVAILABLE if in_stock else STATUS_SOLD_OUT
        image_url = self.image_selector.select(soup, url)
        canonical = canonical_product_url(url)

        product = parse_analytics_product(self.analytics_parser.parse(html), title)
        if product is not None and product.variants:
            listing = build_listing(product, canonical, shop_id, category,
                                    image_url=image_url, status=status)
            if listing.price_cad is not None:
                return enforce_torch(listing)

        price = extract_meta_price(soup)
        if price is None:
            price = self.structured_parser.extract_price(structured)
        if price is None:
            price = first_class_price(soup)

        listing = Listing(
            shop_id=shop_id,
            category=category,
            title_raw=title,
            url=canonical,
            image_url=image_url,
            price_cad=price,
            status=status,
        )
        return enforce_torch(listing)

    def parse_woocommerce(self, soup: BeautifulSoup, url: str,
                          shop_id: str, category: str) -> Optional[Listing]:
        """Build a listing from a rendered WooCommerce product page."""
        parser = WooCommercePageParser(soup)
        title = parser.extract_title()
        if not title:
            logger.debug("No title on %s", url)
            return None

        price, sale_price = parser.extract_prices()
        if price is None:
            price = self.structured_parser.extract_price(self.structured_parser.parse(soup))

        listing = Listing(
            shop_id=shop_id,
            category=category,
            title_raw=title,
            url=canonical_product_url(url),
            image_url=self.image_selector.select(soup, url, parser.root),
            price_cad=price,
            sale_price_cad=sale_price,
            status=STATUS_SOLD_OUT if parser.is_out_of_stock() else STATUS_AVAILABLE,
        )
        return enforce_torch(listing)
