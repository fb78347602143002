"""
WooCommerce Page Parser

Extracts title, prices and stock from a rendered WooCommerce product
page. The price block renders a discounted product as

    <p class="price"><del>$40.00</del> <ins>$30.00</ins></p>

and a regular one as a single amount.
"""

from typing import Optional, Tuple

from bs4 import BeautifulSoup, Tag

from ...common.text_utils import clean_text, parse_price

WOOCOMMERCE_MARKERS = [
    'body.woocommerce',
    'body.single-product',
    'div.product.type-product',
    '.woocommerce-product-gallery',
    'form.cart',
    'p.price .woocommerce-Price-amount',
]

OUT_OF_STOCK_PHRASES = ['out of stock', 'rupture de stock', 'épuisé', 'sold out']

SECONDARY_SECTION_CLASSES = ['related', 'upsells', 'cross-sells']

PRODUCT_ROOT_SELECTORS = ['div.product.type-product', 'div[id^="product-"]', 'div.product', 'main']

PRICE_SELECTORS = [
    'p.price',
    'span.price',
    '.summary .price',
    '.woocommerce-Price-amount',
]


def looks_like_woocommerce(soup: BeautifulSoup, html: str = "") -> bool:
    """Check for WooCommerce body classes, markup or asset paths."""
    if any(soup.select_one(selector) for selector in WOOCOMMERCE_MARKERS):
        return True
    lowered = (html or "").lower()
    return 'wp-content/plugins/woocommerce' in lowered or 'woocommerce-page' in lowered


class WooCommercePageParser:
    """
    Parses product content from a WooCommerce product page.

    Usage:
        parser = WooCommercePageParser(soup)
        title = parser.extract_title()
        price, sale = parser.extract_prices()
    """

    def __init__(self, soup: BeautifulSoup):
        """
        Initialize the parser.

        Args:
            soup: BeautifulSoup object of the page
        """
        self.soup = soup
        self.root = self._find_root()

    def _find_root(self) -> Tag:
        for selector in PRODUCT_ROOT_SELECTORS:
            element = self.soup.select_one(selector)
            if element is not None:
                return element
        return self.soup.body or self.soup

    def extract_title(self) -> str:
        """
        Extract product title.

        Tries h1.product_title, then the first heading in the product
        root, then the document <title>.
        """
        element = self.root.select_one('h1.product_title') or self.soup.select_one('h1.product_title')
        if element is None:
            element = self.root.find(['h1', 'h2'])
        if element is not None:
            title = clean_text(element.get_text(" "))
            if title:
                return title

        if self.soup.title and self.soup.title.string:
            # "Product Name – Shop Name"
            title = clean_text(self.soup.title.string)
            for sep in (' – ', ' | ', ' - '):
                if sep in title:
                    title = title.split(sep)[0]
                    break
            return clean_text(title)

        return ""

    def _price_element(self) -> Optional[Tag]:
        for selector in PRICE_SELECTORS:
            element = self.root.select_one(selector)
            if element is not None and element.get_text(strip=True):
                return element
        return None

    def extract_prices(self) -> Tuple[Optional[float], Optional[float]]:
        """
        Extract regular and sale price.

        A <del>/<ins> pair is read as (regular, sale) when the struck price
        is higher. Otherwise one price is kept, preferring the sale amount,
        then a single undecorated amount, then the struck amount. Price
        ranges ("$20 – $40") take the lower bound.

        Returns:
            Tuple of (price, sale_price), either may be None
        """
        element = self._price_element()
        if element is None:
            return None, None

        old = element.find('del')
        new = element.find('ins')
        regular = parse_price(old.get_text(" ", strip=True)) if old is not None else None
        sale = parse_price(new.get_text(" ", strip=True)) if new is not None else None
        if regular is not None and sale is not None and regular > sale:
            return regular, sale
        if sale is not None:
            return sale, None

        single = None
        if old is None:
            amounts = element.select('.woocommerce-Price-amount')
            if amounts:
                single = parse_price(amounts[0].get_text(" ", strip=True))
            else:
                single = parse_price(element.get_text(" ", strip=True))
        if single is not None:
            return single, None
        return regular, None

    def _stock_element(self) -> Optional[Tag]:
        element = self.root.select_one('.summary .stock')
        if element is not None:
            return element
        for element in self.root.select('.stock'):
            if not self._in_secondary_section(element):
                return element
        return None

    def _in_secondary_section(self, element: Tag) -> bool:
        # Related, upsell and cross-sell grids sit inside the product root
        for parent in element.parents:
            if parent is self.root:
                return False
            classes = parent.get('class') or []
            if any(name in classes for name in SECONDARY_SECTION_CLASSES):
                return True
        return False

    def is_out_of_stock(self) -> bool:
        """
        Check the main product's stock state.

        Reads the root's own outofstock class and the summary's stock
        notice. Products listed in related or upsell sections are ignored.
        """
        if 'outofstock' in (self.root.get('class') or []):
            return True

        stock = self._stock_element()
        if stock is None:
            return False
        if 'out-of-stock' in (stock.get('class') or []):
            return True
        text = clean_text(stock.get_text(" ")).lower()
        return any(phrase in text for phrase in OUT_OF_STOCK_PHRASES)
