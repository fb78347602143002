"""Tests for coral_compare/extraction/html_extractor.py"""

from unittest.mock import MagicMock

import pytest
from bs4 import BeautifulSoup

from coral_compare.extraction.html_extractor import HtmlExtractor, first_class_price
from coral_compare.net.fetcher import FetchError

WOO_URL = "https://saltwaterpros.ca/product/dragon-soul-torch/"
SHOPIFY_URL = "https://fragbox.ca/products/jester-torch"


def page(head="", body=""):
    return f"<html><head>{head}</head><body>{body}</body></html>"


def parse_shopify(html, url=SHOPIFY_URL, category="zoa"):
    extractor = HtmlExtractor(MagicMock())
    return extractor.parse_shopify(html, BeautifulSoup(html, "lxml"), url, "fragbox", category)


class TestRouting:
    def test_woocommerce_page(self, woocommerce_page_html, make_fetcher):
        fetcher = make_fetcher({WOO_URL: woocommerce_page_html})
        listing = HtmlExtractor(fetcher).extract(WOO_URL, "saltwaterpros", "torch")

        assert listing.url == "https://saltwaterpros.ca/product/dragon-soul-torch"
        assert listing.title_raw == "Dragon Soul Torch"
        assert listing.price_cad == 95.0
        assert listing.sale_price_cad == 80.0
        assert listing.status == "available"
        assert listing.image_url == "https://saltwaterpros.ca/wp-content/uploads/2024/05/dragon-soul-torch.jpg"
        assert listing.sale_mode == "per_unit"
        assert listing.unit_type == "head"

    def test_shopify_page(self, shopify_page_html, make_fetcher):
        fetcher = make_fetcher({SHOPIFY_URL: shopify_page_html})
        listing = HtmlExtractor(fetcher).extract(SHOPIFY_URL, "fragbox", "torch")

        assert listing.title_raw == "Jester Torch — 1 head"
        assert listing.variant == "1 head"
        assert listing.price_cad == 65.0
        assert listing.sale_price_cad is None
        assert listing.status == "available"
        assert listing.image_url == "https://fragbox.ca/cdn/shop/files/jester-torch.jpg?v=1712345678"

    def test_explicit_woocommerce(self, woocommerce_page_html, make_fetcher):
        fetcher = make_fetcher({WOO_URL: woocommerce_page_html})
        listing = HtmlExtractor(fetcher).extract_woocommerce(WOO_URL, "saltwaterpros", "other")
        assert listing.price_cad == 95.0
        assert listing.sale_mode is None

    def test_explicit_shopify(self, shopify_page_html, make_fetcher):
        fetcher = make_fetcher({SHOPIFY_URL: shopify_page_html})
        listing = HtmlExtractor(fetcher).extract_shopify(SHOPIFY_URL, "fragbox", "torch")
        assert listing.price_cad == 65.0

    def test_fetch_error_propagates(self, make_fetcher):
        with pytest.raises(FetchError):
            HtmlExtractor(make_fetcher()).extract(SHOPIFY_URL, "fragbox", "torch")


class TestShopifyFallbacks:
    def test_meta_price(self):
        html = page('<meta property="og:price:amount" content="55.00">', "<h1>Rasta Zoa</h1>")
        listing = parse_shopify(html)
        assert listing.price_cad == 55.0
        assert listing.title_raw == "Rasta Zoa"
        assert listing.variant is None

    def test_json_ld_price(self):
        html = page(
            '<script type="application/ld+json">{"@type":"Product","name":"Rasta","offers":{"price":"42.00"}}</script>',
            "<h1>Rasta Zoa</h1>")
        assert parse_shopify(html).price_cad == 42.0

    def test_class_price(self):
        html = page(body='<h1>Rasta Zoa</h1><span class="product-price">$38.50</span>')
        assert parse_shopify(html).price_cad == 38.5

    def test_no_price_leaves_none(self):
        assert parse_shopify(page(body="<h1>Rasta Zoa</h1>")).price_cad is None

    def test_og_title_when_no_heading(self):
        html = page('<meta property="og:title" content="Sunny D Zoa">'
                    '<meta property="og:price:amount" content="20">')
        assert parse_shopify(html).title_raw == "Sunny D Zoa"

    def test_no_title(self):
        assert parse_shopify(page(body="<p>$20</p>")) is None

    def test_sold_out_phrase(self):
        html = page('<meta property="og:price:amount" content="55.00">',
                    '<h1>Rasta Zoa</h1><button disabled>Sold Out</button>')
        assert parse_shopify(html).status == "sold_out"

    def test_sold_out_with_analytics(self, shopify_page_html):
        html = shopify_page_html.replace("Add to cart", "Sold out")
        listing = parse_shopify(html, category="torch")
        assert listing.status == "sold_out"
        assert listing.price_cad == 65.0

    def test_json_ld_availability_beats_sold_out_label(self):
        html = page('<meta property="og:price:amount" content="55.00">'
                    '<script type="application/ld+json">{"@type":"Product","name":"Rasta Zoa",'
                    '"offers":{"price":"55.00","availability":"https://schema.org/InStock"}}</script>',
                    '<h1>Rasta Zoa</h1><div class="related"><span class="badge">Sold out</span></div>')
        assert parse_shopify(html).status == "available"

    def test_json_ld_out_of_stock(self):
        html = page('<script type="application/ld+json">{"@type":"Product","name":"Rasta Zoa",'
                    '"offers":{"price":"55.00","availability":"http://schema.org/OutOfStock"}}</script>',
                    '<h1>Rasta Zoa</h1><button>Add to cart</button>')
        listing = parse_shopify(html)
        assert listing.status == "sold_out"
        assert listing.price_cad == 55.0

    def test_json_ld_name_when_page_has_no_title(self):
        html = page('<script type="application/ld+json">{"@type":"Product","name":"Sunny D Zoa",'
                    '"offers":{"price":"20"}}</script>')
        listing = parse_shopify(html)
        assert listing.title_raw == "Sunny D Zoa"
        assert listing.price_cad == 20.0

    def test_query_dropped_from_url(self):
        html = page('<meta property="og:price:amount" content="55.00">', "<h1>Rasta Zoa</h1>")
        listing = parse_shopify(html, url="https://fragbox.ca/fr/products/rasta-zoa/?variant=3&utm_source=x")
        assert listing.url == "https://fragbox.ca/products/rasta-zoa"


class TestWooCommerceFallbacks:
    def test_json_ld_price_when_block_missing(self, make_fetcher):
        html = page(
            '<script type="application/ld+json">{"@type":"Product","name":"Green Torch","offers":{"price":"70"}}</script>',
            '<div class="product type-product"><h1 class="product_title">Green Torch</h1></div>')
        listing = HtmlExtractor(make_fetcher()).parse_woocommerce(
            BeautifulSoup(html, "lxml"), WOO_URL, "saltwaterpros", "torch")
        assert listing.price_cad == 70.0
        assert listing.sale_price_cad is None

    def test_out_of_stock(self, woocommerce_page_html, make_fetcher):
        html = woocommerce_page_html.replace('class="stock in-stock">3 in stock', 'class="stock out-of-stock">Out of stock')
        listing = HtmlExtractor(make_fetcher()).parse_woocommerce(
            BeautifulSoup(html, "lxml"), WOO_URL, "saltwaterpros", "torch")
        assert listing.status == "sold_out"

    def test_related_sold_out_item_keeps_product_available(self, woocommerce_page_html, make_fetcher):
        related = ('<section class="related products"><ul class="products">'
                   '<li class="product type-product outofstock"><h2>Other Torch</h2>'
                   '<p class="stock out-of-stock">Out of stock</p></li></ul></section>')
        html = woocommerce_page_html.replace("    </div>\n  </div>\n</main>", "    </div>\n" + related + "\n  </div>\n</main>")
        assert "outofstock" in html
        listing = HtmlExtractor(make_fetcher()).parse_woocommerce(
            BeautifulSoup(html, "lxml"), WOO_URL, "saltwaterpros", "torch")
        assert listing.status == "available"


def test_first_class_price_skips_empty():
    soup = BeautifulSoup(page(body='<div class="price-wrapper"></div><span class="price">$12</span>'), "lxml")
    assert first_class_price(soup) == 12.0
