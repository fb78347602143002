"""Tests for coral_compare/extraction/parsers/woocommerce.py"""

from bs4 import BeautifulSoup

from coral_compare.extraction.parsers.woocommerce import WooCommercePageParser, looks_like_woocommerce


def parser_for(body: str, head: str = "") -> WooCommercePageParser:
    html = f"<html><head>{head}</head><body>{body}</body></html>"
    return WooCommercePageParser(BeautifulSoup(html, "lxml"))


class TestLooksLikeWooCommerce:
    def test_fixture(self, woocommerce_page_html):
        assert looks_like_woocommerce(BeautifulSoup(woocommerce_page_html, "lxml"), woocommerce_page_html)

    def test_shopify_fixture(self, shopify_page_html):
        assert not looks_like_woocommerce(BeautifulSoup(shopify_page_html, "lxml"), shopify_page_html)

    def test_asset_path_marker(self):
        html = '<html><head><script src="/wp-content/plugins/woocommerce/x.js"></script></head><body></body></html>'
        assert looks_like_woocommerce(BeautifulSoup(html, "lxml"), html)


class TestFixturePage:
    def test_fields(self, woocommerce_page_html):
        parser = WooCommercePageParser(BeautifulSoup(woocommerce_page_html, "lxml"))
        assert parser.extract_title() == "Dragon Soul Torch"
        assert parser.extract_prices() == (95.0, 80.0)
        assert not parser.is_out_of_stock()
        assert "type-product" in parser.root.get("class")


class TestExtractTitle:
    def test_first_heading_fallback(self):
        parser = parser_for('<div class="product"><h2>Green Torch</h2></div>')
        assert parser.extract_title() == "Green Torch"

    def test_document_title_fallback(self):
        parser = parser_for('<div class="product"><p>no heading</p></div>',
                            head="<title>Rasta Torch – Reef Paradise</title>")
        assert parser.extract_title() == "Rasta Torch"

    def test_missing(self):
        assert parser_for("<p>nothing</p>").extract_title() == ""


class TestExtractPrices:
    def test_single_amount(self):
        parser = parser_for(
            '<div class="product"><p class="price"><span class="woocommerce-Price-amount amount">'
            '<bdi>$120.00</bdi></span></p></div>')
        assert parser.extract_prices() == (120.0, None)

    def test_range_takes_lower_bound(self):
        parser = parser_for(
            '<div class="product"><p class="price">'
            '<span class="woocommerce-Price-amount amount">$40.00</span> – '
            '<span class="woocommerce-Price-amount amount">$90.00</span></p></div>')
        assert parser.extract_prices() == (40.0, None)

    def test_french_format(self):
        parser = parser_for('<div class="product"><p class="price">79,99 $</p></div>')
        assert parser.extract_prices() == (79.99, None)

    def test_no_price(self):
        assert parser_for('<div class="product"><h1>X</h1></div>').extract_prices() == (None, None)


class TestOutOfStock:
    def test_stock_class(self):
        parser = parser_for('<div class="product"><p class="stock out-of-stock">Out of stock</p></div>')
        assert parser.is_out_of_stock()

    def test_root_class(self):
        parser = parser_for('<div class="product type-product outofstock"><h1>X</h1></div>')
        assert parser.is_out_of_stock()

    def test_french_phrase(self):
        parser = parser_for('<div class="product"><p class="stock">Rupture de stock</p></div>')
        assert parser.is_out_of_stock()

    def test_in_stock(self):
        parser = parser_for('<div class="product"><p class="stock in-stock">2 in stock</p></div>')
        assert not parser.is_out_of_stock()

    def test_related_sold_out_product_ignored(self):
        parser = parser_for(
            '<div id="product-7" class="product type-product instock">'
            '<div class="summary"><p class="stock in-stock">3 in stock</p></div>'
            '<section class="related products"><ul class="products">'
            '<li class="product outofstock"><p class="stock out-of-stock">Out of stock</p></li>'
            '</ul></section></div>'
        )
        assert not parser.is_out_of_stock()

    def test_upsell_stock_notice_skipped_without_summary(self):
        parser = parser_for(
            '<div class="product type-product">'
            '<section class="upsells products"><p class="stock out-of-stock">Sold out</p></section>'
            '<p class="stock in-stock">In stock</p></div>'
        )
        assert not parser.is_out_of_stock()

    def test_sold_out_phrase_outside_stock_notice_ignored(self):
        parser = parser_for('<div class="product"><p>Last batch sold out in a day</p></div>')
        assert not parser.is_out_of_stock()


class TestPricePriority:
    def test_inverted_pair_keeps_sale_amount(self):
        parser = parser_for('<div class="product"><p class="price"><del>$30.00</del> <ins>$45.00</ins></p></div>')
        assert parser.extract_prices() == (45.0, None)

    def test_lone_sale_amount(self):
        parser = parser_for('<div class="product"><p class="price"><ins>$45.00</ins></p></div>')
        assert parser.extract_prices() == (45.0, None)

    def test_lone_struck_amount(self):
        parser = parser_for('<div class="product"><p class="price"><del>$60.00</del></p></div>')
        assert parser.extract_prices() == (60.0, None)
