"""Tests for coral_compare/extraction/shopify_extractor.py"""

import pytest

from coral_compare.extraction.shopify_extractor import (
    PartialCatalogError,
    ShopifyExtractor,
    product_handle,
    product_js_url,
)
from coral_compare.models import SourceRow
from coral_compare.net.fetcher import FetchError

CATALOG_PAGE = "https://fragbox.ca/products.json?limit=100&page={}"


@pytest.fixture
def source():
    return SourceRow(url="https://fragbox.ca/collections/torch", shop_id="fragbox", category="torch")


class TestProductUrls:
    @pytest.mark.parametrize("url,handle", [
        ("https://fragbox.ca/products/jester-torch", "jester-torch"),
        ("https://fragbox.ca/en-ca/products/jester-torch?variant=1", "jester-torch"),
        ("https://fragbox.ca/collections/torch/products/jester-torch", "jester-torch"),
        ("https://fragbox.ca/products/jester-torch.js", "jester-torch"),
        ("https://fragbox.ca/collections/torch", None),
        ("https://fragbox.ca/products/", None),
    ])
    def test_product_handle(self, url, handle):
        assert product_handle(url) == handle

    def test_product_js_url(self):
        assert product_js_url("https://Fragbox.ca/collections/torch/products/jester-torch?variant=2") == \
            "https://fragbox.ca/products/jester-torch.js"
        assert product_js_url("https://fragbox.ca/pages/about") is None


class TestExtractProduct:
    def test_best_variant_listing(self, product_js_payload, make_fetcher):
        fetcher = make_fetcher({"https://fragbox.ca/products/holy-grail-torch.js": product_js_payload})
        listing = ShopifyExtractor(fetcher).extract_product(
            "https://fragbox.ca/products/holy-grail-torch?variant=82", "fragbox", "torch")

        assert listing.url == "https://fragbox.ca/products/holy-grail-torch"
        assert listing.title_raw == "Holy Grail Torch — Small"
        assert listing.price_cad == 40.0
        assert listing.sale_price_cad == 30.0
        assert listing.variant == "Small"
        assert listing.image_url == "https://fragbox.ca/cdn/shop/files/holy-grail.jpg"
        assert listing.status == "available"
        assert listing.sale_mode == "per_unit"
        assert listing.unit_type == "head"

    def test_sold_out_when_no_variant_available(self, product_js_payload, make_fetcher):
        for v in product_js_payload["variants"]:
            v["available"] = False
        fetcher = make_fetcher({"https://fragbox.ca/products/holy-grail-torch.js": product_js_payload})
        listing = ShopifyExtractor(fetcher).extract_product(
            "https://fragbox.ca/products/holy-grail-torch", "fragbox", "torch")

        assert listing.status == "sold_out"
        assert listing.price_cad == 25.0
        assert listing.sale_price_cad is None
        assert listing.image_url == "https://fragbox.ca/cdn/shop/files/holy-grail-medium.jpg"

    def test_non_product_url_skipped(self, make_fetcher):
        fetcher = make_fetcher()
        assert ShopifyExtractor(fetcher).extract_product("https://fragbox.ca/pages/faq", "fragbox", "torch") is None
        assert fetcher.calls == []

    def test_non_product_payload(self, make_fetcher):
        fetcher = make_fetcher({"https://fragbox.ca/products/x.js": {"error": "nope"}})
        assert ShopifyExtractor(fetcher).extract_product("https://fragbox.ca/products/x", "fragbox", "zoa") is None

    def test_fetch_error_propagates(self, make_fetcher):
        with pytest.raises(FetchError):
            ShopifyExtractor(make_fetcher()).extract_product("https://fragbox.ca/products/x", "fragbox", "zoa")


class TestCatalog:
    def test_walks_until_empty_page(self, catalog_payload, source, make_fetcher):
        fetcher = make_fetcher({
            CATALOG_PAGE.format(1): catalog_payload,
            CATALOG_PAGE.format(2): {"products": []},
        })
        listings = ShopifyExtractor(fetcher).extract_catalog(source)

        assert fetcher.calls == [CATALOG_PAGE.format(1), CATALOG_PAGE.format(2)]
        by_url = {item.url: item for item in listings}
        assert set(by_url) == {
            "https://fragbox.ca/products/indo-gold-torch",
            "https://fragbox.ca/products/rasta-zoa",
        }

        indo = by_url["https://fragbox.ca/products/indo-gold-torch"]
        assert indo.title_raw == "Indo Gold Torch"
        assert indo.price_cad == 150.0
        assert indo.variant is None
        assert indo.image_url == "https://cdn.shopify.com/s/files/1/indo-gold.jpg"

        rasta = by_url["https://fragbox.ca/products/rasta-zoa"]
        assert rasta.title_raw == "Rasta Zoa — 3 polyps"
        assert rasta.price_cad == 60.0
        assert rasta.sale_price_cad == 45.0
        assert rasta.image_url == "https://cdn.shopify.com/s/files/1/rasta-3.jpg"

    def test_catalog_status_always_available(self, catalog_payload, source, make_fetcher):
        fetcher = make_fetcher({
            CATALOG_PAGE.format(1): catalog_payload,
            CATALOG_PAGE.format(2): {"products": []},
        })
        listings = ShopifyExtractor(fetcher).extract_catalog(source)
        assert all(item.status == "available" for item in listings)

    def test_page_cap(self, catalog_payload, source, make_fetcher):
        fetcher = make_fetcher({
            CATALOG_PAGE.format(1): catalog_payload,
            CATALOG_PAGE.format(2): catalog_payload,
            CATALOG_PAGE.format(3): catalog_payload,
        })
        listings = ShopifyExtractor(fetcher, max_pages=2).extract_catalog(source)
        assert len(listings) == 4
        assert CATALOG_PAGE.format(3) not in fetcher.calls

    def test_page_size_in_url(self, source, make_fetcher):
        fetcher = make_fetcher({"https://fragbox.ca/products.json?limit=25&page=1": {"products": []}})
        assert ShopifyExtractor(fetcher, page_size=25).extract_catalog(source) == []

    def test_fetch_error_propagates(self, source, make_fetcher):
        with pytest.raises(FetchError):
            ShopifyExtractor(make_fetcher()).extract_catalog(source)

    def test_malformed_page_raises(self, source, make_fetcher):
        fetcher = make_fetcher({CATALOG_PAGE.format(1): {"items": []}})
        with pytest.raises(ValueError):
            ShopifyExtractor(fetcher).extract_catalog(source)

    def test_later_page_failure_keeps_earlier_pages(self, catalog_payload, source, make_fetcher):
        fetcher = make_fetcher({
            CATALOG_PAGE.format(1): catalog_payload,
            CATALOG_PAGE.format(2): FetchError(CATALOG_PAGE.format(2), status=503, retryable=True),
        })
        with pytest.raises(PartialCatalogError) as excinfo:
            ShopifyExtractor(fetcher).extract_catalog(source)

        assert excinfo.value.pages == 1
        assert {item.url for item in excinfo.value.listings} == {
            "https://fragbox.ca/products/indo-gold-torch",
            "https://fragbox.ca/products/rasta-zoa",
        }
        assert "HTTP 503" in str(excinfo.value)

    def test_later_page_malformed_keeps_earlier_pages(self, catalog_payload, source, make_fetcher):
        fetcher = make_fetcher({
            CATALOG_PAGE.format(1): catalog_payload,
            CATALOG_PAGE.format(2): catalog_payload,
            CATALOG_PAGE.format(3): {"items": []},
        })
        with pytest.raises(PartialCatalogError) as excinfo:
            ShopifyExtractor(fetcher).extract_catalog(source)
        assert excinfo.value.pages == 2
        assert len(excinfo.value.listings) == 4
