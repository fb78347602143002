"""Shared test fixtures."""

import json
from pathlib import Path

import pytest

from coral_compare.models import Listing
from coral_compare.net.fetcher import FetchError

FIXTURES_DIR = Path(__file__).parent / "fixtures"


class FakeFetcher:
    """
    Stand-in for HttpFetcher serving canned responses by exact URL.

    Route values: str (HTML body), dict/list (JSON payload), or an
    exception instance to raise. Unknown URLs raise FetchError 404.
    """

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.calls = []
        self.closed = False

    def _lookup(self, url):
        self.calls.append(url)
        if url not in self.routes:
            raise FetchError(url, status=404)
        value = self.routes[url]
        if isinstance(value, Exception):
            raise value
        return value

    def fetch_html(self, url, max_attempts=None):
        value = self._lookup(url)
        if not isinstance(value, str):
            return json.dumps(value)
        return value

    def fetch_json(self, url, max_attempts=None):
        value = self._lookup(url)
        if isinstance(value, str):
            return json.loads(value)
        return value

    def close(self):
        self.closed = True


@pytest.fixture
def fixtures_dir():
    """Return path to fixtures directory."""
    return FIXTURES_DIR


@pytest.fixture
def woocommerce_page_html():
    """Load the WooCommerce product page fixture."""
    return (FIXTURES_DIR / "woocommerce_product.html").read_text(encoding="utf-8")


@pytest.fixture
def shopify_page_html():
    """Load the Shopify product page fixture (with analytics meta)."""
    return (FIXTURES_DIR / "shopify_product.html").read_text(encoding="utf-8")


@pytest.fixture
def category_page_html():
    """Load the WooCommerce category page fixture."""
    return (FIXTURES_DIR / "category_page.html").read_text(encoding="utf-8")


@pytest.fixture
def product_js_payload():
    """Load the /products/{handle}.js fixture."""
    return json.loads((FIXTURES_DIR / "product_js.json").read_text(encoding="utf-8"))


@pytest.fixture
def catalog_payload():
    """Load the /products.json fixture."""
    return json.loads((FIXTURES_DIR / "products_catalog.json").read_text(encoding="utf-8"))


@pytest.fixture
def make_listing():
    """Factory for valid listings with overridable fields."""
    def _make(**overrides):
        fields = dict(
            shop_id="fragbox",
            category="torch",
            title_raw="Holy Grail Torch",
            url="https://fragbox.ca/products/holy-grail-torch",
            image_url="https://cdn.shopify.com/s/files/holy-grail.jpg",
            price_cad=120.0,
        )
        fields.update(overrides)
        return Listing(**fields)
    return _make


@pytest.fixture
def make_fetcher():
    """Return the FakeFetcher class: make_fetcher({url: response, ...})."""
    return FakeFetcher
