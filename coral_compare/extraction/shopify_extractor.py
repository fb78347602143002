"""
Shopify Extractor

Reads Shopify storefront JSON: a single product through
/products/{handle}.js, or a whole shop through the paginated
/products.json catalog. Both paths go through the same variant
selection and emit one listing per product.
"""

import logging
from typing import Iterator, List, Optional
from urllib.parse import urljoin, urlsplit

from ..classification.torch import enforce_torch
from ..common import constants
from ..common.url_utils import canonical_product_url, origin_of
from ..models import Listing, SourceRow
from ..net.fetcher import FetchError, HttpFetcher
from ..net.pacing import PacingPolicy, no_pacing
from .parsers.shopify_json import parse_catalog_page, parse_product_js
from .variant_selector import build_listing

logger = logging.getLogger(__name__)


class PartialCatalogError(Exception):
    """A catalog page after the first failed; earlier pages were read."""

    def __init__(self, listings: List[Listing], pages: int, cause: Exception):
        self.listings = listings
        self.pages = pages
        super().__init__(f"catalog incomplete after page {pages}: {cause}")


def product_handle(url: str) -> Optional[str]:
    """Return the handle in ".../products/{handle}" or None."""
    segments = [s for s in urlsplit(url).path.split('/') if s]
    if 'products' in segments:
        index = segments.index('products')
        if index + 1 < len(segments):
            handle = segments[index + 1]
            return handle[:-3] if handle.endswith('.js') else handle
    return None


def product_js_url(url: str) -> Optional[str]:
    """Build "{origin}/products/{handle}.js" for a product page URL."""
    handle = product_handle(url)
    if not handle:
        return None
    return f"{origin_of(url)}/products/{handle}.js"


class ShopifyExtractor:
    """
    Builds listings from Shopify storefront JSON.

    Usage:
        extractor = ShopifyExtractor(fetcher)
        listing = extractor.extract_product(url, "candycorals", "torch")
        listings = extractor.extract_catalog(source)
    """

    def __init__(
        self,
        fetcher: HttpFetcher,
        page_size: int = constants.CATALOG_PAGE_SIZE,
        max_pages: int = constants.CATALOG_MAX_PAGES,
        pacing: Optional[PacingPolicy] = None,
    ):
        """
        Initialize the extractor.

        Args:
            fetcher: Shared HTTP fetcher
            page_size: Products per /products.json page
            max_pages: Hard cap on catalog pages walked per shop
            pacing: Delay policy between catalog pages
        """
        self.fetcher = fetcher
        self.page_size = page_size
        self.max_pages = max_pages
        self.pacing = pacing or no_pacing()

    def extract_product(self, url: str, shop_id: str, category: str) -> Optional[Listing]:
        """
        Extract one listing from the product JSON endpoint.

        Args:
            url: Product page URL (any form, query and locale prefix allowed)
            shop_id: Owning shop
            category: Source default category

        Returns:
            Listing, or None if the URL has no product handle or the
            payload is not a product

        Raises:
            FetchError: when the endpoint cannot be fetched
            ValueError: when the body is not JSON
        """
        js_url = product_js_url(url)
        if not js_url:
            return None

        product = parse_product_js(self.fetcher.fetch_json(js_url))
        if product is None:
            logger.debug("No product payload at %s", js_url)
            return None

        listing = build_listing(product, canonical_product_url(url), shop_id, category)
        return enforce_torch(listing)

    def catalog_page_url(self, origin: str, page: int) -> str:
        return f"{origin}/products.json?limit={self.page_size}&page={page}"

    def iter_catalog_pages(self, source: SourceRow) -> Iterator[List[Listing]]:
        """
        Walk /products.json page by page until an empty page.

        Yields one list of listings per non-empty page. Listings carry
        status "available": the catalog endpoint does not reliably report
        stock.
        """
        origin = origin_of(source.url)

        for page in self.pacing.pace(range(1, self.max_pages + 1)):
            products = parse_catalog_page(self.fetcher.fetch_json(self.catalog_page_url(origin, page)))
            if not products:
                logger.debug("%s: catalog ended at page %d", origin, page)
                return

            listings = []
            for product in products:
                if not product.handle:
                    continue
                url = canonical_product_url(urljoin(origin + '/', f"products/{product.handle}"))
                listings.append(enforce_torch(build_listing(product, url, source.shop_id, source.category)))
            yield listings
        else:
            logger.warning("%s: catalog page cap (%d) reached", origin, self.max_pages)

    def extract_catalog(self, source: SourceRow) -> List[Listing]:
        """
        Collect every catalog listing for a source.

        Raises:
            FetchError: when the first page cannot be fetched
            ValueError: when the first page is not a product catalog
            PartialCatalogError: when a later page fails; it carries the
                listings read from the pages before it
        """
        listings: List[Listing] = []
        pages = 0
        try:
            for page_listings in self.iter_catalog_pages(source):
                pages += 1
                listings.extend(page_listings)
        except (FetchError, ValueError) as e:
            if pages == 0:
                raise
            logger.warning("%s: catalog stopped after page %d: %s", source.url, pages, e)
            raise PartialCatalogError(listings, pages, e) from e

        logger.info("%s: %d catalog products", source.url, len(listings))
        return listings
