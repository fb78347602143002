"""
Platform Detection

Decides how a source is crawled: a whole-shop Shopify catalog walk or
paginated link discovery with per-page extraction.
"""

import logging
from enum import Enum

from ..common import constants
from ..common.url_utils import domain_of, origin_of
from ..models import SourceRow
from ..net.fetcher import FetchError, HttpFetcher

logger = logging.getLogger(__name__)

# Origins that must always be walked through the catalog endpoint
CATALOG_ONLY_DOMAINS = ('reefsolution.com',)


class CrawlMode(str, Enum):
    CATALOG = "catalog"
    LINKS = "links"


def is_reef_solution_source(url: str) -> bool:
    """True for reefsolution.com and its subdomains."""
    host = domain_of(url)
    return any(host == d or host.endswith('.' + d) for d in CATALOG_ONLY_DOMAINS)


class PlatformDetector:
    """
    Probes source origins for a Shopify storefront catalog.

    Probe results are cached per origin for the detector's lifetime.

    Usage:
        detector = PlatformDetector(fetcher)
        mode = detector.detect(source)
    """

    def __init__(self, fetcher: HttpFetcher, probe_attempts: int = constants.PROBE_ATTEMPTS):
        self.fetcher = fetcher
        self.probe_attempts = probe_attempts
        self._cache = {}

    def is_shopify_origin(self, origin: str) -> bool:
        """
        Probe {origin}/products.json?limit=1&page=1.

        Args:
            origin: "scheme://host"

        Returns:
            True when the probe returns 2xx JSON with a "products" array.
            Any fetch or decode failure counts as "not Shopify".
        """
        origin = origin.rstrip('/')
        if origin in self._cache:
            return self._cache[origin]

        probe_url = f"{origin}/products.json?limit=1&page=1"
        try:
            data = self.fetcher.fetch_json(probe_url, max_attempts=self.probe_attempts)
            result = isinstance(data, dict) and isinstance(data.get('products'), list)
        except (FetchError, ValueError) as e:
            logger.debug("Shopify probe failed for %s: %s", origin, e)
            result = False

        self._cache[origin] = result
        return result

    def detect(self, source: SourceRow) -> CrawlMode:
        """
        Pick the crawl mode for a source.

        Order: catalog-only origins, then the Shopify probe, then link
        discovery.
        """
        if is_reef_solution_source(source.url):
            return CrawlMode.CATALOG
        if self.is_shopify_origin(origin_of(source.url)):
            return CrawlMode.CATALOG
        return CrawlMode.LINKS
