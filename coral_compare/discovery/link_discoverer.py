"""
Product Link Discovery

Walks a category or archive page and its paginated continuations,
collecting same-host product links. Archive pages are tried as
"?paged=N" first and "/page/N/" second, which covers both WooCommerce
permalink styles.
"""

import logging
import re
from typing import Iterator, List, Optional, Set
from urllib.parse import parse_qsl, urlencode, urljoin, urlsplit, urlunsplit

from bs4 import BeautifulSoup

from ..common import constants
from ..common.url_utils import canonical_product_url, domain_of
from ..net.fetcher import FetchError, HttpFetcher
from ..net.pacing import PacingPolicy, no_pacing

logger = logging.getLogger(__name__)

PRODUCT_PATH_MARKERS = ('/product/', '/products/', '/produit/')

_PAGE_SEGMENT = re.compile(r'/page/\d+/?$')


def is_product_path(path: str) -> bool:
    p = (path or '').lower()
    return any(marker in p for marker in PRODUCT_PATH_MARKERS)


def paged_query_url(base_url: str, page: int) -> str:
    """Category URL with ?paged=N set (other parameters kept)."""
    parts = urlsplit(base_url)
    query = [(k, v) for k, v in parse_qsl(parts.query, keep_blank_values=True) if k != 'paged']
    query.append(('paged', str(page)))
    return urlunsplit((parts.scheme, parts.netloc, parts.path, urlencode(query), ''))


def paged_path_url(base_url: str, page: int) -> str:
    """Category URL with /page/N/ appended to the path (query kept)."""
    parts = urlsplit(base_url)
    path = _PAGE_SEGMENT.sub('', parts.path.rstrip('/') + '/').rstrip('/')
    return urlunsplit((parts.scheme, parts.netloc, f"{path}/page/{page}/", parts.query, ''))


def page_candidates(base_url: str, page: int) -> List[str]:
    """URLs to try for a page number: the category itself for page 1."""
    if page <= 1:
        return [base_url]
    return [paged_query_url(base_url, page), paged_path_url(base_url, page)]


def extract_product_links(html: str, page_url: str) -> List[str]:
    """
    Return canonical same-host product URLs found in a page, in page order.

    Args:
        html: Page HTML
        page_url: URL the page was fetched from
    """
    soup = BeautifulSoup(html, 'lxml')
    host = domain_of(page_url)
    links: List[str] = []
    seen: Set[str] = set()

    for anchor in soup.find_all('a', href=True):
        href = anchor['href'].strip()
        if not href or href.startswith(('#', 'mailto:', 'tel:', 'javascript:')):
            continue
        absolute = urljoin(page_url, href)
        parts = urlsplit(absolute)
        if parts.scheme not in ('http', 'https') or domain_of(absolute) != host:
            continue
        if not is_product_path(parts.path):
            continue
        canonical = canonical_product_url(absolute)
        if canonical not in seen:
            seen.add(canonical)
            links.append(canonical)

    return links


class LinkDiscoverer:
    """
    Discovers product URLs from a paginated category page.

    Usage:
        discoverer = LinkDiscoverer(fetcher, pacing=PacingPolicy(0.8, 0.4))
        urls = discoverer.discover("https://shop.example/product-category/zoa/")
    """

    def __init__(
        self,
        fetcher: HttpFetcher,
        max_pages: int = constants.LINK_DISCOVERY_MAX_PAGES,
        pacing: Optional[PacingPolicy] = None,
    ):
        self.fetcher = fetcher
        self.max_pages = max_pages
        self.pacing = pacing or no_pacing()
        self.product_urls: List[str] = []
        self.pages_fetched = 0

    def _fetch_page_links(self, base_url: str, page: int, known: Set[str]) -> Optional[List[str]]:
        """
        Fetch one page number and return its new links.

        Candidates are tried in order; the next one is used when a
        candidate fails or adds nothing new. Page 1 errors propagate.

        Returns:
            New links (possibly empty), or None when every candidate failed
        """
        candidates = page_candidates(base_url, page)
        new_links: Optional[List[str]] = None

        for candidate in candidates:
            try:
                html = self.fetcher.fetch_html(candidate)
            except FetchError as e:
                if page <= 1:
                    raise
                logger.debug("Page %d candidate failed: %s", page, e)
                continue

            self.pages_fetched += 1
            found = [u for u in extract_product_links(html, candidate) if u not in known]
            logger.debug("%s: %d new links", candidate, len(found))
            if found:
                return found
            new_links = []

        return new_links

    def iter_links(self, base_url: str) -> Iterator[str]:
        """Yield new product links page by page until a page adds none."""
        known: Set[str] = set()

        for page in self.pacing.pace(range(1, self.max_pages + 1)):
            new_links = self._fetch_page_links(base_url, page, known)
            if not new_links:
                logger.debug("%s: pagination ended at page %d", base_url, page)
                return
            for url in new_links:
                known.add(url)
                yield url
        else:
            logger.warning("%s: page cap (%d) reached", base_url, self.max_pages)

    def discover(self, base_url: str) -> List[str]:
        """
        Discover every product URL reachable from a category page.

        Raises:
            FetchError: when the first page cannot be fetched
        """
        self.product_urls = list(self.iter_links(base_url))
        logger.info("Found %d product URLs under %s", len(self.product_urls), base_url)
        return self.product_urls

    def save_urls(self, filepath: str):
        """Save discovered URLs to a file, one per line."""
        with open(filepath, "w", encoding="utf-8") as f:
            for url in self.product_urls:
                f.write(url + "\n")

        logger.info("Saved %d URLs to %s", len(self.product_urls), filepath)

    def get_stats(self) -> dict:
        """Return discovery statistics."""
        return {
            "products_found": len(self.product_urls),
            "pages_fetched": self.pages_fetched,
        }
