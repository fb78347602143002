"""
Scrape Orchestrator

Drives one full run: clear the listing table, load active sources, crawl
each source in its detected mode, validate and upsert the listings, and
report per-source counts and errors.

Sources, pages and links are processed strictly one at a time so the
per-origin rate limits and backoff stay meaningful.
"""

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import urlsplit

import requests
from supabase import create_client

from .common.config_loader import load_scrape_settings
from .common.settings import Settings
from .discovery.link_discoverer import LinkDiscoverer
from .discovery.platform_detector import CrawlMode, PlatformDetector
from .extraction.html_extractor import HtmlExtractor
from .extraction.shopify_extractor import PartialCatalogError, ShopifyExtractor
from .extraction.validator import ListingValidator
from .models import Listing, RunReport, SourceReport, SourceRow
from .net.fetcher import FetchError, HttpFetcher
from .net.pacing import PacingPolicy, no_pacing
from .storage.listing_store import ListingStore, SupabaseListingStore
from .storage.sources import SourceRepository, SupabaseSourceRepository

logger = logging.getLogger(__name__)

# Failures that cost one product, never the source
EXTRACTION_ERRORS = (FetchError, requests.RequestException, ValueError, KeyError, TypeError, AttributeError)


class ScrapeOrchestrator:
    """
    Runs the scrape pipeline over every active source.

    Usage:
        orchestrator = build_orchestrator(Settings.from_env())
        report = orchestrator.run()
        print(report.to_dict())
    """

    def __init__(
        self,
        store: ListingStore,
        sources: SourceRepository,
        fetcher: HttpFetcher,
        detector: Optional[PlatformDetector] = None,
        shopify: Optional[ShopifyExtractor] = None,
        html: Optional[HtmlExtractor] = None,
        discoverer: Optional[LinkDiscoverer] = None,
        validator: Optional[ListingValidator] = None,
        source_pacing: Optional[PacingPolicy] = None,
        link_pacing: Optional[PacingPolicy] = None,
    ):
        self.store = store
        self.sources = sources
        self.fetcher = fetcher
        self.detector = detector or PlatformDetector(fetcher)
        self.shopify = shopify or ShopifyExtractor(fetcher)
        self.html = html or HtmlExtractor(fetcher)
        self.discoverer = discoverer or LinkDiscoverer(fetcher)
        self.validator = validator or ListingValidator()
        self.source_pacing = source_pacing or no_pacing()
        self.link_pacing = link_pacing or no_pacing()

    def run(self, only_url: Optional[str] = None) -> RunReport:
        """
        Run a full scrape.

        Args:
            only_url: Restrict the run to the source with this URL

        Returns:
            RunReport with one entry per source

        Raises:
            Exception: when the store cannot be cleared or sources cannot
                be loaded; per-source failures are reported, not raised
        """
        self.store.delete_all()
        sources = self.sources.load_active()
        if only_url:
            sources = [s for s in sources if s.url == only_url]
        logger.info("Scraping %d active sources", len(sources))

        report = RunReport()
        for source in self.source_pacing.pace(sources):
            report.sources.append(self.run_source(source))

        logger.info("Run finished: %d listings, %d failed sources",
                    report.total, len(report.failed_sources))
        return report

    def run_source(self, source: SourceRow) -> SourceReport:
        """
        Crawl one source; any failure is recorded against it.

        A catalog that breaks off after its first page still persists the
        pages it read, and the report carries both the count and the error.
        """
        error = None
        try:
            try:
                listings = self.collect(source)
            except PartialCatalogError as e:
                listings, error = e.listings, str(e)
            found = self.persist(listings)
        except Exception as e:
            logger.exception("Source failed: %s", source.url)
            return SourceReport(source=source.url, found=0, error=str(e) or type(e).__name__)

        logger.info("%s: %d listings", source.url, found)
        return SourceReport(source=source.url, found=found, error=error)

    def collect(self, source: SourceRow) -> List[Listing]:
        """Extract candidate listings for a source in its detected mode."""
        mode = self.detector.detect(source)
        logger.info("%s: %s mode", source.url, mode.value)

        if mode is CrawlMode.CATALOG:
            return self.shopify.extract_catalog(source)

        listings = []
        urls = self.discoverer.discover(source.url)
        for url in self.link_pacing.pace(urls):
            try:
                listing = self.extract_link(url, source)
            except EXTRACTION_ERRORS as e:
                logger.warning("Skipping %s: %s", url, e)
                continue
            if listing is not None:
                listings.append(listing)
        return listings

    def extract_link(self, url: str, source: SourceRow) -> Optional[Listing]:
        """
        Extract one discovered product link.

        Shopify product paths go through the .js endpoint first and the
        rendered page second; anything else is parsed as HTML.
        """
        if '/products/' in urlsplit(url).path:
            try:
                listing = self.shopify.extract_product(url, source.shop_id, source.category)
            except (FetchError, ValueError) as e:
                logger.debug("Product JSON unavailable for %s: %s", url, e)
                listing = None
            if listing is not None:
                return listing
            return self.html.extract_shopify(url, source.shop_id, source.category)

        return self.html.extract(url, source.shop_id, source.category)

    def persist(self, listings: List[Listing]) -> int:
        """Validate candidates and upsert the survivors; returns rows written."""
        valid = []
        for listing in listings:
            cleaned = self.validator.clean(listing)
            if cleaned is not None:
                valid.append(cleaned)

        if len(valid) < len(listings):
            logger.info("Discarded %d invalid listings", len(listings) - len(valid))
        if not valid:
            return 0
        return self.store.upsert(valid)


def build_pipeline(
    store: ListingStore,
    sources: SourceRepository,
    settings: Optional[Dict[str, Any]] = None,
    fetcher: Optional[HttpFetcher] = None,
) -> ScrapeOrchestrator:
    """
    Wire an orchestrator from scrape settings (config/scrape_settings.yaml).

    Args:
        store: Listing store
        sources: Source repository
        settings: Tuning values; loaded from YAML when omitted
        fetcher: HTTP fetcher; created from the settings when omitted
    """
    s = settings or load_scrape_settings()
    fetcher = fetcher or HttpFetcher(max_attempts=s['max_fetch_attempts'])

    return ScrapeOrchestrator(
        store=store,
        sources=sources,
        fetcher=fetcher,
        detector=PlatformDetector(fetcher, probe_attempts=s['probe_attempts']),
        shopify=ShopifyExtractor(
            fetcher,
            page_size=s['catalog_page_size'],
            max_pages=s['catalog_max_pages'],
            pacing=PacingPolicy(s['page_delay'], s['page_jitter']),
        ),
        html=HtmlExtractor(fetcher),
        discoverer=LinkDiscoverer(
            fetcher,
            max_pages=s['link_discovery_max_pages'],
            pacing=PacingPolicy(s['page_delay'], s['page_jitter']),
        ),
        source_pacing=PacingPolicy(s['source_delay'], s['source_jitter']),
        link_pacing=PacingPolicy(s['link_delay'], s['link_jitter']),
    )


def build_orchestrator(settings: Settings) -> ScrapeOrchestrator:
    """
    Wire the production pipeline against Supabase.

    Raises:
        RuntimeError: if the Supabase settings are missing
    """
    settings.require_supabase()
    client = create_client(settings.supabase_url, settings.supabase_key)
    return build_pipeline(SupabaseListingStore(client), SupabaseSourceRepository(client))


def run_scrape(settings: Optional[Settings] = None) -> RunReport:
    """Run one production scrape with settings from the environment."""
    return build_orchestrator(settings or Settings.from_env()).run()
