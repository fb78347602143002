"""
Shared constants for the project.

Defaults for the scrape pipeline. Values can be overridden through
config/scrape_settings.yaml (see config_loader.load_scrape_settings).
"""

# HTTP identity sent with every request
USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0 Safari/537.36"
)
ACCEPT_LANGUAGE = "en-CA,en;q=0.9,fr-CA;q=0.8,fr;q=0.7"

# Retry / backoff (seconds)
MAX_FETCH_ATTEMPTS = 10
BACKOFF_BASE_SECONDS = 1.2
BACKOFF_CAP_SECONDS = 60.0
BACKOFF_JITTER_SECONDS = 0.6
PROBE_ATTEMPTS = 3

# Shopify catalog walk
CATALOG_PAGE_SIZE = 100
CATALOG_MAX_PAGES = 200

# WooCommerce / generic archive pagination
LINK_DISCOVERY_MAX_PAGES = 80

# Pacing (interval, max jitter) in seconds
PAGE_DELAY_SECONDS = 0.8
PAGE_JITTER_SECONDS = 0.4
LINK_DELAY_SECONDS = 0.6
LINK_JITTER_SECONDS = 0.4
SOURCE_DELAY_SECONDS = 1.5
SOURCE_JITTER_SECONDS = 0.5

# Shopify sentinel for products without options
DEFAULT_VARIANT_TITLE = "Default Title"

# Listing field enumerations
STATUS_AVAILABLE = "available"
STATUS_SOLD_OUT = "sold_out"
SALE_MODES = ("wysiwyg", "per_unit")
UNIT_TYPES = ("head", "polyp", "frag")
KNOWN_CATEGORIES = ("torch", "acropora", "zoa", "montipora", "euphyllia", "other")
