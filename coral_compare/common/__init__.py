# Common utilities
from .config_loader import (
    load_config,
    load_scrape_settings,
    load_shop_labels,
    load_sources,
)
from .log_config import setup_logging
from .settings import Settings
from .text_utils import clean_text, norm_compact, norm_space, parse_price
from .url_utils import canonical_product_url, domain_of, normalize_url, origin_of
