"""
Configuration Loader

Loads YAML configuration files for scrape sources, shop display labels
and pipeline tuning (pacing, page caps, retry budget).
"""

from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from . import constants

# scrape_settings.yaml key -> constants default
_SETTING_DEFAULTS = {
    "max_fetch_attempts": constants.MAX_FETCH_ATTEMPTS,
    "probe_attempts": constants.PROBE_ATTEMPTS,
    "catalog_page_size": constants.CATALOG_PAGE_SIZE,
    "catalog_max_pages": constants.CATALOG_MAX_PAGES,
    "link_discovery_max_pages": constants.LINK_DISCOVERY_MAX_PAGES,
    "page_delay": constants.PAGE_DELAY_SECONDS,
    "page_jitter": constants.PAGE_JITTER_SECONDS,
    "link_delay": constants.LINK_DELAY_SECONDS,
    "link_jitter": constants.LINK_JITTER_SECONDS,
    "source_delay": constants.SOURCE_DELAY_SECONDS,
    "source_jitter": constants.SOURCE_JITTER_SECONDS,
}


def _get_config_dir() -> Path:
    """Get the config directory path."""
    # Try relative to this file first
    module_dir = Path(__file__).parent.parent.parent
    config_dir = module_dir / 'config'

    if config_dir.exists():
        return config_dir

    # Try current working directory
    cwd_config = Path.cwd() / 'config'
    if cwd_config.exists():
        return cwd_config

    raise FileNotFoundError(
        f"Config directory not found. Tried: {config_dir}, {cwd_config}"
    )


def load_config(filename: str) -> Dict[str, Any]:
    """
    Load a YAML configuration file.

    Args:
        filename: Name of the config file (e.g., 'sources.yaml')

    Returns:
        Parsed YAML content as dictionary (empty dict for an empty file)

    Raises:
        FileNotFoundError: If config file doesn't exist
    """
    config_path = _get_config_dir() / filename

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f) or {}


def load_sources(filename: str = 'sources.yaml') -> List[Dict[str, Any]]:
    """
    Load the list of origins to crawl.

    Returns:
        List of raw source dicts with url, shop_id, category, is_active

    Example:
        [
            {'url': 'https://fragbox.ca/collections/torch', 'shop_id': 'fragbox',
             'category': 'torch', 'is_active': True},
            ...
        ]
    """
    config = load_config(filename)
    return list(config.get('sources', []) or [])


def load_shop_labels() -> Dict[str, str]:
    """
    Load shop display labels keyed by bare domain (no "www.").

    Example:
        {'fragbox.ca': 'Fragbox', 'reefsolution.com': 'Reef Solution', ...}
    """
    config = load_config('shops.yaml')
    labels = config.get('shops', {}) or {}
    return {str(domain).lower(): str(label) for domain, label in labels.items()}


def load_scrape_settings(overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Load pipeline tuning values, falling back to the code defaults.

    Args:
        overrides: Values taking precedence over both YAML and defaults

    Returns:
        Dictionary with every key of the defaults table populated
    """
    settings = dict(_SETTING_DEFAULTS)
    try:
        config = load_config('scrape_settings.yaml')
    except FileNotFoundError:
        config = {}

    for key, value in (config.get('scrape', {}) or {}).items():
        if key in settings and value is not None:
            settings[key] = type(settings[key])(value)

    if overrides:
        settings.update(overrides)
    return settings
