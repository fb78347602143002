#!/usr/bin/env python3
"""
Trigger a Deployed Scrape

Calls {SITE_URL}/api/scrape?secret=... and prints the run report. No
client timeout is set: a full run takes tens of minutes.

Usage:
    python3 scripts/run_scrape.py

SETUP:
    Set environment variables (or a .env file at the repo root):
    - SITE_URL: Base URL of the deployment (e.g., "https://corals.example.com")
    - SCRAPE_SECRET: Shared secret configured on the endpoint
"""

import logging
import os
import sys

import requests

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from coral_compare.common.log_config import setup_logging
from coral_compare.common.settings import Settings

logger = logging.getLogger(__name__)


def trigger_url(settings: Settings) -> str:
    return f"{settings.site_url.rstrip('/')}/api/scrape"


def main() -> int:
    setup_logging()
    settings = Settings.from_env()

    if not settings.site_url or not settings.scrape_secret:
        logger.error("Missing SITE_URL or SCRAPE_SECRET")
        return 1

    url = trigger_url(settings)
    logger.info("Triggering scrape: %s", url)

    try:
        response = requests.get(url, params={"secret": settings.scrape_secret})
    except requests.RequestException as e:
        logger.error("Request failed: %s", e)
        return 1

    print(f"Status: {response.status_code}")
    print(response.text)

    if not response.ok:
        logger.error("Scrape failed with HTTP %d", response.status_code)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
