"""
Network access for the scrape pipeline.

Modules:
    fetcher - HttpFetcher with retry/backoff, FetchError
    pacing  - PacingPolicy for rate-limited task sequences
"""

from .fetcher import FetchError, HttpFetcher, backoff_delay, parse_retry_after
from .pacing import PacingPolicy, no_pacing

__all__ = [
    'FetchError',
    'HttpFetcher',
    'backoff_delay',
    'parse_retry_after',
    'PacingPolicy',
    'no_pacing',
]
