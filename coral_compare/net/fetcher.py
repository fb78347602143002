"""
HTTP Fetcher

Resilient GET for storefront pages and JSON endpoints.
Handles rate limiting (429), server errors (5xx) and transport failures
with exponential backoff plus jitter, honoring Retry-After when sent.
"""

import logging
import random
import time
from typing import Any, Callable, Optional

import requests

from ..common import constants

logger = logging.getLogger(__name__)


class FetchError(Exception):
    """A GET that did not produce a 2xx response."""

    def __init__(self, url: str, status: Optional[int] = None,
                 message: str = "", retryable: bool = False):
        self.url = url
        self.status = status
        self.retryable = retryable
        detail = message or (f"HTTP {status}" if status is not None else "request failed")
        super().__init__(f"{detail} for {url}")


def is_retryable_status(status: int) -> bool:
    """429 and every 5xx are worth retrying."""
    return status == 429 or 500 <= status <= 599


def parse_retry_after(value: Optional[str]) -> Optional[float]:
    """Return Retry-After seconds when it is a positive number, else None."""
    if not value:
        return None
    try:
        seconds = float(value.strip())
    except (TypeError, ValueError):
        return None
    return seconds if seconds > 0 else None


def backoff_delay(attempt: int, retry_after: Optional[float] = None) -> float:
    """
    Delay in seconds before the next attempt (jitter not included).

    Args:
        attempt: 1-based number of the attempt that just failed
        retry_after: Server-provided Retry-After seconds, if any
    """
    if retry_after is not None and retry_after > 0:
        return retry_after
    return min(
        constants.BACKOFF_CAP_SECONDS,
        constants.BACKOFF_BASE_SECONDS * (2 ** (attempt - 1)),
    )


class HttpFetcher:
    """
    GET client with retry/backoff shared by a whole scrape run.

    Usage:
        fetcher = HttpFetcher()
        html = fetcher.fetch_html("https://shop.example/products/torch")
        data = fetcher.fetch_json("https://shop.example/products.json?limit=1&page=1")
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        max_attempts: int = constants.MAX_FETCH_ATTEMPTS,
        timeout: Optional[float] = 60,
        sleep: Callable[[float], None] = time.sleep,
        rng: Callable[[], float] = random.random,
    ):
        """
        Initialize the fetcher.

        Args:
            session: Shared requests session (one is created if omitted)
            max_attempts: Default retry budget per URL
            timeout: Per-request socket timeout in seconds (None = wait forever)
            sleep: Sleep function, injectable for tests
            rng: Uniform [0, 1) source for jitter, injectable for tests
        """
        self.session = session or requests.Session()
        self.session.headers.update({
            "User-Agent": constants.USER_AGENT,
            "Accept-Language": constants.ACCEPT_LANGUAGE,
            "Cache-Control": "no-cache",
            "Pragma": "no-cache",
        })
        self.max_attempts = max_attempts
        self.timeout = timeout
        self._sleep = sleep
        self._rng = rng
        self.requests_made = 0

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.session.close()

    def close(self):
        self.session.close()

    def fetch_with_retry(self, url: str, max_attempts: Optional[int] = None,
                         accept: Optional[str] = None) -> requests.Response:
        """
        GET a URL, retrying 429/5xx/transport failures with backoff.

        Args:
            url: Absolute URL
            max_attempts: Retry budget (defaults to the fetcher's)
            accept: Optional Accept header for this request

        Returns:
            The 2xx response

        Raises:
            FetchError: immediately on a non-retryable status, or with the last
                retryable failure once the budget is exhausted
        """
        attempts = max(1, max_attempts or self.max_attempts)
        headers = {"Accept": accept} if accept else None
        last_error: Optional[FetchError] = None

        for attempt in range(1, attempts + 1):
            self.requests_made += 1
            retry_after = None
            try:
                response = self.session.get(url, headers=headers, timeout=self.timeout)
            except (requests.ConnectionError, requests.Timeout) as e:
                last_error = FetchError(url, message=f"{type(e).__name__}: {e}", retryable=True)
            else:
                status = response.status_code
                if 200 <= status < 300:
                    return response
                if not is_retryable_status(status):
                    raise FetchError(url, status=status)
                retry_after = parse_retry_after(response.headers.get("Retry-After"))
                last_error = FetchError(url, status=status, retryable=True)

            if attempt == attempts:
                break

            delay = backoff_delay(attempt, retry_after)
            delay += self._rng() * constants.BACKOFF_JITTER_SECONDS
            logger.warning("%s, retry %d/%d in %.1fs", last_error, attempt + 1, attempts, delay)
            self._sleep(delay)

        logger.error("Max attempts (%d) exceeded for %s", attempts, url)
        raise last_error

    def fetch_html(self, url: str, max_attempts: Optional[int] = None) -> str:
        """GET a page and return its decoded body."""
        response = self.fetch_with_retry(
            url, max_attempts,
            accept="text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        )
        return response.text

    def fetch_json(self, url: str, max_attempts: Optional[int] = None) -> Any:
        """
        GET a JSON endpoint and return the decoded payload.

        Raises:
            FetchError: as fetch_with_retry
            ValueError: if the body is not JSON
        """
        response = self.fetch_with_retry(url, max_attempts, accept="application/json")
        return response.json()
