"""
URL Normalization

Canonical URL computation used for listing de-duplication. The same
logical product URL always normalizes to the identical string regardless
of query parameter order, tracking parameters or a locale path prefix.
"""

import re
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

# "/en", "/fr", "/en-ca", "/fr_CA" as the first path segment
_LOCALE_SEGMENT = re.compile(r'^/[a-z]{2}(?:[-_][a-z]{2})?(?=/|$)', re.IGNORECASE)

TRACKING_PARAMS = frozenset({"fbclid", "gclid"})
TRACKING_PREFIXES = ("utm_",)


def is_tracking_param(key: str) -> bool:
    """Return True for analytics parameters that never change page content."""
    k = key.lower()
    return k in TRACKING_PARAMS or k.startswith(TRACKING_PREFIXES)


def strip_locale_prefix(path: str) -> str:
    """Remove leading locale segments ("/en-ca/products/x" -> "/products/x")."""
    while True:
        stripped = _LOCALE_SEGMENT.sub('', path, count=1)
        if stripped == path:
            return path
        path = stripped or '/'


def normalize_url(raw: str) -> str:
    """
    Normalize a URL for stable comparison.

    - lower-cases scheme and host, drops the fragment
    - strips a leading locale path segment (/en/, /en-ca/)
    - removes tracking query parameters (utm_*, fbclid, gclid)
    - strips trailing slashes from the path
    - sorts remaining query parameters by key

    Relative or unparseable input is returned stripped but otherwise untouched.
    """
    raw = (raw or '').strip()
    parts = urlsplit(raw)
    if not parts.scheme or not parts.netloc:
        return raw

    path = strip_locale_prefix(parts.path or '/').rstrip('/')

    query_pairs = [
        (k, v) for k, v in parse_qsl(parts.query, keep_blank_values=True)
        if not is_tracking_param(k)
    ]
    query_pairs.sort()

    return urlunsplit((
        parts.scheme.lower(),
        parts.netloc.lower(),
        path,
        urlencode(query_pairs),
        '',
    ))


def canonical_product_url(raw: str) -> str:
    """
    Normalized URL with the entire query string dropped.

    Used as the listing dedup key so "?variant=123" never creates a
    second row for the same product.
    """
    normalized = normalize_url(raw)
    parts = urlsplit(normalized)
    if not parts.scheme:
        return normalized.split('?', 1)[0].split('#', 1)[0]
    return urlunsplit((parts.scheme, parts.netloc, parts.path, '', ''))


def origin_of(url: str) -> str:
    """Return "scheme://host" for a URL."""
    parts = urlsplit((url or '').strip())
    return f"{parts.scheme.lower()}://{parts.netloc.lower()}"


def domain_of(url: str) -> str:
    """Return the bare host of a URL without a leading "www."."""
    host = urlsplit((url or '').strip()).netloc.lower()
    host = host.split('@')[-1].split(':')[0]
    return host[4:] if host.startswith('www.') else host
