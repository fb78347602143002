"""
Image Selector

Picks the product image on a rendered product page. Candidates are
gathered in priority order, resolved against the page URL, and the
first one that does not look like a logo, placeholder or thumbnail
wins.

Priority:
    1. Open Graph image tags
    2. JSON-LD product image
    3. Featured image element (lazy-load attributes first)
    4. Gallery images
    5. First dozen <img> tags in the product region
"""

import re
from typing import Iterator, List, Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag

from .meta_tags import extract_og_images
from .structured_data import StructuredDataParser

BAD_IMAGE_WORDS = ['logo', 'placeholder', 'favicon', 'site-icon', 'siteicon']

# Thumbnail dimensions embedded in the filename: -150x150.jpg, -300x.png
_THUMB_SUFFIX = re.compile(r'-\d{2,4}x(\d{2,4})?(?=\.[a-z0-9]{3,4}$|$)', re.IGNORECASE)

LAZY_ATTRIBUTES = ['data-src', 'data-lazy-src', 'data-original', 'src']

FEATURED_SELECTORS = [
    '.woocommerce-product-gallery__image img',
    '.wp-post-image',
    '.product__media img',
    '.product-featured-media img',
    '.product-single__photo img',
    '[data-product-featured-image]',
    'img.featured-image',
]

GALLERY_SELECTORS = [
    '.woocommerce-product-gallery img',
    '.product__media-list img',
    '.product-gallery img',
    '.product-single__thumbnails img',
    '.product-images img',
]

MAX_REGION_IMAGES = 12


def is_bad_image_url(url: Optional[str]) -> bool:
    """
    Check whether an image URL is clearly not a product photo.

    Rejects data: URIs, SVGs, logos, placeholders, favicons, site icons
    and resized thumbnails such as "coral-150x150.jpg".
    """
    if not url:
        return True
    lowered = url.strip().lower()
    if lowered.startswith('data:'):
        return True

    path = lowered.split('?', 1)[0].split('#', 1)[0]
    if path.endswith('.svg'):
        return True
    if any(word in path for word in BAD_IMAGE_WORDS):
        return True

    filename = path.rsplit('/', 1)[-1]
    return bool(_THUMB_SUFFIX.search(filename))


def _first_srcset_url(srcset: str) -> Optional[str]:
    first = srcset.split(',')[0].strip()
    return first.split()[0] if first else None


def image_candidates_from_tag(img: Tag) -> List[str]:
    """Every URL an <img> advertises, lazy-load attributes first."""
    urls = []
    for attr in LAZY_ATTRIBUTES:
        value = img.get(attr)
        if value and value.strip():
            urls.append(value.strip())
    for attr in ('data-srcset', 'srcset'):
        value = img.get(attr)
        if value:
            first = _first_srcset_url(value)
            if first:
                urls.append(first)
    return urls


class ImageSelector:
    """
    Selects the best product image from a page.

    Usage:
        selector = ImageSelector()
        image_url = selector.select(soup, page_url)
    """

    def __init__(self):
        self.structured_parser = StructuredDataParser()

    def candidates(self, soup: BeautifulSoup, page_url: str, region: Optional[Tag] = None) -> Iterator[str]:
        """Yield absolute candidate URLs in priority order."""
        root = region if region is not None else soup

        for url in extract_og_images(soup):
            yield urljoin(page_url, url)

        image = self.structured_parser.extract_image(self.structured_parser.parse(soup))
        if image:
            yield urljoin(page_url, image)

        for selector in FEATURED_SELECTORS:
            for img in root.select(selector)[:1]:
                for url in image_candidates_from_tag(img):
                    yield urljoin(page_url, url)

        for selector in GALLERY_SELECTORS:
            for img in root.select(selector):
                for url in image_candidates_from_tag(img):
                    yield urljoin(page_url, url)

        for img in root.find_all('img')[:MAX_REGION_IMAGES]:
            for url in image_candidates_from_tag(img):
                yield urljoin(page_url, url)

    def select(self, soup: BeautifulSoup, page_url: str, region: Optional[Tag] = None) -> Optional[str]:
        """
        Return the first acceptable image URL.

        Args:
            soup: Parsed page
            page_url: URL the page was fetched from, for resolving relative paths
            region: Product container to restrict element lookups to

        Returns:
            Absolute image URL or None
        """
        for url in self.candidates(soup, page_url, region):
            if not is_bad_image_url(url):
                return url
        return None
