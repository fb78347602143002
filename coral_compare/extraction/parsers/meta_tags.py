"""
Meta Tag Parser

Reads product facts from <meta> tags and microdata attributes: the
Open Graph price tags, itemprop="price" and the og:title / og:image tags.
"""

from typing import List, Optional

from bs4 import BeautifulSoup

from ...common.text_utils import clean_text, parse_price

PRICE_META_PROPERTIES = ['product:price:amount', 'og:price:amount']


def _meta_content(soup: BeautifulSoup, key: str) -> Optional[str]:
    tag = soup.find('meta', attrs={'property': key}) or soup.find('meta', attrs={'name': key})
    if tag and tag.get('content'):
        return tag['content'].strip()
    return None


def extract_meta_price(soup: BeautifulSoup) -> Optional[float]:
    """
    Read the first price out of product:price:amount, og:price:amount
    or itemprop="price" (content attribute first, then text).
    """
    for key in PRICE_META_PROPERTIES:
        price = parse_price(_meta_content(soup, key))
        if price is not None:
            return price

    for el in soup.select('[itemprop="price"]'):
        value = el.get('content') or el.get_text(" ", strip=True)
        price = parse_price(value)
        if price is not None:
            return price

    return None


def extract_og_title(soup: BeautifulSoup) -> str:
    return clean_text(_meta_content(soup, 'og:title'))


def extract_og_images(soup: BeautifulSoup) -> List[str]:
    """og:image, og:image:secure_url and twitter:image, in that order."""
    urls = []
    for key in ('og:image:secure_url', 'og:image', 'twitter:image'):
        for tag in soup.find_all('meta', attrs={'property': key}) + soup.find_all('meta', attrs={'name': key}):
            content = (tag.get('content') or '').strip()
            if content and content not in urls:
                urls.append(content)
    return urls
