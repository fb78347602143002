"""
Text Utilities

Helper functions for whitespace cleanup, keyword normalization and
price parsing from storefront text.
"""

import re
from typing import Any, Optional

_NON_ALNUM = re.compile(r'[^a-z0-9]+')

# "1,299" or "12,500,000": commas grouping thousands, no decimals
_THOUSANDS_ONLY = re.compile(r'^\d{1,3}(,\d{3})+$')


def clean_text(text: Any) -> str:
    """Collapse whitespace runs to single spaces and strip."""
    if not text:
        return ""
    if not isinstance(text, str):
        text = str(text)
    return ' '.join(text.split()).strip()


def norm_space(text: str) -> str:
    """
    Lower-case and replace every non-alphanumeric run with one space.

    "Holy-Grail  Torch!" -> "holy grail torch"
    """
    return _NON_ALNUM.sub(' ', (text or '').lower()).strip()


def norm_compact(text: str) -> str:
    """Lower-case and drop every non-alphanumeric character."""
    return _NON_ALNUM.sub('', (text or '').lower())


def parse_price(text: Any) -> Optional[float]:
    """
    Parse a price out of free storefront text.

    Handles "$45.00", "45,00 $", "CA$1,299.99", "$1,299" and "1 299,99".
    A lone comma is a decimal separator unless exactly three digits
    follow it, which reads as thousands grouping.

    Returns:
        Price as float, or None when no number can be read
    """
    if text is None:
        return None
    if isinstance(text, (int, float)):
        return float(text)

    t = re.sub(r'\s', '', str(text))
    t = re.sub(r'[^0-9.,]', '', t)
    if not t:
        return None

    if _THOUSANDS_ONLY.match(t):
        t = t.replace(',', '')
    elif ',' in t and '.' in t:
        # The right-most separator is the decimal one
        if t.rfind(',') > t.rfind('.'):
            t = t.replace('.', '').replace(',', '.')
        else:
            t = t.replace(',', '')
    else:
        t = t.replace(',', '.')

    # "1.299.99" -> keep only the last dot
    if t.count('.') > 1:
        head, _, tail = t.rpartition('.')
        t = head.replace('.', '') + '.' + tail

    t = t.strip('.')
    if not t:
        return None
    try:
        return float(t)
    except ValueError:
        return None


def cents_to_amount(value: Any) -> Optional[float]:
    """Convert an integer-cents payload value (3000 or "3000") to 30.0."""
    if value is None or value == '':
        return None
    try:
        return round(int(float(value)) / 100.0, 2)
    except (TypeError, ValueError):
        return None


def decimal_to_amount(value: Any) -> Optional[float]:
    """Convert a decimal-string payload value ("30.00") to 30.0."""
    if value is None or value == '':
        return None
    try:
        return round(float(value), 2)
    except (TypeError, ValueError):
        return parse_price(value)
