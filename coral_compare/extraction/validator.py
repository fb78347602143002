"""
Listing Validator

Checks candidate listings before they reach the store. Invalid
candidates are discarded, never raised: a bad row costs one product,
not the run.
"""

import logging
from typing import List, Optional

from ..common.constants import SALE_MODES, STATUS_AVAILABLE, STATUS_SOLD_OUT, UNIT_TYPES
from ..models import Listing

logger = logging.getLogger(__name__)


def _positive(value) -> Optional[float]:
    """Return value as a 2dp float when strictly positive, else None."""
    if value is None or isinstance(value, bool):
        return None
    try:
        amount = round(float(value), 2)
    except (TypeError, ValueError):
        return None
    return amount if amount > 0 else None


class ListingValidator:
    """
    Validates and normalizes candidate listings.

    Usage:
        validator = ListingValidator()
        listing = validator.clean(candidate)   # None when discarded
    """

    def errors(self, listing: Listing) -> List[str]:
        """
        Return blocking problems for a candidate listing.

        Args:
            listing: Candidate listing

        Returns:
            List of error messages (empty when the listing may be stored)
        """
        errors: List[str] = []

        if not (listing.shop_id or "").strip():
            errors.append("shop_id: missing")
        if not (listing.url or "").strip():
            errors.append("url: missing")
        if not (listing.category or "").strip():
            errors.append("category: missing")
        if not (listing.title_raw or "").strip():
            errors.append("title: empty")

        if listing.price_cad is None:
            errors.append("price: missing")
        elif _positive(listing.price_cad) is None:
            errors.append(f"price: must be > 0 (got {listing.price_cad!r})")

        return errors

    def clean(self, listing: Listing) -> Optional[Listing]:
        """
        Normalize a listing in place, or discard it.

        - prices rounded to cents; a sale price that is missing a regular
          price, not positive, or not strictly below it is dropped
        - unknown status, sale mode or unit type values are reset
        - unit_count must be a positive integer

        Returns:
            The listing, or None when it fails validation
        """
        problems = self.errors(listing)
        if problems:
            logger.debug("Discarding %s: %s", listing.url or listing.title_raw, "; ".join(problems))
            return None

        listing.price_cad = _positive(listing.price_cad)
        sale = _positive(listing.sale_price_cad)
        if sale is not None and sale >= listing.price_cad:
            sale = None
        listing.sale_price_cad = sale

        if listing.status not in (STATUS_AVAILABLE, STATUS_SOLD_OUT):
            listing.status = STATUS_AVAILABLE
        if listing.sale_mode not in SALE_MODES:
            listing.sale_mode = None
        if listing.unit_type not in UNIT_TYPES:
            listing.unit_type = None
        if not isinstance(listing.unit_count, int) or isinstance(listing.unit_count, bool) \
                or listing.unit_count <= 0:
            listing.unit_count = None

        listing.title_raw = listing.title_raw.strip()
        listing.shop_id = listing.shop_id.strip()
        listing.url = listing.url.strip()
        return listing
