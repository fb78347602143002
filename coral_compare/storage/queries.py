"""
Listing Queries

Filter/sort description for read queries against a listing store, as
used by the browse and comparison pages.
"""

from dataclasses import dataclass
from typing import Optional

from ..common.text_utils import norm_space
from ..models import Listing


@dataclass
class ListingQuery:
    """
    Filtered, ordered read of listings.

    Attributes:
        category: Exact category match
        shop_id: Exact shop match
        status: Exact status match
        text: Keywords matched against title_raw and variant, ignoring
            case and punctuation ("holy-grail" matches "Holy Grail")
        newest_first: Order by creation time, newest first
        limit: Maximum rows (None = no limit)
    """

    category: Optional[str] = None
    shop_id: Optional[str] = None
    status: Optional[str] = None
    text: Optional[str] = None
    newest_first: bool = True
    limit: Optional[int] = 500

    @property
    def keywords(self) -> str:
        return norm_space(self.text or '')

    def like_pattern(self) -> Optional[str]:
        """ILIKE pattern with a wildcard around and between keywords."""
        words = self.keywords.split()
        if not words:
            return None
        return '%' + '%'.join(words) + '%'

    def matches(self, listing: Listing) -> bool:
        """In-process equivalent of the store-side filter."""
        if self.category and listing.category != self.category:
            return False
        if self.shop_id and listing.shop_id != self.shop_id:
            return False
        if self.status and listing.status != self.status:
            return False
        keywords = self.keywords
        if keywords:
            fields = (norm_space(listing.title_raw or ''), norm_space(listing.variant or ''))
            if not any(keywords in f for f in fields):
                return False
        return True
