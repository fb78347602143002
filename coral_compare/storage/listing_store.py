"""
Listing Stores

Persistence for scraped listings. Every store supports the same three
operations: delete everything, upsert keyed by (shop_id, url) with
last-write-wins, and filtered reads.

- SupabaseListingStore: the production "listings" table
- InMemoryListingStore: dry runs and tests
"""

import itertools
import logging
from typing import Dict, Iterable, List, Tuple

from ..models import Listing
from .queries import ListingQuery

logger = logging.getLogger(__name__)

LISTINGS_TABLE = "listings"
CONFLICT_COLUMNS = "shop_id,url"
UPSERT_BATCH_SIZE = 200


def dedupe_by_key(listings: Iterable[Listing]) -> List[Listing]:
    """Keep the last listing per (shop_id, url), in first-seen order."""
    latest: Dict[Tuple[str, str], Listing] = {}
    for listing in listings:
        latest[listing.key] = listing
    return list(latest.values())


class ListingStore:
    """Interface shared by listing stores."""

    def delete_all(self) -> None:
        raise NotImplementedError

    def upsert(self, listings: Iterable[Listing]) -> int:
        """
        Insert or overwrite listings by (shop_id, url).

        Returns:
            Number of distinct rows written
        """
        raise NotImplementedError

    def query(self, query: ListingQuery) -> List[Listing]:
        raise NotImplementedError

    def count(self) -> int:
        raise NotImplementedError


class InMemoryListingStore(ListingStore):
    """
    Dictionary-backed store.

    Overwriting a key keeps the row's original creation order, as the
    database keeps created_at on conflict updates.
    """

    def __init__(self):
        self.rows: Dict[Tuple[str, str], Listing] = {}
        self._created: Dict[Tuple[str, str], int] = {}
        self._sequence = itertools.count()

    def __len__(self):
        return len(self.rows)

    def delete_all(self) -> None:
        self.rows.clear()
        self._created.clear()

    def upsert(self, listings: Iterable[Listing]) -> int:
        batch = dedupe_by_key(listings)
        for listing in batch:
            if listing.key not in self._created:
                self._created[listing.key] = next(self._sequence)
            self.rows[listing.key] = listing
        return len(batch)

    def all(self) -> List[Listing]:
        return list(self.rows.values())

    def count(self) -> int:
        return len(self.rows)

    def query(self, query: ListingQuery) -> List[Listing]:
        rows = [r for r in self.rows.values() if query.matches(r)]
        rows.sort(key=lambda r: self._created[r.key], reverse=query.newest_first)
        if query.limit is not None:
            rows = rows[:query.limit]
        return rows


class SupabaseListingStore(ListingStore):
    """
    Store backed by the Supabase "listings" table.

    Expects a unique constraint on (shop_id, url) and a created_at
    column with a database default.

    Usage:
        store = SupabaseListingStore(create_client(url, key))
        store.upsert(listings)
    """

    def __init__(self, client, table: str = LISTINGS_TABLE, batch_size: int = UPSERT_BATCH_SIZE):
        """
        Args:
            client: supabase.Client
            table: Table name
            batch_size: Rows per upsert request
        """
        self.client = client
        self.table = table
        self.batch_size = batch_size

    def delete_all(self) -> None:
        """Delete every listing (PostgREST refuses unfiltered deletes)."""
        self.client.table(self.table).delete().not_.is_("id", "null").execute()
        logger.info("Cleared table %s", self.table)

    def upsert(self, listings: Iterable[Listing]) -> int:
        # One request cannot touch the same conflict key twice
        batch = dedupe_by_key(listings)
        for start in range(0, len(batch), self.batch_size):
            records = [listing.to_record() for listing in batch[start:start + self.batch_size]]
            (
                self.client
                .table(self.table)
                .upsert(records, on_conflict=CONFLICT_COLUMNS)
                .execute()
            )
        logger.debug("Upserted %d rows into %s", len(batch), self.table)
        return len(batch)

    def query(self, query: ListingQuery) -> List[Listing]:
        request = self.client.table(self.table).select("*")
        if query.category:
            request = request.eq("category", query.category)
        if query.shop_id:
            request = request.eq("shop_id", query.shop_id)
        if query.status:
            request = request.eq("status", query.status)
        pattern = query.like_pattern()
        if pattern:
            request = request.or_(f"title_raw.ilike.{pattern},variant.ilike.{pattern}")
        request = request.order("created_at", desc=query.newest_first)
        if query.limit is not None:
            request = request.limit(query.limit)

        response = request.execute()
        return [Listing.from_record(row) for row in (response.data or [])]

    def count(self) -> int:
        response = self.client.table(self.table).select("id", count="exact").limit(1).execute()
        return response.count or 0
