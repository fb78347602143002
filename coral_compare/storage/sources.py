"""
Source Repositories

Where the list of origins to crawl comes from: the Supabase
"scrape_sources" table in production, config/sources.yaml locally.
"""

import logging
from typing import List

from ..common.config_loader import load_sources
from ..models import SourceRow

logger = logging.getLogger(__name__)

SOURCES_TABLE = "scrape_sources"


def _valid(rows: List[SourceRow]) -> List[SourceRow]:
    valid = []
    for row in rows:
        if not row.url or not row.shop_id:
            logger.warning("Skipping source without url or shop_id: %r", row)
            continue
        valid.append(row)
    return valid


class SourceRepository:
    """Interface shared by source repositories."""

    def load_active(self) -> List[SourceRow]:
        raise NotImplementedError


class SupabaseSourceRepository(SourceRepository):
    """Active rows of the scrape_sources table."""

    def __init__(self, client, table: str = SOURCES_TABLE):
        self.client = client
        self.table = table

    def load_active(self) -> List[SourceRow]:
        response = self.client.table(self.table).select("*").eq("is_active", True).execute()
        return _valid([SourceRow.from_record(r) for r in (response.data or [])])


class YamlSourceRepository(SourceRepository):
    """Active entries of a YAML sources file in the config directory."""

    def __init__(self, filename: str = 'sources.yaml'):
        self.filename = filename

    def load_active(self) -> List[SourceRow]:
        rows = [SourceRow.from_record(r) for r in load_sources(self.filename)]
        return _valid([r for r in rows if r.is_active])
