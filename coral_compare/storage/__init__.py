"""
Persistence for listings and crawl sources.

Modules:
    listing_store - Supabase and in-memory listing stores
    sources - Supabase and YAML source repositories
    queries - ListingQuery filter description
"""

from .listing_store import (
    InMemoryListingStore,
    ListingStore,
    SupabaseListingStore,
    dedupe_by_key,
)
from .queries import ListingQuery
from .sources import SourceRepository, SupabaseSourceRepository, YamlSourceRepository

__all__ = [
    'ListingStore',
    'InMemoryListingStore',
    'SupabaseListingStore',
    'dedupe_by_key',
    'ListingQuery',
    'SourceRepository',
    'SupabaseSourceRepository',
    'YamlSourceRepository',
]
