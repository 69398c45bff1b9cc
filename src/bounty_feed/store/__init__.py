"""Curation storage for records an operator pulls into a tenant's feed."""

from bounty_feed.store.base import CURATION_STATUSES, CuratedRecord, CurationRepository, SavedSearch
from bounty_feed.store.memory_store import InMemoryCurationStore
from bounty_feed.store.sqlite_store import SqliteCurationStore

__all__ = [
    "CURATION_STATUSES",
    "CuratedRecord",
    "CurationRepository",
    "InMemoryCurationStore",
    "SavedSearch",
    "SqliteCurationStore",
]
