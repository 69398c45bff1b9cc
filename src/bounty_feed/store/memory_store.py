"""In-memory curation repository, owned by the instance."""

from typing import Optional

from bounty_feed.models.record import CanonicalRecord

from .base import CuratedRecord, CurationRepository, CurationStatus, SavedSearch, apply_update


class InMemoryCurationStore(CurationRepository):
    """Dict-backed repository for tests and single-process use."""

    def __init__(self) -> None:
        self._curated: dict[str, CuratedRecord] = {}
        self._searches: dict[str, SavedSearch] = {}

    def add(self, tenant_id: str, record: CanonicalRecord, status: CurationStatus = "pending") -> CuratedRecord:
        curated = apply_update(CuratedRecord(tenant_id=tenant_id, record=record), status, None, None)
        self._curated[curated.id] = curated
        return curated

    def get(self, curated_id: str) -> Optional[CuratedRecord]:
        return self._curated.get(curated_id)

    def list_curated(self, tenant_id: str, status: Optional[CurationStatus] = None) -> list[CuratedRecord]:
        # Reverse insertion order so equal timestamps stay newest first
        results = [c for c in reversed(self._curated.values()) if c.tenant_id == tenant_id]
        if status:
            results = [c for c in results if c.status == status]
        return sorted(results, key=lambda c: c.added_at, reverse=True)

    def update(
        self,
        curated_id: str,
        *,
        status: Optional[CurationStatus] = None,
        notes: Optional[str] = None,
        custom_reward: Optional[str] = None,
    ) -> Optional[CuratedRecord]:
        existing = self._curated.get(curated_id)
        if existing is None:
            return None
        updated = apply_update(existing, status, notes, custom_reward)
        self._curated[curated_id] = updated
        return updated

    def delete(self, curated_id: str) -> bool:
        return self._curated.pop(curated_id, None) is not None

    def save_search(self, search: SavedSearch) -> SavedSearch:
        self._searches[search.id] = search
        return search

    def list_searches(self, tenant_id: str) -> list[SavedSearch]:
        results = [s for s in reversed(self._searches.values()) if s.tenant_id == tenant_id]
        return sorted(results, key=lambda s: s.created_at, reverse=True)
