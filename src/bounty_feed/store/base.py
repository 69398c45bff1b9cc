"""Curation repository interface and its record types."""

import uuid
from abc import ABC, abstractmethod
from typing import Literal, Optional

from pydantic import BaseModel, Field

from bounty_feed.models.record import CanonicalRecord, SearchOptions, utc_now_iso

CurationStatus = Literal["pending", "approved", "rejected", "hidden"]
CURATION_STATUSES: tuple[str, ...] = ("pending", "approved", "rejected", "hidden")


def new_id(prefix: str) -> str:
    return f"{prefix}_{uuid.uuid4().hex[:12]}"


class CuratedRecord(BaseModel):
    """A record an operator has pulled into a tenant's feed."""

    id: str = Field(default_factory=lambda: new_id("cr"))
    tenant_id: str
    record: CanonicalRecord
    status: CurationStatus = "pending"
    notes: Optional[str] = None
    custom_reward: Optional[str] = Field(default=None, description="Operator-set reward text shown instead of the budget")
    added_at: str = Field(default_factory=utc_now_iso)
    approved_at: Optional[str] = None


class SavedSearch(BaseModel):
    """A search an operator can re-run."""

    id: str = Field(default_factory=lambda: new_id("ss"))
    tenant_id: str
    query: str
    sources: list[str] = Field(default_factory=list)
    options: SearchOptions = Field(default_factory=SearchOptions)
    created_at: str = Field(default_factory=utc_now_iso)
    last_run: Optional[str] = None


class CurationRepository(ABC):
    """Storage for curated records and saved searches, keyed by tenant."""

    @abstractmethod
    def add(self, tenant_id: str, record: CanonicalRecord, status: CurationStatus = "pending") -> CuratedRecord:
        """Store a record for a tenant."""

    @abstractmethod
    def get(self, curated_id: str) -> Optional[CuratedRecord]:
        """Single curated record by id."""

    @abstractmethod
    def list_curated(self, tenant_id: str, status: Optional[CurationStatus] = None) -> list[CuratedRecord]:
        """Tenant's curated records, newest first, optionally by status."""

    @abstractmethod
    def update(
        self,
        curated_id: str,
        *,
        status: Optional[CurationStatus] = None,
        notes: Optional[str] = None,
        custom_reward: Optional[str] = None,
    ) -> Optional[CuratedRecord]:
        """
        Apply the given changes. Approving sets approved_at.
        Returns None for unknown ids.
        """

    @abstractmethod
    def delete(self, curated_id: str) -> bool:
        """Remove a curated record; False when it did not exist."""

    @abstractmethod
    def save_search(self, search: SavedSearch) -> SavedSearch:
        """Insert or replace a saved search."""

    @abstractmethod
    def list_searches(self, tenant_id: str) -> list[SavedSearch]:
        """Tenant's saved searches, newest first."""

    def list_approved(self, tenant_id: str) -> list[CuratedRecord]:
        """Records visible to the tenant's members."""
        return self.list_curated(tenant_id, status="approved")


def apply_update(
    curated: CuratedRecord,
    status: Optional[CurationStatus],
    notes: Optional[str],
    custom_reward: Optional[str],
) -> CuratedRecord:
    """Updated copy of curated; approved_at is stamped when moving to approved."""
    changes: dict = {}
    if status is not None:
        changes["status"] = status
        if status == "approved" and curated.status != "approved":
            changes["approved_at"] = utc_now_iso()
    if notes is not None:
        changes["notes"] = notes
    if custom_reward is not None:
        changes["custom_reward"] = custom_reward
    return curated.model_copy(update=changes)
