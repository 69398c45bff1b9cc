"""Canonical record, per-source result and search options models."""

from datetime import datetime, timezone
from typing import Literal, Optional

from pydantic import BaseModel, Field

BudgetType = Literal["fixed", "hourly", "unknown"]


def utc_now_iso() -> str:
    """Current time as an ISO-8601 UTC timestamp."""
    return datetime.now(timezone.utc).isoformat()


def make_record_id(source: str, external_id: str) -> str:
    """Deterministic record ID: {source}:{external_id}."""
    return f"{source}:{str(external_id).strip()}"


class Budget(BaseModel):
    """Compensation signal as reported upstream."""

    min: Optional[float] = None
    max: Optional[float] = None
    type: BudgetType = "unknown"
    currency: str = "USD"

    @property
    def upper_bound(self) -> Optional[float]:
        return self.max if self.max is not None else self.min

    @property
    def lower_bound(self) -> Optional[float]:
        return self.min if self.min is not None else self.max


class ClientInfo(BaseModel):
    """Who posted the listing (or which business a lead targets)."""

    name: Optional[str] = None
    rating: Optional[float] = None
    jobs_posted: Optional[int] = None
    location: Optional[str] = None


class CanonicalRecord(BaseModel):
    """Unified job/opportunity record produced by every source connector."""

    id: str = Field(..., description="Deterministic ID: {source}:{external_id}")
    source: str = Field(..., description="Connector tag, e.g. 'remoteok'")
    source_url: str = Field(default="", description="Deep link to the original listing")

    title: str = ""
    description: str = ""

    budget: Optional[Budget] = None
    skills: list[str] = Field(default_factory=list)

    posted_at: Optional[str] = None
    deadline: Optional[str] = None
    client_info: Optional[ClientInfo] = None

    renderer_hint: Optional[str] = Field(
        default=None,
        description="Opaque annotation for a downstream renderer (e.g. the service query of a lead)",
    )
    scraped_at: str = Field(default_factory=utc_now_iso)


class SourceResult(BaseModel):
    """Outcome of one connector search; never raised, always returned."""

    source: str
    success: bool
    records: list[CanonicalRecord] = Field(default_factory=list)
    error: Optional[str] = None
    scraped_at: str = Field(default_factory=utc_now_iso)

    @classmethod
    def failure(cls, source: str, error: str) -> "SourceResult":
        return cls(source=source, success=False, records=[], error=error)


class SearchOptions(BaseModel):
    """Per-search knobs shared by all connectors."""

    limit: Optional[int] = Field(default=None, ge=0)
    min_budget: Optional[float] = None
    max_budget: Optional[float] = None
    skills: list[str] = Field(default_factory=list, description="Reserved; unused by most connectors")
    language: Optional[str] = Field(default="en", description="ISO 639-1 code; None disables the filter")
    location: Optional[str] = Field(default=None, description="Required by location-aware connectors")
