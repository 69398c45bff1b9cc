"""Data models for canonical records, search options and business leads."""

from bounty_feed.models.business import (
    Business,
    BusinessLead,
    BusinessSearchParams,
    MissingFeature,
    PainPoint,
    Review,
    ServiceOpportunity,
    ServiceSuggestion,
    WebsiteAnalysis,
)
from bounty_feed.models.raw import RawRecord
from bounty_feed.models.record import (
    Budget,
    CanonicalRecord,
    ClientInfo,
    SearchOptions,
    SourceResult,
    make_record_id,
)

__all__ = [
    "Budget",
    "Business",
    "BusinessLead",
    "BusinessSearchParams",
    "CanonicalRecord",
    "ClientInfo",
    "MissingFeature",
    "PainPoint",
    "RawRecord",
    "Review",
    "SearchOptions",
    "ServiceOpportunity",
    "ServiceSuggestion",
    "SourceResult",
    "WebsiteAnalysis",
    "make_record_id",
]
