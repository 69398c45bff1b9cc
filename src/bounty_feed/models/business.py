"""Local-business models used by the opportunity synthesizer."""

from typing import Literal, Optional

from pydantic import BaseModel, Field

from bounty_feed.models.record import utc_now_iso

PriorityLevel = Literal["high", "medium", "low"]


class Business(BaseModel):
    """A business as returned by the places-search collaborator."""

    id: str
    name: str
    category: str = "Business"
    subcategories: list[str] = Field(default_factory=list)
    address: str = ""
    city: str = ""
    state: Optional[str] = None
    country: str = ""
    phone: Optional[str] = None
    website: Optional[str] = None
    rating: float = 0.0
    review_count: int = 0
    price_level: Optional[int] = None
    source: str = "google_places"
    source_id: str = ""
    scraped_at: str = Field(default_factory=utc_now_iso)


class Review(BaseModel):
    """Customer review of a business."""

    id: str
    business_id: str = ""
    author_name: str = ""
    rating: int = Field(..., ge=1, le=5)
    text: str = ""
    date: str = ""
    language: Optional[str] = None


class PainPoint(BaseModel):
    """Recurring complaint theme detected in reviews."""

    category: str
    keywords: list[str] = Field(default_factory=list)
    review_ids: list[str] = Field(default_factory=list)
    severity: float = Field(..., ge=0, le=10)
    example_phrases: list[str] = Field(default_factory=list)
    count: int = 0


class MissingFeature(BaseModel):
    """Website capability inferred absent."""

    feature: str
    confidence: float = Field(..., ge=0, le=1)
    searched_for: list[str] = Field(default_factory=list)
    recommendation: str = ""


class ServiceOpportunity(BaseModel):
    """Catalog entry: a service a freelancer could sell."""

    id: str
    name: str
    description: str
    related_pain_points: list[str] = Field(default_factory=list)
    keywords: list[str] = Field(default_factory=list)
    estimated_value: str = ""
    difficulty: Literal["easy", "medium", "hard"] = "medium"
    time_estimate: str = ""


class SuggestionEvidence(BaseModel):
    pain_point_count: int = 0
    missing_feature_match: bool = False
    review_examples: list[str] = Field(default_factory=list)


class ServiceSuggestion(BaseModel):
    """Catalog service matched to a business, with supporting evidence."""

    service: ServiceOpportunity
    relevance_score: float = Field(..., ge=0, le=100)
    evidence: SuggestionEvidence = Field(default_factory=SuggestionEvidence)
    pitch_summary: str = ""


class BusinessLead(BaseModel):
    """Full opportunity analysis of one business."""

    id: str
    business: Business
    reviews: list[Review] = Field(default_factory=list)
    pain_points: list[PainPoint] = Field(default_factory=list)
    missing_features: list[MissingFeature] = Field(default_factory=list)
    suggested_services: list[ServiceSuggestion] = Field(default_factory=list)
    opportunity_score: float = Field(..., ge=0, le=100)
    priority_level: PriorityLevel = "low"
    analyzed_at: str = Field(default_factory=utc_now_iso)

    @property
    def has_actionable_content(self) -> bool:
        return bool(self.pain_points or self.missing_features or self.suggested_services)


class BusinessSearchParams(BaseModel):
    """Query sent to the places-search collaborator."""

    query: str
    location: str
    radius: Optional[int] = None
    min_rating: Optional[float] = None
    max_rating: Optional[float] = None
    min_reviews: Optional[int] = None


class PlacesSearchResult(BaseModel):
    businesses: list[Business] = Field(default_factory=list)
    error: Optional[str] = None


class PlaceDetailsResult(BaseModel):
    business: Optional[Business] = None
    reviews: list[Review] = Field(default_factory=list)
    error: Optional[str] = None


class WebsiteAnalysis(BaseModel):
    """Outcome of scanning a business website for missing features."""

    url: str
    accessible: bool = False
    has_ssl: bool = False
    missing_features: list[MissingFeature] = Field(default_factory=list)
    detected_features: list[str] = Field(default_factory=list)
    pages_tested: list[str] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)
    analyzed_at: str = Field(default_factory=utc_now_iso)


class AccessibilityCheck(BaseModel):
    accessible: bool
    has_ssl: bool
    load_time_ms: Optional[int] = None
    error: Optional[str] = None
