"""Local-business opportunity discovery: places lookup, website scan, review analysis."""

from .analyzer import analyze_business_opportunity, analyze_reviews, analyze_sentiment, calculate_opportunity_score
from .discovery import QuickCheckResult, analyze_business_by_url, discover_opportunities, quick_opportunity_check
from .pitch import PitchWriter, template_pitch
from .places import GooglePlacesClient
from .synthesizer import OpportunitySynthesizer, render_lead, resolve_categories
from .website import WebsiteScanner

__all__ = [
    "GooglePlacesClient",
    "OpportunitySynthesizer",
    "PitchWriter",
    "QuickCheckResult",
    "WebsiteScanner",
    "analyze_business_by_url",
    "analyze_business_opportunity",
    "analyze_reviews",
    "analyze_sentiment",
    "calculate_opportunity_score",
    "discover_opportunities",
    "quick_opportunity_check",
    "render_lead",
    "resolve_categories",
    "template_pitch",
]
