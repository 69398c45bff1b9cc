"""Standalone lead discovery: search-and-analyse, single-URL analysis, quick check."""

import asyncio
import logging
import re
from typing import Optional
from urllib.parse import urlparse

from pydantic import BaseModel, Field

from bounty_feed.models.business import Business, BusinessLead, BusinessSearchParams

from .analyzer import analyze_business_opportunity
from .places import MISSING_KEY_MESSAGE, GooglePlacesClient
from .website import WebsiteScanner, normalize_url

logger = logging.getLogger(__name__)

DEFAULT_MAX_RESULTS = 10
DISCOVERY_DELAY_S = 0.2


class QuickCheckResult(BaseModel):
    """Cheap pre-screen of one business, without reviews or a website scan."""

    found: bool
    business: Optional[Business] = None
    quick_score: int = 0
    top_issues: list[str] = Field(default_factory=list)
    error: Optional[str] = None


async def discover_opportunities(
    params: BusinessSearchParams,
    places: GooglePlacesClient,
    scanner: Optional[WebsiteScanner] = None,
    *,
    analyze_websites: bool = True,
    max_results: int = DEFAULT_MAX_RESULTS,
    delay_s: float = DISCOVERY_DELAY_S,
) -> tuple[list[BusinessLead], list[str]]:
    """
    Search businesses and analyse each one.

    Returns:
        (leads sorted by opportunity score, error strings). Per-business errors
        are collected and the remaining businesses are still analysed.
    """
    errors: list[str] = []
    leads: list[BusinessLead] = []

    if not places.is_configured():
        return leads, [MISSING_KEY_MESSAGE]

    search = await places.search_businesses(params)
    if search.error:
        errors.append(search.error)

    scanner = scanner or WebsiteScanner()
    for index, business in enumerate(search.businesses[: max_results or DEFAULT_MAX_RESULTS]):
        if index and delay_s:
            await asyncio.sleep(delay_s)
        details = await places.get_business_details(business.source_id)
        if details.error:
            errors.append(f"Error fetching {business.name}: {details.error}")
            continue
        if details.business is None:
            continue

        full = details.business
        missing = []
        if analyze_websites and full.website:
            analysis = await scanner.analyze_website(full.website)
            missing = analysis.missing_features
            errors.extend(f"Website {full.website}: {e}" for e in analysis.errors)
        leads.append(analyze_business_opportunity(full, details.reviews, missing))

    leads.sort(key=lambda lead: lead.opportunity_score, reverse=True)
    return leads, errors


def extract_domain_name(url: str) -> str:
    """Business-name guess from a URL: "https://www.joes-pizza.com" -> "Joes Pizza"."""
    hostname = urlparse(normalize_url(url)).hostname if url else None
    if not hostname:
        return "Unknown Business"
    label = re.sub(r"^www\.", "", hostname).split(".")[0]
    return label.replace("-", " ").title()


async def analyze_business_by_url(
    url: str,
    scanner: Optional[WebsiteScanner] = None,
    *,
    name: Optional[str] = None,
    category: str = "Business",
) -> Optional[BusinessLead]:
    """Analyse one website with no reviews; None when the site is unreachable."""
    scanner = scanner or WebsiteScanner()
    analysis = await scanner.analyze_website(url)
    if not analysis.accessible:
        logger.info("Website %s not accessible: %s", url, "; ".join(analysis.errors))
        return None

    business = Business(
        id=f"manual_{extract_domain_name(url).lower().replace(' ', '_')}",
        name=name or extract_domain_name(url),
        category=category,
        website=url,
        source="manual",
        source_id=url,
    )
    return analyze_business_opportunity(business, [], analysis.missing_features)


async def quick_opportunity_check(name: str, location: str, places: GooglePlacesClient) -> QuickCheckResult:
    """Quick score from rating, review count and website presence of the best match."""
    if not places.is_configured():
        return QuickCheckResult(found=False, error=MISSING_KEY_MESSAGE)

    search = await places.search_businesses(BusinessSearchParams(query=name, location=location))
    if search.error or not search.businesses:
        return QuickCheckResult(found=False, error=search.error or "Business not found")

    business = search.businesses[0]
    score = 0
    issues: list[str] = []

    if 0 < business.rating < 3.5:
        score += 30
        issues.append("Low rating indicates customer issues")
    elif 0 < business.rating < 4.0:
        score += 15
        issues.append("Room for improvement in customer satisfaction")

    if business.review_count >= 100:
        score += 20
        issues.append("High visibility business with many customers")
    elif business.review_count >= 50:
        score += 10

    if not business.website:
        score += 30
        issues.append("No website detected")

    return QuickCheckResult(found=True, business=business, quick_score=score, top_issues=issues)
