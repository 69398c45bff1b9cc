"""Opportunity synthesizer: service query -> business categories -> analysed leads -> records.

Resource bounds: at most MAX_CATEGORIES place searches and BUSINESSES_PER_CATEGORY
businesses per category per call, with a fixed pause between detail lookups.
Categories and businesses are processed sequentially.
"""

import asyncio
import logging
import re
from typing import Optional

from bounty_feed.models.business import Business, BusinessLead, BusinessSearchParams
from bounty_feed.models.record import Budget, CanonicalRecord, ClientInfo, make_record_id
from bounty_feed.tables import opportunity_table, service_to_business

from .analyzer import analyze_business_opportunity
from .pitch import PitchWriter
from .places import GooglePlacesClient
from .website import WebsiteScanner

logger = logging.getLogger(__name__)

SOURCE_ID = "bountyboard"
MAX_CATEGORIES = 3
BUSINESSES_PER_CATEGORY = 3
MIN_REVIEWS = 5
MAPS_URL_TEMPLATE = "https://www.google.com/maps/place/?q=place_id:{place_id}"

_VALUE = re.compile(r"\$([0-9,]+)\s*-?\s*\$?([0-9,]+)?")


def resolve_categories(query: str) -> list[str]:
    """
    Business categories for a service query via keyword containment.
    Unmatched queries search for the query itself plus generic categories.
    """
    query_lower = (query or "").lower()
    categories: list[str] = []
    for keyword, business_types in service_to_business().items():
        if keyword in query_lower:
            for business_type in business_types:
                if business_type not in categories:
                    categories.append(business_type)
    if categories:
        return categories

    fallback = [query.strip()] if query and query.strip() else []
    for generic in opportunity_table()["fallback_categories"]:
        if generic not in fallback:
            fallback.append(generic)
    return fallback


def parse_estimated_value(value: str) -> Optional[Budget]:
    """Budget from catalog values like "$500-2000"; recurring "/month" values have unknown type."""
    match = _VALUE.search(value or "")
    if not match:
        return None
    low = float(match.group(1).replace(",", ""))
    high = float(match.group(2).replace(",", "")) if match.group(2) else low
    return Budget(min=low, max=high, type="unknown" if "/month" in value else "fixed", currency="USD")


def _humanize(tag: str) -> str:
    return tag.replace("_", " ")


def render_lead(lead: BusinessLead, service_query: str, pitch: Optional[str] = None) -> CanonicalRecord:
    """Render a lead as an outreach record; the service query travels in renderer_hint."""
    business = lead.business
    top_service = lead.suggested_services[0].service if lead.suggested_services else None
    service_name = top_service.name if top_service else "Digital services"
    location = ", ".join(p for p in (business.city, business.country) if p) or business.address or None

    sentences: list[str] = []
    profile = f"{business.name} is a {business.category}"
    if location:
        profile += f" in {location}"
    if business.review_count:
        profile += f" rated {business.rating:.1f}/5 across {business.review_count} reviews"
    sentences.append(profile + ".")
    if lead.pain_points:
        pains = ", ".join(f"{_humanize(p.category)} (severity {p.severity:g})" for p in lead.pain_points[:3])
        sentences.append(f"Customer pain points: {pains}.")
    if lead.missing_features:
        features = ", ".join(_humanize(m.feature) for m in lead.missing_features[:5])
        sentences.append(f"Missing website features: {features}.")
    if top_service:
        sentences.append(f"Suggested service: {top_service.name} ({top_service.estimated_value}).")
    sentences.append(f"Opportunity score {lead.opportunity_score:g}/100 ({lead.priority_level} priority).")
    if pitch:
        sentences.append(pitch)

    return CanonicalRecord(
        id=make_record_id(SOURCE_ID, business.source_id or business.id),
        source=SOURCE_ID,
        source_url=business.website
        or (MAPS_URL_TEMPLATE.format(place_id=business.source_id) if business.source_id else ""),
        title=f"{service_name} for {business.name} ({business.category})",
        description=" ".join(sentences),
        budget=parse_estimated_value(top_service.estimated_value) if top_service else None,
        skills=[s.service.name for s in lead.suggested_services[:5]],
        posted_at=lead.analyzed_at,
        client_info=ClientInfo(
            name=business.name,
            rating=business.rating or None,
            location=location,
        ),
        renderer_hint=service_query,
    )


class OpportunitySynthesizer:
    """Turns a service query and location into rendered outreach opportunities."""

    def __init__(
        self,
        places: GooglePlacesClient,
        scanner: WebsiteScanner,
        pitch_writer: Optional[PitchWriter] = None,
        *,
        detail_delay_s: float = 0.15,
        max_categories: int = MAX_CATEGORIES,
        businesses_per_category: int = BUSINESSES_PER_CATEGORY,
        min_reviews: int = MIN_REVIEWS,
        use_ai_pitch: bool = False,
    ):
        self.places = places
        self.scanner = scanner
        self.pitch_writer = pitch_writer or PitchWriter()
        self.detail_delay_s = detail_delay_s
        self.max_categories = max_categories
        self.businesses_per_category = businesses_per_category
        self.min_reviews = min_reviews
        self.use_ai_pitch = use_ai_pitch

    async def analyze_business(self, business: Business) -> BusinessLead:
        """Details, reviews and website scan for one business. Raises on details failure."""
        details = await self.places.get_business_details(business.source_id)
        if details.error or details.business is None:
            raise RuntimeError(details.error or f"No details for {business.name}")
        full = details.business
        missing = await self.scanner.missing_features_for(full.website)
        return analyze_business_opportunity(full, details.reviews, missing)

    async def find_leads(self, query: str, location: str) -> list[tuple[BusinessLead, Optional[str]]]:
        """
        Actionable leads with their optional pitch, in search order. A failing business
        is logged and skipped; if every category search fails, the first search error is raised.
        """
        categories = resolve_categories(query)[: self.max_categories]
        logger.info("Synthesizing %r in %s across categories %s", query, location, categories)

        leads: list[tuple[BusinessLead, Optional[str]]] = []
        search_errors: list[str] = []
        searched_ok = 0
        seen: set[str] = set()
        detail_calls = 0

        for category in categories:
            result = await self.places.search_businesses(
                BusinessSearchParams(query=category, location=location, min_reviews=self.min_reviews)
            )
            if result.error:
                search_errors.append(result.error)
                logger.warning("Category %r search failed: %s", category, result.error)
                continue
            searched_ok += 1

            for business in result.businesses[: self.businesses_per_category]:
                if business.source_id in seen:
                    continue
                seen.add(business.source_id)
                if detail_calls and self.detail_delay_s:
                    await asyncio.sleep(self.detail_delay_s)
                detail_calls += 1
                try:
                    lead = await self.analyze_business(business)
                except Exception as e:
                    logger.warning("Skipping %s: %s", business.name, e)
                    continue
                if not lead.has_actionable_content:
                    logger.debug("Skipping %s: nothing actionable", business.name)
                    continue
                pitch = await self.pitch_writer.write(lead, query) if self.use_ai_pitch else None
                leads.append((lead, pitch))

        if not searched_ok and search_errors:
            raise RuntimeError(search_errors[0])
        return leads

    async def synthesize(self, query: str, location: str) -> list[CanonicalRecord]:
        """Rendered records for find_leads."""
        return [render_lead(lead, query, pitch) for lead, pitch in await self.find_leads(query, location)]
