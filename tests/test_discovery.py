"""Tests for standalone lead discovery helpers."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

from bounty_feed.models.business import (
    Business,
    BusinessSearchParams,
    MissingFeature,
    PlaceDetailsResult,
    PlacesSearchResult,
    Review,
    WebsiteAnalysis,
)
from bounty_feed.opportunities.discovery import (
    analyze_business_by_url,
    discover_opportunities,
    extract_domain_name,
    quick_opportunity_check,
)
from bounty_feed.opportunities.places import MISSING_KEY_MESSAGE


def _places(search: PlacesSearchResult, details=None, configured: bool = True) -> MagicMock:
    places = MagicMock()
    places.is_configured = MagicMock(return_value=configured)
    places.search_businesses = AsyncMock(return_value=search)
    places.get_business_details = AsyncMock(side_effect=details)
    return places


def _scanner(analysis: WebsiteAnalysis) -> MagicMock:
    scanner = MagicMock()
    scanner.analyze_website = AsyncMock(return_value=analysis)
    return scanner


class TestDiscoverOpportunities:
    """Tests for discover_opportunities."""

    def test_sorted_by_score_with_errors_collected(self) -> None:
        calm = Business(id="gp_a", name="Calm Cafe", rating=4.8, website="https://calm.test", source_id="a")
        busy = Business(id="gp_b", name="Busy Barber", rating=3.0, review_count=150, source_id="b")
        broken = Business(id="gp_c", name="Gone Grill", source_id="c")

        def details(place_id: str) -> PlaceDetailsResult:
            if place_id == "c":
                return PlaceDetailsResult(error="Google Places API error: NOT_FOUND")
            if place_id == "b":
                reviews = [Review(id="b1", rating=1, text="Long wait and no online booking.")]
                return PlaceDetailsResult(business=busy, reviews=reviews)
            return PlaceDetailsResult(business=calm)

        analysis = WebsiteAnalysis(url="https://calm.test", accessible=True, errors=["slow page"])
        places = _places(PlacesSearchResult(businesses=[calm, busy, broken]), details)
        leads, errors = asyncio.run(
            discover_opportunities(
                BusinessSearchParams(query="cafes", location="Austin"), places, _scanner(analysis), delay_s=0
            )
        )

        assert [lead.business.name for lead in leads] == ["Busy Barber", "Calm Cafe"]
        assert "Error fetching Gone Grill: Google Places API error: NOT_FOUND" in errors
        assert "Website https://calm.test: slow page" in errors

    def test_skip_website_analysis(self) -> None:
        business = Business(id="gp_a", name="Calm Cafe", website="https://calm.test", source_id="a")
        places = _places(PlacesSearchResult(businesses=[business]), lambda _: PlaceDetailsResult(business=business))
        scanner = _scanner(WebsiteAnalysis(url="https://calm.test"))
        leads, errors = asyncio.run(
            discover_opportunities(
                BusinessSearchParams(query="cafes", location="Austin"),
                places,
                scanner,
                analyze_websites=False,
                delay_s=0,
            )
        )
        assert len(leads) == 1
        assert errors == []
        scanner.analyze_website.assert_not_called()

    def test_not_configured(self) -> None:
        places = _places(PlacesSearchResult(), configured=False)
        leads, errors = asyncio.run(discover_opportunities(BusinessSearchParams(query="x", location="y"), places))
        assert leads == []
        assert errors == [MISSING_KEY_MESSAGE]
        places.search_businesses.assert_not_called()


class TestAnalyzeByUrl:
    """Tests for analyze_business_by_url and extract_domain_name."""

    def test_extract_domain_name(self) -> None:
        assert extract_domain_name("https://www.joes-pizza.com/menu") == "Joes Pizza"
        assert extract_domain_name("bella.test") == "Bella"
        assert extract_domain_name("") == "Unknown Business"

    def test_inaccessible_site(self) -> None:
        scanner = _scanner(WebsiteAnalysis(url="https://down.test", errors=["Could not access main page"]))
        assert asyncio.run(analyze_business_by_url("https://down.test", scanner)) is None

    def test_accessible_site(self) -> None:
        missing = [MissingFeature(feature="online_booking", confidence=0.9)]
        scanner = _scanner(WebsiteAnalysis(url="https://www.joes-pizza.com", accessible=True, missing_features=missing))
        lead = asyncio.run(analyze_business_by_url("https://www.joes-pizza.com", scanner))

        assert lead.business.name == "Joes Pizza"
        assert lead.business.id == "manual_joes_pizza"
        assert lead.business.source == "manual"
        assert lead.reviews == []
        assert lead.suggested_services[0].service.id == "online_booking_system"


class TestQuickCheck:
    """Tests for quick_opportunity_check."""

    def test_scores_profile(self) -> None:
        business = Business(id="gp_a", name="Dim Diner", rating=3.2, review_count=150, source_id="a")
        result = asyncio.run(quick_opportunity_check("Dim Diner", "Austin", _places(PlacesSearchResult(businesses=[business]))))
        assert result.found
        assert result.quick_score == 80
        assert result.top_issues == [
            "Low rating indicates customer issues",
            "High visibility business with many customers",
            "No website detected",
        ]

    def test_middling_business(self) -> None:
        business = Business(
            id="gp_a", name="Okay Diner", rating=3.8, review_count=60, website="https://okay.test", source_id="a"
        )
        result = asyncio.run(quick_opportunity_check("Okay Diner", "Austin", _places(PlacesSearchResult(businesses=[business]))))
        assert result.quick_score == 25
        assert result.top_issues == ["Room for improvement in customer satisfaction"]

    def test_not_found(self) -> None:
        result = asyncio.run(quick_opportunity_check("Nobody", "Austin", _places(PlacesSearchResult())))
        assert not result.found
        assert result.error == "Business not found"

    def test_not_configured(self) -> None:
        result = asyncio.run(quick_opportunity_check("X", "Y", _places(PlacesSearchResult(), configured=False)))
        assert result.error == MISSING_KEY_MESSAGE
