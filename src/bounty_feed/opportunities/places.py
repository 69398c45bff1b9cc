"""Google Places client: business search and details with reviews.

Both calls return result objects carrying `error` instead of raising, so the
synthesizer can skip one failed business without special-casing exceptions.
"""

import logging
import os
import re
from datetime import datetime, timezone
from typing import Any, Optional

import httpx

from bounty_feed.models.business import (
    Business,
    BusinessSearchParams,
    PlaceDetailsResult,
    PlacesSearchResult,
    Review,
)
from bounty_feed.tables import opportunity_table

logger = logging.getLogger(__name__)

MISSING_KEY_MESSAGE = (
    "GOOGLE_PLACES_API_KEY not configured. "
    "Get one at https://console.cloud.google.com/apis/credentials"
)

DETAIL_FIELDS = (
    "place_id",
    "name",
    "formatted_address",
    "formatted_phone_number",
    "website",
    "rating",
    "user_ratings_total",
    "price_level",
    "types",
    "opening_hours",
    "reviews",
    "address_components",
    "url",
)


def map_category(types: list[str]) -> str:
    """First known place type wins; otherwise the first type, title-cased."""
    categories: dict[str, str] = opportunity_table()["place_categories"]
    for place_type in types:
        if place_type in categories:
            return categories[place_type]
    if types:
        return types[0].replace("_", " ").title()
    return "Business"


def extract_city(address: str) -> str:
    """Best-effort city from a formatted address ("street, city, ST 12345, country")."""
    parts = [p.strip() for p in (address or "").split(",")]
    if len(parts) >= 3:
        for part in reversed(parts[1:-1]):
            if part and not part[0].isdigit() and not re.search(r"\d{5}", part):
                return part.split(" ")[0]
    return parts[1] if len(parts) > 1 else ""


def _review_date(unix_seconds: Any) -> str:
    if not unix_seconds:
        return ""
    return datetime.fromtimestamp(float(unix_seconds), tz=timezone.utc).isoformat()


def extract_country(address: str) -> str:
    parts = [p.strip() for p in (address or "").split(",")]
    return parts[-1] if parts else ""


class GooglePlacesClient:
    """Async client for the Google Places text-search and details endpoints."""

    BASE_URL = "https://maps.googleapis.com/maps/api/place"

    def __init__(
        self,
        api_key: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 20.0,
    ):
        """
        Args:
            api_key: Google Places key; falls back to GOOGLE_PLACES_API_KEY
            client: Optional shared httpx.AsyncClient
        """
        self._api_key = api_key or os.environ.get("GOOGLE_PLACES_API_KEY")
        self._client = client
        self._timeout = timeout

    def is_configured(self) -> bool:
        return bool(self._api_key)

    async def _get(self, path: str, params: dict[str, Any]) -> dict[str, Any]:
        params = {**params, "key": self._api_key}
        url = f"{self.BASE_URL}/{path}"
        if self._client is not None:
            response = await self._client.get(url, params=params, timeout=self._timeout)
        else:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.get(url, params=params)
        response.raise_for_status()
        data = response.json()
        if not isinstance(data, dict):
            raise ValueError("Unexpected Google Places payload")
        return data

    @staticmethod
    def _describe(error: Exception) -> str:
        if isinstance(error, httpx.HTTPStatusError):
            return f"Google Places API error: {error.response.status_code}"
        if isinstance(error, httpx.TimeoutException):
            return "Google Places request timed out"
        return str(error) or type(error).__name__

    async def search_businesses(self, params: BusinessSearchParams) -> PlacesSearchResult:
        """Text search for "<query> in <location>", then rating/review-count filters."""
        if not self._api_key:
            return PlacesSearchResult(error=MISSING_KEY_MESSAGE)

        query_params: dict[str, Any] = {"query": f"{params.query} in {params.location}"}
        if params.radius:
            query_params["radius"] = str(params.radius)
        try:
            data = await self._get("textsearch/json", query_params)
            status = data.get("status")
            if status not in ("OK", "ZERO_RESULTS"):
                raise RuntimeError(f"Google Places API error: {status} - {data.get('error_message') or ''}".rstrip(" -"))
            businesses = [self._business_from_search(p) for p in data.get("results") or []]
        except Exception as e:
            message = self._describe(e)
            logger.warning("Places search failed for %r: %s", params.query, message)
            return PlacesSearchResult(error=message)

        if params.min_rating is not None:
            businesses = [b for b in businesses if b.rating >= params.min_rating]
        if params.max_rating is not None:
            businesses = [b for b in businesses if b.rating <= params.max_rating]
        if params.min_reviews is not None:
            businesses = [b for b in businesses if b.review_count >= params.min_reviews]
        return PlacesSearchResult(businesses=businesses)

    async def get_business_details(self, place_id: str) -> PlaceDetailsResult:
        """Full business record plus its most recent reviews."""
        if not self._api_key:
            return PlaceDetailsResult(error=MISSING_KEY_MESSAGE)
        try:
            data = await self._get(
                "details/json",
                {"place_id": place_id, "fields": ",".join(DETAIL_FIELDS), "reviews_sort": "newest"},
            )
            if data.get("status") != "OK":
                raise RuntimeError(f"Google Places API error: {data.get('status')}")
            place = data.get("result") or {}
            business = self._business_from_details(place)
            reviews = self._reviews_from_details(place, business.id)
        except Exception as e:
            message = self._describe(e)
            logger.warning("Places details failed for %s: %s", place_id, message)
            return PlaceDetailsResult(error=message)
        return PlaceDetailsResult(business=business, reviews=reviews)

    def _business_from_search(self, place: dict[str, Any]) -> Business:
        address = place.get("formatted_address") or ""
        types = place.get("types") or []
        return Business(
            id=f"gp_{place['place_id']}",
            name=place.get("name") or "Unknown Business",
            category=map_category(types),
            subcategories=types,
            address=address,
            city=extract_city(address),
            country=extract_country(address),
            rating=place.get("rating") or 0,
            review_count=place.get("user_ratings_total") or 0,
            price_level=place.get("price_level"),
            source_id=place["place_id"],
        )

    def _business_from_details(self, place: dict[str, Any]) -> Business:
        address = place.get("formatted_address") or ""
        types = place.get("types") or []
        city = state = country = ""
        for component in place.get("address_components") or []:
            component_types = component.get("types") or []
            if "locality" in component_types:
                city = component.get("long_name", "")
            if "administrative_area_level_1" in component_types:
                state = component.get("short_name", "")
            if "country" in component_types:
                country = component.get("long_name", "")
        return Business(
            id=f"gp_{place['place_id']}",
            name=place.get("name") or "Unknown Business",
            category=map_category(types),
            subcategories=types,
            address=address,
            city=city or extract_city(address),
            state=state or None,
            country=country or extract_country(address),
            phone=place.get("formatted_phone_number"),
            website=place.get("website"),
            rating=place.get("rating") or 0,
            review_count=place.get("user_ratings_total") or 0,
            price_level=place.get("price_level"),
            source_id=place["place_id"],
        )

    @staticmethod
    def _reviews_from_details(place: dict[str, Any], business_id: str) -> list[Review]:
        reviews: list[Review] = []
        for index, review in enumerate(place.get("reviews") or []):
            rating = review.get("rating")
            if not rating:
                continue
            reviews.append(
                Review(
                    id=f"gp_{place['place_id']}_review_{index}",
                    business_id=business_id,
                    author_name=review.get("author_name") or "",
                    rating=int(rating),
                    text=review.get("text") or "",
                    date=_review_date(review.get("time")),
                    language=review.get("language"),
                )
            )
        return reviews
