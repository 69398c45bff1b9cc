"""BountyBoard connector: wraps the opportunity synthesizer as a source."""

import logging
import os
from typing import Optional

import httpx

from bounty_feed.connectors.base import BaseConnector
from bounty_feed.models.raw import RawRecord
from bounty_feed.models.record import CanonicalRecord, SearchOptions
from bounty_feed.opportunities.pitch import DEFAULT_MODEL, PitchWriter
from bounty_feed.opportunities.places import MISSING_KEY_MESSAGE, GooglePlacesClient
from bounty_feed.opportunities.synthesizer import OpportunitySynthesizer, render_lead
from bounty_feed.opportunities.website import WebsiteScanner

logger = logging.getLogger(__name__)

MISSING_LOCATION_MESSAGE = "Location is required for business opportunity search (set options.location)"


class BountyBoardConnector(BaseConnector):
    """
    Location-aware source: the query is a service ("web design"), the location a city.
    Each record is one local business that could buy that service.
    """

    source_id = "bountyboard"
    display_name = "BountyBoard"

    def __init__(
        self,
        places_api_key: Optional[str] = None,
        openai_api_key: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
        user_agent: Optional[str] = None,
        website_timeout: float = 10.0,
        accessibility_timeout: float = 5.0,
        detail_delay_s: float = 0.15,
        pitch_model: str = DEFAULT_MODEL,
        use_ai_pitch: bool = False,
        synthesizer: Optional[OpportunitySynthesizer] = None,
    ):
        """
        Args:
            places_api_key: Google Places key; falls back to GOOGLE_PLACES_API_KEY
            openai_api_key: Enables model-written pitches when use_ai_pitch is set
            synthesizer: Prebuilt synthesizer (tests); otherwise built per search
        """
        super().__init__(client=client, timeout=timeout, user_agent=user_agent)
        self._user_agent = user_agent
        self._places_api_key = places_api_key or os.environ.get("GOOGLE_PLACES_API_KEY")
        self._openai_api_key = openai_api_key
        self._website_timeout = website_timeout
        self._accessibility_timeout = accessibility_timeout
        self._detail_delay_s = detail_delay_s
        self._pitch_model = pitch_model
        self._use_ai_pitch = use_ai_pitch
        self._synthesizer = synthesizer

    def configuration_error(self) -> Optional[str]:
        if self._synthesizer is not None:
            return None
        return None if self._places_api_key else MISSING_KEY_MESSAGE

    def build_synthesizer(self, client: httpx.AsyncClient) -> OpportunitySynthesizer:
        """Synthesizer whose collaborators share the search's HTTP client."""
        scanner_kwargs = {
            "client": client,
            "timeout": self._website_timeout,
            "accessibility_timeout": self._accessibility_timeout,
        }
        if self._user_agent:
            scanner_kwargs["user_agent"] = self._user_agent
        return OpportunitySynthesizer(
            GooglePlacesClient(api_key=self._places_api_key, client=client, timeout=self._timeout),
            WebsiteScanner(**scanner_kwargs),
            PitchWriter(api_key=self._openai_api_key, model=self._pitch_model),
            detail_delay_s=self._detail_delay_s,
            use_ai_pitch=self._use_ai_pitch,
        )

    async def fetch(self, client: httpx.AsyncClient, query: str, options: SearchOptions) -> list[RawRecord]:
        location = (options.location or "").strip()
        if not location:
            raise ValueError(MISSING_LOCATION_MESSAGE)
        synthesizer = self._synthesizer or self.build_synthesizer(client)
        leads = await synthesizer.find_leads(query, location)
        logger.debug("BountyBoard synthesized %d leads for %r in %s", len(leads), query, location)
        return [RawRecord(data={"lead": lead, "service_query": query, "pitch": pitch}) for lead, pitch in leads]

    def normalize(self, raw: RawRecord) -> CanonicalRecord:
        """Render a synthesized lead; the service query is kept as renderer_hint."""
        d = raw.data
        return render_lead(d["lead"], d["service_query"], d.get("pitch"))
