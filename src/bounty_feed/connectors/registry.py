"""Registry mapping source tags to connector instances."""

from collections.abc import Mapping
from typing import Optional

import httpx

from bounty_feed.config import FeedSettings
from bounty_feed.connectors.arbeitnow import ArbeitnowConnector
from bounty_feed.connectors.base import BaseConnector
from bounty_feed.connectors.bountyboard import BountyBoardConnector
from bounty_feed.connectors.himalayas import HimalayasConnector
from bounty_feed.connectors.jsearch import JSearchConnector
from bounty_feed.connectors.remoteok import RemoteOKConnector


class ConnectorRegistry:
    """Provides source connectors by tag. Lookup is case-insensitive."""

    def __init__(self, connectors: Mapping[str, BaseConnector]):
        self._connectors: dict[str, BaseConnector] = {tag.lower(): c for tag, c in connectors.items()}

    def get(self, source_id: str) -> BaseConnector:
        """Get the connector registered for source_id."""
        connector = self._connectors.get(source_id.lower())
        if connector is None:
            raise ValueError(f"Unknown source: {source_id}. Available: {self.available_sources()}")
        return connector

    def available_sources(self) -> list[str]:
        """Return list of available source identifiers."""
        return list(self._connectors.keys())

    def __contains__(self, source_id: object) -> bool:
        return isinstance(source_id, str) and source_id.lower() in self._connectors


def build_default_registry(
    settings: Optional[FeedSettings] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> ConnectorRegistry:
    """Instantiate every built-in connector from settings (environment when omitted)."""
    settings = settings or FeedSettings.from_env()
    common = {"client": client, "timeout": settings.http_timeout, "user_agent": settings.user_agent}
    return ConnectorRegistry(
        {
            "remoteok": RemoteOKConnector(**common),
            "arbeitnow": ArbeitnowConnector(**common),
            "himalayas": HimalayasConnector(**common),
            "indeed": JSearchConnector("indeed", api_key=settings.rapidapi_key, **common),
            "linkedin": JSearchConnector("linkedin", api_key=settings.rapidapi_key, **common),
            "bountyboard": BountyBoardConnector(
                places_api_key=settings.google_places_api_key,
                openai_api_key=settings.openai_api_key,
                website_timeout=settings.website_timeout,
                accessibility_timeout=settings.accessibility_timeout,
                detail_delay_s=settings.detail_delay_s,
                pitch_model=settings.pitch_model,
                **common,
            ),
        }
    )
