"""Tests for the BountyBoard connector."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from bounty_feed.connectors.bountyboard import BountyBoardConnector
from bounty_feed.connectors.bountyboard.connector import MISSING_LOCATION_MESSAGE
from bounty_feed.models.record import SearchOptions
from bounty_feed.opportunities.places import MISSING_KEY_MESSAGE


@pytest.fixture(autouse=True)
def _no_env_key(monkeypatch) -> None:
    monkeypatch.delenv("GOOGLE_PLACES_API_KEY", raising=False)


def _synthesizer(leads) -> MagicMock:
    synthesizer = MagicMock()
    synthesizer.find_leads = AsyncMock(return_value=leads)
    return synthesizer


class TestBountyBoardConnector:
    """Tests for BountyBoardConnector.search."""

    def test_missing_key(self) -> None:
        result = asyncio.run(BountyBoardConnector().search("web design", SearchOptions(location="Austin")))
        assert not result.success
        assert result.error == MISSING_KEY_MESSAGE

    def test_key_from_environment(self, monkeypatch) -> None:
        monkeypatch.setenv("GOOGLE_PLACES_API_KEY", "env-key")
        assert BountyBoardConnector().configuration_error() is None

    def test_missing_location(self) -> None:
        connector = BountyBoardConnector(places_api_key="k")
        result = asyncio.run(connector.search("web design", SearchOptions(location="  ")))
        assert not result.success
        assert result.error == MISSING_LOCATION_MESSAGE

    def test_records_from_synthesizer(self, salon_lead) -> None:
        synthesizer = _synthesizer([(salon_lead, "Short pitch.")])
        connector = BountyBoardConnector(synthesizer=synthesizer)
        result = asyncio.run(connector.search("web design", SearchOptions(location="Austin, TX")))

        assert result.success
        assert result.source == "bountyboard"
        record = result.records[0]
        assert record.id == "bountyboard:place-1"
        assert record.renderer_hint == "web design"
        assert record.description.endswith("Short pitch.")
        synthesizer.find_leads.assert_awaited_once_with("web design", "Austin, TX")

    def test_limit_applies(self, salon_lead) -> None:
        other = salon_lead.model_copy(
            update={"business": salon_lead.business.model_copy(update={"source_id": "place-2"})}
        )
        connector = BountyBoardConnector(synthesizer=_synthesizer([(salon_lead, None), (other, None)]))
        result = asyncio.run(connector.search("web design", SearchOptions(location="Austin", limit=1)))
        assert [r.id for r in result.records] == ["bountyboard:place-1"]

    def test_synthesizer_failure_isolated(self) -> None:
        synthesizer = MagicMock()
        synthesizer.find_leads = AsyncMock(side_effect=RuntimeError("Google Places API error: 403"))
        connector = BountyBoardConnector(synthesizer=synthesizer)
        result = asyncio.run(connector.search("web design", SearchOptions(location="Austin")))
        assert not result.success
        assert result.error == "Google Places API error: 403"
        assert result.records == []

    def test_build_synthesizer_shares_client(self, make_client) -> None:
        client = make_client(lambda request: None)
        connector = BountyBoardConnector(places_api_key="k", user_agent="Custom/1.0", detail_delay_s=0)
        synthesizer = connector.build_synthesizer(client)
        assert synthesizer.places.is_configured()
        assert synthesizer.detail_delay_s == 0
        assert synthesizer.scanner._headers["User-Agent"] == "Custom/1.0"
