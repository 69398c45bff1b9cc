"""Arbeitnow connector using the public job-board API."""

import httpx

from bounty_feed.connectors.base import BaseConnector
from bounty_feed.connectors.parsers import clean_description, parse_timestamp
from bounty_feed.models.raw import RawRecord
from bounty_feed.models.record import CanonicalRecord, ClientInfo, SearchOptions, make_record_id


class ArbeitnowConnector(BaseConnector):
    """
    Connector for arbeitnow.com (European, often German-language, listings).
    Arbeitnow publishes no compensation data, so records never carry a budget.
    """

    source_id = "arbeitnow"
    display_name = "Arbeitnow"
    language_aware = True

    API_URL = "https://www.arbeitnow.com/api/job-board-api"

    async def fetch(self, client: httpx.AsyncClient, query: str, options: SearchOptions) -> list[RawRecord]:
        params = {"search": query} if query else None
        payload = await self.get_json(client, self.API_URL, params=params)
        jobs = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(jobs, list):
            raise ValueError("Unexpected Arbeitnow payload: missing data array")
        return [RawRecord(data=job) for job in jobs if isinstance(job, dict) and job.get("slug")]

    def normalize(self, raw: RawRecord) -> CanonicalRecord:
        """Convert an Arbeitnow job to CanonicalRecord."""
        d = raw.data
        location = d.get("location") or ("Remote" if d.get("remote") else "Unknown")
        return CanonicalRecord(
            id=make_record_id(self.source_id, d["slug"]),
            source=self.source_id,
            source_url=d.get("url") or "",
            title=(d.get("title") or "").strip() or "Untitled",
            description=clean_description(d.get("description")),
            budget=None,
            skills=[str(t) for t in d.get("tags") or []],
            posted_at=parse_timestamp(d.get("created_at")),
            client_info=ClientInfo(name=d.get("company_name") or None, location=location),
        )
