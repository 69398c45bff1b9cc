"""RemoteOK connector using the public JSON API."""

import logging

import httpx

from bounty_feed.connectors.base import BaseConnector
from bounty_feed.connectors.parsers import build_budget, clean_description, parse_timestamp
from bounty_feed.models.raw import RawRecord
from bounty_feed.models.record import CanonicalRecord, ClientInfo, SearchOptions, make_record_id

logger = logging.getLogger(__name__)


class RemoteOKConnector(BaseConnector):
    """
    Connector for remoteok.com.
    The API returns a JSON array whose first element is a legal notice, not a job.
    """

    source_id = "remoteok"
    display_name = "RemoteOK"
    language_aware = True

    API_URL = "https://remoteok.com/api"
    JOB_URL_TEMPLATE = "https://remoteok.com/remote-jobs/{slug}"

    async def fetch(self, client: httpx.AsyncClient, query: str, options: SearchOptions) -> list[RawRecord]:
        params = {"tag": query} if query else None
        payload = await self.get_json(client, self.API_URL, params=params)
        if not isinstance(payload, list):
            raise ValueError("Unexpected RemoteOK payload: expected a JSON array")

        raw_list: list[RawRecord] = []
        for item in payload:
            # Legal notice and other metadata entries carry neither id nor slug
            if not isinstance(item, dict) or not (item.get("id") or item.get("slug")):
                continue
            raw_list.append(RawRecord(data=item))
        logger.debug("RemoteOK returned %d jobs for tag %r", len(raw_list), query)
        return raw_list

    def normalize(self, raw: RawRecord) -> CanonicalRecord:
        """Convert a RemoteOK job to CanonicalRecord."""
        d = raw.data
        external_id = str(d.get("id") or d.get("slug"))
        slug = d.get("slug") or external_id
        return CanonicalRecord(
            id=make_record_id(self.source_id, external_id),
            source=self.source_id,
            source_url=d.get("url") or self.JOB_URL_TEMPLATE.format(slug=slug),
            title=(d.get("position") or "").strip() or "Untitled",
            description=clean_description(d.get("description")),
            budget=build_budget(d.get("salary_min"), d.get("salary_max"), "fixed", "USD"),
            skills=[str(t) for t in d.get("tags") or []],
            posted_at=parse_timestamp(d.get("date") or d.get("epoch")),
            client_info=ClientInfo(
                name=d.get("company") or None,
                location=d.get("location") or "Remote",
            ),
        )
