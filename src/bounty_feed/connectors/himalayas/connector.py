"""Himalayas connector using the public remote-jobs API."""

import logging
from typing import Any, Optional

import httpx

from bounty_feed.connectors.base import BaseConnector
from bounty_feed.connectors.parsers import build_budget, clean_description, parse_timestamp
from bounty_feed.matching import any_query_word_matches
from bounty_feed.models.raw import RawRecord
from bounty_feed.models.record import CanonicalRecord, ClientInfo, SearchOptions, make_record_id

logger = logging.getLogger(__name__)


def _external_id(job: dict[str, Any]) -> Optional[str]:
    value = job.get("id") or job.get("guid") or job.get("applicationLink")
    return str(value) if value else None


def _searchable_text(job: dict) -> str:
    categories = " ".join(str(c) for c in job.get("categories") or [])
    return " ".join(
        [job.get("title") or "", job.get("companyName") or "", job.get("excerpt") or "", categories]
    )


class HimalayasConnector(BaseConnector):
    """
    Connector for himalayas.app.
    The API has no search parameter; the query is matched client-side against
    title, company, excerpt and categories (any query word suffices).
    """

    source_id = "himalayas"
    display_name = "Himalayas"

    API_URL = "https://himalayas.app/jobs/api"
    PAGE_SIZE = 50

    async def fetch(self, client: httpx.AsyncClient, query: str, options: SearchOptions) -> list[RawRecord]:
        page_size = max(options.limit or 0, self.PAGE_SIZE)
        payload = await self.get_json(client, self.API_URL, params={"limit": page_size})
        jobs = payload.get("jobs") if isinstance(payload, dict) else None
        if not isinstance(jobs, list):
            raise ValueError("Unexpected Himalayas payload: missing jobs array")
        raw_list: list[RawRecord] = []
        for job in jobs:
            if not isinstance(job, dict):
                continue
            # Titles are not unique; a job without a stable id would collide with others
            if _external_id(job) is None:
                logger.debug("Skipping Himalayas job without id: %r", job.get("title"))
                continue
            if any_query_word_matches(_searchable_text(job), query):
                raw_list.append(RawRecord(data=job))
        return raw_list

    def normalize(self, raw: RawRecord) -> CanonicalRecord:
        """Convert a Himalayas job to CanonicalRecord."""
        d = raw.data
        external_id = _external_id(d)
        if external_id is None:
            raise ValueError("Himalayas job has no id, guid or applicationLink")
        restrictions = [str(r) for r in d.get("locationRestrictions") or []]
        return CanonicalRecord(
            id=make_record_id(self.source_id, external_id),
            source=self.source_id,
            source_url=d.get("applicationLink") or "",
            title=(d.get("title") or "").strip() or "Untitled",
            description=clean_description(d.get("excerpt")),
            budget=build_budget(d.get("minSalary"), d.get("maxSalary"), "fixed", d.get("salaryCurrency")),
            skills=[str(c) for c in d.get("categories") or []],
            posted_at=parse_timestamp(d.get("pubDate")),
            client_info=ClientInfo(
                name=d.get("companyName") or None,
                location=", ".join(restrictions) or "Remote Worldwide",
            ),
        )
