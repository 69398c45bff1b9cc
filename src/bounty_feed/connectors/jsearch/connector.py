"""JSearch (RapidAPI) connector aggregating Indeed, LinkedIn and other boards.

Requires a RapidAPI key. The free tier allows 500 requests/month; no client-side
rate limiting is applied, so callers should keep searches infrequent.
"""

import logging
import os
from typing import Optional

import httpx

from bounty_feed.connectors.base import BaseConnector
from bounty_feed.connectors.parsers import build_budget, clean_description, parse_timestamp
from bounty_feed.models.raw import RawRecord
from bounty_feed.models.record import CanonicalRecord, ClientInfo, SearchOptions, make_record_id

from .parsers import budget_type_for_period, format_location, publisher_to_source, skills_from_job

logger = logging.getLogger(__name__)

MISSING_KEY_MESSAGE = (
    "RAPIDAPI_KEY environment variable not set. "
    "Get a free key at https://rapidapi.com/letscrape-6bRBa3QguO5/api/jsearch"
)
RATE_LIMIT_MESSAGE = "Rate limit exceeded. JSearch free tier allows 500 requests/month."


class JSearchConnector(BaseConnector):
    """
    Connector for the JSearch aggregator.
    The same upstream serves several tags: "indeed" keeps every record,
    "linkedin" keeps only LinkedIn-published records.
    """

    display_name = "JSearch"

    API_URL = "https://jsearch.p.rapidapi.com/search"
    API_HOST = "jsearch.p.rapidapi.com"
    SUPPORTED_TAGS = ("indeed", "linkedin")

    def __init__(
        self,
        source_id: str = "indeed",
        api_key: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
        user_agent: Optional[str] = None,
    ):
        """
        Args:
            source_id: Tag this connector answers to (indeed or linkedin)
            api_key: RapidAPI key; falls back to RAPIDAPI_KEY
        """
        super().__init__(client=client, timeout=timeout, user_agent=user_agent)
        tag = source_id.lower()
        if tag not in self.SUPPORTED_TAGS:
            raise ValueError(f"Unsupported JSearch tag: {source_id}. Supported: {list(self.SUPPORTED_TAGS)}")
        self.source_id = tag
        self._api_key = api_key or os.environ.get("RAPIDAPI_KEY")

    def configuration_error(self) -> Optional[str]:
        return None if self._api_key else MISSING_KEY_MESSAGE

    def check_response(self, response: httpx.Response) -> None:
        if response.status_code == 429:
            raise RuntimeError(RATE_LIMIT_MESSAGE)
        response.raise_for_status()

    async def fetch(self, client: httpx.AsyncClient, query: str, options: SearchOptions) -> list[RawRecord]:
        params = {
            "query": f"{query} remote".strip(),
            "page": "1",
            "num_pages": "1",
            "remote_jobs_only": "true",
        }
        headers = {"X-RapidAPI-Key": self._api_key or "", "X-RapidAPI-Host": self.API_HOST}
        payload = await self.get_json(client, self.API_URL, params=params, headers=headers)
        if not isinstance(payload, dict) or payload.get("status") != "OK" or payload.get("data") is None:
            raise RuntimeError("Invalid response from JSearch API")
        jobs = [job for job in payload["data"] if isinstance(job, dict) and job.get("job_id")]
        logger.debug("JSearch returned %d jobs for %r", len(jobs), query)
        return [RawRecord(data=job) for job in jobs]

    def normalize(self, raw: RawRecord) -> CanonicalRecord:
        """Convert a JSearch job to CanonicalRecord; source follows the publisher."""
        d = raw.data
        source = publisher_to_source(d.get("job_publisher"))
        return CanonicalRecord(
            id=make_record_id(source, d["job_id"]),
            source=source,
            source_url=d.get("job_apply_link") or "",
            title=(d.get("job_title") or "").strip() or "Untitled",
            description=clean_description(d.get("job_description")),
            budget=build_budget(
                d.get("job_min_salary"),
                d.get("job_max_salary"),
                budget_type_for_period(d.get("job_salary_period")),
                d.get("job_salary_currency"),
            ),
            skills=skills_from_job(d),
            posted_at=parse_timestamp(d.get("job_posted_at_datetime_utc")),
            client_info=ClientInfo(name=d.get("employer_name") or None, location=format_location(d)),
        )

    def select(self, records: list[CanonicalRecord], options: SearchOptions) -> list[CanonicalRecord]:
        if self.source_id == "indeed":
            return records
        return [r for r in records if r.source == self.source_id]
