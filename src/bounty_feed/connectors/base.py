"""Abstract base class for source connectors."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

import httpx

from bounty_feed.filtering.engine import FilterEngine
from bounty_feed.models.raw import RawRecord
from bounty_feed.models.record import CanonicalRecord, SearchOptions, SourceResult

logger = logging.getLogger(__name__)


class BaseConnector(ABC):
    """
    Standard interface for gig/opportunity source connectors.
    Subclasses implement fetch (upstream I/O) and normalize (one raw item -> one record);
    search wraps both, applies SearchOptions and never raises.
    """

    source_id: str = ""
    display_name: str = ""
    language_aware: bool = False

    DEFAULT_TIMEOUT = 20.0
    DEFAULT_HEADERS = {
        "User-Agent": "BountyFeed/0.1",
        "Accept": "application/json",
    }

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
        user_agent: Optional[str] = None,
    ):
        """
        Args:
            client: Optional shared httpx.AsyncClient (owned by the caller)
            timeout: Seconds per upstream request
            user_agent: Override the User-Agent header
        """
        self._client = client
        self._timeout = timeout or self.DEFAULT_TIMEOUT
        self._headers = dict(self.DEFAULT_HEADERS)
        if user_agent:
            self._headers["User-Agent"] = user_agent

    @property
    def name(self) -> str:
        return self.display_name or self.source_id

    def configuration_error(self) -> Optional[str]:
        """Actionable message when required configuration is missing; checked before any request."""
        return None

    @abstractmethod
    async def fetch(self, client: httpx.AsyncClient, query: str, options: SearchOptions) -> list[RawRecord]:
        """
        Query the upstream source; returns raw items in upstream order.
        Raises on transport errors or malformed payloads.
        """

    @abstractmethod
    def normalize(self, raw: RawRecord) -> CanonicalRecord:
        """
        Convert one raw item to a CanonicalRecord.
        """

    def select(self, records: list[CanonicalRecord], options: SearchOptions) -> list[CanonicalRecord]:
        """Source-specific selection before the shared filters. Default: keep all."""
        return records

    async def search(self, query: str = "", options: Optional[SearchOptions] = None) -> SourceResult:
        """
        Fetch, normalize and filter. Failures of any kind become a failed SourceResult.
        """
        options = options or SearchOptions()
        config_error = self.configuration_error()
        if config_error:
            logger.warning("Source %s not configured: %s", self.source_id, config_error)
            return SourceResult.failure(self.source_id, config_error)

        try:
            if self._client is not None:
                raw_list = await self.fetch(self._client, query, options)
            else:
                async with self.build_client() as client:
                    raw_list = await self.fetch(client, query, options)
            records = self.select([self.normalize(r) for r in raw_list], options)
            records = FilterEngine(options, language_aware=self.language_aware).apply(records)
        except Exception as e:
            message = self.describe_error(e)
            logger.warning("Source %s failed: %s", self.source_id, message)
            return SourceResult.failure(self.source_id, message)

        logger.debug("Source %s returned %d records for %r", self.source_id, len(records), query)
        return SourceResult(source=self.source_id, success=True, records=records)

    def build_client(self) -> httpx.AsyncClient:
        """Client used when none was injected; closed after each search."""
        return httpx.AsyncClient(timeout=self._timeout, follow_redirects=True)

    async def get_json(
        self,
        client: httpx.AsyncClient,
        url: str,
        params: Optional[dict[str, Any]] = None,
        headers: Optional[dict[str, str]] = None,
    ) -> Any:
        """GET url and decode JSON; raises httpx.HTTPStatusError on non-2xx."""
        response = await client.get(
            url,
            params=params,
            headers={**self._headers, **(headers or {})},
            timeout=self._timeout,
        )
        self.check_response(response)
        try:
            return response.json()
        except ValueError as e:
            raise ValueError(f"{self.name} returned a malformed payload") from e

    def check_response(self, response: httpx.Response) -> None:
        """Hook for source-specific status handling before raise_for_status."""
        response.raise_for_status()

    def describe_error(self, error: Exception) -> str:
        """Human-readable error for SourceResult.error."""
        if isinstance(error, httpx.HTTPStatusError):
            return f"{self.name} API error: {error.response.status_code}"
        if isinstance(error, httpx.TimeoutException):
            return f"{self.name} request timed out"
        return str(error) or type(error).__name__
