"""Pipeline orchestration: fan a query out to sources concurrently and collect every result."""

import asyncio
import logging
from collections.abc import Sequence
from typing import Optional

from bounty_feed.config import FeedSettings
from bounty_feed.connectors.registry import ConnectorRegistry, build_default_registry
from bounty_feed.models.record import CanonicalRecord, SearchOptions, SourceResult

logger = logging.getLogger(__name__)


class Aggregator:
    """
    Dispatches one search to many connectors at once.
    Every requested tag yields exactly one SourceResult, in request order.
    """

    def __init__(self, registry: ConnectorRegistry):
        self.registry = registry

    async def search_all(
        self,
        query: str,
        sources: Sequence[str],
        options: Optional[SearchOptions] = None,
    ) -> list[SourceResult]:
        """
        Run all sources concurrently; total latency follows the slowest source.
        Unknown tags and escaped exceptions become failed results.
        """
        options = options or SearchOptions()
        logger.info("Searching %r across %s", query, list(sources))
        outcomes = await asyncio.gather(
            *(self._search_one(tag, query, options) for tag in sources),
            return_exceptions=True,
        )

        results: list[SourceResult] = []
        for tag, outcome in zip(sources, outcomes):
            if isinstance(outcome, BaseException):
                logger.warning("Source %s raised past its boundary: %s", tag, outcome)
                results.append(SourceResult.failure(tag, str(outcome) or type(outcome).__name__))
            else:
                results.append(outcome)
        return results

    async def _search_one(self, tag: str, query: str, options: SearchOptions) -> SourceResult:
        if tag not in self.registry:
            available = ", ".join(self.registry.available_sources())
            return SourceResult.failure(tag, f"adapter not implemented for {tag}, available: {available}")
        return await self.registry.get(tag).search(query, options)


def search(
    query: str,
    sources: Optional[Sequence[str]] = None,
    options: Optional[SearchOptions] = None,
    *,
    registry: Optional[ConnectorRegistry] = None,
    settings: Optional[FeedSettings] = None,
) -> list[SourceResult]:
    """
    Synchronous entry point. Empty sources fall back to settings.default_sources.
    Must not be called from inside a running event loop; use Aggregator.search_all there.
    """
    settings = settings or FeedSettings.from_env()
    registry = registry or build_default_registry(settings)
    return asyncio.run(Aggregator(registry).search_all(query, list(sources or settings.default_sources), options))


def flatten_records(results: Sequence[SourceResult]) -> list[CanonicalRecord]:
    """All records in source order."""
    return [record for result in results for record in result.records]


def failed_sources(results: Sequence[SourceResult]) -> dict[str, str]:
    """{source: error} for every failed result."""
    return {r.source: r.error or "unknown error" for r in results if not r.success}
