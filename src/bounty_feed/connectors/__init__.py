"""Source connectors for gig and opportunity ingestion."""

from bounty_feed.connectors.base import BaseConnector
from bounty_feed.connectors.registry import ConnectorRegistry, build_default_registry

__all__ = ["BaseConnector", "ConnectorRegistry", "build_default_registry"]
