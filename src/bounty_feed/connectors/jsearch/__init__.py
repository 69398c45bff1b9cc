"""JSearch (RapidAPI) connector for Indeed/LinkedIn listings."""

from bounty_feed.connectors.jsearch.connector import JSearchConnector

__all__ = ["JSearchConnector"]
