"""Arbeitnow connector."""

from bounty_feed.connectors.arbeitnow.connector import ArbeitnowConnector

__all__ = ["ArbeitnowConnector"]
