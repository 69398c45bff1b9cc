"""Himalayas connector."""

from bounty_feed.connectors.himalayas.connector import HimalayasConnector

__all__ = ["HimalayasConnector"]
