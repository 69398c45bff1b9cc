"""RemoteOK connector."""

from bounty_feed.connectors.remoteok.connector import RemoteOKConnector

__all__ = ["RemoteOKConnector"]
