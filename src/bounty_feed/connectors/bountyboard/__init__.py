"""BountyBoard connector: synthesized local-business outreach opportunities."""

from bounty_feed.connectors.bountyboard.connector import BountyBoardConnector

__all__ = ["BountyBoardConnector"]
