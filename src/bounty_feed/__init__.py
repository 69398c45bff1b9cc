"""Multi-source freelance gig and local-business opportunity aggregator."""

__version__ = "0.1.0"
