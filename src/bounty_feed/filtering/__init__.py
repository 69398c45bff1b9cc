"""Cross-source filtering: language, budget and limit."""

from bounty_feed.filtering.engine import FilterEngine, FilterResult, apply_search_options
from bounty_feed.filtering.language import detect_language, is_in_language

__all__ = [
    "FilterEngine",
    "FilterResult",
    "apply_search_options",
    "detect_language",
    "is_in_language",
]
