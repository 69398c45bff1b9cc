"""Shared keyword matching utilities for filtering, detection and scoring."""

import re
from typing import Iterable

_TOKEN = re.compile(r"[^\W\d_]+", re.UNICODE)


def word_in_text(text: str, word: str) -> bool:
    """Word-boundary match for a word or phrase (avoids substring false positives)."""
    if not word or not text:
        return False
    pattern = rf"\b{re.escape(word.lower().strip())}\b"
    return bool(re.search(pattern, text.lower()))


def contains_phrase(text: str, phrase: str) -> bool:
    """Case-insensitive substring containment."""
    if not phrase or not text:
        return False
    return phrase.lower() in text.lower()


def matched_phrases(text: str, phrases: Iterable[str]) -> list[str]:
    """Phrases contained in text, in table order."""
    text_lower = (text or "").lower()
    return [p for p in phrases if p and p.lower() in text_lower]


def any_query_word_matches(text: str, query: str) -> bool:
    """
    True if any whitespace-separated word of query appears in text.
    An empty query matches everything.
    """
    words = [w for w in (query or "").lower().split() if w]
    if not words:
        return True
    text_lower = (text or "").lower()
    return any(w in text_lower for w in words)


def tokenize(text: str) -> list[str]:
    """Lowercase alphabetic tokens (digits and punctuation dropped)."""
    return _TOKEN.findall((text or "").lower())


def count_vocabulary_hits(tokens: Iterable[str], vocabulary: Iterable[str]) -> int:
    """Number of tokens that belong to vocabulary (repeats count)."""
    vocab = {v.lower() for v in vocabulary}
    return sum(1 for t in tokens if t in vocab)
