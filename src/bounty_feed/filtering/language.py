"""Heuristic language detection from diacritics and common function words.

This is a lexical heuristic, not a classifier: short texts, mixed-language
postings and loanwords can be misdetected. English is the fallback whenever
no candidate language clearly dominates.
"""

from typing import Optional

from bounty_feed.matching import count_vocabulary_hits, tokenize
from bounty_feed.tables import language_table


def language_scores(text: str) -> dict[str, int]:
    """Hit count per candidate language (diacritic characters + function words)."""
    table = language_table()
    lowered = (text or "").lower()
    tokens = tokenize(lowered)
    scores: dict[str, int] = {}
    for lang, entry in table["languages"].items():
        diacritics = set(entry.get("diacritics") or "")
        char_hits = sum(1 for ch in lowered if ch in diacritics)
        word_hits = count_vocabulary_hits(tokens, entry.get("words") or [])
        scores[lang] = char_hits + word_hits
    return scores


def detect_language(text: str) -> str:
    """
    Return an ISO 639-1 tag. A candidate wins only when its count exceeds
    the threshold and strictly exceeds every other candidate; otherwise "en".
    """
    table = language_table()
    threshold = int(table.get("threshold", 3))
    default = table.get("default", "en")
    scores = language_scores(text)
    for lang, count in scores.items():
        if count <= threshold:
            continue
        if all(count > other for name, other in scores.items() if name != lang):
            return lang
    return default


def is_in_language(text: str, target: Optional[str]) -> bool:
    """
    English targets are strict: the text must be detected as English.
    Other targets also accept English, since many non-English boards post in English.
    No target means no filtering.
    """
    if not target:
        return True
    target = target.lower().strip()
    detected = detect_language(text)
    if target == "en":
        return detected == "en"
    return detected in (target, "en")
