"""Review pain-point analysis, service suggestions and opportunity scoring."""

import re
from datetime import datetime, timedelta, timezone
from typing import Literal, Optional

from bounty_feed.matching import matched_phrases, word_in_text
from bounty_feed.models.business import (
    Business,
    BusinessLead,
    MissingFeature,
    PainPoint,
    PriorityLevel,
    Review,
    ServiceOpportunity,
    ServiceSuggestion,
    SuggestionEvidence,
)
from bounty_feed.tables import (
    feature_service_keywords,
    opportunity_table,
    pain_point_keywords,
    service_catalog,
)

RECENT_WINDOW = timedelta(days=183)
MAX_EXAMPLES = 3
EXAMPLE_CONTEXT = 50
EXAMPLE_MAX_LENGTH = 150
FEATURE_MATCH_CONFIDENCE = 0.7
MIN_RELEVANCE = 10

_NAME = re.compile(r"\b[A-Z][a-z]+ [A-Z][a-z]+\b")
_MONEY = re.compile(r"\$\d+(\.\d{2})?")

Sentiment = Literal["positive", "negative", "neutral", "mixed"]


def _parse_date(value: str) -> Optional[datetime]:
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


def is_recent_review(date: str, now: Optional[datetime] = None) -> bool:
    """True when the review is less than six months old."""
    parsed = _parse_date(date)
    if parsed is None:
        return False
    now = now or datetime.now(timezone.utc)
    return parsed > now - RECENT_WINDOW


def is_signal_review(review: Review) -> bool:
    """Low ratings always carry signal; 4-5 stars only when the text hedges ("but", "wish", ...)."""
    if review.rating <= 3:
        return True
    hedges: list[str] = opportunity_table()["signal_hedges"]
    return any(word_in_text(review.text, h) for h in hedges)


def calculate_severity(mentions: int, recent_mentions: int, total_reviews: int) -> float:
    """
    Severity in [0, 10]: frequency (max 5) + recency (max 3) + absolute count bonus (max 2).
    """
    frequency = mentions / max(total_reviews, 1)
    score = min(frequency * 20, 5.0)
    score += min(recent_mentions * 0.5, 3.0)
    if mentions >= 10:
        score += 2
    elif mentions >= 5:
        score += 1
    return min(round(score, 1), 10.0)


def extract_example_phrase(text: str, keyword: str) -> Optional[str]:
    """Anonymised context around keyword: names -> [name], amounts -> [amount]."""
    index = text.lower().find(keyword.lower())
    if index == -1:
        return None
    start = max(0, index - EXAMPLE_CONTEXT)
    end = min(len(text), index + len(keyword) + EXAMPLE_CONTEXT)
    phrase = text[start:end].strip()
    if start > 0:
        phrase = "..." + phrase
    if end < len(text):
        phrase = phrase + "..."
    phrase = _NAME.sub("[name]", phrase)
    phrase = _MONEY.sub("[amount]", phrase)
    return phrase[:EXAMPLE_MAX_LENGTH]


def analyze_reviews(reviews: list[Review], now: Optional[datetime] = None) -> list[PainPoint]:
    """Pain points from signal reviews, most severe first."""
    signal_reviews = [r for r in reviews if is_signal_review(r)]
    pain_points: list[PainPoint] = []

    for category, keywords in pain_point_keywords().items():
        matched_keywords: list[str] = []
        review_ids: list[str] = []
        examples: list[str] = []
        recent = 0
        for review in signal_reviews:
            hits = matched_phrases(review.text, keywords)
            if not hits:
                continue
            review_ids.append(review.id)
            if is_recent_review(review.date, now):
                recent += 1
            for keyword in hits:
                if keyword not in matched_keywords:
                    matched_keywords.append(keyword)
                if len(examples) < MAX_EXAMPLES:
                    example = extract_example_phrase(review.text, keyword)
                    if example and example not in examples:
                        examples.append(example)
        if not review_ids:
            continue
        pain_points.append(
            PainPoint(
                category=category,
                keywords=matched_keywords,
                review_ids=review_ids,
                severity=calculate_severity(len(review_ids), recent, len(reviews)),
                example_phrases=examples,
                count=len(review_ids),
            )
        )

    return sorted(pain_points, key=lambda p: p.severity, reverse=True)


def _feature_matches_service(feature: str, service: ServiceOpportunity) -> bool:
    feature_keywords = feature_service_keywords().get(feature, [])
    return any(k in fk or fk in k for k in service.keywords for fk in feature_keywords)


def generate_pitch_summary(
    service: ServiceOpportunity,
    pain_point_count: int,
    missing_feature_match: bool,
    examples: list[str],
) -> str:
    parts: list[str] = []
    if pain_point_count > 0:
        plural = "s" if pain_point_count > 1 else ""
        parts.append(f"{pain_point_count} customer{plural} mentioned related issues")
    if missing_feature_match:
        parts.append("this feature appears to be missing from their website")
    if examples:
        parts.append(f'customers say things like "{examples[0][:80]}..."')
    evidence = f" ({'; '.join(parts)})" if parts else ""
    return f"{service.name}: {service.description}{evidence}. Estimated value: {service.estimated_value}."


def generate_service_suggestions(
    pain_points: list[PainPoint],
    missing_features: list[MissingFeature],
) -> list[ServiceSuggestion]:
    """
    Catalog services scored by related pain-point severity (x5) and confidently
    missing features (+20 each); relevance <= 10 is dropped, the rest capped at 100.
    """
    suggestions: list[ServiceSuggestion] = []
    for service in service_catalog():
        relevance = 0.0
        pain_point_count = 0
        feature_match = False
        examples: list[str] = []

        for pain_point in pain_points:
            if pain_point.category in service.related_pain_points:
                relevance += pain_point.severity * 5
                pain_point_count += pain_point.count
                examples.extend(pain_point.example_phrases[:2])

        for missing in missing_features:
            if missing.confidence > FEATURE_MATCH_CONFIDENCE and _feature_matches_service(missing.feature, service):
                relevance += 20
                feature_match = True

        if relevance <= MIN_RELEVANCE:
            continue
        suggestions.append(
            ServiceSuggestion(
                service=service,
                relevance_score=min(relevance, 100.0),
                evidence=SuggestionEvidence(
                    pain_point_count=pain_point_count,
                    missing_feature_match=feature_match,
                    review_examples=examples[:3],
                ),
                pitch_summary=generate_pitch_summary(service, pain_point_count, feature_match, examples),
            )
        )
    return sorted(suggestions, key=lambda s: s.relevance_score, reverse=True)


def priority_for_score(score: float) -> PriorityLevel:
    if score >= 70:
        return "high"
    if score >= 40:
        return "medium"
    return "low"


def calculate_opportunity_score(
    pain_points: list[PainPoint],
    missing_features: list[MissingFeature],
    business: Business,
) -> tuple[float, PriorityLevel]:
    """
    Score in [0, 100]: pain points (max 50) + confident missing features (max 30)
    + business profile (review volume max 10, low rating max 10).
    """
    score = min(sum(p.severity for p in pain_points) * 3, 50.0)
    confident_missing = sum(1 for m in missing_features if m.confidence > FEATURE_MATCH_CONFIDENCE)
    score += min(confident_missing * 5, 30)

    if business.review_count >= 100:
        score += 10
    elif business.review_count >= 50:
        score += 7
    elif business.review_count >= 20:
        score += 5

    # Unrated businesses (0) get no low-rating bonus
    if 0 < business.rating < 3.5:
        score += 10
    elif 0 < business.rating < 4.0:
        score += 5

    score = min(max(round(score, 1), 0.0), 100.0)
    return score, priority_for_score(score)


def analyze_business_opportunity(
    business: Business,
    reviews: list[Review],
    missing_features: list[MissingFeature],
    now: Optional[datetime] = None,
) -> BusinessLead:
    """Complete lead: pain points, suggestions, score and priority."""
    pain_points = analyze_reviews(reviews, now)
    suggestions = generate_service_suggestions(pain_points, missing_features)
    score, priority = calculate_opportunity_score(pain_points, missing_features, business)
    return BusinessLead(
        id=f"opp_{business.id}",
        business=business,
        reviews=reviews,
        pain_points=pain_points,
        missing_features=missing_features,
        suggested_services=suggestions,
        opportunity_score=score,
        priority_level=priority,
    )


def analyze_sentiment(text: str) -> Sentiment:
    """Rule-based sentiment from positive/negative word lists."""
    words = opportunity_table()["sentiment"]
    positive = len(matched_phrases(text, words["positive"]))
    negative = len(matched_phrases(text, words["negative"]))
    if positive and negative:
        return "mixed"
    if positive > negative:
        return "positive"
    if negative > positive:
        return "negative"
    return "neutral"
