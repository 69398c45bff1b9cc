"""Parsing helpers shared by source connectors."""

import html
import re
from datetime import datetime, timezone
from typing import Any, Optional

from bounty_feed.models.record import Budget, BudgetType

DESCRIPTION_MAX_LENGTH = 500

_TAG = re.compile(r"<[^>]*>")
_WHITESPACE = re.compile(r"\s+")
# Unix timestamps above this are milliseconds
_MS_THRESHOLD = 10**11


def clean_description(text: Optional[str], max_length: int = DESCRIPTION_MAX_LENGTH) -> str:
    """Strip markup, unescape entities, collapse whitespace and truncate."""
    if not text:
        return ""
    stripped = _TAG.sub(" ", text)
    stripped = html.unescape(stripped).replace("\xa0", " ")
    stripped = _WHITESPACE.sub(" ", stripped).strip()
    return stripped[:max_length]


def to_float(value: Any) -> Optional[float]:
    """Coerce numeric-ish upstream values; None for missing, zero or unparseable."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.replace(",", "").strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number or None


def build_budget(
    minimum: Any,
    maximum: Any,
    budget_type: BudgetType = "fixed",
    currency: Optional[str] = None,
) -> Optional[Budget]:
    """Budget from upstream bounds, or None when neither bound is present."""
    lo = to_float(minimum)
    hi = to_float(maximum)
    if lo is None and hi is None:
        return None
    return Budget(min=lo, max=hi, type=budget_type, currency=(currency or "USD").upper())


def parse_timestamp(value: Any) -> Optional[str]:
    """
    Normalize ISO-8601 strings and unix seconds/milliseconds to ISO-8601 UTC.
    Returns None for empty, unparseable or out-of-range values.
    """
    if value is None or value == "" or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)) or (isinstance(value, str) and value.strip().isdigit()):
        try:
            seconds = float(value)
            if seconds > _MS_THRESHOLD:
                seconds /= 1000
            return datetime.fromtimestamp(seconds, tz=timezone.utc).isoformat()
        except (OverflowError, OSError, ValueError):
            return None
    if not isinstance(value, str):
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc).isoformat()


def _amount(value: float) -> str:
    return f"{value:,.0f}" if value == int(value) else f"{value:,.2f}"


def format_budget(budget: Optional[Budget]) -> str:
    """Human-readable budget, e.g. "$50-$80/hr", "$500+", "Up to $500"."""
    if budget is None:
        return "Budget not specified"
    symbol = "$" if budget.currency == "USD" else f"{budget.currency} "
    suffix = "/hr" if budget.type == "hourly" else ""
    lo, hi = budget.min, budget.max
    if lo and hi:
        return f"{symbol}{_amount(lo)}-{symbol}{_amount(hi)}{suffix}"
    if lo:
        return f"{symbol}{_amount(lo)}+{suffix}"
    if hi:
        return f"Up to {symbol}{_amount(hi)}{suffix}"
    return "Budget not specified"
