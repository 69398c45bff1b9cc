"""Filter rules: each returns (passed, explanation, rule_id)."""

from bounty_feed.filtering.language import detect_language, is_in_language
from bounty_feed.models.record import CanonicalRecord, SearchOptions


def record_text(record: CanonicalRecord) -> str:
    """Free text used for language detection."""
    return f"{record.title} {record.description}".strip()


def apply_budget_rule(record: CanonicalRecord, options: SearchOptions) -> tuple[bool, str, str]:
    """
    Budget: budget.min must reach options.min_budget and budget.max must not exceed
    options.max_budget. A missing bound is replaced by the other one.
    Records without a budget (or without any bound) always pass.
    """
    if options.min_budget is None and options.max_budget is None:
        return True, "Budget filter not set", "budget"

    budget = record.budget
    if budget is None or (budget.min is None and budget.max is None):
        return True, "Budget not applicable (no budget on record)", "budget"

    if options.min_budget is not None:
        lower_bound = budget.lower_bound
        if lower_bound is not None and lower_bound < options.min_budget:
            return False, f"Excluded: min budget {lower_bound} below min {options.min_budget}", "budget"

    if options.max_budget is not None:
        upper_bound = budget.upper_bound
        if upper_bound is not None and upper_bound > options.max_budget:
            return False, f"Excluded: max budget {upper_bound} above max {options.max_budget}", "budget"

    return True, "Within budget range", "budget"


def apply_language_rule(record: CanonicalRecord, options: SearchOptions) -> tuple[bool, str, str]:
    """Language: detected language of title + description must satisfy options.language."""
    if not options.language:
        return True, "Language filter not set", "language"

    text = record_text(record)
    if is_in_language(text, options.language):
        return True, f"Language accepted for {options.language}", "language"
    return False, f"Excluded: detected {detect_language(text)}, wanted {options.language}", "language"
