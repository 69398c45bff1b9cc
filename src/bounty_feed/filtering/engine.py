"""Filter engine applying SearchOptions to normalized records with an explanation trail."""

from typing import Callable, Optional

from pydantic import BaseModel, Field

from bounty_feed.models.record import CanonicalRecord, SearchOptions

from .rules import apply_budget_rule, apply_language_rule


class FilterResult(BaseModel):
    """Result of filtering one record against search options."""

    passed: bool = Field(..., description="All filters passed")
    explanations: list[str] = Field(default_factory=list)
    record: CanonicalRecord
    excluded_by_rule: Optional[str] = Field(
        default=None,
        description="First rule that excluded (language|budget)",
    )


RuleFn = Callable[[CanonicalRecord, SearchOptions], tuple[bool, str, str]]


class FilterEngine:
    """
    Applies SearchOptions to records: language (when the source carries free text),
    then budget, then limit truncation. Upstream order is preserved.
    """

    def __init__(self, options: Optional[SearchOptions] = None, *, language_aware: bool = False):
        self.options = options or SearchOptions()
        self._rules: list[RuleFn] = []
        if language_aware:
            self._rules.append(apply_language_rule)
        self._rules.append(apply_budget_rule)

    def filter(self, record: CanonicalRecord) -> FilterResult:
        """Apply all rules and return FilterResult with explanation trail."""
        explanations: list[str] = []
        all_passed = True
        excluded_by: Optional[str] = None

        for rule_fn in self._rules:
            passed, explanation, rule_id = rule_fn(record, self.options)
            explanations.append(explanation)
            if not passed:
                all_passed = False
                if excluded_by is None:
                    excluded_by = rule_id

        return FilterResult(
            passed=all_passed,
            explanations=explanations,
            record=record,
            excluded_by_rule=excluded_by,
        )

    def filter_many(self, records: list[CanonicalRecord]) -> list[FilterResult]:
        """Filter multiple records; returns all with full results."""
        return [self.filter(r) for r in records]

    def apply(self, records: list[CanonicalRecord]) -> list[CanonicalRecord]:
        """Records that pass every rule, truncated to options.limit."""
        passed = [r.record for r in self.filter_many(records) if r.passed]
        return truncate(passed, self.options.limit)


def truncate(records: list[CanonicalRecord], limit: Optional[int]) -> list[CanonicalRecord]:
    """First `limit` records in order; None means no limit."""
    if limit is None:
        return list(records)
    return list(records[:limit])


def apply_search_options(
    records: list[CanonicalRecord],
    options: Optional[SearchOptions] = None,
    *,
    language_aware: bool = False,
) -> list[CanonicalRecord]:
    """Convenience wrapper around FilterEngine.apply."""
    return FilterEngine(options, language_aware=language_aware).apply(records)
