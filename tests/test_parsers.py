"""Unit tests for shared connector parsing helpers."""

import pytest

from bounty_feed.connectors.jsearch.parsers import (
    budget_type_for_period,
    format_location,
    publisher_to_source,
    skills_from_job,
)
from bounty_feed.connectors.parsers import (
    build_budget,
    clean_description,
    format_budget,
    parse_timestamp,
    to_float,
)
from bounty_feed.models.record import Budget


class TestCleanDescription:
    """Tests for clean_description."""

    def test_strips_tags_and_entities(self) -> None:
        assert clean_description("<p>Fish &amp; chips</p>\n\n<br>daily") == "Fish & chips daily"

    def test_truncates(self) -> None:
        assert len(clean_description("word " * 200)) == 500
        assert clean_description("abcdef", max_length=3) == "abc"

    def test_empty(self) -> None:
        assert clean_description(None) == ""
        assert clean_description("") == ""


class TestToFloat:
    """Tests for to_float."""

    @pytest.mark.parametrize("value,expected", [(10, 10.0), ("1,500", 1500.0), ("12.5", 12.5)])
    def test_parses(self, value, expected) -> None:
        assert to_float(value) == expected

    @pytest.mark.parametrize("value", [None, 0, "0", "", "n/a", True])
    def test_missing_values(self, value) -> None:
        assert to_float(value) is None


class TestBuildBudget:
    """Tests for build_budget."""

    def test_none_without_bounds(self) -> None:
        assert build_budget(None, 0) is None

    def test_currency_upper_cased(self) -> None:
        budget = build_budget(70000, 95000, "fixed", "eur")
        assert budget == Budget(min=70000, max=95000, type="fixed", currency="EUR")

    def test_single_bound(self) -> None:
        budget = build_budget(None, 500)
        assert budget.min is None
        assert budget.max == 500
        assert budget.currency == "USD"


class TestParseTimestamp:
    """Tests for parse_timestamp."""

    def test_unix_seconds(self) -> None:
        assert parse_timestamp(1767225600) == "2026-01-01T00:00:00+00:00"

    def test_unix_milliseconds(self) -> None:
        assert parse_timestamp(1767225600000) == "2026-01-01T00:00:00+00:00"

    def test_digit_string(self) -> None:
        assert parse_timestamp("1767225600") == "2026-01-01T00:00:00+00:00"

    def test_iso_with_z(self) -> None:
        assert parse_timestamp("2026-01-02T10:00:00Z") == "2026-01-02T10:00:00+00:00"

    def test_naive_iso_assumed_utc(self) -> None:
        assert parse_timestamp("2026-01-02T10:00:00") == "2026-01-02T10:00:00+00:00"

    @pytest.mark.parametrize("value", [None, "", "yesterday", True])
    def test_unparseable(self, value) -> None:
        assert parse_timestamp(value) is None

    @pytest.mark.parametrize("value", [10**20, "100000000000000000000", float("inf"), 10**400])
    def test_out_of_range_number(self, value) -> None:
        assert parse_timestamp(value) is None


class TestFormatBudget:
    """Tests for format_budget."""

    def test_hourly_range(self) -> None:
        assert format_budget(Budget(min=50, max=80, type="hourly")) == "$50-$80/hr"

    def test_min_only(self) -> None:
        assert format_budget(Budget(min=500, type="fixed")) == "$500+"

    def test_max_only(self) -> None:
        assert format_budget(Budget(max=500, type="fixed")) == "Up to $500"

    def test_thousands_and_currency(self) -> None:
        assert format_budget(Budget(min=1500, max=2000, currency="EUR")) == "EUR 1,500-EUR 2,000"

    def test_not_specified(self) -> None:
        assert format_budget(None) == "Budget not specified"
        assert format_budget(Budget()) == "Budget not specified"


class TestJSearchParsers:
    """Tests for JSearch payload helpers."""

    def test_publisher_to_source(self) -> None:
        assert publisher_to_source("LinkedIn") == "linkedin"
        assert publisher_to_source("Indeed") == "indeed"
        assert publisher_to_source("ZipRecruiter") == "indeed"
        assert publisher_to_source(None) == "indeed"

    def test_required_skills_win(self) -> None:
        assert skills_from_job({"job_required_skills": ["Python", "SQL"]}) == ["Python", "SQL"]

    def test_skills_from_qualifications(self) -> None:
        job = {"job_highlights": {"Qualifications": ["3+ years JavaScript experience required", "CSS", "Strong CSS skills"]}}
        assert skills_from_job(job) == ["3+ years JavaScript experience", "Strong CSS skills"]

    def test_skills_capped_at_five(self) -> None:
        job = {"job_highlights": {"Qualifications": [f"Skill number {i}" for i in range(8)]}}
        assert len(skills_from_job(job)) == 5

    def test_format_location(self) -> None:
        assert format_location({"job_is_remote": True, "job_city": "Austin"}) == "Remote"
        assert format_location({"job_city": "Austin", "job_state": "TX"}) == "Austin, TX"
        assert format_location({}) == "Unknown"

    def test_budget_type_for_period(self) -> None:
        assert budget_type_for_period("HOUR") == "hourly"
        assert budget_type_for_period("YEAR") == "fixed"
        assert budget_type_for_period(None) == "fixed"
