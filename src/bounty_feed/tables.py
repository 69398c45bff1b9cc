"""Static keyword tables loaded from YAML resources under bounty_feed/data."""

from functools import lru_cache
from importlib import resources
from typing import Any

import yaml

from bounty_feed.models.business import ServiceOpportunity

_DATA_PACKAGE = "bounty_feed.data"


@lru_cache(maxsize=None)
def load_table(name: str) -> dict[str, Any]:
    """Load data/<name>.yaml once per process."""
    text = resources.files(_DATA_PACKAGE).joinpath(f"{name}.yaml").read_text(encoding="utf-8")
    return yaml.safe_load(text) or {}


def language_table() -> dict[str, Any]:
    return load_table("language")


def opportunity_table() -> dict[str, Any]:
    return load_table("opportunity")


def pain_point_keywords() -> dict[str, list[str]]:
    return opportunity_table()["pain_point_keywords"]


def pain_point_services() -> dict[str, list[str]]:
    return opportunity_table()["pain_point_service_map"]


def feature_patterns() -> dict[str, dict[str, Any]]:
    return opportunity_table()["feature_detection"]


def feature_service_keywords() -> dict[str, list[str]]:
    return opportunity_table()["feature_service_keywords"]


@lru_cache(maxsize=None)
def service_catalog() -> tuple[ServiceOpportunity, ...]:
    return tuple(ServiceOpportunity.model_validate(s) for s in opportunity_table()["service_catalog"])


def service_to_business() -> dict[str, list[str]]:
    return opportunity_table()["service_to_business"]
