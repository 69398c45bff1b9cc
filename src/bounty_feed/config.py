"""Runtime settings: API keys, timeouts and default sources."""

import os
from pathlib import Path
from typing import Optional

try:
    import yaml
except ModuleNotFoundError as e:
    raise ModuleNotFoundError(
        "PyYAML is required for settings loading. Run: poetry install"
    ) from e
from pydantic import BaseModel, Field

DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; BountyFeed/0.1; +https://github.com/bounty-feed)"

_ENV_KEYS = {
    "rapidapi_key": "RAPIDAPI_KEY",
    "google_places_api_key": "GOOGLE_PLACES_API_KEY",
    "openai_api_key": "OPENAI_API_KEY",
    "http_timeout": "BOUNTY_FEED_HTTP_TIMEOUT",
    "website_timeout": "BOUNTY_FEED_WEBSITE_TIMEOUT",
    "user_agent": "BOUNTY_FEED_USER_AGENT",
    "detail_delay_s": "BOUNTY_FEED_DETAIL_DELAY",
    "pitch_model": "BOUNTY_FEED_PITCH_MODEL",
    "default_sources": "BOUNTY_FEED_SOURCES",
}


class FeedSettings(BaseModel):
    """Settings shared by connectors and collaborators."""

    rapidapi_key: Optional[str] = Field(default=None, description="JSearch (RapidAPI) key")
    google_places_api_key: Optional[str] = None
    openai_api_key: Optional[str] = None

    http_timeout: float = Field(default=20.0, gt=0, description="Seconds per upstream API call")
    website_timeout: float = Field(default=10.0, gt=0, description="Seconds per website page fetch")
    accessibility_timeout: float = Field(default=5.0, gt=0)
    user_agent: str = DEFAULT_USER_AGENT

    detail_delay_s: float = Field(default=0.15, ge=0, description="Pacing between place-detail calls")
    pitch_model: str = "gpt-4o-mini"
    default_sources: list[str] = Field(default_factory=lambda: ["remoteok", "arbeitnow"])

    @classmethod
    def from_env(cls, environ: Optional[dict[str, str]] = None) -> "FeedSettings":
        """Build settings from environment variables; unset ones keep their defaults."""
        env = os.environ if environ is None else environ
        values: dict = {}
        for field, key in _ENV_KEYS.items():
            raw = env.get(key)
            if raw is None or not raw.strip():
                continue
            values[field] = _split_sources(raw) if field == "default_sources" else raw.strip()
        return cls.model_validate(values)

    @classmethod
    def from_yaml(cls, path: str | Path, environ: Optional[dict[str, str]] = None) -> "FeedSettings":
        """
        Load settings from YAML. Supports nested (api_keys/http) or flat structure.
        Keys missing from the file fall back to the environment.
        """
        data = yaml.safe_load(Path(path).read_text()) or {}
        api_keys = data.get("api_keys", {}) or {}
        http = data.get("http", {}) or {}

        def _get(key: str, nested: dict, top: dict):
            return nested.get(key, top.get(key))

        base = cls.from_env(environ).model_dump()
        overrides = {
            "rapidapi_key": _get("rapidapi_key", api_keys, data),
            "google_places_api_key": _get("google_places_api_key", api_keys, data),
            "openai_api_key": _get("openai_api_key", api_keys, data),
            "http_timeout": _get("timeout", http, data) or data.get("http_timeout"),
            "website_timeout": _get("website_timeout", http, data),
            "accessibility_timeout": _get("accessibility_timeout", http, data),
            "user_agent": _get("user_agent", http, data),
            "detail_delay_s": data.get("detail_delay_s"),
            "pitch_model": data.get("pitch_model"),
            "default_sources": data.get("sources") or data.get("default_sources"),
        }
        if isinstance(overrides["default_sources"], str):
            overrides["default_sources"] = _split_sources(overrides["default_sources"])
        base.update({k: v for k, v in overrides.items() if v is not None})
        return cls.model_validate(base)


def _split_sources(value: str) -> list[str]:
    return [s.strip().lower() for s in value.split(",") if s.strip()]
