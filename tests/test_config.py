"""Tests for settings loading."""

import pytest
from pydantic import ValidationError

from bounty_feed.config import FeedSettings


class TestFromEnv:
    """Tests for FeedSettings.from_env."""

    def test_defaults(self) -> None:
        settings = FeedSettings.from_env({})
        assert settings.rapidapi_key is None
        assert settings.http_timeout == 20.0
        assert settings.default_sources == ["remoteok", "arbeitnow"]

    def test_values(self) -> None:
        settings = FeedSettings.from_env(
            {
                "RAPIDAPI_KEY": "r-key",
                "GOOGLE_PLACES_API_KEY": "g-key",
                "BOUNTY_FEED_HTTP_TIMEOUT": "5",
                "BOUNTY_FEED_SOURCES": "RemoteOK, himalayas,",
                "BOUNTY_FEED_USER_AGENT": "  ",
            }
        )
        assert settings.rapidapi_key == "r-key"
        assert settings.google_places_api_key == "g-key"
        assert settings.http_timeout == 5.0
        assert settings.default_sources == ["remoteok", "himalayas"]
        assert settings.user_agent.startswith("Mozilla/5.0")

    def test_invalid_timeout(self) -> None:
        with pytest.raises(ValidationError):
            FeedSettings.from_env({"BOUNTY_FEED_HTTP_TIMEOUT": "0"})


class TestFromYaml:
    """Tests for FeedSettings.from_yaml."""

    def test_nested(self, tmp_path) -> None:
        path = tmp_path / "settings.yaml"
        path.write_text(
            "api_keys:\n"
            "  google_places_api_key: g-key\n"
            "http:\n"
            "  timeout: 7\n"
            "  user_agent: Custom/1.0\n"
            "sources: arbeitnow, bountyboard\n"
        )
        settings = FeedSettings.from_yaml(path, environ={"RAPIDAPI_KEY": "env-key"})
        assert settings.google_places_api_key == "g-key"
        assert settings.rapidapi_key == "env-key"
        assert settings.http_timeout == 7.0
        assert settings.user_agent == "Custom/1.0"
        assert settings.default_sources == ["arbeitnow", "bountyboard"]

    def test_flat(self, tmp_path) -> None:
        path = tmp_path / "settings.yaml"
        path.write_text("google_places_api_key: flat-key\nhttp_timeout: 3\ndefault_sources: [himalayas]\n")
        settings = FeedSettings.from_yaml(path, environ={})
        assert settings.google_places_api_key == "flat-key"
        assert settings.http_timeout == 3.0
        assert settings.default_sources == ["himalayas"]

    def test_empty_file(self, tmp_path) -> None:
        path = tmp_path / "settings.yaml"
        path.write_text("")
        assert FeedSettings.from_yaml(path, environ={}) == FeedSettings()
