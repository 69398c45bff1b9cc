"""Tests for the bounty-feed CLI."""

import json
from unittest.mock import AsyncMock, patch

import pytest

from bounty_feed import pipeline
from bounty_feed.cli.main import main
from bounty_feed.models.record import SourceResult
from bounty_feed.opportunities import discovery
from bounty_feed.store import SqliteCurationStore
from conftest import make_record


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch) -> None:
    for key in ("RAPIDAPI_KEY", "GOOGLE_PLACES_API_KEY", "OPENAI_API_KEY", "BOUNTY_FEED_SOURCES"):
        monkeypatch.delenv(key, raising=False)


def _results() -> list[SourceResult]:
    return [
        SourceResult(source="remoteok", success=True, records=[make_record(id="remoteok:1")]),
        SourceResult.failure("arbeitnow", "Arbeitnow API error: 503"),
    ]


class TestSourcesCommand:
    """Tests for `bounty-feed sources`."""

    def test_lists_tags_with_configuration_problems(self, capsys) -> None:
        main(["sources"])
        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == "remoteok"
        assert "arbeitnow" in lines
        assert any(line.startswith("bountyboard  (not configured: GOOGLE_PLACES_API_KEY") for line in lines)
        assert any(line.startswith("indeed  (not configured:") for line in lines)


class TestSearchCommand:
    """Tests for `bounty-feed search`."""

    def test_prints_status_and_records(self, capsys) -> None:
        with patch.object(pipeline, "search", return_value=_results()) as search:
            main(["search", "python", "--sources", "RemoteOK, arbeitnow", "--limit", "5", "--language", "any"])

        query, sources, options = search.call_args.args
        assert query == "python"
        assert sources == ["remoteok", "arbeitnow"]
        assert options.limit == 5
        assert options.language is None

        captured = capsys.readouterr()
        assert "  remoteok: 1 records" in captured.err
        assert "  arbeitnow: FAILED: Arbeitnow API error: 503" in captured.err
        assert "All sources failed." not in captured.err
        assert [r["id"] for r in json.loads(captured.out)] == ["remoteok:1"]

    def test_all_failed(self, capsys) -> None:
        failures = [SourceResult.failure("remoteok", "remoteok request timed out")]
        with patch.object(pipeline, "search", return_value=failures):
            main(["search", "python"])
        captured = capsys.readouterr()
        assert "All sources failed." in captured.err
        assert json.loads(captured.out) == []

    def test_output_file_and_store(self, tmp_path, capsys) -> None:
        db_path = tmp_path / "feed.db"
        out_path = tmp_path / "records.json"
        with patch.object(pipeline, "search", return_value=_results()):
            main(
                [
                    "search",
                    "web design",
                    "--location",
                    "Austin, TX",
                    "--output",
                    str(out_path),
                    "--store",
                    str(db_path),
                    "--tenant",
                    "acme",
                ]
            )

        assert [r["id"] for r in json.loads(out_path.read_text())] == ["remoteok:1"]
        store = SqliteCurationStore(db_path)
        assert [c.record.id for c in store.list_curated("acme")] == ["remoteok:1"]
        searches = store.list_searches("acme")
        assert searches[0].query == "web design"
        assert searches[0].options.location == "Austin, TX"
        assert searches[0].last_run is not None
        assert "Store: 1 records added as pending for acme" in capsys.readouterr().err


class TestCuratedCommand:
    """Tests for `bounty-feed curated`."""

    def test_list_and_set_status(self, tmp_path, capsys) -> None:
        db_path = tmp_path / "feed.db"
        curated = SqliteCurationStore(db_path).add("acme", make_record(id="himalayas:7", source="himalayas"))

        main(["curated", "set-status", "--db", str(db_path), "--tenant", "acme", "--id", curated.id, "--status", "approved"])
        assert capsys.readouterr().out.strip() == f"{curated.id}: approved"

        main(["curated", "list", "--db", str(db_path), "--tenant", "acme", "--status", "approved"])
        listed = json.loads(capsys.readouterr().out)
        assert [c["record"]["id"] for c in listed] == ["himalayas:7"]
        assert listed[0]["approved_at"] is not None

    def test_set_status_requires_id(self, tmp_path) -> None:
        with pytest.raises(SystemExit):
            main(["curated", "set-status", "--db", str(tmp_path / "feed.db"), "--status", "approved"])

    def test_set_status_unknown_id(self, tmp_path) -> None:
        with pytest.raises(SystemExit, match="Unknown curated record"):
            main(["curated", "set-status", "--db", str(tmp_path / "feed.db"), "--id", "cr_nope", "--status", "hidden"])


class TestAnalyzeCommand:
    """Tests for `bounty-feed analyze`."""

    def test_inaccessible_site_exits(self, capsys) -> None:
        with patch.object(discovery, "analyze_business_by_url", new=AsyncMock(return_value=None)):
            with pytest.raises(SystemExit) as exc:
                main(["analyze", "https://down.test"])
        assert exc.value.code == 1
        assert "Could not access https://down.test" in capsys.readouterr().err

    def test_prints_lead(self, salon_lead, capsys) -> None:
        with patch.object(discovery, "analyze_business_by_url", new=AsyncMock(return_value=salon_lead)):
            main(["analyze", "https://bella.test", "--name", "Bella Salon"])
        printed = json.loads(capsys.readouterr().out)
        assert printed["business"]["name"] == "Bella Salon"
        assert "reviews" not in printed

    def test_scanner_uses_configured_user_agent(self, salon_lead, monkeypatch, capsys) -> None:
        monkeypatch.setenv("BOUNTY_FEED_USER_AGENT", "SalonAudit/2.0")
        analyze = AsyncMock(return_value=salon_lead)
        with patch.object(discovery, "analyze_business_by_url", new=analyze):
            main(["analyze", "https://bella.test"])
        scanner = analyze.call_args.args[1]
        assert scanner._headers["User-Agent"] == "SalonAudit/2.0"
