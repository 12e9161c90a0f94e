import json

import pytest
from typer.testing import CliRunner

from wiki_racer import main as cli
from wiki_racer.config import RacerConfig
from wiki_racer.exceptions import InvalidEndpoint
from wiki_racer.models import RaceResult
from wiki_racer.solver import SearchMode

WIKI = "https://en.wikipedia.org/wiki/"

runner = CliRunner()


@pytest.fixture
def race_calls(monkeypatch):
    """Replace the live race with a canned result and record its arguments."""
    calls = []

    async def fake_run_race(start: str, end: str, mode: SearchMode, config: RacerConfig) -> RaceResult:
        calls.append({"start": start, "end": end, "mode": mode, "config": config})
        path = None if end.endswith("Nowhere") else [start, WIKI + "Middle", end]
        return RaceResult(start=start, end=end, mode=mode, path=path, elapsed_seconds=1.5)

    monkeypatch.setattr(cli, "run_race", fake_run_race)
    return calls


def test_prints_path_and_execution_time(race_calls):
    result = runner.invoke(cli.app, [WIKI + "Start", WIKI + "End"])

    assert result.exit_code == 0
    assert "Path found (2 hops):" in result.output
    assert f"2. {WIKI}End" in result.output
    assert "Execution Time: 0m" in result.output
    assert race_calls[0]["mode"] == SearchMode.SHORTEST


def test_no_path_message(race_calls):
    result = runner.invoke(cli.app, [WIKI + "Start", WIKI + "Nowhere"])

    assert result.exit_code == 0
    assert "No path found!" in result.output


def test_json_output(race_calls):
    result = runner.invoke(cli.app, [WIKI + "Start", WIKI + "Nowhere", "--json"])

    assert result.exit_code == 0
    report = json.loads(result.stdout)
    assert report["start"] == WIKI + "Start"
    assert report["path"] == "No path! :("
    assert report["hops"] is None


def test_options_override_config(race_calls):
    result = runner.invoke(
        cli.app,
        [WIKI + "Start", WIKI + "End", "--mode", "first", "-c", "5", "--retries", "2", "--max-depth", "4"],
    )

    assert result.exit_code == 0
    call = race_calls[0]
    assert call["mode"] == SearchMode.FIRST
    assert call["config"].max_concurrency == 5
    assert call["config"].max_attempts == 2
    assert call["config"].max_depth == 4
    assert call["config"].retry_delay == 2.0


def test_options_override_environment(race_calls, monkeypatch):
    monkeypatch.setenv("WIKI_RACER_MAX_CONCURRENCY", "7")
    monkeypatch.setenv("WIKI_RACER_MAX_DEPTH", "9")

    result = runner.invoke(cli.app, [WIKI + "Start", WIKI + "End", "-c", "5"])

    assert result.exit_code == 0
    assert race_calls[0]["config"].max_concurrency == 5
    assert race_calls[0]["config"].max_depth == 9


@pytest.mark.parametrize("value", ["lots", "0"])
def test_bad_environment_value_is_a_fatal_error(race_calls, monkeypatch, value):
    monkeypatch.setenv("WIKI_RACER_MAX_CONCURRENCY", value)

    result = runner.invoke(cli.app, [WIKI + "Start", WIKI + "End"])

    assert result.exit_code == 1
    assert "Fatal error: invalid configuration" in result.output
    assert "Traceback" not in result.output
    assert race_calls == []


def test_unknown_log_level_is_rejected(race_calls):
    result = runner.invoke(cli.app, [WIKI + "Start", WIKI + "End", "--log-level", "bogus"])

    assert result.exit_code == 1
    assert "Fatal error: invalid configuration" in result.output
    assert race_calls == []


def test_invalid_endpoint_exits_with_message(monkeypatch):
    async def rejecting_race(*args):
        raise InvalidEndpoint("Pages are in different languages.")

    monkeypatch.setattr(cli, "run_race", rejecting_race)

    result = runner.invoke(cli.app, [WIKI + "Start", "https://de.wikipedia.org/wiki/Ende"])

    assert result.exit_code == 1
    assert "Pages are in different languages." in result.output


def test_unexpected_error_is_reported_without_traceback(monkeypatch):
    async def broken_race(*args):
        raise RuntimeError("event loop exploded")

    monkeypatch.setattr(cli, "run_race", broken_race)

    result = runner.invoke(cli.app, [WIKI + "Start", WIKI + "End"])

    assert result.exit_code == 1
    assert "Fatal error: event loop exploded" in result.output
    assert "Traceback" not in result.output


def test_format_execution_time():
    assert cli.format_execution_time(64.25) == "Execution Time: 1m 4.250s"
    assert cli.format_execution_time(0.5) == "Execution Time: 0m 0.500s"
