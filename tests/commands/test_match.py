"""Tests for the match command."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from calfields.cli import cli


@pytest.mark.usefixtures("_isolated_cwd")
class TestMatchCommand:
    def test_match_date_json(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli,
            [
                "--json",
                "match",
                "Year=2008",
                "MonthOfYear=6",
                "DayOfMonth=30",
                "--date",
                "2008-06-30",
            ],
        )
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["data"]["matches"] is True
        assert data["data"]["date"] == "2008-06-30"

    def test_match_time_mismatch(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli, ["match", "HourOfDay=11", "MinuteOfHour=31", "--time", "11:30"]
        )
        assert result.exit_code == 0
        assert "matches: no" in result.output
        assert "ISO.MinuteOfHour: expected 31, got 30" in result.output

    def test_match_quiet(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "match", "DayOfWeek=1", "--date", "2008-06-30"])
        assert result.exit_code == 0
        assert result.output.strip() == "true"

    def test_match_date_and_time(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli,
            ["-q", "match", "DayOfMonth=30", "AmPmOfDay=1"]
            + ["--date", "2008-06-30", "--time", "09:00"],
        )
        assert result.exit_code == 0
        assert result.output.strip() == "false"

    def test_match_trivial_warning(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["match", "HourOfDay=11", "--date", "2008-06-30"])
        assert result.exit_code == 0
        assert "WARNING: No date fields" in result.output

    def test_match_requires_target(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "match", "Year=2008"])
        assert result.exit_code == 1
        assert json.loads(result.output)["error"]["code"] == "INVALID_ASSIGNMENT"

    def test_match_bad_date(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["match", "Year=2008", "--date", "30/06/2008"])
        assert result.exit_code == 2

    def test_match_bad_time(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["match", "HourOfDay=1", "--time", "quarter past"])
        assert result.exit_code == 2
        assert "not a valid" in result.output
