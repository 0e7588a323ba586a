"""Tests for FieldService."""

from __future__ import annotations

import datetime as dt
import json
from pathlib import Path

import pytest

from calfields.config.settings import CalSettings
from calfields.domain.errors import InvalidFieldValueError, UnknownRuleError
from calfields.domain.fields import DateTimeFields
from calfields.domain.iso import ISO_RULES, MONTH_OF_YEAR, YEAR
from calfields.services.base import AssignmentError
from calfields.services.fields import FieldService


class TestParseAssignments:
    def test_full_and_short_names(self, field_service: FieldService) -> None:
        fields = field_service.parse_assignments(["MonthOfYear=6", "ISO.Year=2008"])
        assert fields == DateTimeFields.of(YEAR, 2008, MONTH_OF_YEAR, 6)

    def test_whitespace_tolerated(self, field_service: FieldService) -> None:
        assert field_service.parse_assignments([" Year = 2008 "]) == DateTimeFields.of(YEAR, 2008)

    def test_empty(self, field_service: FieldService) -> None:
        assert field_service.parse_assignments([]) is DateTimeFields.empty()

    def test_last_assignment_wins(self, field_service: FieldService) -> None:
        fields = field_service.parse_assignments(["MonthOfYear=6", "MonthOfYear=7"])
        assert fields.get(MONTH_OF_YEAR) == 7

    @pytest.mark.parametrize("assignment", ["Year", "=2008", "Year=twenty"])
    def test_malformed(self, field_service: FieldService, assignment: str) -> None:
        with pytest.raises(AssignmentError) as exc_info:
            field_service.parse_assignments([assignment])
        assert exc_info.value.assignment == assignment

    def test_unknown_field(self, field_service: FieldService) -> None:
        with pytest.raises(UnknownRuleError):
            field_service.parse_assignments(["Fortnight=1"])

    def test_invalid_value(self, field_service: FieldService) -> None:
        with pytest.raises(InvalidFieldValueError):
            field_service.parse_assignments(["MonthOfYear=13"])

    def test_default_chronology_from_settings(self, tmp_path: Path) -> None:
        (tmp_path / "calfields.toml").write_text('[rules]\ndefault_chronology = "Coptic"\n')
        service = FieldService(CalSettings.from_cli(start=tmp_path))
        with pytest.raises(UnknownRuleError) as exc_info:
            service.parse_assignments(["Year=2008"])
        assert exc_info.value.name == "Coptic.Year"


class TestListRules:
    def test_lists_iso_rules_in_order(self, field_service: FieldService) -> None:
        result = field_service.list_rules()
        assert result.ok
        assert result.op == "rules"
        names = [item["name"] for item in result.data["items"]]
        iso_names = [rule.name for rule in ISO_RULES]
        assert [name for name in names if name.startswith("ISO.")] == iso_names
        assert result.data["count"] == len(names)

    def test_rule_details(self, field_service: FieldService) -> None:
        items = {item["name"]: item for item in field_service.list_rules().data["items"]}
        month = items["ISO.MonthOfYear"]
        assert month["kind"] == "date"
        assert (month["minimum"], month["maximum"]) == (1, 12)
        assert (month["period"], month["range"]) == (
            MONTH_OF_YEAR.period_unit.label,
            MONTH_OF_YEAR.range_unit.label,
        )
        assert items["ISO.HourOfDay"]["kind"] == "time"


class TestDescribe:
    def test_success(self, field_service: FieldService) -> None:
        result = field_service.describe(["MonthOfYear=6", "Year=2008"])
        assert result.ok
        assert result.op == "show"
        assert result.data["rendered"] == "{ISO.Year=2008, ISO.MonthOfYear=6}"
        assert result.data["fields"] == {"ISO.Year": 2008, "ISO.MonthOfYear": 6}
        assert result.data["count"] == 2

    def test_empty(self, field_service: FieldService) -> None:
        assert field_service.describe([]).data["rendered"] == "{}"

    def test_invalid_value(self, field_service: FieldService) -> None:
        result = field_service.describe(["DayOfMonth=32"])
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "INVALID_VALUE"
        assert result.error.detail == {"field": "ISO.DayOfMonth", "value": 32}

    def test_unknown_rule(self, field_service: FieldService) -> None:
        result = field_service.describe(["ISO.Fortnight=1"])
        assert result.error is not None
        assert result.error.code == "UNKNOWN_RULE"
        assert result.error.detail == {"name": "ISO.Fortnight"}

    def test_bad_assignment(self, field_service: FieldService) -> None:
        result = field_service.describe(["Year"])
        assert result.error is not None
        assert result.error.code == "INVALID_ASSIGNMENT"
        assert result.error.detail == {"assignment": "Year"}


class TestMatch:
    def test_date_matches(self, field_service: FieldService) -> None:
        result = field_service.match(
            ["Year=2008", "MonthOfYear=6", "DayOfMonth=30"], date=dt.date(2008, 6, 30)
        )
        assert result.ok
        assert result.data["matches"] is True
        assert result.data["mismatches"] == []
        assert result.data["date"] == "2008-06-30"
        assert result.data["time"] is None

    def test_date_mismatch_reported(self, field_service: FieldService) -> None:
        result = field_service.match(
            ["Year=2008", "MonthOfYear=6", "DayOfMonth=31"], date=dt.date(2008, 6, 30)
        )
        assert result.ok
        assert result.data["matches"] is False
        assert result.data["mismatches"] == [
            {"field": "ISO.DayOfMonth", "expected": 31, "actual": 30}
        ]

    def test_time_am_pm_mismatch(self, field_service: FieldService) -> None:
        result = field_service.match(
            ["HourOfDay=11", "MinuteOfHour=30", "AmPmOfDay=1"], time=dt.time(11, 30)
        )
        assert result.data["matches"] is False
        assert [m["field"] for m in result.data["mismatches"]] == ["ISO.AmPmOfDay"]

    def test_date_and_time_both_checked(self, field_service: FieldService) -> None:
        assignments = ["DayOfMonth=30", "HourOfDay=12"]
        ok = field_service.match(assignments, date=dt.date(2008, 6, 30), time=dt.time(12, 0))
        bad = field_service.match(assignments, date=dt.date(2008, 6, 30), time=dt.time(13, 0))
        assert ok.data["matches"] is True
        assert bad.data["matches"] is False

    def test_trivial_match_warns(self, field_service: FieldService) -> None:
        result = field_service.match(["HourOfDay=11"], date=dt.date(2008, 6, 30))
        assert result.data["matches"] is True
        assert result.warnings == [
            "No date fields in {ISO.HourOfDay=11}; the date matches trivially"
        ]

    def test_no_warning_when_fields_apply(self, field_service: FieldService) -> None:
        result = field_service.match(["DayOfMonth=1"], date=dt.date(2008, 6, 30))
        assert result.warnings == []

    def test_datetime_targets_are_narrowed(self, field_service: FieldService) -> None:
        moment = dt.datetime(2008, 6, 30, 11, 30)
        result = field_service.match(["Year=2008", "HourOfDay=5"], date=moment)
        assert result.data["matches"] is True
        assert result.data["mismatches"] == []

    def test_requires_date_or_time(self, field_service: FieldService) -> None:
        result = field_service.match(["Year=2008"])
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "INVALID_ASSIGNMENT"

    def test_invalid_assignment(self, field_service: FieldService) -> None:
        result = field_service.match(["MonthOfYear=0"], date=dt.date(2008, 6, 30))
        assert not result.ok
        assert result.op == "match"


class TestEncodeDecode:
    def test_encode(self, field_service: FieldService) -> None:
        result = field_service.encode(["MonthOfYear=6", "Year=2008"])
        assert result.ok
        payload = json.loads(result.data["payload"])
        assert list(payload["fields"]) == ["ISO.Year", "ISO.MonthOfYear"]

    def test_decode(self, field_service: FieldService) -> None:
        payload = field_service.encode(["Year=2008"]).data["payload"]
        result = field_service.decode(payload)
        assert result.ok
        assert result.op == "decode"
        assert result.data["rendered"] == "{ISO.Year=2008}"

    def test_decode_malformed(self, field_service: FieldService) -> None:
        result = field_service.decode("not json")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "INVALID_PAYLOAD"

    def test_decode_unencodable_text(self, field_service: FieldService) -> None:
        result = field_service.decode('{"fields": {"\udcff": 1}}')
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "INVALID_PAYLOAD"

    def test_decode_out_of_range(self, field_service: FieldService) -> None:
        result = field_service.decode('{"fields": {"ISO.MonthOfYear": 13}}')
        assert result.error is not None
        assert result.error.code == "INVALID_VALUE"
