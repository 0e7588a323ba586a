"""Tests for the calfields exception hierarchy."""

from __future__ import annotations

import pytest

from calfields.domain.errors import (
    CalendarFieldError,
    CodecError,
    InvalidFieldValueError,
    NullArgumentError,
    UnknownRuleError,
    UnsupportedFieldError,
    check_not_none,
)
from calfields.domain.iso import MONTH_OF_YEAR

ERROR_CASES = [
    (NullArgumentError("rule"), TypeError, "rule must not be None"),
    (
        InvalidFieldValueError(MONTH_OF_YEAR, 13),
        ValueError,
        "Value 13 is invalid for field ISO.MonthOfYear",
    ),
    (UnsupportedFieldError(MONTH_OF_YEAR), LookupError, "Field ISO.MonthOfYear is not present"),
    (UnknownRuleError("ISO.Fortnight"), LookupError, "Unknown field rule: ISO.Fortnight"),
    (CodecError("bad payload"), ValueError, "bad payload"),
]


@pytest.mark.parametrize(
    "error,builtin,message",
    ERROR_CASES,
    ids=[type(err).__name__ for err, _, _ in ERROR_CASES],
)
def test_error_hierarchy(error: CalendarFieldError, builtin: type, message: str) -> None:
    assert isinstance(error, CalendarFieldError)
    assert isinstance(error, builtin)
    assert str(error) == message


def test_errors_carry_rule() -> None:
    assert InvalidFieldValueError(MONTH_OF_YEAR, 0).rule is MONTH_OF_YEAR
    assert UnsupportedFieldError(MONTH_OF_YEAR).rule is MONTH_OF_YEAR


class TestCheckNotNone:
    def test_passes_value_through(self) -> None:
        assert check_not_none(0, "value") == 0

    def test_raises_on_none(self) -> None:
        with pytest.raises(NullArgumentError) as exc_info:
            check_not_none(None, "fields")
        assert exc_info.value.argument == "fields"
