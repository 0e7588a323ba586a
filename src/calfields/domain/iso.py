"""ISO-8601 field rules.

Every rule here is registered by name on import, e.g. ``"ISO.Year"``.
Date fields read from ``datetime.date``; time fields read from
``datetime.time``.  A ``datetime.datetime`` supplies both.

Day-of-week follows ISO numbering: Monday is 1, Sunday is 7.
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Callable

from calfields.domain.rules import DateTimeFieldRule, PeriodUnit, register_rule

CHRONOLOGY = "ISO"

MIN_YEAR = -999_999_999
MAX_YEAR = 999_999_999


def _date_rule(
    field_id: str,
    period: PeriodUnit,
    range_: PeriodUnit,
    minimum: int,
    maximum: int,
    extractor: Callable[[dt.date], int],
) -> DateTimeFieldRule:
    rule = DateTimeFieldRule(
        CHRONOLOGY,
        field_id,
        period,
        range_,
        minimum,
        maximum,
        date_extractor=extractor,
    )
    register_rule(rule)
    return rule


def _time_rule(
    field_id: str,
    period: PeriodUnit,
    range_: PeriodUnit,
    minimum: int,
    maximum: int,
    extractor: Callable[[dt.time], int],
) -> DateTimeFieldRule:
    rule = DateTimeFieldRule(
        CHRONOLOGY,
        field_id,
        period,
        range_,
        minimum,
        maximum,
        time_extractor=extractor,
    )
    register_rule(rule)
    return rule


def _milli_of_day(t: dt.time) -> int:
    return ((t.hour * 60 + t.minute) * 60 + t.second) * 1_000 + t.microsecond // 1_000


# --- Date fields ---

YEAR = _date_rule(
    "Year", PeriodUnit.YEARS, PeriodUnit.ETERNITY, MIN_YEAR, MAX_YEAR, lambda d: d.year
)
QUARTER_OF_YEAR = _date_rule(
    "QuarterOfYear",
    PeriodUnit.QUARTERS,
    PeriodUnit.YEARS,
    1,
    4,
    lambda d: (d.month - 1) // 3 + 1,
)
MONTH_OF_YEAR = _date_rule(
    "MonthOfYear", PeriodUnit.MONTHS, PeriodUnit.YEARS, 1, 12, lambda d: d.month
)
MONTH_OF_QUARTER = _date_rule(
    "MonthOfQuarter",
    PeriodUnit.MONTHS,
    PeriodUnit.QUARTERS,
    1,
    3,
    lambda d: (d.month - 1) % 3 + 1,
)
WEEK_OF_WEEK_BASED_YEAR = _date_rule(
    "WeekOfWeekBasedYear",
    PeriodUnit.WEEKS,
    PeriodUnit.YEARS,
    1,
    53,
    lambda d: d.isocalendar()[1],
)
DAY_OF_YEAR = _date_rule(
    "DayOfYear",
    PeriodUnit.DAYS,
    PeriodUnit.YEARS,
    1,
    366,
    lambda d: d.timetuple().tm_yday,
)
DAY_OF_MONTH = _date_rule(
    "DayOfMonth", PeriodUnit.DAYS, PeriodUnit.MONTHS, 1, 31, lambda d: d.day
)
DAY_OF_WEEK = _date_rule(
    "DayOfWeek", PeriodUnit.DAYS, PeriodUnit.WEEKS, 1, 7, lambda d: d.isoweekday()
)

# --- Time fields ---

AMPM_OF_DAY = _time_rule(
    "AmPmOfDay", PeriodUnit.TWELVE_HOURS, PeriodUnit.DAYS, 0, 1, lambda t: t.hour // 12
)
HOUR_OF_DAY = _time_rule(
    "HourOfDay", PeriodUnit.HOURS, PeriodUnit.DAYS, 0, 23, lambda t: t.hour
)
HOUR_OF_AMPM = _time_rule(
    "HourOfAmPm", PeriodUnit.HOURS, PeriodUnit.TWELVE_HOURS, 0, 11, lambda t: t.hour % 12
)
MINUTE_OF_DAY = _time_rule(
    "MinuteOfDay",
    PeriodUnit.MINUTES,
    PeriodUnit.DAYS,
    0,
    24 * 60 - 1,
    lambda t: t.hour * 60 + t.minute,
)
MINUTE_OF_HOUR = _time_rule(
    "MinuteOfHour", PeriodUnit.MINUTES, PeriodUnit.HOURS, 0, 59, lambda t: t.minute
)
SECOND_OF_DAY = _time_rule(
    "SecondOfDay",
    PeriodUnit.SECONDS,
    PeriodUnit.DAYS,
    0,
    24 * 3_600 - 1,
    lambda t: (t.hour * 60 + t.minute) * 60 + t.second,
)
SECOND_OF_MINUTE = _time_rule(
    "SecondOfMinute", PeriodUnit.SECONDS, PeriodUnit.MINUTES, 0, 59, lambda t: t.second
)
MILLI_OF_DAY = _time_rule(
    "MilliOfDay", PeriodUnit.MILLIS, PeriodUnit.DAYS, 0, 86_400_000 - 1, _milli_of_day
)
MILLI_OF_SECOND = _time_rule(
    "MilliOfSecond",
    PeriodUnit.MILLIS,
    PeriodUnit.SECONDS,
    0,
    999,
    lambda t: t.microsecond // 1_000,
)
NANO_OF_SECOND = _time_rule(
    "NanoOfSecond",
    PeriodUnit.NANOS,
    PeriodUnit.SECONDS,
    0,
    999_999_999,
    lambda t: t.microsecond * 1_000,
)

ISO_RULES: tuple[DateTimeFieldRule, ...] = (
    YEAR,
    QUARTER_OF_YEAR,
    MONTH_OF_YEAR,
    MONTH_OF_QUARTER,
    WEEK_OF_WEEK_BASED_YEAR,
    DAY_OF_YEAR,
    DAY_OF_MONTH,
    DAY_OF_WEEK,
    AMPM_OF_DAY,
    HOUR_OF_DAY,
    HOUR_OF_AMPM,
    MINUTE_OF_DAY,
    MINUTE_OF_HOUR,
    SECOND_OF_DAY,
    SECOND_OF_MINUTE,
    MILLI_OF_DAY,
    MILLI_OF_SECOND,
    NANO_OF_SECOND,
)
