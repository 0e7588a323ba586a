"""Field rules — the definition of a single calendar field.

A rule knows three things about its field:

- which integer values are valid (``validate`` / ``is_valid_value``);
- how to read the field out of a date or time object (``derive``);
- where the field sorts relative to every other field (``ordering_key``).

:class:`DateTimeFieldRule` is the concrete rule used by the ISO rule set.
Rules are long-lived singletons compared by identity.  Registered rules
are looked up by name, which is also how they survive pickling.
"""

from __future__ import annotations

import datetime as dt
import math
import threading
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol, runtime_checkable

from calfields.domain.errors import InvalidFieldValueError, UnknownRuleError

_SECONDS_PER_YEAR = 31_556_952  # mean Gregorian year


class PeriodUnit(Enum):
    """Units that fields count in, with their estimated length in seconds."""

    NANOS = ("Nanos", 1e-9)
    MICROS = ("Micros", 1e-6)
    MILLIS = ("Millis", 1e-3)
    SECONDS = ("Seconds", 1)
    MINUTES = ("Minutes", 60)
    HOURS = ("Hours", 3_600)
    TWELVE_HOURS = ("TwelveHours", 43_200)
    DAYS = ("Days", 86_400)
    WEEKS = ("Weeks", 604_800)
    MONTHS = ("Months", _SECONDS_PER_YEAR / 12)
    QUARTERS = ("Quarters", _SECONDS_PER_YEAR / 4)
    YEARS = ("Years", _SECONDS_PER_YEAR)
    ETERNITY = ("Eternity", math.inf)

    def __init__(self, label: str, seconds: float) -> None:
        self.label = label
        self.seconds = seconds


@runtime_checkable
class FieldRule(Protocol):
    """What a field set needs from a rule."""

    @property
    def name(self) -> str: ...

    def validate(self, value: Any) -> int: ...

    def derive(self, value: object) -> int | None: ...

    def ordering_key(self) -> tuple[Any, ...]: ...


@dataclass(frozen=True, eq=False, repr=False)
class DateTimeFieldRule:
    """A calendar field with an inclusive value range.

    Attributes:
        chronology: Calendar system name, e.g. ``"ISO"``.
        field_id: Field name within the chronology, e.g. ``"MonthOfYear"``.
        period_unit: Unit the field counts, e.g. months.
        range_unit: Unit the field repeats within, e.g. years.
        minimum: Smallest valid value (inclusive).
        maximum: Largest valid value (inclusive).
        date_extractor: Reads the field from a ``date``; None for time fields.
        time_extractor: Reads the field from a ``time``; None for date fields.
    """

    chronology: str
    field_id: str
    period_unit: PeriodUnit
    range_unit: PeriodUnit
    minimum: int
    maximum: int
    date_extractor: Callable[[dt.date], int] | None = None
    time_extractor: Callable[[dt.time], int] | None = None

    @property
    def name(self) -> str:
        return f"{self.chronology}.{self.field_id}"

    def is_valid_value(self, value: Any) -> bool:
        """Check *value* is a plain ``int`` inside the rule's range."""
        if not isinstance(value, int) or isinstance(value, bool):
            return False
        return self.minimum <= value <= self.maximum

    def validate(self, value: Any) -> int:
        """Return *value* unchanged, or raise :class:`InvalidFieldValueError`."""
        if not self.is_valid_value(value):
            raise InvalidFieldValueError(self, value)
        return int(value)

    def derive(self, value: object) -> int | None:
        """Extract this field from a date, time or datetime.

        Returns None when the object carries no information about the
        field, e.g. asking a date field about a ``time``.
        """
        if isinstance(value, dt.datetime):
            if self.date_extractor is not None:
                return self.date_extractor(value.date())
            if self.time_extractor is not None:
                return self.time_extractor(value.timetz())
            return None
        if isinstance(value, dt.date):
            return self.date_extractor(value) if self.date_extractor is not None else None
        if isinstance(value, dt.time):
            return self.time_extractor(value) if self.time_extractor is not None else None
        return None

    def ordering_key(self) -> tuple[float, float, str]:
        """Longest period first, then longest range, then name."""
        return (-self.period_unit.seconds, -self.range_unit.seconds, self.name)

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"DateTimeFieldRule({self.name})"

    def __reduce__(self) -> tuple[Any, ...]:
        # Only registered rules can be unpickled.
        return (rule_for_name, (self.name,))


# --- Registry ---

_REGISTRY: dict[str, FieldRule] = {}
_REGISTRY_LOCK = threading.Lock()


def register_rule(rule: FieldRule) -> FieldRule:
    """Register *rule* under its name and return it.

    Registering the same object twice is a no-op.  Registering a
    different rule under a taken name raises ``ValueError``.
    """
    with _REGISTRY_LOCK:
        existing = _REGISTRY.get(rule.name)
        if existing is not None and existing is not rule:
            msg = f"A different rule is already registered as {rule.name}"
            raise ValueError(msg)
        _REGISTRY[rule.name] = rule
    return rule


def rule_for_name(name: str) -> FieldRule:
    """Look up a registered rule by its full name (``"ISO.Year"``)."""
    try:
        return _REGISTRY[name]
    except KeyError:
        raise UnknownRuleError(name) from None


def registered_rules() -> list[FieldRule]:
    """All registered rules in canonical order."""
    return sorted(_REGISTRY.values(), key=lambda rule: rule.ordering_key())
