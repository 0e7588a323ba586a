"""Exception hierarchy for calendar field handling.

Every error raised by the domain layer derives from
:class:`CalendarFieldError` and also from the builtin exception that best
describes it, so callers can catch either.

INVARIANT: errors about a specific field carry the offending rule object.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeVar

if TYPE_CHECKING:
    from calfields.domain.rules import FieldRule

T = TypeVar("T")


class CalendarFieldError(Exception):
    """Base class for all calfields errors."""


class NullArgumentError(CalendarFieldError, TypeError):
    """A required argument was ``None``."""

    def __init__(self, argument: str) -> None:
        super().__init__(f"{argument} must not be None")
        self.argument = argument


class InvalidFieldValueError(CalendarFieldError, ValueError):
    """A value is outside the valid range of its field rule."""

    def __init__(self, rule: FieldRule, value: Any) -> None:
        super().__init__(f"Value {value!r} is invalid for field {rule.name}")
        self.rule = rule
        self.value = value


class UnsupportedFieldError(CalendarFieldError, LookupError):
    """A field was requested that is not present."""

    def __init__(self, rule: FieldRule) -> None:
        super().__init__(f"Field {rule.name} is not present")
        self.rule = rule


class UnknownRuleError(CalendarFieldError, LookupError):
    """No rule is registered under the requested name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown field rule: {name}")
        self.name = name


class CodecError(CalendarFieldError, ValueError):
    """An encoded field set could not be decoded."""


def check_not_none(value: T | None, argument: str) -> T:
    """Return *value*, raising :class:`NullArgumentError` if it is ``None``."""
    if value is None:
        raise NullArgumentError(argument)
    return value
