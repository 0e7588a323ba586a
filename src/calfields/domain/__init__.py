"""Domain layer — field rules, field sets and their encoding.

This layer depends only on stdlib and pydantic.
It must never import from services, commands, output, or config.
"""

from calfields.domain import iso as iso
from calfields.domain.calendrical import Calendrical
from calfields.domain.errors import (
    CalendarFieldError,
    CodecError,
    InvalidFieldValueError,
    NullArgumentError,
    UnknownRuleError,
    UnsupportedFieldError,
)
from calfields.domain.fields import DateTimeFields
from calfields.domain.rules import (
    DateTimeFieldRule,
    FieldRule,
    PeriodUnit,
    register_rule,
    registered_rules,
    rule_for_name,
)

__all__ = [
    "CalendarFieldError",
    "Calendrical",
    "CodecError",
    "DateTimeFieldRule",
    "DateTimeFields",
    "FieldRule",
    "InvalidFieldValueError",
    "NullArgumentError",
    "PeriodUnit",
    "UnknownRuleError",
    "UnsupportedFieldError",
    "iso",
    "register_rule",
    "registered_rules",
    "rule_for_name",
]
