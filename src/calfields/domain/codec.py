"""Byte encoding for field sets.

The wire form is UTF-8 JSON keyed by rule name, in canonical order::

    {"fields": {"ISO.Year": 2008, "ISO.MonthOfYear": 6}}

Decoding resolves names through the rule registry and validates every
value again, so a decoded set obeys the same invariants as one built by
the factories.  An empty payload decodes to the shared empty set.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, StrictInt, ValidationError

from calfields.domain.errors import CodecError, check_not_none
from calfields.domain.fields import DateTimeFields
from calfields.domain.rules import rule_for_name


class FieldValueRecord(BaseModel):
    """Serialized form of a :class:`DateTimeFields`."""

    model_config = {"frozen": True, "extra": "forbid"}

    fields: dict[str, StrictInt] = Field(default_factory=dict)


def encode_fields(fields: DateTimeFields | None) -> bytes:
    """Encode *fields* as UTF-8 JSON bytes."""
    fields = check_not_none(fields, "fields")
    record = FieldValueRecord(fields={rule.name: value for rule, value in fields.items()})
    return record.model_dump_json().encode("utf-8")


def decode_fields(data: bytes | str | None) -> DateTimeFields:
    """Decode bytes produced by :func:`encode_fields`.

    Raises:
        CodecError: *data* is not a valid payload.
        UnknownRuleError: a field name is not registered.
        InvalidFieldValueError: a value is outside its rule's range.
    """
    data = check_not_none(data, "data")
    try:
        record = FieldValueRecord.model_validate_json(data)
    except ValidationError as exc:
        msg = f"Invalid field set payload: {exc.error_count()} error(s)"
        raise CodecError(msg) from exc
    return DateTimeFields.from_mapping(
        {rule_for_name(name): value for name, value in record.fields.items()}
    )
