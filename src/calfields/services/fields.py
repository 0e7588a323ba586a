"""FieldService — build, inspect, match and encode field sets.

Field sets are described on the command line as ``FIELD=VALUE``
assignments, where ``FIELD`` is a registered rule name.  Short names
(``Year``) are qualified with the configured default chronology.
"""

from __future__ import annotations

import datetime as dt
import logging
from collections.abc import Sequence
from typing import Any

from calfields.domain.codec import decode_fields, encode_fields
from calfields.domain.errors import CalendarFieldError, CodecError
from calfields.domain.fields import DateTimeFields, date_part, time_part
from calfields.domain.rules import DateTimeFieldRule, registered_rules
from calfields.services.base import AssignmentError, BaseService
from calfields.services.result import ServiceResult

logger = logging.getLogger(__name__)


def _fields_payload(fields: DateTimeFields) -> dict[str, Any]:
    return {
        "fields": {rule.name: value for rule, value in fields.items()},
        "rendered": str(fields),
        "count": len(fields),
    }


class FieldService(BaseService):
    """Field-set operations for the CLI."""

    def parse_assignments(self, assignments: Sequence[str]) -> DateTimeFields:
        """Build a field set from ``FIELD=VALUE`` strings, left to right.

        Raises:
            AssignmentError: an argument is not ``FIELD=VALUE`` with an
                integer value.
            UnknownRuleError: a field name is not registered.
            InvalidFieldValueError: a value is outside its rule's range.
        """
        args: list[Any] = []
        for assignment in assignments:
            name, sep, raw_value = assignment.partition("=")
            if not sep or not name.strip():
                raise AssignmentError(assignment, "expected FIELD=VALUE")
            try:
                value = int(raw_value.strip())
            except ValueError:
                raise AssignmentError(assignment, "value must be an integer") from None
            args.extend((self._resolve_rule(name.strip()), value))
        return DateTimeFields.of(*args)

    def list_rules(self) -> ServiceResult:
        """List registered rules in canonical order."""
        items: list[dict[str, Any]] = []
        for rule in registered_rules():
            item: dict[str, Any] = {"name": rule.name}
            if isinstance(rule, DateTimeFieldRule):
                item.update(
                    {
                        "kind": "date" if rule.date_extractor is not None else "time",
                        "minimum": rule.minimum,
                        "maximum": rule.maximum,
                        "period": rule.period_unit.label,
                        "range": rule.range_unit.label,
                    }
                )
            items.append(item)
        return ServiceResult.success("rules", {"items": items, "count": len(items)})

    def describe(self, assignments: Sequence[str]) -> ServiceResult:
        """Build a field set and report its canonical form."""
        try:
            fields = self.parse_assignments(assignments)
        except CalendarFieldError as exc:
            return self._failure("show", exc)
        return ServiceResult.success("show", _fields_payload(fields))

    def match(
        self,
        assignments: Sequence[str],
        *,
        date: dt.date | None = None,
        time: dt.time | None = None,
    ) -> ServiceResult:
        """Check a field set against a date and/or a time.

        With both given, both must match.  Mismatching fields are listed
        with the stored and the derived value.  A target that no field in
        the set applies to matches trivially and adds a warning.
        """
        if date is None and time is None:
            return self._failure(
                "match", AssignmentError("--date/--time", "a date or a time is required")
            )
        try:
            fields = self.parse_assignments(assignments)
            matches = True
            if date is not None:
                matches = fields.matches_date(date) and matches
            if time is not None:
                matches = fields.matches_time(time) and matches
        except CalendarFieldError as exc:
            return self._failure("match", exc)

        mismatches: list[dict[str, Any]] = []
        warnings: list[str] = []
        targets = (
            ("date", None if date is None else date_part(date)),
            ("time", None if time is None else time_part(time)),
        )
        for label, target in targets:
            if target is None:
                continue
            checked = 0
            for rule, stored in fields.items():
                derived = rule.derive(target)
                if derived is None:
                    continue
                checked += 1
                if derived != stored:
                    mismatches.append({"field": rule.name, "expected": stored, "actual": derived})
            if not checked:
                warnings.append(f"No {label} fields in {fields}; the {label} matches trivially")

        logger.debug("match %s -> %s", fields, matches)
        data = _fields_payload(fields)
        data.update(
            {
                "date": date.isoformat() if date is not None else None,
                "time": time.isoformat() if time is not None else None,
                "matches": matches,
                "mismatches": mismatches,
            }
        )
        return ServiceResult.success("match", data, warnings=warnings)

    def encode(self, assignments: Sequence[str]) -> ServiceResult:
        """Encode a field set to its byte form (returned as text)."""
        try:
            fields = self.parse_assignments(assignments)
            payload = encode_fields(fields)
        except CalendarFieldError as exc:
            return self._failure("encode", exc)
        return ServiceResult.success("encode", {"payload": payload.decode("utf-8")})

    def decode(self, payload: str) -> ServiceResult:
        """Decode an encoded field set."""
        try:
            data = payload.encode("utf-8")
        except UnicodeEncodeError as exc:
            msg = f"Payload is not valid UTF-8: {exc.reason}"
            return self._failure("decode", CodecError(msg))
        try:
            fields = decode_fields(data)
        except CalendarFieldError as exc:
            return self._failure("decode", exc)
        return ServiceResult.success("decode", _fields_payload(fields))
