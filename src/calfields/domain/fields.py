"""DateTimeFields — an immutable set of validated calendar field values.

A field set maps field rules to integer values.  It is built by the
factories on the class (``empty``, ``of``, ``from_mapping``) and never
changes afterwards; ``with_*`` operations return a new set, or the same
set when nothing would change.

INVARIANTS:
- Each rule appears at most once.
- Every stored value passed ``rule.validate`` when it was stored.
- Iteration follows ``rule.ordering_key()``, never insertion order.
- There is exactly one empty field set; every path that would produce an
  empty result returns it.

``None`` handling is asymmetric: ``contains``/``in`` and
``get_quiet`` accept ``None`` and answer "not present", every other
operation raises :class:`NullArgumentError`.
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Iterator, Mapping
from typing import TYPE_CHECKING, Any

from calfields.domain.errors import (
    NullArgumentError,
    UnsupportedFieldError,
    check_not_none,
)

if TYPE_CHECKING:
    from calfields.domain.calendrical import Calendrical
    from calfields.domain.rules import FieldRule


def _checked_pair(rule: FieldRule | None, value: Any) -> tuple[FieldRule, int]:
    rule = check_not_none(rule, "rule")
    check_not_none(value, "value")
    return rule, rule.validate(value)


def date_part(value: object) -> object | None:
    """The date-only view of *value*: a datetime's date, nothing for a time."""
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.time):
        return None
    return value


def time_part(value: object) -> object | None:
    """The time-only view of *value*: a datetime's time, nothing for a date."""
    if isinstance(value, dt.datetime):
        return value.timetz()
    if isinstance(value, dt.date):
        return None
    return value


class DateTimeFields:
    """Immutable mapping of field rules to validated integer values.

    The constructor raises ``TypeError``; build sets with :meth:`empty`,
    :meth:`of` or :meth:`from_mapping`.

    Usage::

        fields = DateTimeFields.of(YEAR, 2008, MONTH_OF_YEAR, 6)
        fields.get(YEAR)                      # 2008
        fields.with_field(DAY_OF_MONTH, 30)   # new set, three fields
        fields.matches_date(date(2008, 6, 30))  # True
    """

    __slots__ = ("_values",)

    _values: dict[FieldRule, int]

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        msg = "use DateTimeFields.empty(), of() or from_mapping() to build a field set"
        raise TypeError(msg)

    @classmethod
    def _new(cls, values: dict[FieldRule, int]) -> DateTimeFields:
        ordered = sorted(values.items(), key=lambda item: item[0].ordering_key())
        instance = object.__new__(cls)
        object.__setattr__(instance, "_values", dict(ordered))
        return instance

    @classmethod
    def _create(cls, values: dict[FieldRule, int]) -> DateTimeFields:
        if not values:
            return _EMPTY
        return cls._new(values)

    # --- Factories ---

    @classmethod
    def empty(cls) -> DateTimeFields:
        """The shared empty field set."""
        return _EMPTY

    @classmethod
    def of(cls, *args: Any) -> DateTimeFields:
        """Build a field set from rule/value pairs or from a mapping.

        ``of()`` is the empty set, ``of(mapping)`` delegates to
        :meth:`from_mapping`, and ``of(rule1, value1, rule2, value2, ...)``
        checks each pair left to right.  A rule given twice keeps its
        last value.
        """
        if not args:
            return _EMPTY
        if len(args) == 1:
            return cls.from_mapping(args[0])
        if len(args) % 2:
            msg = "of() takes a mapping or rule/value pairs"
            raise TypeError(msg)
        values: dict[FieldRule, int] = {}
        for index in range(0, len(args), 2):
            rule, value = _checked_pair(args[index], args[index + 1])
            values[rule] = value
        return cls._create(values)

    @classmethod
    def from_mapping(cls, field_value_map: Mapping[FieldRule, int] | None) -> DateTimeFields:
        """Build a field set from a copy of *field_value_map*.

        Later changes to the caller's mapping are not visible through
        the returned set.
        """
        field_value_map = check_not_none(field_value_map, "field_value_map")
        copy = dict(field_value_map)
        values: dict[FieldRule, int] = {}
        for rule, value in copy.items():
            checked_rule, checked_value = _checked_pair(rule, value)
            values[checked_rule] = checked_value
        return cls._create(values)

    # --- Queries ---

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[FieldRule]:
        return iter(tuple(self._values))

    def __contains__(self, rule: object) -> bool:
        if rule is None:
            return False
        try:
            return rule in self._values
        except TypeError:
            return False

    def contains(self, rule: FieldRule | None) -> bool:
        """Whether *rule* is present.  ``None`` is never present."""
        return rule in self

    def get(self, rule: FieldRule | None) -> int:
        """Return the value for *rule*, validated against the rule now.

        Raises:
            NullArgumentError: *rule* is None.
            UnsupportedFieldError: *rule* is not present.
            InvalidFieldValueError: the stored value fails ``rule.validate``.
        """
        rule = check_not_none(rule, "rule")
        if rule not in self._values:
            raise UnsupportedFieldError(rule)
        return rule.validate(self._values[rule])

    def __getitem__(self, rule: FieldRule) -> int:
        return self.get(rule)

    def get_quiet(self, rule: FieldRule | None) -> int | None:
        """Return the stored value, or None if *rule* is None or absent."""
        if rule not in self:
            return None
        return self._values[rule]  # type: ignore[index]

    def items(self) -> Iterator[tuple[FieldRule, int]]:
        """``(rule, value)`` pairs in canonical order."""
        return iter(tuple(self._values.items()))

    def to_field_value_map(self) -> dict[FieldRule, int]:
        """A new dict of the fields in canonical order."""
        return dict(self._values)

    def to_calendrical(self) -> Calendrical:
        """Wrap the fields in a Calendrical with no date, time, offset or zone."""
        from calfields.domain.calendrical import Calendrical

        return Calendrical(fields=self)

    # --- Derivation ---

    def with_field(self, rule: FieldRule | None, value: Any) -> DateTimeFields:
        """Return a copy with *rule* set to *value*, added or overwritten."""
        checked_rule, checked_value = _checked_pair(rule, value)
        values = dict(self._values)
        values[checked_rule] = checked_value
        return self._create(values)

    def with_fields(self, fields: DateTimeFields | None) -> DateTimeFields:
        """Return the union of this set and *fields*.

        Values in *fields* win for rules present in both.  Values are not
        validated again.  Returns ``self`` when *fields* is ``self`` or
        empty.
        """
        fields = check_not_none(fields, "fields")
        if fields is self or not fields:
            return self
        values = dict(self._values)
        values.update(fields._values)
        return self._create(values)

    def with_field_removed(self, rule: FieldRule | None) -> DateTimeFields:
        """Return a copy without *rule*, or ``self`` if it is absent."""
        rule = check_not_none(rule, "rule")
        if rule not in self._values:
            return self
        values = dict(self._values)
        del values[rule]
        return self._create(values)

    # --- Matching ---

    def _matches(self, value: object | None) -> bool:
        if value is None:
            return True
        for rule, stored in self._values.items():
            derived = rule.derive(value)
            if derived is not None and derived != stored:
                return False
        return True

    def matches_date(self, date: object) -> bool:
        """Whether every date field present agrees with *date*.

        Fields that cannot be read from a date (time fields) are skipped,
        so a set with no date fields matches every date.
        A ``datetime`` contributes only its date.
        """
        if date is None:
            raise NullArgumentError("date")
        return self._matches(date_part(date))

    def matches_time(self, time: object) -> bool:
        """Whether every time field present agrees with *time*.

        A ``datetime`` contributes only its time of day; a plain ``date``
        has no time fields to compare.
        """
        if time is None:
            raise NullArgumentError("time")
        return self._matches(time_part(time))

    # --- Value semantics ---

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, DateTimeFields):
            return NotImplemented
        return self._values == other._values

    def __hash__(self) -> int:
        return hash(frozenset(self._values.items()))

    def __str__(self) -> str:
        pairs = ", ".join(f"{rule.name}={value}" for rule, value in self._values.items())
        return "{" + pairs + "}"

    def __repr__(self) -> str:
        return f"DateTimeFields({self})"

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __copy__(self) -> DateTimeFields:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> DateTimeFields:
        return self

    def __reduce__(self) -> tuple[Any, ...]:
        return (DateTimeFields.from_mapping, (self.to_field_value_map(),))


_EMPTY = DateTimeFields._new({})
