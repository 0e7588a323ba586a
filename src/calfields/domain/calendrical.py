"""Calendrical — a neutral carrier of calendar information.

Holds a field set alongside an optional date, time, offset and zone.
:meth:`DateTimeFields.to_calendrical` fills in only the field set.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field

from calfields.domain.fields import DateTimeFields


@dataclass(frozen=True)
class Calendrical:
    """Immutable bundle of fields plus optional date/time components."""

    fields: DateTimeFields = field(default_factory=DateTimeFields.empty)
    date: dt.date | None = None
    time: dt.time | None = None
    offset: dt.timedelta | None = None
    zone: dt.tzinfo | None = None

    def to_date_time_fields(self) -> DateTimeFields:
        return self.fields
