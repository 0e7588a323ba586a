"""Command: test a field set against a date and/or time."""

from __future__ import annotations

import datetime as dt
from typing import TYPE_CHECKING

import click

from calfields.commands._base import CalCommand

if TYPE_CHECKING:
    from calfields.commands._context import AppContext


def _parse_time(
    _ctx: click.Context, _param: click.Parameter, value: str | None
) -> dt.time | None:
    if value is None:
        return None
    try:
        return dt.time.fromisoformat(value)
    except ValueError:
        raise click.BadParameter(f"'{value}' is not a valid HH:MM[:SS] time.") from None


@click.command(
    cls=CalCommand,
    examples="""\
  calfields match Year=2008 MonthOfYear=6 DayOfMonth=30 --date 2008-06-30
  calfields match HourOfDay=11 MinuteOfHour=30 --time 11:30
  calfields -q match DayOfWeek=1 --date 2008-06-30""",
)
@click.argument("assignments", nargs=-1)
@click.option(
    "--date",
    "date_value",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Date to match (YYYY-MM-DD).",
)
@click.option(
    "--time",
    "time_value",
    default=None,
    callback=_parse_time,
    help="Time to match (HH:MM[:SS]).",
)
@click.pass_obj
def match(
    app: AppContext,
    assignments: tuple[str, ...],
    date_value: dt.datetime | None,
    time_value: dt.time | None,
) -> None:
    """Check whether FIELD=VALUE pairs agree with a date and/or time."""
    date = date_value.date() if date_value is not None else None
    app.emit(app.fields.match(assignments, date=date, time=time_value))
