"""Command: build a field set and print its canonical form."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from calfields.commands._base import CalCommand

if TYPE_CHECKING:
    from calfields.commands._context import AppContext


@click.command(
    cls=CalCommand,
    examples="""\
  calfields show ISO.Year=2008
  calfields show MonthOfYear=6 Year=2008
  calfields --json show Year=2008 DayOfMonth=30""",
)
@click.argument("assignments", nargs=-1)
@click.pass_obj
def show(app: AppContext, assignments: tuple[str, ...]) -> None:
    """Build a field set from FIELD=VALUE pairs and show it."""
    app.emit(app.fields.describe(assignments))
