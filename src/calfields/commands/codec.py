"""Commands: encode and decode field sets."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from calfields.commands._base import CalCommand

if TYPE_CHECKING:
    from calfields.commands._context import AppContext


@click.command(
    cls=CalCommand,
    examples="""\
  calfields encode Year=2008 MonthOfYear=6
  calfields -q encode Year=2008 > fields.json""",
)
@click.argument("assignments", nargs=-1)
@click.pass_obj
def encode(app: AppContext, assignments: tuple[str, ...]) -> None:
    """Print the encoded form of a field set."""
    app.emit(app.fields.encode(assignments))


@click.command(
    cls=CalCommand,
    examples="""\
  calfields decode '{"fields": {"ISO.Year": 2008}}'""",
)
@click.argument("payload")
@click.pass_obj
def decode(app: AppContext, payload: str) -> None:
    """Decode an encoded field set and show it."""
    app.emit(app.fields.decode(payload))
