"""Command: list registered field rules."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from calfields.commands._base import CalCommand

if TYPE_CHECKING:
    from calfields.commands._context import AppContext


@click.command(
    cls=CalCommand,
    examples="""\
  calfields rules
  calfields -v rules
  calfields --json rules""",
)
@click.pass_obj
def rules(app: AppContext) -> None:
    """List registered field rules in canonical order."""
    app.emit(app.fields.list_rules())
