"""Subcommand modules for calfields.

Provides register_commands() which uses deferred imports to keep
``calfields --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all commands on the root CLI group."""
    from calfields.commands.codec import decode, encode
    from calfields.commands.match import match
    from calfields.commands.rules import rules
    from calfields.commands.show import show

    cli.add_command(rules)
    cli.add_command(show)
    cli.add_command(match)
    cli.add_command(encode)
    cli.add_command(decode)
