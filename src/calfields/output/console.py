"""Rich Console factory and theme for calfields output.

Consoles render to a StringIO buffer so renderers can return plain
strings.  In non-TTY environments (tests, pipes) Rich disables color.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

CAL_THEME = Theme(
    {
        "cal.ok": "bold green",
        "cal.error": "bold red",
        "cal.op": "bold cyan",
        "cal.key": "dim",
        "cal.field": "bold blue",
        "cal.value": "magenta",
        "cal.kind.date": "green",
        "cal.kind.time": "yellow",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes.
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=CAL_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 100,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
