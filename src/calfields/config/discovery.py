"""Locating ``calfields.toml``.

``CALFIELDS_CONFIG`` names the file outright.  Without it, the working
directory and each of its parents are searched in turn.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

CONFIG_FILENAME = "calfields.toml"
CONFIG_ENV_VAR = "CALFIELDS_CONFIG"


def _search_dirs(start: Path) -> Iterator[Path]:
    current = start.resolve()
    yield current
    yield from current.parents


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file that applies from *start* (default: cwd).

    A ``CALFIELDS_CONFIG`` pointing at a missing file disables discovery
    and yields None.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override)
        return path if path.is_file() else None

    for directory in _search_dirs(start or Path.cwd()):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
