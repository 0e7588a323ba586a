"""Shared pytest fixtures for calfields tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path

import pytest
import structlog
from click.testing import CliRunner

from calfields.config.settings import CalSettings
from calfields.services.fields import FieldService


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's own CALFIELDS_* environment out of tests."""
    for var in (
        "CALFIELDS_CONFIG",
        "CALFIELDS_JSON_OUTPUT",
        "CALFIELDS_QUIET",
        "CALFIELDS_VERBOSE",
        "CALFIELDS_LOG_JSON",
        "CALFIELDS_RULES__DEFAULT_CHRONOLOGY",
        "CALFIELDS_OUTPUT__WIDTH",
    ):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Undo the logging setup done by CLI invocations and configure_logging."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    cal = logging.getLogger("calfields")
    cal_level = cal.level
    yield
    structlog.contextvars.clear_contextvars()
    root.handlers = original_handlers
    root.setLevel(original_level)
    cal.setLevel(cal_level)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def settings(tmp_path: Path) -> CalSettings:
    """Default settings, discovered from an empty temp directory."""
    return CalSettings.from_cli(start=tmp_path)


@pytest.fixture
def field_service(settings: CalSettings) -> FieldService:
    return FieldService(settings)


@pytest.fixture
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run from an empty temp directory so no calfields.toml is discovered.

    Use via ``@pytest.mark.usefixtures("_isolated_cwd")``.
    """
    monkeypatch.chdir(tmp_path)
