"""CalSettings: one frozen object holding everything the CLI was told.

A value set in more than one place resolves as follows, first wins:
CLI flags, ``CALFIELDS_*`` environment variables (nested sections use
``__``, e.g. ``CALFIELDS_OUTPUT__WIDTH``), ``calfields.toml``, and the
defaults in :mod:`calfields.config.models`.  Flags the user did not pass
must be left out of the init kwargs for the lower layers to apply.
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from calfields.config.discovery import find_config
from calfields.config.models import OutputConfig, RulesConfig


def _read_toml(path: Path | None) -> dict[str, Any]:
    if path is None or not path.is_file():
        return {}
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise click.ClickException(msg) from exc


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Settings layer backed by the parsed ``calfields.toml``."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data = _read_toml(toml_path)

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._data.get(field_name), field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# pydantic-settings builds sources from a classmethod, so the file chosen
# by from_cli() is handed over per thread.
_pending = threading.local()


class CalSettings(BaseSettings):
    """Resolved settings for one CLI invocation.

    Attributes:
        config_path: The ``calfields.toml`` that was read, or None.
        json_output: ``--json``.
        quiet: ``-q``.
        verbose: ``-v``.
        log_json: ``--log-json``.
        rules: The ``[rules]`` section.
        output: The ``[output]`` section.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "CALFIELDS_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False
    rules: RulesConfig = Field(default_factory=RulesConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        toml = TomlSettingsSource(settings_cls, getattr(_pending, "toml_path", None))
        return (init_settings, env_settings, toml)

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        start: Path | None = None,
        **cli_flags: Any,
    ) -> CalSettings:
        """Resolve settings for a CLI run.

        An explicit *config_path* that does not exist means "no file";
        otherwise ``calfields.toml`` is searched for upwards from *start*.
        """
        if config_path:
            explicit = Path(config_path)
            toml_path = explicit if explicit.is_file() else None
        else:
            toml_path = find_config(start)

        _pending.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **cli_flags)
        finally:
            _pending.toml_path = None
