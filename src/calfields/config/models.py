"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, calfields.toml only contains
overrides.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class RulesConfig(BaseModel):
    """[rules] section."""

    model_config = {"frozen": True}

    default_chronology: str = "ISO"


class OutputConfig(BaseModel):
    """[output] section."""

    model_config = {"frozen": True}

    width: int = Field(default=100, ge=40)
