"""
Base Pydantic models for godo.

Values that flow through a launch are built once and never changed, so
they derive from ImmutableModel. Config sections relax strictness (see
ConfigBaseModel) because TOML and environment values arrive as strings.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class GodoBaseModel(BaseModel):
    """Strict base model: no implicit coercion, no unknown fields."""

    model_config = ConfigDict(
        strict=True,
        validate_assignment=True,
        extra="forbid",
        use_enum_values=True,
    )


class ImmutableModel(GodoBaseModel):
    """Frozen model for per-invocation values."""

    model_config = ConfigDict(frozen=True)
