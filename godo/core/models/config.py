"""
Configuration models.

Provides Pydantic models for godo configuration with validation.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import ConfigDict, Field, field_validator

from .base import GodoBaseModel

# Type aliases
LogLevel = Literal["debug", "info", "warning", "error"]
SplitPolicy = Literal["heuristic", "separator"]
LaunchMode = Literal["exec", "spawn"]
StagingStrategy = Literal["copy-aside", "direct"]


def _split_commas(v: Any) -> Any:
    if isinstance(v, str):
        return [x.strip() for x in v.split(",") if x.strip()]
    return v if v else []


class ConfigBaseModel(GodoBaseModel):
    """Base model for config sections with relaxed strict mode for TOML loading."""

    model_config = ConfigDict(
        strict=False,  # Allow coercion from TOML and env types
        validate_assignment=True,
        extra="ignore",  # Ignore unknown fields in config files
        populate_by_name=True,
        use_enum_values=True,
        revalidate_instances="never",
    )


class LaunchConfig(ConfigBaseModel):
    """How arguments are split and how the built command is started."""

    split_policy: SplitPolicy = "heuristic"
    mode: LaunchMode = "exec"
    announce: bool = True


class StagingConfig(ConfigBaseModel):
    """Where built executables are written and how they are handed out."""

    dir: str | None = None
    strategy: StagingStrategy = "copy-aside"

    @field_validator("dir", mode="before")
    @classmethod
    def empty_is_default(cls, v: str | None) -> str | None:
        """Treat an empty directory as 'use the default'."""
        if v is None or v == "":
            return None
        return v


class BuildConfig(ConfigBaseModel):
    """External build toolchain settings."""

    go: str = "go"
    tty: bool = True
    fetch: bool = False


class EnvConfig(ConfigBaseModel):
    """Environment filtering for the build and exec steps."""

    strip: list[str] = Field(default_factory=lambda: ["GODEBUG"])
    output_var: str = "GOBIN"
    strip_exec: bool = False

    @field_validator("strip", mode="before")
    @classmethod
    def parse_comma_separated(cls, v: Any) -> list[str]:
        """Parse comma-separated string to list."""
        return _split_commas(v)


class ResolveConfig(ConfigBaseModel):
    """Package roots searched for symbolic package specs."""

    roots: list[str] = Field(default_factory=list)

    @field_validator("roots", mode="before")
    @classmethod
    def parse_comma_separated(cls, v: Any) -> list[str]:
        """Parse comma-separated string to list."""
        return _split_commas(v)


class LoggingConfig(ConfigBaseModel):
    """Logging configuration section."""

    level: LogLevel = "warning"
    console: bool = False
    file: bool = False


class GodoConfig(ConfigBaseModel):
    """Complete godo configuration.

    This model represents the full configuration with all sections.
    It can be loaded from TOML files or constructed programmatically.
    """

    launch: LaunchConfig = Field(default_factory=LaunchConfig)
    staging: StagingConfig = Field(default_factory=StagingConfig)
    build: BuildConfig = Field(default_factory=BuildConfig)
    env: EnvConfig = Field(default_factory=EnvConfig)
    resolve: ResolveConfig = Field(default_factory=ResolveConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    def to_dict(self) -> dict[str, Any]:
        """Convert config to a nested dict."""
        return self.model_dump()
