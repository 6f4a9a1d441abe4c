"""
Invocation context for the godo CLI.

Provides GodoContext, which gathers the working directory, environment
and merged settings once at startup.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from pydantic import ValidationError

from ..core.exceptions import ConfigFileError, ConfigValidationError
from ..core.settings import GodoSettings, load_settings


@dataclass
class GodoContext:
    """Everything a godo command needs from its surroundings.

    Attributes:
        cwd: Current working directory
        environ: Snapshot of the process environment
        settings: Merged settings (init > env > TOML > defaults)
    """

    cwd: Path
    environ: dict[str, str] = field(default_factory=dict)
    settings: GodoSettings = field(default_factory=GodoSettings)

    @classmethod
    def create(cls, cwd: Path | None = None) -> GodoContext:
        """Create a GodoContext for the current process.

        Raises:
            ConfigFileError: The config file exists but cannot be read
            ConfigValidationError: A config or GODO_* value is invalid
        """
        if cwd is None:
            cwd = Path.cwd()

        settings = cls._load_settings(cwd)
        return cls(cwd=cwd, environ=dict(os.environ), settings=settings)

    @staticmethod
    def _load_settings(cwd: Path) -> GodoSettings:
        try:
            settings = load_settings(start_dir=str(cwd))
        except ValidationError as e:
            first = e.errors()[0]
            key = ".".join(str(p) for p in first.get("loc", ()))
            raise ConfigValidationError(
                f"invalid configuration: {first.get('msg', e)}", key=key or None, cause=e
            ) from e

        if settings.config_error:
            raise ConfigFileError(settings.config_error, file_path=settings.config_file)
        return settings
