"""
Pydantic models for godo.

All models use Pydantic v2 with strict validation.
"""

from .base import GodoBaseModel, ImmutableModel
from .config import (
    BuildConfig,
    EnvConfig,
    GodoConfig,
    LaunchConfig,
    LaunchMode,
    LoggingConfig,
    LogLevel,
    ResolveConfig,
    SplitPolicy,
    StagingConfig,
    StagingStrategy,
)
from .launch import (
    DEFAULT_PACKAGE_SPEC,
    SEPARATOR,
    ExecPlan,
    LaunchFailed,
    LaunchOutcome,
    ParsedInvocation,
    Replaced,
    ResolvedPackage,
    StagedArtifact,
)

__all__ = [
    "DEFAULT_PACKAGE_SPEC",
    "SEPARATOR",
    "BuildConfig",
    "EnvConfig",
    "ExecPlan",
    "GodoBaseModel",
    "GodoConfig",
    "ImmutableModel",
    "LaunchConfig",
    "LaunchFailed",
    "LaunchMode",
    "LaunchOutcome",
    "LogLevel",
    "LoggingConfig",
    "ParsedInvocation",
    "Replaced",
    "ResolveConfig",
    "ResolvedPackage",
    "SplitPolicy",
    "StagedArtifact",
    "StagingConfig",
    "StagingStrategy",
]
