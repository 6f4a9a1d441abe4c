"""
Core infrastructure for godo.

This module provides:
- ServiceContainer: DI container using dependency-injector
- Application bootstrap for initialization
- Protocol definitions for the launch pipeline
- Custom exception hierarchy
"""

from .bootstrap import bootstrap, is_initialized, reset
from .container import ServiceContainer, get_container, resolve, try_resolve
from .exceptions import (
    BuildError,
    ConfigFileError,
    ConfigValidationError,
    ExecError,
    GodoConfigError,
    GodoException,
    GodoExecutionError,
    ResolutionError,
    ResolutionKind,
    StagingError,
    UsageError,
)

__all__ = [
    "BuildError",
    "ConfigFileError",
    "ConfigValidationError",
    "ExecError",
    "GodoConfigError",
    "GodoException",
    "GodoExecutionError",
    "ResolutionError",
    "ResolutionKind",
    "ServiceContainer",
    "StagingError",
    "UsageError",
    "bootstrap",
    "get_container",
    "is_initialized",
    "reset",
    "resolve",
    "try_resolve",
]
