"""
Protocol definitions for godo's service interfaces.

These protocols define the contracts that implementations must follow,
enabling dependency inversion and loose coupling throughout the codebase.
"""

from .launch import (
    IArgumentSplitter,
    IArtifactStager,
    IBuildInvoker,
    ILauncher,
    IPackageResolver,
)
from .logger import ILogger
from .presenter import IPresenter

__all__ = [
    "IArgumentSplitter",
    "IArtifactStager",
    "IBuildInvoker",
    "ILauncher",
    "ILogger",
    "IPackageResolver",
    "IPresenter",
]
