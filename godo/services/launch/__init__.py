"""Launch pipeline services: split, build, stage and exec."""

from .args import USAGE, ArgumentSplitter, is_help_request, relativize_spec
from .builder import BuildInvoker
from .coordinator import LaunchCoordinator
from .environment import EnvironmentFilter
from .launcher import Launcher
from .stager import ArtifactStager

__all__ = [
    "USAGE",
    "ArgumentSplitter",
    "ArtifactStager",
    "BuildInvoker",
    "EnvironmentFilter",
    "LaunchCoordinator",
    "Launcher",
    "is_help_request",
    "relativize_spec",
]
