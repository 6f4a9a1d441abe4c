"""Package resolution and discovery over Go source trees."""

from .resolver import PackageResolver
from .source import command_name, find_module, is_local_spec, scan_directory
from .walker import list_commands, walk_commands

__all__ = [
    "PackageResolver",
    "command_name",
    "find_module",
    "is_local_spec",
    "list_commands",
    "scan_directory",
    "walk_commands",
]
