"""Auxiliary godo commands, each installed as its own console script."""

from .config import config
from .listing import list_cmd

__all__ = ["config", "list_cmd"]
