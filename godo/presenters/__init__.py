"""
Output presenters for godo CLI.
"""

from .console import ConsolePresenter

__all__ = ["ConsolePresenter"]
