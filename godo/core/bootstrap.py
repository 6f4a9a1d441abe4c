"""
Application bootstrap for godo.

Registers the shared presenter and logger. Called once per process by
the CLI, after the settings are loaded.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .container import ServiceContainer, get_container
from .interfaces.logger import ILogger
from .interfaces.presenter import IPresenter

if TYPE_CHECKING:
    from .settings import GodoSettings

_initialized = False


def bootstrap(settings: GodoSettings | None = None) -> ServiceContainer:
    """
    Bootstrap the godo application.

    Args:
        settings: Loaded settings; the [logging] section configures the
            logger. Defaults apply when omitted.

    Returns:
        The initialized ServiceContainer
    """
    global _initialized

    container = get_container()
    if _initialized:
        return container

    from ..presenters.console import ConsolePresenter
    from ..services.logging import GodoLogger
    from .models.config import LoggingConfig

    logging_config = settings.logging if settings is not None else LoggingConfig()

    container.register_singleton(IPresenter, implementation=ConsolePresenter())  # type: ignore[type-abstract]
    container.register_singleton(
        ILogger,  # type: ignore[type-abstract]
        factory=lambda: GodoLogger.from_config(logging_config),
    )

    _initialized = True
    return container


def reset() -> None:
    """Reset the application state between tests."""
    global _initialized
    ServiceContainer.reset()
    _initialized = False


def is_initialized() -> bool:
    return _initialized
