"""
Dependency injection helpers for godo.

Lazy resolution patterns that fall back to default implementations when
the container is not bootstrapped, e.g. in unit tests.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from collections.abc import Callable

T = TypeVar("T")


def resolve_or_default(
    interface: type[T],
    default_factory: Callable[[], T],
) -> T:
    """Resolve a service from the container or create a default.

    Args:
        interface: The interface/protocol type to resolve
        default_factory: Callable that creates the default implementation

    Returns:
        Resolved service instance or default

    Example:
        >>> from godo.core.interfaces.logger import ILogger
        >>> from godo.services.logging import NullLogger
        >>> logger = resolve_or_default(ILogger, NullLogger)
    """
    from .container import get_container

    instance = get_container().try_resolve(interface)
    if instance is not None:
        return instance
    return default_factory()


class LazyService:
    """Descriptor for lazy service resolution.

    Use this as a class attribute to defer service resolution until
    first access; assigning to the attribute on an instance overrides it.

    Example:
        class BuildInvoker:
            logger = LazyService(ILogger, NullLogger)
    """

    def __init__(
        self,
        interface: type[T],
        default_factory: Callable[[], T],
    ) -> None:
        self.interface = interface
        self.default_factory = default_factory
        self._name = ""

    def __set_name__(self, owner: type, name: str) -> None:
        self._name = f"_lazy_{name}"

    def __get__(self, obj: object, objtype: type | None = None) -> T:  # type: ignore[type-var]
        if obj is None:
            return self  # type: ignore[return-value]
        instance = obj.__dict__.get(self._name)
        if instance is None:
            instance = resolve_or_default(self.interface, self.default_factory)
            obj.__dict__[self._name] = instance
        return instance

    def __set__(self, obj: object, value: T | None) -> None:
        obj.__dict__[self._name] = value
