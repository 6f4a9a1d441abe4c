"""
Service registry for godo.

A run shares two services, the ILogger and the IPresenter. bootstrap()
registers them once; the launch services look them up lazily through
LazyService, which falls back to a default when nothing is registered.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

from dependency_injector import providers

T = TypeVar("T")


class ServiceContainer:
    """Maps an interface type to the provider that builds its instance."""

    _instance: ServiceContainer | None = None

    def __init__(self) -> None:
        self._providers: dict[type, providers.Provider] = {}

    @classmethod
    def get_instance(cls) -> ServiceContainer:
        """The process-wide container."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Forget every registration (for testing)."""
        cls._instance = None

    def register_singleton(
        self,
        interface: type[T],
        implementation: T | None = None,
        factory: Callable[[], T] | None = None,
    ) -> None:
        """
        Register the one shared instance of interface.

        Pass the instance itself, or a factory called on first lookup.
        """
        if (implementation is None) == (factory is None):
            raise ValueError("Pass exactly one of implementation or factory")
        if implementation is not None:
            self._providers[interface] = providers.Object(implementation)
        else:
            self._providers[interface] = providers.Singleton(factory)

    def resolve(self, interface: type[T]) -> T:
        """
        Instance registered for interface.

        Raises:
            KeyError: If nothing is registered for interface
        """
        provider = self._providers.get(interface)
        if provider is None:
            raise KeyError(f"No service registered for {interface.__name__}")
        return provider()

    def try_resolve(self, interface: type[T]) -> T | None:
        """Instance registered for interface, or None."""
        provider = self._providers.get(interface)
        return provider() if provider is not None else None


def get_container() -> ServiceContainer:
    return ServiceContainer.get_instance()


def resolve(interface: type[T]) -> T:
    """Resolve a service from the process-wide container."""
    return get_container().resolve(interface)


def try_resolve(interface: type[T]) -> T | None:
    """Resolve a service, or None when it is not registered."""
    return get_container().try_resolve(interface)
