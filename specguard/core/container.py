"""
Dependency injection container for specguard.

Holds the collaborators the runner looks up lazily (logger, presenter,
notifier) as dependency-injector providers keyed by interface.
"""

from collections.abc import Callable
from typing import Optional, TypeVar

from dependency_injector import providers

T = TypeVar("T")


class ServiceContainer:
    """
    Interface -> provider table shared by the whole process.

    Nothing is registered until bootstrap() runs, so services used as a
    library fall back to their defaults.
    """

    _instance: Optional["ServiceContainer"] = None

    def __init__(self) -> None:
        self._providers: dict[type, providers.Provider] = {}

    @classmethod
    def get_instance(cls) -> "ServiceContainer":
        """Get the global container instance, creating it on first use."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Drop the global container (for testing)."""
        cls._instance = None

    def register_singleton(
        self,
        interface: type[T],
        implementation: T | None = None,
        factory: Callable[[], T] | None = None,
    ) -> None:
        """
        Register one shared instance for an interface.

        Args:
            interface: The interface type
            implementation: A ready instance
            factory: Builds the instance on first resolve instead

        Raises:
            ValueError: If neither implementation nor factory is given
        """
        if implementation is not None:
            self._providers[interface] = providers.Object(implementation)
        elif factory is not None:
            self._providers[interface] = providers.Singleton(factory)
        else:
            raise ValueError("Must provide either implementation or factory")

    def register_transient(self, interface: type[T], factory: Callable[..., T]) -> None:
        """Register a factory called on every resolve."""
        self._providers[interface] = providers.Factory(factory)

    def override(self, interface: type[T], provider: providers.Provider) -> None:
        """Swap in any provider for an interface (useful for testing)."""
        self._providers[interface] = provider

    def resolve(self, interface: type[T]) -> T:
        """
        Resolve a service by interface.

        Raises:
            KeyError: If nothing is registered for the interface
        """
        instance = self.try_resolve(interface)
        if instance is None:
            raise KeyError(f"No provider registered for: {interface}")
        return instance

    def try_resolve(self, interface: type[T]) -> T | None:
        """Resolve a service, or None if nothing is registered."""
        provider = self._providers.get(interface)
        return provider() if provider is not None else None

    def is_registered(self, interface: type) -> bool:
        return interface in self._providers


def get_container() -> ServiceContainer:
    """Get the global service container instance."""
    return ServiceContainer.get_instance()
