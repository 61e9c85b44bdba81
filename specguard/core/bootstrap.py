"""
Application bootstrap for specguard.

Initializes the DI container with the logger, presenter and notifier.
This module should be called once at application startup.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .container import ServiceContainer, get_container
from .interfaces.logger import ILogger
from .interfaces.presenter import INotifier, IPresenter

if TYPE_CHECKING:
    from .settings import SpecguardSettings

_initialized = False


def bootstrap(settings: SpecguardSettings | None = None) -> ServiceContainer:
    """
    Bootstrap the specguard application.

    Args:
        settings: Loaded settings (the logging section configures the logger)

    Returns:
        Initialized ServiceContainer
    """
    global _initialized

    container = get_container()

    if _initialized:
        return container

    _register_core_services(container, settings)

    _initialized = True
    return container


def _register_core_services(container: ServiceContainer, settings: SpecguardSettings | None) -> None:
    """Register core application services."""
    from ..presenters.console import ConsoleNotifier, ConsolePresenter
    from ..services.logging import SpecguardLogger
    from .models.config import LoggingConfig

    presenter = ConsolePresenter()
    container.register_singleton(IPresenter, implementation=presenter)  # type: ignore[type-abstract]
    container.register_singleton(INotifier, implementation=ConsoleNotifier(presenter))  # type: ignore[type-abstract]

    logging_config = settings.logging if settings is not None else LoggingConfig()
    container.register_singleton(
        ILogger,  # type: ignore[type-abstract]
        factory=lambda: SpecguardLogger.from_config(logging_config),
    )


def reset() -> None:
    """
    Reset the application state.

    Useful for testing to ensure clean state between tests.
    """
    global _initialized
    ServiceContainer.reset()
    _initialized = False


def is_initialized() -> bool:
    """Check if the application has been bootstrapped."""
    return _initialized
