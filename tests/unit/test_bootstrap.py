"""
Unit tests for application bootstrap and the service container.
"""

from unittest.mock import MagicMock

import pytest
from dependency_injector import providers

from specguard.core.bootstrap import bootstrap, is_initialized
from specguard.core.container import ServiceContainer, get_container
from specguard.core.interfaces.logger import ILogger
from specguard.core.interfaces.presenter import INotifier, IPresenter
from specguard.core.settings import load_settings
from specguard.presenters.console import ConsoleNotifier, ConsolePresenter
from specguard.services.logging import SpecguardLogger


class TestBootstrap:
    """Test service registration at startup."""

    def test_registers_core_services(self, tmp_path):
        container = bootstrap(load_settings(start_dir=str(tmp_path)))

        assert is_initialized()
        assert isinstance(container.resolve(IPresenter), ConsolePresenter)
        assert isinstance(container.resolve(INotifier), ConsoleNotifier)
        assert isinstance(container.resolve(ILogger), SpecguardLogger)

    def test_logger_is_a_singleton(self, tmp_path):
        container = bootstrap(load_settings(start_dir=str(tmp_path)))

        assert container.resolve(ILogger) is container.resolve(ILogger)

    def test_second_call_keeps_registrations(self):
        container = bootstrap()
        presenter = container.resolve(IPresenter)

        assert bootstrap() is container
        assert container.resolve(IPresenter) is presenter


class TestServiceContainer:
    """Test registration and resolution."""

    def test_transient_creates_new_instances(self):
        container = ServiceContainer()
        container.register_transient(IPresenter, MagicMock)

        assert container.resolve(IPresenter) is not container.resolve(IPresenter)

    def test_unregistered(self):
        container = get_container()

        assert container.try_resolve(INotifier) is None
        with pytest.raises(KeyError):
            container.resolve(INotifier)

    def test_register_needs_instance_or_factory(self):
        with pytest.raises(ValueError):
            ServiceContainer().register_singleton(ILogger)

    def test_override_replaces_registration(self):
        container = bootstrap()
        replacement = MagicMock()

        container.override(IPresenter, providers.Object(replacement))

        assert container.is_registered(IPresenter)
        assert container.resolve(IPresenter) is replacement
