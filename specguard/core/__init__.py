"""
Core infrastructure for specguard.

This module provides:
- ServiceContainer: DI container using dependency-injector
- Application bootstrap for initialization
- Settings loading
- Custom exception hierarchy
"""

from .bootstrap import bootstrap, is_initialized, reset
from .container import ServiceContainer, get_container
from .exceptions import (
    ConfigFileError,
    ConfigValidationError,
    ProcessExecutionError,
    RemoteServiceConnectionError,
    RemoteServiceError,
    SpecguardConfigError,
    SpecguardException,
    SpecguardExecutionError,
)
from .settings import SpecguardSettings, find_config_file, load_settings

__all__ = [
    "ConfigFileError",
    "ConfigValidationError",
    "ProcessExecutionError",
    "RemoteServiceConnectionError",
    "RemoteServiceError",
    "ServiceContainer",
    "SpecguardConfigError",
    "SpecguardException",
    "SpecguardExecutionError",
    "SpecguardSettings",
    "bootstrap",
    "find_config_file",
    "get_container",
    "is_initialized",
    "load_settings",
    "reset",
]
