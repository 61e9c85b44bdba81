"""
Protocol definitions for specguard's service interfaces.

These protocols define the contracts that implementations must follow,
enabling dependency inversion and loose coupling throughout the codebase.
"""

from .logger import ILogger
from .presenter import INotifier, IPresenter
from .run import (
    ICommandBuilder,
    IFormatterResolver,
    IRemoteRunService,
    IResultClassifier,
    IShellExecutor,
    RemoteServiceFactory,
)

__all__ = [
    "ICommandBuilder",
    "IFormatterResolver",
    "ILogger",
    "INotifier",
    "IPresenter",
    "IRemoteRunService",
    "IResultClassifier",
    "IShellExecutor",
    "RemoteServiceFactory",
]
