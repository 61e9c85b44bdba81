"""
Presenters for specguard output.
"""

from .console import ConsoleNotifier, ConsolePresenter

__all__ = ["ConsoleNotifier", "ConsolePresenter"]
