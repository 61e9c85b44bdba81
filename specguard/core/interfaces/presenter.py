"""
Presenter and notifier interfaces for user-facing output.

The runner only needs two things from its host: somewhere to show
informational text and somewhere to raise a failure notification.
"""

from abc import ABC, abstractmethod


class IPresenter(ABC):
    """
    Interface for output presentation.

    Implementations decide how text reaches the user (terminal, editor
    panel, host plugin UI).
    """

    @abstractmethod
    def info(self, message: str, reset: bool = False) -> None:
        """
        Show an informational message.

        Args:
            message: Text to show, unchanged
            reset: Whether the host should clear its output area first
        """
        pass

    @abstractmethod
    def print(self, message: str) -> None:
        """Print a message to output."""
        pass

    @abstractmethod
    def print_error(self, message: str) -> None:
        """Print an error message."""
        pass


class INotifier(ABC):
    """Interface for pass/fail notifications (desktop, terminal bell, etc.)."""

    @abstractmethod
    def notify(self, message: str, *, title: str, image: str, priority: int) -> None:
        """
        Deliver a notification.

        Args:
            message: Notification body
            title: Notification title
            image: Image key understood by the notifier (e.g. 'failed')
            priority: Urgency, higher is more urgent
        """
        pass
