"""
Console presenter for terminal output.

Implements human-readable output and notifications for the CLI.
"""

import sys

from ..core.interfaces.presenter import INotifier, IPresenter


class ConsolePresenter(IPresenter):
    """
    Console output presenter.

    Formats output for human-readable terminal display.
    """

    CLEAR_SCREEN = "\033[2J\033[H"

    def __init__(self, use_color: bool = True, file=None) -> None:
        """
        Initialize console presenter.

        Args:
            use_color: Whether to use ANSI color codes
            file: Output file (defaults to sys.stdout)
        """
        self._file = file or sys.stdout
        self._is_tty = self._file.isatty()
        self._use_color = use_color and self._is_tty
        self._err_file = sys.stderr

    def info(self, message: str, reset: bool = False) -> None:
        """Show an informational message, clearing the terminal first if asked."""
        if reset and self._is_tty:
            print(self.CLEAR_SCREEN, end="", file=self._file)
        print(message, file=self._file)

    def print(self, message: str) -> None:
        """Print a message to output."""
        print(message, file=self._file)

    def print_error(self, message: str) -> None:
        """Print an error message to stderr."""
        if self._use_color:
            print(f"\033[91mError: {message}\033[0m", file=self._err_file)
        else:
            print(f"Error: {message}", file=self._err_file)


class ConsoleNotifier(INotifier):
    """Notifier that writes notifications to the terminal."""

    def __init__(self, presenter: IPresenter | None = None) -> None:
        self._presenter = presenter or ConsolePresenter()

    def notify(self, message: str, *, title: str, image: str, priority: int) -> None:
        """Print the notification; failures go to stderr."""
        text = f"[{title}] {message}"
        if image == "failed":
            self._presenter.print_error(text)
        else:
            self._presenter.print(text)
