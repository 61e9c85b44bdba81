"""
Service protocol definitions for test execution.

These protocols define the contracts between the runner and the pieces it
delegates to, so tests can substitute any of them.
"""

from collections.abc import Callable, Sequence
from typing import Protocol, runtime_checkable

from specguard.core.models.options import RunnerConfig
from specguard.core.models.run import ExecutionState, Verdict


@runtime_checkable
class IRemoteRunService(Protocol):
    """A long-lived test server that runs specs without a new process."""

    def run(self, paths: list[str], args: list[str]) -> int:
        """
        Run the given paths with extra RSpec arguments.

        Returns:
            The exit code reported by the server

        Raises:
            RemoteServiceConnectionError: If no server is listening
        """
        ...


# Builds a remote service client for a port
RemoteServiceFactory = Callable[[int], IRemoteRunService]


@runtime_checkable
class IFormatterResolver(Protocol):
    """Protocol for resolving default formatter flags."""

    def resolve(self) -> list[str]:
        """Return formatter flag strings such as ``-f progress``."""
        ...


@runtime_checkable
class ICommandBuilder(Protocol):
    """Protocol for assembling the local shell command line."""

    def build(self, paths: Sequence[str], options: RunnerConfig) -> str:
        """Build the command line for the given paths."""
        ...


@runtime_checkable
class IShellExecutor(Protocol):
    """Protocol for running a shell command line."""

    def __call__(self, command: str) -> int | None:
        """Run the command and return its exit status (None if unknown)."""
        ...


@runtime_checkable
class IResultClassifier(Protocol):
    """Protocol for turning an exit status into a verdict."""

    def classify(
        self,
        exit_code: int | None,
        state: ExecutionState,
        options: RunnerConfig,
    ) -> Verdict:
        """Classify a finished run."""
        ...
