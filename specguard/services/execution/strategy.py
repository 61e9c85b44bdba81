"""
Execution strategy selection and dispatch.

A run goes either to the remote test service (when ``cli`` contains
``--drb``) or to a local shell. A remote service that cannot be
reached sends the run to the local shell instead, once, with no retry.

    not_started -> remote_service
    not_started -> remote_service -> fallback_to_local
    not_started -> local_subprocess
"""

import os
import subprocess
from collections.abc import Mapping, Sequence

from ...core.exceptions import (
    ProcessExecutionError,
    RemoteServiceConnectionError,
    RemoteServiceError,
)
from ...core.interfaces.logger import ILogger
from ...core.interfaces.run import ICommandBuilder, IShellExecutor, RemoteServiceFactory
from ...core.models.options import RunnerConfig
from ...core.models.run import ExecutionState, ExecutionStrategy
from .remote import DEFAULT_DRB_PORT, XmlRpcRunService

DRB_FLAG = "--drb"
DRB_PORT_FLAG = "--drb-port"
DRB_PORT_ENV = "RSPEC_DRB"


def select_strategy(options: RunnerConfig) -> ExecutionStrategy:
    """Pick the strategy for a run; remote only when ``cli`` has ``--drb``."""
    return ExecutionStrategy.REMOTE if options.uses_drb else ExecutionStrategy.LOCAL


def _split_drb_arguments(options: RunnerConfig) -> tuple[str | None, list[str]]:
    """Separate the ``--drb-port`` value from the other CLI tokens, dropping ``--drb``."""
    port: str | None = None
    rest: list[str] = []
    tokens = options.cli_tokens
    i = 0
    while i < len(tokens):
        token = tokens[i]
        if token == DRB_FLAG:
            i += 1
        elif token == DRB_PORT_FLAG:
            if i + 1 < len(tokens):
                port = tokens[i + 1]
            i += 2
        elif token.startswith(DRB_PORT_FLAG + "="):
            port = token.partition("=")[2]
            i += 1
        else:
            rest.append(token)
            i += 1
    return port, rest


def _parse_port(value: str | int | None) -> int | None:
    if value is None:
        return None
    try:
        port = int(value)
    except ValueError:
        return None
    return port if 0 < port < 65536 else None


def resolve_drb_port(options: RunnerConfig, environ: Mapping[str, str] | None = None) -> int:
    """
    Port of the remote test service.

    Priority: ``--drb-port`` in ``cli`` > ``RSPEC_DRB`` environment variable >
    ``drb_port`` option > 8989. Values that are not valid ports are skipped.
    """
    environ = os.environ if environ is None else environ
    cli_port, _ = _split_drb_arguments(options)
    for candidate in (cli_port, environ.get(DRB_PORT_ENV), options.drb_port):
        port = _parse_port(candidate)
        if port is not None:
            return port
    return DEFAULT_DRB_PORT


def remote_arguments(options: RunnerConfig) -> list[str]:
    """
    Arguments passed to the remote service along with the paths.

    ``--drb`` is dropped; an explicit ``--drb-port`` is passed first,
    followed by the remaining CLI flags in order.
    """
    port, rest = _split_drb_arguments(options)
    if port is not None:
        return [DRB_PORT_FLAG, port, *rest]
    return rest


def run_shell(command: str) -> int:
    """
    Run a command line through the shell in the current directory.

    Returns:
        The exit status (negative when killed by a signal)

    Raises:
        ProcessExecutionError: If the shell could not be started
    """
    try:
        return subprocess.run(command, shell=True, check=False).returncode
    except OSError as e:
        raise ProcessExecutionError("Failed to start the test command", command=command, cause=e) from e


class StrategyExecutor:
    """
    Dispatches a run to the selected strategy.

    Returns the final state together with the raw exit status so the
    classifier can tell a remote result from a local one.
    """

    def __init__(
        self,
        command_builder: ICommandBuilder,
        shell: IShellExecutor | None = None,
        remote_factory: RemoteServiceFactory | None = None,
        logger: ILogger | None = None,
    ) -> None:
        """
        Initialize executor.

        Args:
            command_builder: Builds the local command line
            shell: Runs a command line (defaults to run_shell)
            remote_factory: Creates a remote service client for a port
            logger: Logger for internal diagnostics
        """
        self._builder = command_builder
        self._shell = shell or run_shell
        self._remote_factory = remote_factory or XmlRpcRunService
        self._logger = logger

    @property
    def logger(self) -> ILogger:
        """Get logger, resolving from container or creating NullLogger."""
        if self._logger is None:
            from ...core.di import resolve_or_default
            from ..logging import NullLogger

            self._logger = resolve_or_default(ILogger, NullLogger)  # type: ignore[type-abstract]
        return self._logger

    def execute(self, paths: Sequence[str], options: RunnerConfig) -> tuple[ExecutionState, int | None]:
        """
        Run the paths with the strategy the options call for.

        Returns:
            (final execution state, exit status or None when there is none)
        """
        strategy = select_strategy(options)
        self.logger.debug("Selected %s strategy for %s", strategy.value, list(paths))

        if strategy is ExecutionStrategy.REMOTE:
            port = resolve_drb_port(options)
            args = remote_arguments(options)
            try:
                service = self._remote_factory(port)
                exit_code = service.run(list(paths), args)
                if isinstance(exit_code, bool) or not isinstance(exit_code, int):
                    self.logger.error("Remote service returned %r, not an exit code", exit_code)
                    return ExecutionState.REMOTE_SERVICE, None
                self.logger.debug("Remote service on port %d returned %s", port, exit_code)
                return ExecutionState.REMOTE_SERVICE, exit_code
            except RemoteServiceConnectionError as e:
                self.logger.debug("Remote service unavailable (%s), running locally", e)
                return ExecutionState.FALLBACK_TO_LOCAL, self._run_local(paths, options)
            except RemoteServiceError as e:
                self.logger.error("Remote service failed: %s", e)
                return ExecutionState.REMOTE_SERVICE, None
            except OSError as e:
                self.logger.debug("Remote service connection failed (%s), running locally", e)
                return ExecutionState.FALLBACK_TO_LOCAL, self._run_local(paths, options)
            except Exception as e:
                # Injected clients are not limited to the errors above
                self.logger.error("Remote service client error: %s", e)
                return ExecutionState.REMOTE_SERVICE, None

        return ExecutionState.LOCAL_SUBPROCESS, self._run_local(paths, options)

    def _run_local(self, paths: Sequence[str], options: RunnerConfig) -> int | None:
        command = self._builder.build(paths, options)
        self.logger.info("Running: %s", command)
        try:
            exit_code = self._shell(command)
        except ProcessExecutionError as e:
            self.logger.error("%s", e)
            return None
        self.logger.debug("Command exited with %s", exit_code)
        return exit_code
