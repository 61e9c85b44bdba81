"""
The Runner: entry point for running specs.

Ties the pieces together for each call:

    paths + options -> merge_options -> StrategyExecutor (CommandBuilder,
    remote service) -> ResultClassifier -> bool

Nothing raised below this layer reaches the caller; every failure ends as a
False result, plus a notification when RSpec could not run at all.
"""

from collections.abc import Mapping, Sequence
from os import PathLike
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ...core.exceptions import ConfigValidationError
from ...core.interfaces.logger import ILogger
from ...core.interfaces.presenter import INotifier, IPresenter
from ...core.interfaces.run import (
    ICommandBuilder,
    IResultClassifier,
    IShellExecutor,
    RemoteServiceFactory,
)
from ...core.models.options import DEPRECATED_OPTIONS, RunnerConfig
from ...core.models.run import RunRequest, Verdict
from .classifier import FAILURE_NOTIFICATION, ResultClassifier
from .command import CommandBuilder
from .options import merge_options
from .strategy import StrategyExecutor


def deprecation_message(key: str) -> str:
    """Warning text for a deprecated option."""
    return (
        f"DEPRECATION WARNING: The '{key}' option is deprecated. Pass standard command line "
        f'argument "{DEPRECATED_OPTIONS[key]}" to RSpec with the \'cli\' option.'
    )


class Runner:
    """
    Runs RSpec for a list of paths.

    Usage:
        runner = Runner({"cli": "--color", "bundler": False})
        passed = runner.run(["spec/models"])
    """

    def __init__(
        self,
        config: RunnerConfig | Mapping[str, Any] | None = None,
        *,
        project_root: Path | str | None = None,
        presenter: IPresenter | None = None,
        notifier: INotifier | None = None,
        logger: ILogger | None = None,
        command_builder: ICommandBuilder | None = None,
        shell: IShellExecutor | None = None,
        remote_factory: RemoteServiceFactory | None = None,
        classifier: IResultClassifier | None = None,
    ) -> None:
        """
        Initialize runner.

        Args:
            config: Runner options (mapping or RunnerConfig)
            project_root: Project directory (defaults to cwd at run time)
            presenter: Where messages and warnings are shown
            notifier: Where failure notifications go
            logger: Logger for internal diagnostics
            command_builder: Builds the local command line
            shell: Runs the local command line
            remote_factory: Creates remote test service clients
            classifier: Turns exit statuses into verdicts

        Raises:
            ConfigValidationError: If the options are invalid
        """
        if isinstance(config, RunnerConfig):
            self._config = config
        else:
            try:
                self._config = RunnerConfig.model_validate(dict(config or {}))
            except ValidationError as e:
                raise ConfigValidationError("Invalid runner option", cause=e) from e

        self._presenter = presenter
        self._notifier = notifier
        self._logger = logger
        self._builder = command_builder or CommandBuilder(project_root, logger=logger)
        self._executor = StrategyExecutor(
            self._builder,
            shell=shell,
            remote_factory=remote_factory,
            logger=logger,
        )
        self._classifier = classifier or ResultClassifier()

        for key in self._config.deprecated_options():
            message = deprecation_message(key)
            self.logger.warning("%s", message)
            self.presenter.info(message)

    @property
    def config(self) -> RunnerConfig:
        """The options this runner was constructed with."""
        return self._config

    @property
    def logger(self) -> ILogger:
        """Get logger, resolving from container or creating NullLogger."""
        if self._logger is None:
            from ...core.di import resolve_or_default
            from ..logging import NullLogger

            self._logger = resolve_or_default(ILogger, NullLogger)  # type: ignore[type-abstract]
        return self._logger

    @property
    def presenter(self) -> IPresenter:
        """Get presenter, resolving from container or creating a console one."""
        if self._presenter is None:
            from ...core.di import resolve_or_default
            from ...presenters.console import ConsolePresenter

            self._presenter = resolve_or_default(IPresenter, ConsolePresenter)  # type: ignore[type-abstract]
        return self._presenter

    @property
    def notifier(self) -> INotifier:
        """Get notifier, resolving from container or creating a console one."""
        if self._notifier is None:
            from ...core.di import resolve_or_default
            from ...presenters.console import ConsoleNotifier

            self._notifier = resolve_or_default(
                INotifier,  # type: ignore[type-abstract]
                lambda: ConsoleNotifier(self.presenter),
            )
        return self._notifier

    def command(
        self,
        paths: Sequence[str | PathLike[str]],
        options: Mapping[str, Any] | None = None,
    ) -> str:
        """
        The local command line a run would use.

        Raises:
            ValueError: If no paths are given
            ConfigValidationError: If an override is invalid
        """
        return self._builder.build([str(p) for p in paths], merge_options(self._config, options))

    def execute(
        self,
        paths: Sequence[str | PathLike[str]],
        options: Mapping[str, Any] | None = None,
    ) -> Verdict | None:
        """
        Run the paths and return the full verdict.

        Returns:
            The verdict, or None when nothing was run (no paths, bad options)
        """
        if not paths:
            self.logger.debug("No paths given, nothing to run")
            return None

        try:
            request = RunRequest(paths=[str(p) for p in paths], overrides=dict(options or {}))
            effective = merge_options(self._config, request.overrides)
        except (ValidationError, ConfigValidationError) as e:
            self.logger.error("Invalid run options: %s", e)
            self.presenter.print_error(f"Invalid run options: {e}")
            return None

        if effective.message:
            self.presenter.info(effective.message, reset=True)

        state, exit_code = self._executor.execute(request.paths, effective)
        verdict = self._classifier.classify(exit_code, state, effective)
        self.logger.debug(
            "Run finished: state=%s, exit_code=%s, outcome=%s",
            verdict.state.value,
            exit_code,
            verdict.outcome.value,
        )

        if verdict.notifies:
            self.notifier.notify(
                FAILURE_NOTIFICATION.message,
                title=FAILURE_NOTIFICATION.title,
                image=FAILURE_NOTIFICATION.image,
                priority=FAILURE_NOTIFICATION.priority,
            )
        return verdict

    def run(
        self,
        paths: Sequence[str | PathLike[str]],
        options: Mapping[str, Any] | None = None,
    ) -> bool:
        """
        Run the paths.

        Args:
            paths: Spec files or directories; an empty list runs nothing
            options: Options overriding the runner's configuration for this call

        Returns:
            True if the specs passed, False otherwise
        """
        verdict = self.execute(paths, options)
        return verdict is not None and verdict.success
