"""
Command line assembly for local runs.

Builds one shell-invocable line from the effective options:

    [export NAME=VALUE; ...] [rvm V1,V2 exec] [bundle exec] [zeus] rspec
        [cli] [formatters] [results formatter] [--failure-exit-code N]
        [-r turnip/rspec] paths...
"""

import shlex
from collections.abc import Sequence
from importlib.resources import files
from pathlib import Path

from ...core.interfaces.logger import ILogger
from ...core.interfaces.run import IFormatterResolver
from ...core.models.options import RunnerConfig
from .formatters import FormatterResolver

RSPEC_EXECUTABLE = "rspec"
PRELOADER_EXECUTABLE = "zeus"
BUNDLER_PREFIX = "bundle exec"
RESULTS_FORMATTER_CLASS = "SpecGuard::Formatter"
TURNIP_REQUIRE = "turnip/rspec"


def results_formatter_path() -> str:
    """Location of the RSpec formatter shipped with specguard."""
    return str(files("specguard") / "data" / "results_formatter.rb")


class CommandBuilder:
    """
    Builds the shell command that runs RSpec for a set of paths.

    The project root decides whether Bundler applies (a Gemfile must exist)
    and where the default formatters come from (its ``.rspec`` file).
    """

    def __init__(
        self,
        project_root: Path | str | None = None,
        formatter_resolver: IFormatterResolver | None = None,
        results_formatter: str | None = None,
        logger: ILogger | None = None,
    ) -> None:
        """
        Initialize command builder.

        Args:
            project_root: Project directory (defaults to cwd at build time)
            formatter_resolver: Source of default formatter flags
            results_formatter: Path of the results formatter to require
            logger: Logger for internal diagnostics
        """
        self._project_root = Path(project_root) if project_root is not None else None
        self._resolver = formatter_resolver or FormatterResolver(project_root)
        self._results_formatter = results_formatter or results_formatter_path()
        self._logger = logger

    @property
    def logger(self) -> ILogger:
        """Get logger, resolving from container or creating NullLogger."""
        if self._logger is None:
            from ...core.di import resolve_or_default
            from ..logging import NullLogger

            self._logger = resolve_or_default(ILogger, NullLogger)  # type: ignore[type-abstract]
        return self._logger

    @property
    def project_root(self) -> Path:
        return self._project_root or Path.cwd()

    def build(self, paths: Sequence[str], options: RunnerConfig) -> str:
        """
        Build the command line.

        Args:
            paths: Spec files or directories, in the order they should run
            options: Effective options for this run

        Returns:
            A single shell command line

        Raises:
            ValueError: If no paths are given
        """
        if not paths:
            raise ValueError("At least one path is required to build a command")

        parts: list[str] = []
        parts.extend(self.environment_exports(options))
        parts.extend(self.launch_prefix(options))

        cli = (options.cli or "").strip()
        if cli:
            parts.append(cli)

        parts.extend(self.formatter_flags(options))

        if options.notification:
            parts.extend(["--failure-exit-code", str(options.failure_exit_code)])

        if options.turnip:
            parts.extend(["-r", TURNIP_REQUIRE])

        parts.extend(shlex.quote(str(path)) for path in paths)

        command = " ".join(parts)
        self.logger.debug("Built command: %s", command)
        return command

    def environment_exports(self, options: RunnerConfig) -> list[str]:
        """``export NAME=VALUE;`` segments, one per ``env`` entry in order."""
        return [f"export {name}={shlex.quote(value)};" for name, value in options.env.items()]

    def uses_bundler(self, options: RunnerConfig) -> bool:
        """Bundler wraps the run unless binstubs are used or there is no Gemfile."""
        if not options.bundler or options.binstubs:
            return False
        return (self.project_root / "Gemfile").is_file()

    def launch_prefix(self, options: RunnerConfig) -> list[str]:
        """Wrapper prefixes followed by the executable."""
        prefix: list[str] = []
        if options.rvm:
            prefix.append(f"rvm {','.join(options.rvm)} exec")
        if self.uses_bundler(options):
            prefix.append(BUNDLER_PREFIX)

        binstubs = options.binstubs_dir
        if options.zeus:
            prefix.append(f"{binstubs}/{PRELOADER_EXECUTABLE}" if binstubs else PRELOADER_EXECUTABLE)
            prefix.append(RSPEC_EXECUTABLE)
        else:
            prefix.append(f"{binstubs}/{RSPEC_EXECUTABLE}" if binstubs else RSPEC_EXECUTABLE)
        return prefix

    def formatter_flags(self, options: RunnerConfig) -> list[str]:
        """
        Formatter flags to inject.

        None when notifications are off: the command then carries only what
        ``cli`` asks for. A formatter chosen in ``cli`` also wins over every
        injected formatter, including the results formatter.
        """
        if not options.notification or options.declares_formatter:
            return []

        return [
            *self._resolver.resolve(),
            "-r",
            shlex.quote(self._results_formatter),
            "-f",
            RESULTS_FORMATTER_CLASS,
            "--out",
            "/dev/null",
        ]
