"""
Logger implementation for specguard internal diagnostics.

Wraps stdlib logging. Two handlers are available: stderr and a rotating
file under ~/.specguard. The level applies to both.
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING, Any, ClassVar

from ..core.interfaces.logger import ILogger

if TYPE_CHECKING:
    from ..core.models.config import LoggingConfig

_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class SpecguardLogger(ILogger):
    """
    Logger writing to stderr and/or ~/.specguard/specguard.log.

    The underlying stdlib logger never propagates, so a host application's
    logging setup is left alone.
    """

    LOG_FILE_PATH = Path.home() / ".specguard" / "specguard.log"
    MAX_FILE_SIZE = 5 * 1024 * 1024  # 5MB
    BACKUP_COUNT = 3

    LEVEL_MAP: ClassVar[dict[str, int]] = {
        "debug": logging.DEBUG,
        "info": logging.INFO,
        "warning": logging.WARNING,
        "error": logging.ERROR,
    }

    def __init__(
        self,
        name: str = "specguard",
        level: str = "warning",
        console_enabled: bool = False,
        file_enabled: bool = True,
        log_file: Path | None = None,
    ) -> None:
        """
        Initialize logger.

        Args:
            name: stdlib logger name
            level: debug, info, warning or error
            console_enabled: Write to stderr
            file_enabled: Write to the rotating log file
            log_file: Log file location (defaults to LOG_FILE_PATH)
        """
        self._logger = logging.getLogger(name)
        self._logger.setLevel(logging.DEBUG)
        self._logger.handlers.clear()
        self._logger.propagate = False

        self._handlers: list[logging.Handler] = []
        if console_enabled:
            self._handlers.append(logging.StreamHandler(sys.stderr))
        if file_enabled:
            path = log_file or self.LOG_FILE_PATH
            path.parent.mkdir(parents=True, exist_ok=True)
            self._handlers.append(
                RotatingFileHandler(path, maxBytes=self.MAX_FILE_SIZE, backupCount=self.BACKUP_COUNT)
            )

        formatter = logging.Formatter(_FORMAT, datefmt=_DATE_FORMAT)
        for handler in self._handlers:
            handler.setFormatter(formatter)
            self._logger.addHandler(handler)
        self.set_level(level)

    @classmethod
    def from_config(cls, config: LoggingConfig, log_file: Path | None = None) -> SpecguardLogger:
        """Create a logger from the [logging] settings section."""
        return cls(
            level=config.level,
            console_enabled=config.console,
            file_enabled=config.file,
            log_file=log_file,
        )

    def debug(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._logger.debug(message, *args, **kwargs)

    def info(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._logger.info(message, *args, **kwargs)

    def warning(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._logger.warning(message, *args, **kwargs)

    def error(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._logger.error(message, *args, **kwargs)

    def set_level(self, level: str) -> None:
        """Set the level on every handler; unknown names mean warning."""
        lvl = self.LEVEL_MAP.get(level.lower(), logging.WARNING)
        for handler in self._handlers:
            handler.setLevel(lvl)


class NullLogger(ILogger):
    """Logger that discards everything; used until the container is bootstrapped."""

    def debug(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    def info(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    def warning(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    def error(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    def set_level(self, level: str) -> None:
        pass
