"""
Custom exception hierarchy for specguard.

Provides typed exceptions for configuration and execution failures so
callers can decide which ones to recover from.
"""

from __future__ import annotations


class SpecguardException(Exception):
    """
    Base exception for all specguard errors.

    Attributes:
        message: Human-readable error description
        context: Additional debugging context (paths, ports, commands, etc.)
        exit_code: Suggested exit code for CLI (default: 1)
        recoverable: Whether retry/recovery may be possible
    """

    exit_code: int = 1
    recoverable: bool = True

    def __init__(
        self,
        message: str,
        *,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.message = message
        self.context = context or {}
        if cause is not None:
            self.__cause__ = cause
        super().__init__(message)

    def __str__(self) -> str:
        if self.context:
            ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({ctx_str})"
        return self.message


# =============================================================================
# Configuration Errors
# =============================================================================


class SpecguardConfigError(SpecguardException):
    """Base class for configuration-related errors."""

    pass


class ConfigFileError(SpecguardConfigError):
    """
    Error reading or parsing a configuration file.

    Raised for TOML parsing errors, permission errors, etc.
    """

    def __init__(
        self,
        message: str,
        *,
        file_path: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if file_path:
            ctx["file_path"] = file_path
        super().__init__(message, context=ctx, cause=cause)


class ConfigValidationError(SpecguardConfigError, ValueError):
    """
    Invalid configuration value.

    Inherits from ValueError so callers catching ValueError still see it.
    """

    recoverable: bool = False

    def __init__(
        self,
        message: str,
        *,
        key: str | None = None,
        value: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if key:
            ctx["key"] = key
        if value is not None:
            ctx["value"] = value
        super().__init__(message, context=ctx, cause=cause)


# =============================================================================
# Execution Errors
# =============================================================================


class SpecguardExecutionError(SpecguardException):
    """Base class for execution-related errors."""

    pass


class ProcessExecutionError(SpecguardExecutionError):
    """
    The local test command could not be executed.

    Raised when the shell cannot be spawned at all.
    """

    def __init__(
        self,
        message: str,
        *,
        command: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if command:
            ctx["command"] = command
        super().__init__(message, context=ctx, cause=cause)


class RemoteServiceError(SpecguardExecutionError):
    """The remote test service accepted the call but failed to answer it."""

    def __init__(
        self,
        message: str,
        *,
        port: int | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if port is not None:
            ctx["port"] = port
        super().__init__(message, context=ctx, cause=cause)


class RemoteServiceConnectionError(RemoteServiceError):
    """
    No remote test service is listening.

    Raised only when the connection cannot be established; the runner
    recovers by running the suite locally.
    """

    recoverable: bool = True
