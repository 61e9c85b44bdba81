"""
Pydantic domain models for specguard.
"""

from .base import ImmutableModel, SpecguardBaseModel
from .config import ConfigBaseModel, LoggingConfig, LogLevel
from .options import DEFAULT_FAILURE_EXIT_CODE, DEPRECATED_OPTIONS, RunnerConfig
from .run import (
    ExecutionOutcome,
    ExecutionState,
    ExecutionStrategy,
    FormatterDirective,
    RunRequest,
    Verdict,
)

__all__ = [
    "DEFAULT_FAILURE_EXIT_CODE",
    "DEPRECATED_OPTIONS",
    "ConfigBaseModel",
    "ExecutionOutcome",
    "ExecutionState",
    "ExecutionStrategy",
    "FormatterDirective",
    "ImmutableModel",
    "LogLevel",
    "LoggingConfig",
    "RunRequest",
    "RunnerConfig",
    "SpecguardBaseModel",
    "Verdict",
]
