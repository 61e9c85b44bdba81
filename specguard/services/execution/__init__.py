"""Execution services: option merging, command building, dispatch and classification."""

from .classifier import FAILURE_NOTIFICATION, Notification, ResultClassifier
from .command import CommandBuilder, results_formatter_path
from .formatters import FormatterResolver, resolve_formatters, scan_directives
from .options import merge_options
from .remote import DEFAULT_DRB_PORT, XmlRpcRunService
from .runner import Runner, deprecation_message
from .strategy import (
    StrategyExecutor,
    remote_arguments,
    resolve_drb_port,
    run_shell,
    select_strategy,
)

__all__ = [
    "DEFAULT_DRB_PORT",
    "FAILURE_NOTIFICATION",
    "CommandBuilder",
    "FormatterResolver",
    "Notification",
    "ResultClassifier",
    "Runner",
    "StrategyExecutor",
    "XmlRpcRunService",
    "deprecation_message",
    "merge_options",
    "remote_arguments",
    "resolve_drb_port",
    "resolve_formatters",
    "results_formatter_path",
    "run_shell",
    "scan_directives",
    "select_strategy",
]
