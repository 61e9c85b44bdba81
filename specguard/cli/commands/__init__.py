"""
Click command implementations for specguard CLI.

Each module holds the commands it is named after. Commands are
registered with the main CLI group via register_commands() in
specguard.cli.
"""

from .formatters import formatters
from .run import command, run

COMMANDS = [
    command,
    formatters,
    run,
]

__all__ = [
    "COMMANDS",
    "command",
    "formatters",
    "run",
]
