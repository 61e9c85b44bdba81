"""
Click-based CLI for specguard.

This module provides the main Click command group and serves as the
entry point for the specguard CLI.

Usage:
    from specguard.cli import cli
    cli()  # Invokes the CLI
"""

from __future__ import annotations

from pathlib import Path

import click

from ..core.bootstrap import bootstrap
from ..core.exceptions import SpecguardConfigError
from .context import SpecguardContext

# Version is loaded from package metadata
try:
    from importlib.metadata import version

    __version__ = version("specguard")
except Exception:
    __version__ = "0.1.0"


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="specguard")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Config file to use instead of searching for .specguard.toml",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None) -> None:
    """specguard - run RSpec for a set of spec paths

    Builds the RSpec command line from the configured options, runs it
    through a remote test service when one is configured and falls back
    to a local process when the service is unreachable.

    \b
    Running:
        specguard run <paths>       Run the specs and report the outcome
        specguard command <paths>   Print the command line without running it

    \b
    Information:
        specguard formatters        Show the formatters read from .rspec
    """
    ctx.ensure_object(dict)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        ctx.exit(0)

    try:
        ctx.obj = SpecguardContext.create(config_path=config_path)
    except SpecguardConfigError as e:
        raise click.ClickException(str(e)) from e

    bootstrap(ctx.obj.settings)


def register_commands() -> None:
    """Register all CLI commands with the main group."""
    from .commands import COMMANDS

    for cmd in COMMANDS:
        cli.add_command(cmd)


# Register commands at module load time
register_commands()


__all__ = [
    "SpecguardContext",
    "__version__",
    "cli",
    "register_commands",
]
