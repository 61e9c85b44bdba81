"""
Native Click implementation of the formatters command.

Usage: specguard formatters
"""

import click

from ...services.execution import FormatterResolver
from ..context import SpecguardContext


@click.command("formatters")
@click.pass_obj
def formatters(ctx: SpecguardContext) -> None:
    """Show the formatter flags resolved from the project's .rspec file."""
    for flags in FormatterResolver(ctx.cwd).resolve():
        click.echo(flags)
