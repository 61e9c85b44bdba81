"""
Native Click implementation of the run and command commands.

Usage: specguard run [options] PATHS...
       specguard command [options] PATHS...
"""

from typing import Any

import click

from ...core.exceptions import SpecguardConfigError
from ...services.execution import Runner
from ..context import SpecguardContext
from ..decorators import collect_overrides, runner_options


def _create_runner(ctx: SpecguardContext) -> Runner:
    try:
        return ctx.create_runner()
    except SpecguardConfigError as e:
        raise click.ClickException(str(e)) from e


@click.command("run")
@click.argument("paths", nargs=-1)
@runner_options
@click.pass_obj
def run(ctx: SpecguardContext, paths: tuple[str, ...], **options: Any) -> None:
    """Run RSpec for PATHS.

    Options given here override the configured ones for this run only.
    Exits with status 0 when the specs pass and 1 otherwise.

    \b
    Examples:
        specguard run spec
        specguard run spec/models --cli "--color --fail-fast"
        specguard run spec --env RAILS_ENV=test --no-bundler
    """
    if not paths:
        click.echo("Nothing to run: no paths given.", err=True)
        raise SystemExit(1)

    runner = _create_runner(ctx)
    verdict = runner.execute(list(paths), collect_overrides(options))

    if verdict is None or not verdict.success:
        raise SystemExit(1)


@click.command("command")
@click.argument("paths", nargs=-1, required=True)
@runner_options
@click.pass_obj
def command(ctx: SpecguardContext, paths: tuple[str, ...], **options: Any) -> None:
    """Print the command line that would run RSpec for PATHS locally."""
    runner = _create_runner(ctx)
    try:
        click.echo(runner.command(list(paths), collect_overrides(options)))
    except SpecguardConfigError as e:
        raise click.ClickException(str(e)) from e
