"""
Click decorators for specguard CLI commands.

Provides the runner option flags shared by ``run`` and ``command`` and
the conversion of the flags that were actually given into run overrides.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

import click

F = TypeVar("F", bound=Callable[..., Any])

_RUNNER_FLAGS = (
    "cli",
    "bundler",
    "binstubs",
    "rvm",
    "zeus",
    "turnip",
    "notification",
    "env",
    "message",
    "drb_port",
)


def _parse_env(ctx: click.Context, param: click.Parameter, values: tuple[str, ...]) -> dict[str, str]:
    """Turn repeated NAME=VALUE flags into a mapping, keeping their order."""
    env: dict[str, str] = {}
    for item in values:
        name, sep, value = item.partition("=")
        if not sep or not name:
            raise click.BadParameter(f"expected NAME=VALUE, got {item!r}", ctx=ctx, param=param)
        env[name] = value
    return env


def runner_options(f: F) -> F:
    """Decorator adding the runner option flags to a command.

    Every flag defaults to "not given" so that only explicit flags
    override the configured options.

    Usage:
        @click.command()
        @runner_options
        def run(paths, **options):
            overrides = collect_overrides(options)
    """
    decorators = [
        click.option("--cli", default=None, help="Extra arguments passed to RSpec verbatim"),
        click.option("--bundler/--no-bundler", default=None, help="Run through 'bundle exec'"),
        click.option("--binstubs", default=None, help="Use binstubs: 'true' for bin/, or a directory"),
        click.option("--rvm", multiple=True, help="Ruby version to run under (repeatable)"),
        click.option("--zeus/--no-zeus", default=None, help="Run through the zeus preloader"),
        click.option("--turnip/--no-turnip", default=None, help="Require turnip/rspec"),
        click.option(
            "--notification/--no-notification",
            default=None,
            help="Report results and notify when RSpec fails to run",
        ),
        click.option(
            "--env",
            "env",
            multiple=True,
            callback=_parse_env,
            metavar="NAME=VALUE",
            help="Environment variable for the run (repeatable)",
        ),
        click.option("--message", default=None, help="Message shown before running"),
        click.option("--drb-port", type=click.IntRange(1, 65535), default=None, help="Remote service port"),
    ]

    for decorator in reversed(decorators):
        f = decorator(f)
    return f


def collect_overrides(options: dict[str, Any]) -> dict[str, Any]:
    """Options that were given on the command line, ready to merge over the config."""
    overrides: dict[str, Any] = {}
    for key in _RUNNER_FLAGS:
        value = options.get(key)
        if value is None or value == () or value == {}:
            continue
        overrides[key] = list(value) if isinstance(value, tuple) else value
    return overrides
