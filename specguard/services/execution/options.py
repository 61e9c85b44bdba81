"""
Option merging for a single run.

Per-run overrides replace the runner's stored values key by key. Nothing is
combined: an overriding ``cli`` string replaces the stored one outright.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from ...core.exceptions import ConfigValidationError
from ...core.models.options import RunnerConfig


def merge_options(base: RunnerConfig, override: Mapping[str, Any] | None = None) -> RunnerConfig:
    """
    Merge per-run overrides over the runner's configuration.

    Args:
        base: The runner's configuration
        override: Options for this run only; absent keys keep the base value

    Returns:
        The effective options for the run (``base`` itself when there is
        nothing to override)

    Raises:
        ConfigValidationError: If an override has an invalid value
    """
    if not override:
        return base

    data = base.model_dump()
    data.update(override)
    try:
        return RunnerConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError("Invalid run option", context=dict(override), cause=e) from e
