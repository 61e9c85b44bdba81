"""
Runner option models.

RunnerConfig holds the options a Runner is constructed with. The same model
is used for the effective options of a single run after overrides have been
merged in.
"""

from __future__ import annotations

import re
from typing import Annotated, Any

from pydantic import ConfigDict, Field, field_validator

from .base import ImmutableModel

DEFAULT_FAILURE_EXIT_CODE = 2

# Deprecated option -> the RSpec flag that replaces it
DEPRECATED_OPTIONS: dict[str, str] = {
    "color": "--color",
    "drb": "--drb",
    "fail_fast": "--fail-fast",
    "formatter": "--format",
}

_FORMATTER_FLAG = re.compile(r"^(-f|--format)")
_TRUE_WORDS = {"true", "yes", "on", "1"}
_FALSE_WORDS = {"false", "no", "off", "0", ""}


class RunnerConfig(ImmutableModel):
    """Options controlling how the test command is built and executed.

    Unknown keys are accepted and carried along untouched, so callers can
    pass options meant for other collaborators through the same mapping.
    """

    model_config = ConfigDict(
        frozen=True,
        strict=False,  # Allow coercion from TOML and CLI values
        extra="allow",
        populate_by_name=True,
        revalidate_instances="never",
    )

    cli: str | None = None
    bundler: bool = True
    binstubs: bool | str = False
    rvm: list[str] = Field(default_factory=list)
    zeus: bool = False
    turnip: bool = False
    notification: bool = True
    env: dict[str, str] = Field(default_factory=dict)
    message: str | None = None
    drb_port: Annotated[int, Field(ge=1, le=65535)] | None = None
    failure_exit_code: Annotated[int, Field(ge=1, le=255)] = DEFAULT_FAILURE_EXIT_CODE

    @field_validator("rvm", mode="before")
    @classmethod
    def split_rvm(cls, v: Any) -> Any:
        """Accept a comma separated string of versions."""
        if v is None:
            return []
        if isinstance(v, str):
            return [x.strip() for x in v.split(",") if x.strip()]
        return v

    @field_validator("binstubs", mode="before")
    @classmethod
    def normalize_binstubs(cls, v: Any) -> Any:
        """Treat boolean-looking strings (from env vars or the CLI) as flags."""
        if v is None:
            return False
        if isinstance(v, str):
            lowered = v.strip().lower()
            if lowered in _TRUE_WORDS:
                return True
            if lowered in _FALSE_WORDS:
                return False
        return v

    @field_validator("env", mode="before")
    @classmethod
    def stringify_env(cls, v: Any) -> Any:
        """Environment values end up in a shell line, so store them as text."""
        if v is None:
            return {}
        if isinstance(v, dict):
            return {str(k): str(val) for k, val in v.items()}
        return v

    @property
    def cli_tokens(self) -> list[str]:
        """The ``cli`` string split on whitespace."""
        return self.cli.split() if self.cli else []

    @property
    def declares_formatter(self) -> bool:
        """Whether ``cli`` already picks a formatter (``-f``, ``-fX``, ``--format[=X]``)."""
        return any(_FORMATTER_FLAG.match(token) for token in self.cli_tokens)

    @property
    def uses_drb(self) -> bool:
        """Whether ``cli`` asks for the remote test service."""
        return "--drb" in self.cli_tokens

    @property
    def binstubs_dir(self) -> str | None:
        """Directory holding binstubs, or None when binstubs are disabled."""
        if isinstance(self.binstubs, str):
            return self.binstubs.rstrip("/") or None
        return "bin" if self.binstubs else None

    def deprecated_options(self) -> list[str]:
        """Deprecated keys supplied to this config, in a stable order."""
        extra = self.model_extra or {}
        return [key for key in DEPRECATED_OPTIONS if key in extra]
