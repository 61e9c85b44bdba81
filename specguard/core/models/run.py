"""
Run domain models.

Provides the values created for a single run: the request, the formatter
directives parsed from the project options file and the classified verdict.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any

from pydantic import ConfigDict, Field, computed_field

from .base import ImmutableModel


class ExecutionStrategy(str, Enum):
    """Where the suite runs."""

    LOCAL = "local"
    REMOTE = "remote"


class ExecutionState(str, Enum):
    """How far a run got through the strategy state machine."""

    NOT_STARTED = "not_started"
    LOCAL_SUBPROCESS = "local_subprocess"
    REMOTE_SERVICE = "remote_service"
    FALLBACK_TO_LOCAL = "fallback_to_local"


class ExecutionOutcome(str, Enum):
    """Classified result of a run."""

    SUCCESS = "success"
    TEST_FAILURE = "test_failure"
    EXECUTION_ERROR = "execution_error"


class RunRequest(ImmutableModel):
    """Target paths for one run plus the options overriding the runner's config."""

    paths: Annotated[list[str], Field(min_length=1)]
    overrides: dict[str, Any] = Field(default_factory=dict)


class FormatterDirective(ImmutableModel):
    """A formatter declared in the project options file."""

    name: Annotated[str, Field(min_length=1)]
    output: str | None = None

    def render(self) -> str:
        """Render as RSpec flags, e.g. ``-f html -o doc/specs.html``."""
        if self.output:
            return f"-f {self.name} -o {self.output}"
        return f"-f {self.name}"


class Verdict(ImmutableModel):
    """Classified outcome of a run."""

    model_config = ConfigDict(use_enum_values=False)

    outcome: ExecutionOutcome
    notifies: bool = False
    exit_code: int | None = None
    state: ExecutionState = ExecutionState.NOT_STARTED

    @computed_field  # type: ignore[prop-decorator]
    @property
    def success(self) -> bool:
        """Check if the run passed."""
        return self.outcome is ExecutionOutcome.SUCCESS
