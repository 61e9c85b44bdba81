"""
Classification of finished runs.

Locally, the configured failure exit code means "specs ran and some failed";
any other non-zero status means RSpec itself could not run, which is the
only case worth a notification. Remote results carry no such distinction.
"""

from typing import NamedTuple

from ...core.models.options import RunnerConfig
from ...core.models.run import ExecutionOutcome, ExecutionState, Verdict


class Notification(NamedTuple):
    """Payload handed to the notifier."""

    message: str
    title: str
    image: str
    priority: int


FAILURE_NOTIFICATION = Notification("Failed", "RSpec results", "failed", 2)

_LOCAL_STATES = (ExecutionState.LOCAL_SUBPROCESS, ExecutionState.FALLBACK_TO_LOCAL)


class ResultClassifier:
    """Maps an exit status to a verdict."""

    def classify(
        self,
        exit_code: int | None,
        state: ExecutionState,
        options: RunnerConfig,
    ) -> Verdict:
        """
        Classify a finished run.

        Args:
            exit_code: Exit status, None when the command never produced one
            state: Final execution state of the run
            options: Effective options of the run

        Returns:
            Verdict with the outcome and whether to notify
        """
        if exit_code == 0:
            outcome = ExecutionOutcome.SUCCESS
        elif state in _LOCAL_STATES and exit_code != options.failure_exit_code:
            outcome = ExecutionOutcome.EXECUTION_ERROR
        else:
            outcome = ExecutionOutcome.TEST_FAILURE

        notifies = outcome is ExecutionOutcome.EXECUTION_ERROR and options.notification
        return Verdict(outcome=outcome, notifies=notifies, exit_code=exit_code, state=state)
