"""
Unit tests for result classification.
"""

import pytest

from specguard.core.models.options import RunnerConfig
from specguard.core.models.run import ExecutionOutcome, ExecutionState
from specguard.services.execution.classifier import FAILURE_NOTIFICATION, ResultClassifier

LOCAL = ExecutionState.LOCAL_SUBPROCESS
FALLBACK = ExecutionState.FALLBACK_TO_LOCAL
REMOTE = ExecutionState.REMOTE_SERVICE


class TestResultClassifier:
    """Test the outcome table."""

    @pytest.fixture
    def classifier(self):
        return ResultClassifier()

    @pytest.mark.parametrize("state", [LOCAL, FALLBACK, REMOTE])
    def test_zero_is_success(self, classifier, state):
        verdict = classifier.classify(0, state, RunnerConfig())

        assert verdict.outcome is ExecutionOutcome.SUCCESS
        assert verdict.success is True
        assert verdict.notifies is False
        assert verdict.state is state

    @pytest.mark.parametrize("state", [LOCAL, FALLBACK])
    def test_failure_exit_code_is_test_failure(self, classifier, state):
        verdict = classifier.classify(2, state, RunnerConfig())

        assert verdict.outcome is ExecutionOutcome.TEST_FAILURE
        assert verdict.success is False
        assert verdict.notifies is False

    @pytest.mark.parametrize("exit_code", [1, 127, -9, None])
    def test_other_local_status_is_execution_error(self, classifier, exit_code):
        verdict = classifier.classify(exit_code, LOCAL, RunnerConfig())

        assert verdict.outcome is ExecutionOutcome.EXECUTION_ERROR
        assert verdict.notifies is True
        assert verdict.exit_code == exit_code

    def test_execution_error_without_notifications(self, classifier):
        verdict = classifier.classify(1, LOCAL, RunnerConfig(notification=False))

        assert verdict.outcome is ExecutionOutcome.EXECUTION_ERROR
        assert verdict.notifies is False

    def test_custom_failure_exit_code(self, classifier):
        options = RunnerConfig(failure_exit_code=42)

        assert classifier.classify(42, LOCAL, options).outcome is ExecutionOutcome.TEST_FAILURE
        assert classifier.classify(2, LOCAL, options).outcome is ExecutionOutcome.EXECUTION_ERROR

    @pytest.mark.parametrize("exit_code", [1, 2, 127, None])
    def test_remote_failures_never_notify(self, classifier, exit_code):
        verdict = classifier.classify(exit_code, REMOTE, RunnerConfig())

        assert verdict.outcome is ExecutionOutcome.TEST_FAILURE
        assert verdict.notifies is False

    def test_failure_notification_payload(self):
        assert FAILURE_NOTIFICATION == ("Failed", "RSpec results", "failed", 2)
