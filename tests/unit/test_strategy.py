"""
Unit tests for strategy selection, remote port resolution and dispatch.
"""

from unittest.mock import MagicMock, patch

import pytest

from specguard.core.exceptions import (
    ProcessExecutionError,
    RemoteServiceConnectionError,
    RemoteServiceError,
)
from specguard.core.models.options import RunnerConfig
from specguard.core.models.run import ExecutionState, ExecutionStrategy
from specguard.services.execution.remote import DEFAULT_DRB_PORT
from specguard.services.execution.strategy import (
    StrategyExecutor,
    remote_arguments,
    resolve_drb_port,
    run_shell,
    select_strategy,
)


class TestSelectStrategy:
    """Test strategy selection."""

    def test_local_by_default(self):
        assert select_strategy(RunnerConfig()) is ExecutionStrategy.LOCAL

    def test_remote_with_drb(self):
        assert select_strategy(RunnerConfig(cli="--color --drb")) is ExecutionStrategy.REMOTE


class TestResolveDrbPort:
    """Test port resolution priority."""

    def test_default_port(self):
        assert resolve_drb_port(RunnerConfig(cli="--drb"), environ={}) == DEFAULT_DRB_PORT

    def test_environment_variable(self):
        port = resolve_drb_port(RunnerConfig(cli="--drb"), environ={"RSPEC_DRB": "4321"})

        assert port == 4321

    def test_environment_beats_option(self):
        options = RunnerConfig(cli="--drb", drb_port=1111)

        assert resolve_drb_port(options, environ={"RSPEC_DRB": "2222"}) == 2222

    def test_option_used_without_environment(self):
        assert resolve_drb_port(RunnerConfig(cli="--drb", drb_port=5555), environ={}) == 5555

    def test_cli_beats_everything(self):
        options = RunnerConfig(cli="--drb --drb-port 1234", drb_port=5555)

        assert resolve_drb_port(options, environ={"RSPEC_DRB": "4321"}) == 1234

    def test_cli_equals_form(self):
        assert resolve_drb_port(RunnerConfig(cli="--drb --drb-port=1234"), environ={}) == 1234

    def test_invalid_values_are_skipped(self):
        options = RunnerConfig(cli="--drb --drb-port nope")

        assert resolve_drb_port(options, environ={"RSPEC_DRB": "99999"}) == DEFAULT_DRB_PORT

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("RSPEC_DRB", "2222")

        assert resolve_drb_port(RunnerConfig(cli="--drb")) == 2222


class TestRemoteArguments:
    """Test the arguments forwarded to the remote service."""

    def test_drb_is_removed(self):
        assert remote_arguments(RunnerConfig(cli="--color --drb --fail-fast")) == ["--color", "--fail-fast"]

    def test_port_is_forwarded_first(self):
        options = RunnerConfig(cli="--color --drb --drb-port 1234 --fail-fast")

        assert remote_arguments(options) == ["--drb-port", "1234", "--color", "--fail-fast"]

    def test_option_port_is_not_forwarded(self):
        assert remote_arguments(RunnerConfig(cli="--drb", drb_port=5555)) == []


class TestRunShell:
    """Test the shell boundary."""

    def test_returns_exit_status(self):
        with patch("specguard.services.execution.strategy.subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(returncode=3)

            assert run_shell("rspec spec") == 3

        mock_run.assert_called_once_with("rspec spec", shell=True, check=False)

    def test_spawn_failure_raises(self):
        with patch("specguard.services.execution.strategy.subprocess.run", side_effect=OSError("boom")):
            with pytest.raises(ProcessExecutionError) as exc_info:
                run_shell("rspec spec")

        assert exc_info.value.context == {"command": "rspec spec"}


class TestStrategyExecutor:
    """Test dispatch and the remote-to-local fallback."""

    @pytest.fixture
    def builder(self):
        builder = MagicMock()
        builder.build.return_value = "rspec spec"
        return builder

    @pytest.fixture
    def shell(self):
        return MagicMock(return_value=0)

    @pytest.fixture
    def service(self):
        service = MagicMock()
        service.run.return_value = 0
        return service

    @pytest.fixture
    def factory(self, service):
        return MagicMock(return_value=service)

    @pytest.fixture
    def executor(self, builder, shell, factory):
        return StrategyExecutor(builder, shell=shell, remote_factory=factory, logger=MagicMock())

    def test_local_run(self, executor, builder, shell, factory):
        shell.return_value = 2

        result = executor.execute(["spec"], RunnerConfig())

        assert result == (ExecutionState.LOCAL_SUBPROCESS, 2)
        builder.build.assert_called_once()
        shell.assert_called_once_with("rspec spec")
        factory.assert_not_called()

    def test_remote_run(self, executor, shell, factory, service):
        service.run.return_value = 1

        result = executor.execute(["spec/a_spec.rb"], RunnerConfig(cli="--drb --color"))

        assert result == (ExecutionState.REMOTE_SERVICE, 1)
        factory.assert_called_once_with(DEFAULT_DRB_PORT)
        service.run.assert_called_once_with(["spec/a_spec.rb"], ["--color"])
        shell.assert_not_called()

    def test_remote_uses_resolved_port(self, executor, factory):
        executor.execute(["spec"], RunnerConfig(cli="--drb --drb-port 4000"))

        factory.assert_called_once_with(4000)

    def test_connection_error_falls_back_to_local(self, executor, shell, service):
        service.run.side_effect = RemoteServiceConnectionError("refused", port=DEFAULT_DRB_PORT)

        result = executor.execute(["spec"], RunnerConfig(cli="--drb"))

        assert result == (ExecutionState.FALLBACK_TO_LOCAL, 0)
        shell.assert_called_once_with("rspec spec")

    def test_remote_failure_is_not_retried_locally(self, executor, shell, service):
        service.run.side_effect = RemoteServiceError("fault", port=DEFAULT_DRB_PORT)

        result = executor.execute(["spec"], RunnerConfig(cli="--drb"))

        assert result == (ExecutionState.REMOTE_SERVICE, None)
        shell.assert_not_called()

    @pytest.mark.parametrize(
        "error",
        [ConnectionResetError(), ConnectionAbortedError(), OSError("unreachable")],
    )
    def test_transport_error_falls_back_to_local(self, executor, shell, service, error):
        service.run.side_effect = error

        result = executor.execute(["spec"], RunnerConfig(cli="--drb"))

        assert result == (ExecutionState.FALLBACK_TO_LOCAL, 0)
        shell.assert_called_once_with("rspec spec")

    def test_unexpected_client_error_is_contained(self, executor, shell, service):
        service.run.side_effect = RuntimeError("bad client")

        result = executor.execute(["spec"], RunnerConfig(cli="--drb"))

        assert result == (ExecutionState.REMOTE_SERVICE, None)
        shell.assert_not_called()

    def test_non_integer_answer_has_no_exit_status(self, executor, service):
        service.run.return_value = "0"

        result = executor.execute(["spec"], RunnerConfig(cli="--drb"))

        assert result == (ExecutionState.REMOTE_SERVICE, None)

    def test_spawn_failure_has_no_exit_status(self, executor, shell):
        shell.side_effect = ProcessExecutionError("cannot spawn", command="rspec spec")

        result = executor.execute(["spec"], RunnerConfig())

        assert result == (ExecutionState.LOCAL_SUBPROCESS, None)
