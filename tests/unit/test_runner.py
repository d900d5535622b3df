"""Tests for CommandRunner."""
import subprocess
from unittest.mock import MagicMock, patch

import pytest
from loguru import logger

from gigalixir_action.errors import CommandError
from gigalixir_action.runner import CommandRunner


@pytest.fixture
def log_lines():
    lines = []
    handler_id = logger.add(lambda message: lines.append(str(message)), format="{message}", level="DEBUG")
    yield lines
    logger.remove(handler_id)


def _completed(returncode=0, stdout="", stderr=""):
    result = MagicMock()
    result.returncode = returncode
    result.stdout = stdout
    result.stderr = stderr
    return result


class TestRun:
    """Test running commands."""

    @patch("gigalixir_action.runner.subprocess.run")
    def test_returns_stdout(self, mock_run):
        """Test that stdout is returned."""
        mock_run.return_value = _completed(stdout='[{"unique_name": "a"}]')

        output = CommandRunner(cwd="/repo").run(["gigalixir", "apps"])

        assert output == '[{"unique_name": "a"}]'
        mock_run.assert_called_once_with(
            ["gigalixir", "apps"],
            cwd="/repo",
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            check=False,
        )

    @patch("gigalixir_action.runner.subprocess.run")
    def test_non_zero_exit_raises(self, mock_run):
        """Test that a non-zero exit raises CommandError."""
        mock_run.return_value = _completed(returncode=2, stderr="boom")

        with pytest.raises(CommandError) as exc_info:
            CommandRunner().run(["gigalixir", "ps:migrate", "-a", "app"])

        assert str(exc_info.value) == "The process 'gigalixir' failed with exit code 2"
        assert exc_info.value.returncode == 2
        assert exc_info.value.stderr == "boom"

    @patch("gigalixir_action.runner.subprocess.run")
    def test_secrets_masked_in_log(self, mock_run, log_lines):
        """Test that secrets never reach the log."""
        mock_run.return_value = _completed(stdout="welcome hunter2")
        runner = CommandRunner()
        runner.add_secret("hunter2")

        runner.run(["gigalixir", "login", "-p", "hunter2"])

        joined = "\n".join(log_lines)
        assert "hunter2" not in joined
        assert "$ gigalixir login -p ***" in joined
        # the real value still reaches the process
        assert mock_run.call_args[0][0][-1] == "hunter2"

    @patch("gigalixir_action.runner.subprocess.run")
    def test_secrets_masked_in_error(self, mock_run):
        """Test that secrets are masked in CommandError."""
        mock_run.return_value = _completed(returncode=1, stderr="bad password hunter2")
        runner = CommandRunner(secrets=["hunter2"])

        with pytest.raises(CommandError) as exc_info:
            runner.run(["gigalixir", "login", "-p", "hunter2"])

        assert "hunter2" not in " ".join(exc_info.value.command)
        assert "hunter2" not in exc_info.value.stderr


class TestSecrets:
    """Test secret registration."""

    def test_empty_secret_ignored(self):
        """Test that empty secrets are not registered."""
        runner = CommandRunner()
        runner.add_secret("")
        assert runner.secrets == set()

    def test_multiline_secret_registers_lines(self):
        """Test that each line of a multi-line secret is registered."""
        runner = CommandRunner()
        runner.add_secret("line-one\nline-two")
        assert {"line-one\nline-two", "line-one", "line-two"} <= runner.secrets
