"""Tests for aliasx.runner: running resolved commands through the shell."""

from __future__ import annotations

import subprocess
from unittest.mock import patch

import pytest

from aliasx.config import Config
from aliasx.errors import CommandFailed
from aliasx.runner import run_command, shell_argv


def _done(code: int) -> subprocess.CompletedProcess:
    return subprocess.CompletedProcess(["/bin/sh"], code)


def test_shell_argv():
    assert shell_argv("echo hi", "/bin/zsh") == ["/bin/zsh", "-c", "echo hi"]


class TestRunCommand:
    def test_success(self):
        with patch("aliasx.runner.subprocess.run", return_value=_done(0)) as mock_run:
            assert run_command("echo hi", Config(shell="/bin/sh")) == 0
        mock_run.assert_called_once_with(["/bin/sh", "-c", "echo hi"], check=False)

    def test_non_zero_exit(self):
        with patch("aliasx.runner.subprocess.run", return_value=_done(3)):
            with pytest.raises(CommandFailed) as exc_info:
                run_command("false", Config(shell="/bin/sh"))
        assert exc_info.value.exit_code == 3
        assert not exc_info.value.interrupted

    def test_killed_by_signal(self):
        with patch("aliasx.runner.subprocess.run", return_value=_done(-15)):
            with pytest.raises(CommandFailed) as exc_info:
                run_command("sleep 9", Config(shell="/bin/sh"))
        assert exc_info.value.interrupted

    def test_interrupted_while_waiting(self):
        with patch("aliasx.runner.subprocess.run", side_effect=KeyboardInterrupt):
            with pytest.raises(CommandFailed) as exc_info:
                run_command("sleep 9", Config(shell="/bin/sh"))
        assert exc_info.value.interrupted

    def test_missing_shell(self):
        with patch("aliasx.runner.subprocess.run", side_effect=FileNotFoundError):
            with pytest.raises(CommandFailed) as exc_info:
                run_command("echo", Config(shell="/nope/sh"))
        assert exc_info.value.exit_code == 127


@pytest.mark.e2e
class TestRealShell:
    def test_exit_code_propagates(self):
        with pytest.raises(CommandFailed) as exc_info:
            run_command("exit 4", Config(shell="/bin/sh"))
        assert exc_info.value.exit_code == 4

    def test_shell_features_available(self, tmp_path):
        out = tmp_path / "out.txt"
        assert run_command(f"echo a | tr a b > {out}", Config(shell="/bin/sh")) == 0
        assert out.read_text().strip() == "b"
