"""Tests for the trust command runner."""

import subprocess
from collections.abc import Generator
from unittest.mock import MagicMock, patch

import pytest

from localca.lib.commands import run_command
from localca.lib.errors import TrustCommandError


@pytest.fixture
def mock_run() -> Generator[MagicMock]:
    with patch("localca.lib.commands.subprocess.run") as mock:
        yield mock


def test_returns_result_on_success(mock_run: MagicMock) -> None:
    mock_run.return_value = subprocess.CompletedProcess(
        args=["security"], returncode=0, stdout="verified", stderr=""
    )

    result = run_command(["security", "verify-cert"], timeout=5.0)

    assert result.returncode == 0
    assert result.stdout == "verified"
    assert result.args == ("security", "verify-cert")


def test_runs_without_shell_and_with_timeout(mock_run: MagicMock) -> None:
    mock_run.return_value = subprocess.CompletedProcess(args=[], returncode=0, stdout="", stderr="")

    run_command(["openssl", "verify", "/ca.crt"], timeout=7.5)

    mock_run.assert_called_once_with(
        ("openssl", "verify", "/ca.crt"),
        capture_output=True,
        text=True,
        timeout=7.5,
        check=False,
    )


def test_non_zero_exit_raises_with_stderr(mock_run: MagicMock) -> None:
    mock_run.return_value = subprocess.CompletedProcess(
        args=[], returncode=2, stdout="", stderr="certificate not trusted\n"
    )

    with pytest.raises(TrustCommandError, match="status 2: certificate not trusted") as exc_info:
        run_command(["security", "verify-cert"], timeout=5.0)

    assert exc_info.value.stderr == "certificate not trusted\n"
    assert exc_info.value.command == ("security", "verify-cert")


def test_timeout_raises(mock_run: MagicMock) -> None:
    mock_run.side_effect = subprocess.TimeoutExpired(cmd="security", timeout=5.0)

    with pytest.raises(TrustCommandError, match="timed out"):
        run_command(["security", "add-trusted-cert"], timeout=5.0)


def test_missing_executable_raises(mock_run: MagicMock) -> None:
    mock_run.side_effect = FileNotFoundError("No such file or directory: 'certutil'")

    with pytest.raises(TrustCommandError, match="could not be started"):
        run_command(["certutil", "-verify"], timeout=5.0)
