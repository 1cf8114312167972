"""Process invocation for OS trust-store commands."""

import subprocess
from collections.abc import Callable, Sequence

from .errors import TrustCommandError
from .models import CommandResult

CommandRunner = Callable[[Sequence[str], float], CommandResult]


def run_command(args: Sequence[str], timeout: float) -> CommandResult:
    """Run a trust command with captured output and a hard timeout.

    Args:
        args: Program and arguments, never passed through a shell
        timeout: Seconds before the process is killed

    Returns:
        CommandResult of a zero-exit run

    Raises:
        TrustCommandError: On non-zero exit, timeout, or missing executable
    """
    command = tuple(args)
    try:
        completed = subprocess.run(
            command,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as e:
        raise TrustCommandError(
            f"{command[0]} timed out after {timeout}s", args=command
        ) from e
    except OSError as e:
        raise TrustCommandError(f"{command[0]} could not be started: {e}", args=command) from e

    result = CommandResult(
        args=command,
        returncode=completed.returncode,
        stdout=completed.stdout or "",
        stderr=completed.stderr or "",
    )
    if result.returncode != 0:
        detail = result.stderr.strip() or result.stdout.strip()
        raise TrustCommandError(
            f"{command[0]} exited with status {result.returncode}: {detail}",
            args=command,
            stderr=result.stderr,
        )
    return result
