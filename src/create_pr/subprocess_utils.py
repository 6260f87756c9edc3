"""Subprocess helpers shared by the git and gh gateways.

Mutating commands run through `run_subprocess_with_context`, which logs the
command line and converts failures into RuntimeError messages that name the
operation being attempted. Read-only queries call subprocess.run directly.
"""

import logging
import os
import subprocess
from pathlib import Path

logger = logging.getLogger(__name__)


def copied_env_for_git_subprocess() -> dict[str, str]:
    """Copy the current environment with interactive git prompts disabled."""
    env = os.environ.copy()
    env["GIT_TERMINAL_PROMPT"] = "0"
    return env


def run_subprocess_with_context(
    *,
    cmd: list[str],
    operation_context: str,
    cwd: Path,
    check: bool = True,
    env: dict[str, str] | None = None,
) -> subprocess.CompletedProcess[str]:
    """Run a command, capturing output, and raise with context on failure.

    Args:
        cmd: Command and arguments
        operation_context: Human-readable description used in error messages,
            e.g. "push branch 'feature' to remote 'origin'"
        cwd: Working directory for the command
        check: If True, raise RuntimeError when the command exits non-zero
        env: Environment for the child process (inherits when None)

    Returns:
        The completed process with text stdout/stderr

    Raises:
        RuntimeError: If the executable is missing, or if check is True and the
            command exits non-zero
    """
    logger.debug("Running: %s (cwd=%s)", " ".join(cmd), cwd)
    try:
        result = subprocess.run(
            cmd,
            cwd=cwd,
            capture_output=True,
            text=True,
            check=False,
            env=env,
        )
    except FileNotFoundError as e:
        raise RuntimeError(f"Failed to {operation_context}: '{cmd[0]}' is not installed") from e

    logger.debug("Exit code %d: %s", result.returncode, " ".join(cmd))

    if check and result.returncode != 0:
        detail = result.stderr.strip() or result.stdout.strip()
        message = f"Failed to {operation_context}"
        if detail:
            message = f"{message}\n{detail}"
        raise RuntimeError(message)

    return result


def execute_gh_command(cmd: list[str], cwd: Path) -> str:
    """Run a gh command and return its stripped stdout.

    Raises:
        RuntimeError: If gh is missing or exits non-zero
    """
    result = run_subprocess_with_context(
        cmd=cmd,
        operation_context=f"execute gh command '{' '.join(cmd[1:3])}'",
        cwd=cwd,
    )
    return result.stdout.strip()
