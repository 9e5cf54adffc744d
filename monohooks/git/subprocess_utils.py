"""
Git Subprocess Utilities

Common patterns for executing git commands with consistent error handling.
"""

import subprocess
from typing import Optional

from monohooks.configs import get_logger, get_timeout
from monohooks.exceptions import GitCommandError

logger = get_logger("git.subprocess")

__all__ = [
    "GitCommandError",
    "run_git_command",
    "git_check",
    "git_single_line",
    "git_list_lines",
    "git_list_paths",
]

# Default timeout for git commands
GIT_TIMEOUT = get_timeout("git_command")


def run_git_command(
    args: list[str],
    cwd: str,
    timeout: float | None = None,
) -> tuple[int, str, str]:
    """
    Low-level wrapper around subprocess.run for git commands.

    Args:
        args: Git command arguments (without 'git' prefix)
        cwd: Working directory
        timeout: Timeout in seconds (defaults to config value)

    Returns:
        Tuple of (returncode, stdout, stderr)

    Raises:
        GitCommandError: On FileNotFoundError or TimeoutExpired
    """
    if timeout is None:
        timeout = GIT_TIMEOUT
    logger.debug(f"git {' '.join(args)} (cwd={cwd})")
    try:
        result = subprocess.run(
            ["git"] + args,
            cwd=cwd,
            capture_output=True,
            text=True,
            # Paths come back as raw UTF-8 once quoting is off
            encoding="utf-8",
            errors="surrogateescape",
            timeout=timeout,
        )
        return result.returncode, result.stdout, result.stderr
    except FileNotFoundError:
        raise GitCommandError("git not found in PATH", command=["git"] + args)
    except subprocess.TimeoutExpired:
        raise GitCommandError(
            f"git command timed out after {timeout}s", command=["git"] + args
        )


def git_check(
    args: list[str],
    cwd: str,
    timeout: float | None = None,
) -> bool:
    """
    Execute git command and check if successful (returncode == 0).

    Used for: upstream detection, validation checks

    Returns:
        True if returncode is 0, False otherwise
    """
    try:
        returncode, _, _ = run_git_command(args, cwd, timeout)
        return returncode == 0
    except GitCommandError:
        return False


def git_single_line(
    args: list[str],
    cwd: str,
    timeout: float | None = None,
) -> Optional[str]:
    """
    Execute git command and extract single string value from stdout.

    Used for: repo root, current branch, user name

    Returns:
        Stripped stdout or None if command fails
    """
    try:
        returncode, stdout, _ = run_git_command(args, cwd, timeout)
        if returncode == 0:
            return stdout.strip()
    except GitCommandError as e:
        logger.debug(f"git {' '.join(args)} failed: {e}")
    return None


def _checked_stdout(args: list[str], cwd: str, timeout: float | None) -> str:
    returncode, stdout, stderr = run_git_command(args, cwd, timeout)
    if returncode != 0:
        raise GitCommandError(
            f"git {args[0]} failed",
            command=["git"] + args,
            returncode=returncode,
            stderr=stderr.strip(),
        )
    return stdout


def git_list_lines(
    args: list[str],
    cwd: str,
    timeout: float | None = None,
) -> list[str]:
    """
    Execute git command and return its non-empty output lines.

    Used for: commit lists

    Raises:
        GitCommandError: If git exits non-zero
    """
    stdout = _checked_stdout(args, cwd, timeout)
    return [line.strip() for line in stdout.splitlines() if line.strip()]


def git_list_paths(
    args: list[str],
    cwd: str,
    timeout: float | None = None,
) -> list[str]:
    """
    Execute a git path listing with -z and return the paths verbatim.

    NUL-separated output is never C-quoted, so non-ASCII names and names
    with spaces or quotes arrive exactly as they are in the tree.

    Used for: staged files, diffs, tree listings

    Raises:
        GitCommandError: If git exits non-zero
    """
    stdout = _checked_stdout(args[:1] + ["-z"] + args[1:], cwd, timeout)
    return [path for path in stdout.split("\0") if path]
