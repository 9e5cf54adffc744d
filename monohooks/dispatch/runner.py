"""
Task Runner

Runs one task command through the shell inside a package directory.
"""

import subprocess
import sys

from monohooks.configs import get_logger
from monohooks.exceptions import TaskExecutionError

logger = get_logger("runner")


def run_task(command: str, cwd: str) -> int:
    """
    Run a shell command in a directory and wait for it.

    The directory is handed to the child process; the hook's own working
    directory never changes. Output goes straight to the developer's terminal
    and there is no timeout.

    Args:
        command: Shell command line
        cwd: Directory to run in

    Returns:
        The command's exit code (non-zero means failure)

    Raises:
        TaskExecutionError: If the shell cannot be started
    """
    # Keep our own buffered output ahead of the child's
    sys.stdout.flush()
    sys.stderr.flush()

    try:
        completed = subprocess.run(command, shell=True, cwd=cwd)
    except OSError as e:
        raise TaskExecutionError(command, cwd, e)

    logger.debug(f'"{command}" exited with {completed.returncode}')
    return completed.returncode
