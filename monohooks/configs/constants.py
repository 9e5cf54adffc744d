"""
Monohooks Constants

Static configuration values that rarely change: hook events, manifest
defaults, discovery exclusions, and timeout configuration.
"""

from enum import Enum


# --- Hook Events ---


class HookEvent(str, Enum):
    """Git hook events monohooks dispatches tasks for."""

    POST_CHECKOUT = "post-checkout"
    POST_COMMIT = "post-commit"
    POST_MERGE = "post-merge"
    PRE_COMMIT = "pre-commit"
    PRE_PUSH = "pre-push"
    COMMIT_MSG = "commit-msg"


# Events whose tasks only run when a changed file matches the package restrictions
FILE_SENSITIVE_EVENTS = frozenset({HookEvent.PRE_COMMIT, HookEvent.PRE_PUSH})

# Events that validate the commit message against the package's commit-msg pattern
COMMIT_MESSAGE_EVENTS = frozenset(
    {HookEvent.PRE_COMMIT, HookEvent.PRE_PUSH, HookEvent.COMMIT_MSG}
)

# Events that carry a task list in the manifest (commit-msg holds a pattern instead)
TASK_EVENTS = (
    HookEvent.POST_CHECKOUT,
    HookEvent.POST_COMMIT,
    HookEvent.POST_MERGE,
    HookEvent.PRE_COMMIT,
    HookEvent.PRE_PUSH,
)

# --- Manifest ---

DEFAULT_MANIFEST_FILENAME = "package.json"
DEFAULT_CONFIG_KEY = "monohooks"

# --- Discovery ---
# Directory names never searched for packages

DEFAULT_EXCLUDE_DIRS = {
    # Version control
    ".git",
    ".svn",
    ".hg",
    # Dependencies
    "node_modules",
    "bower_components",
    ".venv",
    "venv",
    "__pycache__",
    ".tox",
    ".eggs",
    "*.egg-info",
}

# --- Timeout Configuration ---
# Centralized timeout values in seconds. Task commands never time out.

TIMEOUTS = {
    "git_command": 10,  # Default git command timeout
    "git_diff": 30,  # Git diff/log on large repos
}


def get_timeout(key: str, default: int | float | None = None) -> int | float:
    """
    Get a timeout value by key.

    Args:
        key: Timeout key from TIMEOUTS dict
        default: Default value if key not found

    Returns:
        Timeout value in seconds
    """
    if default is None:
        default = TIMEOUTS["git_command"]
    return TIMEOUTS.get(key, default)
