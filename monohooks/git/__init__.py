"""
Monohooks Git Integration

Repository discovery and the queries hook dispatch needs from git.
"""

from monohooks.git.repository import GitRepository, find_root_dir, read_commit_message
from monohooks.git.subprocess_utils import (
    git_check,
    git_list_lines,
    git_list_paths,
    git_single_line,
    run_git_command,
)

__all__ = [
    "GitRepository",
    "find_root_dir",
    "read_commit_message",
    "run_git_command",
    "git_check",
    "git_single_line",
    "git_list_lines",
    "git_list_paths",
]
