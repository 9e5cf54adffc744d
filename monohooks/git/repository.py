"""
Git Repository Queries

The git collaborator used by the dispatcher: repository root, identity,
branch, and the files touched by the commit or push in progress.
"""

import os
from pathlib import Path
from typing import Optional

from monohooks.configs import get_logger
from monohooks.exceptions import (
    GitCommandError,
    NoCommitsError,
    NoStagedFilesError,
    NotAGitRepoError,
)
from monohooks.git.subprocess_utils import git_check, git_list_lines, git_list_paths, git_single_line
from monohooks.utils import is_a_directory, is_a_file

logger = get_logger("git.repository")


def find_root_dir(path: Optional[str] = None, timeout: float | None = None) -> str:
    """
    Get the root directory of the repository containing path.

    Args:
        path: Directory to start from (defaults to the current directory)
        timeout: Git command timeout

    Returns:
        Absolute path of the working tree root

    Raises:
        NotAGitRepoError: If path is not inside a git working tree
    """
    start = os.path.abspath(path or os.getcwd())
    if not is_a_directory(start):
        raise NotAGitRepoError(start)
    root = git_single_line(["rev-parse", "--show-toplevel"], start, timeout)
    if not root:
        raise NotAGitRepoError(start)
    return os.path.realpath(root)


class GitRepository:
    """Queries against one git working tree.

    Values are computed on demand; a dispatch run creates one instance and
    passes it down instead of caching anything process-wide.
    """

    def __init__(
        self,
        root_dir: str,
        timeout: float | None = None,
        diff_timeout: float | None = None,
    ):
        self.root_dir = root_dir
        self.timeout = timeout
        self.diff_timeout = diff_timeout

    @classmethod
    def discover(
        cls,
        path: Optional[str] = None,
        timeout: float | None = None,
        diff_timeout: float | None = None,
    ) -> "GitRepository":
        """Build a repository object for the working tree containing path."""
        return cls(find_root_dir(path, timeout), timeout=timeout, diff_timeout=diff_timeout)

    def get_root_dir(self) -> str:
        return self.root_dir

    def get_username(self) -> str:
        """Get the configured git user name (empty string if unset)."""
        return git_single_line(["config", "user.name"], self.root_dir, self.timeout) or ""

    def get_branch(self) -> str:
        """
        Get the current branch name.

        Raises:
            GitCommandError: If HEAD cannot be resolved
        """
        branch = git_single_line(["rev-parse", "--abbrev-ref", "HEAD"], self.root_dir, self.timeout)
        if not branch:
            raise GitCommandError(
                "Could not locate your current branch",
                command=["git", "rev-parse", "--abbrev-ref", "HEAD"],
            )
        return branch

    def check_upstream(self, remote: str, branch: str) -> bool:
        """Check if remote/branch exists as a remote-tracking ref."""
        return git_check(
            ["rev-parse", "--verify", "--quiet", f"refs/remotes/{remote}/{branch}"],
            self.root_dir,
            self.timeout,
        )

    def get_staged_files(self) -> list[str]:
        """
        List files staged for the commit being created.

        Returns:
            Paths relative to the repository root

        Raises:
            NoStagedFilesError: If nothing is staged
        """
        files = git_list_paths(["diff", "--cached", "--name-only"], self.root_dir, self.diff_timeout)
        if not files:
            raise NoStagedFilesError(self.root_dir)
        return files

    def get_committed_files(
        self,
        remote: str,
        branch: str,
        upstream: Optional[bool] = None,
    ) -> list[str]:
        """
        List files changed by the commits about to be pushed.

        With an upstream, compares HEAD against remote/branch. Without one,
        compares against the most recent commit shared with another branch or
        remote (the previous decorated commit in history).

        Args:
            remote: Remote name (e.g., "origin")
            branch: Local branch name
            upstream: Whether remote/branch exists (checked when None)

        Returns:
            Paths relative to the repository root

        Raises:
            NoCommitsError: If there is nothing to push
        """
        if upstream is None:
            upstream = self.check_upstream(remote, branch)

        if upstream:
            base = f"{remote}/{branch}"
            logger.debug(f"Comparing HEAD against upstream {base}")
            commits = git_list_lines(
                ["log", "--format=%H", f"{base}..HEAD"], self.root_dir, self.diff_timeout
            )
            if not commits:
                raise NoCommitsError(self.root_dir, branch)
            return git_list_paths(
                ["diff", "--name-only", base, "HEAD"], self.root_dir, self.diff_timeout
            )

        try:
            commits = git_list_lines(
                [
                    "log",
                    "--branches",
                    "--remotes",
                    "--simplify-by-decoration",
                    "--format=%H",
                ],
                self.root_dir,
                self.diff_timeout,
            )
        except GitCommandError:
            # Unborn branch
            commits = []
        if not commits:
            raise NoCommitsError(self.root_dir, branch)

        logger.debug(f"No upstream for {remote}/{branch}, {len(commits)} decorated commit(s)")
        if len(commits) == 1:
            # Nothing shared yet: every tracked file is new to the remote
            return git_list_paths(
                ["ls-tree", "-r", "--name-only", "HEAD"], self.root_dir, self.diff_timeout
            )
        return git_list_paths(
            ["diff", "--name-only", commits[1], "HEAD"], self.root_dir, self.diff_timeout
        )

    def get_commit_message(self) -> Optional[str]:
        """
        Get the last commit message.

        Reads .git/COMMIT_EDITMSG (comment lines dropped) and falls back to
        the message of HEAD.

        Returns:
            The message, or None in a repository without any commit message
        """
        git_dir = git_single_line(["rev-parse", "--git-dir"], self.root_dir, self.timeout)
        if git_dir:
            message_file = Path(self.root_dir) / git_dir / "COMMIT_EDITMSG"
            if is_a_file(message_file):
                return read_commit_message(message_file)

        message = git_single_line(["log", "-1", "--format=%B"], self.root_dir, self.timeout)
        return message if message else None


def read_commit_message(message_file: Path) -> str:
    """Read a commit message file, dropping git's comment lines."""
    lines = message_file.read_text(errors="replace").splitlines()
    return "\n".join(line for line in lines if not line.startswith("#")).strip()
