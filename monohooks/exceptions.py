"""
Monohooks Exception Hierarchy

Centralized exception classes for structured error handling across the codebase.
All monohooks-specific exceptions inherit from MonohooksError.

Soft errors (NoConfigError, NoStagedFilesError, NoCommitsError) are logged and
the run moves on to the next package. Everything else stops the hook.

Usage:
    from monohooks.exceptions import MonohooksError, NoConfigError

    try:
        config = resolve_config(package, key)
    except NoConfigError as e:
        logger.info(str(e))
"""


class MonohooksError(Exception):
    """Base exception for all monohooks errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} ({self.details})"
        return self.message


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(MonohooksError):
    """Error in monohooks tool configuration (config.yaml, env vars)."""

    pass


class NoConfigError(MonohooksError):
    """Package manifest has no usable hook configuration section."""

    def __init__(self, package_name: str, reason: str | None = None):
        message = f"No config was found in project {package_name}, moving on..."
        super().__init__(message, {"reason": reason} if reason else None)
        self.package_name = package_name
        self.reason = reason


class InvalidConfigError(NoConfigError):
    """Hook configuration section exists but does not validate."""

    pass


class PathNotFoundError(MonohooksError):
    """A file or directory does not exist."""

    def __init__(self, path: str, filename: str | None = None):
        super().__init__(f"Could not find {filename or 'file or directory'} at {path}")
        self.path = path


# =============================================================================
# Git Errors
# =============================================================================


class GitError(MonohooksError):
    """Base class for git-related errors."""

    pass


class GitCommandError(GitError):
    """Git command failed to execute."""

    def __init__(
        self,
        message: str,
        command: list[str] | None = None,
        returncode: int | None = None,
        stderr: str | None = None,
    ):
        details = {}
        if command:
            details["command"] = " ".join(command)
        if returncode is not None:
            details["returncode"] = returncode
        if stderr:
            details["stderr"] = stderr
        super().__init__(message, details)
        self.command = command
        self.returncode = returncode
        self.stderr = stderr


class NotAGitRepoError(GitError):
    """Path is not inside a git repository."""

    def __init__(self, path: str):
        super().__init__(f"Could not find git repository from {path}")
        self.path = path


class NoStagedFilesError(GitError):
    """Nothing is staged for the commit being created."""

    def __init__(self, repo_path: str):
        super().__init__(f"No staged files found in repository {repo_path}, moving on...")
        self.repo_path = repo_path


class NoCommitsError(GitError):
    """No commits are about to be pushed."""

    def __init__(self, repo_path: str, branch: str):
        super().__init__(
            f"No commits found in repository {repo_path} for the branch {branch}, moving on..."
        )
        self.repo_path = repo_path
        self.branch = branch


# =============================================================================
# Dispatch Errors
# =============================================================================


class DispatchError(MonohooksError):
    """Base class for fatal errors raised while dispatching tasks."""

    pass


class TaskExecutionError(DispatchError):
    """A task command could not be started at all."""

    def __init__(self, task: str, location: str, cause: Exception | None = None):
        details = {"cause": str(cause)} if cause else None
        super().__init__(f"Could not run task \"{task}\" in {location}", details)
        self.task = task
        self.location = location


class CommitMessagePatternError(DispatchError):
    """The commit-msg pattern of a package is not a valid regular expression."""

    def __init__(self, pattern: str, package_name: str, error: str):
        super().__init__(
            f"Invalid commit-msg pattern for project {package_name}",
            {"pattern": pattern, "error": error},
        )
        self.pattern = pattern
        self.package_name = package_name
