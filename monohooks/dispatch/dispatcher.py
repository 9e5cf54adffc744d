"""
Task Dispatcher

Runs one hook event across every package of the repository.

Per package, in discovery order:
1. resolve its config (missing config: NO_CONFIG)
2. skip users listed in skip-users, then disabled packages (SKIPPED)
3. require a relevant changed file (NO_MATCHING_FILES)
4. check the commit message against commit-msg, if set (TASK_FAILED)
5. run the event's tasks in order (NO_TASKS_CONFIGURED, TASK_FAILED, TASKS_SUCCEEDED)

The first TASK_FAILED ends the run: no later package is visited and the
hook exits non-zero. Every other outcome is informational.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional, Sequence, Union

from monohooks.configs import (
    COMMIT_MESSAGE_EVENTS,
    DEFAULT_CONFIG_KEY,
    FILE_SENSITIVE_EVENTS,
    HookEvent,
    RuntimeSettings,
    get_logger,
)
from monohooks.dispatch.matcher import FileMatcher
from monohooks.dispatch.runner import run_task
from monohooks.exceptions import CommitMessagePatternError, NoConfigError
from monohooks.packages import HookConfig, Package, find_all_packages, resolve_config

logger = get_logger("dispatch")

# Changed files for file-sensitive events, or whether anything changed at all
ChangedFiles = Union[Sequence[str], bool]
TaskRunner = Callable[[str, str], int]

COMMIT_MSG_TASK = "commit-msg"


class OutcomeKind(str, Enum):
    """What happened to one package during a dispatch run."""

    SKIPPED = "skipped"
    NO_CONFIG = "no_config"
    NO_MATCHING_FILES = "no_matching_files"
    NO_TASKS_CONFIGURED = "no_tasks_configured"
    TASKS_SUCCEEDED = "tasks_succeeded"
    TASK_FAILED = "task_failed"


@dataclass(frozen=True)
class DispatchOutcome:
    """Result of visiting one package."""

    package: Package
    kind: OutcomeKind
    message: str
    reason: Optional[str] = None  # SKIPPED: "user" or "disabled"
    task_index: Optional[int] = None  # TASK_FAILED: None for the commit-msg check
    task: Optional[str] = None
    exit_code: Optional[int] = None

    @property
    def is_fatal(self) -> bool:
        return self.kind is OutcomeKind.TASK_FAILED


@dataclass
class DispatchReport:
    """All outcomes of one dispatch run."""

    event: HookEvent
    outcomes: list[DispatchOutcome] = field(default_factory=list)

    @property
    def failed(self) -> Optional[DispatchOutcome]:
        for outcome in self.outcomes:
            if outcome.is_fatal:
                return outcome
        return None

    @property
    def exit_code(self) -> int:
        return 1 if self.failed else 0

    def of_kind(self, kind: OutcomeKind) -> list[DispatchOutcome]:
        return [o for o in self.outcomes if o.kind is kind]


class Dispatcher:
    """Visits packages for one hook event, failing fast on task errors."""

    def __init__(
        self,
        packages: Sequence[Package],
        git,
        user: str,
        config_key: str = DEFAULT_CONFIG_KEY,
        runner: TaskRunner = run_task,
    ):
        """
        Args:
            packages: Packages in the order they should be visited
            git: Git collaborator (only get_commit_message() is used here)
            user: Current git user name, matched against skip-users
            config_key: Manifest key holding each package's configuration
            runner: Runs one command in a directory, returning its exit code
        """
        self.packages = list(packages)
        self.git = git
        self.user = user
        self.config_key = config_key
        self.runner = runner
        self._commit_message: Optional[str] = None
        self._commit_message_loaded = False

    def dispatch(
        self,
        event: HookEvent,
        changed_files: ChangedFiles,
        commit_message: Optional[str] = None,
    ) -> DispatchReport:
        """
        Run an event's tasks for every package.

        Args:
            event: Hook event being handled
            changed_files: Paths touched by the git operation (file-sensitive
                events), or a flag telling whether anything changed
            commit_message: Message under validation (commit-msg hook);
                fetched from git when needed and not given

        Returns:
            DispatchReport; stops at the first TASK_FAILED

        Raises:
            CommitMessagePatternError: A package's commit-msg is not a valid regex
            TaskExecutionError: A task could not be started
        """
        event = HookEvent(event)
        if commit_message is not None:
            self._commit_message = commit_message
            self._commit_message_loaded = True

        report = DispatchReport(event)
        for package in self.packages:
            outcome = self._visit(package, event, changed_files)
            report.outcomes.append(outcome)
            self._log_outcome(event, outcome)
            if outcome.is_fatal:
                break
        return report

    # --- Per-package state machine ---

    def _visit(
        self,
        package: Package,
        event: HookEvent,
        changed_files: ChangedFiles,
    ) -> DispatchOutcome:
        try:
            config = resolve_config(package, self.config_key)
        except NoConfigError as e:
            return DispatchOutcome(package, OutcomeKind.NO_CONFIG, str(e))

        if config.skips_user(self.user):
            return DispatchOutcome(
                package,
                OutcomeKind.SKIPPED,
                f"User {self.user} does not need to run tasks for project {package.name}, moving on...",
                reason="user",
            )
        if not config.enabled:
            return DispatchOutcome(
                package,
                OutcomeKind.SKIPPED,
                f"Git hooks disabled for project {package.name}, moving on...",
                reason="disabled",
            )

        if not self._has_relevant_changes(package, config, event, changed_files):
            return DispatchOutcome(
                package,
                OutcomeKind.NO_MATCHING_FILES,
                f"{event.value.upper()}: No file matches the restrictions for project {package.name}, moving on...",
            )

        if event in COMMIT_MESSAGE_EVENTS and config.commit_msg:
            failure = self._check_commit_message(package, config)
            if failure:
                return failure

        if event is HookEvent.COMMIT_MSG:
            if not config.commit_msg:
                return DispatchOutcome(
                    package,
                    OutcomeKind.NO_TASKS_CONFIGURED,
                    f"COMMIT-MSG: No commit-msg pattern was found for project {package.name}, moving on...",
                )
            return DispatchOutcome(
                package,
                OutcomeKind.TASKS_SUCCEEDED,
                f"COMMIT-MSG: Commit message accepted for project {package.name}",
            )

        tasks = config.tasks_for(event)
        if not tasks:
            return DispatchOutcome(
                package,
                OutcomeKind.NO_TASKS_CONFIGURED,
                f"{event.value.upper()}: No tasks were found for project {package.name}, moving on...",
            )

        return self._run_tasks(package, event, tasks)

    def _has_relevant_changes(
        self,
        package: Package,
        config: HookConfig,
        event: HookEvent,
        changed_files: ChangedFiles,
    ) -> bool:
        if isinstance(changed_files, bool):
            return changed_files
        if event not in FILE_SENSITIVE_EVENTS:
            # Restrictions only apply to commits and pushes
            return True
        matcher = FileMatcher(config.restrictions, package.relative_path)
        logger.debug(f"{package.display_name}: {matcher!r}")
        return matcher.any_match(changed_files)

    def _load_commit_message(self) -> Optional[str]:
        if not self._commit_message_loaded:
            self._commit_message = self.git.get_commit_message()
            self._commit_message_loaded = True
        return self._commit_message

    def _check_commit_message(
        self, package: Package, config: HookConfig
    ) -> Optional[DispatchOutcome]:
        try:
            pattern = re.compile(config.commit_msg)
        except re.error as e:
            raise CommitMessagePatternError(config.commit_msg, package.name, str(e))

        message = self._load_commit_message()
        if message is None:
            logger.info(
                f"No commit message available, skipping commit-msg check for project {package.name}"
            )
            return None
        if pattern.search(message):
            return None

        return DispatchOutcome(
            package,
            OutcomeKind.TASK_FAILED,
            f"FAILURE: git operation not permitted because the commit message "
            f"does not match /{config.commit_msg}/ for project {package.name}",
            task=COMMIT_MSG_TASK,
        )

    def _run_tasks(
        self, package: Package, event: HookEvent, tasks: list[str]
    ) -> DispatchOutcome:
        for index, task in enumerate(tasks):
            logger.info(f'RUNNING {event.value} "{task}" in {package.absolute_path}')
            exit_code = self.runner(task, package.absolute_path)
            if exit_code != 0:
                return DispatchOutcome(
                    package,
                    OutcomeKind.TASK_FAILED,
                    f"FAILURE: git operation not permitted because task \"{task}\" "
                    f"failed for project {package.name}",
                    task_index=index,
                    task=task,
                    exit_code=exit_code,
                )
            logger.info(f'SUCCESS {event.value} "{task}" in {package.absolute_path}')

        return DispatchOutcome(
            package,
            OutcomeKind.TASKS_SUCCEEDED,
            f"{event.value.upper()}: All tasks successful for project {package.name}",
        )

    def _log_outcome(self, event: HookEvent, outcome: DispatchOutcome) -> None:
        if outcome.is_fatal:
            logger.error(outcome.message)
            logger.error(
                f"event={event.value} package={outcome.package.display_name} "
                f"task={outcome.task!r} exit_code={outcome.exit_code}"
            )
        elif outcome.kind is OutcomeKind.NO_CONFIG:
            logger.info(f"CONFIG: {outcome.message}")
        elif outcome.kind is OutcomeKind.SKIPPED:
            logger.info(f"SKIP: {outcome.message}")
        else:
            logger.info(outcome.message)


def dispatch_hook(
    event: HookEvent,
    changed_files: ChangedFiles,
    repo,
    settings: Optional[RuntimeSettings] = None,
    commit_message: Optional[str] = None,
    runner: TaskRunner = run_task,
) -> DispatchReport:
    """
    Discover packages and dispatch one hook event.

    Root directory and user name are read once here and handed down.

    Args:
        event: Hook event being handled
        changed_files: See Dispatcher.dispatch
        repo: Git collaborator (GitRepository)
        settings: Runtime settings (defaults when None)
        commit_message: Message under validation, for the commit-msg hook
        runner: Task runner override

    Returns:
        DispatchReport for the run
    """
    settings = settings or RuntimeSettings()
    root_dir = repo.get_root_dir()
    packages = find_all_packages(
        root_dir,
        manifest_filename=settings.manifest_filename,
        exclude_patterns=settings.exclude_dirs,
    )
    if not packages:
        logger.info(f"No {settings.manifest_filename} found in repository {root_dir}, moving on...")

    dispatcher = Dispatcher(
        packages,
        git=repo,
        user=repo.get_username(),
        config_key=settings.config_key,
        runner=runner,
    )
    report = dispatcher.dispatch(event, changed_files, commit_message=commit_message)

    if report.exit_code == 0 and report.of_kind(OutcomeKind.TASKS_SUCCEEDED):
        logger.info(f"{HookEvent(event).value.upper()}: All tasks successful!")
    return report
