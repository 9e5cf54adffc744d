"""
Monohooks Command Line

Entry points called from .git/hooks scripts, one per hook event:

    monohooks-post-checkout <previous-head> <new-head> <branch-flag>
    monohooks-post-commit
    monohooks-post-merge <squash-flag>
    monohooks-pre-commit
    monohooks-pre-push <remote-name> <remote-url>
    monohooks-commit-msg <message-file>

plus the umbrella command:

    monohooks run <event> [hook args...]
    monohooks list
    monohooks init [package-dir]

Exit code 0 lets git proceed; anything else aborts the git operation.
"""

import argparse
import os
import sys
from pathlib import Path
from typing import Optional, Sequence

from monohooks import __version__
from monohooks.configs import (
    FILE_SENSITIVE_EVENTS,
    HookEvent,
    RuntimeSettings,
    create_default_config,
    get_full_config,
    get_logger,
    setup_logging,
)
from monohooks.dispatch import ChangedFiles, dispatch_hook
from monohooks.exceptions import (
    ConfigurationError,
    MonohooksError,
    NoCommitsError,
    NoConfigError,
    NoStagedFilesError,
    PathNotFoundError,
)
from monohooks.git import GitRepository, read_commit_message
from monohooks.packages import find_all_packages, resolve_config, write_default_config
from monohooks.utils import is_a_file

logger = get_logger("cli")


def collect_changed_files(
    event: HookEvent,
    repo: GitRepository,
    hook_args: Sequence[str],
) -> ChangedFiles:
    """
    Work out what the git operation changed, from git and the hook arguments.

    Returns:
        File list for pre-commit/pre-push, a boolean for the other events
    """
    if event is HookEvent.PRE_COMMIT:
        try:
            return repo.get_staged_files()
        except NoStagedFilesError as e:
            logger.info(str(e))
            return []

    if event is HookEvent.PRE_PUSH:
        remote = hook_args[0] if hook_args else "origin"
        branch = repo.get_branch()
        try:
            return repo.get_committed_files(remote, branch)
        except NoCommitsError as e:
            logger.info(str(e))
            return []

    if event is HookEvent.POST_CHECKOUT and len(hook_args) >= 2:
        # Checking out the commit already at HEAD changes nothing
        return hook_args[0] != hook_args[1]

    return True


def run_hook(
    event: HookEvent,
    hook_args: Sequence[str] = (),
    cwd: Optional[str] = None,
    settings: Optional[RuntimeSettings] = None,
) -> int:
    """
    Handle one hook invocation.

    Returns:
        Process exit code
    """
    settings = settings or get_full_config()
    repo = GitRepository.discover(
        cwd,
        timeout=settings.git_timeout,
        diff_timeout=settings.git_diff_timeout,
    )

    commit_message = None
    if event is HookEvent.COMMIT_MSG:
        if not hook_args:
            raise MonohooksError("commit-msg hook needs the commit message file")
        message_file = Path(hook_args[0])
        if not message_file.is_absolute():
            message_file = Path(cwd or os.getcwd()) / message_file
        if not is_a_file(message_file):
            raise PathNotFoundError(str(message_file), "commit message file")
        commit_message = read_commit_message(message_file)

    changed_files = collect_changed_files(event, repo, hook_args)
    if event in FILE_SENSITIVE_EVENTS:
        logger.debug(f"{len(changed_files)} changed file(s): {list(changed_files)}")

    report = dispatch_hook(
        event,
        changed_files,
        repo,
        settings=settings,
        commit_message=commit_message,
    )
    return report.exit_code


def list_packages(cwd: Optional[str] = None, settings: Optional[RuntimeSettings] = None) -> int:
    """Print every discovered package with its configuration status."""
    settings = settings or get_full_config()
    repo = GitRepository.discover(cwd, timeout=settings.git_timeout)
    packages = find_all_packages(
        repo.get_root_dir(),
        manifest_filename=settings.manifest_filename,
        exclude_patterns=settings.exclude_dirs,
    )

    for package in packages:
        try:
            config = resolve_config(package, settings.config_key)
        except NoConfigError as e:
            status = f"no config ({e.reason})" if e.reason else "no config"
        else:
            events = ", ".join(e.value for e, tasks in config.tasks.items() if tasks)
            status = "enabled" if config.enabled else "disabled"
            status += f"; tasks: {events or 'none'}"
        print(f"{package.relative_path or '.'}\t{package.name}\t{status}")

    if not packages:
        print(f"No {settings.manifest_filename} found under {repo.get_root_dir()}")
    return 0


def init_package(path: Optional[str] = None, settings: Optional[RuntimeSettings] = None) -> int:
    """Add an empty hook configuration section to a package manifest."""
    settings = settings or get_full_config()
    manifest = Path(path or os.getcwd()) / settings.manifest_filename
    try:
        written = write_default_config(str(manifest), settings.config_key)
    except ValueError as e:
        raise ConfigurationError(f"Cannot update {manifest}", {"error": str(e)})

    if written:
        print(f"Added '{settings.config_key}' configuration to {manifest}")
    else:
        print(f"{manifest} already has a '{settings.config_key}' configuration")

    # First init on this machine also writes ~/.monohooks/config.yaml
    create_default_config()
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="monohooks",
        description="Run git hook tasks for every package of a repository",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--cwd", default=None, help="Run as if started in this directory")

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Dispatch a hook event")
    run_parser.add_argument("event", choices=[e.value for e in HookEvent])
    run_parser.add_argument("hook_args", nargs="*", help="Arguments git passed to the hook")

    subparsers.add_parser("list", help="List discovered packages")

    init_parser = subparsers.add_parser("init", help="Add a default config to a manifest")
    init_parser.add_argument("path", nargs="?", default=None, help="Package directory")

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the monohooks command."""
    args = build_parser().parse_args(argv)
    setup_logging(debug=True if args.debug else None)

    try:
        settings = get_full_config()
        if settings.debug and not args.debug:
            setup_logging(debug=True)

        if args.command == "run":
            return run_hook(HookEvent(args.event), args.hook_args, args.cwd, settings)
        if args.command == "list":
            return list_packages(args.cwd, settings)
        return init_package(args.path or args.cwd, settings)
    except MonohooksError as e:
        logger.error(f"FAILED: {e}")
        return 1


def _hook_entry(event: HookEvent) -> None:
    sys.exit(main(["run", event.value, *sys.argv[1:]]))


def post_checkout() -> None:
    _hook_entry(HookEvent.POST_CHECKOUT)


def post_commit() -> None:
    _hook_entry(HookEvent.POST_COMMIT)


def post_merge() -> None:
    _hook_entry(HookEvent.POST_MERGE)


def pre_commit() -> None:
    _hook_entry(HookEvent.PRE_COMMIT)


def pre_push() -> None:
    _hook_entry(HookEvent.PRE_PUSH)


def commit_msg() -> None:
    _hook_entry(HookEvent.COMMIT_MSG)


if __name__ == "__main__":
    sys.exit(main())
