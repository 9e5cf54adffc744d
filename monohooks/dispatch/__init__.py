"""
Hook dispatch: file matching, task running and the per-package state machine.
"""

from monohooks.dispatch.dispatcher import (
    ChangedFiles,
    DispatchOutcome,
    DispatchReport,
    Dispatcher,
    OutcomeKind,
    dispatch_hook,
)
from monohooks.dispatch.matcher import FileMatcher, build_file_pattern, normalize_relative_path
from monohooks.dispatch.runner import run_task

__all__ = [
    "ChangedFiles",
    "Dispatcher",
    "DispatchOutcome",
    "DispatchReport",
    "OutcomeKind",
    "dispatch_hook",
    "FileMatcher",
    "build_file_pattern",
    "normalize_relative_path",
    "run_task",
]
