"""Shared file system helpers."""

from monohooks.utils.paths import is_a_directory, is_a_file, matches_any, scan_dir

__all__ = ["is_a_directory", "is_a_file", "matches_any", "scan_dir"]
