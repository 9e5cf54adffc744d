"""
Path Utilities

File system checks and directory traversal with include/exclude filtering.
"""

import fnmatch
import os
from pathlib import Path
from typing import Generator, Iterable, Optional, Union

PathLike = Union[str, Path]


def is_a_directory(path: Optional[PathLike]) -> bool:
    """Check if the given path is an existing directory."""
    return bool(path) and os.path.isdir(path)


def is_a_file(path: Optional[PathLike]) -> bool:
    """Check if the given path is an existing file."""
    return bool(path) and os.path.isfile(path)


def matches_any(name: str, patterns: Iterable[str]) -> bool:
    """Check a single path component against fnmatch-style patterns."""
    return any(name == p or fnmatch.fnmatch(name, p) for p in patterns)


def scan_dir(
    root_path: PathLike,
    include_patterns: Iterable[str],
    exclude_patterns: Optional[Iterable[str]] = None,
) -> Generator[Path, None, None]:
    """
    Walk a directory tree yielding directories that hold a matching file.

    Traversal is depth-first with sibling directories visited in sorted order,
    so results are stable across runs. The root itself is yielded first when
    it matches.

    Args:
        root_path: Directory to walk
        include_patterns: File name patterns marking a directory as a hit
        exclude_patterns: Directory name patterns whose subtrees are skipped

    Yields:
        Path of every directory containing at least one matching file
    """
    include = list(include_patterns)
    exclude = list(exclude_patterns or [])

    # os.walk skips directories it cannot list (onerror=None)
    for dirpath, dirnames, filenames in os.walk(root_path):
        # Filter out excluded directories (in-place modification)
        dirnames[:] = sorted(d for d in dirnames if not matches_any(d, exclude))

        if any(matches_any(filename, include) for filename in filenames):
            yield Path(dirpath)
