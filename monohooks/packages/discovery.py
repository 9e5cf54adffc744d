"""
Package Discovery

Finds every package (directory holding a manifest) inside a repository.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

from monohooks.configs import DEFAULT_MANIFEST_FILENAME, get_logger, load_ignore_patterns
from monohooks.utils import scan_dir

logger = get_logger("discovery")


@dataclass(frozen=True)
class Package:
    """One discovered project unit inside the repository."""

    name: str  # Directory base name
    absolute_path: str  # Resolved directory containing the manifest
    relative_path: str  # From repo root, forward slashes, "" for the root itself
    manifest_path: str

    @property
    def display_name(self) -> str:
        return self.relative_path or self.name


def to_relative_path(path: str, root: str) -> str:
    """Relative path from root with forward slashes and no trailing slash."""
    relative = os.path.relpath(path, root)
    if relative == ".":
        return ""
    return relative.replace(os.sep, "/").rstrip("/")


def find_all_packages(
    root_dir: str,
    manifest_filename: str = DEFAULT_MANIFEST_FILENAME,
    exclude_patterns: Optional[Iterable[str]] = None,
    use_ignore_file: bool = True,
) -> list[Package]:
    """
    Find all packages in the repository, from the root down.

    Dependency directories (node_modules and friends), configured exclusions
    and .monohooksignore entries are never searched. Unreadable directories
    are treated as empty.

    Args:
        root_dir: Repository root
        manifest_filename: File name marking a package
        exclude_patterns: Extra directory names/globs to skip
        use_ignore_file: Honor <root>/.monohooksignore

    Returns:
        Packages in depth-first order, siblings sorted by name
    """
    root = os.path.realpath(root_dir)
    exclude = load_ignore_patterns(root, exclude_patterns, use_ignore_file)

    packages = []
    for directory in scan_dir(root, [manifest_filename], exclude):
        absolute = str(directory.resolve())
        packages.append(
            Package(
                name=directory.name or Path(root).name,
                absolute_path=absolute,
                relative_path=to_relative_path(absolute, root),
                manifest_path=str(Path(absolute) / manifest_filename),
            )
        )

    logger.debug(f"Found {len(packages)} package(s) under {root}")
    return packages
