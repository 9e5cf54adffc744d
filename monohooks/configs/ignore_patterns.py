"""
Monohooks Ignore Patterns

Default patterns and loading logic for .monohooksignore files.
Patterns name directories that package discovery never descends into.
"""

from pathlib import Path
from typing import Iterable, Optional

from monohooks.configs.constants import DEFAULT_EXCLUDE_DIRS

IGNORE_FILENAME = ".monohooksignore"


def _load_ignore_file(path: Path) -> set[str]:
    """Load patterns from an ignore file (like .gitignore format)."""
    if not path.is_file():
        return set()
    patterns = set()
    for line in path.read_text().splitlines():
        line = line.strip()
        if line and not line.startswith("#"):
            # "vendor/" and "vendor" both name the directory
            patterns.add(line.rstrip("/"))
    return patterns


def load_ignore_patterns(
    root_path: str,
    extra_patterns: Optional[Iterable[str]] = None,
    use_ignore_file: bool = True,
) -> set[str]:
    """Load and merge discovery exclusion patterns.

    Merge order (all patterns combined):
    1. DEFAULT_EXCLUDE_DIRS (dependency and VCS directories)
    2. extra_patterns (discovery.exclude_dirs from config.yaml)
    3. Project <root>/.monohooksignore

    Args:
        root_path: Repository root
        extra_patterns: Additional directory names or globs
        use_ignore_file: If False, skip the project ignore file

    Returns:
        Set of patterns matched against directory names
    """
    patterns = set(DEFAULT_EXCLUDE_DIRS)
    if extra_patterns:
        patterns.update(p.rstrip("/") for p in extra_patterns if p)

    if use_ignore_file:
        patterns.update(_load_ignore_file(Path(root_path) / IGNORE_FILENAME))

    return patterns
