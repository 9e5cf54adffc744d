"""
File Pattern Matcher

Decides whether the files touched by a git operation concern a package,
based on the package's folder and file type restrictions.

For a package at "web" restricted to folders ["src"] and file types
["js", "ts"], the built pattern accepts "web/src/app.js" (relative to the
repository), "src/app.js" (relative to the package), and
"nested/web/src/app.ts", but not "web/test/app.js" or "web/src/app.css".
"""

import re
from typing import Iterable

from monohooks.packages.manifest import Restrictions


def normalize_relative_path(relative_path: str) -> str:
    """Strip leading "./" and trailing separators ("." becomes "")."""
    relative = relative_path.replace("\\", "/")
    while relative.startswith("./"):
        relative = relative[2:]
    relative = relative.rstrip("/")
    return "" if relative == "." else relative


def _normalize_folder(folder: str) -> str:
    folder = normalize_relative_path(folder.strip()).lstrip("/")
    return f"{folder}/" if folder else ""


def build_file_pattern(restrictions: Restrictions, relative_path: str) -> re.Pattern:
    """
    Build the case-insensitive path pattern for a package.

    Args:
        restrictions: Folder and file type restrictions
        relative_path: Package path relative to the repository root

    Returns:
        Compiled pattern, to be used with fullmatch
    """
    relative = normalize_relative_path(relative_path)
    pattern = f"(?:(?:.*/)?{re.escape(relative)}/)?" if relative else ""
    if restrictions.is_empty:
        return re.compile(pattern + ".+", re.IGNORECASE)

    folders = [f for f in (_normalize_folder(f) for f in restrictions.folders) if f]
    file_types = [t.strip().lstrip(".") for t in restrictions.file_types]
    file_types = [t for t in file_types if t]

    if folders:
        pattern += "(?:" + "|".join(re.escape(f) for f in folders) + ")"
    if file_types:
        pattern += r".+\.(?:" + "|".join(re.escape(t) for t in file_types) + ")"
    else:
        pattern += ".+"

    return re.compile(pattern, re.IGNORECASE)


class FileMatcher:
    """Path predicate for one package."""

    def __init__(self, restrictions: Restrictions, relative_path: str):
        self.restrictions = restrictions
        self.relative_path = normalize_relative_path(relative_path)
        self.pattern = build_file_pattern(restrictions, relative_path)

    def matches(self, file_path: str) -> bool:
        path = str(file_path).strip().replace("\\", "/")
        if not path:
            return False
        return self.pattern.fullmatch(path) is not None

    def any_match(self, file_paths: Iterable[str]) -> bool:
        """True if at least one path matches (False for no paths)."""
        return any(self.matches(path) for path in file_paths)

    def __repr__(self) -> str:
        return f"FileMatcher({self.pattern.pattern!r})"
