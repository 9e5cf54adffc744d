"""
Package discovery and per-package hook configuration.
"""

from monohooks.packages.discovery import Package, find_all_packages, to_relative_path
from monohooks.packages.manifest import (
    HookConfig,
    Restrictions,
    default_config_section,
    load_manifest,
    resolve_config,
    write_default_config,
)

__all__ = [
    "Package",
    "find_all_packages",
    "to_relative_path",
    "HookConfig",
    "Restrictions",
    "default_config_section",
    "load_manifest",
    "resolve_config",
    "write_default_config",
]
