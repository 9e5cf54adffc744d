"""
Monohooks Configuration Module

Re-exports commonly used functions for cleaner imports across the codebase.
"""

# Logging (most commonly used)
from monohooks.configs.logging import get_logger, setup_logging

# Paths
from monohooks.configs.paths import ensure_data_dir, get_data_path

# Constants
from monohooks.configs.constants import (
    COMMIT_MESSAGE_EVENTS,
    DEFAULT_CONFIG_KEY,
    DEFAULT_EXCLUDE_DIRS,
    DEFAULT_MANIFEST_FILENAME,
    FILE_SENSITIVE_EVENTS,
    TASK_EVENTS,
    TIMEOUTS,
    HookEvent,
    get_timeout,
)

# Ignore patterns
from monohooks.configs.ignore_patterns import IGNORE_FILENAME, load_ignore_patterns

# YAML config
from monohooks.configs.yaml_config import (
    DEFAULT_CONFIG_YAML,
    create_default_config,
    get_config_path,
    load_yaml_config,
)

# Runtime
from monohooks.configs.runtime import RuntimeSettings, get_full_config

__all__ = [
    # Logging
    "get_logger",
    "setup_logging",
    # Paths
    "get_data_path",
    "ensure_data_dir",
    # Constants
    "HookEvent",
    "FILE_SENSITIVE_EVENTS",
    "COMMIT_MESSAGE_EVENTS",
    "TASK_EVENTS",
    "DEFAULT_MANIFEST_FILENAME",
    "DEFAULT_CONFIG_KEY",
    "DEFAULT_EXCLUDE_DIRS",
    "TIMEOUTS",
    "get_timeout",
    # Ignore patterns
    "IGNORE_FILENAME",
    "load_ignore_patterns",
    # YAML config
    "DEFAULT_CONFIG_YAML",
    "get_config_path",
    "load_yaml_config",
    "create_default_config",
    # Runtime
    "RuntimeSettings",
    "get_full_config",
]
