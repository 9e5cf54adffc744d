"""
Monohooks Runtime Configuration

Merges defaults, YAML config, and environment variables into the settings
one hook invocation runs with.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from monohooks.configs.constants import (
    DEFAULT_CONFIG_KEY,
    DEFAULT_MANIFEST_FILENAME,
    TIMEOUTS,
)
from monohooks.configs.yaml_config import load_yaml_config
from monohooks.exceptions import ConfigurationError

SUPPORTED_MANIFEST_SUFFIXES = (".json", ".yaml", ".yml")


@dataclass
class RuntimeSettings:
    """Settings for a single hook invocation."""

    manifest_filename: str = DEFAULT_MANIFEST_FILENAME
    config_key: str = DEFAULT_CONFIG_KEY
    exclude_dirs: list[str] = field(default_factory=list)
    debug: bool = False
    timeouts: dict[str, float] = field(default_factory=lambda: dict(TIMEOUTS))

    @property
    def git_timeout(self) -> float:
        return self.timeouts.get("git_command", TIMEOUTS["git_command"])

    @property
    def git_diff_timeout(self) -> float:
        return self.timeouts.get("git_diff", TIMEOUTS["git_diff"])


def _env_flag(name: str) -> Optional[bool]:
    value = os.environ.get(name)
    if value is None or value == "":
        return None
    return value.lower() in ("true", "1", "yes")


def _section(yaml_config: dict, name: str) -> dict:
    section = yaml_config.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigurationError(f"{name} must be a mapping", {"value": section})
    return section


def get_full_config(config_path: Optional[Path] = None) -> RuntimeSettings:
    """
    Get full configuration merged from defaults, YAML, and environment.

    Priority (highest wins):
    1. Environment variables (MONOHOOKS_MANIFEST, MONOHOOKS_CONFIG_KEY, MONOHOOKS_DEBUG)
    2. YAML config file
    3. Defaults

    Args:
        config_path: Override the config.yaml location

    Returns:
        Merged RuntimeSettings

    Raises:
        ConfigurationError: On an unreadable config file or unsupported manifest type
    """
    settings = RuntimeSettings()
    yaml_config = load_yaml_config(config_path)

    manifest = _section(yaml_config, "manifest")
    if manifest.get("filename"):
        settings.manifest_filename = str(manifest["filename"])
    if manifest.get("key"):
        settings.config_key = str(manifest["key"])

    discovery = _section(yaml_config, "discovery")
    exclude_dirs = discovery.get("exclude_dirs") or []
    if not isinstance(exclude_dirs, list):
        raise ConfigurationError("discovery.exclude_dirs must be a list")
    settings.exclude_dirs = [str(d) for d in exclude_dirs]

    for key, value in _section(yaml_config, "timeouts").items():
        try:
            settings.timeouts[key] = float(value)
        except (TypeError, ValueError):
            raise ConfigurationError(f"timeouts.{key} must be a number", {"value": value})

    settings.debug = bool(yaml_config.get("debug", False))

    # Environment overrides
    if os.environ.get("MONOHOOKS_MANIFEST"):
        settings.manifest_filename = os.environ["MONOHOOKS_MANIFEST"]
    if os.environ.get("MONOHOOKS_CONFIG_KEY"):
        settings.config_key = os.environ["MONOHOOKS_CONFIG_KEY"]
    env_debug = _env_flag("MONOHOOKS_DEBUG")
    if env_debug is not None:
        settings.debug = env_debug

    if not settings.manifest_filename.endswith(SUPPORTED_MANIFEST_SUFFIXES):
        raise ConfigurationError(
            f"Unsupported manifest type: {settings.manifest_filename}",
            {"supported": ", ".join(SUPPORTED_MANIFEST_SUFFIXES)},
        )

    return settings
