"""
Monohooks YAML Configuration

Loading and defaults for ~/.monohooks/config.yaml.
"""

from pathlib import Path

import yaml

from monohooks.configs.logging import get_logger
from monohooks.configs.paths import ensure_data_dir, get_data_path
from monohooks.exceptions import ConfigurationError

logger = get_logger("config")

# --- Default Config Template ---

DEFAULT_CONFIG_YAML = """\
# Monohooks Configuration
# Edit this file to customize how hooks find and run package tasks.

# Manifest holding each package's hook configuration
manifest:
  # File name marking a package directory (.json or .yaml/.yml)
  filename: "package.json"
  # Key of the hook configuration section inside the manifest
  key: "monohooks"

# Package discovery
discovery:
  # Extra directory names/globs never searched for packages
  exclude_dirs: []
    # - vendor
    # - "*.tmp"

# Git query timeouts in seconds (task commands never time out)
timeouts:
  git_command: 10
  git_diff: 30

# Enable debug logging
debug: false
"""


def get_config_path() -> Path:
    """Get the path to config.yaml."""
    return get_data_path() / "config.yaml"


def load_yaml_config(config_path: Path | None = None) -> dict:
    """
    Load configuration from ~/.monohooks/config.yaml.

    Args:
        config_path: Override the config file location

    Returns:
        Configuration dictionary (empty if file doesn't exist)

    Raises:
        ConfigurationError: If the file exists but is not valid YAML
    """
    config_path = config_path or get_config_path()
    if not config_path.exists():
        return {}

    try:
        content = yaml.safe_load(config_path.read_text()) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Could not read {config_path}", {"error": str(e)})

    if not isinstance(content, dict):
        raise ConfigurationError(f"{config_path} must contain a mapping")
    return content


def create_default_config() -> bool:
    """
    Create default config.yaml if it doesn't exist.

    Returns:
        True if file was created, False if it already exists
    """
    config_path = get_config_path()
    if config_path.exists():
        return False

    ensure_data_dir()
    config_path.write_text(DEFAULT_CONFIG_YAML)
    logger.info(f"Created default config at {config_path}")
    return True
