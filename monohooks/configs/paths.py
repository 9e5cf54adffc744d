"""
Monohooks Data Paths

Location of the per-user data directory holding config.yaml and logs.
"""

import os
from pathlib import Path

DEFAULT_DATA_PATH = Path.home() / ".monohooks"


def get_data_path() -> Path:
    """Get the monohooks data directory path."""
    data_path = os.environ.get("MONOHOOKS_DATA_PATH")
    if data_path:
        return Path(data_path).expanduser()
    return DEFAULT_DATA_PATH


def ensure_data_dir() -> Path:
    """Ensure the data directory exists.

    Returns:
        Path to data directory
    """
    data_path = get_data_path()
    data_path.mkdir(parents=True, exist_ok=True)
    return data_path
