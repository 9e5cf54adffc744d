"""
Monohooks Logging Configuration

Configures logging based on environment variables:
- MONOHOOKS_DEBUG: Enable debug logging (default: false)
- MONOHOOKS_LOG_FILE: Also write logs to this file (default: unset)

Hook output is read by the developer running git, so stderr carries INFO
and above even when a log file is configured.
"""

import logging
import os
import sys
from pathlib import Path
from typing import Optional

FILE_FORMAT = "%(asctime)s %(levelname)-5s [%(name)s] %(message)s"
CONSOLE_FORMAT = "monohooks: %(levelname)s %(message)s"


def setup_logging(
    debug: Optional[bool] = None,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """
    Configure logging for monohooks.

    Args:
        debug: Enable debug level. Defaults to MONOHOOKS_DEBUG env var.
        log_file: Log file path. Defaults to MONOHOOKS_LOG_FILE env var.

    Returns:
        Root logger for monohooks
    """
    # Read from env if not provided
    if debug is None:
        debug = os.environ.get("MONOHOOKS_DEBUG", "").lower() in ("true", "1", "yes")
    if log_file is None:
        log_file = os.environ.get("MONOHOOKS_LOG_FILE") or None

    level = logging.DEBUG if debug else logging.INFO

    logger = logging.getLogger("monohooks")
    logger.setLevel(level)

    # Clear existing handlers
    logger.handlers.clear()

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    stderr_handler.setLevel(level)
    logger.addHandler(stderr_handler)

    if log_file:
        log_path = Path(log_file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path)
        file_handler.setFormatter(
            logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
        )
        file_handler.setLevel(level)
        logger.addHandler(file_handler)
        logger.debug(f"Logging to file: {log_path}")

    return logger


def get_logger(component: str) -> logging.Logger:
    """
    Get a logger for a specific component.

    Args:
        component: Component name (e.g., "dispatch", "git", "discovery")

    Returns:
        Logger instance for the component
    """
    return logging.getLogger(f"monohooks.{component}")
