"""Centralized logging configuration for ROVOCS."""

import logging
import logging.config
import os
import sys

from pathlib import Path
from typing import Any

from rovocs.constants import (
    DEFAULT_LOG_BACKUP_COUNT,
    DEFAULT_LOG_DIR,
    DEFAULT_LOG_FILE,
)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_logging_configured = False


def get_log_path() -> Path:
    """
    Get path to the active log file, creating its directory if needed.

    Returns:
        Path to rovocs.log
    """
    os.makedirs(DEFAULT_LOG_DIR, mode=0o700, exist_ok=True)
    return DEFAULT_LOG_DIR / DEFAULT_LOG_FILE


def _get_user_logging_config() -> dict[str, Any]:
    """Read the [logging] table, or an empty dict if absent or malformed."""
    from rovocs.config import load_config

    logging_config = load_config().get("logging", {})
    if isinstance(logging_config, dict):
        return logging_config
    return {}


def _build_logging_config(
    verbose: bool = False,
    console_format: str | None = None,
) -> dict[str, Any]:
    """
    Build the dictConfig configuration dictionary.

    File logging is on by default and can be turned off with
    `enabled = false` under [logging]; `level`, `max_size_mb` and
    `backup_count` tune the rotating file handler.

    Args:
        verbose: If True, set console to DEBUG level
        console_format: Override console format string

    Returns:
        Dictionary suitable for logging.config.dictConfig()
    """
    user_config = _get_user_logging_config()

    config: dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "console": {"format": console_format or LOG_FORMAT},
            "file": {"format": LOG_FORMAT},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": "DEBUG" if verbose else "WARNING",
                "formatter": "console",
                "stream": "ext://sys.stderr",
            },
        },
        "loggers": {
            "rovocs": {"level": "DEBUG", "handlers": ["console"], "propagate": False},
        },
    }

    if user_config.get("enabled", True):
        config["handlers"]["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": str(user_config.get("level", "INFO")).upper(),
            "formatter": "file",
            "filename": str(get_log_path()),
            "maxBytes": int(user_config.get("max_size_mb", 10)) * 1024 * 1024,
            "backupCount": int(
                user_config.get("backup_count", DEFAULT_LOG_BACKUP_COUNT)
            ),
            "encoding": "utf-8",
        }
        config["loggers"]["rovocs"]["handlers"].append("file")

    return config


def setup_logging(
    *,
    verbose: bool = False,
    console_format: str | None = None,
) -> None:
    """
    Configure logging for the ROVOCS command-line tools.

    Library use never calls this; embedding services configure logging
    themselves. Repeated calls are ignored.

    Args:
        verbose: If True, show DEBUG output (per-tick transitions) on stderr
        console_format: Override console format string
    """
    global _logging_configured

    if _logging_configured:
        return

    try:
        config = _build_logging_config(verbose=verbose, console_format=console_format)
        logging.config.dictConfig(config)
    except (OSError, ValueError) as e:
        sys.stderr.write(f"WARNING: Failed to configure logging: {e}\n")
        logging.basicConfig(
            level=logging.DEBUG if verbose else logging.WARNING,
            format=console_format or "%(levelname)s: %(message)s",
        )

    _logging_configured = True
