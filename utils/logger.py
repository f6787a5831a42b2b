"""Logging configuration for skill-manager."""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from .runtime import get_log_dir

_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Set once setup_logger() has attached its handlers
_log_file_path: Optional[str] = None


def setup_logger(
    log_dir: Optional[str] = None,
    log_level: Optional[str] = None,
    log_to_console: bool = False,
) -> Optional[str]:
    """Attach the file (and optionally console) handlers to the root logger.

    Called once from the CLI when --verbose is given. Without it, module
    loggers have no handlers and records are dropped.

    Args:
        log_dir: Directory to store log files (default: ~/.skill-manager/logs/)
        log_level: Logging level name; falls back to Config.LOG_LEVEL
        log_to_console: Also echo warnings and errors to stderr

    Returns:
        Path of the log file in use
    """
    global _log_file_path

    if _log_file_path is not None:
        return _log_file_path

    if log_level is None:
        from config import Config

        log_level = Config.LOG_LEVEL

    level = getattr(logging, log_level.upper(), logging.DEBUG)
    logging.root.setLevel(level)
    formatter = logging.Formatter(_LOG_FORMAT, datefmt=_DATE_FORMAT)

    log_path = Path(log_dir or get_log_dir())
    log_path.mkdir(exist_ok=True, parents=True)
    log_file = log_path / f"skill-manager_{datetime.now():%Y%m%d_%H%M%S}.log"

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)
    logging.root.addHandler(file_handler)

    if log_to_console:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.WARNING)
        console_handler.setFormatter(formatter)
        logging.root.addHandler(console_handler)

    _log_file_path = str(log_file)
    logging.info(f"Logging initialized. Level: {log_level}, File: {_log_file_path}")
    return _log_file_path


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for a module.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


def get_log_file_path() -> Optional[str]:
    """Get the path to the current log file, or None if file logging is off."""
    return _log_file_path
