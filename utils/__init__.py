"""Utility modules for skill-manager."""

from .logger import get_log_file_path, get_logger, setup_logger

# Note: terminal_ui, runtime and settings are NOT exported here to avoid
# circular imports (terminal_ui imports Config). Import them directly:
#   from utils import terminal_ui
#   from utils.settings import SettingsStore

__all__ = [
    "setup_logger",
    "get_logger",
    "get_log_file_path",
]
