"""Runtime directory management for skill-manager.

All runtime data is stored under ~/.skill-manager/ directory:
- config: Configuration file (created by config.py on first import)
- settings.yaml: Remembered project path
- logs/: Log files (only created with --verbose)
"""

import os

RUNTIME_DIR = os.path.join(os.path.expanduser("~"), ".skill-manager")


def get_runtime_dir() -> str:
    """Get the runtime directory path.

    Returns:
        Path to ~/.skill-manager directory
    """
    return RUNTIME_DIR


def get_config_file() -> str:
    """Get the configuration file path.

    Returns:
        Path to ~/.skill-manager/config
    """
    return os.path.join(RUNTIME_DIR, "config")


def get_settings_file() -> str:
    """Get the settings file path.

    Returns:
        Path to ~/.skill-manager/settings.yaml
    """
    return os.path.join(RUNTIME_DIR, "settings.yaml")


def get_log_dir() -> str:
    """Get the log directory path.

    Returns:
        Path to ~/.skill-manager/logs/
    """
    return os.path.join(RUNTIME_DIR, "logs")


def ensure_runtime_dirs(create_logs: bool = False) -> None:
    """Ensure runtime directories exist.

    Note: ~/.skill-manager/config is created by config.py on first import.

    Args:
        create_logs: Whether to create the logs directory (for --verbose mode)
    """
    os.makedirs(RUNTIME_DIR, exist_ok=True)

    if create_logs:
        os.makedirs(get_log_dir(), exist_ok=True)
