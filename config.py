"""Configuration management for skill-manager."""

import os

# Define path constants directly to avoid circular imports with utils
# (utils.terminal_ui imports Config, and utils.runtime is in the utils package)
_RUNTIME_DIR = os.path.join(os.path.expanduser("~"), ".skill-manager")
_CONFIG_FILE = os.path.join(_RUNTIME_DIR, "config")

# Default configuration template
_DEFAULT_CONFIG = """\
# skill-manager Configuration

# Display name of the category created for a fresh project
DEFAULT_CATEGORY=Uncategorized

# File (inside the agent root) that stores category assignments
CATEGORY_CONFIG_FILE=skill-manager-config.json

# Name of the launcher shortcut written to <agent root>/commands/
SHORTCUT_NAME=skill-manager

# Optional settings
LOG_LEVEL=DEBUG
TUI_THEME=dark
"""


def _load_config(path: str) -> dict[str, str]:
    """Parse a KEY=VALUE config file, skipping comments and blank lines."""
    cfg: dict[str, str] = {}
    if not os.path.isfile(path):
        return cfg
    with open(path, encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" not in line:
                continue
            key, _, value = line.partition("=")
            # Strip inline comments (# ...) from the value
            if "#" in value:
                value = value[: value.index("#")]
            cfg[key.strip()] = value.strip()
    return cfg


def _ensure_config():
    """Ensure ~/.skill-manager/config exists, create with defaults if not."""
    if not os.path.exists(_CONFIG_FILE):
        os.makedirs(_RUNTIME_DIR, exist_ok=True)
        with open(_CONFIG_FILE, "w", encoding="utf-8") as f:
            f.write(_DEFAULT_CONFIG)


# Ensure config exists and load it
_ensure_config()
_cfg = _load_config(_CONFIG_FILE)


class Config:
    """Configuration for skill-manager.

    All configuration is centralized here. Access config values directly via Config.XXX.
    """

    # Category store
    DEFAULT_CATEGORY = _cfg.get("DEFAULT_CATEGORY") or "Uncategorized"
    CATEGORY_CONFIG_FILE = _cfg.get("CATEGORY_CONFIG_FILE") or "skill-manager-config.json"

    # Launcher shortcut (<agent root>/commands/<SHORTCUT_NAME>.md)
    SHORTCUT_NAME = _cfg.get("SHORTCUT_NAME") or "skill-manager"

    # Description fallback length (characters, not bytes)
    DESCRIPTION_MAX_CHARS = int(_cfg.get("DESCRIPTION_MAX_CHARS", "100"))

    # Logging Configuration
    # Note: Logging is controlled via --verbose flag
    # LOG_DIR is ~/.skill-manager/logs/ (see utils.runtime)
    LOG_LEVEL = _cfg.get("LOG_LEVEL", "DEBUG").upper()

    # Terminal output
    TUI_THEME = _cfg.get("TUI_THEME", "dark")  # "dark" or "light"

    @classmethod
    def validate(cls):
        """Validate required configuration.

        Raises:
            ValueError: If configuration is unusable
        """
        if not cls.CATEGORY_CONFIG_FILE.endswith(".json"):
            raise ValueError(
                "CATEGORY_CONFIG_FILE must name a .json file. "
                "Please fix it in ~/.skill-manager/config.\n"
                "Example: CATEGORY_CONFIG_FILE=skill-manager-config.json"
            )
        if os.sep in cls.SHORTCUT_NAME or not cls.SHORTCUT_NAME.strip():
            raise ValueError("SHORTCUT_NAME must be a plain file name without directories.")
        if cls.DESCRIPTION_MAX_CHARS <= 0:
            raise ValueError("DESCRIPTION_MAX_CHARS must be a positive integer.")
