"""Persisted user settings (remembered project path) with YAML storage."""

from __future__ import annotations

import os
import tempfile
from contextlib import suppress
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from utils import get_logger
from utils.runtime import get_settings_file

logger = get_logger(__name__)

SETTINGS_HEADER = "# skill-manager settings\n# Managed by `skill-manager project`\n\n"


@dataclass
class AppSettings:
    """Settings that survive between runs."""

    project_path: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"project_path": self.project_path}


class SettingsStore:
    """Reads and writes ``settings.yaml``.

    The store never caches: every ``load()`` re-reads the file so that the
    caller always sees the last saved project path.
    """

    def __init__(self, settings_path: str | None = None):
        self.settings_path = settings_path or get_settings_file()

    def _atomic_write(self, content: str) -> None:
        directory = os.path.dirname(self.settings_path) or "."
        os.makedirs(directory, exist_ok=True)

        fd, tmp_path = tempfile.mkstemp(prefix=".settings.", suffix=".tmp", dir=directory)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
            os.replace(tmp_path, self.settings_path)
        finally:
            with suppress(OSError):
                os.unlink(tmp_path)

    def load(self) -> AppSettings:
        if not os.path.exists(self.settings_path):
            return AppSettings()

        try:
            with open(self.settings_path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Ignoring unreadable settings file {self.settings_path}: {e}")
            return AppSettings()

        if not isinstance(data, dict):
            logger.warning(f"Invalid settings format in {self.settings_path}, expected a mapping")
            return AppSettings()

        project_path = data.get("project_path")
        if project_path is not None and not isinstance(project_path, str):
            project_path = str(project_path)
        return AppSettings(project_path=project_path or None)

    def save(self, settings: AppSettings) -> None:
        body = yaml.safe_dump(settings.to_dict(), sort_keys=False, allow_unicode=True)
        self._atomic_write(SETTINGS_HEADER + body)
        logger.info(f"Saved settings to {self.settings_path}")

    def set_project_path(self, path: str | Path) -> AppSettings:
        resolved = str(Path(path).expanduser().resolve())
        settings = self.load()
        settings.project_path = resolved
        self.save(settings)
        return settings
