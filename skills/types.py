"""Data models for the skills registry."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from errors import InvalidStateError

MANIFEST_NAME = "SKILL.md"


def check_entry_name(name: str, kind: str = "Skill") -> str:
    """Return ``name`` if it names exactly one entry inside a root directory.

    Raises:
        InvalidStateError: Empty, ``.`` or ``..``, or contains a path separator
    """
    separators = {"/", os.sep} | ({os.altsep} if os.altsep else set())
    if name in ("", ".", "..") or any(sep in name for sep in separators):
        raise InvalidStateError(f"{kind} name {name!r} is not a valid directory entry name")
    return name


class SkillState(Enum):
    """Enabled/disabled state of a skill bundle.

    The value is the directory (under the agent root) that persists the
    state on disk.
    """

    ENABLED = "skills"
    DISABLED = "disabled-skills"

    @classmethod
    def from_enabled(cls, enabled: bool) -> "SkillState":
        return cls.ENABLED if enabled else cls.DISABLED

    @property
    def dirname(self) -> str:
        return self.value

    @property
    def opposite(self) -> "SkillState":
        return SkillState.DISABLED if self is SkillState.ENABLED else SkillState.ENABLED

    @property
    def label(self) -> str:
        return "enabled" if self is SkillState.ENABLED else "disabled"

    def root(self, base_dir: Path) -> Path:
        return base_dir / self.value


@dataclass(frozen=True)
class AssetEntry:
    name: str
    path: Path
    is_directory: bool

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "path": str(self.path), "is_directory": self.is_directory}


@dataclass(frozen=True)
class SkillEntry:
    """Snapshot of one skill bundle, rebuilt on every scan."""

    name: str
    description: str
    state: SkillState
    content: str
    manifest_path: Path
    files: list[AssetEntry] = field(default_factory=list)

    @property
    def enabled(self) -> bool:
        return self.state is SkillState.ENABLED

    @property
    def directory(self) -> Path:
        return self.manifest_path.parent

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "enabled": self.enabled,
            "content": self.content,
            "path": str(self.manifest_path),
            "files": [f.to_dict() for f in self.files],
        }


@dataclass(frozen=True)
class ScanIssue:
    """A bundle (or part of one) that could not be read during a scan."""

    path: Path
    reason: str


@dataclass(frozen=True)
class ScanReport:
    skills: list[SkillEntry]
    issues: list[ScanIssue] = field(default_factory=list)

    def duplicates(self) -> list[str]:
        """Names present in both the enabled and the disabled root."""
        seen: dict[str, set[SkillState]] = {}
        for skill in self.skills:
            seen.setdefault(skill.name, set()).add(skill.state)
        return sorted(name for name, states in seen.items() if len(states) > 1)


@dataclass(frozen=True)
class CommandEntry:
    """A slash command markdown file under ``commands/``."""

    name: str
    description: str
    enabled: bool
    content: str
    path: Path

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "enabled": self.enabled,
            "content": self.content,
            "path": str(self.path),
        }
