"""Shared fixtures: a project with agent roots and a fake installed executable."""

import textwrap
from pathlib import Path

import pytest

from agents import BundleLocator, FlatLocator, Launcher
from service import SkillService
from utils.settings import SettingsStore


def write_skill(root: Path, name: str, manifest: str, assets: dict | None = None) -> Path:
    """Create ``root/name/SKILL.md`` plus optional asset files."""
    skill_dir = root / name
    skill_dir.mkdir(parents=True, exist_ok=True)
    (skill_dir / "SKILL.md").write_text(textwrap.dedent(manifest).strip() + "\n", encoding="utf-8")
    for rel, content in (assets or {}).items():
        target = skill_dir / rel
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
    return skill_dir


class FakeLauncher(Launcher):
    """Records launches instead of spawning processes."""

    def __init__(self, error: Exception | None = None):
        self.launched: list[Path] = []
        self.error = error

    async def launch(self, path: Path):
        if self.error is not None:
            raise self.error
        self.launched.append(path)
        return {"pid": 4242, "path": path}


@pytest.fixture
def project(tmp_path) -> Path:
    root = tmp_path / "project"
    (root / ".claude").mkdir(parents=True)
    return root


@pytest.fixture
def claude_root(project) -> Path:
    return project / ".claude"


@pytest.fixture
def flat_executable(claude_root) -> Path:
    exe = claude_root / "skill-manager"
    exe.write_text("#!/bin/sh\necho skill-manager\n", encoding="utf-8")
    exe.chmod(0o755)
    return exe


@pytest.fixture
def claude_locator(flat_executable) -> FlatLocator:
    return FlatLocator(flat_executable)


@pytest.fixture
def codex_locator(project) -> FlatLocator:
    codex = project / ".codex"
    codex.mkdir(exist_ok=True)
    exe = codex / "skill-manager"
    exe.write_text("#!/bin/sh\n", encoding="utf-8")
    return FlatLocator(exe)


@pytest.fixture
def bundle_locator(claude_root) -> BundleLocator:
    macos = claude_root / "Skill Manager.app" / "Contents" / "MacOS"
    macos.mkdir(parents=True)
    (macos / "skill-manager").write_text("binary", encoding="utf-8")
    resources = claude_root / "Skill Manager.app" / "Contents" / "Resources"
    resources.mkdir()
    (resources / "icon.icns").write_text("icon", encoding="utf-8")
    (claude_root / "Skill Manager.app" / "Contents" / "Info.plist").write_text(
        "<plist/>", encoding="utf-8"
    )
    return BundleLocator(macos / "skill-manager")


@pytest.fixture
def outside_locator(tmp_path) -> FlatLocator:
    bin_dir = tmp_path / "Downloads"
    bin_dir.mkdir()
    exe = bin_dir / "skill-manager"
    exe.write_text("#!/bin/sh\n", encoding="utf-8")
    return FlatLocator(exe)


@pytest.fixture
def settings_store(tmp_path) -> SettingsStore:
    return SettingsStore(str(tmp_path / "runtime" / "settings.yaml"))


@pytest.fixture
def launcher() -> FakeLauncher:
    return FakeLauncher()


@pytest.fixture
def service(claude_locator, launcher, settings_store) -> SkillService:
    return SkillService(locator=claude_locator, launcher=launcher, settings=settings_store)
