"""Operation surface used by the front end (the CLI in this repository).

Every call resolves the agent root afresh: the root hosting the running
application when it lives in ``.claude``/``.codex``, otherwise
``<project_path>/.claude`` from the remembered settings.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

import aiofiles.os

from agents import (
    AgentContext,
    AgentKind,
    ConflictInfo,
    Launcher,
    PackageLocator,
    RelocationResult,
    default_locator,
    list_available_agents,
    resolve_agent_context,
)
from agents import propagation, relocation, shortcut
from categories import CategoryConfig, CategoryStore
from errors import ConfigurationError, NotFoundError
from skills import AssetEntry, CommandEntry, ScanReport, SkillEntry, SkillRegistry, SkillState
from skills import commands
from skills.fileops import list_entries, read_text, write_text
from utils import get_logger
from utils.settings import SettingsStore

logger = get_logger(__name__)


class SkillService:
    def __init__(
        self,
        locator: PackageLocator | None = None,
        launcher: Launcher | None = None,
        settings: SettingsStore | None = None,
    ) -> None:
        self.locator = locator or default_locator()
        self.launcher = launcher
        self.settings = settings or SettingsStore()

    # Agent context

    def get_agent_context(self) -> AgentContext:
        return resolve_agent_context(self.locator)

    def get_agent_kind(self) -> AgentKind:
        return self.get_agent_context().kind

    def list_available_agent_kinds(self) -> set[AgentKind]:
        return list_available_agents(self.locator)

    def base_dir(self) -> Path:
        """Resolve the agent root for registry and category operations.

        Raises:
            ConfigurationError: Neither installed in an agent tree nor a
                project path configured
        """
        context = self.get_agent_context()
        if context.installed:
            return context.base_dir
        project_path = self.settings.load().project_path
        if project_path:
            return Path(project_path) / AgentKind.CLAUDE.directory_name
        raise ConfigurationError(
            "Project path not set. Run `skill-manager project <path>` "
            "or install the application inside a project's .claude directory."
        )

    def get_project_path(self) -> str | None:
        context = self.get_agent_context()
        if context.project_root is not None:
            return str(context.project_root)
        return self.settings.load().project_path

    def set_project_path(self, path: str | Path) -> str:
        if not Path(path).expanduser().is_dir():
            raise NotFoundError(f"Project directory {path} does not exist")
        settings = self.settings.set_project_path(path)
        if settings.project_path is None:
            raise ConfigurationError(f"Project path {path} was not saved")
        return settings.project_path

    # Skills

    def registry(self) -> SkillRegistry:
        return SkillRegistry(self.base_dir())

    async def scan_skills(self) -> ScanReport:
        return await self.registry().scan()

    async def list_skills(self) -> list[SkillEntry]:
        return await self.registry().load()

    async def set_skill_enabled(self, name: str, enabled: bool) -> bool:
        return await self.registry().toggle(name, enabled)

    async def set_skills_enabled(self, names: Iterable[str], enabled: bool) -> list[str]:
        return await self.registry().set_many(names, enabled)

    async def delete_skill(self, name: str, enabled: bool) -> None:
        """Delete the bundle and drop the name from every category."""
        base_dir = self.base_dir()
        await SkillRegistry(base_dir).delete(name, SkillState.from_enabled(enabled))
        store = CategoryStore(base_dir)
        config = await store.load()
        if config.category_of(name) is not None:
            await store.save(config.forget_skill(name))

    # Categories

    async def load_categories(self) -> CategoryConfig:
        return await CategoryStore(self.base_dir()).load()

    async def save_categories(self, config: CategoryConfig) -> None:
        await CategoryStore(self.base_dir()).save(config)

    # Slash commands

    async def list_commands(self) -> list[CommandEntry]:
        return await commands.load_commands(self.base_dir())

    async def set_command_enabled(self, name: str, enabled: bool) -> bool:
        return await commands.set_command_enabled(self.base_dir(), name, enabled)

    # Plain file access for the skill preview/editor

    async def read_text_file(self, path: str | Path) -> str:
        return await read_text(Path(path))

    async def write_text_file(self, path: str | Path, content: str) -> None:
        await write_text(Path(path), content)

    async def list_directory(self, path: str | Path) -> list[AssetEntry]:
        directory = Path(path)
        if not await aiofiles.os.path.isdir(directory):
            raise NotFoundError(f"Not a directory: {directory}")
        return await list_entries(directory)

    # Cross-agent and relocation

    async def check_skill_conflict(self, name: str, enabled: bool) -> ConflictInfo:
        return await propagation.check_conflict(name, enabled, self.locator)

    async def copy_skill_to_other_agent(self, name: str, enabled: bool) -> Path:
        return await propagation.copy_skill_to_other_agent(name, enabled, self.locator)

    async def switch_agent_type(self, kind: AgentKind) -> RelocationResult | None:
        return await relocation.switch_agent_type(kind, self.locator, self.launcher)

    async def install_into(self, project_path: str | Path) -> RelocationResult:
        return await relocation.install_into(project_path, self.locator, self.launcher)

    def can_offer_command_shortcut(self) -> bool:
        return shortcut.can_offer_command_shortcut(self.locator)

    async def install_command_shortcut(self) -> Path:
        return await shortcut.install_command_shortcut(self.locator)
