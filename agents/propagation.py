"""Copy a skill bundle from the active agent root into its sibling agent root."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import aiofiles.os

from errors import ConflictError, InvalidStateError, NotFoundError
from skills.fileops import copy_tree, modified_at
from skills.types import MANIFEST_NAME, SkillState, check_entry_name
from utils import get_logger

from .locator import AgentContext, AgentKind, PackageLocator, resolve_agent_context

logger = get_logger(__name__)


@dataclass(frozen=True)
class ConflictInfo:
    exists: bool
    target_agent: AgentKind
    is_disabled: bool
    source_modified: str | None
    target_modified: str | None

    def to_dict(self) -> dict[str, Any]:
        return {
            "exists": self.exists,
            "targetAgent": self.target_agent.value,
            "isDisabled": self.is_disabled,
            "sourceModified": self.source_modified,
            "targetModified": self.target_modified,
        }


def _other_root(context: AgentContext) -> tuple[AgentKind, Path]:
    if not context.installed:
        raise InvalidStateError(
            "Not installed inside a .claude or .codex directory; there is no other agent"
        )
    other = context.kind.other
    root = context.agent_root(other)
    if root is None:
        raise InvalidStateError(f"No project directory to look for {other.display_name} in")
    return other, root


def _source_dir(context: AgentContext, name: str, currently_enabled: bool) -> Path:
    state = SkillState.from_enabled(currently_enabled)
    return state.root(context.base_dir) / name


async def check_conflict(
    name: str, currently_enabled: bool, locator: PackageLocator | None = None
) -> ConflictInfo:
    """Report whether ``name`` already exists in the other agent's roots."""
    check_entry_name(name)
    context = resolve_agent_context(locator)
    other, other_root = _other_root(context)
    source = _source_dir(context, name, currently_enabled)

    for state in SkillState:
        target = state.root(other_root) / name
        if await aiofiles.os.path.exists(target):
            return ConflictInfo(
                exists=True,
                target_agent=other,
                is_disabled=state is SkillState.DISABLED,
                source_modified=await modified_at(source / MANIFEST_NAME),
                target_modified=await modified_at(target / MANIFEST_NAME),
            )
    return ConflictInfo(
        exists=False,
        target_agent=other,
        is_disabled=False,
        source_modified=await modified_at(source / MANIFEST_NAME),
        target_modified=None,
    )


async def copy_skill_to_other_agent(
    name: str, currently_enabled: bool, locator: PackageLocator | None = None
) -> Path:
    """Copy a skill into the other agent's enabled root.

    The copy always lands enabled. The other agent root must already
    exist; only its ``skills`` directory is created on demand.

    Returns:
        The new bundle directory.

    Raises:
        InvalidStateError: Not installed in an agent tree or ``name`` is not a
            single directory name
        NotFoundError: Other agent root or source skill missing
        ConflictError: Name already present in the other agent (enabled or
            disabled; ``location`` tells which)
        OSError: Copy failed part way (no cleanup)
    """
    check_entry_name(name)
    context = resolve_agent_context(locator)
    other, other_root = _other_root(context)

    if not await aiofiles.os.path.isdir(other_root):
        raise NotFoundError(
            f"{other.display_name} directory {other_root} does not exist; set it up first"
        )

    source = _source_dir(context, name, currently_enabled)
    if not await aiofiles.os.path.isdir(source):
        raise NotFoundError(f"Skill '{name}' not found at {source}")

    enabled_root = SkillState.ENABLED.root(other_root)
    await aiofiles.os.makedirs(enabled_root, exist_ok=True)

    if await aiofiles.os.path.exists(enabled_root / name):
        raise ConflictError(
            f"Skill '{name}' already exists in {other.display_name} (enabled)",
            name=name,
            location=SkillState.ENABLED,
        )
    if await aiofiles.os.path.exists(SkillState.DISABLED.root(other_root) / name):
        raise ConflictError(
            f"Skill '{name}' already exists in {other.display_name} (disabled)",
            name=name,
            location=SkillState.DISABLED,
        )

    destination = enabled_root / name
    await copy_tree(source, destination)
    logger.info(f"Copied skill '{name}' from {source} to {destination}")
    return destination
