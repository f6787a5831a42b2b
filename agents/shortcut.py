"""Slash command that launches the installed application from the agent."""

from __future__ import annotations

import sys
from pathlib import Path

import aiofiles.os

from config import Config
from errors import InvalidStateError
from skills.commands import COMMANDS_DIR
from skills.fileops import write_text
from utils import get_logger

from .locator import AgentKind, PackageLocator, default_locator, resolve_agent_context

logger = get_logger(__name__)

_FRONTMATTER = """\
---
description: Open the skill manager for this project
allowed-tools: Bash({tool}:*)
---
"""

_TEMPLATES = {
    "darwin": ("open", '!`open -n "{package}"`'),
    "win32": ("cmd.exe", '!`cmd.exe /c start "" "{package}"`'),
    "linux": ("nohup", '!`nohup "{package}" >/dev/null 2>&1 &`'),
}

_FOOTER = "\nThe skill manager has been opened in a separate window. Nothing else to do.\n"


def render_shortcut(package: Path, platform: str | None = None) -> str:
    platform = platform or sys.platform
    tool, line = _TEMPLATES.get(platform, _TEMPLATES["linux"])
    return _FRONTMATTER.format(tool=tool) + "\n" + line.format(package=package) + "\n" + _FOOTER


def shortcut_path(base_dir: Path) -> Path:
    return base_dir / COMMANDS_DIR / f"{Config.SHORTCUT_NAME}.md"


def can_offer_command_shortcut(locator: PackageLocator | None = None) -> bool:
    context = resolve_agent_context(locator)
    if context.kind is not AgentKind.CLAUDE:
        return False
    return not shortcut_path(context.base_dir).exists()


async def install_command_shortcut(
    locator: PackageLocator | None = None, platform: str | None = None
) -> Path:
    """Write ``commands/<SHORTCUT_NAME>.md``; rewrites the file if present.

    Raises:
        InvalidStateError: Not running from a .claude directory
        OSError: The file could not be written
    """
    locator = locator or default_locator()
    context = resolve_agent_context(locator)
    if context.kind is not AgentKind.CLAUDE:
        raise InvalidStateError("Command shortcuts are only available inside .claude")

    path = shortcut_path(context.base_dir)
    await aiofiles.os.makedirs(path.parent, exist_ok=True)
    await write_text(path, render_shortcut(locator.locate_own_package(), platform))
    logger.info(f"Wrote command shortcut {path}")
    return path
