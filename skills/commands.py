"""Slash command files stored next to the skills.

Commands are single markdown files; like skills, their state is the
directory that holds them (``commands/`` or ``disabled-commands/``).
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import aiofiles.os

from config import Config
from utils import get_logger

from .fileops import read_text
from .parser import extract_description
from .types import CommandEntry, check_entry_name

logger = get_logger(__name__)

COMMANDS_DIR = "commands"
DISABLED_COMMANDS_DIR = "disabled-commands"


def _command_root(base_dir: Path, enabled: bool) -> Path:
    return base_dir / (COMMANDS_DIR if enabled else DISABLED_COMMANDS_DIR)


async def list_command_files(commands_dir: Path) -> list[Path]:
    if not await aiofiles.os.path.exists(commands_dir):
        return []

    def _collect() -> list[Path]:
        return sorted(p for p in commands_dir.glob("*.md") if p.is_file())

    return await asyncio.to_thread(_collect)


async def load_commands(base_dir: Path) -> list[CommandEntry]:
    """List enabled and disabled slash commands, sorted by name.

    The launcher shortcut written by the shortcut installer is not a user
    command and is left out.
    """
    shortcut = f"{Config.SHORTCUT_NAME}.md"
    results: list[CommandEntry] = []
    for enabled in (True, False):
        for path in await list_command_files(_command_root(base_dir, enabled)):
            if enabled and path.name == shortcut:
                continue
            try:
                content = await read_text(path)
            except (OSError, UnicodeDecodeError) as e:
                logger.warning(f"Cannot read command {path}: {e}")
                content = ""
            results.append(
                CommandEntry(
                    name=path.stem,
                    description=extract_description(content, Config.DESCRIPTION_MAX_CHARS),
                    enabled=enabled,
                    content=content,
                    path=path,
                )
            )
    results.sort(key=lambda c: c.name)
    return results


async def set_command_enabled(base_dir: Path, name: str, enabled: bool) -> bool:
    """Move ``<name>.md`` between the command roots; missing source is a no-op."""
    check_entry_name(name, kind="Command")
    src = _command_root(base_dir, not enabled) / f"{name}.md"
    dst_root = _command_root(base_dir, enabled)
    if not await aiofiles.os.path.exists(src):
        return False
    await aiofiles.os.makedirs(dst_root, exist_ok=True)
    await aiofiles.os.rename(src, dst_root / src.name)
    logger.info(f"Command '{name}' is now {'enabled' if enabled else 'disabled'}")
    return True
