"""Copy the running application into another agent root and start the copy.

Relocation is two steps so staging can be checked without spawning a
process:

1. ``stage_package_copy`` - pure file work, undone by deleting the result.
2. ``Launcher.launch`` - starts the staged copy as an independent process.

The current process keeps running; old and new instances may coexist.
Nothing is rolled back when a step fails.
"""

from __future__ import annotations

import asyncio
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import aiofiles.os

from errors import InvalidStateError, LaunchError
from skills.fileops import copy_file, copy_tree, remove_tree
from utils import get_logger

from .locator import AgentKind, PackageLocator, default_locator, resolve_agent_context

logger = get_logger(__name__)


class Launcher:
    """Starts a staged package. Subclass (or fake) in tests."""

    async def launch(self, path: Path) -> Any:
        raise NotImplementedError


class SubprocessLauncher(Launcher):
    """Launch through the platform's native facility, detached from us."""

    def __init__(self, platform: str | None = None) -> None:
        self.platform = platform or sys.platform

    def command_for(self, path: Path) -> list[str]:
        if self.platform == "darwin" and path.suffix == ".app":
            return ["open", "-n", str(path)]
        if path.suffix == ".py":
            return [sys.executable, str(path)]
        return [str(path)]

    async def launch(self, path: Path) -> asyncio.subprocess.Process:
        cmd = self.command_for(path)
        kwargs: dict[str, Any] = {
            "stdin": asyncio.subprocess.DEVNULL,
            "stdout": asyncio.subprocess.DEVNULL,
            "stderr": asyncio.subprocess.DEVNULL,
        }
        if os.name == "posix":
            kwargs["start_new_session"] = True
        try:
            process = await asyncio.create_subprocess_exec(*cmd, **kwargs)
        except OSError as e:
            raise LaunchError(f"Failed to launch {path}: {e}") from e
        logger.info(f"Launched {path} (pid {process.pid})")
        return process


@dataclass(frozen=True)
class RelocationResult:
    staged_path: Path
    process: Any


async def stage_package_copy(dest_root: Path, locator: PackageLocator | None = None) -> Path:
    """Copy the running package into ``dest_root``, replacing a prior copy.

    Returns:
        Path of the staged package (bundle directory or executable file).

    Raises:
        InvalidStateError: ``dest_root`` is where the package already runs from
        OSError: Directory creation, stale copy removal or copy failed
    """
    locator = locator or default_locator()
    package = locator.locate_own_package()
    staged = Path(dest_root) / package.name

    if staged.resolve() == package.resolve():
        raise InvalidStateError(f"The application already runs from {staged}")

    await aiofiles.os.makedirs(dest_root, exist_ok=True)
    await remove_tree(staged)
    if await aiofiles.os.path.isdir(package):
        await copy_tree(package, staged)
    else:
        await copy_file(package, staged)
    logger.info(f"Staged {package} at {staged}")
    return staged


async def launch_staged(staged: Path, launcher: Launcher | None = None) -> Any:
    return await (launcher or SubprocessLauncher()).launch(staged)


async def _relocate(
    dest_root: Path, locator: PackageLocator | None, launcher: Launcher | None
) -> RelocationResult:
    staged = await stage_package_copy(dest_root, locator)
    process = await launch_staged(staged, launcher)
    return RelocationResult(staged_path=staged, process=process)


async def install_into(
    project_path: str | Path,
    locator: PackageLocator | None = None,
    launcher: Launcher | None = None,
) -> RelocationResult:
    """Install a copy under ``<project_path>/.claude`` and start it."""
    target = Path(project_path).expanduser().resolve() / AgentKind.CLAUDE.directory_name
    logger.info(f"Installing into {target}")
    return await _relocate(target, locator, launcher)


async def switch_agent_type(
    kind: AgentKind,
    locator: PackageLocator | None = None,
    launcher: Launcher | None = None,
) -> RelocationResult | None:
    """Install a copy under the sibling root for ``kind`` and start it.

    Returns None (and does nothing) when already running as ``kind``.
    """
    if kind is AgentKind.NONE:
        raise InvalidStateError("Cannot switch to agent kind 'none'")
    context = resolve_agent_context(locator)
    if context.kind is kind:
        logger.debug(f"Already running as {kind.value}, nothing to switch")
        return None
    target = context.agent_root(kind)
    if target is None:
        raise InvalidStateError(
            "Not installed inside a project agent directory; use install instead"
        )
    logger.info(f"Switching from {context.kind.value} to {kind.value} at {target}")
    return await _relocate(target, locator, launcher)
