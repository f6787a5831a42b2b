"""Skills registry implementation.

A skill's enabled/disabled state is persisted by the directory that holds
its bundle::

    <agent root>/skills/<name>/SKILL.md            enabled
    <agent root>/disabled-skills/<name>/SKILL.md   disabled

Scanning is best effort: an unreadable manifest or asset listing never
aborts the listing, it is recorded as a ``ScanIssue`` instead.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Iterable

import aiofiles.os

from config import Config
from errors import NotFoundError
from utils import get_logger

from .fileops import list_entries, read_text, remove_tree
from .parser import extract_description
from .types import (
    MANIFEST_NAME,
    ScanIssue,
    ScanReport,
    SkillEntry,
    SkillState,
    check_entry_name,
)

logger = get_logger(__name__)


def find_manifests(root: Path) -> tuple[list[Path], list[ScanIssue]]:
    """Walk ``root`` two levels deep (root -> skill dir -> SKILL.md)."""
    manifests: list[Path] = []
    issues: list[ScanIssue] = []
    if not root.is_dir():
        return manifests, issues

    if (root / MANIFEST_NAME).is_file():
        issues.append(ScanIssue(root / MANIFEST_NAME, "manifest outside a skill directory"))

    try:
        children = sorted(root.iterdir())
    except OSError as e:
        issues.append(ScanIssue(root, f"cannot list directory: {e}"))
        return manifests, issues

    for entry in children:
        if not entry.is_dir():
            continue
        candidate = entry / MANIFEST_NAME
        if candidate.is_file():
            manifests.append(candidate)
    return manifests, issues


class SkillRegistry:
    """Discover and toggle the skill bundles of one agent root."""

    def __init__(self, base_dir: Path) -> None:
        self.base_dir = Path(base_dir)

    def root(self, state: SkillState) -> Path:
        return state.root(self.base_dir)

    @property
    def enabled_root(self) -> Path:
        return self.root(SkillState.ENABLED)

    @property
    def disabled_root(self) -> Path:
        return self.root(SkillState.DISABLED)

    def bundle_path(self, name: str, state: SkillState) -> Path:
        return self.root(state) / check_entry_name(name)

    async def scan(self) -> ScanReport:
        """Build a fresh snapshot of every bundle in both roots."""
        issues: list[ScanIssue] = []
        try:
            await aiofiles.os.makedirs(self.enabled_root, exist_ok=True)
        except OSError as e:
            issues.append(ScanIssue(self.enabled_root, f"cannot create directory: {e}"))

        skills: list[SkillEntry] = []
        for state in (SkillState.ENABLED, SkillState.DISABLED):
            manifests, walk_issues = await asyncio.to_thread(find_manifests, self.root(state))
            issues.extend(walk_issues)
            for manifest in manifests:
                skills.append(await self._load_entry(manifest, state, issues))

        skills.sort(key=lambda s: s.name)
        for name in ScanReport(skills).duplicates():
            logger.warning(f"Skill '{name}' exists in both enabled and disabled roots")
            issues.append(
                ScanIssue(self.bundle_path(name, SkillState.DISABLED), "duplicate of an enabled skill")
            )
        logger.debug(f"Scanned {len(skills)} skills under {self.base_dir} ({len(issues)} issues)")
        return ScanReport(skills=skills, issues=issues)

    async def load(self) -> list[SkillEntry]:
        return (await self.scan()).skills

    async def _load_entry(
        self, manifest: Path, state: SkillState, issues: list[ScanIssue]
    ) -> SkillEntry:
        skill_dir = manifest.parent
        try:
            content = await read_text(manifest)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Cannot read manifest {manifest}: {e}")
            issues.append(ScanIssue(manifest, f"unreadable manifest: {e}"))
            content = ""

        try:
            files = await list_entries(skill_dir, exclude={MANIFEST_NAME})
        except OSError as e:
            issues.append(ScanIssue(skill_dir, f"cannot list assets: {e}"))
            files = []

        return SkillEntry(
            name=skill_dir.name,
            description=extract_description(content, Config.DESCRIPTION_MAX_CHARS),
            state=state,
            content=content,
            manifest_path=manifest,
            files=files,
        )

    async def ensure_roots(self) -> None:
        for state in SkillState:
            await aiofiles.os.makedirs(self.root(state), exist_ok=True)

    async def set_state(self, name: str, target: SkillState) -> bool:
        """Move a bundle into the root that persists ``target``.

        Returns:
            True if the bundle moved, False if there was nothing to move.

        Raises:
            OSError: If the rename fails (destination exists, cross-device,
                permissions). The state is unchanged in that case.
            InvalidStateError: If ``name`` is not a single directory name.
        """
        src = self.bundle_path(name, target.opposite)
        dst = self.bundle_path(name, target)
        await self.ensure_roots()

        if not await aiofiles.os.path.exists(src):
            logger.debug(f"Skill '{name}' not in {src.parent}, nothing to move")
            return False

        await aiofiles.os.rename(src, dst)
        logger.info(f"Skill '{name}' is now {target.label}")
        return True

    async def toggle(self, name: str, enabled: bool) -> bool:
        return await self.set_state(name, SkillState.from_enabled(enabled))

    async def set_many(self, names: Iterable[str], enabled: bool) -> list[str]:
        """Apply one target state to several skills, stopping at the first failure.

        Returns:
            Names that actually moved.
        """
        names = [check_entry_name(name) for name in names]
        moved: list[str] = []
        for name in names:
            if await self.toggle(name, enabled):
                moved.append(name)
        return moved

    async def delete(self, name: str, state: SkillState) -> None:
        bundle = self.bundle_path(name, state)
        if not await aiofiles.os.path.isdir(bundle):
            raise NotFoundError(f"Skill '{name}' not found in {bundle.parent}")
        await remove_tree(bundle)
        logger.info(f"Deleted skill '{name}' from {bundle.parent}")
