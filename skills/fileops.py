"""File helpers shared by the registry, category store and agent modules."""

from __future__ import annotations

import asyncio
import os
import shutil
from datetime import datetime
from pathlib import Path

import aiofiles
import aiofiles.os

from .types import AssetEntry

COPY_CHUNK_SIZE = 1024 * 128


async def read_text(path: Path) -> str:
    async with aiofiles.open(path, encoding="utf-8") as handle:
        return await handle.read()


async def write_text(path: Path, content: str) -> None:
    async with aiofiles.open(path, "w", encoding="utf-8") as handle:
        await handle.write(content)


async def copy_file(src: Path, dst: Path) -> None:
    """Copy file contents and permission bits (keeps executables runnable)."""
    async with aiofiles.open(src, "rb") as reader, aiofiles.open(dst, "wb") as writer:
        while True:
            chunk = await reader.read(COPY_CHUNK_SIZE)
            if not chunk:
                break
            await writer.write(chunk)
    await asyncio.to_thread(shutil.copymode, src, dst)


async def copy_tree(src: Path, dst: Path) -> None:
    """Recursively copy ``src`` into ``dst``; not atomic, no cleanup on failure.

    Symlinks inside the tree (common in application bundles) are recreated
    as links rather than followed.
    """

    def _walk() -> list[tuple[Path, list[str], list[str]]]:
        return [(Path(root), dirs, files) for root, dirs, files in os.walk(src)]

    for root, dirs, files in await asyncio.to_thread(_walk):
        rel = root.relative_to(src)
        target_dir = dst / rel
        await aiofiles.os.makedirs(target_dir, exist_ok=True)
        for filename in files:
            source = root / filename
            if source.is_symlink():
                await asyncio.to_thread(os.symlink, os.readlink(source), target_dir / filename)
                continue
            await copy_file(source, target_dir / filename)
        for dirname in dirs:
            source = root / dirname
            if source.is_symlink():
                await asyncio.to_thread(os.symlink, os.readlink(source), target_dir / dirname)
                continue
            await aiofiles.os.makedirs(target_dir / dirname, exist_ok=True)


async def remove_tree(path: Path) -> None:
    """Delete a directory tree or a single file; missing paths are ignored."""
    is_link = await aiofiles.os.path.islink(path)
    if not is_link and not await aiofiles.os.path.exists(path):
        return
    if not is_link and await aiofiles.os.path.isdir(path):
        await asyncio.to_thread(shutil.rmtree, path)
    else:
        await aiofiles.os.remove(path)


def sort_entries(entries: list[AssetEntry]) -> list[AssetEntry]:
    """Directories first, then by name."""
    return sorted(entries, key=lambda e: (not e.is_directory, e.name))


async def list_entries(directory: Path, exclude: set[str] | None = None) -> list[AssetEntry]:
    """Single-level listing of ``directory``.

    Raises:
        OSError: If the directory cannot be listed
    """
    skip = exclude or set()

    def _collect() -> list[AssetEntry]:
        results: list[AssetEntry] = []
        with os.scandir(directory) as it:
            for entry in it:
                if entry.name in skip:
                    continue
                results.append(
                    AssetEntry(name=entry.name, path=Path(entry.path), is_directory=entry.is_dir())
                )
        return results

    return sort_entries(await asyncio.to_thread(_collect))


async def modified_at(path: Path) -> str | None:
    """Modification time as an ISO 8601 string, or None if unavailable."""
    try:
        stat = await aiofiles.os.stat(path)
    except OSError:
        return None
    return datetime.fromtimestamp(stat.st_mtime).isoformat(timespec="seconds")
