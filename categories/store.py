"""JSON persistence for the category configuration of one agent root."""

from __future__ import annotations

import json
from pathlib import Path

import aiofiles.os

from config import Config
from skills.fileops import read_text, write_text
from utils import get_logger

from .models import CategoryConfig, CategoryFormatError

logger = get_logger(__name__)


def render_config(config: CategoryConfig) -> str:
    return json.dumps(config.to_dict(), indent=2, ensure_ascii=False)


class CategoryStore:
    """Load and save ``<agent root>/<CATEGORY_CONFIG_FILE>``."""

    def __init__(self, base_dir: Path, filename: str | None = None) -> None:
        self.base_dir = Path(base_dir)
        self.config_path = self.base_dir / (filename or Config.CATEGORY_CONFIG_FILE)

    async def _read(self) -> CategoryConfig | None:
        if not await aiofiles.os.path.isfile(self.config_path):
            return None
        try:
            data = json.loads(await read_text(self.config_path))
            return CategoryConfig.from_dict(data)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError, CategoryFormatError) as e:
            logger.warning(f"Ignoring unreadable category config {self.config_path}: {e}")
            return None

    async def _write_best_effort(self, config: CategoryConfig) -> None:
        try:
            await self.save(config)
        except OSError as e:
            logger.warning(f"Could not write category config {self.config_path}: {e}")

    async def load(self) -> CategoryConfig:
        """Return the stored configuration, or a fresh default one.

        A missing or empty ``categoryOrder`` is derived from the key order
        and written back right away, so consecutive loads agree.
        """
        config = await self._read()
        if config is None:
            config = CategoryConfig.default(Config.DEFAULT_CATEGORY)
            logger.info(f"Creating default category config at {self.config_path}")
            await self._write_best_effort(config)
            return config

        if not config.category_order:
            config.category_order = list(config.categories)
            logger.info("Derived category order from category keys")
            await self._write_best_effort(config)

        missing, unknown = config.order_divergence()
        if missing or unknown:
            logger.warning(
                f"Category order out of step with categories "
                f"(missing: {missing}, unknown: {unknown})"
            )
        return config

    async def save(self, config: CategoryConfig) -> None:
        """Overwrite the file with ``config``.

        Raises:
            OSError: If the file cannot be written
        """
        await aiofiles.os.makedirs(self.base_dir, exist_ok=True)
        await write_text(self.config_path, render_config(config))
        logger.debug(f"Saved {len(config.categories)} categories to {self.config_path}")
