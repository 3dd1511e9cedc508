"""Snapshot store backed by one JSON file per key."""
import logging
from pathlib import Path
from typing import Optional

import aiofiles

from src.config import config
from src.store.base import SnapshotStore

logger = logging.getLogger(__name__)


class FileSnapshotStore(SnapshotStore):
    """Stores each namespace in its own directory as <key>.json files."""

    suffix = ".json"

    def __init__(self, directories: Optional[dict[str, Path]] = None):
        self.directories = directories or {
            "baseline": config.BASELINE_DIR,
            "latest": config.LATEST_DIR,
        }

    def _dir(self, namespace: str) -> Path:
        try:
            return self.directories[namespace]
        except KeyError:
            raise ValueError(f"Unknown namespace: {namespace}") from None

    def path_for(self, namespace: str, key: str) -> Path:
        """File path for a key."""
        return self._dir(namespace) / f"{key}{self.suffix}"

    async def read(self, namespace: str, key: str) -> Optional[bytes]:
        path = self.path_for(namespace, key)
        if not path.exists():
            return None
        async with aiofiles.open(path, "rb") as f:
            return await f.read()

    async def write(self, namespace: str, key: str, payload: bytes) -> None:
        path = self.path_for(namespace, key)
        path.parent.mkdir(parents=True, exist_ok=True)
        # Readers never see a partial record: write aside, then rename
        tmp_path = path.with_name(path.name + ".tmp")
        async with aiofiles.open(tmp_path, "wb") as f:
            await f.write(payload)
        tmp_path.replace(path)
        logger.debug(f"Wrote {len(payload)} bytes to {path}")

    async def keys(self, namespace: str) -> list[str]:
        directory = self._dir(namespace)
        if not directory.exists():
            return []
        return sorted(p.stem for p in directory.glob(f"*{self.suffix}"))
