"""SQLite snapshot store."""
import logging
from pathlib import Path
from typing import Optional

import aiosqlite

from src.config import SNAPSHOT_DB
from src.store.base import SnapshotStore

logger = logging.getLogger(__name__)


class SqliteSnapshotStore(SnapshotStore):
    """Keeps every namespace in one SQLite table keyed by (namespace, key)."""

    def __init__(self, db_path: Path = SNAPSHOT_DB):
        self.db_path = db_path
        self._initialized = False

    async def initialize(self) -> None:
        """Create tables if they don't exist."""
        if self._initialized:
            return
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                """
                CREATE TABLE IF NOT EXISTS snapshots (
                    namespace TEXT NOT NULL,
                    key TEXT NOT NULL,
                    payload BLOB NOT NULL,
                    updated_at TIMESTAMP,
                    PRIMARY KEY (namespace, key)
                )
                """
            )
            await db.commit()
        self._initialized = True
        logger.info(f"Snapshot database initialized at {self.db_path}")

    async def read(self, namespace: str, key: str) -> Optional[bytes]:
        await self.initialize()
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT payload FROM snapshots WHERE namespace = ? AND key = ?",
                (namespace, key),
            )
            row = await cursor.fetchone()
            return bytes(row[0]) if row is not None else None

    async def write(self, namespace: str, key: str, payload: bytes) -> None:
        await self.initialize()
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                """
                INSERT OR REPLACE INTO snapshots (namespace, key, payload, updated_at)
                VALUES (?, ?, ?, datetime('now'))
                """,
                (namespace, key, payload),
            )
            await db.commit()

    async def keys(self, namespace: str) -> list[str]:
        await self.initialize()
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT key FROM snapshots WHERE namespace = ? ORDER BY key",
                (namespace,),
            )
            return [row[0] for row in await cursor.fetchall()]
