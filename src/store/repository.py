"""Snapshot repository: baseline and latest slots on top of a SnapshotStore."""
import logging
import sqlite3
from typing import Optional

import orjson
from pydantic import ValidationError

from src.config import config
from src.errors import DeserializationFailure, PersistenceFailure
from src.measure.models import Slot, Snapshot
from src.store.base import SnapshotStore
from src.store.keys import url_to_key

logger = logging.getLogger(__name__)


def snapshot_to_bytes(snapshot: Snapshot) -> bytes:
    """Serialize a snapshot to indented JSON."""
    return orjson.dumps(snapshot.to_record(), option=orjson.OPT_INDENT_2)


def snapshot_from_bytes(payload: bytes) -> Snapshot:
    """Parse a stored snapshot record, raising DeserializationFailure if corrupt."""
    try:
        return Snapshot.model_validate(orjson.loads(payload))
    except (orjson.JSONDecodeError, ValidationError) as e:
        raise DeserializationFailure(str(e)) from e


class SnapshotRepository:
    """Reads and writes one snapshot per URL in each slot."""

    def __init__(self, store: SnapshotStore):
        self.store = store

    async def save(self, slot: Slot, snapshot: Snapshot) -> None:
        """Write snapshot to slot, replacing whatever was there."""
        key = url_to_key(snapshot.url)
        try:
            await self.store.write(slot.value, key, snapshot_to_bytes(snapshot))
        except (OSError, sqlite3.Error) as e:
            raise PersistenceFailure(f"Cannot save {slot.value} snapshot for {snapshot.url}: {e}") from e
        logger.info(f"Saved {slot.value} results to {key}")

    async def load(self, slot: Slot, url: str) -> Optional[Snapshot]:
        """Load the snapshot for url, or None if the slot has none.

        An unreadable or corrupt baseline is treated as missing. A corrupt
        latest record raises DeserializationFailure, an unreadable one
        PersistenceFailure.
        """
        key = url_to_key(url)
        try:
            payload = await self.store.read(slot.value, key)
        except (OSError, sqlite3.Error) as e:
            if slot is Slot.BASELINE:
                logger.warning(f"Cannot read baseline for {url}, comparing without it: {e}")
                return None
            raise PersistenceFailure(f"Cannot read {slot.value} snapshot for {url}: {e}") from e
        if payload is None:
            return None
        try:
            return snapshot_from_bytes(payload)
        except DeserializationFailure as e:
            if slot is Slot.BASELINE:
                logger.warning(f"Ignoring corrupt baseline for {url}: {e}")
                return None
            raise DeserializationFailure(f"Corrupt {slot.value} snapshot for {url}: {e}") from e

    async def load_all(self, slot: Slot) -> list[Snapshot]:
        """All readable snapshots in slot, sorted by URL."""
        snapshots = []
        for key in await self.store.keys(slot.value):
            try:
                payload = await self.store.read(slot.value, key)
            except (OSError, sqlite3.Error) as e:
                logger.warning(f"Could not read {slot.value} record {key}: {e}")
                continue
            if payload is None:
                continue
            try:
                snapshots.append(snapshot_from_bytes(payload))
            except DeserializationFailure as e:
                logger.warning(f"Could not read {slot.value} record {key}: {e}")
        return sorted(snapshots, key=lambda s: s.url)


def create_store(backend: Optional[str] = None) -> SnapshotStore:
    """Build the configured store backend."""
    backend = backend or config.STORE_BACKEND
    if backend == "files":
        from src.store.file_store import FileSnapshotStore
        return FileSnapshotStore()
    if backend == "sqlite":
        from src.store.sqlite_store import SqliteSnapshotStore
        return SqliteSnapshotStore()
    raise ValueError(f"Unknown store backend: {backend}")
