"""Key-value storage interface for serialized snapshots."""
from abc import ABC, abstractmethod
from typing import Optional


class SnapshotStore(ABC):
    """Durable bytes storage partitioned into namespaces, addressed by key."""

    @abstractmethod
    async def read(self, namespace: str, key: str) -> Optional[bytes]:
        """Return the stored payload, or None if nothing is stored under key."""

    @abstractmethod
    async def write(self, namespace: str, key: str, payload: bytes) -> None:
        """Store payload under key, replacing any previous value."""

    @abstractmethod
    async def keys(self, namespace: str) -> list[str]:
        """List stored keys in a namespace, sorted."""
