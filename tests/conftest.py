"""Shared fixtures."""
import pytest

from src.store.file_store import FileSnapshotStore
from src.store.repository import SnapshotRepository
from tests.helpers import RecordingRenderer


@pytest.fixture
def file_store(tmp_path):
    return FileSnapshotStore(
        {"baseline": tmp_path / "baseline", "latest": tmp_path / "latest"}
    )


@pytest.fixture
def repository(file_store):
    return SnapshotRepository(file_store)


@pytest.fixture
def renderer(tmp_path):
    return RecordingRenderer(tmp_path)
