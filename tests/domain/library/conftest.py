"""Shared fixtures for library domain tests."""

import io
from pathlib import Path

import pytest

from songbook.domain.library import FavoritesIndex, FileStore, SongCatalog, UploadGate


@pytest.fixture
def store(tmp_path: Path) -> FileStore:
    """File store rooted in a fresh temporary library directory."""
    store = FileStore(tmp_path / "database")
    store.ensure_root()
    return store


@pytest.fixture
def catalog(store: FileStore) -> SongCatalog:
    return SongCatalog(store)


@pytest.fixture
def favorites(store: FileStore) -> FavoritesIndex:
    return FavoritesIndex(store)


@pytest.fixture
def gate(store: FileStore, catalog: SongCatalog) -> UploadGate:
    return UploadGate(store, catalog)


@pytest.fixture
def upload(gate: UploadGate):
    """Upload fake MP3 bytes under a filename."""

    def _upload(filename: str, content: bytes = b"ID3fake", **kwargs):
        return gate.upload(io.BytesIO(content), "audio/mpeg", filename, **kwargs)

    return _upload
