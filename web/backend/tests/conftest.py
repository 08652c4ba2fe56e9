"""Pytest configuration for backend tests.

Each test gets its own app with a fresh library directory and catalog.
"""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from songbook.core.config import Config, StorageConfig, WebConfig
from web.backend.main import create_app


@pytest.fixture
def library_dir(tmp_path: Path) -> Path:
    return tmp_path / "database"


@pytest.fixture
def config(library_dir: Path) -> Config:
    return Config(
        storage=StorageConfig(library_dir=str(library_dir)),
        web=WebConfig(allowed_origins=["http://localhost:5173"]),
    )


@pytest.fixture
def client(config: Config):
    """TestClient with the lifespan running, so services are built."""
    with TestClient(create_app(config)) as client:
        yield client


@pytest.fixture
def upload_song(client: TestClient):
    """Upload fake MP3 bytes through the API."""

    def _upload(filename: str, content: bytes = b"ID3fake", media_type: str = "audio/mpeg", **form):
        return client.post(
            "/api/songs/upload",
            files={"file": (filename, content, media_type)},
            data=form,
        )

    return _upload
