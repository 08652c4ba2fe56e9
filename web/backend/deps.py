from fastapi import Request
from songbook.domain.library import FavoritesIndex, FileStore, SongCatalog, UploadGate


def get_store(request: Request) -> FileStore:
    """FastAPI dependency for the file store."""
    return request.app.state.store


def get_catalog(request: Request) -> SongCatalog:
    """FastAPI dependency for the song catalog owned by the running app."""
    return request.app.state.catalog


def get_favorites(request: Request) -> FavoritesIndex:
    """FastAPI dependency for the favorites index."""
    return request.app.state.favorites


def get_upload_gate(request: Request) -> UploadGate:
    """FastAPI dependency for the upload gate."""
    return request.app.state.upload_gate
