from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import FileResponse
from loguru import logger
import mimetypes
from pathlib import Path
from typing import Optional
from songbook.core.path_security import resolve_in_root
from songbook.domain.library import FileStore
from ..deps import get_store

router = APIRouter()

AUDIO_MIME_TYPES: dict[str, str] = {
    ".mp3": "audio/mpeg",
}


def get_mime_type(file_path: Path) -> str:
    """Pure function - deterministic MIME type detection."""
    mime = AUDIO_MIME_TYPES.get(file_path.suffix.lower())
    if mime:
        return mime
    guessed, _ = mimetypes.guess_type(str(file_path))
    return guessed or "application/octet-stream"


def find_servable(directory: Path, filename: str) -> Optional[Path]:
    """Pure function - path of an existing regular file directly inside directory."""
    path = resolve_in_root(directory, filename)
    if path is None or not path.is_file():
        return None
    return path


@router.get("/files/{filename}")
def serve_song_file(filename: str, store: FileStore = Depends(get_store)):
    """Serve a song file from the library root."""
    path = find_servable(store.root, filename)
    if not path:
        logger.debug(f"No song file to serve for {filename!r}")
        raise HTTPException(404, "File not found")
    return FileResponse(path, media_type=get_mime_type(path))


@router.get("/favorites/{filename}")
def serve_favorite_file(filename: str, store: FileStore = Depends(get_store)):
    """Serve a favorite copy."""
    path = find_servable(store.favorites_dir, filename)
    if not path:
        logger.debug(f"No favorite file to serve for {filename!r}")
        raise HTTPException(404, "File not found")
    return FileResponse(path, media_type=get_mime_type(path))
