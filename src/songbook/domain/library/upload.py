"""
Upload gate: validates incoming files before they reach the library.

Only MP3 uploads are accepted, judged by the media type the client declares.
Nothing is written to disk for a rejected upload.
"""

from pathlib import Path
from typing import BinaryIO, Iterable, Optional

from loguru import logger

from songbook.core.path_security import safe_basename
from .catalog import SongCatalog
from .exceptions import InvalidFileTypeError, InvalidFilenameError
from .file_store import DEFAULT_CHUNK_SIZE, FileStore
from .models import Song

MP3_MEDIA_TYPES: frozenset[str] = frozenset({"audio/mpeg", "audio/mp3"})


def normalize_media_type(media_type: Optional[str]) -> str:
    """Pure function - lowercased media type without parameters."""
    if not media_type:
        return ""
    return media_type.split(";", 1)[0].strip().lower()


def is_allowed_media_type(
    media_type: Optional[str], allowed: Iterable[str] = MP3_MEDIA_TYPES
) -> bool:
    """Pure function - whether a declared media type is an accepted MP3 type."""
    return normalize_media_type(media_type) in {normalize_media_type(t) for t in allowed}


class UploadGate:
    """Stages validated uploads and hands them to the catalog."""

    def __init__(
        self,
        store: FileStore,
        catalog: SongCatalog,
        allowed_media_types: Iterable[str] = MP3_MEDIA_TYPES,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        self._store = store
        self._catalog = catalog
        self._allowed = frozenset(allowed_media_types)
        self._chunk_size = chunk_size

    def check_media_type(self, media_type: Optional[str]) -> None:
        """Raises InvalidFileTypeError unless media_type is an accepted MP3 type."""
        if not is_allowed_media_type(media_type, self._allowed):
            logger.warning(f"Rejected upload with media type {media_type!r}")
            raise InvalidFileTypeError(media_type)

    def stage(self, stream: BinaryIO, media_type: Optional[str]) -> Path:
        """Validate and stage a file without cataloguing it.

        Used for replacement files in song and favorite updates.

        Raises:
            InvalidFileTypeError: If the media type is not MP3
        """
        self.check_media_type(media_type)
        return self._store.stage(stream, self._chunk_size)

    def upload(
        self,
        stream: BinaryIO,
        media_type: Optional[str],
        filename: str,
        title: Optional[str] = None,
        desc: Optional[str] = None,
    ) -> Song:
        """Store an uploaded file under its base name and catalog it.

        Args:
            stream: Uploaded bytes
            media_type: Media type declared by the client
            filename: Original client filename; directory parts are stripped
            title: Optional display title (defaults to the filename)
            desc: Optional description

        Returns:
            The catalogued song

        Raises:
            InvalidFileTypeError: If the media type is not MP3
            InvalidFilenameError: If no usable filename remains after stripping
        """
        self.check_media_type(media_type)

        base = safe_basename(filename)
        if base is None:
            logger.warning(f"Rejected upload with filename {filename!r}")
            raise InvalidFilenameError(filename)
        if base != filename:
            logger.info(f"Upload filename {filename!r} reduced to {base!r}")

        staged = self._store.stage(stream, self._chunk_size)
        return self._catalog.create(staged, base, title=title, desc=desc)
