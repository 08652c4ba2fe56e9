"""Library domain - songs, favorites and the files behind them.

This domain handles:
- Staging and validating uploads (MP3 only)
- The in-memory song catalog
- Favorites addressed by their position in the favorites directory
- File lifecycle in the library root (rename, replace, delete)
"""

from .catalog import SongCatalog
from .exceptions import (
    AlreadyFavoriteError,
    FilenameConflictError,
    InvalidFileTypeError,
    InvalidFilenameError,
    LibraryError,
    NotFoundError,
    SongNotFoundError,
)
from .favorites import FavoritesIndex
from .file_store import FileStore, build_target_name
from .models import Favorite, Song
from .upload import UploadGate, is_allowed_media_type

__all__ = [
    "SongCatalog",
    "FavoritesIndex",
    "FileStore",
    "UploadGate",
    "Song",
    "Favorite",
    "build_target_name",
    "is_allowed_media_type",
    "LibraryError",
    "InvalidFileTypeError",
    "InvalidFilenameError",
    "NotFoundError",
    "SongNotFoundError",
    "AlreadyFavoriteError",
    "FilenameConflictError",
]
