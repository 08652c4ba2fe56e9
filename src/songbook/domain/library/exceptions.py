"""Library-specific exceptions for error handling."""

from typing import Optional


class LibraryError(Exception):
    """Base exception for library operations."""

    pass


class InvalidFileTypeError(LibraryError):
    """Raised when an upload does not declare an MP3 media type."""

    def __init__(self, media_type: Optional[str], message: str = None):
        self.media_type = media_type
        super().__init__(message or "Invalid file type. Only MP3 files are allowed.")


class InvalidFilenameError(LibraryError):
    """Raised when a filename or title cannot be used as a store filename."""

    def __init__(self, name: Optional[str], message: str = None):
        self.name = name
        super().__init__(message or f"Invalid filename: {name!r}")


class NotFoundError(LibraryError):
    """Raised when a song id or favorite position does not resolve."""

    pass


class SongNotFoundError(LibraryError):
    """Raised when a favorite is requested for a file missing from the store."""

    def __init__(self, title: str, message: str = None):
        self.title = title
        super().__init__(message or "Song not found in the database.")


class AlreadyFavoriteError(LibraryError):
    """Raised when a same-named file already exists among favorites."""

    def __init__(self, title: str, message: str = None):
        self.title = title
        super().__init__(message or "Song already in favorites.")


class FilenameConflictError(LibraryError):
    """Raised when a rename would clobber a different existing file."""

    def __init__(self, filename: str, message: str = None):
        self.filename = filename
        super().__init__(message or f"A file named {filename!r} already exists.")
