from fastapi import HTTPException
from songbook.domain.library import (
    AlreadyFavoriteError,
    FilenameConflictError,
    InvalidFileTypeError,
    InvalidFilenameError,
    LibraryError,
    NotFoundError,
    SongNotFoundError,
)

# First isinstance match wins
STATUS_CODES: list[tuple[type[LibraryError], int]] = [
    (InvalidFileTypeError, 400),
    (InvalidFilenameError, 400),
    (AlreadyFavoriteError, 400),
    (NotFoundError, 404),
    (SongNotFoundError, 404),
    (FilenameConflictError, 409),
]


def to_http_exception(exc: LibraryError) -> HTTPException:
    """Pure function - maps a library error to the HTTP error reported to clients."""
    for error_type, status_code in STATUS_CODES:
        if isinstance(exc, error_type):
            return HTTPException(status_code=status_code, detail=str(exc))
    return HTTPException(status_code=400, detail=str(exc))
