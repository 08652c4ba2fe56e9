"""
On-disk file store for uploaded songs and their favorite copies.

Layout::

    <root>/
        song1.mp3
        song2.mp3
        favorites/
            song1.mp3
        .staging/
            upload-1a2b3c.part

Every write lands in a temporary file first and is moved into place with
os.replace, so readers never see a half-written song. Each directory that
gets mutated has its own lock; callers that list a directory and then act on
the listing must hold that directory's lock for the whole sequence.
"""

import os
import shutil
import tempfile
import threading
from pathlib import Path
from typing import BinaryIO, Optional

from loguru import logger

from songbook.core.path_security import resolve_in_root, safe_basename
from .exceptions import FilenameConflictError, InvalidFilenameError

DEFAULT_CHUNK_SIZE = 1024 * 1024


def build_target_name(title: Optional[str], current_name: str) -> str:
    """Pure function - filename a rename should produce.

    The title is used as the new stem and the current file's extension is
    kept. A title that already carries that extension is not suffixed twice,
    and a missing title keeps the current name.

    Raises:
        InvalidFilenameError: If the title contains path components or is hidden
    """
    if title is None or not title.strip():
        return current_name

    title = title.strip()
    base = safe_basename(title)
    if base is None or base != title:
        raise InvalidFilenameError(title)

    ext = Path(current_name).suffix
    if not ext or base.lower().endswith(ext.lower()):
        return base
    return base + ext


class FileStore:
    """Library root directory plus its favorites and staging sub-directories."""

    def __init__(
        self,
        root: Path,
        favorites_dirname: str = "favorites",
        staging_dirname: str = ".staging",
    ) -> None:
        self._root = Path(root).expanduser()
        self._favorites_dir = self._root / favorites_dirname
        self._staging_dir = self._root / staging_dirname
        self.root_lock = threading.Lock()
        self.favorites_lock = threading.Lock()

    @property
    def root(self) -> Path:
        return self._root

    @property
    def favorites_dir(self) -> Path:
        return self._favorites_dir

    @property
    def staging_dir(self) -> Path:
        return self._staging_dir

    # -- directory lifecycle -------------------------------------------------

    def ensure_root(self) -> None:
        """Create the library root if absent (called at startup)."""
        if not self._root.exists():
            logger.info(f"Creating library directory: {self._root}")
        self._root.mkdir(parents=True, exist_ok=True)

    def ensure_favorites(self) -> None:
        """Create the favorites directory if absent."""
        self.ensure_root()
        self._favorites_dir.mkdir(exist_ok=True)

    def ensure_staging(self) -> None:
        self.ensure_root()
        self._staging_dir.mkdir(exist_ok=True)

    # -- path resolution -----------------------------------------------------

    def root_path(self, filename: str) -> Path:
        """Resolve a bare filename inside the library root.

        Raises:
            InvalidFilenameError: If the name is not a safe bare filename
        """
        path = resolve_in_root(self._root, filename)
        if path is None:
            raise InvalidFilenameError(filename)
        return path

    def favorite_path(self, filename: str) -> Path:
        """Resolve a bare filename inside the favorites directory.

        Raises:
            InvalidFilenameError: If the name is not a safe bare filename
        """
        path = resolve_in_root(self._favorites_dir, filename)
        if path is None:
            raise InvalidFilenameError(filename)
        return path

    def list_favorites(self) -> list[str]:
        """Sorted names of the regular files in the favorites directory.

        Lexicographic order keeps positions reproducible across requests.
        Hidden files are in-flight temporaries and are skipped.
        """
        self.ensure_favorites()
        return sorted(
            entry.name
            for entry in self._favorites_dir.iterdir()
            if entry.is_file() and not entry.name.startswith(".")
        )

    # -- mutations -----------------------------------------------------------

    def stage(self, stream: BinaryIO, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Path:
        """Write a byte stream to a fresh temporary file in the staging directory.

        Returns:
            Path of the staged file; the caller must commit or discard it
        """
        self.ensure_staging()
        fd, temp_name = tempfile.mkstemp(
            prefix="upload-", suffix=".part", dir=self._staging_dir
        )
        temp_path = Path(temp_name)
        try:
            with os.fdopen(fd, "wb") as out:
                shutil.copyfileobj(stream, out, chunk_size)
        except Exception:
            logger.debug(f"Cleaning up temp file: {temp_path}")
            temp_path.unlink(missing_ok=True)
            raise

        logger.debug(f"Staged upload at {temp_path} ({temp_path.stat().st_size} bytes)")
        return temp_path

    def discard(self, staged: Path) -> None:
        """Remove a staged file that will not be committed."""
        if staged.exists():
            logger.debug(f"Discarding staged file: {staged}")
        staged.unlink(missing_ok=True)

    def commit(self, staged: Path, target: Path) -> None:
        """Move a staged file into place, replacing any file at target."""
        os.replace(staged, target)
        logger.debug(f"Committed {staged.name} -> {target}")

    def rename(self, source: Path, target: Path) -> None:
        os.replace(source, target)
        logger.debug(f"Renamed {source} -> {target}")

    def copy(self, source: Path, target: Path) -> None:
        """Copy source to target via a hidden temporary next to target."""
        temp_path = target.with_name(f".{target.name}.tmp")
        try:
            shutil.copy2(source, temp_path)
            os.replace(temp_path, target)
        except Exception:
            temp_path.unlink(missing_ok=True)
            raise
        logger.debug(f"Copied {source} -> {target}")

    def delete(self, path: Path) -> bool:
        """Delete a file if present.

        Returns:
            True if a file was removed, False if it was already missing
        """
        try:
            path.unlink()
        except FileNotFoundError:
            logger.debug(f"Nothing to delete at {path}")
            return False
        logger.debug(f"Deleted {path}")
        return True

    def check_free(self, target: Path, current: Optional[Path]) -> None:
        """Ensure target is free to receive current's contents.

        Target counts as taken when it exists and is not the current file itself
        (case-only renames on case-insensitive filesystems resolve to the same file).

        Raises:
            FilenameConflictError: If a different file already occupies target
        """
        if current is not None and target == current:
            return
        if not target.exists():
            return
        if current is not None and current.exists() and os.path.samefile(target, current):
            return
        raise FilenameConflictError(target.name)
