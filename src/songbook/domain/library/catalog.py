"""
In-memory song catalog.

Songs live only for the lifetime of the process. Each song points at a
file in the library root by name; the catalog renames and deletes that file
as songs are updated and removed. Filesystem changes happen first and the
in-memory record is only touched once they succeed.
"""

from datetime import datetime
from pathlib import Path
from typing import Optional

from loguru import logger

from .exceptions import NotFoundError
from .file_store import FileStore, build_target_name
from .models import Song

DEFAULT_DESCRIPTION = "No descriptions are here"


class SongCatalog:
    """Ordered collection of songs backed by files in a FileStore."""

    def __init__(self, store: FileStore, default_description: str = DEFAULT_DESCRIPTION) -> None:
        self._store = store
        self._default_description = default_description
        self._songs: list[Song] = []
        # Ids are never reused, even after deletions
        self._next_id = 1

    def list(self) -> list[Song]:
        """Songs in insertion order."""
        with self._store.root_lock:
            return list(self._songs)

    def get(self, song_id: int) -> Song:
        """Look up a song by id.

        Raises:
            NotFoundError: If no song has that id
        """
        with self._store.root_lock:
            return self._find(song_id)

    def _find(self, song_id: int) -> Song:
        for song in self._songs:
            if song.id == song_id:
                return song
        raise NotFoundError("Song not found.")

    def create(
        self,
        staged: Path,
        filename: str,
        title: Optional[str] = None,
        desc: Optional[str] = None,
    ) -> Song:
        """Move a staged upload into the library root and catalog it.

        Args:
            staged: Staged file produced by FileStore.stage
            filename: Sanitised bare filename to store the upload under
            title: Display title (defaults to filename)
            desc: Description (defaults to the configured description)

        Returns:
            The new song

        Raises:
            FilenameConflictError: If filename names a directory in the root
        """
        with self._store.root_lock:
            try:
                target = self._store.root_path(filename)
                if target.exists() and not target.is_file():
                    # Store sub-directories such as favorites/ are never overwritten
                    self._store.check_free(target, None)
                if target.exists():
                    logger.warning(f"Upload overwrites existing file: {target}")
                self._store.commit(staged, target)
            except Exception:
                self._store.discard(staged)
                raise

            song = Song(
                id=self._next_id,
                title=title or filename,
                desc=desc or self._default_description,
                updated_at=datetime.now(),
                filename=filename,
            )
            self._next_id += 1
            self._songs.append(song)

        logger.info(f"Catalogued song {song.id}: {song.title} ({song.filename})")
        return song

    def update(
        self,
        song_id: int,
        title: Optional[str] = None,
        desc: Optional[str] = None,
        replacement: Optional[Path] = None,
    ) -> Song:
        """Rename, re-describe and/or replace the file of a song.

        The backing file is renamed to the new title, keeping its original
        extension. A staged replacement is moved into place under the new
        name before the old file is removed; it is discarded if the update
        fails.

        Raises:
            NotFoundError: If no song has that id
            InvalidFilenameError: If the title is not usable as a filename
            FilenameConflictError: If the new name belongs to another file
        """
        with self._store.root_lock:
            try:
                song = self._find(song_id)
                target_name = build_target_name(title, song.filename)
                old_path = self._store.root_path(song.filename)
                new_path = self._store.root_path(target_name)
                self._store.check_free(new_path, old_path)

                if replacement is not None:
                    self._store.commit(replacement, new_path)
                    if new_path != old_path:
                        self._store.delete(old_path)
                elif new_path != old_path and old_path.exists():
                    self._store.rename(old_path, new_path)
                elif not old_path.exists():
                    logger.warning(f"Song {song_id} has no backing file at {old_path}")
            except Exception:
                if replacement is not None:
                    self._store.discard(replacement)
                raise

            if title and title.strip():
                song.title = target_name
            song.filename = target_name
            song.desc = desc or song.desc
            song.updated_at = datetime.now()

        logger.info(f"Updated song {song.id}: {song.title} ({song.filename})")
        return song

    def delete(self, song_id: int) -> Song:
        """Remove a song and its backing file.

        A backing file that is already gone is not an error.

        Raises:
            NotFoundError: If no song has that id
        """
        with self._store.root_lock:
            song = self._find(song_id)
            path = self._store.root_path(song.filename)
            removed = self._store.delete(path)
            self._songs.remove(song)

        if not removed:
            logger.info(f"Deleted song {song.id}; backing file {song.filename} was already missing")
        else:
            logger.info(f"Deleted song {song.id} and {song.filename}")
        return song

    def clear(self) -> None:
        """Forget every song without touching the file store."""
        with self._store.root_lock:
            self._songs.clear()
