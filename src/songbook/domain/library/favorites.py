"""
Favorites index: a positional view over the favorites directory.

Favorites have no stored identity. A favorite's id is its 1-based position
in the lexicographically sorted directory listing taken at request time, so
an id is only meaningful until the next mutation of the directory. Every
operation that resolves a position holds the favorites lock from the listing
until its filesystem change completes, which keeps position and file in step
within a single request. Across requests, clients must re-list after any
change.

Descriptions are not persisted: listings report a constant description and
updates echo back whatever description was sent.
"""

from pathlib import Path
from typing import List, Optional

from loguru import logger

from .exceptions import AlreadyFavoriteError, NotFoundError, SongNotFoundError
from .file_store import FileStore, build_target_name
from .models import Favorite

DEFAULT_DESCRIPTION = "Favorite song"
DEFAULT_UPDATED_DESCRIPTION = "Updated favorite song"


def resolve_position(names: List[str], position: int) -> str:
    """Pure function - filename at a 1-based position of a listing.

    Raises:
        NotFoundError: If position is outside [1, len(names)]
    """
    if position < 1 or position > len(names):
        raise NotFoundError("Favorite not found.")
    return names[position - 1]


class FavoritesIndex:
    """Copies songs into the favorites directory and addresses them by position."""

    def __init__(
        self,
        store: FileStore,
        description: str = DEFAULT_DESCRIPTION,
        updated_description: str = DEFAULT_UPDATED_DESCRIPTION,
    ) -> None:
        self._store = store
        self._description = description
        self._updated_description = updated_description

    def list(self) -> List[Favorite]:
        """Current favorites, numbered from 1 in filename order."""
        with self._store.favorites_lock:
            names = self._store.list_favorites()
        return [
            Favorite(id=position, title=name, desc=self._description)
            for position, name in enumerate(names, start=1)
        ]

    def add(self, title: str) -> Favorite:
        """Copy a song file from the library root into favorites.

        Args:
            title: Filename of the song in the library root

        Raises:
            InvalidFilenameError: If title is not a bare filename
            SongNotFoundError: If no such file exists in the library root
            AlreadyFavoriteError: If a same-named favorite already exists
        """
        # Lock order is always root, then favorites
        with self._store.root_lock, self._store.favorites_lock:
            source = self._store.root_path(title)
            if not source.is_file():
                raise SongNotFoundError(title)

            self._store.ensure_favorites()
            target = self._store.favorite_path(title)
            if target.exists():
                raise AlreadyFavoriteError(title)

            self._store.copy(source, target)
            names = self._store.list_favorites()

        logger.info(f"Added favorite: {title}")
        return Favorite(id=names.index(title) + 1, title=title, desc=self._description)

    def update(
        self,
        position: int,
        title: Optional[str] = None,
        desc: Optional[str] = None,
        replacement: Optional[Path] = None,
    ) -> Favorite:
        """Rename and/or replace the favorite at a position.

        The new filename is the title plus the original file's extension. With
        a staged replacement, the replacement is moved into place under the new
        name and the old file removed; it is discarded if the update fails.

        Returns:
            The favorite under its new name, with its position in the listing
            after the change and the description echoed back

        Raises:
            NotFoundError: If position does not resolve
            InvalidFilenameError: If the title is not usable as a filename
            FilenameConflictError: If the new name belongs to another favorite
        """
        with self._store.favorites_lock:
            try:
                names = self._store.list_favorites()
                old_name = resolve_position(names, position)
                target_name = build_target_name(title, old_name)
                old_path = self._store.favorite_path(old_name)
                new_path = self._store.favorite_path(target_name)
                self._store.check_free(new_path, old_path)

                if replacement is not None:
                    self._store.commit(replacement, new_path)
                    if new_path != old_path:
                        self._store.delete(old_path)
                elif new_path != old_path:
                    self._store.rename(old_path, new_path)
            except Exception:
                if replacement is not None:
                    self._store.discard(replacement)
                raise

            names = self._store.list_favorites()

        new_position = names.index(target_name) + 1
        if new_position != position:
            logger.info(f"Favorite {old_name} moved from position {position} to {new_position}")
        logger.info(f"Updated favorite {position}: {old_name} -> {target_name}")
        return Favorite(
            id=new_position,
            title=target_name,
            desc=desc or self._updated_description,
        )

    def remove(self, position: int) -> Favorite:
        """Delete the favorite at a position.

        Returns:
            The favorite as it was listed before removal

        Raises:
            NotFoundError: If position does not resolve
        """
        with self._store.favorites_lock:
            names = self._store.list_favorites()
            name = resolve_position(names, position)
            self._store.delete(self._store.favorite_path(name))

        logger.info(f"Removed favorite {position}: {name}")
        return Favorite(id=position, title=name, desc=self._description)
