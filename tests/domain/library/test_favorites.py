"""Tests for position-addressed favorites."""

import io

import pytest

from songbook.domain.library import (
    AlreadyFavoriteError,
    FavoritesIndex,
    FileStore,
    FilenameConflictError,
    InvalidFilenameError,
    NotFoundError,
    SongNotFoundError,
    UploadGate,
)
from songbook.domain.library.favorites import resolve_position


class TestResolvePosition:
    """Tests for resolve_position function."""

    def test_one_based(self) -> None:
        assert resolve_position(["a", "b"], 1) == "a"
        assert resolve_position(["a", "b"], 2) == "b"

    @pytest.mark.parametrize("position", [0, -1, 3])
    def test_out_of_range(self, position: int) -> None:
        with pytest.raises(NotFoundError):
            resolve_position(["a", "b"], position)


class TestList:
    """Tests for listing favorites."""

    def test_creates_directory(self, favorites: FavoritesIndex, store: FileStore) -> None:
        assert favorites.list() == []
        assert store.favorites_dir.is_dir()

    def test_positions_follow_filename_order(self, favorites: FavoritesIndex, upload) -> None:
        for name in ["zulu.mp3", "alpha.mp3", "mike.mp3"]:
            upload(name)
            favorites.add(name)

        listing = favorites.list()

        assert [(f.id, f.title) for f in listing] == [
            (1, "alpha.mp3"),
            (2, "mike.mp3"),
            (3, "zulu.mp3"),
        ]
        assert {f.desc for f in listing} == {"Favorite song"}

    def test_length_matches_directory(self, favorites: FavoritesIndex, store: FileStore) -> None:
        store.ensure_favorites()
        for i in range(4):
            (store.favorites_dir / f"track{i}.mp3").write_bytes(b"x")

        assert len(favorites.list()) == 4


class TestAdd:
    """Tests for adding favorites."""

    def test_copies_and_keeps_original(self, favorites: FavoritesIndex, store: FileStore, upload) -> None:
        upload("song1.mp3", b"audio")

        favorite = favorites.add("song1.mp3")

        assert favorite.id == 1
        assert favorite.title == "song1.mp3"
        assert (store.favorites_dir / "song1.mp3").read_bytes() == b"audio"
        assert (store.root / "song1.mp3").read_bytes() == b"audio"

    def test_missing_song(self, favorites: FavoritesIndex) -> None:
        with pytest.raises(SongNotFoundError):
            favorites.add("ghost.mp3")

    def test_directory_is_not_a_song(self, favorites: FavoritesIndex) -> None:
        """The favorites directory itself lives in the root but is not a song."""
        favorites.list()
        with pytest.raises(SongNotFoundError):
            favorites.add("favorites")

    def test_second_add_rejected(self, favorites: FavoritesIndex, store: FileStore, upload) -> None:
        upload("song1.mp3")
        favorites.add("song1.mp3")
        before = sorted(p.name for p in store.favorites_dir.iterdir())

        with pytest.raises(AlreadyFavoriteError):
            favorites.add("song1.mp3")

        assert sorted(p.name for p in store.favorites_dir.iterdir()) == before

    def test_traversal_rejected(self, favorites: FavoritesIndex) -> None:
        with pytest.raises(InvalidFilenameError):
            favorites.add("../etc/passwd")


class TestUpdate:
    """Tests for renaming and replacing favorites."""

    def test_rename_keeps_extension(self, favorites: FavoritesIndex, store: FileStore, upload) -> None:
        upload("song1.mp3")
        favorites.add("song1.mp3")

        favorite = favorites.update(1, title="fav1")

        assert favorite.id == 1
        assert favorite.title == "fav1.mp3"
        assert favorite.desc == "Updated favorite song"
        assert store.list_favorites() == ["fav1.mp3"]

    def test_desc_is_echoed_not_stored(self, favorites: FavoritesIndex, upload) -> None:
        upload("song1.mp3")
        favorites.add("song1.mp3")

        favorite = favorites.update(1, title="fav1", desc="my jam")

        assert favorite.desc == "my jam"
        assert favorites.list()[0].desc == "Favorite song"

    def test_returns_new_position(self, favorites: FavoritesIndex, upload) -> None:
        """A rename that changes sort order reports where the file now sits."""
        for name in ["a.mp3", "b.mp3"]:
            upload(name)
            favorites.add(name)

        favorite = favorites.update(1, title="c")

        assert favorite.id == 2
        assert [f.title for f in favorites.list()] == ["b.mp3", "c.mp3"]

    def test_replacement(
        self, favorites: FavoritesIndex, gate: UploadGate, store: FileStore, upload
    ) -> None:
        upload("song1.mp3", b"old")
        favorites.add("song1.mp3")
        staged = gate.stage(io.BytesIO(b"new"), "audio/mpeg")

        favorites.update(1, title="fav1", replacement=staged)

        assert store.list_favorites() == ["fav1.mp3"]
        assert (store.favorites_dir / "fav1.mp3").read_bytes() == b"new"
        assert (store.root / "song1.mp3").read_bytes() == b"old"

    def test_out_of_range_discards_replacement(
        self, favorites: FavoritesIndex, gate: UploadGate
    ) -> None:
        staged = gate.stage(io.BytesIO(b"new"), "audio/mpeg")

        with pytest.raises(NotFoundError):
            favorites.update(1, title="x", replacement=staged)

        assert not staged.exists()

    def test_conflict(self, favorites: FavoritesIndex, store: FileStore, upload) -> None:
        for name in ["a.mp3", "b.mp3"]:
            upload(name)
            favorites.add(name)

        with pytest.raises(FilenameConflictError):
            favorites.update(1, title="b")

        assert store.list_favorites() == ["a.mp3", "b.mp3"]


class TestRemove:
    """Tests for removing favorites."""

    def test_remove_by_position(self, favorites: FavoritesIndex, store: FileStore, upload) -> None:
        for name in ["a.mp3", "b.mp3", "c.mp3"]:
            upload(name)
            favorites.add(name)

        removed = favorites.remove(2)

        assert removed.title == "b.mp3"
        assert store.list_favorites() == ["a.mp3", "c.mp3"]
        assert (store.root / "b.mp3").exists()

    @pytest.mark.parametrize("position", [0, 1, 5])
    def test_out_of_range(self, favorites: FavoritesIndex, position: int) -> None:
        with pytest.raises(NotFoundError):
            favorites.remove(position)
