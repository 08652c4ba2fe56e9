"""Tests for songs API endpoints."""


class TestUploadSong:
    """Test POST /api/songs/upload."""

    def test_upload_mp3(self, client, upload_song, library_dir):
        """Test a valid upload returns the new song and stores the file."""
        response = upload_song("song1.mp3", b"ID3data")

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "File uploaded successfully."
        assert body["song"]["id"] == 1
        assert body["song"]["title"] == "song1.mp3"
        assert body["song"]["desc"] == "No descriptions are here"
        assert "updatedAt" in body["song"]
        assert (library_dir / "song1.mp3").read_bytes() == b"ID3data"

    def test_upload_with_title_and_desc(self, upload_song):
        response = upload_song("song1.mp3", title="Anthem", desc="Big chorus")

        song = response.json()["song"]
        assert song["title"] == "Anthem"
        assert song["desc"] == "Big chorus"
        assert song["filename"] == "song1.mp3"

    def test_non_mp3_rejected(self, client, upload_song, library_dir):
        """Test a non-MP3 upload creates neither a catalog entry nor a file."""
        response = upload_song("clip.wav", b"RIFF", media_type="audio/wav")

        assert response.status_code == 400
        assert "Only MP3" in response.json()["detail"]
        assert client.get("/api/songs").json() == []
        assert not (library_dir / "clip.wav").exists()

    def test_missing_file(self, client):
        response = client.post("/api/songs/upload", data={"title": "x"})

        assert response.status_code == 400
        assert response.json()["detail"] == "No file uploaded or invalid file type."

    def test_traversal_filename_neutralised(self, upload_song, library_dir):
        response = upload_song("../../escape.mp3")

        assert response.status_code == 200
        assert response.json()["song"]["title"] == "escape.mp3"
        assert (library_dir / "escape.mp3").exists()
        assert not (library_dir.parent / "escape.mp3").exists()

    def test_upload_onto_favorites_dir_conflicts(self, client, upload_song, library_dir):
        """A filename matching the favorites directory is a 409, not a server error."""
        client.get("/api/songs/favorites")

        response = upload_song("favorites", b"ID3")

        assert response.status_code == 409
        assert (library_dir / "favorites").is_dir()
        assert client.get("/api/songs").json() == []


class TestListSongs:
    """Test GET /api/songs."""

    def test_empty(self, client):
        response = client.get("/api/songs")
        assert response.status_code == 200
        assert response.json() == []

    def test_upload_order(self, client, upload_song):
        upload_song("b.mp3")
        upload_song("a.mp3")

        songs = client.get("/api/songs").json()
        assert [(s["id"], s["title"]) for s in songs] == [(1, "b.mp3"), (2, "a.mp3")]


class TestUpdateSong:
    """Test PUT /api/songs/{song_id}."""

    def test_rename(self, client, upload_song, library_dir):
        upload_song("song1.mp3")

        response = client.put("/api/songs/1", data={"title": "renamed", "desc": "new"})

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Song updated successfully."
        assert body["song"]["title"] == "renamed.mp3"
        assert body["song"]["desc"] == "new"
        assert (library_dir / "renamed.mp3").exists()
        assert not (library_dir / "song1.mp3").exists()

    def test_replace_file(self, client, upload_song, library_dir):
        upload_song("song1.mp3", b"old")

        response = client.put(
            "/api/songs/1",
            files={"file": ("other.mp3", b"new", "audio/mpeg")},
            data={"title": "fresh"},
        )

        assert response.status_code == 200
        assert (library_dir / "fresh.mp3").read_bytes() == b"new"
        assert not (library_dir / "song1.mp3").exists()
        assert not (library_dir / "other.mp3").exists()

    def test_replace_with_non_mp3(self, client, upload_song, library_dir):
        upload_song("song1.mp3", b"old")

        response = client.put(
            "/api/songs/1", files={"file": ("x.ogg", b"OggS", "audio/ogg")}
        )

        assert response.status_code == 400
        assert (library_dir / "song1.mp3").read_bytes() == b"old"

    def test_unknown_id(self, client):
        response = client.put("/api/songs/99", data={"title": "x"})

        assert response.status_code == 404
        assert response.json()["detail"] == "Song not found."

    def test_conflict(self, client, upload_song):
        upload_song("a.mp3")
        upload_song("b.mp3")

        response = client.put("/api/songs/1", data={"title": "b"})

        assert response.status_code == 409

    def test_invalid_title(self, client, upload_song):
        upload_song("a.mp3")

        response = client.put("/api/songs/1", data={"title": "../../etc/passwd"})

        assert response.status_code == 400


class TestDeleteSong:
    """Test DELETE /api/songs/{song_id}."""

    def test_delete(self, client, upload_song, library_dir):
        upload_song("song1.mp3")

        response = client.delete("/api/songs/1")

        assert response.status_code == 200
        assert response.json()["message"] == "Song deleted successfully."
        assert client.get("/api/songs").json() == []
        assert not (library_dir / "song1.mp3").exists()

    def test_repeated_delete(self, client, upload_song):
        upload_song("song1.mp3")
        client.delete("/api/songs/1")

        response = client.delete("/api/songs/1")

        assert response.status_code == 404

    def test_missing_backing_file(self, client, upload_song, library_dir):
        upload_song("song1.mp3")
        (library_dir / "song1.mp3").unlink()

        assert client.delete("/api/songs/1").status_code == 200

    def test_ids_not_reused(self, client, upload_song):
        upload_song("a.mp3")
        upload_song("b.mp3")
        client.delete("/api/songs/1")

        response = upload_song("c.mp3")

        assert response.json()["song"]["id"] == 3
