from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from loguru import logger
from typing import Optional
from songbook.domain.library import LibraryError, Song, SongCatalog, UploadGate
from ..deps import get_catalog, get_upload_gate
from ..errors import to_http_exception
from ..schemas import DeleteSongResponse, SongInfo, SongResponse

router = APIRouter()


def song_to_info(song: Song) -> SongInfo:
    """Pure function - domain song to API schema."""
    return SongInfo(
        id=song.id,
        title=song.title,
        desc=song.desc,
        updatedAt=song.updated_at,
        filename=song.filename,
    )


@router.post("/songs/upload", response_model=SongResponse)
def upload_song(
    file: Optional[UploadFile] = File(None),
    title: Optional[str] = Form(None),
    desc: Optional[str] = Form(None),
    gate: UploadGate = Depends(get_upload_gate),
):
    """Upload a new MP3 song."""
    if file is None or not file.filename:
        raise HTTPException(400, "No file uploaded or invalid file type.")

    try:
        song = gate.upload(file.file, file.content_type, file.filename, title=title, desc=desc)
    except LibraryError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.exception(f"Upload failed for {file.filename!r}")
        raise HTTPException(status_code=500, detail=f"Upload failed: {str(e)}")

    return SongResponse(message="File uploaded successfully.", song=song_to_info(song))


@router.get("/songs", response_model=list[SongInfo])
def list_songs(catalog: SongCatalog = Depends(get_catalog)):
    """Fetch all songs in upload order."""
    return [song_to_info(song) for song in catalog.list()]


@router.put("/songs/{song_id}", response_model=SongResponse)
def update_song(
    song_id: int,
    file: Optional[UploadFile] = File(None),
    title: Optional[str] = Form(None),
    desc: Optional[str] = Form(None),
    catalog: SongCatalog = Depends(get_catalog),
    gate: UploadGate = Depends(get_upload_gate),
):
    """Rename, re-describe or replace the file of a song."""
    try:
        replacement = None
        if file is not None and file.filename:
            replacement = gate.stage(file.file, file.content_type)
        song = catalog.update(song_id, title=title, desc=desc, replacement=replacement)
    except LibraryError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.exception(f"Failed to update song {song_id}")
        raise HTTPException(status_code=500, detail=f"Failed to update song: {str(e)}")

    return SongResponse(message="Song updated successfully.", song=song_to_info(song))


@router.delete("/songs/{song_id}", response_model=DeleteSongResponse)
def delete_song(song_id: int, catalog: SongCatalog = Depends(get_catalog)):
    """Delete a song and its file."""
    try:
        song = catalog.delete(song_id)
    except LibraryError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.exception(f"Failed to delete song {song_id}")
        raise HTTPException(status_code=500, detail=f"Failed to delete song: {str(e)}")

    return DeleteSongResponse(message="Song deleted successfully.", song=song_to_info(song))
