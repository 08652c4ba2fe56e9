from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from loguru import logger
from typing import Optional
from songbook.domain.library import Favorite, FavoritesIndex, LibraryError, UploadGate
from ..deps import get_favorites, get_upload_gate
from ..errors import to_http_exception
from ..schemas import AddFavoriteRequest, FavoriteInfo, FavoriteResponse, MessageResponse

router = APIRouter()


def favorite_to_info(favorite: Favorite) -> FavoriteInfo:
    """Pure function - domain favorite to API schema."""
    return FavoriteInfo(id=favorite.id, title=favorite.title, desc=favorite.desc)


@router.get("/songs/favorites", response_model=list[FavoriteInfo])
def list_favorites(favorites: FavoritesIndex = Depends(get_favorites)):
    """Fetch favorite songs, numbered by position in the favorites directory."""
    try:
        return [favorite_to_info(f) for f in favorites.list()]
    except Exception as e:
        logger.exception("Failed to list favorites")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/songs/favorites", response_model=MessageResponse)
def add_favorite(
    body: Optional[AddFavoriteRequest] = None,
    favorites: FavoritesIndex = Depends(get_favorites),
):
    """Copy a song from the library into favorites."""
    if body is None or not body.title:
        raise HTTPException(400, "Title is required to add to favorites.")

    try:
        favorites.add(body.title)
    except LibraryError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.exception(f"Failed to add favorite {body.title!r}")
        raise HTTPException(status_code=500, detail=f"Failed to add favorite: {str(e)}")

    return MessageResponse(message="Added to favorites successfully.")


@router.put("/songs/favorites/{position}", response_model=FavoriteResponse)
def update_favorite(
    position: int,
    file: Optional[UploadFile] = File(None),
    title: Optional[str] = Form(None),
    desc: Optional[str] = Form(None),
    favorites: FavoritesIndex = Depends(get_favorites),
    gate: UploadGate = Depends(get_upload_gate),
):
    """Rename or replace the favorite at a listing position."""
    try:
        replacement = None
        if file is not None and file.filename:
            replacement = gate.stage(file.file, file.content_type)
        favorite = favorites.update(position, title=title, desc=desc, replacement=replacement)
    except LibraryError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.exception(f"Failed to update favorite {position}")
        raise HTTPException(status_code=500, detail=f"Failed to update favorite: {str(e)}")

    return FavoriteResponse(
        message="Favorite updated successfully.", favorite=favorite_to_info(favorite)
    )


@router.delete("/songs/favorites/{position}", response_model=MessageResponse)
def remove_favorite(position: int, favorites: FavoritesIndex = Depends(get_favorites)):
    """Delete the favorite at a listing position."""
    try:
        favorites.remove(position)
    except LibraryError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.exception(f"Failed to remove favorite {position}")
        raise HTTPException(status_code=500, detail=f"Failed to remove favorite: {str(e)}")

    return MessageResponse(message="Removed from favorites successfully.")
