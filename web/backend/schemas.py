from datetime import datetime
from pydantic import BaseModel
from typing import Optional


class SongInfo(BaseModel):
    id: int
    title: str
    desc: str
    updatedAt: datetime
    filename: str  # Name under /files


class FavoriteInfo(BaseModel):
    id: int  # 1-based position in the favorites listing
    title: str
    desc: str

    model_config = {"frozen": True}  # Immutable


class AddFavoriteRequest(BaseModel):
    title: Optional[str] = None


class MessageResponse(BaseModel):
    message: str


class SongResponse(BaseModel):
    message: str
    song: SongInfo


class DeleteSongResponse(BaseModel):
    message: str
    song: Optional[SongInfo] = None


class FavoriteResponse(BaseModel):
    message: str
    favorite: FavoriteInfo
