"""
Music library domain models.

Contains data structures for catalogued songs and computed favorites.
"""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Song:
    """Represents an uploaded song held in the in-memory catalog.

    The title defaults to the uploaded filename; filename always names the
    backing file in the library root, which may be missing if it was deleted
    out-of-band.
    """

    id: int
    title: str
    desc: str
    updated_at: datetime
    filename: str


@dataclass(frozen=True)
class Favorite:
    """Represents one entry of the favorites directory listing.

    Not stored anywhere: id is the 1-based position in the sorted listing at
    the time the listing was taken.
    """

    id: int
    title: str
    desc: str
