"""
songbook/models/concert.py
"""


from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel, Field, ConfigDict
from songbook.models.base import PyObjectId

class ConcertBase(BaseModel):
    """A named grouping of songs; songs are referenced by id, not owned"""
    name: str = Field(..., min_length=1, max_length=200)
    slug: str = Field(..., min_length=1, max_length=200)
    date: Optional[datetime] = None
    songs: List[PyObjectId] = Field(default_factory=list)

class ConcertCreate(ConcertBase):
    """Create concert request model"""

class ConcertUpdate(ConcertBase):
    """Update concert request model - requires all fields"""

class ConcertResponse(ConcertBase):
    model_config = ConfigDict(populate_by_name=True)

    id: PyObjectId = Field(alias="_id")

class ConcertMessage(BaseModel):
    message: str
    concert: Optional[ConcertResponse] = None

def concert_from_document(doc: dict) -> ConcertResponse:
    return ConcertResponse(**{
        **doc,
        "_id": str(doc["_id"]),
        "songs": [str(song_id) for song_id in doc.get("songs", [])],
    })
