"""
songbook/models/song.py
"""


from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel, Field, ConfigDict
from bson import ObjectId
from songbook.models.base import Gender, PyObjectId

class TutorialBase(BaseModel):
    """Instructional recording attached to a song"""
    type: str = Field(..., min_length=1, description="Tutorial kind, e.g. video or audio")
    title: str = Field(..., min_length=1, max_length=200)
    googleId: str = Field(..., min_length=1, description="Google Drive id of the media")
    lyrics: Optional[str] = None
    categories: List[str] = Field(default_factory=list)
    gender: Gender = Gender.ANY

class TutorialCreate(TutorialBase):
    """Create tutorial request model"""

class TutorialUpdate(TutorialBase):
    """Update tutorial request model - requires all fields"""

class TutorialResponse(TutorialBase):
    model_config = ConfigDict(populate_by_name=True)

    id: PyObjectId = Field(alias="_id")

class SongCreate(BaseModel):
    """Create song request model

    Any ``_id`` or ``order`` in the payload is ignored; ``order`` is assigned
    on insert.
    """
    title: str = Field(..., min_length=1, max_length=200)
    artist: str = Field(..., min_length=1, max_length=200)
    public: bool = False
    tutorials: List[TutorialCreate] = Field(default_factory=list)

class SongUpdate(BaseModel):
    """Update song request model - replaces every mutable field"""
    title: str = Field(..., min_length=1, max_length=200)
    artist: str = Field(..., min_length=1, max_length=200)
    public: bool = False

class SongResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: PyObjectId = Field(alias="_id")
    title: str
    artist: str
    public: bool = False
    order: int
    tutorials: List[TutorialResponse] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class SongMessage(BaseModel):
    message: str
    song: Optional[SongResponse] = None

class TutorialMessage(BaseModel):
    message: str
    song: SongResponse
    tutorial: Optional[TutorialResponse] = None

def new_tutorial_document(tutorial: TutorialBase) -> dict:
    """Stored form of a tutorial, with its own ObjectId"""
    return {"_id": ObjectId(), **tutorial.model_dump(mode="json")}

def tutorial_from_document(doc: dict) -> TutorialResponse:
    return TutorialResponse(**{**doc, "_id": str(doc["_id"])})

def song_from_document(doc: dict) -> SongResponse:
    tutorials = [tutorial_from_document(t) for t in doc.get("tutorials", [])]
    return SongResponse(**{**doc, "_id": str(doc["_id"]), "tutorials": tutorials})
