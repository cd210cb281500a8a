"""
Concert endpoints

songbook/api/concerts.py

"""
from fastapi import APIRouter, Depends, status
from typing import List
from bson import ObjectId
import logging

from songbook.core.database import get_database
from songbook.core.errors import NotFoundError
from songbook.api.deps import concert_id_path, parse_object_id
from songbook.models.base import MessageResponse
from songbook.models.concert import (
    ConcertBase,
    ConcertCreate,
    ConcertUpdate,
    ConcertResponse,
    ConcertMessage,
    concert_from_document,
)

logger = logging.getLogger(__name__)

router = APIRouter()

def _concert_document(concert: ConcertBase) -> dict:
    """Stored form of a concert; song references become ObjectIds"""
    return {
        **concert.model_dump(exclude={"songs"}),
        "songs": [parse_object_id(song_id, "song ID") for song_id in concert.songs],
    }

@router.get("", response_model=List[ConcertResponse])
async def list_concerts():
    """Get all concerts"""
    db = get_database()

    concerts = []
    async for concert in db.concerts.find({}):
        concerts.append(concert_from_document(concert))

    return concerts

@router.get("/slug/{slug}", response_model=ConcertResponse)
async def get_concert_by_slug(slug: str):
    """Get a concert by its unique slug"""
    db = get_database()

    concert = await db.concerts.find_one({"slug": slug})
    if not concert:
        raise NotFoundError("Concert not found")

    return concert_from_document(concert)

@router.get("/{concert_id}", response_model=ConcertResponse)
async def get_concert(concert_oid: ObjectId = Depends(concert_id_path)):
    """Get a specific concert"""
    db = get_database()

    concert = await db.concerts.find_one({"_id": concert_oid})
    if not concert:
        raise NotFoundError("Concert not found")

    return concert_from_document(concert)

@router.post("", response_model=ConcertMessage, status_code=status.HTTP_201_CREATED)
async def create_concert(concert: ConcertCreate):
    """
    Create a concert

    - Name and slug are required, slug must be unique
    - Songs are stored as references only; they are not checked for existence
    """
    db = get_database()

    concert_doc = _concert_document(concert)
    result = await db.concerts.insert_one(concert_doc)
    concert_doc["_id"] = result.inserted_id

    logger.info(f"Concert {result.inserted_id} created with slug '{concert.slug}'")

    return ConcertMessage(message="Concert created", concert=concert_from_document(concert_doc))

@router.put("/{concert_id}", response_model=ConcertMessage)
async def update_concert(
    concert_update: ConcertUpdate,
    concert_oid: ObjectId = Depends(concert_id_path)
):
    """Update a concert (full replacement)"""
    db = get_database()

    result = await db.concerts.update_one(
        {"_id": concert_oid},
        {"$set": _concert_document(concert_update)}
    )
    if result.matched_count == 0:
        raise NotFoundError("Concert not found")

    updated_concert = await db.concerts.find_one({"_id": concert_oid})

    return ConcertMessage(message="Concert updated", concert=concert_from_document(updated_concert))

@router.delete("/{concert_id}", response_model=MessageResponse)
async def delete_concert(concert_oid: ObjectId = Depends(concert_id_path)):
    """Delete a concert; the songs it references are untouched"""
    db = get_database()

    result = await db.concerts.delete_one({"_id": concert_oid})
    if result.deleted_count == 0:
        raise NotFoundError("Concert not found")

    return MessageResponse(message="Concert deleted")
