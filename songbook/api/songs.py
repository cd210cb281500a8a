"""
Song and tutorial endpoints

songbook/api/songs.py

"""
from fastapi import APIRouter, Depends, Query, status
from typing import List, Optional
from datetime import datetime
from bson import ObjectId
import logging

from songbook.core.database import get_database, get_client
from songbook.core.errors import NotFoundError
from songbook.api.deps import song_id_path, tutorial_id_path
from songbook.services.ordering import (
    UP,
    DOWN,
    move_song,
    move_tutorial,
    load_tutorials,
    save_tutorials,
)
from songbook.models.base import MessageResponse
from songbook.models.song import (
    SongCreate,
    SongUpdate,
    SongResponse,
    SongMessage,
    TutorialCreate,
    TutorialUpdate,
    TutorialMessage,
    new_tutorial_document,
    song_from_document,
    tutorial_from_document,
)

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("", response_model=List[SongResponse])
async def list_songs(public: Optional[str] = Query(None)):
    """
    Get all songs in display order

    - ``?public=true`` restricts the list to public songs, any other value lists all
    """
    db = get_database()

    query = {"public": True} if public == "true" else {}
    cursor = db.songs.find(query).sort("order", 1)

    songs = []
    async for song in cursor:
        songs.append(song_from_document(song))

    return songs

@router.get("/{song_id}", response_model=SongResponse)
async def get_song(song_oid: ObjectId = Depends(song_id_path)):
    """Get a specific song with its tutorials"""
    db = get_database()

    song = await db.songs.find_one({"_id": song_oid})
    if not song:
        raise NotFoundError("Song not found")

    return song_from_document(song)

@router.post("", response_model=SongMessage, status_code=status.HTTP_201_CREATED)
async def create_song(song: SongCreate):
    """
    Create a song

    - Appended at the end: order is the current song count plus one
    - Orders freed by deletions are not reused or compacted
    """
    db = get_database()

    now = datetime.utcnow()
    song_doc = {
        **song.model_dump(mode="json", exclude={"tutorials"}),
        "tutorials": [new_tutorial_document(t) for t in song.tutorials],
        "order": await db.songs.count_documents({}) + 1,
        "created_at": now,
        "updated_at": now,
    }

    result = await db.songs.insert_one(song_doc)
    song_doc["_id"] = result.inserted_id

    logger.info(f"Song {result.inserted_id} created at order {song_doc['order']}")

    return SongMessage(message="Song created", song=song_from_document(song_doc))

@router.put("/move-up/{song_id}", response_model=SongMessage)
async def move_song_up(song_oid: ObjectId = Depends(song_id_path)):
    """Swap a song with the one directly above it"""
    song = await move_song(get_database(), get_client(), song_oid, UP)
    return SongMessage(message="Song moved up", song=song_from_document(song))

@router.put("/move-down/{song_id}", response_model=SongMessage)
async def move_song_down(song_oid: ObjectId = Depends(song_id_path)):
    """Swap a song with the one directly below it"""
    song = await move_song(get_database(), get_client(), song_oid, DOWN)
    return SongMessage(message="Song moved down", song=song_from_document(song))

@router.put("/{song_id}", response_model=SongMessage)
async def update_song(
    song_update: SongUpdate,
    song_oid: ObjectId = Depends(song_id_path)
):
    """
    Update a song (full replacement of title, artist and public flag)

    - Order and tutorials have their own endpoints
    """
    db = get_database()

    update_doc = {
        **song_update.model_dump(mode="json"),
        "updated_at": datetime.utcnow()
    }

    result = await db.songs.update_one({"_id": song_oid}, {"$set": update_doc})
    if result.matched_count == 0:
        raise NotFoundError("Song not found")

    updated_song = await db.songs.find_one({"_id": song_oid})

    return SongMessage(message="Song updated", song=song_from_document(updated_song))

@router.delete("/{song_id}", response_model=MessageResponse)
async def delete_song(song_oid: ObjectId = Depends(song_id_path)):
    """
    Delete a song and its tutorials

    - Remaining orders are left as they are
    - Concerts referencing the song keep the reference
    """
    db = get_database()

    result = await db.songs.delete_one({"_id": song_oid})
    if result.deleted_count == 0:
        raise NotFoundError("Song not found")

    logger.info(f"Song {song_oid} deleted")

    return MessageResponse(message="Song deleted")

# Tutorials

@router.post("/{song_id}", response_model=TutorialMessage, status_code=status.HTTP_201_CREATED)
async def add_tutorial(
    tutorial: TutorialCreate,
    song_oid: ObjectId = Depends(song_id_path)
):
    """Append a tutorial to a song"""
    db = get_database()

    song, tutorials = await load_tutorials(db, song_oid)
    position = tutorials.append(new_tutorial_document(tutorial))
    song = await save_tutorials(db, song, tutorials)

    return TutorialMessage(
        message="Tutorial added",
        song=song_from_document(song),
        tutorial=tutorial_from_document(tutorials[position]),
    )

@router.put("/{song_id}/move-up/{tutorial_id}", response_model=TutorialMessage)
async def move_tutorial_up(
    song_oid: ObjectId = Depends(song_id_path),
    tutorial_oid: ObjectId = Depends(tutorial_id_path)
):
    """Swap a tutorial with the one before it"""
    song = await move_tutorial(get_database(), song_oid, tutorial_oid, UP)
    return TutorialMessage(message="Tutorial moved up", song=song_from_document(song))

@router.put("/{song_id}/move-down/{tutorial_id}", response_model=TutorialMessage)
async def move_tutorial_down(
    song_oid: ObjectId = Depends(song_id_path),
    tutorial_oid: ObjectId = Depends(tutorial_id_path)
):
    """Swap a tutorial with the one after it"""
    song = await move_tutorial(get_database(), song_oid, tutorial_oid, DOWN)
    return TutorialMessage(message="Tutorial moved down", song=song_from_document(song))

@router.put("/{song_id}/{tutorial_id}", response_model=TutorialMessage)
async def update_tutorial(
    tutorial_update: TutorialUpdate,
    song_oid: ObjectId = Depends(song_id_path),
    tutorial_oid: ObjectId = Depends(tutorial_id_path)
):
    """Replace a tutorial's fields, keeping its position"""
    db = get_database()

    song, tutorials = await load_tutorials(db, song_oid)
    tutorial = tutorials.replace(tutorial_oid, tutorial_update.model_dump(mode="json"))
    song = await save_tutorials(db, song, tutorials)

    return TutorialMessage(
        message="Tutorial updated",
        song=song_from_document(song),
        tutorial=tutorial_from_document(tutorial),
    )

@router.delete("/{song_id}/{tutorial_id}", response_model=TutorialMessage)
async def delete_tutorial(
    song_oid: ObjectId = Depends(song_id_path),
    tutorial_oid: ObjectId = Depends(tutorial_id_path)
):
    """Remove a tutorial from a song"""
    db = get_database()

    song, tutorials = await load_tutorials(db, song_oid)
    tutorials.remove(tutorial_oid)
    song = await save_tutorials(db, song, tutorials)

    return TutorialMessage(message="Tutorial deleted", song=song_from_document(song))
