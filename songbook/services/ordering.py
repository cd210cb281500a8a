"""
Reordering of songs and of the tutorials inside a song

songbook/services/ordering.py

Songs are ordered by a unique integer ``order`` field. Swapping two of them
runs inside a single transaction so the uniqueness constraint is never
violated by a committed write and a failed swap leaves both songs untouched.

Tutorials are ordered by their position in the parent song's ``tutorials``
array. ``TutorialSequence`` is that array as an explicit ordered collection;
every change to it is persisted with one write of the parent song.
"""
from typing import Iterator, List
from datetime import datetime
from bson import ObjectId
import logging

from songbook.core.errors import ConflictError, InvalidMoveError, NotFoundError

logger = logging.getLogger(__name__)

# Parking value for a song while its order is handed to its neighbour
ORDER_SENTINEL = -1

UP = -1
DOWN = 1

_DIRECTION_NAMES = {UP: "up", DOWN: "down"}


async def move_song(db, client, song_id: ObjectId, direction: int) -> dict:
    """
    Swap a song's order with the song directly above (UP) or below (DOWN)

    - NotFoundError if the song does not exist
    - InvalidMoveError if no song holds the neighbouring order
    - ConflictError if either order changed before the swap committed
    """
    if direction not in _DIRECTION_NAMES:
        raise ValueError(f"direction must be UP or DOWN, got {direction!r}")

    target = await db.songs.find_one({"_id": song_id})
    if not target:
        raise NotFoundError("Song not found")

    neighbour = await db.songs.find_one({"order": target["order"] + direction})
    if not neighbour:
        raise InvalidMoveError(f"Song cannot move further {_DIRECTION_NAMES[direction]}")

    target_order = target["order"]
    neighbour_order = neighbour["order"]
    now = datetime.utcnow()

    async def swap(session):
        steps = [
            (neighbour["_id"], neighbour_order, ORDER_SENTINEL),
            (target["_id"], target_order, neighbour_order),
            (neighbour["_id"], ORDER_SENTINEL, target_order),
        ]
        for doc_id, expected, new_order in steps:
            result = await db.songs.update_one(
                {"_id": doc_id, "order": expected},
                {"$set": {"order": new_order, "updated_at": now}},
                session=session,
            )
            if result.matched_count == 0:
                raise ConflictError("Song order changed during the move, retry")

    async with await client.start_session() as session:
        await session.with_transaction(swap)

    logger.info(
        f"Song {song_id} moved {_DIRECTION_NAMES[direction]}: "
        f"order {target_order} -> {neighbour_order}, song {neighbour['_id']} now at {target_order}"
    )

    target["order"] = neighbour_order
    target["updated_at"] = now
    return target


class TutorialSequence:
    """Tutorials of one song, ordered by position"""

    def __init__(self, tutorials: List[dict]):
        self._items = list(tutorials)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[dict]:
        return iter(self._items)

    def __getitem__(self, position: int) -> dict:
        return self._items[position]

    def position_of(self, tutorial_id: ObjectId) -> int:
        for position, tutorial in enumerate(self._items):
            if tutorial["_id"] == tutorial_id:
                return position
        raise NotFoundError("Tutorial not found")

    def swap(self, first: int, second: int):
        self._items[first], self._items[second] = self._items[second], self._items[first]

    def move(self, tutorial_id: ObjectId, direction: int) -> int:
        """Swap a tutorial with its neighbour and return its new position"""
        if direction not in _DIRECTION_NAMES:
            raise ValueError(f"direction must be UP or DOWN, got {direction!r}")

        position = self.position_of(tutorial_id)
        destination = position + direction
        if destination < 0 or destination >= len(self._items):
            raise InvalidMoveError(f"Tutorial cannot move further {_DIRECTION_NAMES[direction]}")

        self.swap(position, destination)
        return destination

    def append(self, tutorial: dict) -> int:
        self._items.append(tutorial)
        return len(self._items) - 1

    def replace(self, tutorial_id: ObjectId, fields: dict) -> dict:
        """Overwrite a tutorial's fields in place, keeping its id and position"""
        position = self.position_of(tutorial_id)
        self._items[position] = {**fields, "_id": tutorial_id}
        return self._items[position]

    def remove(self, tutorial_id: ObjectId) -> dict:
        return self._items.pop(self.position_of(tutorial_id))

    def to_documents(self) -> List[dict]:
        return list(self._items)


async def load_tutorials(db, song_id: ObjectId):
    """Fetch a song and wrap its tutorials; NotFoundError if the song is missing"""
    song = await db.songs.find_one({"_id": song_id})
    if not song:
        raise NotFoundError("Song not found")
    return song, TutorialSequence(song.get("tutorials", []))


async def save_tutorials(db, song: dict, tutorials: TutorialSequence) -> dict:
    """Persist the whole sequence back into its song in a single write"""
    update = {"tutorials": tutorials.to_documents(), "updated_at": datetime.utcnow()}
    result = await db.songs.update_one({"_id": song["_id"]}, {"$set": update})
    if result.matched_count == 0:
        raise NotFoundError("Song not found")
    song.update(update)
    return song


async def move_tutorial(db, song_id: ObjectId, tutorial_id: ObjectId, direction: int) -> dict:
    """Move a tutorial one slot UP or DOWN within its song"""
    song, tutorials = await load_tutorials(db, song_id)
    position = tutorials.move(tutorial_id, direction)
    song = await save_tutorials(db, song, tutorials)

    logger.info(
        f"Tutorial {tutorial_id} of song {song_id} moved {_DIRECTION_NAMES[direction]} to position {position}"
    )
    return song
