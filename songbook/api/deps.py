#songbook/api/deps.py

from bson import ObjectId
from songbook.core.errors import DocumentValidationError

def parse_object_id(value: str, label: str = "ID") -> ObjectId:
    """Convert a path or body id to ObjectId, rejecting malformed ones with a 400"""
    if not ObjectId.is_valid(value):
        raise DocumentValidationError(f"Invalid {label} format")
    return ObjectId(value)

def song_id_path(song_id: str) -> ObjectId:
    return parse_object_id(song_id, "song ID")

def tutorial_id_path(tutorial_id: str) -> ObjectId:
    return parse_object_id(tutorial_id, "tutorial ID")

def concert_id_path(concert_id: str) -> ObjectId:
    return parse_object_id(concert_id, "concert ID")
