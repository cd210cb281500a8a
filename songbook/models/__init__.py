"""

songbook/models/__init__.py

"""


from songbook.models.base import *
from songbook.models.song import *
from songbook.models.concert import *

__all__ = [
    # Base
    "PyObjectId",
    "Gender",
    "MessageResponse",

    # Song models
    "TutorialBase",
    "TutorialCreate",
    "TutorialUpdate",
    "TutorialResponse",
    "song_from_document",
    "tutorial_from_document",
    "new_tutorial_document",
    "SongCreate",
    "SongUpdate",
    "SongResponse",
    "SongMessage",
    "TutorialMessage",

    # Concert models
    "ConcertBase",
    "ConcertCreate",
    "ConcertUpdate",
    "ConcertResponse",
    "ConcertMessage",
    "concert_from_document",
]
