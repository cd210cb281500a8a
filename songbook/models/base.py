"""
songbook/models/base.py
"""


from enum import Enum
from pydantic import BaseModel

# Ids travel as strings; ObjectId conversion happens at the database layer
PyObjectId = str

# Enums
class Gender(str, Enum):
    """Voice a tutorial is recorded for"""
    MALE = "M"
    FEMALE = "F"
    ANY = ""

class MessageResponse(BaseModel):
    """Plain acknowledgement"""
    message: str
