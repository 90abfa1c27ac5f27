from datetime import datetime
from typing import Any, Optional, Union

from pydantic import BaseModel, Field, StrictFloat, StrictInt, StrictStr

# Numbers keep the JSON type they arrived with: 45 stays 45, 45.5 stays 45.5.
Number = Union[StrictInt, StrictFloat]


class GameRecord(BaseModel):
    title: StrictStr
    description: StrictStr
    minPlayers: Number
    maxPlayers: Number
    # No rules beyond presence; stored exactly as submitted.
    playTime: Any
    ageRange: Any
    difficulty: Any
    publisher: Any
    yearPublished: Any
    category: Any
    price: Number


class UserRecord(BaseModel):
    username: Any
    email: StrictStr
    firstName: Any
    lastName: Any
    favoriteGameCategories: list[StrictStr]
    ownedGamesCount: Number
    # Stamped by the server on create; only present on input when a caller resubmits it.
    dateJoined: Optional[datetime] = None


class Envelope(BaseModel):
    """Uniform response wrapper. Unset optional fields are left out of the JSON body."""
    success: bool
    message: str
    data: Any = None
    count: Optional[int] = None
    error: Optional[str] = None
    missingFields: Optional[list[str]] = Field(default=None)
