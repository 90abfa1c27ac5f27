from dataclasses import dataclass
from typing import Type

from pydantic import BaseModel

from schemas import GameRecord, UserRecord
from validation import (
    Rule,
    categories_are_list,
    email_well_formed,
    max_players_not_below_min,
    min_players_positive,
    owned_games_not_negative,
    price_not_negative,
)


# --- Resource kinds ---

@dataclass(frozen=True)
class ResourceKind:
    """Everything the generic validator, service and router need to know about one collection."""
    label: str                       # singular, capitalized: "Game"
    collection: str                  # MongoDB collection and URL prefix: "games"
    required_fields: tuple[str, ...]
    rules: tuple[Rule, ...]
    record_type: Type[BaseModel]
    display_field: str               # used in log lines only

    @property
    def plural_label(self) -> str:
        return self.collection.capitalize()


GAME = ResourceKind(
    label="Game",
    collection="games",
    required_fields=(
        "title",
        "description",
        "minPlayers",
        "maxPlayers",
        "playTime",
        "ageRange",
        "difficulty",
        "publisher",
        "yearPublished",
        "category",
        "price",
    ),
    rules=(min_players_positive, max_players_not_below_min, price_not_negative),
    record_type=GameRecord,
    display_field="title",
)

USER = ResourceKind(
    label="User",
    collection="users",
    required_fields=(
        "username",
        "email",
        "firstName",
        "lastName",
        "favoriteGameCategories",
        "ownedGamesCount",
    ),
    rules=(owned_games_not_negative, categories_are_list, email_well_formed),
    record_type=UserRecord,
    display_field="username",
)
