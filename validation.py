"""
Submission checks shared by every resource kind.

A kind supplies its required-field list and an ordered tuple of rules; a rule
takes the raw payload and returns an error message or None. Presence is
checked first and reports every missing field; rules only run once all
required fields are present, and the first failing rule wins.
"""

import math
import re
from typing import Any, Callable, Optional

from pydantic import ValidationError

Rule = Callable[[dict], Optional[str]]

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")


class ValidationFailure(Exception):
    def __init__(self, message: str, missing_fields: Optional[list[str]] = None):
        super().__init__(message)
        self.message = message
        self.missing_fields = missing_fields or []


def is_blank(value: Any) -> bool:
    """Falsy scalars count as missing; empty lists and dicts do not."""
    if value is None or value is False or value == "":
        return True
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value == 0 or (isinstance(value, float) and math.isnan(value))
    return False


def is_number(value: Any) -> bool:
    """Finite int or float; bools and Infinity do not count."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return isinstance(value, int) or math.isfinite(value)


def contains_non_finite(value: Any) -> bool:
    if isinstance(value, float):
        return not math.isfinite(value)
    if isinstance(value, dict):
        return any(contains_non_finite(v) for v in value.values())
    if isinstance(value, list):
        return any(contains_non_finite(v) for v in value)
    return False


def missing_fields(payload: dict, required: tuple[str, ...]) -> list[str]:
    return [name for name in required if is_blank(payload.get(name))]


def validate(payload: dict, kind) -> Optional[ValidationFailure]:
    missing = missing_fields(payload, kind.required_fields)
    if missing:
        return ValidationFailure(
            f"Missing required fields: {', '.join(missing)}", missing
        )
    for rule in kind.rules:
        message = rule(payload)
        if message:
            return ValidationFailure(message)
    return None


def decode(payload: dict, kind):
    """Validate a raw payload and convert it into the kind's typed record."""
    failure = validate(payload, kind)
    if failure:
        raise failure
    # Infinity and NaN parse from the request body but cannot be written back out as JSON.
    for name, value in payload.items():
        if name in kind.record_type.model_fields and contains_non_finite(value):
            raise ValidationFailure(f"{name} must not contain Infinity or NaN")
    try:
        return kind.record_type.model_validate(payload)
    except ValidationError as exc:
        error = exc.errors()[0]
        location = ".".join(str(part) for part in error["loc"])
        raise ValidationFailure(f"{location}: {error['msg']}") from exc


# --- Game rules ---

def min_players_positive(payload: dict) -> Optional[str]:
    value = payload["minPlayers"]
    if not is_number(value) or value <= 0:
        return "minPlayers must be a number greater than 0"
    return None


def max_players_not_below_min(payload: dict) -> Optional[str]:
    value = payload["maxPlayers"]
    if not is_number(value) or value < payload["minPlayers"]:
        return "maxPlayers must be a number greater than or equal to minPlayers"
    return None


def price_not_negative(payload: dict) -> Optional[str]:
    value = payload["price"]
    if not is_number(value) or value < 0:
        return "price must be a number greater than or equal to 0"
    return None


# --- User rules ---

def owned_games_not_negative(payload: dict) -> Optional[str]:
    value = payload["ownedGamesCount"]
    if not is_number(value) or value < 0:
        return "ownedGamesCount must be a number greater than or equal to 0"
    return None


def categories_are_list(payload: dict) -> Optional[str]:
    if not isinstance(payload["favoriteGameCategories"], list):
        return "favoriteGameCategories must be an array"
    return None


def email_well_formed(payload: dict) -> Optional[str]:
    email = payload["email"]
    if not isinstance(email, str) or not EMAIL_PATTERN.fullmatch(email):
        return "Invalid email format"
    return None
