"""Domain models for meal ratings."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Rating:
    """A single immutable rating submitted for a meal."""

    meal_id: str
    canteen_id: str
    rating: int
    created_at: datetime
    user_id: str | None = None
    user_hash: str | None = None
    anonymous: bool = False
    taste: int | None = None
    quantity: int | None = None
    value_for_money: int | None = None
    comment: str | None = None
    id: str | None = None


@dataclass(frozen=True)
class RatingSubmission:
    """Rating data supplied by a client before the server stamps it."""

    meal_id: str
    canteen_id: str
    rating: int
    user_id: str | None = None
    user_hash: str | None = None
    anonymous: bool = False
    taste: int | None = None
    quantity: int | None = None
    value_for_money: int | None = None
    comment: str | None = None
