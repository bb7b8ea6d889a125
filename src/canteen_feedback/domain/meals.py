"""Domain models for the meal catalogue."""

from dataclasses import dataclass, field
from datetime import date, datetime


@dataclass(frozen=True)
class Meal:
    """A meal served by a canteen on a given date and slot."""

    id: str
    canteen_id: str
    served_on: date
    slot: str
    menu: list[str] = field(default_factory=list)
    created_at: datetime | None = None


def meal_key(canteen_id: str, served_on: date, slot: str) -> str:
    """Return the stable meal identifier for a canteen date and slot."""
    return f"meal_{served_on.isoformat()}_{canteen_id}_{slot}"
