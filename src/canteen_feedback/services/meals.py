"""Meal catalogue service."""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from typing import Protocol

from canteen_feedback.domain.errors import InvalidArgumentError, MealNotFoundError
from canteen_feedback.domain.meals import Meal, meal_key


class MealRepository(Protocol):
    """Persistence interface for meals."""

    def list_meals(self, canteen_id: str | None) -> list[Meal]:
        """Return meals, optionally limited to one canteen."""

    def get_meal(self, meal_id: str) -> Meal | None:
        """Return a meal by id if present."""

    def create_meal(self, meal: Meal) -> Meal:
        """Create a meal and return it."""

    def update_meal(self, meal_id: str, changes: dict[str, object]) -> Meal | None:
        """Apply column changes to a meal and return it, or None if missing."""

    def delete_meal(self, meal_id: str) -> bool:
        """Delete a meal and return True if a row was removed."""


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class MealService:
    """Service for the meal catalogue."""

    repository: MealRepository
    clock: Callable[[], datetime] = field(default=_utcnow)

    def list_meals(self, canteen_id: str | None = None) -> list[Meal]:
        """Return meals, optionally for a single canteen."""
        return self.repository.list_meals(canteen_id or None)

    def create_meal(
        self,
        canteen_id: str,
        served_on: date,
        slot: str,
        menu: list[str] | None = None,
    ) -> Meal:
        """Create a meal for a canteen date and slot."""
        if not canteen_id.strip():
            raise InvalidArgumentError("canteenId required")
        slot = slot.strip().lower()
        if not slot:
            raise InvalidArgumentError("slot required")
        meal = Meal(
            id=meal_key(canteen_id, served_on, slot),
            canteen_id=canteen_id,
            served_on=served_on,
            slot=slot,
            menu=list(menu or []),
            created_at=self.clock(),
        )
        return self.repository.create_meal(meal)

    def update_meal(
        self, meal_id: str, slot: str | None = None, menu: list[str] | None = None
    ) -> Meal:
        """Update a meal's slot or menu; the id stays unchanged."""
        changes: dict[str, object] = {}
        if slot is not None:
            slot = slot.strip().lower()
            if not slot:
                raise InvalidArgumentError("slot must not be empty")
            changes["slot"] = slot
        if menu is not None:
            changes["menu"] = list(menu)
        if changes:
            meal = self.repository.update_meal(meal_id, changes)
        else:
            meal = self.repository.get_meal(meal_id)
        if meal is None:
            raise MealNotFoundError(f"Meal not found: {meal_id}")
        return meal

    def delete_meal(self, meal_id: str) -> None:
        """Delete a meal."""
        if not self.repository.delete_meal(meal_id):
            raise MealNotFoundError(f"Meal not found: {meal_id}")
