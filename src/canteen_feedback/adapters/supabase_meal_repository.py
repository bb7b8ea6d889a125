"""Supabase repository for meals."""

from dataclasses import dataclass
from datetime import date, datetime

from supabase import Client

from canteen_feedback.adapters.supabase_errors import store_errors
from canteen_feedback.domain.errors import DuplicateMealError, StoreUnavailableError
from canteen_feedback.domain.meals import Meal
from canteen_feedback.services.meals import MealRepository

_COLUMNS = "id, canteen_id, date, slot, menu, created_at"


@dataclass
class SupabaseMealRepository(MealRepository):
    """Supabase implementation for meals."""

    client: Client
    table: str = "meals"

    def list_meals(self, canteen_id: str | None) -> list[Meal]:
        """Return meals ordered by date and slot."""
        with store_errors("List meals"):
            query = self.client.table(self.table).select(_COLUMNS)
            if canteen_id:
                query = query.eq("canteen_id", canteen_id)
            response = query.order("date", desc=False).order("slot").execute()
        return [_parse_row(row) for row in response.data or []]

    def get_meal(self, meal_id: str) -> Meal | None:
        """Return a meal by id."""
        with store_errors("Get meal"):
            response = (
                self.client.table(self.table)
                .select(_COLUMNS)
                .eq("id", meal_id)
                .limit(1)
                .execute()
            )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def create_meal(self, meal: Meal) -> Meal:
        """Insert a meal row."""
        with store_errors("Create meal", conflict=DuplicateMealError):
            response = (
                self.client.table(self.table)
                .insert(
                    {
                        "id": meal.id,
                        "canteen_id": meal.canteen_id,
                        "date": meal.served_on.isoformat(),
                        "slot": meal.slot,
                        "menu": meal.menu,
                        "created_at": meal.created_at.isoformat()
                        if meal.created_at
                        else None,
                    }
                )
                .execute()
            )
        if not response.data:
            raise StoreUnavailableError("Failed to create meal")
        return _parse_row(response.data[0])

    def update_meal(self, meal_id: str, changes: dict[str, object]) -> Meal | None:
        """Update columns of a meal row."""
        with store_errors("Update meal", conflict=DuplicateMealError):
            response = (
                self.client.table(self.table)
                .update(changes)
                .eq("id", meal_id)
                .execute()
            )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def delete_meal(self, meal_id: str) -> bool:
        """Delete a meal row."""
        with store_errors("Delete meal"):
            response = (
                self.client.table(self.table).delete().eq("id", meal_id).execute()
            )
        return bool(response.data)


def _parse_row(row: dict[str, object]) -> Meal:
    created_raw = row.get("created_at")
    return Meal(
        id=str(row["id"]),
        canteen_id=str(row["canteen_id"]),
        served_on=date.fromisoformat(str(row["date"])),
        slot=str(row["slot"]),
        menu=[str(item) for item in row.get("menu") or []],
        created_at=datetime.fromisoformat(created_raw)
        if isinstance(created_raw, str) and created_raw
        else None,
    )
