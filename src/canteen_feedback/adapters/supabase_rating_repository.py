"""Supabase repository for ratings."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from canteen_feedback.adapters.supabase_errors import store_errors
from canteen_feedback.domain.errors import DuplicateRatingError, StoreUnavailableError
from canteen_feedback.domain.ratings import Rating
from canteen_feedback.services.ratings import RatingRepository

_COLUMNS = (
    "id, meal_id, canteen_id, user_id, user_hash, anonymous, rating, taste, "
    "quantity, value_for_money, comment, created_at"
)


@dataclass
class SupabaseRatingRepository(RatingRepository):
    """Supabase implementation for ratings."""

    client: Client
    table: str = "ratings"

    def create_rating(self, rating: Rating) -> Rating:
        """Insert a rating row and return the stored rating."""
        with store_errors("Create rating", conflict=DuplicateRatingError):
            response = (
                self.client.table(self.table)
                .insert(
                    {
                        "meal_id": rating.meal_id,
                        "canteen_id": rating.canteen_id,
                        "user_id": rating.user_id,
                        "user_hash": rating.user_hash,
                        "anonymous": rating.anonymous,
                        "rating": rating.rating,
                        "taste": rating.taste,
                        "quantity": rating.quantity,
                        "value_for_money": rating.value_for_money,
                        "comment": rating.comment,
                        "created_at": rating.created_at.isoformat(),
                    }
                )
                .execute()
            )
        if not response.data:
            raise StoreUnavailableError("Failed to create rating")
        return _parse_row(response.data[0])

    def list_ratings(
        self, canteen_id: str, start: datetime, end: datetime
    ) -> list[Rating]:
        """Return a canteen's ratings in the half-open time range."""
        with store_errors("List ratings"):
            response = (
                self.client.table(self.table)
                .select(_COLUMNS)
                .eq("canteen_id", canteen_id)
                .gte("created_at", start.isoformat())
                .lt("created_at", end.isoformat())
                .order("created_at", desc=False)
                .execute()
            )
        return [_parse_row(row) for row in response.data or []]

    def list_recent_ratings(self, limit: int) -> list[Rating]:
        """Return the newest ratings."""
        with store_errors("List recent ratings"):
            response = (
                self.client.table(self.table)
                .select(_COLUMNS)
                .order("created_at", desc=True)
                .limit(limit)
                .execute()
            )
        return [_parse_row(row) for row in response.data or []]


def _parse_row(row: dict[str, object]) -> Rating:
    return Rating(
        id=_optional_str(row.get("id")),
        meal_id=str(row["meal_id"]),
        canteen_id=str(row["canteen_id"]),
        rating=int(row["rating"]),
        created_at=_parse_timestamp(row["created_at"]),
        user_id=_optional_str(row.get("user_id")),
        user_hash=_optional_str(row.get("user_hash")),
        anonymous=bool(row.get("anonymous", False)),
        taste=_optional_int(row.get("taste")),
        quantity=_optional_int(row.get("quantity")),
        value_for_money=_optional_int(row.get("value_for_money")),
        comment=_optional_str(row.get("comment")),
    )


def _parse_timestamp(value: object) -> datetime:
    parsed = datetime.fromisoformat(str(value))
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def _optional_str(value: object) -> str | None:
    return None if value is None else str(value)


def _optional_int(value: object) -> int | None:
    return None if value is None else int(value)
