"""Request models for the HTTP API."""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field


class RatingPayload(BaseModel):
    """Rating submitted by a client."""

    model_config = ConfigDict(populate_by_name=True)

    meal_id: str = Field(alias="mealId", min_length=1)
    canteen_id: str = Field(alias="canteenId", min_length=1)
    rating: int = Field(ge=1, le=5)
    user_id: str | None = Field(default=None, alias="userId")
    user_hash: str | None = Field(default=None, alias="userHash")
    anonymous: bool = False
    taste: int | None = Field(default=None, ge=1, le=5)
    quantity: int | None = Field(default=None, ge=1, le=5)
    value_for_money: int | None = Field(default=None, alias="valueForMoney", ge=1, le=5)
    comment: str | None = None


class MealPayload(BaseModel):
    """Meal created by a canteen operator."""

    model_config = ConfigDict(populate_by_name=True)

    canteen_id: str = Field(alias="canteenId", min_length=1)
    served_on: date = Field(alias="date")
    slot: str = Field(min_length=1)
    menu: list[str] = Field(default_factory=list)


class RecomputePayload(BaseModel):
    """Request to recompute and store a weekly report."""

    model_config = ConfigDict(populate_by_name=True)

    canteen_id: str = Field(alias="canteenId")
    week_start: str | None = Field(default=None, alias="weekStart")


class MealUpdatePayload(BaseModel):
    """Partial update of a meal; omitted fields are left unchanged."""

    slot: str | None = None
    menu: list[str] | None = None
