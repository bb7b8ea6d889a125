"""Domain models for weekly canteen reports."""

from dataclasses import dataclass
from datetime import datetime, timedelta


@dataclass(frozen=True)
class WeekWindow:
    """Half-open UTC interval [start, end) beginning on a Monday."""

    start: datetime
    end: datetime

    @property
    def week_start(self) -> str:
        """Return the first day of the window as YYYY-MM-DD."""
        return self.start.date().isoformat()

    @property
    def week_end_display(self) -> str:
        """Return the last day inside the window as YYYY-MM-DD."""
        return (self.end - timedelta(milliseconds=1)).date().isoformat()

    def contains(self, instant: datetime) -> bool:
        """Return True when the instant falls inside the window."""
        return self.start <= instant < self.end


@dataclass(frozen=True)
class DailyRollup:
    """Rating count and average for one calendar day."""

    date: str
    count: int
    avg_rating: float


@dataclass(frozen=True)
class MealDayGroup:
    """Ratings of one meal on one day."""

    meal_id: str
    day: str
    count: int
    avg_rating: float
    sum_rating: int
    avg_taste: float | None


@dataclass(frozen=True)
class MealAggregate:
    """Ratings of one meal across the whole week."""

    meal_id: str
    avg_rating: float
    count: int
    daily: list[MealDayGroup]


@dataclass(frozen=True)
class TopMeal:
    """Ranked meal entry in a weekly report."""

    meal_id: str
    avg_rating: float
    count: int


@dataclass(frozen=True)
class WeeklyReport:
    """Weekly summary of ratings for a canteen."""

    canteen_id: str
    week_start: str
    week_end: str
    total_ratings: int
    avg_rating: float
    top_meals: list[TopMeal]
    daily: list[DailyRollup]


@dataclass(frozen=True)
class StoredWeeklyReport:
    """Materialized weekly report with its write timestamp."""

    report: WeeklyReport
    last_updated: datetime
