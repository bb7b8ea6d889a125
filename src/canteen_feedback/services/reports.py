"""Weekly report aggregation, materialization and queries."""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol

from canteen_feedback.domain.errors import ComputationError, InvalidArgumentError
from canteen_feedback.domain.ratings import Rating
from canteen_feedback.domain.reports import (
    DailyRollup,
    MealAggregate,
    MealDayGroup,
    StoredWeeklyReport,
    TopMeal,
    WeeklyReport,
    WeekWindow,
)
from canteen_feedback.services.ratings import RatingRepository
from canteen_feedback.services.weeks import parse_week_start, resolve_week

_logger = logging.getLogger(__name__)


class ReportRepository(Protocol):
    """Persistence interface for materialized weekly reports."""

    def upsert_report(self, report: WeeklyReport, last_updated: datetime) -> None:
        """Insert or fully replace the report keyed by canteen and week start."""

    def get_report(self, canteen_id: str, week_start: str) -> StoredWeeklyReport | None:
        """Return the materialized report for a canteen week if present."""


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


def _require_canteen_id(canteen_id: str | None) -> str:
    if canteen_id is None or not canteen_id.strip():
        raise InvalidArgumentError("canteenId required")
    return canteen_id


@dataclass
class ReportAggregator:
    """Computes weekly reports from stored ratings."""

    repository: RatingRepository

    def aggregate(self, canteen_id: str, window: WeekWindow) -> WeeklyReport:
        """Build the weekly report for a canteen and week window."""
        canteen_id = _require_canteen_id(canteen_id)
        ratings = [
            rating
            for rating in self.repository.list_ratings(
                canteen_id, window.start, window.end
            )
            if rating.canteen_id == canteen_id
            and window.contains(_as_utc(rating.created_at))
        ]
        meals = rank_meals(group_by_meal(group_by_meal_day(ratings)))
        total_ratings = sum(meal.count for meal in meals)
        report = WeeklyReport(
            canteen_id=canteen_id,
            week_start=window.week_start,
            week_end=window.week_end_display,
            total_ratings=total_ratings,
            avg_rating=_weighted_average(meals, total_ratings),
            top_meals=[
                TopMeal(
                    meal_id=meal.meal_id, avg_rating=meal.avg_rating, count=meal.count
                )
                for meal in meals
            ],
            daily=merge_daily(meals),
        )
        _logger.info(
            "Weekly report computed: canteen=%s week=%s ratings=%s meals=%s",
            canteen_id,
            report.week_start,
            total_ratings,
            len(meals),
        )
        return report


@dataclass
class ReportMaterializer:
    """Persists computed reports with a fresh update stamp."""

    repository: ReportRepository
    clock: Callable[[], datetime] = field(default=_utcnow)

    def materialize(self, report: WeeklyReport) -> datetime:
        """Upsert the report and return the stamped update time."""
        last_updated = self.clock()
        self.repository.upsert_report(report, last_updated)
        _logger.info(
            "Weekly report saved: canteen=%s week=%s",
            report.canteen_id,
            report.week_start,
        )
        return last_updated


@dataclass
class WeeklyReportService:
    """Entry point for live and materialized weekly reports."""

    aggregator: ReportAggregator
    materializer: ReportMaterializer
    clock: Callable[[], datetime] = field(default=_utcnow)

    def compute_weekly_report(
        self, canteen_id: str, week_start: str | None = None
    ) -> WeeklyReport:
        """Compute a report for the given week, or the current one."""
        canteen_id = _require_canteen_id(canteen_id)
        window = resolve_week(reference=self.clock(), week_start=week_start)
        return self.aggregator.aggregate(canteen_id, window)

    def recompute_and_persist(
        self, canteen_id: str, week_start: str | None = None
    ) -> WeeklyReport:
        """Compute a report and materialize it."""
        report = self.compute_weekly_report(canteen_id, week_start)
        self.materializer.materialize(report)
        return report

    def get_materialized_report(
        self, canteen_id: str, week_start: str
    ) -> StoredWeeklyReport | None:
        """Return a previously materialized report."""
        canteen_id = _require_canteen_id(canteen_id)
        parse_week_start(week_start)
        return self.materializer.repository.get_report(canteen_id, week_start)


def group_by_meal_day(ratings: Iterable[Rating]) -> list[MealDayGroup]:
    """Group ratings by meal and UTC day, in order of first appearance."""
    buckets: dict[tuple[str, str], list[Rating]] = {}
    for rating in ratings:
        key = (rating.meal_id, _as_utc(rating.created_at).date().isoformat())
        buckets.setdefault(key, []).append(rating)

    groups = []
    for (meal_id, day), bucket in buckets.items():
        sum_rating = sum(rating.rating for rating in bucket)
        tastes = [rating.taste for rating in bucket if rating.taste is not None]
        groups.append(
            MealDayGroup(
                meal_id=meal_id,
                day=day,
                count=len(bucket),
                avg_rating=sum_rating / len(bucket),
                sum_rating=sum_rating,
                avg_taste=sum(tastes) / len(tastes) if tastes else None,
            )
        )
    return groups


def group_by_meal(groups: Iterable[MealDayGroup]) -> list[MealAggregate]:
    """Combine per-day groups into per-meal aggregates.

    The meal average is the mean of its daily averages, not of its raw
    ratings, so a day with one rating weighs as much as a busy day.
    """
    by_meal: dict[str, list[MealDayGroup]] = {}
    for group in groups:
        by_meal.setdefault(group.meal_id, []).append(group)

    return [
        MealAggregate(
            meal_id=meal_id,
            avg_rating=sum(day.avg_rating for day in daily) / len(daily),
            count=sum(day.count for day in daily),
            daily=daily,
        )
        for meal_id, daily in by_meal.items()
    ]


def rank_meals(meals: Iterable[MealAggregate]) -> list[MealAggregate]:
    """Order meals by average rating, then by rating count, both descending."""
    return sorted(meals, key=lambda meal: (-meal.avg_rating, -meal.count))


def merge_daily(meals: Iterable[MealAggregate]) -> list[DailyRollup]:
    """Merge every meal's daily groups into one rollup per date."""
    totals: dict[str, list[int]] = {}
    for meal in meals:
        for day in meal.daily:
            count_and_sum = totals.setdefault(day.day, [0, 0])
            count_and_sum[0] += day.count
            count_and_sum[1] += day.sum_rating

    rollups = []
    for day in sorted(totals):
        count, sum_rating = totals[day]
        if count == 0:
            raise ComputationError(f"No ratings counted for {day}")
        rollups.append(
            DailyRollup(date=day, count=count, avg_rating=sum_rating / count)
        )
    return rollups


def _weighted_average(meals: list[MealAggregate], total_ratings: int) -> float:
    if total_ratings == 0:
        return 0.0
    return sum(meal.avg_rating * meal.count for meal in meals) / total_ratings


def _as_utc(instant: datetime) -> datetime:
    if instant.tzinfo is None:
        return instant.replace(tzinfo=UTC)
    return instant.astimezone(UTC)
