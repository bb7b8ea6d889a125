"""Supabase repository for materialized weekly reports."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from canteen_feedback.adapters.supabase_errors import store_errors
from canteen_feedback.domain.reports import (
    DailyRollup,
    StoredWeeklyReport,
    TopMeal,
    WeeklyReport,
)
from canteen_feedback.services.reports import ReportRepository

REPORT_KEY = "canteen_id,week_start"


@dataclass
class SupabaseReportRepository(ReportRepository):
    """Supabase implementation for weekly reports."""

    client: Client
    table: str = "weekly_reports"

    def upsert_report(self, report: WeeklyReport, last_updated: datetime) -> None:
        """Insert or replace the report row for its canteen week."""
        payload = serialize_report(report)
        payload["last_updated"] = last_updated.isoformat()
        with store_errors("Upsert weekly report"):
            self.client.table(self.table).upsert(
                payload, on_conflict=REPORT_KEY
            ).execute()

    def get_report(self, canteen_id: str, week_start: str) -> StoredWeeklyReport | None:
        """Return the stored report for a canteen week."""
        with store_errors("Get weekly report"):
            response = (
                self.client.table(self.table)
                .select("*")
                .eq("canteen_id", canteen_id)
                .eq("week_start", week_start)
                .limit(1)
                .execute()
            )
        if not response.data:
            return None
        return _parse_row(response.data[0])


def serialize_report(report: WeeklyReport) -> dict[str, object]:
    """Return the row payload for a weekly report."""
    return {
        "canteen_id": report.canteen_id,
        "week_start": report.week_start,
        "week_end": report.week_end,
        "total_ratings": report.total_ratings,
        "avg_rating": report.avg_rating,
        "top_meals": [
            {
                "meal_id": meal.meal_id,
                "avg_rating": meal.avg_rating,
                "count": meal.count,
            }
            for meal in report.top_meals
        ],
        "daily": [
            {"date": day.date, "count": day.count, "avg_rating": day.avg_rating}
            for day in report.daily
        ],
    }


def _parse_row(row: dict[str, object]) -> StoredWeeklyReport:
    top_meals = row.get("top_meals") or []
    daily = row.get("daily") or []
    report = WeeklyReport(
        canteen_id=str(row["canteen_id"]),
        week_start=str(row["week_start"]),
        week_end=str(row["week_end"]),
        total_ratings=int(row.get("total_ratings", 0)),
        avg_rating=float(row.get("avg_rating", 0.0)),
        top_meals=[
            TopMeal(
                meal_id=str(meal["meal_id"]),
                avg_rating=float(meal["avg_rating"]),
                count=int(meal["count"]),
            )
            for meal in top_meals
        ],
        daily=[
            DailyRollup(
                date=str(day["date"]),
                count=int(day["count"]),
                avg_rating=float(day["avg_rating"]),
            )
            for day in daily
        ],
    )
    last_updated = datetime.fromisoformat(str(row["last_updated"]))
    if last_updated.tzinfo is None:
        last_updated = last_updated.replace(tzinfo=UTC)
    return StoredWeeklyReport(report=report, last_updated=last_updated)
