"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from canteen_feedback.adapters.supabase_meal_repository import SupabaseMealRepository
from canteen_feedback.adapters.supabase_rating_repository import (
    SupabaseRatingRepository,
)
from canteen_feedback.adapters.supabase_report_repository import (
    SupabaseReportRepository,
)
from canteen_feedback.config import Settings
from canteen_feedback.services.meals import MealService
from canteen_feedback.services.ratings import RatingService
from canteen_feedback.services.reports import (
    ReportAggregator,
    ReportMaterializer,
    WeeklyReportService,
)


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    meal_service: MealService
    rating_service: RatingService
    report_service: WeeklyReportService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    rating_repository = SupabaseRatingRepository(
        supabase_client, table=resolved_settings.ratings_table
    )
    report_repository = SupabaseReportRepository(
        supabase_client, table=resolved_settings.reports_table
    )
    meal_repository = SupabaseMealRepository(
        supabase_client, table=resolved_settings.meals_table
    )
    report_service = WeeklyReportService(
        aggregator=ReportAggregator(rating_repository),
        materializer=ReportMaterializer(report_repository),
    )

    async def close_resources() -> None:
        supabase_client.postgrest.session.close()

    return AppContainer(
        settings=resolved_settings,
        meal_service=MealService(meal_repository),
        rating_service=RatingService(rating_repository),
        report_service=report_service,
        close_resources=close_resources,
    )
