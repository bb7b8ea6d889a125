"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import FastAPI, Query, Request, status
from fastapi.responses import JSONResponse

from canteen_feedback.api.admin import router as admin_router
from canteen_feedback.api.models import MealPayload, MealUpdatePayload, RatingPayload
from canteen_feedback.api.serializers import (
    serialize_meal,
    serialize_rating,
    serialize_report,
)
from canteen_feedback.app_logging import configure_logging
from canteen_feedback.containers import AppContainer
from canteen_feedback.domain.errors import (
    DuplicateMealError,
    DuplicateRatingError,
    InvalidArgumentError,
    MealNotFoundError,
    StoreUnavailableError,
)
from canteen_feedback.domain.ratings import RatingSubmission


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(admin_router)

    @app.exception_handler(InvalidArgumentError)
    async def invalid_argument(_: Request, exc: InvalidArgumentError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST, content={"error": str(exc)}
        )

    @app.exception_handler(DuplicateRatingError)
    @app.exception_handler(DuplicateMealError)
    async def conflict(_: Request, exc: Exception) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT, content={"error": str(exc)}
        )

    @app.exception_handler(MealNotFoundError)
    async def not_found(_: Request, exc: MealNotFoundError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND, content={"error": str(exc)}
        )

    @app.exception_handler(StoreUnavailableError)
    async def store_unavailable(
        request: Request, exc: StoreUnavailableError
    ) -> JSONResponse:
        logger.error("Store unavailable on %s: %s", request.url.path, exc)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"error": "Store unavailable"},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/ping")
    async def ping() -> dict[str, str]:
        """Connectivity check returning the server time."""
        return {"message": "pong", "timestamp": datetime.now(tz=UTC).isoformat()}

    @app.get("/api/meals")
    def list_meals(
        request: Request,
        canteen_id: str | None = Query(default=None, alias="canteenId"),
    ) -> list[dict[str, object]]:
        """Return meals, optionally for one canteen."""
        state_container: AppContainer = request.app.state.container
        meals = state_container.meal_service.list_meals(canteen_id)
        return [serialize_meal(meal) for meal in meals]

    @app.post("/api/meals")
    def create_meal(payload: MealPayload, request: Request) -> dict[str, object]:
        """Create a meal for a canteen date and slot."""
        state_container: AppContainer = request.app.state.container
        meal = state_container.meal_service.create_meal(
            canteen_id=payload.canteen_id,
            served_on=payload.served_on,
            slot=payload.slot,
            menu=payload.menu,
        )
        return {"insertedId": meal.id}

    @app.put("/api/meals/{meal_id}")
    def update_meal(
        meal_id: str, payload: MealUpdatePayload, request: Request
    ) -> dict[str, object]:
        """Update the slot or menu of a meal."""
        state_container: AppContainer = request.app.state.container
        meal = state_container.meal_service.update_meal(
            meal_id, slot=payload.slot, menu=payload.menu
        )
        return serialize_meal(meal)

    @app.delete("/api/meals/{meal_id}")
    def delete_meal(meal_id: str, request: Request) -> dict[str, bool]:
        state_container: AppContainer = request.app.state.container
        state_container.meal_service.delete_meal(meal_id)
        return {"ok": True}

    @app.post("/api/ratings")
    def submit_rating(payload: RatingPayload, request: Request) -> dict[str, object]:
        """Store a rating for a meal."""
        state_container: AppContainer = request.app.state.container
        rating = state_container.rating_service.submit_rating(
            RatingSubmission(
                meal_id=payload.meal_id,
                canteen_id=payload.canteen_id,
                rating=payload.rating,
                user_id=payload.user_id,
                user_hash=payload.user_hash,
                anonymous=payload.anonymous,
                taste=payload.taste,
                quantity=payload.quantity,
                value_for_money=payload.value_for_money,
                comment=payload.comment,
            )
        )
        return {"insertedId": rating.id, "rating": serialize_rating(rating)}

    @app.get("/api/weekly-report")
    def weekly_report(
        request: Request,
        canteen_id: str | None = Query(default=None, alias="canteenId"),
        week_start: str | None = Query(default=None, alias="weekStart"),
    ) -> dict[str, object]:
        """Compute the weekly report for a canteen on demand."""
        state_container: AppContainer = request.app.state.container
        report = state_container.report_service.compute_weekly_report(
            canteen_id or "", week_start or None
        )
        return serialize_report(report)

    return app
