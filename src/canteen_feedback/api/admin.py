"""Admin API endpoints with simple token auth."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from canteen_feedback.api.models import RecomputePayload
from canteen_feedback.api.serializers import (
    serialize_rating,
    serialize_report,
    serialize_stored_report,
)

if TYPE_CHECKING:
    from canteen_feedback.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])


def _get_admin_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid admin token."""
    if not x_admin_token or x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.get("/ratings", dependencies=[Depends(require_admin)])
def list_ratings(request: Request, limit: int | None = None) -> dict[str, object]:
    """Return the most recent raw ratings."""
    container: AppContainer = request.app.state.container
    resolved_limit = (
        limit if limit is not None else container.settings.recent_ratings_limit
    )
    ratings = container.rating_service.list_recent(resolved_limit)
    return {"ratings": [serialize_rating(rating) for rating in ratings]}


@router.post("/weekly-reports/recompute", dependencies=[Depends(require_admin)])
def recompute_weekly_report(
    payload: RecomputePayload, request: Request
) -> dict[str, object]:
    """Recompute a weekly report and store it."""
    container: AppContainer = request.app.state.container
    report = container.report_service.recompute_and_persist(
        payload.canteen_id, payload.week_start
    )
    return serialize_report(report)


@router.get(
    "/weekly-reports/{canteen_id}/{week_start}",
    dependencies=[Depends(require_admin)],
)
def stored_weekly_report(
    canteen_id: str, week_start: str, request: Request
) -> dict[str, object]:
    """Return a previously materialized weekly report."""
    container: AppContainer = request.app.state.container
    stored = container.report_service.get_materialized_report(canteen_id, week_start)
    if stored is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return serialize_stored_report(stored)
