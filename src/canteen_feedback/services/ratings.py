"""Rating intake service."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol

from canteen_feedback.domain.errors import InvalidArgumentError
from canteen_feedback.domain.ratings import Rating, RatingSubmission

_logger = logging.getLogger(__name__)


class RatingRepository(Protocol):
    """Persistence interface for ratings."""

    def create_rating(self, rating: Rating) -> Rating:
        """Store a rating and return it with its store id."""

    def list_ratings(
        self, canteen_id: str, start: datetime, end: datetime
    ) -> list[Rating]:
        """Return a canteen's ratings with start <= created_at < end."""

    def list_recent_ratings(self, limit: int) -> list[Rating]:
        """Return the most recent ratings, newest first."""


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class RatingService:
    """Service for submitting and browsing ratings."""

    repository: RatingRepository
    clock: Callable[[], datetime] = field(default=_utcnow)

    def submit_rating(self, submission: RatingSubmission) -> Rating:
        """Stamp a submission with server-side fields and store it."""
        if not submission.meal_id.strip():
            raise InvalidArgumentError("mealId required")
        if not submission.canteen_id.strip():
            raise InvalidArgumentError("canteenId required")
        user_hash = submission.user_hash
        if not user_hash and submission.user_id:
            user_hash = f"uid:{submission.user_id}"
        rating = Rating(
            meal_id=submission.meal_id,
            canteen_id=submission.canteen_id,
            rating=submission.rating,
            created_at=self.clock(),
            user_id=submission.user_id,
            user_hash=user_hash,
            anonymous=submission.anonymous,
            taste=submission.taste,
            quantity=submission.quantity,
            value_for_money=submission.value_for_money,
            comment=submission.comment or "",
        )
        stored = self.repository.create_rating(rating)
        _logger.info(
            "Rating stored: canteen=%s meal=%s id=%s",
            stored.canteen_id,
            stored.meal_id,
            stored.id,
        )
        return stored

    def list_recent(self, limit: int = 200) -> list[Rating]:
        """Return the newest ratings across all canteens."""
        if limit < 1:
            raise InvalidArgumentError("limit must be positive")
        return self.repository.list_recent_ratings(limit)
