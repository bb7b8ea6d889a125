"""Translation of Supabase client failures into application errors."""

from collections.abc import Iterator
from contextlib import contextmanager

import httpx
from postgrest.exceptions import APIError

from canteen_feedback.domain.errors import CanteenFeedbackError, StoreUnavailableError

UNIQUE_VIOLATION = "23505"


@contextmanager
def store_errors(
    action: str, conflict: type[CanteenFeedbackError] | None = None
) -> Iterator[None]:
    """Re-raise client failures as StoreUnavailableError.

    When ``conflict`` is given, unique constraint violations are raised as that
    error type instead.
    """
    try:
        yield
    except APIError as exc:
        if conflict is not None and exc.code == UNIQUE_VIOLATION:
            raise conflict(f"{action}: {exc.message}") from exc
        raise StoreUnavailableError(f"{action} failed: {exc.message}") from exc
    except httpx.HTTPError as exc:
        raise StoreUnavailableError(f"{action} failed: {exc}") from exc
