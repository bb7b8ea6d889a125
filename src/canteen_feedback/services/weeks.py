"""Week window resolution anchored to Monday in UTC."""

from datetime import UTC, date, datetime, time, timedelta

from canteen_feedback.domain.errors import InvalidArgumentError
from canteen_feedback.domain.reports import WeekWindow

WEEK_LENGTH = timedelta(days=7)


def resolve_week(
    reference: datetime | None = None, week_start: str | None = None
) -> WeekWindow:
    """Return the week window for an explicit start date or a reference instant.

    An explicit ``week_start`` must be a YYYY-MM-DD string naming a Monday.
    Otherwise the window containing ``reference`` (default: now) is returned.
    Naive reference datetimes are treated as UTC.
    """
    if week_start is not None:
        start_day = parse_week_start(week_start)
    else:
        instant = reference or datetime.now(tz=UTC)
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=UTC)
        instant_day = instant.astimezone(UTC).date()
        start_day = instant_day - timedelta(days=instant_day.weekday())
    start = datetime.combine(start_day, time.min, tzinfo=UTC)
    return WeekWindow(start=start, end=start + WEEK_LENGTH)


def parse_week_start(value: str) -> date:
    """Parse a YYYY-MM-DD string and require it to be a Monday."""
    try:
        parsed = date.fromisoformat(value)
    except (TypeError, ValueError) as exc:
        raise InvalidArgumentError(f"Invalid weekStart date: {value!r}") from exc
    if parsed.isoformat() != value:
        raise InvalidArgumentError(f"weekStart must be YYYY-MM-DD: {value!r}")
    if parsed.weekday() != 0:
        raise InvalidArgumentError(f"weekStart must be a Monday: {value}")
    return parsed
