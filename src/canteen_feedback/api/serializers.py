"""JSON shaping for API responses."""

from canteen_feedback.domain.meals import Meal
from canteen_feedback.domain.ratings import Rating
from canteen_feedback.domain.reports import StoredWeeklyReport, WeeklyReport


def serialize_report(report: WeeklyReport) -> dict[str, object]:
    """Return the camelCase JSON form of a weekly report."""
    return {
        "canteenId": report.canteen_id,
        "weekStart": report.week_start,
        "weekEnd": report.week_end,
        "totalRatings": report.total_ratings,
        "avgRating": report.avg_rating,
        "topMeals": [
            {"mealId": meal.meal_id, "avgRating": meal.avg_rating, "count": meal.count}
            for meal in report.top_meals
        ],
        "daily": [
            {"date": day.date, "count": day.count, "avgRating": day.avg_rating}
            for day in report.daily
        ],
    }


def serialize_stored_report(stored: StoredWeeklyReport) -> dict[str, object]:
    """Return a weekly report with its lastUpdated stamp."""
    payload = serialize_report(stored.report)
    payload["lastUpdated"] = stored.last_updated.isoformat()
    return payload


def serialize_rating(rating: Rating) -> dict[str, object]:
    """Return the camelCase JSON form of a stored rating."""
    return {
        "id": rating.id,
        "mealId": rating.meal_id,
        "canteenId": rating.canteen_id,
        "userId": rating.user_id,
        "userHash": rating.user_hash,
        "anonymous": rating.anonymous,
        "rating": rating.rating,
        "taste": rating.taste,
        "quantity": rating.quantity,
        "valueForMoney": rating.value_for_money,
        "comment": rating.comment,
        "createdAt": rating.created_at.isoformat(),
    }


def serialize_meal(meal: Meal) -> dict[str, object]:
    """Return the camelCase JSON form of a meal."""
    return {
        "id": meal.id,
        "canteenId": meal.canteen_id,
        "date": meal.served_on.isoformat(),
        "slot": meal.slot,
        "menu": meal.menu,
        "createdAt": meal.created_at.isoformat() if meal.created_at else None,
    }
