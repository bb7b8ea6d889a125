"""Tests for public API endpoints."""

from datetime import timedelta

from fastapi.testclient import TestClient

from canteen_feedback.api.app import create_app
from tests.conftest import FIXED_NOW, make_rating


def test_health_and_ping(container) -> None:
    client = TestClient(create_app(container))

    assert client.get("/health").json() == {"status": "ok"}
    assert client.get("/ping").json()["message"] == "pong"


def test_weekly_report_requires_canteen(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/api/weekly-report")

    assert response.status_code == 400
    assert response.json() == {"error": "canteenId required"}
    assert container.rating_service.repository.calls == []


def test_weekly_report_rejects_non_monday(container) -> None:
    client = TestClient(create_app(container))

    response = client.get(
        "/api/weekly-report",
        params={"canteenId": "canteen_01", "weekStart": "2025-09-17"},
    )

    assert response.status_code == 400


def test_weekly_report_returns_camel_case_summary(container) -> None:
    repo = container.rating_service.repository
    monday = FIXED_NOW - timedelta(days=2, hours=10, minutes=30)
    repo.ratings.extend(
        [
            make_rating("meal_a", 5, monday + timedelta(hours=12)),
            make_rating("meal_a", 5, monday + timedelta(hours=13)),
            make_rating("meal_b", 1, monday + timedelta(days=1, hours=19)),
        ]
    )
    client = TestClient(create_app(container))

    response = client.get("/api/weekly-report", params={"canteenId": "canteen_01"})

    assert response.status_code == 200
    data = response.json()
    assert data["canteenId"] == "canteen_01"
    assert data["weekStart"] == "2025-09-15"
    assert data["weekEnd"] == "2025-09-21"
    assert data["totalRatings"] == 3
    assert round(data["avgRating"], 3) == 3.667
    assert data["topMeals"][0] == {"mealId": "meal_a", "avgRating": 5.0, "count": 2}
    assert [day["date"] for day in data["daily"]] == ["2025-09-15", "2025-09-16"]


def test_weekly_report_store_failure_is_503(container) -> None:
    container.rating_service.repository.unavailable = True
    client = TestClient(create_app(container))

    response = client.get(
        "/api/weekly-report",
        params={"canteenId": "canteen_01", "weekStart": "2025-09-15"},
    )

    assert response.status_code == 503
    assert response.json() == {"error": "Store unavailable"}


def test_submit_rating(container) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/api/ratings",
        json={
            "mealId": "meal_2025-09-15_canteen_01_lunch",
            "canteenId": "canteen_01",
            "rating": 4,
            "taste": 4,
            "valueForMoney": 3,
            "userHash": "hash_asha",
            "comment": "Good, rice slightly dry",
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["insertedId"] == "rating-1"
    assert data["rating"]["valueForMoney"] == 3
    assert data["rating"]["createdAt"] == FIXED_NOW.isoformat()


def test_submit_rating_validates_range(container) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/api/ratings",
        json={"mealId": "meal_a", "canteenId": "canteen_01", "rating": 6},
    )

    assert response.status_code == 422


def test_submit_duplicate_rating_is_conflict(container) -> None:
    client = TestClient(create_app(container))
    payload = {
        "mealId": "meal_a",
        "canteenId": "canteen_01",
        "rating": 3,
        "userHash": "hash_1",
    }

    assert client.post("/api/ratings", json=payload).status_code == 200
    assert client.post("/api/ratings", json=payload).status_code == 409


def test_create_and_list_meals(container) -> None:
    client = TestClient(create_app(container))

    created = client.post(
        "/api/meals",
        json={
            "canteenId": "canteen_01",
            "date": "2025-09-15",
            "slot": "dinner",
            "menu": ["Dal Tadka", "Roti", "Kheer"],
        },
    )
    listed = client.get("/api/meals", params={"canteenId": "canteen_01"})

    assert created.json() == {"insertedId": "meal_2025-09-15_canteen_01_dinner"}
    assert listed.json()[0]["menu"] == ["Dal Tadka", "Roti", "Kheer"]
    assert client.get("/api/meals", params={"canteenId": "canteen_02"}).json() == []


def test_update_and_delete_meal(container) -> None:
    client = TestClient(create_app(container))
    client.post(
        "/api/meals",
        json={"canteenId": "canteen_01", "date": "2025-09-15", "slot": "lunch"},
    )
    meal_id = "meal_2025-09-15_canteen_01_lunch"

    updated = client.put(f"/api/meals/{meal_id}", json={"menu": ["Pulao", "Raita"]})
    deleted = client.delete(f"/api/meals/{meal_id}")

    assert updated.status_code == 200
    assert updated.json()["id"] == meal_id
    assert updated.json()["slot"] == "lunch"
    assert updated.json()["menu"] == ["Pulao", "Raita"]
    assert deleted.json() == {"ok": True}
    assert client.get("/api/meals").json() == []


def test_update_and_delete_missing_meal_is_404(container) -> None:
    client = TestClient(create_app(container))

    updated = client.put("/api/meals/meal_missing", json={})
    deleted = client.delete("/api/meals/meal_missing")

    assert updated.status_code == 404
    assert updated.json() == {"error": "Meal not found: meal_missing"}
    assert deleted.status_code == 404


def test_update_meal_rejects_blank_slot(container) -> None:
    client = TestClient(create_app(container))
    client.post(
        "/api/meals",
        json={"canteenId": "canteen_01", "date": "2025-09-15", "slot": "lunch"},
    )

    response = client.put(
        "/api/meals/meal_2025-09-15_canteen_01_lunch", json={"slot": " "}
    )

    assert response.status_code == 400
