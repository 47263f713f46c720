"""Tests for the HTTP API."""

import pytest
from fastapi.testclient import TestClient

from terrain_progress import __version__
from terrain_progress.settings import Settings
from terrain_progress.web import create_app


@pytest.fixture
def client(seeded_db, fixed_clock, tmp_path):
    settings = Settings(_env_file=None, data_dir=tmp_path)
    app = create_app(db_path=seeded_db, clock=fixed_clock, settings=settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def enrolled(client):
    response = client.post(
        "/enrollment", json={"program_id": "three-day-reset", "start_date": "2024-01-03"}
    )
    assert response.status_code == 201
    return response.json()


class TestPrograms:
    """Tests for program catalog routes."""

    def test_health(self, client):
        response = client.get("/health")
        assert response.json() == {"status": "healthy", "version": __version__}

    def test_list(self, client):
        response = client.get("/programs")
        ids = [p["id"] for p in response.json()["programs"]]
        assert ids == ["three-day-reset", "ten-day-warmth"]

    def test_list_by_terrain(self, client):
        response = client.get("/programs", params={"terrain": "warm_excess_overclocked"})
        ids = [p["id"] for p in response.json()["programs"]]
        assert ids == ["three-day-reset"]

    def test_get(self, client):
        response = client.get("/programs/ten-day-warmth")
        assert response.status_code == 200
        assert response.json()["duration_days"] == 10

    def test_get_missing(self, client):
        response = client.get("/programs/nope")
        assert response.status_code == 404
        assert response.json()["code"] == "ProgramNotFoundError"


class TestEnrollment:
    """Tests for enrollment routes."""

    def test_enroll(self, enrolled):
        assert enrolled["program"]["id"] == "three-day-reset"
        assert enrolled["enrollment"]["current_day"] == 2
        assert enrolled["state"] == "in_progress"
        assert enrolled["progress"] == 0.0

    def test_enroll_unknown_program(self, client):
        response = client.post("/enrollment", json={"program_id": "nope"})
        assert response.status_code == 404

    def test_no_active_enrollment(self, client):
        response = client.get("/enrollment")
        assert response.status_code == 404
        assert response.json()["error"] == "No active program enrollment"

    def test_get_enrollment(self, client, enrolled):
        response = client.get("/enrollment")
        assert response.json()["enrollment"]["id"] == enrolled["enrollment"]["id"]

    def test_complete_item_on_current_day(self, client, enrolled):
        response = client.post("/enrollment/items", json={"item_id": "routine_b"})
        data = response.json()

        assert data["added"] is True
        assert data["day"]["day"] == 2
        assert data["day"]["items"] == [{"id": "routine_b", "completed": True}]

    def test_complete_item_out_of_range(self, client, enrolled):
        response = client.post("/enrollment/items", json={"item_id": "routine_a", "day": 9})
        assert response.status_code == 422
        assert response.json()["code"] == "OutOfRangeDayError"

    def test_uncomplete_item(self, client, enrolled):
        client.post("/enrollment/items", json={"item_id": "routine_a", "day": 1})

        response = client.delete("/enrollment/items/routine_a", params={"day": 1})
        assert response.json() == {"removed": True}

        plan = client.get("/enrollment/days/1").json()
        assert all(not item["completed"] for item in plan["items"])

    def test_complete_program(self, client, enrolled):
        first = client.post("/enrollment/days/1/complete").json()
        assert first["milestone"] == "day_completed"

        last = client.post("/enrollment/days/3/complete").json()
        assert last["milestone"] == "program_completed"
        assert last["state"] == "completed"
        assert last["completed_days"] == [1, 3]
        assert last["enrollment"]["is_active"] is False

        assert client.get("/enrollment").status_code == 404

    def test_complete_final_day_twice(self, client, enrolled):
        client.post("/enrollment/days/3/complete")

        response = client.post("/enrollment/days/3/complete")

        assert response.status_code == 200
        data = response.json()
        assert data["milestone"] == "none"
        assert data["state"] == "completed"
        assert data["completed_days"] == [3]

    def test_day_out_of_range(self, client, enrolled):
        assert client.get("/enrollment/days/4").status_code == 422
        assert client.post("/enrollment/days/0/complete").status_code == 422

    def test_unenroll_and_history(self, client, enrolled):
        response = client.delete("/enrollment")
        assert response.json()["status"] == "left"
        assert client.delete("/enrollment").status_code == 404

        history = client.get("/enrollment/history").json()["enrollments"]
        assert len(history) == 1
        assert history[0]["state"] == "abandoned"
        assert history[0]["program_title"] == "3-Day Reset"


class TestActivity:
    """Tests for activity routes."""

    def test_log_and_streaks(self, client):
        client.post("/activity/logs", json={"item_id": "warm-start-morning", "day": "2024-01-02"})
        client.post("/activity/logs", json={"item_id": "warm-start-morning", "day": "2024-01-03"})
        response = client.post(
            "/activity/logs", json={"item_id": "box-breathing", "kind": "movement"}
        )

        assert response.status_code == 201
        assert response.json()["date"] == "2024-01-04"

        streaks = client.get("/activity/streaks").json()
        assert streaks["current_streak"] == 3
        assert streaks["total_completions"] == 3
        assert streaks["monthly"] == {"2024-01": 3}

    def test_list_logs(self, client):
        client.post("/activity/logs", json={"item_id": "a", "day": "2024-01-01", "level": "lite"})
        client.post("/activity/logs", json={"item_id": "a", "day": "2024-01-03"})

        logs = client.get("/activity/logs").json()["logs"]
        assert [log["date"] for log in logs] == ["2024-01-03", "2024-01-01"]
        assert logs[1]["routine_level"] == "lite"

    def test_invalid_level(self, client):
        response = client.post("/activity/logs", json={"item_id": "a", "level": "extreme"})
        assert response.status_code == 422

    def test_calendar(self, client):
        client.post("/activity/logs", json={"item_id": "a", "day": "2024-05-02"})

        data = client.get("/activity/calendar/2024/5").json()

        assert data["leading_blanks"] == 3
        assert data["completed_count"] == 1
        assert data["days"][1]["mark"] == "completed"

    def test_calendar_marks_today(self, client):
        data = client.get("/activity/calendar/2024/1").json()
        assert data["days"][3]["mark"] == "today"

    def test_calendar_invalid_month(self, client):
        assert client.get("/activity/calendar/2024/13").status_code == 422
