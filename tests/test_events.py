"""
Tests for event endpoints.
"""

from datetime import datetime

import pytest

from rest_api.models import Event


@pytest.fixture
def seed_events(db_session):
    events = [
        Event(title="Fantasy Draft Night", date_time=datetime(2025, 9, 15, 19, 0), sport_type="Custom"),
        Event(
            title="NFL Sunday Night Football",
            date_time=datetime(2025, 9, 14, 20, 0),
            sport_type="NFL",
            is_featured=True,
        ),
        Event(title="World Series Game 1", date_time=datetime(2025, 10, 24, 20, 0), sport_type="MLB"),
    ]
    db_session.add_all(events)
    db_session.commit()
    return events


class TestEventEndpoints:
    """Test event CRUD and filtering."""

    def test_list_in_chronological_order(self, client, seed_events):
        response = client.get("/api/events")
        assert response.status_code == 200
        assert [e["title"] for e in response.json()] == [
            "NFL Sunday Night Football",
            "Fantasy Draft Night",
            "World Series Game 1",
        ]

    def test_featured_filter(self, client, seed_events):
        response = client.get("/api/events", params={"featured": "1"})
        assert response.status_code == 200
        assert [e["title"] for e in response.json()] == ["NFL Sunday Night Football"]

    def test_featured_zero_returns_all(self, client, seed_events):
        response = client.get("/api/events", params={"featured": "0"})
        assert len(response.json()) == 3

    def test_get_event(self, client, seed_events):
        event = seed_events[1]
        response = client.get(f"/api/events/{event.id}")
        assert response.status_code == 200
        data = response.json()
        assert data["sportType"] == "NFL"
        assert data["isFeatured"] is True
        assert data["dateTime"].startswith("2025-09-14T20:00")

    def test_get_unknown_event(self, client):
        assert client.get("/api/events/missing").status_code == 404

    def test_create_coerces_date_string(self, staff_client):
        response = staff_client.post(
            "/api/events",
            json={
                "title": "Monday Night Football",
                "dateTime": "2025-09-15T20:15",
                "sportType": "NFL",
                "imageUrl": "/uploads/1694710000000-42.jpg",
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert data["dateTime"].startswith("2025-09-15T20:15")
        assert data["isFeatured"] is False
        assert data["imageUrl"] == "/uploads/1694710000000-42.jpg"

    def test_create_accepts_utc_suffix(self, staff_client):
        response = staff_client.post(
            "/api/events",
            json={"title": "Opening Day", "dateTime": "2026-03-26T17:05:00Z", "sportType": "MLB"},
        )
        assert response.status_code == 200

    @pytest.mark.parametrize(
        "body",
        [
            {"title": "Bad Sport", "dateTime": "2025-09-15T20:15", "sportType": "NBA"},
            {"title": "Bad Date", "dateTime": "next tuesday", "sportType": "NFL"},
            {"dateTime": "2025-09-15T20:15", "sportType": "NFL"},
        ],
    )
    def test_create_rejects_invalid_payload(self, staff_client, body):
        response = staff_client.post("/api/events", json=body)
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid request data"

    def test_create_requires_staff(self, client):
        response = client.post(
            "/api/events",
            json={"title": "Watch Party", "dateTime": "2025-09-15T20:15", "sportType": "Custom"},
        )
        assert response.status_code == 401

    def test_update_event(self, staff_client, seed_events):
        event = seed_events[0]
        response = staff_client.patch(
            f"/api/events/{event.id}",
            json={"isFeatured": True, "dateTime": "2025-09-16T19:30"},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["isFeatured"] is True
        assert data["dateTime"].startswith("2025-09-16T19:30")
        assert data["title"] == "Fantasy Draft Night"

    def test_update_rejects_null_title(self, staff_client, seed_events):
        response = staff_client.patch(f"/api/events/{seed_events[0].id}", json={"title": None})
        assert response.status_code == 400

    def test_delete_event(self, staff_client, seed_events):
        event_id = seed_events[2].id
        response = staff_client.delete(f"/api/events/{event_id}")
        assert response.status_code == 200
        assert response.json() == {"success": True}
        assert staff_client.get(f"/api/events/{event_id}").status_code == 404

    def test_delete_unknown_event(self, staff_client):
        assert staff_client.delete("/api/events/missing").status_code == 404
