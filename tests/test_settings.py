"""
Tests for site settings (key-value upsert).
"""

from datetime import datetime

from sqlalchemy import func, select

from rest_api.models import AuditLog, Setting


class TestSettingEndpoints:
    """Test settings read and upsert."""

    def test_list_is_public_and_sorted(self, client, db_session):
        db_session.add_all([
            Setting(key="social", value={"instagram": ""}),
            Setting(key="contact", value={"phone": "(555) 123-GAME"}),
        ])
        db_session.commit()

        response = client.get("/api/settings")
        assert response.status_code == 200
        assert [s["key"] for s in response.json()] == ["contact", "social"]

    def test_get_by_key(self, client, db_session):
        db_session.add(Setting(key="heroImage", value="/uploads/hero.jpg"))
        db_session.commit()

        response = client.get("/api/settings/heroImage")
        assert response.status_code == 200
        assert response.json()["value"] == "/uploads/hero.jpg"

    def test_get_unknown_key(self, client):
        assert client.get("/api/settings/missing").status_code == 404

    def test_upsert_requires_staff(self, user_client):
        response = user_client.post("/api/settings", json={"key": "hours", "value": {}})
        assert response.status_code == 403

    def test_upsert_inserts_then_overwrites(self, staff_client, db_session):
        first = staff_client.post(
            "/api/settings",
            json={"key": "hours", "value": {"monday": "11AM - 12AM"}},
        )
        assert first.status_code == 200
        assert first.json()["value"] == {"monday": "11AM - 12AM"}

        second = staff_client.post(
            "/api/settings",
            json={"key": "hours", "value": {"monday": "Closed"}},
        )
        assert second.status_code == 200
        assert second.json()["id"] == first.json()["id"]
        assert second.json()["value"] == {"monday": "Closed"}

        assert db_session.scalar(select(func.count()).select_from(Setting)) == 1

    def test_repeated_upsert_is_idempotent(self, staff_client, db_session):
        body = {"key": "hero", "value": {"title": "Game On"}}
        first = staff_client.post("/api/settings", json=body).json()
        second = staff_client.post("/api/settings", json=body).json()

        assert db_session.scalar(select(func.count()).select_from(Setting)) == 1
        assert second["value"] == first["value"]
        assert datetime.fromisoformat(second["updatedAt"]) >= datetime.fromisoformat(first["updatedAt"])

    def test_upsert_accepts_scalar_values(self, staff_client):
        for value in ("/uploads/hero.jpg", 42, True, ["a", "b"]):
            response = staff_client.post("/api/settings", json={"key": "misc", "value": value})
            assert response.status_code == 200
            assert response.json()["value"] == value

    def test_upsert_requires_key_and_value(self, staff_client):
        assert staff_client.post("/api/settings", json={"value": 1}).status_code == 400
        assert staff_client.post("/api/settings", json={"key": "hours"}).status_code == 400
        assert staff_client.post("/api/settings", json={"key": " ", "value": 1}).status_code == 400

    def test_upsert_is_audited(self, staff_client, db_session, seed_staff_user):
        staff_client.post("/api/settings", json={"key": "contact", "value": {"phone": "1"}})
        staff_client.post("/api/settings", json={"key": "contact", "value": {"phone": "2"}})

        entries = db_session.scalars(
            select(AuditLog).where(AuditLog.target_type == "setting").order_by(AuditLog.created_at)
        ).all()
        assert [e.action for e in entries] == ["UPSERT", "UPSERT"]
        assert all(e.target_id == "contact" for e in entries)
        assert all(e.actor_user_id == seed_staff_user.id for e in entries)
        assert any(e.meta.get("changes") for e in entries)
