"""
Tests for admin-only user management.
"""

from sqlalchemy import func, select

from rest_api.models import AuditLog, HttpSession, User
from rest_api.services.domain import UserService
from shared.config.constants import Roles
from tests.conftest import _make_user, login


class TestUserAccessControl:
    """Only admins reach /api/users."""

    def test_anonymous_gets_401(self, client):
        response = client.get("/api/users")
        assert response.status_code == 401
        assert response.json() == {"message": "Not authenticated"}

    def test_staff_gets_403(self, staff_client):
        response = staff_client.get("/api/users")
        assert response.status_code == 403
        assert response.json() == {"message": "Admin access required"}

    def test_user_role_gets_403(self, user_client):
        response = user_client.post(
            "/api/users",
            json={"username": "sneaky", "password": "secret123"},
        )
        assert response.status_code == 403
        assert response.json() == {"message": "Admin access required"}


class TestUserEndpoints:
    """Test user CRUD as an admin."""

    def test_list_users_hides_password(self, admin_client, seed_admin_user, seed_staff_user):
        response = admin_client.get("/api/users")
        assert response.status_code == 200
        users = response.json()
        assert {u["username"] for u in users} == {"admin", "staff"}
        assert all("password" not in u for u in users)
        assert all("createdAt" in u for u in users)

    def test_create_user_hashes_password(self, admin_client, client, db_session):
        response = admin_client.post(
            "/api/users",
            json={
                "username": "bartender",
                "password": "pourone4me",
                "email": "bar@test.com",
                "firstName": "Sam",
                "role": "staff",
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert data["username"] == "bartender"
        assert data["role"] == "staff"
        assert data["firstName"] == "Sam"
        assert "password" not in data

        stored = db_session.scalar(select(User).where(User.username == "bartender"))
        assert stored.password != "pourone4me"
        assert stored.password.startswith("$2")

        # The new account can log in
        login(client, "bartender", "pourone4me")

    def test_create_user_defaults_to_user_role(self, admin_client):
        response = admin_client.post(
            "/api/users",
            json={"username": "guest", "password": "guest123"},
        )
        assert response.status_code == 200
        assert response.json()["role"] == "user"
        assert response.json()["isActive"] is True

    def test_duplicate_username_rejected(self, admin_client, seed_staff_user):
        response = admin_client.post(
            "/api/users",
            json={"username": "staff", "password": "another1"},
        )
        assert response.status_code == 400
        assert response.json() == {"message": "User 'staff' already exists"}

    def test_duplicate_email_rejected(self, admin_client, seed_staff_user):
        response = admin_client.post(
            "/api/users",
            json={"username": "someone", "password": "another1", "email": "staff@test.com"},
        )
        assert response.status_code == 400
        assert "already exists" in response.json()["message"]

    def test_short_password_rejected(self, admin_client):
        response = admin_client.post(
            "/api/users",
            json={"username": "shorty", "password": "123"},
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid request data"

    def test_invalid_role_rejected(self, admin_client):
        response = admin_client.post(
            "/api/users",
            json={"username": "boss", "password": "secret123", "role": "owner"},
        )
        assert response.status_code == 400

    def test_delete_user(self, admin_client, db_session, seed_staff_user):
        staff_id = seed_staff_user.id
        response = admin_client.delete(f"/api/users/{staff_id}")
        assert response.status_code == 200
        assert response.json() == {"success": True}

        db_session.expire_all()
        assert db_session.get(User, staff_id) is None

    def test_cannot_delete_self(self, admin_client, seed_admin_user):
        response = admin_client.delete(f"/api/users/{seed_admin_user.id}")
        assert response.status_code == 400
        assert response.json() == {"message": "Cannot delete your own account"}

    def test_delete_unknown_user(self, admin_client):
        response = admin_client.delete("/api/users/does-not-exist")
        assert response.status_code == 404

    def test_create_is_audited_without_password(self, admin_client, db_session, seed_admin_user):
        admin_client.post(
            "/api/users",
            json={"username": "audited", "password": "secret123"},
        )
        entry = db_session.scalar(
            select(AuditLog).where(AuditLog.target_type == "user", AuditLog.action == "CREATE")
        )
        assert entry is not None
        assert entry.actor_user_id == seed_admin_user.id
        assert "password" not in entry.meta["new"]


class TestLiveSessionsFollowAccount:
    """A session carries no authority once its account changes."""

    def test_deleted_admin_session_gets_401(self, client, db_session):
        bob = _make_user(db_session, "bob", Roles.ADMIN)
        login(client, "bob")
        assert client.get("/api/users").status_code == 200

        UserService(db_session).delete(bob.id)

        assert client.get("/api/users").status_code == 401
        response = client.post(
            "/api/users",
            json={"username": "eve", "password": "secret123", "role": "admin"},
        )
        assert response.status_code == 401
        assert db_session.scalar(select(User).where(User.username == "eve")) is None
        # The orphaned session is dropped on first use
        assert db_session.scalar(select(func.count()).select_from(HttpSession)) == 0

    def test_deactivated_user_session_gets_401(self, staff_client, db_session, seed_staff_user):
        assert staff_client.get("/api/auth/me").status_code == 200

        seed_staff_user.is_active = False
        db_session.commit()

        assert staff_client.get("/api/auth/me").status_code == 401

    def test_demoted_admin_loses_admin_routes(self, admin_client, db_session, seed_admin_user):
        seed_admin_user.role = Roles.STAFF
        db_session.commit()

        response = admin_client.get("/api/users")
        assert response.status_code == 403
        assert admin_client.get("/api/auth/me").json()["userRole"] == "staff"
