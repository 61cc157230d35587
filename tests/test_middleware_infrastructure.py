"""
Tests for middleware and infrastructure components.
"""

import pytest
from unittest.mock import MagicMock
from fastapi import FastAPI
from fastapi.testclient import TestClient

from rest_api.core.middlewares import (
    SecurityHeadersMiddleware,
    ContentTypeValidationMiddleware,
)
from shared.config.settings import settings
from shared.infrastructure.correlation import (
    CorrelationIdMiddleware,
    CorrelationIdFilter,
    get_request_id,
    request_id_var,
)
from shared.infrastructure.db import safe_commit


# =============================================================================
# SecurityHeadersMiddleware Tests
# =============================================================================

def _security_app() -> FastAPI:
    app = FastAPI()
    app.add_middleware(SecurityHeadersMiddleware)

    @app.get("/test")
    def test_endpoint():
        return {"message": "ok"}

    return app


class TestSecurityHeadersMiddleware:
    """Tests for security headers middleware."""

    @pytest.fixture
    def security_client(self):
        return TestClient(_security_app())

    def test_adds_x_content_type_options(self, security_client):
        response = security_client.get("/test")
        assert response.headers.get("X-Content-Type-Options") == "nosniff"

    def test_adds_x_frame_options(self, security_client):
        response = security_client.get("/test")
        assert response.headers.get("X-Frame-Options") == "DENY"

    def test_adds_referrer_policy(self, security_client):
        response = security_client.get("/test")
        assert response.headers.get("Referrer-Policy") == "strict-origin-when-cross-origin"

    def test_adds_permissions_policy(self, security_client):
        response = security_client.get("/test")
        assert "geolocation=()" in response.headers.get("Permissions-Policy", "")

    def test_adds_content_security_policy(self, security_client):
        """Images may come from the same origin or any https host."""
        response = security_client.get("/test")

        csp = response.headers.get("Content-Security-Policy", "")
        assert "default-src 'self'" in csp
        assert "img-src 'self' data: https:" in csp
        assert "frame-ancestors 'none'" in csp

    def test_adds_hsts_in_production(self, monkeypatch):
        monkeypatch.setattr(settings, "environment", "production")

        response = TestClient(_security_app()).get("/test")

        hsts = response.headers.get("Strict-Transport-Security", "")
        assert "max-age=31536000" in hsts

    def test_no_hsts_outside_production(self, monkeypatch):
        monkeypatch.setattr(settings, "environment", "development")

        response = TestClient(_security_app()).get("/test")

        assert "Strict-Transport-Security" not in response.headers

    def test_applied_to_application_routes(self, client):
        response = client.get("/api/health")
        assert response.headers.get("X-Frame-Options") == "DENY"


# =============================================================================
# ContentTypeValidationMiddleware Tests
# =============================================================================

class TestContentTypeValidationMiddleware:
    """Tests for content-type validation middleware."""

    @pytest.fixture
    def content_client(self):
        app = FastAPI()
        app.add_middleware(ContentTypeValidationMiddleware)

        @app.post("/test")
        def post_endpoint():
            return {"message": "ok"}

        @app.get("/test")
        def get_endpoint():
            return {"message": "ok"}

        @app.post("/api/upload")
        def upload_endpoint():
            return {"message": "ok"}

        return TestClient(app)

    def test_allows_json_content_type(self, content_client):
        response = content_client.post("/test", json={"key": "value"})
        assert response.status_code == 200

    def test_allows_form_urlencoded(self, content_client):
        response = content_client.post(
            "/test",
            data={"key": "value"},
            headers={"Content-Type": "application/x-www-form-urlencoded"},
        )
        assert response.status_code == 200

    def test_rejects_unsupported_content_type(self, content_client):
        response = content_client.post(
            "/test",
            content="some data",
            headers={"Content-Type": "text/plain"},
        )

        assert response.status_code == 415
        assert response.json() == {"message": "Unsupported Media Type. Use application/json"}

    def test_allows_get_without_content_type(self, content_client):
        assert content_client.get("/test").status_code == 200

    def test_allows_body_without_content_type(self, content_client):
        assert content_client.post("/test").status_code == 200

    def test_exempts_upload_endpoint(self, content_client):
        response = content_client.post(
            "/api/upload",
            files={"image": ("a.png", b"\x89PNG", "image/png")},
        )
        assert response.status_code == 200


# =============================================================================
# CorrelationIdMiddleware Tests
# =============================================================================

class TestCorrelationIdMiddleware:
    """Tests for correlation ID middleware."""

    @pytest.fixture
    def correlation_client(self):
        app = FastAPI()
        app.add_middleware(CorrelationIdMiddleware)

        @app.get("/test")
        def test_endpoint():
            return {"request_id": get_request_id()}

        return TestClient(app)

    def test_generates_request_id_when_not_provided(self, correlation_client):
        response = correlation_client.get("/test")

        request_id = response.headers.get("X-Request-ID")
        assert request_id is not None
        assert len(request_id) == 36
        assert response.json()["request_id"] == request_id

    def test_uses_provided_request_id(self, correlation_client):
        custom_id = "my-custom-request-id-12345"
        response = correlation_client.get("/test", headers={"X-Request-ID": custom_id})

        assert response.headers.get("X-Request-ID") == custom_id

    def test_truncates_long_request_id(self, correlation_client):
        response = correlation_client.get("/test", headers={"X-Request-ID": "x" * 200})
        assert len(response.headers["X-Request-ID"]) == 64


# =============================================================================
# CorrelationIdFilter Tests
# =============================================================================

class TestCorrelationIdFilter:
    """Tests for correlation ID logging filter."""

    def test_adds_request_id_to_log_record(self):
        filter_obj = CorrelationIdFilter()
        token = request_id_var.set("test-request-123")

        try:
            record = MagicMock()
            assert filter_obj.filter(record) is True
            assert record.request_id == "test-request-123"
        finally:
            request_id_var.reset(token)

    def test_uses_dash_when_no_request_id(self):
        filter_obj = CorrelationIdFilter()
        token = request_id_var.set("")

        try:
            record = MagicMock()
            assert filter_obj.filter(record) is True
            assert record.request_id == "-"
        finally:
            request_id_var.reset(token)


# =============================================================================
# safe_commit Tests
# =============================================================================

class TestSafeCommit:
    """Tests for safe_commit utility."""

    def test_commits_successfully(self):
        mock_db = MagicMock()

        safe_commit(mock_db)

        mock_db.commit.assert_called_once()
        mock_db.rollback.assert_not_called()

    def test_rollbacks_and_reraises(self):
        class CustomDBError(Exception):
            pass

        mock_db = MagicMock()
        mock_db.commit.side_effect = CustomDBError("Custom error")

        with pytest.raises(CustomDBError):
            safe_commit(mock_db)

        mock_db.rollback.assert_called_once()
