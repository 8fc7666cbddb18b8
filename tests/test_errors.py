"""Tests for the error envelope and handlers."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import IntegrityError

from boostly.core.config import get_settings
from boostly.core.errors import GENERIC_ERROR_MESSAGE, NotFound, ValidationFailed, duplicate_field
from boostly.models import Student


@pytest.fixture
def failing_app(app):
    @app.get("/boom")
    def boom():
        raise RuntimeError("database exploded")

    @app.get("/missing")
    def missing():
        raise NotFound("Thing not found")

    return app


class TestErrorEnvelope:
    def test_boostly_error(self, failing_app):
        with TestClient(failing_app) as client:
            response = client.get("/missing")

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Thing not found"}

    def test_unexpected_error_shows_message_outside_production(self, failing_app):
        with TestClient(failing_app, raise_server_exceptions=False) as client:
            response = client.get("/boom")

        assert response.status_code == 500
        assert response.json() == {"success": False, "message": "database exploded"}

    def test_unexpected_error_hidden_in_production(self, failing_app, monkeypatch):
        monkeypatch.setattr(get_settings(), "environment", "production")

        with TestClient(failing_app, raise_server_exceptions=False) as client:
            response = client.get("/boom")

        assert response.status_code == 500
        assert response.json() == {"success": False, "message": GENERIC_ERROR_MESSAGE}

    def test_unknown_route(self, client):
        response = client.get("/api/nothing-here")

        assert response.status_code == 404
        assert response.json()["success"] is False

    def test_health(self, client):
        assert client.get("/api/health").json() == {"status": "ok"}


class TestErrorKinds:
    def test_status_codes(self):
        assert ValidationFailed("x").status_code == 400
        assert NotFound("x").status_code == 404
        assert NotFound("x", status_code=410).status_code == 410

    def test_duplicate_email_field(self, session, make_student):
        make_student("A", email="same@example.edu")
        session.add(Student(student_id="B", name="B", email="SAME@example.edu"))

        with pytest.raises(IntegrityError) as excinfo:
            session.flush()

        assert duplicate_field(excinfo.value) == "email"
