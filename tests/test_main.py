"""
Unit tests for emoclass.main and its error handlers.
"""
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from emoclass.core.errors import DispatchFailure, StudentNotFound
from emoclass.main import create_app


class TestCreateApp:
    """Test create_app function."""

    def test_create_app_returns_fastapi_instance(self):
        app = create_app()
        assert isinstance(app, FastAPI)
        assert app.title == "EmoClass API"

    def test_app_includes_all_routers(self):
        """Test that all routers are included."""
        app = create_app()
        route_paths = [getattr(r, "path", "") for r in app.routes]

        assert "/health" in route_paths
        assert "/api/checkin" in route_paths
        assert "/api/check-alert" in route_paths
        assert "/api/classes" in route_paths
        assert "/api/dashboard/class/{class_id}" in route_paths


class TestErrorHandlers:
    """Test the JSON envelope rendered for errors."""

    def _client(self, exc):
        app = create_app()

        @app.get("/boom")
        def boom():
            raise exc

        return TestClient(app, raise_server_exceptions=False)

    def test_domain_error(self):
        response = self._client(StudentNotFound("Student not found")).get("/boom")
        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Student not found", "error_code": "STUDENT_NOT_FOUND"}

    def test_dispatch_failure_status(self):
        response = self._client(DispatchFailure("down")).get("/boom")
        assert response.status_code == 502

    def test_operational_error(self):
        response = self._client(OperationalError("SELECT 1", {}, Exception("no route"))).get("/boom")
        assert response.status_code == 503
        assert response.json()["error_code"] == "DATABASE_CONNECTION_ERROR"
