"""
Tests for health endpoints.
"""
from unittest.mock import Mock

from emoclass.db.session import get_db


class TestHealthRoutes:

    def test_health_endpoint(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["service"] == "emoclass-api"

    def test_health_full_connected(self, client):
        data = client.get("/health/full").json()
        assert data["database"] == "connected"

    def test_health_full_disconnected(self, client, app):
        """Test a failing database is reported, not raised."""
        broken = Mock()
        broken.execute.side_effect = Exception("connection refused")
        app.dependency_overrides[get_db] = lambda: broken

        data = client.get("/health/full").json()

        assert data["status"] == "unhealthy"
        assert data["database"] == "disconnected"
        assert "error" not in data
        assert "connection refused" not in str(data)
