"""
Tests for database startup behaviour.

The API must come up even when the database cannot be reached; the failure
is only logged.
"""

from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from jobloom.core import database
from main import app


def database_down(*args, **kwargs):
    raise OperationalError("CREATE TABLE jobs", {}, Exception("could not connect to server"))


class TestInitDb:
    """Tests for init_db"""

    def test_init_db_success(self):
        assert database.init_db() is True

    def test_init_db_failure_is_logged(self, monkeypatch, caplog):
        monkeypatch.setattr(database.Base.metadata, "create_all", database_down)

        assert database.init_db() is False
        assert "Database connection failed" in caplog.text

    def test_app_starts_without_database(self, monkeypatch):
        """Startup continues and the service answers when the database is down"""
        monkeypatch.setattr(database.Base.metadata, "create_all", database_down)

        with TestClient(app) as test_client:
            response = test_client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
