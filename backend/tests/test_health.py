"""Service and database health endpoints."""

from campaign_settings.core.database_utils import DatabaseHealthCheck, check_database_connection


def test_health_check(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_root_lists_docs(client):
    assert client.get("/").json()["docs"] == "/docs"


def test_database_health(client):
    response = client.get("/api/v1/database/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["tables_exist"] is True


def test_database_health_degraded_without_tables(database):
    from campaign_settings.core.database import engine
    from campaign_settings.models import Base

    Base.metadata.drop_all(bind=engine)
    try:
        report = DatabaseHealthCheck.check_connection()
    finally:
        Base.metadata.create_all(bind=engine)

    assert report["status"] == "degraded"
    assert "zeus_credentials" in report["details"]["missing_tables"]


def test_check_database_connection():
    assert check_database_connection() is True
