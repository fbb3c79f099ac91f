"""Common test fixtures: in-memory SQLite database, tenants and HTTP clients."""

import os

# Must be set before campaign_settings is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "test"
os.environ["DEBUG"] = "false"

import httpx
import pytest
from fastapi.testclient import TestClient

from campaign_settings.client.api_client import SettingsAPIClient
from campaign_settings.core.database import SessionLocal, engine
from campaign_settings.main import app
from campaign_settings.models import Base, Tenant


@pytest.fixture(autouse=True)
def database():
    """Fresh schema for every test."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session(database):
    session = SessionLocal()
    yield session
    session.close()


def _create_tenant(session, name):
    tenant = Tenant(name=name)
    session.add(tenant)
    session.commit()
    return tenant


@pytest.fixture
def tenant(db_session):
    return _create_tenant(db_session, "Acme Campaigns")


@pytest.fixture
def other_tenant(db_session):
    return _create_tenant(db_session, "Globex Marketing")


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def tenant_headers(tenant):
    return {"X-Tenant-ID": str(tenant.id)}


@pytest.fixture
def api_client(tenant):
    """Async settings API client talking to the app in-process."""
    return SettingsAPIClient(
        "http://testserver/api/v1",
        token="test-token",
        tenant_id=tenant.id,
        transport=httpx.ASGITransport(app=app),
    )
