import os
import tempfile

# Settings are read at import time; point them at throwaway locations first
_TEST_ROOT = tempfile.mkdtemp(prefix="contractor-ads-tests-")
TEST_INTERNAL_KEY = "test-internal-key"
os.environ["INTERNAL_WEBHOOK_KEY"] = TEST_INTERNAL_KEY
os.environ["SQLITE_DB_PATH"] = os.path.join(_TEST_ROOT, "default.db")
os.environ["LOG_DIR"] = os.path.join(_TEST_ROOT, "logs")

import pytest
from fastapi.testclient import TestClient

from contractor_ads.core.config import Settings
from contractor_ads.main import create_application
from contractor_ads.services.storage import Storage
from tests.helpers.database_helpers import DatabaseHelpers


@pytest.fixture(scope="function")
def test_settings(tmp_path):
    """Settings backed by a fresh SQLite file for each test."""
    return Settings(
        INTERNAL_WEBHOOK_KEY=TEST_INTERNAL_KEY,
        SQLITE_DB_PATH=str(tmp_path / "data" / "contractor_ads.db"),
        ENABLE_SEED_ENDPOINT=True,
    )

@pytest.fixture(scope="function")
def storage(test_settings):
    storage = Storage.from_url(test_settings.DATABASE_URL)
    storage.create_schema()
    yield storage
    storage.dispose()

@pytest.fixture(scope="function")
def db_session(storage):
    """A session on the test database for verifying state directly."""
    session = storage.SessionLocal()
    yield session
    session.close()

@pytest.fixture(scope="function")
def app(test_settings, storage):
    return create_application(settings=test_settings, storage=storage)

@pytest.fixture(scope="function")
def client(app):
    """Create a test client without credentials."""
    return TestClient(app)

@pytest.fixture
def auth_headers():
    return {"x-internal-key": TEST_INTERNAL_KEY}

@pytest.fixture
def db_helpers(db_session):
    """Provide database helper utilities for tests."""
    return DatabaseHelpers(db_session)

@pytest.fixture
def authenticated_client(client, auth_headers):
    """Create a client that sends the internal key on every request."""

    class AuthenticatedClient:
        def __init__(self, client, headers):
            self.client = client
            self.headers = headers

        def get(self, url, **kwargs):
            kwargs.setdefault('headers', {}).update(self.headers)
            return self.client.get(url, **kwargs)

        def post(self, url, **kwargs):
            kwargs.setdefault('headers', {}).update(self.headers)
            return self.client.post(url, **kwargs)

        def patch(self, url, **kwargs):
            kwargs.setdefault('headers', {}).update(self.headers)
            return self.client.patch(url, **kwargs)

    return AuthenticatedClient(client, auth_headers)

@pytest.fixture
def ad_payload():
    """Return a valid payload for the ad-creation webhook."""
    return {
        "ad_content": [
            {"id": "A", "type": "pain_point", "headline": "Leaky Roof?", "cta": "BOOK_NOW"}
        ],
        "budget": 150,
        "status": "pending_approval",
        "metadata": {
            "service_type": "roof repair",
            "location": "Phoenix, AZ",
            "max_daily_spend": 40,
            "image_url": "https://example.com/roof.jpg",
            "customer_phone": "+15551234567",
        },
    }

@pytest.fixture
def create_ad(authenticated_client):
    """Factory creating an ad through the webhook and returning its id."""

    def _create(metadata=None, **body):
        payload = {"ad_content": "Call today", "budget": 100}
        payload.update(body)
        payload["metadata"] = metadata if metadata is not None else {"service_type": "roof repair"}
        response = authenticated_client.post("/api/webhook/ads/create", json=payload)
        assert response.status_code == 200, response.text
        return response.json()["id"]

    return _create
