"""
Fixtures for API tests.

The app runs against the per-test SQLite session; startup table creation and
the health check's connection probe are patched out.
"""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from pickup.api.main import app
from pickup.config import get_settings
from pickup.database import get_db


@pytest.fixture
def client(db_session, settings):
    """TestClient bound to the test database session."""

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: settings

    with patch("pickup.api.main.init_db"), patch(
        "pickup.api.main.check_connection", return_value=True
    ):
        with TestClient(app) as test_client:
            yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def as_user():
    """Headers identifying the caller."""

    def _headers(user_id: str) -> dict:
        return {"X-User-ID": user_id}

    return _headers


@pytest.fixture
def event_payload() -> dict:
    return {
        "title": "3v3 basketball",
        "activity": "Sports",
        "subtype": "Basketball",
        "location": {
            "name": "Slaughter Rec Center",
            "address": "505 Edgemont Rd",
            "latitude": 38.0347,
            "longitude": -78.5151,
        },
        "duration_minutes": 90,
        "max_participants": 6,
    }
