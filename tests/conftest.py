from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from upstream.app import create_app

STARTED_AT = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def app():
    return create_app(resource_count=100, default_limit=10, name_length=10, started_at=STARTED_AT)


@pytest.fixture
def client(app):
    return TestClient(app)
