import os
import sys
from unittest.mock import MagicMock

import pytest

CURRENT_DIR = os.path.dirname(__file__)
SERVICE_ROOT = os.path.dirname(CURRENT_DIR)
if SERVICE_ROOT not in sys.path:
    sys.path.insert(0, SERVICE_ROOT)

from fastapi.testclient import TestClient

from scholarship_service.domain.entities import Role
from scholarship_service.infrastructure.cache import JsonCache, get_cache
from scholarship_service.infrastructure.db import Database, get_db
from scholarship_service.infrastructure.models import UserORM
from scholarship_service.infrastructure.payments import get_payment_gateway
from scholarship_service.infrastructure.rate_limit import limiter
from scholarship_service.infrastructure.security import create_access_token
from scholarship_service.main import app

# rate limiting is exercised separately; keep it out of functional tests
limiter.enabled = False


@pytest.fixture
def database():
    """Fresh in-memory store per test"""
    db = Database("sqlite:///:memory:")
    db.create_all()
    yield db
    db.dispose()


@pytest.fixture
def redis_client():
    client = MagicMock()
    client.get.return_value = None
    client.scan_iter.return_value = iter([])
    return client


@pytest.fixture
def cache(redis_client):
    return JsonCache(redis_client, ttl=60)


@pytest.fixture
def gateway():
    gw = MagicMock()
    gw.create_intent.return_value = "pi_123_secret_456"
    return gw


@pytest.fixture
def client(database, cache, gateway):
    def _get_db():
        session = database.session()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_cache] = lambda: cache
    app.dependency_overrides[get_payment_gateway] = lambda: gateway
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(database):
    def _make(email: str, role: Role = Role.USER) -> str:
        with database.session() as s:
            row = UserORM(email=email, name=email.split("@")[0], role=role.value)
            s.add(row); s.commit()
            return row.id
    return _make


def auth_headers(email: str, **claims) -> dict:
    token = create_access_token({"email": email, **claims})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def headers():
    return auth_headers
