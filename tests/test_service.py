from unittest.mock import MagicMock

from sqlalchemy.exc import OperationalError

from scholarship_service.infrastructure.db import get_db
from scholarship_service.infrastructure.rate_limit import limiter
from scholarship_service.main import app


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_metrics_endpoint(client):
    client.get("/health")
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "text/plain" in response.headers["content-type"]
    assert "http_requests_total" in response.text


def test_store_failure_is_generic_500(client):
    session = MagicMock()
    session.query.side_effect = OperationalError("SELECT", {}, Exception("password=hunter2"))

    def _broken_db():
        yield session

    app.dependency_overrides[get_db] = _broken_db
    response = client.get("/users/role/a@example.com")
    assert response.status_code == 500
    assert response.json() == {"detail": "Internal server error"}
    assert "hunter2" not in response.text


def test_token_issuance_is_rate_limited(client):
    limiter.reset()
    limiter.enabled = True
    try:
        codes = [client.post("/jwt", json={"email": "a@example.com"}).status_code for _ in range(65)]
    finally:
        limiter.enabled = False
        limiter.reset()
    assert codes[0] == 200
    assert codes[-1] == 429
