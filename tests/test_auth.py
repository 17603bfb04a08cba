from datetime import datetime, timedelta, timezone

import pytest
from jose import JWTError, jwt

from scholarship_service.config import settings
from scholarship_service.infrastructure.security import create_access_token, decode_token


def test_token_round_trip():
    """Decoding an issued token recovers the email and extra claims"""
    token = create_access_token({"email": "ann@example.com", "name": "Ann"})
    identity = decode_token(token)
    assert identity.email == "ann@example.com"
    assert identity.claims["name"] == "Ann"


def test_token_valid_for_365_days():
    issued = datetime.now(timezone.utc) - timedelta(days=364)
    token = create_access_token({"email": "ann@example.com"}, now=issued)
    payload = jwt.get_unverified_claims(token)
    assert payload["exp"] - payload["iat"] == 365 * 24 * 3600
    assert decode_token(token).email == "ann@example.com"


def test_token_expired_after_365_days():
    issued = datetime.now(timezone.utc) - timedelta(days=366)
    token = create_access_token({"email": "ann@example.com"}, now=issued)
    with pytest.raises(JWTError):
        decode_token(token)


def test_token_wrong_secret_rejected():
    token = jwt.encode({"email": "ann@example.com"}, "not-the-secret", algorithm=settings.JWT_ALGORITHM)
    with pytest.raises(JWTError):
        decode_token(token)


def test_token_without_email_rejected():
    token = jwt.encode({"sub": "ann"}, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)
    with pytest.raises(JWTError):
        decode_token(token)


def test_issue_token_endpoint(client):
    """POST /jwt returns a bearer token for the supplied claims"""
    response = client.post("/jwt", json={"email": "ann@example.com", "name": "Ann"})
    assert response.status_code == 200
    data = response.json()
    assert data["token_type"] == "bearer"
    identity = decode_token(data["access_token"])
    assert identity.email == "ann@example.com"
    assert identity.claims["name"] == "Ann"


def test_issue_token_requires_email(client):
    response = client.post("/jwt", json={"name": "Ann"})
    assert response.status_code == 422


def test_protected_route_without_header(client):
    response = client.get("/my-applications/ann@example.com")
    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"


def test_protected_route_with_malformed_header(client):
    response = client.get("/my-applications/ann@example.com",
                          headers={"Authorization": "Token abc"})
    assert response.status_code == 401


def test_protected_route_with_invalid_token(client):
    response = client.get("/my-applications/ann@example.com",
                          headers={"Authorization": "Bearer invalid_token"})
    assert response.status_code == 401


def test_protected_route_with_expired_token(client):
    issued = datetime.now(timezone.utc) - timedelta(days=400)
    token = create_access_token({"email": "ann@example.com"}, now=issued)
    response = client.get("/my-applications/ann@example.com",
                          headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_protected_route_with_valid_token(client, headers):
    response = client.get("/my-applications/ann@example.com", headers=headers("ann@example.com"))
    assert response.status_code == 200
    assert response.json() == []
