from datetime import datetime, timedelta, timezone

from jose import jwt, JWTError

from ..config import settings
from ..domain.entities import Identity


def create_access_token(claims: dict, now: datetime | None = None) -> str:
    """Sign `claims` with the server secret; valid for TOKEN_TTL_DAYS.

    Claim contents are not checked here beyond what the caller passes in.
    """
    issued = now or datetime.now(timezone.utc)
    payload = dict(claims)
    payload["iat"] = issued
    payload["exp"] = issued + timedelta(days=settings.TOKEN_TTL_DAYS)
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> Identity:
    """Identity from a signed token, or JWTError (bad signature, expired, no email)."""
    payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    email = payload.get("email")
    if not email:
        raise JWTError("No email claim")
    return Identity(email=email, claims=payload)
