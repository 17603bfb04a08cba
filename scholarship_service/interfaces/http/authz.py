from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError
from sqlalchemy.orm import Session

from ...domain.entities import ADMIN_ONLY, STAFF, Identity, Role
from ...domain.errors import Forbidden, Unauthenticated
from ...infrastructure.db import get_db
from ...infrastructure.metrics import auth_rejections_total
from ...infrastructure.repositories import UserRepository
from ...infrastructure.security import decode_token

# auto_error=False so a missing or non-bearer header is a 401, not a 403
bearer = HTTPBearer(auto_error=False)


def _reject(exc_type, reason: str):
    auth_rejections_total.labels(reason=reason).inc()
    return exc_type(reason)


def get_identity(
    request: Request,
    creds: HTTPAuthorizationCredentials | None = Depends(bearer),
) -> Identity:
    if creds is None or not creds.credentials:
        raise _reject(Unauthenticated, "missing_token")
    try:
        identity = decode_token(creds.credentials)
    except JWTError:
        raise _reject(Unauthenticated, "invalid_token")
    request.state.identity = identity
    return identity


def caller_role(identity: Identity, db: Session) -> Role | None:
    user = UserRepository(db).get_by_email(identity.email)
    return user.role if user else None


def require_roles(allowed: frozenset[Role]):
    """Dependency that runs after get_identity and checks the stored role."""

    def dependency(
        identity: Identity = Depends(get_identity),
        db: Session = Depends(get_db),
    ) -> Identity:
        if not Role.allows(caller_role(identity, db), allowed):
            raise _reject(Forbidden, "role")
        return identity

    return dependency


require_admin = require_roles(ADMIN_ONLY)
require_admin_or_moderator = require_roles(STAFF)


def require_self(email: str, identity: Identity) -> None:
    if email != identity.email:
        raise _reject(Forbidden, "not_owner")


def require_self_or_staff(email: str | None, identity: Identity, db: Session) -> None:
    if email == identity.email:
        return
    if not Role.allows(caller_role(identity, db), STAFF):
        raise _reject(Forbidden, "not_owner")
