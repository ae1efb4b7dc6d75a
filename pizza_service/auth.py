"""
Authentication Module for Pizza Service
=======================================

This module issues, verifies and revokes the bearer tokens handed out by the
/api/auth endpoints, and hashes user passwords.

Tokens:
-------
A token is an HS256-signed JWT (PyJWT) whose claims are the user's id, name,
email and roles at login time plus a random ``jti``. Verification is two-step:

1. The signature and structure are checked with the configured JWT_SECRET.
2. The signature segment must still be present in the ``auth_sessions``
   table. Logout deletes that row, so a logged-out token is rejected even
   though it is still correctly signed.

Roles in the token are informational only. The principal used for
authorization is rebuilt from the database on every request, so a user who
becomes a franchisee after logging in is recognised immediately.

Passwords:
----------
Passwords are hashed with argon2 (argon2-cffi). Verification failures return
False; only unexpected verifier errors propagate.

Usage:
------
Require an authenticated caller in a route:

    from pizza_service.auth import require_principal

    @router.get("/api/order")
    def list_orders(principal: Principal = Depends(require_principal)):
        ...

The principal itself is resolved once per request by AuthTokenMiddleware.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from . import config
from .authorization import Principal, role_from_claim
from .errors import AuthenticationError
from .models import AuthSession, User

logger = logging.getLogger(__name__)

ph = PasswordHasher()


# =============================================================================
# Passwords
# =============================================================================

def hash_password(password: str) -> str:
    return ph.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a plaintext password against a stored hash."""
    try:
        return ph.verify(hashed_password, plain_password)
    except (VerifyMismatchError, InvalidHashError):
        return False
    except VerificationError as exc:
        logger.error("argon2 verification error: %s", exc)
        raise


# =============================================================================
# Principals
# =============================================================================

def principal_from_user(user: User) -> Principal:
    roles = tuple(
        role_from_claim({"role": r.role, "objectId": r.object_id})
        for r in user.roles
    )
    return Principal(id=user.id, name=user.name, email=user.email, roles=roles)


def user_to_dict(user: User) -> Dict[str, Any]:
    """Public representation of a user; never includes the password."""
    return principal_from_user(user).to_claims()


# =============================================================================
# Tokens
# =============================================================================

def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Return the token from an ``Authorization: Bearer <token>`` header."""
    if not authorization:
        return None
    parts = authorization.split()
    if len(parts) == 2 and parts[0].lower() == "bearer":
        return parts[1]
    return None


def _signature(token: str) -> str:
    return token.rsplit(".", 1)[-1]


def issue_token(db: Session, user: User) -> str:
    """Mint a token for ``user`` and record it as a live session."""
    claims = user_to_dict(user)
    claims["iat"] = int(datetime.now(timezone.utc).timestamp())
    claims["jti"] = uuid.uuid4().hex
    token = jwt.encode(claims, config.JWT_SECRET, algorithm=config.JWT_ALGORITHM)

    db.add(AuthSession(token=_signature(token), user_id=user.id))
    db.commit()
    logger.debug("Issued token for user %s", user.id)
    return token


def decode_token(token: str) -> Optional[Dict[str, Any]]:
    try:
        return jwt.decode(token, config.JWT_SECRET, algorithms=[config.JWT_ALGORITHM])
    except jwt.PyJWTError as exc:
        logger.debug("Rejected token: %s", exc)
        return None


def resolve_principal(db: Session, token: Optional[str]) -> Optional[Principal]:
    """Principal for a live token, or None if the token is absent, invalid or revoked."""
    if not token:
        return None
    claims = decode_token(token)
    if not claims or "id" not in claims:
        return None

    session = db.get(AuthSession, _signature(token))
    if session is None:
        return None

    user = db.get(User, session.user_id)
    if user is None or str(user.id) != str(claims["id"]):
        return None
    return principal_from_user(user)


def revoke_token(db: Session, token: str) -> None:
    session = db.get(AuthSession, _signature(token))
    if session is not None:
        db.delete(session)
        db.commit()
        logger.debug("Revoked token for user %s", session.user_id)


# =============================================================================
# FastAPI Dependencies
# =============================================================================

def get_optional_principal(request: Request) -> Optional[Principal]:
    """The caller's principal, or None for anonymous requests."""
    return getattr(request.state, "principal", None)


# Declares the bearer scheme in the OpenAPI schema; the token itself is
# resolved by AuthTokenMiddleware.
bearer_scheme = HTTPBearer(auto_error=False)


def require_principal(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Principal:
    """The caller's principal; raises 401 for anonymous requests."""
    principal = get_optional_principal(request)
    if principal is None:
        raise AuthenticationError()
    return principal


def require_token(request: Request, principal: Principal = Depends(require_principal)) -> str:
    """The caller's bearer token, validated; used by logout."""
    return extract_bearer_token(request.headers.get("Authorization"))
