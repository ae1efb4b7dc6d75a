"""
User Service for Pizza Service
==============================

Registration, login/logout and user administration.

Key Functions:
--------------
- create_user: Insert a user with hashed password and roles
- register: Create a diner account and log it in
- login / logout: Issue and revoke session tokens
- update_user: Change name/email/password (self or admin)
- list_users: Paged, name-filtered user listing (admin)
- delete_user: Remove a user (admin, idempotent)

Validation Order:
-----------------
Missing fields are reported (400) before any authorization check (403), so a
client always learns about a malformed request first. Authentication (401)
is enforced by the routes before the service is called.
"""

import logging
from typing import Iterable, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..auth import hash_password, issue_token, revoke_token, user_to_dict, verify_password
from ..authorization import Action, Diner, Principal, Role, UserTarget, role_to_claim
from ..errors import ConflictError, NotFoundError, ValidationError
from ..models import User, UserRole
from ..schemas.users import (
    AuthResponse,
    LoginRequest,
    RegisterRequest,
    UserListResponse,
    UserOut,
    UserUpdate,
)
from .helpers import enforce, is_blank, name_filter_pattern, page_window


logger = logging.getLogger(__name__)


def _normalize_email(email: str) -> str:
    return email.strip().lower()


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(func.lower(User.email) == _normalize_email(email)).first()


def create_user(
    db: Session,
    name: str,
    email: str,
    password: str,
    roles: Iterable[Role] = (),
) -> User:
    """Insert a user. Raises ConflictError if the email is taken."""
    if get_user_by_email(db, email) is not None:
        raise ConflictError("user already exists")

    user = User(name=name.strip(), email=_normalize_email(email), password=hash_password(password))
    for role in list(roles) or [Diner()]:
        claim = role_to_claim(role)
        user.roles.append(UserRole(role=claim["role"], object_id=claim.get("objectId")))

    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("user already exists")
    db.refresh(user)
    logger.info("Created user %s with roles %s", user.id, [r.role for r in user.roles])
    return user


def _auth_response(db: Session, user: User) -> AuthResponse:
    token = issue_token(db, user)
    return AuthResponse(user=UserOut.model_validate(user_to_dict(user)), token=token)


def register(db: Session, payload: RegisterRequest) -> AuthResponse:
    if is_blank(payload.name) or is_blank(payload.email) or is_blank(payload.password):
        raise ValidationError("name, email, and password are required")

    user = create_user(db, payload.name, payload.email, payload.password, roles=[Diner()])
    return _auth_response(db, user)


def login(db: Session, payload: LoginRequest) -> AuthResponse:
    if is_blank(payload.email) or is_blank(payload.password):
        raise ValidationError("email and password are required")

    user = get_user_by_email(db, payload.email)
    if user is None or not verify_password(payload.password, user.password):
        logger.info("Failed login attempt")
        raise NotFoundError("unknown user")
    return _auth_response(db, user)


def logout(db: Session, token: str) -> None:
    revoke_token(db, token)


def update_user(db: Session, principal: Principal, user_id: int, payload: UserUpdate) -> AuthResponse:
    """Update a user and hand back a fresh token reflecting the new details."""
    if is_blank(payload.name) or is_blank(payload.email):
        raise ValidationError("name and email are required")

    enforce(principal, Action.UPDATE_USER, UserTarget(user_id), "unauthorized")

    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError("unknown user")

    existing = get_user_by_email(db, payload.email)
    if existing is not None and existing.id != user.id:
        raise ConflictError("user already exists")

    user.name = payload.name.strip()
    user.email = _normalize_email(payload.email)
    if not is_blank(payload.password):
        user.password = hash_password(payload.password)

    db.commit()
    db.refresh(user)
    logger.info("Updated user %s", user.id)
    return _auth_response(db, user)


def list_users(
    db: Session,
    principal: Principal,
    page: int = 0,
    limit: int = 10,
    name: Optional[str] = None,
) -> UserListResponse:
    enforce(principal, Action.LIST_USERS, None, "unauthorized")

    query = db.query(User)
    pattern = name_filter_pattern(name)
    if pattern:
        query = query.filter(User.name.like(pattern, escape="\\"))

    offset, fetch = page_window(page, limit)
    rows = query.order_by(User.id).offset(offset).limit(fetch).all()
    more = len(rows) > limit
    users = [UserOut.model_validate(user_to_dict(u)) for u in rows[:limit]]
    return UserListResponse(users=users, more=more)


def delete_user(db: Session, principal: Principal, user_id: int) -> None:
    """Delete a user. Deleting an unknown id is a no-op."""
    enforce(principal, Action.DELETE_USER, UserTarget(user_id), "unauthorized")

    user = db.get(User, user_id)
    if user is None:
        logger.info("Delete of unknown user %s ignored", user_id)
        return

    db.delete(user)
    db.commit()
    logger.info("Deleted user %s", user_id)
