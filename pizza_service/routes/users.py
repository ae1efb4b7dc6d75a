"""
User Routes for Pizza Service
=============================

Endpoints:
----------
- GET /api/user/me: The authenticated user
- PUT /api/user/{userId}: Update a user (self or admin); returns a new token
- GET /api/user: List users (admin), ?page=0&limit=10&name=*
- DELETE /api/user/{userId}: Delete a user (admin)

All endpoints require a bearer token.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..auth import require_principal
from ..authorization import Principal
from ..config import DEFAULT_LIST_LIMIT
from ..db import get_db
from ..schemas.common import MessageResponse
from ..schemas.users import AuthResponse, UserListResponse, UserOut, UserUpdate
from ..services import users


logger = logging.getLogger(__name__)

user_router = APIRouter(prefix="/api/user", tags=["Users"])


@user_router.get("/me", response_model=UserOut, response_model_exclude_none=True)
def get_me(principal: Principal = Depends(require_principal)) -> UserOut:
    return UserOut.model_validate(principal.to_claims())


@user_router.put("/{user_id}", response_model=AuthResponse, response_model_exclude_none=True)
def update_user(
    user_id: int,
    payload: UserUpdate,
    principal: Principal = Depends(require_principal),
    db: Session = Depends(get_db),
) -> AuthResponse:
    return users.update_user(db, principal, user_id, payload)


@user_router.get("", response_model=UserListResponse, response_model_exclude_none=True)
def list_users(
    page: int = Query(0, ge=0),
    limit: int = Query(DEFAULT_LIST_LIMIT, ge=1, le=100),
    name: Optional[str] = Query(None),
    principal: Principal = Depends(require_principal),
    db: Session = Depends(get_db),
) -> UserListResponse:
    return users.list_users(db, principal, page=page, limit=limit, name=name)


@user_router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: int,
    principal: Principal = Depends(require_principal),
    db: Session = Depends(get_db),
) -> MessageResponse:
    users.delete_user(db, principal, user_id)
    return MessageResponse(message="OK")
