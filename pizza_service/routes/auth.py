"""
Authentication Routes for Pizza Service
=======================================

Endpoints:
----------
- POST /api/auth: Register a new diner and log in
- PUT /api/auth: Log in
- DELETE /api/auth: Log out (revokes the token)

Rate Limiting:
--------------
Register and login are rate limited per client address (RATE_LIMIT_AUTH) to
slow down credential stuffing.

Usage:
------
    PUT /api/auth
    {"email": "d@jwt.com", "password": "diner"}

    -> {"user": {"id": 2, "name": "pizza diner", "email": "d@jwt.com",
                 "roles": [{"role": "diner"}]},
        "token": "eyJ..."}
"""

import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, Request
from slowapi import Limiter
from slowapi.util import get_remote_address
from sqlalchemy.orm import Session

from ..auth import require_token
from ..config import RATE_LIMIT_ENABLED, get_rate_limit_auth
from ..db import get_db
from ..schemas.common import MessageResponse
from ..schemas.users import AuthResponse, LoginRequest, RegisterRequest
from ..services import users


logger = logging.getLogger(__name__)

auth_router = APIRouter(prefix="/api/auth", tags=["Auth"])

limiter = Limiter(key_func=get_remote_address, enabled=RATE_LIMIT_ENABLED)


@auth_router.post("", response_model=AuthResponse, response_model_exclude_none=True)
@limiter.limit(get_rate_limit_auth)
def register(
    request: Request,
    payload: Optional[RegisterRequest] = Body(None),
    db: Session = Depends(get_db),
) -> AuthResponse:
    """Register a new diner account."""
    return users.register(db, payload or RegisterRequest())


@auth_router.put("", response_model=AuthResponse, response_model_exclude_none=True)
@limiter.limit(get_rate_limit_auth)
def login(
    request: Request,
    payload: Optional[LoginRequest] = Body(None),
    db: Session = Depends(get_db),
) -> AuthResponse:
    """Log in an existing user."""
    return users.login(db, payload or LoginRequest())


@auth_router.delete("", response_model=MessageResponse)
def logout(
    token: str = Depends(require_token),
    db: Session = Depends(get_db),
) -> MessageResponse:
    """Log out; the token stops working immediately."""
    users.logout(db, token)
    return MessageResponse(message="logout successful")
