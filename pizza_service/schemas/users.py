"""
User and Authentication Schemas for Pizza Service
=================================================

This module defines Pydantic models for registration, login, and user
management.

Endpoint Coverage:
------------------
- POST /api/auth: Register (RegisterRequest -> AuthResponse)
- PUT /api/auth: Login (LoginRequest -> AuthResponse)
- GET /api/user/me: Current user (UserOut)
- PUT /api/user/{id}: Update a user (UserUpdate -> AuthResponse)
- GET /api/user: List users, admin only (UserListResponse)

Required Fields:
----------------
Request fields are declared Optional on purpose. A missing field is not a
schema error here: the user service reports it with a specific message
("name, email, and password are required"), which clients rely on.

Roles:
------
Roles are serialized as ``{"role": "diner"}``, ``{"role": "admin"}`` or
``{"role": "franchisee", "objectId": <franchise id>}``. Routes returning
users use ``response_model_exclude_none`` so ``objectId`` only appears on
franchisee roles.
"""

from typing import List, Optional

from .common import CamelModel


class RoleOut(CamelModel):
    role: str
    object_id: Optional[int] = None


class UserOut(CamelModel):
    id: int
    name: str
    email: str
    roles: List[RoleOut] = []


class AuthResponse(CamelModel):
    user: UserOut
    token: str


class RegisterRequest(CamelModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class LoginRequest(CamelModel):
    email: Optional[str] = None
    password: Optional[str] = None


class UserUpdate(CamelModel):
    """
    Request model for updating a user.

    name and email are required and must be non-empty; password is optional
    and only changed when provided.
    """
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class UserListResponse(CamelModel):
    users: List[UserOut]
    more: bool
