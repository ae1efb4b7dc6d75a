"""
Routes Package for Pizza Service
================================

This package contains all API route definitions organized by resource. Each
module defines a FastAPI APIRouter with related endpoints grouped together.

Architecture Overview:
----------------------
- auth.py: Registration, login, logout (/api/auth)
- users.py: User self-service and administration (/api/user)
- franchises.py: Franchises and their stores (/api/franchise)
- orders.py: Menu and orders (/api/order)
- docs.py: Welcome message, health check, endpoint catalogue

Route Dependencies:
-------------------
Common dependencies are injected via FastAPI's Depends():
- get_db: Database session for queries
- require_principal: Authenticated caller (401 otherwise)
- get_optional_principal: Caller if any, for public endpoints
- limiter.limit(): Rate limiting on register/login

Error Handling:
---------------
Routes do not build error responses. Services raise the exceptions from
pizza_service.errors and the application's handlers render them as
``{"message": ...}``:
- 400: Missing or invalid fields
- 401: Missing, invalid or revoked token
- 403: Not allowed by the authorization policy
- 404: Unknown user or menu item
- 409: Duplicate email or franchise name
- 500: Factory failure
"""

from .auth import auth_router, limiter
from .users import user_router
from .franchises import franchise_router
from .orders import order_router, get_factory
from .docs import docs_router

__all__ = [
    "auth_router",
    "limiter",
    "user_router",
    "franchise_router",
    "order_router",
    "get_factory",
    "docs_router",
]
