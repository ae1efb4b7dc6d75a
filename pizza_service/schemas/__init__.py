"""
Schemas Package for Pizza Service
=================================

This package contains all Pydantic models (schemas) used for API request
validation and response serialization.

Schema Organization:
--------------------
- **common.py**: CamelModel base and the generic message response
- **users.py**: Registration, login and user management schemas
- **franchises.py**: Franchise and store schemas
- **menu.py**: Menu item schemas
- **orders.py**: Order schemas

Naming Conventions:
-------------------
- *Out: Response models (e.g., MenuItemOut) - what API returns
- *Create: Request models for POST/PUT that create something
- *Update: Request models for PUT that modify something
- *Request: Other request bodies (e.g., LoginRequest)
- *Response: Composite responses (e.g., OrderListResponse)

Usage:
------
    from pizza_service.schemas import MenuItemOut, OrderCreate
"""

from .common import CamelModel, MessageResponse

from .users import (
    RoleOut,
    UserOut,
    AuthResponse,
    RegisterRequest,
    LoginRequest,
    UserUpdate,
    UserListResponse,
)

from .franchises import (
    FranchiseAdminIn,
    FranchiseAdminOut,
    FranchiseCreate,
    FranchiseOut,
    FranchiseListResponse,
    StoreOut,
    StoreCreate,
    StoreCreatedOut,
)

from .menu import (
    MenuItemOut,
    MenuItemCreate,
)

from .orders import (
    OrderItemIn,
    OrderCreate,
    OrderItemOut,
    OrderOut,
    OrderListResponse,
    OrderCreatedResponse,
)

__all__ = [
    "CamelModel",
    "MessageResponse",
    # Users
    "RoleOut",
    "UserOut",
    "AuthResponse",
    "RegisterRequest",
    "LoginRequest",
    "UserUpdate",
    "UserListResponse",
    # Franchises
    "FranchiseAdminIn",
    "FranchiseAdminOut",
    "FranchiseCreate",
    "FranchiseOut",
    "FranchiseListResponse",
    "StoreOut",
    "StoreCreate",
    "StoreCreatedOut",
    # Menu
    "MenuItemOut",
    "MenuItemCreate",
    # Orders
    "OrderItemIn",
    "OrderCreate",
    "OrderItemOut",
    "OrderOut",
    "OrderListResponse",
    "OrderCreatedResponse",
]
