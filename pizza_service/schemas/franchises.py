"""
Franchise and Store Schemas for Pizza Service
=============================================

Endpoint Coverage:
------------------
- GET /api/franchise: List franchises (FranchiseListResponse)
- GET /api/franchise/{userId}: Franchises a user administers (List[FranchiseOut])
- POST /api/franchise: Create a franchise (FranchiseCreate -> FranchiseOut)
- POST /api/franchise/{id}/store: Create a store (StoreCreate -> StoreCreatedOut)

Visibility:
-----------
The public franchise listing shows each franchise's stores by id and name.
Admins, and franchisees looking at their own franchises, additionally see
the franchise admins and each store's totalRevenue. Fields that are not
visible are left as None and dropped from the response.

Example:
--------
    POST /api/franchise
    {
        "name": "pizzaPocket",
        "admins": [{"email": "f@jwt.com"}]
    }

    -> {"id": 1, "name": "pizzaPocket",
        "admins": [{"id": 4, "name": "pizza franchisee", "email": "f@jwt.com"}],
        "stores": []}
"""

from typing import List, Optional

from .common import CamelModel


class FranchiseAdminIn(CamelModel):
    email: Optional[str] = None


class FranchiseAdminOut(CamelModel):
    id: int
    name: str
    email: str


class FranchiseCreate(CamelModel):
    name: Optional[str] = None
    admins: List[FranchiseAdminIn] = []


class StoreOut(CamelModel):
    id: int
    name: str
    total_revenue: Optional[float] = None


class StoreCreate(CamelModel):
    name: Optional[str] = None


class StoreCreatedOut(CamelModel):
    id: int
    franchise_id: int
    name: str


class FranchiseOut(CamelModel):
    id: int
    name: str
    admins: Optional[List[FranchiseAdminOut]] = None
    stores: List[StoreOut] = []


class FranchiseListResponse(CamelModel):
    franchises: List[FranchiseOut]
    more: bool
