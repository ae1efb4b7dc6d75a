"""
Franchise Routes for Pizza Service
==================================

Endpoints:
----------
- GET /api/franchise: List franchises (public), ?page=0&limit=10&name=*
- GET /api/franchise/{userId}: Franchises a user administers
- POST /api/franchise: Create a franchise (admin)
- DELETE /api/franchise/{franchiseId}: Delete a franchise (admin)
- POST /api/franchise/{franchiseId}/store: Create a store (admin or franchisee)
- DELETE /api/franchise/{franchiseId}/store/{storeId}: Delete a store (admin or franchisee)

Authorization:
--------------
Asking for another user's franchises is not an error: callers who are
neither that user nor an admin simply get an empty list.

Usage:
------
    POST /api/franchise/1/store
    {"name": "SLC"}

    -> {"id": 1, "franchiseId": 1, "name": "SLC"}
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..auth import get_optional_principal, require_principal
from ..authorization import Principal
from ..config import DEFAULT_LIST_LIMIT
from ..db import get_db
from ..schemas.common import MessageResponse
from ..schemas.franchises import (
    FranchiseCreate,
    FranchiseListResponse,
    FranchiseOut,
    StoreCreate,
    StoreCreatedOut,
)
from ..services import franchises


logger = logging.getLogger(__name__)

franchise_router = APIRouter(prefix="/api/franchise", tags=["Franchises"])


# =============================================================================
# Franchise Endpoints
# =============================================================================

@franchise_router.get("", response_model=FranchiseListResponse, response_model_exclude_none=True)
def list_franchises(
    page: int = Query(0, ge=0),
    limit: int = Query(DEFAULT_LIST_LIMIT, ge=1, le=100),
    name: Optional[str] = Query(None),
    principal: Optional[Principal] = Depends(get_optional_principal),
    db: Session = Depends(get_db),
) -> FranchiseListResponse:
    return franchises.list_franchises(db, principal, page=page, limit=limit, name=name)


@franchise_router.get("/{user_id}", response_model=List[FranchiseOut], response_model_exclude_none=True)
def get_user_franchises(
    user_id: int,
    principal: Principal = Depends(require_principal),
    db: Session = Depends(get_db),
) -> List[FranchiseOut]:
    return franchises.get_user_franchises(db, principal, user_id)


@franchise_router.post("", response_model=FranchiseOut, response_model_exclude_none=True)
def create_franchise(
    payload: FranchiseCreate,
    principal: Principal = Depends(require_principal),
    db: Session = Depends(get_db),
) -> FranchiseOut:
    return franchises.create_franchise(db, principal, payload)


@franchise_router.delete("/{franchise_id}", response_model=MessageResponse)
def delete_franchise(
    franchise_id: int,
    principal: Principal = Depends(require_principal),
    db: Session = Depends(get_db),
) -> MessageResponse:
    franchises.delete_franchise(db, principal, franchise_id)
    return MessageResponse(message="franchise deleted")


# =============================================================================
# Store Endpoints
# =============================================================================

@franchise_router.post("/{franchise_id}/store", response_model=StoreCreatedOut)
def create_store(
    franchise_id: int,
    payload: StoreCreate,
    principal: Principal = Depends(require_principal),
    db: Session = Depends(get_db),
) -> StoreCreatedOut:
    return franchises.create_store(db, principal, franchise_id, payload)


@franchise_router.delete("/{franchise_id}/store/{store_id}", response_model=MessageResponse)
def delete_store(
    franchise_id: int,
    store_id: int,
    principal: Principal = Depends(require_principal),
    db: Session = Depends(get_db),
) -> MessageResponse:
    franchises.delete_store(db, principal, franchise_id, store_id)
    return MessageResponse(message="store deleted")
