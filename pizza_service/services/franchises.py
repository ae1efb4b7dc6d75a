"""
Franchise Service for Pizza Service
===================================

Franchises and their stores.

Key Functions:
--------------
- list_franchises: Public, paged listing (admins see more detail)
- get_user_franchises: Franchises a user administers
- create_franchise / delete_franchise: Admin only
- create_store / delete_store: Admin or a franchisee of the franchise

Franchise Admins:
-----------------
A franchise has no admin column. Its admins are the users holding a
``franchisee`` role whose object_id is the franchise id. Creating a franchise
grants those roles; deleting it revokes them.

Revenue:
--------
Store revenue is the sum of the item prices of all orders placed at the
store. It is only computed for views that show it (admins and the
franchise's own admins).

Deletion:
---------
Deleting an unknown franchise or store is a no-op that still reports
success, so retries are safe.
"""

import logging
from typing import Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..authorization import FRANCHISEE, Action, FranchiseTarget, Principal, visible_franchises
from ..errors import AuthorizationError, ConflictError, NotFoundError, ValidationError
from ..models import DinerOrder, Franchise, OrderItem, Store, User, UserRole
from ..schemas.franchises import (
    FranchiseAdminOut,
    FranchiseCreate,
    FranchiseListResponse,
    FranchiseOut,
    StoreCreate,
    StoreCreatedOut,
    StoreOut,
)
from .helpers import enforce, is_blank, name_filter_pattern, page_window
from .users import get_user_by_email


logger = logging.getLogger(__name__)


# =============================================================================
# Lookups
# =============================================================================

def _franchise_admins(db: Session, franchise_id: int) -> List[User]:
    return (
        db.query(User)
        .join(UserRole, UserRole.user_id == User.id)
        .filter(UserRole.role == FRANCHISEE, UserRole.object_id == franchise_id)
        .order_by(UserRole.id)
        .all()
    )


def _store_revenue(db: Session, store_ids: List[int]) -> Dict[int, float]:
    if not store_ids:
        return {}
    rows = (
        db.query(DinerOrder.store_id, func.coalesce(func.sum(OrderItem.price), 0.0))
        .join(OrderItem, OrderItem.order_id == DinerOrder.id)
        .filter(DinerOrder.store_id.in_(store_ids))
        .group_by(DinerOrder.store_id)
        .all()
    )
    return {store_id: float(total) for store_id, total in rows}


def _franchise_detail(db: Session, franchise: Franchise) -> FranchiseOut:
    """Full view: admins plus per-store revenue."""
    revenue = _store_revenue(db, [s.id for s in franchise.stores])
    return FranchiseOut(
        id=franchise.id,
        name=franchise.name,
        admins=[FranchiseAdminOut.model_validate(u) for u in _franchise_admins(db, franchise.id)],
        stores=[
            StoreOut(id=s.id, name=s.name, total_revenue=revenue.get(s.id, 0.0))
            for s in franchise.stores
        ],
    )


def _franchise_summary(franchise: Franchise) -> FranchiseOut:
    return FranchiseOut(
        id=franchise.id,
        name=franchise.name,
        stores=[StoreOut(id=s.id, name=s.name) for s in franchise.stores],
    )


# =============================================================================
# Franchises
# =============================================================================

def list_franchises(
    db: Session,
    principal: Optional[Principal],
    page: int = 0,
    limit: int = 10,
    name: Optional[str] = None,
) -> FranchiseListResponse:
    query = db.query(Franchise)
    pattern = name_filter_pattern(name)
    if pattern:
        query = query.filter(Franchise.name.like(pattern, escape="\\"))

    offset, fetch = page_window(page, limit)
    rows = query.order_by(Franchise.id).offset(offset).limit(fetch).all()
    more = len(rows) > limit

    detailed = principal is not None and principal.is_admin
    franchises = [
        _franchise_detail(db, f) if detailed else _franchise_summary(f)
        for f in rows[:limit]
    ]
    return FranchiseListResponse(franchises=franchises, more=more)


def get_user_franchises(db: Session, principal: Principal, user_id: int) -> List[FranchiseOut]:
    """Franchises ``user_id`` administers; empty for callers who may not look."""
    franchise_ids = (
        db.query(UserRole.object_id)
        .filter(UserRole.user_id == user_id, UserRole.role == FRANCHISEE)
    )
    franchises = (
        _franchise_detail(db, f)
        for f in db.query(Franchise).filter(Franchise.id.in_(franchise_ids)).order_by(Franchise.id)
    )
    return visible_franchises(principal, user_id, franchises)


def create_franchise(db: Session, principal: Principal, payload: FranchiseCreate) -> FranchiseOut:
    if is_blank(payload.name):
        raise ValidationError("franchise name is required")

    enforce(principal, Action.CREATE_FRANCHISE, None, "unable to create a franchise")

    admins: List[User] = []
    for admin in payload.admins:
        user = get_user_by_email(db, admin.email) if not is_blank(admin.email) else None
        if user is None:
            raise NotFoundError(f"unknown user for franchise admin {admin.email} provided")
        if user not in admins:
            admins.append(user)

    name = payload.name.strip()
    if db.query(Franchise).filter(Franchise.name == name).first() is not None:
        raise ConflictError("franchise already exists")

    franchise = Franchise(name=name)
    db.add(franchise)
    try:
        db.flush()
    except IntegrityError:
        db.rollback()
        raise ConflictError("franchise already exists")

    for user in admins:
        db.add(UserRole(user_id=user.id, role=FRANCHISEE, object_id=franchise.id))
    db.commit()
    db.refresh(franchise)

    logger.info("Created franchise %s (%s) with %d admin(s)", franchise.id, franchise.name, len(admins))
    return _franchise_detail(db, franchise)


def delete_franchise(db: Session, principal: Principal, franchise_id: int) -> None:
    """Delete a franchise with its stores and franchisee roles."""
    enforce(principal, Action.DELETE_FRANCHISE, FranchiseTarget(franchise_id), "unable to delete a franchise")

    db.query(UserRole).filter(
        UserRole.role == FRANCHISEE,
        UserRole.object_id == franchise_id,
    ).delete(synchronize_session=False)

    franchise = db.get(Franchise, franchise_id)
    if franchise is not None:
        db.delete(franchise)
    db.commit()
    logger.info("Deleted franchise %s", franchise_id)


# =============================================================================
# Stores
# =============================================================================

def create_store(db: Session, principal: Principal, franchise_id: int, payload: StoreCreate) -> StoreCreatedOut:
    if is_blank(payload.name):
        raise ValidationError("store name is required")

    franchise = db.get(Franchise, franchise_id)
    # An unknown franchise has no admins and cannot own a store
    target = FranchiseTarget(franchise.id if franchise else None)
    enforce(principal, Action.CREATE_STORE, target, "unable to create a store")
    if franchise is None:
        raise AuthorizationError("unable to create a store")

    store = Store(franchise_id=franchise.id, name=payload.name.strip())
    db.add(store)
    db.commit()
    db.refresh(store)
    logger.info("Created store %s (%s) in franchise %s", store.id, store.name, franchise.id)
    return StoreCreatedOut.model_validate(store)


def delete_store(db: Session, principal: Principal, franchise_id: int, store_id: int) -> None:
    franchise = db.get(Franchise, franchise_id)
    target = FranchiseTarget(franchise.id if franchise else None)
    enforce(principal, Action.DELETE_STORE, target, "unable to delete a store")

    store = (
        db.query(Store)
        .filter(Store.id == store_id, Store.franchise_id == franchise_id)
        .first()
    )
    if store is None:
        logger.info("Delete of unknown store %s in franchise %s ignored", store_id, franchise_id)
        return

    db.delete(store)
    db.commit()
    logger.info("Deleted store %s from franchise %s", store_id, franchise_id)
