"""
Order Routes for Pizza Service
==============================

Endpoints:
----------
- GET /api/order/menu: The menu (public)
- PUT /api/order/menu: Add a menu item (admin); returns the updated menu
- GET /api/order: The caller's orders, ?page=1 (echoed back as given)
- POST /api/order: Place an order and have the factory fulfill it

Fulfillment:
------------
The order is stored before the factory is called. If the factory fails, the
response is 500 with ``followLinkToEndChaos`` (when the factory provided a
report) and the stored order is kept.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from ..auth import require_principal
from ..authorization import Principal
from ..db import get_db
from ..schemas.menu import MenuItemCreate, MenuItemOut
from ..schemas.orders import OrderCreate, OrderCreatedResponse, OrderListResponse
from ..services import menu, orders
from ..services.fulfillment import FactoryClient


logger = logging.getLogger(__name__)

order_router = APIRouter(prefix="/api/order", tags=["Orders"])


def get_factory(request: Request) -> FactoryClient:
    return request.app.state.factory


# =============================================================================
# Menu Endpoints
# =============================================================================

@order_router.get("/menu", response_model=List[MenuItemOut])
def get_menu(db: Session = Depends(get_db)) -> List[MenuItemOut]:
    return menu.get_menu(db)


@order_router.put("/menu", response_model=List[MenuItemOut])
def add_menu_item(
    payload: MenuItemCreate,
    principal: Principal = Depends(require_principal),
    db: Session = Depends(get_db),
) -> List[MenuItemOut]:
    return menu.add_menu_item(db, principal, payload)


# =============================================================================
# Order Endpoints
# =============================================================================

@order_router.get("", response_model=OrderListResponse)
def list_orders(
    page: str = Query("1"),
    principal: Principal = Depends(require_principal),
    db: Session = Depends(get_db),
) -> OrderListResponse:
    return orders.list_orders(db, principal, page=page)


@order_router.post("", response_model=OrderCreatedResponse)
def create_order(
    payload: OrderCreate,
    principal: Principal = Depends(require_principal),
    db: Session = Depends(get_db),
    factory: FactoryClient = Depends(get_factory),
) -> OrderCreatedResponse:
    return orders.create_order(db, principal, payload, factory)
