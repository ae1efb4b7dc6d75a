"""
Order Schemas for Pizza Service
===============================

Endpoint Coverage:
------------------
- GET /api/order: The caller's orders (OrderListResponse)
- POST /api/order: Place an order (OrderCreate -> OrderCreatedResponse)

Order Lifecycle:
----------------
An order is stored first and then sent to the pizza factory. The factory
answers with a signed proof of purchase (``jwt``) and a report URL, returned
to the client as ``followLinkToEndChaos``. Orders are never modified after
creation.

Example:
--------
    POST /api/order
    {
        "franchiseId": 1,
        "storeId": 1,
        "items": [{"menuId": 1, "description": "Veggie", "price": 0.05}]
    }
"""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from .common import CamelModel


class OrderItemIn(CamelModel):
    menu_id: int
    description: str
    price: float = Field(ge=0)


class OrderCreate(CamelModel):
    franchise_id: int
    store_id: int
    items: List[OrderItemIn] = []


class OrderItemOut(CamelModel):
    id: int
    menu_id: int
    description: str
    price: float


class OrderOut(CamelModel):
    id: int
    diner_id: int
    franchise_id: int
    store_id: int
    date: Optional[datetime] = None
    items: List[OrderItemOut] = []


class OrderListResponse(CamelModel):
    diner_id: int
    orders: List[OrderOut]
    page: str


class OrderCreatedResponse(CamelModel):
    order: OrderOut
    jwt: Optional[str] = None
    follow_link_to_end_chaos: Optional[str] = None
