"""
Menu Schemas for Pizza Service
==============================

The menu is global: every franchise and store sells the same items.

Endpoint Coverage:
------------------
- GET /api/order/menu: List the menu (List[MenuItemOut])
- PUT /api/order/menu: Add a menu item, admin only (MenuItemCreate -> List[MenuItemOut])

Usage:
------
    item = MenuItemCreate(
        title="Veggie",
        description="A garden of delight",
        image="pizza1.png",
        price=0.0038,
    )
"""

from typing import Optional

from pydantic import Field

from .common import CamelModel


class MenuItemOut(CamelModel):
    id: int
    title: str
    description: str
    image: str
    price: float


class MenuItemCreate(CamelModel):
    """
    Request model for adding a menu item.

    title and price are required (checked by the menu service so the error
    carries a readable message); price may not be negative.
    """
    title: Optional[str] = None
    description: str = ""
    image: str = ""
    price: Optional[float] = Field(default=None, ge=0)
