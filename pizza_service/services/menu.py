"""
Menu Service for Pizza Service
==============================

The menu is a single global list shared by every franchise. Anyone may read
it; only admins may add to it.
"""

import logging
from typing import List

from sqlalchemy.orm import Session

from ..authorization import Action, Principal
from ..errors import ValidationError
from ..models import MenuItem
from ..schemas.menu import MenuItemCreate, MenuItemOut
from .helpers import enforce, is_blank


logger = logging.getLogger(__name__)


def get_menu(db: Session) -> List[MenuItemOut]:
    items = db.query(MenuItem).order_by(MenuItem.id).all()
    return [MenuItemOut.model_validate(i) for i in items]


def add_menu_item(db: Session, principal: Principal, payload: MenuItemCreate) -> List[MenuItemOut]:
    """Add an item and return the whole updated menu."""
    if is_blank(payload.title) or payload.price is None:
        raise ValidationError("title and price are required")

    enforce(principal, Action.ADD_MENU_ITEM, None, "unable to add menu item")

    item = MenuItem(
        title=payload.title.strip(),
        description=payload.description,
        image=payload.image,
        price=payload.price,
    )
    db.add(item)
    db.commit()
    logger.info("Added menu item %s (%s)", item.id, item.title)
    return get_menu(db)
