"""
Order Service for Pizza Service
===============================

Order history and order placement.

Key Functions:
--------------
- list_orders: The caller's orders, ten per page
- create_order: Store an order, then have the factory fulfill it

Order Placement:
----------------
1. The policy is consulted (any authenticated diner may order).
2. Every item must reference an existing menu item (404 otherwise).
3. The order and its items are committed.
4. The order is sent to the factory once.
5. On factory failure the request fails with 500 and the report URL, but
   the committed order stays: it is the record that the diner asked.
"""

import logging

from sqlalchemy.orm import Session

from .. import config
from ..authorization import Action, Principal
from ..errors import NotFoundError, UpstreamError, ValidationError
from ..models import DinerOrder, MenuItem, OrderItem
from ..schemas.orders import OrderCreate, OrderCreatedResponse, OrderListResponse, OrderOut
from .fulfillment import FactoryClient
from .helpers import enforce


logger = logging.getLogger(__name__)


def list_orders(db: Session, principal: Principal, page: str = "1") -> OrderListResponse:
    """The caller's orders on a 1-based page; the page is echoed as given."""
    try:
        number = int(page)
    except (TypeError, ValueError):
        number = 0
    if number < 1:
        raise ValidationError("invalid page")

    size = config.ORDERS_PAGE_SIZE
    orders = (
        db.query(DinerOrder)
        .filter(DinerOrder.diner_id == principal.id)
        .order_by(DinerOrder.id)
        .offset((number - 1) * size)
        .limit(size)
        .all()
    )
    return OrderListResponse(
        diner_id=principal.id,
        orders=[OrderOut.model_validate(o) for o in orders],
        page=page,
    )


def create_order(
    db: Session,
    principal: Principal,
    payload: OrderCreate,
    factory: FactoryClient,
) -> OrderCreatedResponse:
    enforce(principal, Action.CREATE_ORDER, None, "unable to create an order")

    menu_ids = {item.menu_id for item in payload.items}
    if menu_ids:
        known = {row[0] for row in db.query(MenuItem.id).filter(MenuItem.id.in_(menu_ids))}
        missing = sorted(menu_ids - known)
        if missing:
            raise NotFoundError(f"unknown menu item {missing[0]}")

    order = DinerOrder(
        diner_id=principal.id,
        franchise_id=payload.franchise_id,
        store_id=payload.store_id,
    )
    for item in payload.items:
        order.items.append(OrderItem(
            menu_id=item.menu_id,
            description=item.description,
            price=item.price,
        ))
    db.add(order)
    db.commit()
    db.refresh(order)
    logger.info("Stored order %s for diner %s with %d item(s)", order.id, principal.id, len(order.items))

    order_out = OrderOut.model_validate(order)
    result = factory.fulfill(principal, order_out)
    if not result.ok:
        raise UpstreamError(
            "Failed to fulfill order at factory",
            followLinkToEndChaos=result.report_url,
        )

    return OrderCreatedResponse(
        order=order_out,
        jwt=result.jwt,
        follow_link_to_end_chaos=result.report_url,
    )
