"""
Services Package for Pizza Service
==================================

This package contains the resource services. Each one checks the caller
against the authorization policy and then reads or writes the database.

Available Services:
-------------------
- **users**: Registration, login/logout, user administration
- **franchises**: Franchises and stores
- **menu**: The global menu
- **orders**: Order history and order placement
- **fulfillment**: Client for the external pizza factory
- **helpers**: Shared utility functions used across services

Design Philosophy:
------------------
1. **Dependency Injection**: Services receive their database session, the
   caller's principal and (for orders) the factory client as arguments.

2. **No HTTP**: Services raise the errors in pizza_service.errors; the
   application's exception handlers turn them into responses.

3. **Testability**: The factory client can be replaced, or its HTTP call
   patched, without touching application code.

Usage:
------
    from pizza_service.services import users, franchises
    users.register(db, payload)
"""

from . import helpers
from . import users
from . import franchises
from . import menu
from . import fulfillment
from . import orders

__all__ = ["helpers", "users", "franchises", "menu", "fulfillment", "orders"]
