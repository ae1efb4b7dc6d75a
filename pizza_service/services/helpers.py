"""
Helper Functions for Pizza Service
==================================

Shared utilities used by the resource services.

Key Functions:
--------------
- enforce: Ask the authorization policy and raise the matching error
- name_filter_pattern: Turn a ``*`` wildcard filter into a SQL LIKE pattern
- page_window: Offset/limit for a page, fetching one extra row for ``more``
- is_blank: True for None or whitespace-only strings

Usage:
------
    from pizza_service.services.helpers import enforce

    enforce(principal, Action.CREATE_FRANCHISE, None, "unable to create a franchise")
"""

from typing import Optional, Tuple

from ..authorization import Action, Decision, Principal, Target, can_act
from ..errors import AuthenticationError, AuthorizationError


def enforce(principal: Optional[Principal], action: Action, target: Target, message: str) -> None:
    """Raise 401/403 unless the policy allows ``action``; 403 carries ``message``."""
    decision = can_act(principal, action, target)
    if decision is Decision.UNAUTHENTICATED:
        raise AuthenticationError()
    if decision is Decision.DENY:
        raise AuthorizationError(message)


def is_blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


def name_filter_pattern(name: Optional[str]) -> Optional[str]:
    """``"pizza*"`` -> ``"pizza%"``; ``None``, ``""`` and ``"*"`` mean no filter."""
    if not name or name == "*":
        return None
    escaped = name.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return escaped.replace("*", "%")


def page_window(page: int, limit: int) -> Tuple[int, int]:
    """Return (offset, rows to fetch) for a zero-based page."""
    page = max(page, 0)
    limit = max(limit, 1)
    return page * limit, limit + 1
