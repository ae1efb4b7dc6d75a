"""
Authorization Policy for Pizza Service
======================================

Every protected operation asks this module one question: may this principal
perform this action on this target? The answer is a Decision value, never an
exception and never an HTTP response. Callers translate DENY into 403 and
UNAUTHENTICATED into 401.

Roles:
------
Roles form a closed set of three variants:

- Admin: global administrator
- Franchisee(franchise_id): administers one franchise
- Diner: ordinary customer; every principal is at least a diner

Stored role rows and token claims are converted into these variants at the
boundary by role_from_claim(); unknown role names are rejected there, so the
policy below only ever sees valid roles.

Rules:
------
==================  ==================================================
Action              Allowed when
==================  ==================================================
UPDATE_USER         principal is the target user, or Admin
DELETE_USER         Admin
LIST_USERS          Admin
CREATE_FRANCHISE    Admin
DELETE_FRANCHISE    Admin
LIST_USER_FRANCHISES principal is the target user, or Admin
CREATE_STORE        Admin, or Franchisee of the target franchise
DELETE_STORE        Admin, or Franchisee of the target franchise
ADD_MENU_ITEM       Admin
CREATE_ORDER        any authenticated principal
==================  ==================================================

LIST_USER_FRANCHISES is special: a DENY there is not an error. The franchise
lookup for another user quietly returns an empty list instead (see
visible_franchises), so callers cannot probe who administers what.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple, TypeVar, Union


# =============================================================================
# Roles
# =============================================================================

ADMIN = "admin"
FRANCHISEE = "franchisee"
DINER = "diner"


@dataclass(frozen=True)
class Admin:
    @property
    def name(self) -> str:
        return ADMIN


@dataclass(frozen=True)
class Franchisee:
    franchise_id: int

    @property
    def name(self) -> str:
        return FRANCHISEE


@dataclass(frozen=True)
class Diner:
    @property
    def name(self) -> str:
        return DINER


Role = Union[Admin, Franchisee, Diner]


class InvalidRoleError(ValueError):
    pass


def role_from_claim(claim: Mapping[str, Any]) -> Role:
    """Build a Role from ``{"role": ..., "objectId": ...}``."""
    name = claim.get("role")
    if name == ADMIN:
        return Admin()
    if name == DINER:
        return Diner()
    if name == FRANCHISEE:
        object_id = claim.get("objectId")
        if object_id is None:
            raise InvalidRoleError("franchisee role requires a franchise id")
        return Franchisee(int(object_id))
    raise InvalidRoleError(f"unknown role: {name!r}")


def role_to_claim(role: Role) -> Dict[str, Any]:
    if isinstance(role, Franchisee):
        return {"role": FRANCHISEE, "objectId": role.franchise_id}
    if isinstance(role, Admin):
        return {"role": ADMIN}
    if isinstance(role, Diner):
        return {"role": DINER}
    raise InvalidRoleError(f"not a role: {role!r}")


# =============================================================================
# Principal
# =============================================================================

@dataclass(frozen=True)
class Principal:
    """The authenticated caller. ``roles`` is never empty."""

    id: int
    name: str = ""
    email: str = ""
    roles: Tuple[Role, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if not self.roles:
            object.__setattr__(self, "roles", (Diner(),))

    @property
    def is_admin(self) -> bool:
        return any(isinstance(r, Admin) for r in self.roles)

    @property
    def franchise_ids(self) -> frozenset:
        return frozenset(r.franchise_id for r in self.roles if isinstance(r, Franchisee))

    def administers(self, franchise_id: Optional[int]) -> bool:
        return franchise_id is not None and franchise_id in self.franchise_ids

    def to_claims(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "roles": [role_to_claim(r) for r in self.roles],
        }


# =============================================================================
# Actions, Targets, Decisions
# =============================================================================

class Action(str, Enum):
    UPDATE_USER = "update_user"
    DELETE_USER = "delete_user"
    LIST_USERS = "list_users"
    CREATE_FRANCHISE = "create_franchise"
    DELETE_FRANCHISE = "delete_franchise"
    LIST_USER_FRANCHISES = "list_user_franchises"
    CREATE_STORE = "create_store"
    DELETE_STORE = "delete_store"
    ADD_MENU_ITEM = "add_menu_item"
    CREATE_ORDER = "create_order"


class Decision(str, Enum):
    ALLOW = "allow"
    DENY = "deny"
    UNAUTHENTICATED = "unauthenticated"

    @property
    def allowed(self) -> bool:
        return self is Decision.ALLOW


@dataclass(frozen=True)
class UserTarget:
    user_id: int


@dataclass(frozen=True)
class FranchiseTarget:
    """franchise_id is None when the franchise does not exist."""
    franchise_id: Optional[int]


Target = Union[UserTarget, FranchiseTarget, None]


def _admin_only(principal: Principal, target: Target) -> bool:
    return principal.is_admin


def _self_or_admin(principal: Principal, target: Target) -> bool:
    if principal.is_admin:
        return True
    return isinstance(target, UserTarget) and target.user_id == principal.id


def _franchise_admin(principal: Principal, target: Target) -> bool:
    if principal.is_admin:
        return True
    return isinstance(target, FranchiseTarget) and principal.administers(target.franchise_id)


def _any_principal(principal: Principal, target: Target) -> bool:
    return True


_RULES: Dict[Action, Callable[[Principal, Target], bool]] = {
    Action.UPDATE_USER: _self_or_admin,
    Action.DELETE_USER: _admin_only,
    Action.LIST_USERS: _admin_only,
    Action.CREATE_FRANCHISE: _admin_only,
    Action.DELETE_FRANCHISE: _admin_only,
    Action.LIST_USER_FRANCHISES: _self_or_admin,
    Action.CREATE_STORE: _franchise_admin,
    Action.DELETE_STORE: _franchise_admin,
    Action.ADD_MENU_ITEM: _admin_only,
    Action.CREATE_ORDER: _any_principal,
}

assert set(_RULES) == set(Action), "every action needs a rule"


def can_act(principal: Optional[Principal], action: Action, target: Target = None) -> Decision:
    """Decide whether ``principal`` may perform ``action`` on ``target``."""
    if principal is None:
        return Decision.UNAUTHENTICATED
    if _RULES[action](principal, target):
        return Decision.ALLOW
    return Decision.DENY


T = TypeVar("T")


def visible_franchises(principal: Optional[Principal], user_id: int, franchises: Iterable[T]) -> List[T]:
    """Franchises administered by ``user_id`` as seen by ``principal``.

    Anyone other than the user themself or an Admin sees an empty list.
    """
    if can_act(principal, Action.LIST_USER_FRANCHISES, UserTarget(user_id)).allowed:
        return list(franchises)
    return []
