"""
Screen Permission Module
========================

Static screen and action permission table with its evaluator.

Features:
- Closed set of screen/action keys
- Read-only role table built once at import
- SUPERVISOR inherits every screen granted to ADMIN
- Fail-closed evaluation (unknown role or key is denied, nothing raises)

Usage:
    if has_screen_permission(user.role, Screen.ORDERS):
        ...
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from oms.models.role_enum import Role


class Screen(str, Enum):
    """Permission keys for navigation screens and per-resource actions."""

    # Navigation
    DASHBOARD = "DASHBOARD"
    ORDERS = "ORDERS"
    CUSTOMERS = "CUSTOMERS"
    FITTERS = "FITTERS"
    REPORTS = "REPORTS"

    # Saddle modeling
    SADDLE_MODELING = "SADDLE_MODELING"
    BRANDS = "BRANDS"
    MODELS = "MODELS"
    LEATHER_TYPES = "LEATHER_TYPES"
    OPTIONS = "OPTIONS"
    EXTRAS = "EXTRAS"
    PRESETS = "PRESETS"
    SUPPLIERS = "SUPPLIERS"

    # Account management
    ACCOUNT_MANAGEMENT = "ACCOUNT_MANAGEMENT"
    USER_MANAGEMENT = "USER_MANAGEMENT"
    WAREHOUSE_MANAGEMENT = "WAREHOUSE_MANAGEMENT"
    USER_PERMISSIONS_VIEW = "USER_PERMISSIONS_VIEW"
    ACCESS_FILTER_GROUPS = "ACCESS_FILTER_GROUPS"
    WAREHOUSES = "WAREHOUSES"
    COUNTRY_MANAGERS = "COUNTRY_MANAGERS"
    SUPPLIERS_MANAGEMENT = "SUPPLIERS_MANAGEMENT"

    # Order actions
    ORDER_CREATE = "ORDER_CREATE"
    ORDER_EDIT = "ORDER_EDIT"
    ORDER_DELETE = "ORDER_DELETE"
    ORDER_APPROVE = "ORDER_APPROVE"
    ORDER_VIEW = "ORDER_VIEW"

    # Customer actions
    CUSTOMER_CREATE = "CUSTOMER_CREATE"
    CUSTOMER_EDIT = "CUSTOMER_EDIT"
    CUSTOMER_DELETE = "CUSTOMER_DELETE"

    # Fitter actions
    FITTER_CREATE = "FITTER_CREATE"
    FITTER_EDIT = "FITTER_EDIT"
    FITTER_DELETE = "FITTER_DELETE"

    # Supplier actions
    SUPPLIER_CREATE = "SUPPLIER_CREATE"
    SUPPLIER_EDIT = "SUPPLIER_EDIT"
    SUPPLIER_DELETE = "SUPPLIER_DELETE"

    # Saddle stock
    REPAIRS = "REPAIRS"
    MY_SADDLE_STOCK = "MY_SADDLE_STOCK"
    AVAILABLE_SADDLE_STOCK = "AVAILABLE_SADDLE_STOCK"
    ALL_SADDLE_STOCK = "ALL_SADDLE_STOCK"

    # User actions
    USER_CREATE = "USER_CREATE"
    USER_EDIT = "USER_EDIT"
    USER_DELETE = "USER_DELETE"
    USER_VIEW = "USER_VIEW"

    # Warehouse actions
    WAREHOUSE_CREATE = "WAREHOUSE_CREATE"
    WAREHOUSE_EDIT = "WAREHOUSE_EDIT"
    WAREHOUSE_DELETE = "WAREHOUSE_DELETE"
    WAREHOUSE_VIEW = "WAREHOUSE_VIEW"

    @classmethod
    def parse(cls, value: Any) -> Optional["Screen"]:
        """Exact key lookup. Returns None for anything outside the table."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value)
        except ValueError:
            return None


class Permission(str, Enum):
    """Actions that combine with a screen prefix, e.g. ORDER + EDIT."""

    VIEW = "VIEW"
    CREATE = "CREATE"
    EDIT = "EDIT"
    DELETE = "DELETE"
    APPROVE = "APPROVE"

    @classmethod
    def parse(cls, value: Any) -> Optional["Permission"]:
        """Exact action lookup, so ``delete`` is not DELETE."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value)
        except ValueError:
            return None


# =====================================
# Permission Table
# =====================================

ALL_ROLES = frozenset(Role)
_STAFF = frozenset({Role.ADMIN, Role.SUPERVISOR})
_SUPERVISOR_ONLY = frozenset({Role.SUPERVISOR})
_ORDERING = frozenset({Role.USER, Role.FITTER, Role.ADMIN, Role.SUPERVISOR})
_FITTING = frozenset({Role.FITTER, Role.ADMIN, Role.SUPERVISOR})
_MODELING = frozenset({Role.USER, Role.ADMIN, Role.SUPERVISOR})

SCREEN_PERMISSIONS: Mapping[Screen, frozenset] = MappingProxyType({
    # Navigation
    Screen.DASHBOARD: ALL_ROLES,
    Screen.ORDERS: _ORDERING,
    Screen.CUSTOMERS: _FITTING,
    Screen.FITTERS: _STAFF,
    Screen.REPORTS: _STAFF,

    # Saddle modeling
    Screen.SADDLE_MODELING: _MODELING,
    Screen.BRANDS: _MODELING,
    Screen.MODELS: _MODELING,
    Screen.LEATHER_TYPES: _MODELING,
    Screen.OPTIONS: _MODELING,
    Screen.EXTRAS: _MODELING,
    Screen.PRESETS: _MODELING,
    Screen.SUPPLIERS: frozenset({Role.SUPPLIER, Role.ADMIN, Role.SUPERVISOR}),

    # Account management
    Screen.ACCOUNT_MANAGEMENT: _SUPERVISOR_ONLY,
    Screen.USER_MANAGEMENT: _SUPERVISOR_ONLY,
    Screen.WAREHOUSE_MANAGEMENT: _SUPERVISOR_ONLY,
    Screen.USER_PERMISSIONS_VIEW: _SUPERVISOR_ONLY,
    Screen.ACCESS_FILTER_GROUPS: _SUPERVISOR_ONLY,
    Screen.WAREHOUSES: _SUPERVISOR_ONLY,
    Screen.COUNTRY_MANAGERS: _SUPERVISOR_ONLY,
    Screen.SUPPLIERS_MANAGEMENT: _SUPERVISOR_ONLY,

    # Order actions
    Screen.ORDER_CREATE: _ORDERING,
    Screen.ORDER_EDIT: _STAFF,
    Screen.ORDER_DELETE: _STAFF,
    Screen.ORDER_APPROVE: _STAFF,
    Screen.ORDER_VIEW: ALL_ROLES,

    # Customer actions
    Screen.CUSTOMER_CREATE: _FITTING,
    Screen.CUSTOMER_EDIT: _FITTING,
    Screen.CUSTOMER_DELETE: _STAFF,

    # Fitter actions
    Screen.FITTER_CREATE: _STAFF,
    Screen.FITTER_EDIT: _STAFF,
    Screen.FITTER_DELETE: _STAFF,

    # Supplier actions
    Screen.SUPPLIER_CREATE: _STAFF,
    Screen.SUPPLIER_EDIT: _STAFF,
    Screen.SUPPLIER_DELETE: _STAFF,

    # Saddle stock
    Screen.REPAIRS: _ORDERING,
    Screen.MY_SADDLE_STOCK: frozenset({Role.FITTER}),
    Screen.AVAILABLE_SADDLE_STOCK: frozenset({Role.FITTER}),
    Screen.ALL_SADDLE_STOCK: _STAFF,

    # User actions
    Screen.USER_CREATE: _SUPERVISOR_ONLY,
    Screen.USER_EDIT: _SUPERVISOR_ONLY,
    Screen.USER_DELETE: _SUPERVISOR_ONLY,
    Screen.USER_VIEW: _SUPERVISOR_ONLY,

    # Warehouse actions
    Screen.WAREHOUSE_CREATE: _SUPERVISOR_ONLY,
    Screen.WAREHOUSE_EDIT: _SUPERVISOR_ONLY,
    Screen.WAREHOUSE_DELETE: _SUPERVISOR_ONLY,
    Screen.WAREHOUSE_VIEW: _SUPERVISOR_ONLY,
})


# =====================================
# Evaluators
# =====================================

def has_screen_permission(role: Any, screen: Any) -> bool:
    """
    Check whether a role may access a screen or perform an action key.

    A missing or unrecognised role, and any key outside the table, is denied.
    SUPERVISOR is granted every key that lists ADMIN.

    Args:
        role: Current role (Role, exact ``ROLE_*`` claim or None)
        screen: Permission key (Screen or its string value)

    Returns:
        True if access is allowed
    """
    current = Role.parse(role)
    key = Screen.parse(screen)
    if current is None or key is None:
        return False

    allowed = SCREEN_PERMISSIONS[key]
    if current in allowed:
        return True
    return current is Role.SUPERVISOR and Role.ADMIN in allowed


def can_perform_action(role: Any, screen: Any, action: Any) -> bool:
    """
    Check an action against a screen prefix.

    ``screen`` is combined with ``action`` into ``<SCREEN>_<ACTION>``. When
    that key does not exist, VIEW falls back to the screen key itself and
    every other action is denied.

    Args:
        role: Current role
        screen: Screen prefix such as ``ORDER`` or a full key such as ``REPORTS``
        action: Permission or its string value

    Returns:
        True if the action is allowed
    """
    verb = Permission.parse(action)
    prefix = screen.value if isinstance(screen, Screen) else screen
    if verb is None or not isinstance(prefix, str) or not prefix:
        return False

    combined = Screen.parse(f"{prefix}_{verb.value}")
    if combined is not None:
        return has_screen_permission(role, combined)

    if verb is Permission.VIEW:
        return has_screen_permission(role, prefix)

    return False


def allowed_screens(role: Any) -> List[Screen]:
    """Every key the role may access, in table order."""
    return [screen for screen in Screen if has_screen_permission(role, screen)]


def permission_matrix() -> Dict[Screen, Dict[Role, bool]]:
    """Evaluated access for every key and every role."""
    return {
        screen: {role: has_screen_permission(role, screen) for role in Role}
        for screen in Screen
    }


# =====================================
# Navigation
# =====================================

@dataclass(frozen=True)
class NavigationItem:
    """Sidebar entry guarded by a screen permission."""

    name: str
    href: str
    permission: Screen


NAVIGATION_ITEMS: Tuple[NavigationItem, ...] = (
    NavigationItem("Dashboard", "/dashboard", Screen.DASHBOARD),
    NavigationItem("Orders", "/orders", Screen.ORDERS),
    NavigationItem("Customers", "/customers", Screen.CUSTOMERS),
    NavigationItem("Fitters", "/fitters", Screen.FITTERS),
    NavigationItem("Reports", "/reports", Screen.REPORTS),
)

SADDLE_MODELING_ITEMS: Tuple[NavigationItem, ...] = (
    NavigationItem("Brands", "/brands", Screen.BRANDS),
    NavigationItem("Models", "/models", Screen.MODELS),
    NavigationItem("Leather Types", "/leathertypes", Screen.LEATHER_TYPES),
    NavigationItem("Options", "/options", Screen.OPTIONS),
    NavigationItem("Extras", "/extras", Screen.EXTRAS),
    NavigationItem("Presets", "/presets", Screen.PRESETS),
    NavigationItem("Suppliers", "/suppliers", Screen.SUPPLIERS),
)


def visible_navigation(
    role: Any,
    items: Iterable[NavigationItem] = NAVIGATION_ITEMS,
) -> List[NavigationItem]:
    """Navigation items whose permission the role holds."""
    return [item for item in items if has_screen_permission(role, item.permission)]
