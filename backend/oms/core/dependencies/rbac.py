"""
Role-Based Access Control (RBAC) Dependencies Module
=====================================================

Role hierarchy checks and FastAPI dependencies for authorization.

Features:
- Role hierarchy (SUPERVISOR > ADMIN > FITTER, SUPPLIER > USER)
- Single-role checks apply the hierarchy, role lists are literal membership
- Screen permission enforcement
- Security logging for denied access

Usage:
    @router.get("/orders")
    def orders(user: CurrentUser = Depends(require_screen(Screen.ORDERS))):
        ...
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Mapping

from fastapi import Depends, HTTPException, status, Request

from oms.core.dependencies.auth import get_current_user
from oms.core.logging import get_logger, security_logger
from oms.core.permissions import Screen, has_screen_permission
from oms.models.role_enum import Role
from oms.schemas.user import CurrentUser

# Initialize logger
logger = get_logger(__name__)


# =====================================
# Role Hierarchy
# =====================================

# Roles each role satisfies when a single role is required
ROLE_INHERITANCE: Mapping[Role, frozenset] = MappingProxyType({
    Role.USER: frozenset({Role.USER}),
    Role.FITTER: frozenset({Role.FITTER, Role.USER}),
    Role.SUPPLIER: frozenset({Role.SUPPLIER, Role.USER}),
    Role.ADMIN: frozenset({Role.ADMIN, Role.FITTER, Role.SUPPLIER, Role.USER}),
    Role.SUPERVISOR: frozenset(Role),
})

_ROLE_COLLECTIONS = (list, tuple, set, frozenset)


def has_role(current_role: Any, required: Any) -> bool:
    """
    Check the current role against a required role or a list of roles.

    A single required role applies the hierarchy: SUPERVISOR satisfies every
    role, ADMIN satisfies ADMIN, FITTER, SUPPLIER and USER, and every role
    satisfies USER.

    A list of roles is literal membership with no hierarchy, so
    ``has_role(Role.ADMIN, [Role.USER, Role.FITTER])`` is False.

    Args:
        current_role: Role or exact ``ROLE_*`` claim, may be None
        required: A role or a list/tuple/set of roles

    Returns:
        True if the requirement is met
    """
    current = Role.parse(current_role)
    if current is None:
        return False

    if isinstance(required, _ROLE_COLLECTIONS):
        return any(Role.parse(candidate) is current for candidate in required)

    target = Role.parse(required)
    if target is None:
        return False
    return target in ROLE_INHERITANCE[current]


def has_any_role(current_role: Any, roles: Any) -> bool:
    """
    True when the hierarchy check passes for at least one role.

    Unlike the list form of ``has_role`` each entry is checked singly,
    so ADMIN passes ``[Role.USER, Role.FITTER]``.
    """
    if not isinstance(roles, _ROLE_COLLECTIONS):
        return False
    return any(has_role(current_role, role) for role in roles)


@dataclass(frozen=True)
class RoleFlags:
    """Convenience flags derived from a role."""

    is_admin: bool = False
    is_supervisor: bool = False
    is_fitter: bool = False
    is_supplier: bool = False
    is_user: bool = False

    @classmethod
    def from_role(cls, role: Any) -> "RoleFlags":
        current = Role.parse(role)
        if current is None:
            return cls()
        return cls(
            is_admin=current in (Role.ADMIN, Role.SUPERVISOR),
            is_supervisor=current is Role.SUPERVISOR,
            is_fitter=current is Role.FITTER,
            is_supplier=current is Role.SUPPLIER,
            is_user=current is Role.USER,
        )


# =====================================
# Denial Helper
# =====================================

def _deny(request: Request, user: CurrentUser, required: list, detail: str) -> HTTPException:
    security_logger.log_permission_denied(
        user_id=str(user.id),
        role=user.role.value,
        resource=request.url.path,
        action=request.method,
        required=required,
    )
    return HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail=detail,
    )


# =====================================
# Requirement Dependencies
# =====================================

def require_screen(screen: Screen) -> Callable:
    """
    Create a dependency that requires access to a screen or action key.

    Args:
        screen: Permission key to check

    Returns:
        Dependency function

    Usage:
        @router.get("/permissions/matrix")
        def matrix(user = Depends(require_screen(Screen.USER_PERMISSIONS_VIEW))):
            ...
    """
    async def screen_checker(
        request: Request,
        current_user: CurrentUser = Depends(get_current_user),
    ) -> CurrentUser:
        if not has_screen_permission(current_user.role, screen):
            raise _deny(
                request,
                current_user,
                required=[screen.value],
                detail="Insufficient permissions for this action",
            )
        return current_user

    return screen_checker


def require_role(*allowed_roles: Role) -> Callable:
    """
    Create a dependency that requires one of the listed roles exactly.

    No hierarchy is applied, matching the list form of ``has_role``.

    Args:
        *allowed_roles: Roles that are allowed access

    Returns:
        Dependency function
    """
    async def role_checker(
        request: Request,
        current_user: CurrentUser = Depends(get_current_user),
    ) -> CurrentUser:
        if not has_role(current_user.role, list(allowed_roles)):
            raise _deny(
                request,
                current_user,
                required=[r.value for r in allowed_roles],
                detail="Insufficient permissions for this action",
            )
        return current_user

    return role_checker


def require_role_or_higher(minimum_role: Role) -> Callable:
    """
    Create a dependency that requires a role or any role above it.

    Args:
        minimum_role: Role that must be satisfied through the hierarchy

    Returns:
        Dependency function
    """
    async def role_checker(
        request: Request,
        current_user: CurrentUser = Depends(get_current_user),
    ) -> CurrentUser:
        if not has_role(current_user.role, minimum_role):
            raise _deny(
                request,
                current_user,
                required=[minimum_role.value],
                detail="Insufficient permissions for this action",
            )
        return current_user

    return role_checker
