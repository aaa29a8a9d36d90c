"""
Permission Routes Module
========================

Read-only introspection of the screen permission table:
- Screens and navigation visible to the current role
- Single screen or screen/action checks
- The full evaluated matrix for supervisors
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from oms.core.dependencies.auth import get_current_user
from oms.core.dependencies.rbac import require_screen
from oms.core.logging import get_logger
from oms.core.permissions import (
    NAVIGATION_ITEMS,
    SADDLE_MODELING_ITEMS,
    Screen,
    allowed_screens,
    can_perform_action,
    has_screen_permission,
    permission_matrix,
    visible_navigation,
)
from oms.models.role_enum import Role, get_role_display_name
from oms.schemas import (
    CurrentUser,
    ErrorResponse,
    NavigationItemResponse,
    PermissionCheckResponse,
    PermissionMatrixResponse,
    PermissionSummaryResponse,
)

# Initialize logger
logger = get_logger(__name__)


router = APIRouter(
    prefix="/permissions",
    tags=["Permissions"],
    responses={
        401: {"model": ErrorResponse, "description": "Authentication failed"},
        403: {"model": ErrorResponse, "description": "Access forbidden"},
    },
)


@router.get(
    "/me",
    response_model=PermissionSummaryResponse,
    summary="Current Role Permissions",
)
def my_permissions(
    current_user: CurrentUser = Depends(get_current_user),
) -> PermissionSummaryResponse:
    """Screens and navigation entries the current role may use."""
    role = current_user.role
    return PermissionSummaryResponse(
        role=role,
        role_display_name=get_role_display_name(role),
        screens=[screen.value for screen in allowed_screens(role)],
        navigation=[
            NavigationItemResponse.from_item(item)
            for item in visible_navigation(role, NAVIGATION_ITEMS)
        ],
        saddle_modeling=[
            NavigationItemResponse.from_item(item)
            for item in visible_navigation(role, SADDLE_MODELING_ITEMS)
        ],
    )


@router.get(
    "/check/{screen}",
    response_model=PermissionCheckResponse,
    summary="Check Screen Access",
    description="""
    Check a permission key, or a screen prefix combined with an action
    (e.g. ``/permissions/check/ORDER?action=EDIT``). Unknown keys are
    answered with ``allowed: false``.
    """,
)
def check_permission(
    screen: str,
    action: Optional[str] = Query(default=None, max_length=20),
    current_user: CurrentUser = Depends(get_current_user),
) -> PermissionCheckResponse:
    if action:
        allowed = can_perform_action(current_user.role, screen, action)
    else:
        allowed = has_screen_permission(current_user.role, screen)

    logger.debug(
        "permission_checked",
        screen=screen,
        action=action,
        allowed=allowed,
    )
    return PermissionCheckResponse(screen=screen, action=action, allowed=allowed)


@router.get(
    "/matrix",
    response_model=PermissionMatrixResponse,
    summary="Permission Matrix",
    description="Evaluated access for every key and role. Supervisor only.",
)
def get_permission_matrix(
    current_user: CurrentUser = Depends(require_screen(Screen.USER_PERMISSIONS_VIEW)),
) -> PermissionMatrixResponse:
    matrix = permission_matrix()
    return PermissionMatrixResponse(
        roles=list(Role),
        matrix={
            screen.value: {role.value: allowed for role, allowed in row.items()}
            for screen, row in matrix.items()
        },
    )
