"""
Schemas Package Initialization
==============================

Exports all Pydantic schemas for the application.

Usage:
    from oms.schemas import LoginRequest, TokenResponse, CurrentUser
"""

# Auth schemas
from oms.schemas.auth import (
    LoginRequest,
    TokenResponse,
    ErrorResponse,
)

# User schemas
from oms.schemas.user import (
    CurrentUser,
    CurrentUserResponse,
    RoleFlagsResponse,
)

# Permission schemas
from oms.schemas.permission import (
    NavigationItemResponse,
    PermissionSummaryResponse,
    PermissionCheckResponse,
    PermissionMatrixResponse,
)

# Order schemas
from oms.schemas.order import (
    EnrichedOrderResponse,
    PaginationMeta,
    HydraView,
    EnrichedOrderCollection,
)

__all__ = [
    # Auth
    "LoginRequest",
    "TokenResponse",
    "ErrorResponse",
    # User
    "CurrentUser",
    "CurrentUserResponse",
    "RoleFlagsResponse",
    # Permission
    "NavigationItemResponse",
    "PermissionSummaryResponse",
    "PermissionCheckResponse",
    "PermissionMatrixResponse",
    # Order
    "EnrichedOrderResponse",
    "PaginationMeta",
    "HydraView",
    "EnrichedOrderCollection",
]
