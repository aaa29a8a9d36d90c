"""
User Schemas Module
===================

Pydantic models for the authenticated principal and its profile response.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from oms.models.role_enum import Role


class CurrentUser(BaseModel):
    """
    Authenticated principal built from access token claims.

    ``username`` may be missing on tokens issued for incomplete accounts;
    consumers must treat that as "no username".
    """

    id: int
    username: Optional[str] = None
    role: Role

    model_config = ConfigDict(frozen=True)


class RoleFlagsResponse(BaseModel):
    """Convenience role flags for clients."""

    is_admin: bool
    is_supervisor: bool
    is_fitter: bool
    is_supplier: bool
    is_user: bool


class CurrentUserResponse(BaseModel):
    """Response for the current user endpoint."""

    id: int
    username: Optional[str] = None
    role: Role
    role_display_name: str = Field(..., examples=["Fitter"])
    flags: RoleFlagsResponse
