"""
Permission Schemas Module
=========================

Pydantic models for permission introspection endpoints.
"""

from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field

from oms.core.permissions import NavigationItem
from oms.models.role_enum import Role


class NavigationItemResponse(BaseModel):
    """Sidebar entry visible to the current role."""

    name: str
    href: str
    permission: str

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_item(cls, item: NavigationItem) -> "NavigationItemResponse":
        return cls(name=item.name, href=item.href, permission=item.permission.value)


class PermissionSummaryResponse(BaseModel):
    """Everything the current role may see."""

    role: Role
    role_display_name: str
    screens: List[str] = Field(default_factory=list)
    navigation: List[NavigationItemResponse] = Field(default_factory=list)
    saddle_modeling: List[NavigationItemResponse] = Field(default_factory=list)


class PermissionCheckResponse(BaseModel):
    """Answer for a single screen or screen/action check."""

    screen: str
    action: Optional[str] = None
    allowed: bool


class PermissionMatrixResponse(BaseModel):
    """Evaluated access for every key and role."""

    roles: List[Role]
    matrix: Dict[str, Dict[str, bool]]
