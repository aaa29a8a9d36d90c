"""
Order Schemas Module
====================

Pydantic models for the enriched order listing. Field names are served
in camelCase to match the listing filters.
"""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class EnrichedOrderResponse(BaseModel):
    """A single order listing row."""

    id: int
    order_id: int
    order_status: Optional[str] = None
    customer_name: Optional[str] = None
    fitter_name: Optional[str] = None
    fitter_username: Optional[str] = None
    supplier_name: Optional[str] = None
    urgent: bool = False
    created_at: Optional[datetime] = None

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class PaginationMeta(BaseModel):
    """Pagination metadata for a listing page."""

    total_items: int
    total_pages: int
    current_page: int
    items_per_page: int
    has_next: bool
    has_previous: bool

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class HydraView(BaseModel):
    """Navigation links for a collection page."""

    id: str = Field(..., alias="@id")
    first: str = Field(..., alias="hydra:first")
    last: str = Field(..., alias="hydra:last")
    next: Optional[str] = Field(default=None, alias="hydra:next")
    previous: Optional[str] = Field(default=None, alias="hydra:previous")

    model_config = ConfigDict(populate_by_name=True)


class EnrichedOrderCollection(BaseModel):
    """Hydra style order collection."""

    members: List[EnrichedOrderResponse] = Field(default_factory=list, alias="hydra:member")
    total_items: int = Field(..., alias="hydra:totalItems")
    view: HydraView = Field(..., alias="hydra:view")
    pagination: PaginationMeta

    model_config = ConfigDict(populate_by_name=True)
