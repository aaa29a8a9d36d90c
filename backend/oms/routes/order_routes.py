"""
Order Routes Module
===================

Enriched order listing.

Fitters only ever see their own orders: the fitter filter is injected
from the authenticated principal before the query runs.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from oms.core.dependencies.rbac import require_screen
from oms.core.enums import SortOrder
from oms.core.exceptions import exception_to_http_exception, InvalidFilterError
from oms.core.logging import get_logger
from oms.core.permissions import Screen
from oms.db.session import get_db
from oms.schemas import (
    CurrentUser,
    EnrichedOrderCollection,
    EnrichedOrderResponse,
    ErrorResponse,
    HydraView,
    PaginationMeta,
)
from oms.services.order_filter_service import apply_fitter_filter
from oms.services.order_query_service import OrderPage, OrderQueryService

# Initialize logger
logger = get_logger(__name__)


router = APIRouter(
    prefix="/api/v1",
    tags=["Orders"],
    responses={
        401: {"model": ErrorResponse, "description": "Authentication failed"},
        403: {"model": ErrorResponse, "description": "Access forbidden"},
        422: {"model": ErrorResponse, "description": "Invalid filter"},
    },
)


def _page_link(request: Request, page: int) -> str:
    url = request.url.include_query_params(page=page)
    return f"{url.path}?{url.query}"


def _hydra_view(request: Request, result: OrderPage) -> HydraView:
    last_page = max(result.total_pages, 1)
    return HydraView(
        id=_page_link(request, result.page),
        first=_page_link(request, 1),
        last=_page_link(request, last_page),
        next=_page_link(request, result.page + 1) if result.has_next else None,
        previous=_page_link(request, result.page - 1) if result.has_previous else None,
    )


@router.get(
    "/enriched-orders",
    response_model=EnrichedOrderCollection,
    response_model_by_alias=True,
    summary="List Enriched Orders",
    description="""
    Paginated order listing with filters, free text search and sorting.

    For FITTER sessions the listing is restricted to the fitter's own
    orders unless ``fitterUsername`` is supplied explicitly.
    """,
)
def list_enriched_orders(
    request: Request,
    page: int = Query(default=1, ge=1),
    limit: Optional[int] = Query(default=None, ge=1),
    order_by: Optional[str] = Query(default=None, alias="orderBy"),
    order: SortOrder = Query(default=SortOrder.DESC),
    search_term: Optional[str] = Query(default=None, alias="searchTerm"),
    order_id: Optional[str] = Query(default=None, alias="orderId"),
    order_status: Optional[str] = Query(default=None, alias="orderStatus"),
    customer_name: Optional[str] = Query(default=None, alias="customerName"),
    fitter_name: Optional[str] = Query(default=None, alias="fitterName"),
    fitter_username: Optional[str] = Query(default=None, alias="fitterUsername"),
    supplier_name: Optional[str] = Query(default=None, alias="supplierName"),
    urgent: Optional[str] = Query(default=None),
    current_user: CurrentUser = Depends(require_screen(Screen.ORDERS)),
    db: Session = Depends(get_db),
) -> EnrichedOrderCollection:
    filters = {
        "orderId": order_id,
        "orderStatus": order_status,
        "customerName": customer_name,
        "fitterName": fitter_name,
        "fitterUsername": fitter_username,
        "supplierName": supplier_name,
        "urgent": urgent,
    }
    effective = apply_fitter_filter(filters, current_user)

    try:
        result = OrderQueryService(db).list_orders(
            filters=effective,
            page=page,
            limit=limit,
            order_by=order_by,
            order=order.value,
            search_term=search_term,
        )
    except InvalidFilterError as e:
        raise exception_to_http_exception(e)

    return EnrichedOrderCollection(
        members=[EnrichedOrderResponse.model_validate(item) for item in result.items],
        total_items=result.total_items,
        view=_hydra_view(request, result),
        pagination=PaginationMeta(**result.pagination()),
    )
