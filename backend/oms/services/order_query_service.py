"""
Order Query Service
===================

Builds the enriched order listing from an effective filter set.

Features:
- Exact and substring filters keyed by listing filter names
- Free text search over customer, fitter and supplier names
- Whitelisted sorting
- Capped page size with pagination metadata
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Query, Session

from oms.core.config import settings
from oms.core.enums import SortOrder
from oms.core.exceptions import InvalidFilterError
from oms.core.logging import get_logger
from oms.models.order import EnrichedOrder

# Initialize logger
logger = get_logger(__name__)


SEARCH_TERM_FILTER = "searchTerm"

EXACT_FILTERS = {
    "orderStatus": EnrichedOrder.order_status,
    "fitterUsername": EnrichedOrder.fitter_username,
}

SUBSTRING_FILTERS = {
    "customerName": EnrichedOrder.customer_name,
    "fitterName": EnrichedOrder.fitter_name,
    "supplierName": EnrichedOrder.supplier_name,
}

SORT_COLUMNS = {
    "orderId": EnrichedOrder.order_id,
    "createdAt": EnrichedOrder.created_at,
    "orderStatus": EnrichedOrder.order_status,
    "customerName": EnrichedOrder.customer_name,
    "fitterName": EnrichedOrder.fitter_name,
    "supplierName": EnrichedOrder.supplier_name,
    "urgent": EnrichedOrder.urgent,
}

DEFAULT_SORT = "createdAt"

_TRUE_VALUES = {"true", "1", "yes"}
_FALSE_VALUES = {"false", "0", "no"}

LIKE_ESCAPE = "\\"


def is_empty(value: Any) -> bool:
    """None and blank strings count as "no filter"."""
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def clean_filters(filters: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Copy of ``filters`` without empty values."""
    return {key: value for key, value in (filters or {}).items() if not is_empty(value)}


def parse_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise InvalidFilterError(name, value, "boolean")


def parse_int(name: str, value: Any) -> int:
    if isinstance(value, bool):
        raise InvalidFilterError(name, value, "integer")
    try:
        return int(str(value).strip())
    except ValueError:
        raise InvalidFilterError(name, value, "integer")


def contains_pattern(value: Any) -> str:
    """LIKE pattern matching ``value`` literally anywhere in the column."""
    text = str(value)
    for char in (LIKE_ESCAPE, "%", "_"):
        text = text.replace(char, LIKE_ESCAPE + char)
    return f"%{text}%"


@dataclass
class OrderPage:
    """One page of the order listing."""

    items: List[EnrichedOrder]
    total_items: int
    page: int
    limit: int
    filters: Dict[str, Any] = field(default_factory=dict)

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_items / self.limit) if self.limit else 0

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    def pagination(self) -> Dict[str, Any]:
        """Pagination metadata keyed the way listing clients expect."""
        return {
            "totalItems": self.total_items,
            "totalPages": self.total_pages,
            "currentPage": self.page,
            "itemsPerPage": self.limit,
            "hasNext": self.has_next,
            "hasPrevious": self.has_previous,
        }


class OrderQueryService:
    """
    Query helper for the enriched order listing.

    Usage:
        service = OrderQueryService(db)
        page = service.list_orders({"fitterUsername": "jane.fitter"})
    """

    def __init__(self, db: Session):
        """
        Initialize the query service.

        Args:
            db: Database session
        """
        self.db = db

    def build_query(
        self,
        filters: Optional[Mapping[str, Any]] = None,
        search_term: Optional[str] = None,
    ) -> Query:
        """
        Filtered, unsorted query for the given filter set.

        Args:
            filters: Effective listing filters
            search_term: Free text search, overrides ``searchTerm`` in filters

        Returns:
            SQLAlchemy query

        Raises:
            InvalidFilterError: If a typed filter cannot be parsed
        """
        active = clean_filters(filters)
        term = search_term if not is_empty(search_term) else active.pop(SEARCH_TERM_FILTER, None)
        active.pop(SEARCH_TERM_FILTER, None)

        query = self.db.query(EnrichedOrder)

        for name, value in active.items():
            if name == "orderId":
                query = query.filter(EnrichedOrder.order_id == parse_int(name, value))
            elif name == "urgent":
                query = query.filter(EnrichedOrder.urgent == parse_bool(name, value))
            elif name in EXACT_FILTERS:
                query = query.filter(EXACT_FILTERS[name] == str(value))
            elif name in SUBSTRING_FILTERS:
                pattern = contains_pattern(value)
                query = query.filter(SUBSTRING_FILTERS[name].ilike(pattern, escape=LIKE_ESCAPE))
            else:
                logger.debug("order_filter_ignored", filter=name)

        if not is_empty(term):
            query = query.filter(self._search_clause(str(term).strip()))

        return query

    def list_orders(
        self,
        filters: Optional[Mapping[str, Any]] = None,
        page: int = 1,
        limit: Optional[int] = None,
        order_by: Optional[str] = None,
        order: Optional[str] = SortOrder.DESC.value,
        search_term: Optional[str] = None,
    ) -> OrderPage:
        """
        Fetch one page of orders.

        Args:
            filters: Effective listing filters
            page: 1-based page number
            limit: Page size, capped at ``ORDERS_MAX_PAGE_SIZE``
            order_by: Sort field name, defaults to ``createdAt``
            order: ``asc`` or ``desc``
            search_term: Free text search

        Returns:
            OrderPage with items and totals
        """
        page = max(1, page or 1)
        limit = limit or settings.ORDERS_DEFAULT_PAGE_SIZE
        limit = max(1, min(limit, settings.ORDERS_MAX_PAGE_SIZE))

        query = self.build_query(filters, search_term)
        total = query.count()

        sort_column = SORT_COLUMNS.get(order_by or DEFAULT_SORT)
        if sort_column is None:
            logger.debug("order_sort_ignored", order_by=order_by)
            sort_column = SORT_COLUMNS[DEFAULT_SORT]

        direction = (order or "").lower()
        if direction == SortOrder.ASC.value:
            query = query.order_by(sort_column.asc(), EnrichedOrder.id.asc())
        else:
            query = query.order_by(sort_column.desc(), EnrichedOrder.id.desc())

        items = query.offset((page - 1) * limit).limit(limit).all()

        logger.info(
            "orders_listed",
            total=total,
            page=page,
            limit=limit,
            filters=sorted(clean_filters(filters)),
        )

        return OrderPage(
            items=items,
            total_items=total,
            page=page,
            limit=limit,
            filters=clean_filters(filters),
        )

    @staticmethod
    def _search_clause(term: str):
        pattern = contains_pattern(term)
        clauses = [
            EnrichedOrder.customer_name.ilike(pattern, escape=LIKE_ESCAPE),
            EnrichedOrder.fitter_name.ilike(pattern, escape=LIKE_ESCAPE),
            EnrichedOrder.supplier_name.ilike(pattern, escape=LIKE_ESCAPE),
        ]
        if term.isascii() and term.isdigit():
            clauses.append(EnrichedOrder.order_id == int(term))
        return or_(*clauses)
