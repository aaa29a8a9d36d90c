"""
Order Filter Service
====================

Scopes order listings for fitters.

A fitter's listing is restricted to their own orders by injecting
``fitterUsername`` into the filter set. Every other role, including ADMIN
and SUPERVISOR, sees the caller's filters untouched. A filter value the
caller already supplied is never overridden.
"""

from collections.abc import Mapping
from typing import Any, Callable, Dict, Optional

from oms.core.logging import get_logger
from oms.models.role_enum import Role

# Initialize logger
logger = get_logger(__name__)


FITTER_USERNAME_FILTER = "fitterUsername"


def _read(source: Any, field: str) -> Any:
    """Read a field from a mapping or an object."""
    if source is None:
        return None
    if isinstance(source, Mapping):
        return source.get(field)
    return getattr(source, field, None)


def _is_supplied(value: Any) -> bool:
    # Blank strings count as not supplied
    if isinstance(value, str):
        return bool(value.strip())
    return bool(value)


def apply_fitter_filter(
    filters: Optional[Mapping[str, Any]],
    current_user: Any,
) -> Dict[str, Any]:
    """
    Return the effective filter set for an order listing.

    The caller's mapping is copied, never mutated. ``fitterUsername`` is
    set only when the role is exactly FITTER, the username is non-empty and
    the caller did not already supply a value.

    Args:
        filters: Caller supplied filters, may be None
        current_user: Object or mapping exposing ``role`` and ``username``

    Returns:
        New filter dict
    """
    effective: Dict[str, Any] = dict(filters or {})

    role = Role.parse(_read(current_user, "role"))
    if role is not Role.FITTER:
        return effective

    username = _read(current_user, "username")
    if not isinstance(username, str) or not username.strip():
        logger.debug("fitter_filter_skipped", reason="missing_username")
        return effective

    supplied = effective.get(FITTER_USERNAME_FILTER)
    if _is_supplied(supplied):
        logger.debug("fitter_filter_skipped", reason="filter_supplied", supplied=supplied)
        return effective

    effective[FITTER_USERNAME_FILTER] = username
    logger.info("fitter_filter_applied", username=username)
    return effective


def apply_fitter_filter_from_lookup(
    filters: Optional[Mapping[str, Any]],
    lookup: Callable[[], Any],
) -> Dict[str, Any]:
    """
    Resolve the current user through ``lookup`` and apply the fitter filter.

    A lookup that raises is logged and the listing proceeds with the
    caller's filters only.

    Args:
        filters: Caller supplied filters, may be None
        lookup: Zero-argument callable returning the current user

    Returns:
        New filter dict
    """
    try:
        current_user = lookup()
    except Exception as e:
        logger.warning(
            "fitter_filter_lookup_failed",
            error=str(e),
            error_type=type(e).__name__,
        )
        return dict(filters or {})

    return apply_fitter_filter(filters, current_user)
