"""
Role Resolution Service
=======================

Maps legacy account fields and token claims onto a single Role.

Resolution order at login:
1. Supervisor flag
2. Account type (admin, factory, custom saddler)
3. Fitter profile
4. Plain user

Backend role names are matched case-insensitively here, once, at login.
Everything downstream only sees Role members or exact ``ROLE_*`` claims.
"""

from typing import Any, Iterable, Optional

from oms.core.enums import UserType
from oms.core.logging import get_logger
from oms.models.role_enum import Role

# Initialize logger
logger = get_logger(__name__)


# Highest first
ROLE_PRIORITY: tuple = (
    Role.SUPERVISOR,
    Role.ADMIN,
    Role.FITTER,
    Role.SUPPLIER,
    Role.USER,
)

# Lower-case backend role names
BACKEND_ROLE_NAMES = {
    "supervisor": Role.SUPERVISOR,
    "admin": Role.ADMIN,
    "administrator": Role.ADMIN,
    "fitter": Role.FITTER,
    "factory": Role.SUPPLIER,
    "customsaddler": Role.SUPPLIER,
    "custom_saddler": Role.SUPPLIER,
    "user": Role.USER,
}


def role_from_backend_name(name: Any) -> Role:
    """
    Map a backend role name onto a Role.

    Case and surrounding whitespace are ignored. Unknown or missing
    names fall back to USER.

    Args:
        name: Backend role name, e.g. ``"customsaddler"``

    Returns:
        Matching Role, USER when the name is not recognised
    """
    if not isinstance(name, str):
        return Role.USER

    role = BACKEND_ROLE_NAMES.get(name.strip().lower())
    if role is None:
        logger.info("backend_role_unmapped", role_name=name)
        return Role.USER
    return role


def backend_role_name(
    user_type: Optional[int],
    is_supervisor: Any,
    has_fitter_profile: bool,
) -> str:
    """Backend role name for legacy account fields."""
    if is_supervisor == 1:
        return "supervisor"

    if user_type == UserType.ADMIN:
        return "admin"

    if user_type == UserType.FACTORY:
        return "factory"

    if user_type == UserType.CUSTOM_SADDLER:
        return "customsaddler"

    if has_fitter_profile:
        # Covers user_type FITTER and accounts whose type was never set
        return "fitter"

    return "user"


def resolve_role(
    user_type: Optional[int],
    is_supervisor: Any,
    has_fitter_profile: bool,
) -> Role:
    """
    Resolve the session role from legacy account fields.

    Args:
        user_type: Account type code, may be None
        is_supervisor: Supervisor flag (bool or 0/1)
        has_fitter_profile: Whether a fitter profile exists for the account

    Returns:
        Resolved Role, USER when nothing else applies
    """
    return role_from_backend_name(
        backend_role_name(user_type, is_supervisor, has_fitter_profile)
    )


def role_from_claim(claim: Any) -> Optional[Role]:
    """Role for a single exact ``ROLE_*`` claim, or None when unrecognised."""
    return Role.parse(claim)


def primary_role(claims: Optional[Iterable[Any]]) -> Role:
    """
    Pick the highest ranking role from a list of claims.

    Args:
        claims: Token role claims, e.g. ``["ROLE_FITTER"]``

    Returns:
        Highest recognised role, USER when none is recognised
    """
    found = recognised_roles(claims)
    for role in ROLE_PRIORITY:
        if role in found:
            return role
    return Role.USER


def recognised_roles(claims: Optional[Iterable[Any]]) -> set:
    """Set of roles named by ``claims``; unrecognised entries are skipped."""
    if not isinstance(claims, (list, tuple, set, frozenset)):
        claims = [claims] if isinstance(claims, str) else []

    found = set()
    for claim in claims:
        role = role_from_claim(claim)
        if role is None:
            logger.debug("role_claim_ignored", claim=str(claim))
            continue
        found.add(role)
    return found
