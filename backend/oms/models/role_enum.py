"""
Role Enumeration Module
=======================

Defines all valid roles in the system.

Security Purpose:
- Prevents arbitrary role injection
- Prevents frontend role manipulation
- Unknown role strings parse to None and are denied everywhere
"""

from enum import Enum
from typing import Any, Optional


ROLE_CLAIM_PREFIX = "ROLE_"


class Role(str, Enum):
    """
    System-wide allowed roles.

    SUPPLIER covers both the factory and custom saddler account types.
    """

    USER = "USER"
    FITTER = "FITTER"
    SUPPLIER = "SUPPLIER"
    ADMIN = "ADMIN"
    SUPERVISOR = "SUPERVISOR"

    @property
    def claim(self) -> str:
        """Token claim form, e.g. ``ROLE_FITTER``."""
        return f"{ROLE_CLAIM_PREFIX}{self.value}"

    @property
    def display_name(self) -> str:
        return ROLE_DISPLAY_NAMES[self]

    @classmethod
    def parse(cls, value: Any) -> Optional["Role"]:
        """
        Interpret a Role member or its exact token claim.

        Only ``ROLE_<NAME>`` exactly as issued is recognised. Bare names,
        other casings, padding and legacy backend names yield None; those
        are mapped once at login by the role service.

        Args:
            value: Candidate role value

        Returns:
            Matching Role or None
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        return ROLES_BY_CLAIM.get(value)


ROLES_BY_CLAIM = {role.claim: role for role in Role}

ROLE_DISPLAY_NAMES = {
    Role.SUPERVISOR: "Supervisor",
    Role.ADMIN: "Administrator",
    Role.FITTER: "Fitter",
    Role.SUPPLIER: "Factory",
    Role.USER: "User",
}


def get_role_display_name(role: Any) -> str:
    """
    Human readable name for a role.

    Returns ``"Unknown"`` for anything that is not a recognised role.
    """
    parsed = Role.parse(role)
    if parsed is None:
        return "Unknown"
    return parsed.display_name
