"""
Enumeration Module
==================

Defines enumerations used across the application.
"""

from enum import Enum, IntEnum


class UserType(IntEnum):
    """Account type codes stored on the legacy users table."""

    FITTER = 1
    ADMIN = 2
    FACTORY = 3
    CUSTOM_SADDLER = 4


class SortOrder(str, Enum):
    """Sort direction for listings."""

    ASC = "asc"
    DESC = "desc"
