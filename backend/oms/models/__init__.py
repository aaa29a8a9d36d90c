"""
Model Package Initialization
============================

Ensures models are properly registered when imported by the application.

All SQLAlchemy ORM models are exported from this module.

Usage:
    from oms.models import User, Fitter, EnrichedOrder, Role
"""

from .user import User
from .fitter import Fitter
from .order import EnrichedOrder
from .role_enum import Role

__all__ = [
    "User",
    "Fitter",
    "EnrichedOrder",
    "Role",
]
