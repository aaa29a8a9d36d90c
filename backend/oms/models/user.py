"""
User Model
==========

Legacy account table. The role is not stored: it is resolved at login
from ``user_type``, ``is_supervisor`` and the presence of a fitter profile.

Database Indexes:
- Primary key: id
- Unique index: username
"""

from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import (
    Boolean,
    DateTime,
    Integer,
    String,
)
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship, Mapped, mapped_column

from oms.db.base import Base

if TYPE_CHECKING:
    from oms.models.fitter import Fitter


class User(Base):
    """
    User entity representing an account that can sign in.

    Attributes:
        id: Integer primary key
        username: Unique login name
        email: Contact address
        hashed_password: Argon2 hashed password
        user_type: Legacy account type code (see ``UserType``)
        is_supervisor: Supervisor flag, outranks ``user_type``
        is_active: Account active status
        created_at: Account creation timestamp
        updated_at: Last update timestamp
    """

    __tablename__ = "users"

    def __init__(self, **kwargs):
        """Initialize User with Python-level defaults."""
        if 'is_active' not in kwargs:
            kwargs['is_active'] = True
        if 'is_supervisor' not in kwargs:
            kwargs['is_supervisor'] = False
        super().__init__(**kwargs)

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    username: Mapped[str] = mapped_column(
        String(150),
        unique=True,
        nullable=False,
        index=True,
    )

    email: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
    )

    hashed_password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    # ==========================
    # Role Inputs
    # ==========================
    user_type: Mapped[Optional[int]] = mapped_column(
        Integer,
        nullable=True,
    )

    is_supervisor: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
    )

    fitter_profile: Mapped[Optional["Fitter"]] = relationship(
        "Fitter",
        back_populates="user",
        uselist=False,
    )

    # ==========================
    # Account Status
    # ==========================
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username={self.username}, user_type={self.user_type})>"

    @property
    def has_fitter_profile(self) -> bool:
        return self.fitter_profile is not None
