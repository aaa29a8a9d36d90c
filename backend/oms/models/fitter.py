"""
Fitter Model
============

Fitter profile attached to a user account. An account with a profile
signs in as FITTER unless its account type or supervisor flag ranks higher.
"""

from typing import TYPE_CHECKING, Optional

from sqlalchemy import Boolean, ForeignKey, Integer, String
from sqlalchemy.orm import relationship, Mapped, mapped_column

from oms.db.base import Base

if TYPE_CHECKING:
    from oms.models.user import User


class Fitter(Base):
    """Saddle fitter profile."""

    __tablename__ = "fitters"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
        index=True,
    )

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    country: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True,
    )

    is_active: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False,
    )

    user: Mapped["User"] = relationship(
        "User",
        back_populates="fitter_profile",
    )

    def __repr__(self) -> str:
        return f"<Fitter(id={self.id}, user_id={self.user_id}, name={self.name})>"
