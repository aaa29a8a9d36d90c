"""
Enriched Order Model
====================

Denormalised order row used by the order listing: the order joined with
its customer, fitter and supplier names.
"""

from datetime import datetime, UTC
from typing import Optional

from sqlalchemy import Boolean, DateTime, Integer, String, Index
from sqlalchemy.orm import Mapped, mapped_column

from oms.db.base import Base


class EnrichedOrder(Base):
    """Order listing row."""

    __tablename__ = "enriched_orders"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    order_id: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        index=True,
    )

    order_status: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    customer_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    fitter_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    fitter_username: Mapped[Optional[str]] = mapped_column(String(150), nullable=True)
    supplier_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    urgent: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
    )

    __table_args__ = (
        Index("ix_enriched_orders_fitter_username", "fitter_username"),
        Index("ix_enriched_orders_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return (
            f"<EnrichedOrder(order_id={self.order_id}, status={self.order_status}, "
            f"fitter={self.fitter_username})>"
        )
