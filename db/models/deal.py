"""
db/models/deal.py

Persisted FX deal.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import BigInteger, DateTime, Integer, Numeric, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base, CreatedAtMixin

DEAL_UNIQUE_ID_CONSTRAINT = "uq_fx_deals_deal_unique_id"


class Deal(Base, CreatedAtMixin):
    __tablename__ = "fx_deals"

    # SQLite only autoincrements INTEGER PRIMARY KEY columns.
    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True,
        autoincrement=True,
    )
    deal_unique_id: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Caller-supplied deal identifier",
    )
    from_currency: Mapped[str] = mapped_column(
        String(3),
        nullable=False,
        comment="ISO 4217 ordering currency",
    )
    to_currency: Mapped[str] = mapped_column(
        String(3),
        nullable=False,
        comment="ISO 4217 target currency",
    )
    deal_timestamp: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False)
    deal_amount: Mapped[Decimal] = mapped_column(Numeric(19, 4), nullable=False)

    __table_args__ = (
        UniqueConstraint("deal_unique_id", name=DEAL_UNIQUE_ID_CONSTRAINT),
    )
