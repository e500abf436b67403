"""Item ORM - a listing owned by its seller until sold.

Invariants:
    - status in {initial, on_sale, sold_out}; transitions gated by core/item_transitions.py
    - price is a positive integer (CHECK constraint)
    - image holds the uploaded bytes verbatim
    - updated_at bumps on every UPDATE (column onupdate), driving listing order

Design Decisions:
    - Image stored in the row (LargeBinary): the blob store is keyed by item id and
      lives in the same transaction as the listing
    - Index on (status, updated_at): on-sale listing and search filter and order by both
"""

from datetime import datetime, timezone

from sqlalchemy import (
    BigInteger, CheckConstraint, DateTime, ForeignKey, Index, Integer, LargeBinary,
    String, Text,
)
from sqlalchemy.orm import Mapped, mapped_column

from marketplace.core.domain_types import ItemStatus
from marketplace.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Item(Base):
    """Item entity - moves initial -> on_sale -> sold_out."""
    __tablename__ = "items"
    __table_args__ = (
        CheckConstraint("price > 0", name="ck_items_price_positive"),
        Index("ix_items_status_updated_at", "status", "updated_at"),
        Index("ix_items_seller_id", "seller_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    price: Mapped[int] = mapped_column(BigInteger, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    category_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("categories.id"), nullable=False,
    )
    seller_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=False,
    )
    image: Mapped[bytes] = mapped_column(LargeBinary, nullable=False, default=b"")
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=ItemStatus.INITIAL.value,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow,
    )
