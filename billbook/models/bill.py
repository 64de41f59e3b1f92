"""Bill model."""

import datetime
import uuid
from decimal import Decimal

from sqlalchemy import CheckConstraint, Date, Index, Numeric, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from billbook.models.base import Base, SoftDeleteMixin, TimestampMixin


class Bill(Base, TimestampMixin, SoftDeleteMixin):
    __tablename__ = "bills"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)  # identity-provider subject
    type: Mapped[str] = mapped_column(String(10), nullable=False)  # income, expense
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    category: Mapped[str] = mapped_column(String(32), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    date: Mapped[datetime.date] = mapped_column(Date, nullable=False)

    __table_args__ = (
        Index("idx_bills_user_date", "user_id", "date"),
        CheckConstraint("amount > 0", name="ck_bills_amount_positive"),
        CheckConstraint("type IN ('income', 'expense')", name="ck_bills_type"),
    )
