import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import CheckConstraint, DateTime, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column
from lms.db.base import Base
from lms.db.types import Money

class LoanRecord(Base):
    __tablename__ = "loans"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)

    amount: Mapped[Decimal] = mapped_column(Money())
    current_balance: Mapped[Decimal] = mapped_column(Money())
    applicant_name: Mapped[str] = mapped_column(String(200))
    status: Mapped[str] = mapped_column(String(20))

    created_at: Mapped[datetime] = mapped_column(DateTime, index=True)
    updated_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    version: Mapped[int] = mapped_column(Integer, default=0, server_default="0")

    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_loans_amount_positive"),
        CheckConstraint("current_balance >= 0 AND current_balance <= amount", name="ck_loans_balance_range"),
    )
