from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Callable
from uuid import UUID, uuid4

from lms.domain.errors import InvalidArgument, InvalidState
from lms.utils.timezone import utcnow

APPLICANT_NAME_MAX = 200

CENT = Decimal("0.01")
# NUMERIC(18,2)
MONEY_MAX = Decimal("9999999999999999.99")


class LoanStatus(str, Enum):
    ACTIVE = "active"
    PAID = "paid"


def _money(value, field: str) -> Decimal:
    try:
        d = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError):
        raise InvalidArgument(f"{field} must be a number.")
    if not d.is_finite():
        raise InvalidArgument(f"{field} must be a number.")
    if abs(d) > MONEY_MAX:
        raise InvalidArgument(f"{field} is too large.")
    if d != d.quantize(CENT):
        raise InvalidArgument(f"{field} must have at most two decimal places.")
    return d.quantize(CENT)


@dataclass
class Loan:
    """Loan aggregate.

    Only ``create`` and ``make_payment`` may change a loan; both validate
    before touching any field, so a failed call leaves the loan as it was.
    """

    id: UUID
    amount: Decimal
    current_balance: Decimal
    applicant_name: str
    status: LoanStatus
    created_at: datetime
    updated_at: datetime | None = None
    version: int = 0

    @classmethod
    def create(
        cls,
        amount,
        applicant_name: str,
        *,
        new_id: Callable[[], UUID] = uuid4,
        now: Callable[[], datetime] = utcnow,
    ) -> "Loan":
        amt = _money(amount, "Amount")
        if amt <= 0:
            raise InvalidArgument("Amount must be greater than zero.")

        name = (applicant_name or "").strip()
        if not name:
            raise InvalidArgument("Applicant name is required.")
        if len(name) > APPLICANT_NAME_MAX:
            raise InvalidArgument(f"Applicant name must be at most {APPLICANT_NAME_MAX} characters.")

        return cls(
            id=new_id(),
            amount=amt,
            current_balance=amt,
            applicant_name=name,
            status=LoanStatus.ACTIVE,
            created_at=now(),
        )

    def make_payment(self, payment_amount, *, now: Callable[[], datetime] = utcnow) -> None:
        p = _money(payment_amount, "Payment amount")
        if p <= 0:
            raise InvalidArgument("Payment amount must be greater than zero.")
        if self.status != LoanStatus.ACTIVE:
            raise InvalidState("Only active loans can receive payments.")
        if p > self.current_balance:
            raise InvalidArgument("Payment amount cannot exceed current balance.")

        self.current_balance = self.current_balance - p
        self.updated_at = now()
        if self.current_balance == 0:
            self.status = LoanStatus.PAID

