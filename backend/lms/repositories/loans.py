from typing import Protocol
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from lms.domain.errors import ConcurrencyConflict
from lms.domain.loan import Loan, LoanStatus
from lms.models.loan import LoanRecord


class LoanRepository(Protocol):
    def get(self, loan_id: UUID) -> Loan | None: ...

    def list(self) -> list[Loan]: ...

    def add(self, loan: Loan) -> Loan: ...

    def update(self, loan: Loan) -> Loan: ...


def _to_domain(row: LoanRecord) -> Loan:
    return Loan(
        id=row.id,
        amount=row.amount,
        current_balance=row.current_balance,
        applicant_name=row.applicant_name,
        status=LoanStatus(row.status),
        created_at=row.created_at,
        updated_at=row.updated_at,
        version=row.version,
    )


class SqlAlchemyLoanRepository:
    """Loans stored in the ``loans`` table.

    Rows are read into detached ``Loan`` aggregates; writes go through
    explicit INSERT/UPDATE statements so nothing relies on session change
    tracking. ``update`` only succeeds when the stored version still matches
    the one the aggregate was loaded with.
    """

    def __init__(self, s: Session):
        self.s = s

    def get(self, loan_id: UUID) -> Loan | None:
        row = self.s.execute(select(LoanRecord).where(LoanRecord.id == loan_id)).scalar_one_or_none()
        return _to_domain(row) if row is not None else None

    def list(self) -> list[Loan]:
        rows = self.s.execute(
            select(LoanRecord).order_by(LoanRecord.created_at.desc(), LoanRecord.id.asc())
        ).scalars().all()
        return [_to_domain(r) for r in rows]

    def add(self, loan: Loan) -> Loan:
        self.s.add(
            LoanRecord(
                id=loan.id,
                amount=loan.amount,
                current_balance=loan.current_balance,
                applicant_name=loan.applicant_name,
                status=loan.status.value,
                created_at=loan.created_at,
                updated_at=loan.updated_at,
                version=loan.version,
            )
        )
        try:
            self.s.commit()
        except Exception:
            self.s.rollback()
            raise
        return loan

    def update(self, loan: Loan) -> Loan:
        res = self.s.execute(
            update(LoanRecord)
            .where(LoanRecord.id == loan.id, LoanRecord.version == loan.version)
            .values(
                current_balance=loan.current_balance,
                status=loan.status.value,
                updated_at=loan.updated_at,
                version=LoanRecord.version + 1,
            )
            .execution_options(synchronize_session=False)
        )
        if res.rowcount != 1:
            self.s.rollback()
            raise ConcurrencyConflict(f"Loan {loan.id} was modified by another request.")
        try:
            self.s.commit()
        except Exception:
            self.s.rollback()
            raise
        loan.version += 1
        return loan
