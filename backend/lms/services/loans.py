import logging
from datetime import datetime
from typing import Callable
from uuid import UUID, uuid4

from lms.domain.errors import ConcurrencyConflict, LoanError
from lms.domain.loan import Loan
from lms.repositories.loans import LoanRepository
from lms.schemas.loan import LoanOut
from lms.utils.timezone import utcnow

log = logging.getLogger(__name__)


def to_view(loan: Loan) -> LoanOut:
    return LoanOut(
        id=loan.id,
        amount=loan.amount,
        current_balance=loan.current_balance,
        applicant_name=loan.applicant_name,
        status=loan.status.value,
        created_at=loan.created_at,
        updated_at=loan.updated_at,
    )


class LoanService:
    """Loan use cases on top of a ``LoanRepository``.

    Errors raised by the aggregate or the repository are logged and re-raised
    unchanged; mapping them to responses is the HTTP layer's job.
    """

    def __init__(
        self,
        repository: LoanRepository,
        logger: logging.Logger | None = None,
        clock: Callable[[], datetime] = utcnow,
        id_factory: Callable[[], UUID] = uuid4,
        max_payment_attempts: int = 3,
    ):
        if repository is None:
            raise ValueError("repository is required")
        self.repository = repository
        self.log = logger or log
        self.clock = clock
        self.id_factory = id_factory
        self.max_payment_attempts = max(1, int(max_payment_attempts))

    def create_loan(self, amount, applicant_name: str) -> LoanOut:
        try:
            loan = Loan.create(amount, applicant_name, new_id=self.id_factory, now=self.clock)
            self.repository.add(loan)
        except LoanError as e:
            self.log.warning("rejected loan for applicant %s: %s", applicant_name, e)
            raise
        except Exception:
            self.log.exception("error creating loan for applicant %s", applicant_name)
            raise
        self.log.info("loan %s persisted for applicant %s", loan.id, loan.applicant_name)
        return to_view(loan)

    def get_loan(self, loan_id: UUID) -> LoanOut | None:
        try:
            loan = self.repository.get(loan_id)
        except Exception:
            self.log.exception("error retrieving loan %s", loan_id)
            raise
        return to_view(loan) if loan is not None else None

    def list_loans(self) -> list[LoanOut]:
        try:
            loans = self.repository.list()
        except Exception:
            self.log.exception("error retrieving loans")
            raise
        return [to_view(ln) for ln in loans]

    def make_payment(self, loan_id: UUID, payment_amount) -> LoanOut | None:
        attempt = 0
        while True:
            attempt += 1
            try:
                loan = self.repository.get(loan_id)
                if loan is None:
                    self.log.warning("loan %s not found for payment", loan_id)
                    return None

                previous = loan.current_balance
                loan.make_payment(payment_amount, now=self.clock)
                self.repository.update(loan)
            except ConcurrencyConflict:
                if attempt < self.max_payment_attempts:
                    self.log.warning("payment on loan %s lost a concurrent update, retrying (%d/%d)",
                                     loan_id, attempt, self.max_payment_attempts)
                    continue
                self.log.exception("payment on loan %s kept conflicting after %d attempts", loan_id, attempt)
                raise
            except LoanError as e:
                self.log.warning("rejected payment on loan %s: %s", loan_id, e)
                raise
            except Exception:
                self.log.exception("error processing payment for loan %s", loan_id)
                raise

            self.log.info("payment processed for loan %s: balance %s -> %s", loan_id, previous, loan.current_balance)
            return to_view(loan)
