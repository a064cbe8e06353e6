import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Response

from lms.api.deps import current_user, loan_service
from lms.domain.errors import NotFound
from lms.schemas.loan import LoanCreate, LoanOut, PaymentCreate
from lms.services.loans import LoanService

log = logging.getLogger(__name__)

router = APIRouter(prefix="/loans", tags=["loans"], dependencies=[Depends(current_user)])


@router.get("", response_model=list[LoanOut])
def list_loans(svc: LoanService = Depends(loan_service)):
    loans = svc.list_loans()
    log.info("retrieved %d loans", len(loans))
    return loans


@router.post("", response_model=LoanOut, status_code=201)
def create_loan(body: LoanCreate, response: Response, svc: LoanService = Depends(loan_service)):
    ln = svc.create_loan(body.amount, body.applicant_name)
    response.headers["Location"] = f"/loans/{ln.id}"
    log.info("loan %s created for applicant %s", ln.id, ln.applicant_name)
    return ln


@router.get("/{loan_id}", response_model=LoanOut)
def get_loan(loan_id: UUID, svc: LoanService = Depends(loan_service)):
    ln = svc.get_loan(loan_id)
    if ln is None:
        raise NotFound(f"Loan with ID {loan_id} not found.")
    return ln


@router.post("/{loan_id}/payment", response_model=LoanOut)
def make_payment(loan_id: UUID, body: PaymentCreate, svc: LoanService = Depends(loan_service)):
    ln = svc.make_payment(loan_id, body.payment_amount)
    if ln is None:
        raise NotFound(f"Loan with ID {loan_id} not found.")
    log.info("payment of %s applied to loan %s, balance now %s", body.payment_amount, loan_id, ln.current_balance)
    return ln
