from datetime import datetime, timedelta
from decimal import Decimal
from random import Random
from uuid import UUID

import pytest

from lms.domain.errors import InvalidArgument, InvalidState
from lms.domain.loan import Loan, LoanStatus


class _Clock:
    def __init__(self, start: datetime):
        self.t = start

    def __call__(self) -> datetime:
        self.t = self.t + timedelta(seconds=1)
        return self.t


def _mk_loan(amount="1000.00", name="Pedro", clock=None) -> Loan:
    return Loan.create(Decimal(amount), name, now=clock or _Clock(datetime(2026, 1, 1)))


def _snapshot(loan: Loan):
    return (loan.current_balance, loan.status, loan.updated_at, loan.version)


def test_create_starts_active_with_full_balance():
    loan = _mk_loan("1000.00")

    assert isinstance(loan.id, UUID)
    assert loan.amount == Decimal("1000.00")
    assert loan.current_balance == loan.amount
    assert loan.status == LoanStatus.ACTIVE
    assert loan.created_at == datetime(2026, 1, 1, 0, 0, 1)
    assert loan.updated_at is None
    assert loan.version == 0


def test_create_uses_injected_id_factory():
    fixed = UUID("11111111-1111-1111-1111-111111111111")
    loan = Loan.create(Decimal("10"), "Ana", new_id=lambda: fixed)
    assert loan.id == fixed


def test_create_assigns_distinct_ids():
    assert _mk_loan().id != _mk_loan().id


@pytest.mark.parametrize("amount", [Decimal("0"), Decimal("-100"), Decimal("-0.01"), -1, "NaN", "Infinity", "abc", None])
def test_create_rejects_non_positive_or_non_numeric_amount(amount):
    with pytest.raises(InvalidArgument):
        Loan.create(amount, "Pedro")


@pytest.mark.parametrize("name", ["", "   ", "\t\n", None])
def test_create_rejects_blank_applicant_name(name):
    with pytest.raises(InvalidArgument, match="Applicant name is required"):
        Loan.create(Decimal("100"), name)


def test_create_rejects_applicant_name_over_200_chars():
    Loan.create(Decimal("100"), "x" * 200)
    with pytest.raises(InvalidArgument):
        Loan.create(Decimal("100"), "x" * 201)


def test_create_strips_applicant_name():
    assert _mk_loan(name="  Maria Silva ").applicant_name == "Maria Silva"


def test_pay_off_scenario():
    clock = _Clock(datetime(2026, 1, 1))
    loan = _mk_loan("1000", clock=clock)

    loan.make_payment(Decimal("300"), now=clock)
    assert loan.current_balance == Decimal("700")
    assert loan.status == LoanStatus.ACTIVE
    first_update = loan.updated_at
    assert first_update is not None

    loan.make_payment(Decimal("700"), now=clock)
    assert loan.current_balance == 0
    assert loan.status == LoanStatus.PAID
    assert loan.updated_at > first_update

    with pytest.raises(InvalidState):
        loan.make_payment(Decimal("1"), now=clock)
    assert loan.current_balance == 0
    assert loan.status == LoanStatus.PAID


@pytest.mark.parametrize("payment", [Decimal("0"), Decimal("-5"), "bogus"])
def test_payment_must_be_positive(payment):
    loan = _mk_loan()
    before = _snapshot(loan)
    with pytest.raises(InvalidArgument):
        loan.make_payment(payment)
    assert _snapshot(loan) == before


def test_overpayment_rejected_and_loan_unchanged():
    loan = _mk_loan("100.00")
    loan.make_payment(Decimal("40.00"))
    before = _snapshot(loan)

    with pytest.raises(InvalidArgument, match="exceed"):
        loan.make_payment(Decimal("60.01"))
    assert _snapshot(loan) == before


@pytest.mark.parametrize("payment", [Decimal("0.01"), Decimal("1"), Decimal("1000000")])
def test_paid_loan_rejects_any_positive_payment(payment):
    loan = _mk_loan("50")
    loan.make_payment(Decimal("50"))
    before = _snapshot(loan)

    with pytest.raises(InvalidState):
        loan.make_payment(payment)
    assert _snapshot(loan) == before


def test_non_positive_payment_on_paid_loan_is_invalid_argument():
    loan = _mk_loan("50")
    loan.make_payment(Decimal("50"))
    with pytest.raises(InvalidArgument):
        loan.make_payment(Decimal("0"))


def test_randomized_payments_keep_invariants():
    rng = Random(20261019)

    for _ in range(200):
        amount = Decimal(rng.randint(1, 500_000)) / 100
        loan = _mk_loan(str(amount))

        for _ in range(rng.randint(1, 15)):
            bal = loan.current_balance
            if bal > 0 and rng.random() < 0.8:
                p = Decimal(rng.randint(1, int(bal * 100))) / 100
            else:
                p = bal + Decimal(rng.randint(1, 1000)) / 100

            before = _snapshot(loan)
            try:
                loan.make_payment(p)
            except (InvalidArgument, InvalidState):
                assert _snapshot(loan) == before
                continue

            assert loan.current_balance == bal - p
            assert (loan.status == LoanStatus.PAID) == (loan.current_balance == 0)

        assert Decimal("0") <= loan.current_balance <= loan.amount
        assert (loan.status == LoanStatus.PAID) == (loan.current_balance == 0)


@pytest.mark.parametrize("amount", [Decimal("0.001"), Decimal("0.005"), Decimal("10.999"), "1.2345"])
def test_create_rejects_sub_cent_amounts(amount):
    with pytest.raises(InvalidArgument, match="two decimal places"):
        Loan.create(amount, "Ana")


def test_create_rejects_amount_beyond_storage_precision():
    Loan.create(Decimal("9999999999999999.99"), "Ana")
    with pytest.raises(InvalidArgument, match="too large"):
        Loan.create(Decimal("10000000000000000.00"), "Ana")


def test_amount_normalized_to_cents():
    loan = Loan.create(Decimal("1.500"), "Ana")
    assert loan.amount == Decimal("1.50")
    assert loan.amount.as_tuple().exponent == -2


@pytest.mark.parametrize("payment", [Decimal("0.005"), Decimal("0.001"), Decimal("0.999")])
def test_sub_cent_payment_rejected_and_loan_unchanged(payment):
    loan = _mk_loan("1.00")
    before = _snapshot(loan)
    with pytest.raises(InvalidArgument, match="two decimal places"):
        loan.make_payment(payment)
    assert _snapshot(loan) == before
