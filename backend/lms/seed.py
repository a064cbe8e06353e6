import logging
from datetime import datetime
from decimal import Decimal
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session
from lms.core.config import settings
from lms.core.logging import configure_logging
from lms.db.session import SessionLocal
from lms.models.loan import LoanRecord

log = logging.getLogger(__name__)

SEED_CREATED = datetime(2024, 10, 1)
SEED_UPDATED = datetime(2024, 10, 15)

# id, amount, current balance, applicant, status
DEMO_LOANS = [
    ("11111111-1111-1111-1111-111111111111", "1500.00", "1500.00", "Maria Silva", "active"),
    ("22222222-2222-2222-2222-222222222222", "5000.00", "2500.00", "João Santos", "active"),
    ("33333333-3333-3333-3333-333333333333", "3000.00", "0.00", "Ana Costa", "paid"),
    ("44444444-4444-4444-4444-444444444444", "10000.00", "8500.00", "Pedro Oliveira", "active"),
    ("55555555-5555-5555-5555-555555555555", "800.00", "500.00", "Carla Ferreira", "active"),
]

def seed_loans(s: Session) -> int:
    inserted = 0
    for loan_id, amount, balance, name, status in DEMO_LOANS:
        lid = UUID(loan_id)
        existing = s.execute(select(LoanRecord.id).where(LoanRecord.id == lid)).scalar_one_or_none()
        if existing:
            continue
        s.add(
            LoanRecord(
                id=lid,
                amount=Decimal(amount),
                current_balance=Decimal(balance),
                applicant_name=name,
                status=status,
                created_at=SEED_CREATED,
                updated_at=SEED_UPDATED,
                version=0,
            )
        )
        inserted += 1
    s.commit()
    return inserted

def main():
    db = SessionLocal()
    try:
        n = seed_loans(db)
        log.info("seeded %d demo loans", n)
    finally:
        db.close()

if __name__ == "__main__":
    configure_logging(settings.log_level, settings.log_format)
    main()
