from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jwt import PyJWTError
from sqlalchemy.orm import Session
from lms.db.session import SessionLocal
from lms.core.config import settings
from lms.core.security import decode_token
from lms.repositories.loans import SqlAlchemyLoanRepository
from lms.services.loans import LoanService

bearer = HTTPBearer(auto_error=False)

def db():
    s = SessionLocal()
    try:
        yield s
    finally:
        s.close()

def current_user(creds: HTTPAuthorizationCredentials | None = Depends(bearer)):
    if creds is None:
        raise HTTPException(status_code=401, detail="not_authenticated", headers={"WWW-Authenticate": "Bearer"})
    try:
        return decode_token(creds.credentials)
    except PyJWTError:
        raise HTTPException(status_code=401, detail="invalid_token", headers={"WWW-Authenticate": "Bearer"})

def loan_service(s: Session = Depends(db)) -> LoanService:
    return LoanService(
        SqlAlchemyLoanRepository(s),
        max_payment_attempts=settings.payment_max_attempts,
    )
