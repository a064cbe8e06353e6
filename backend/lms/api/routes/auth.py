import logging

from fastapi import APIRouter

from lms.schemas.auth import TokenOut
from lms.core.security import create_access_token

log = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

@router.get("/token", response_model=TokenOut)
def issue_token():
    token, issued, expires = create_access_token()
    log.info("issued client token, expires at %s", expires.isoformat())
    return TokenOut(
        token=token,
        issued_at=issued,
        expires_at=expires,
        expires_in=int((expires - issued).total_seconds()),
    )
