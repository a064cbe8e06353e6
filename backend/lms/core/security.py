from datetime import datetime, timedelta, timezone
from uuid import uuid4

import jwt

from lms.core.config import settings

CLIENT_NAME = "Angular-Client"
CLIENT_ROLE = "Client"
CLIENT_TYPE = "angular"

def create_access_token(sub: str = CLIENT_NAME, role: str = CLIENT_ROLE, now: datetime | None = None) -> tuple[str, datetime, datetime]:
    issued = now or datetime.now(timezone.utc)
    expires = issued + timedelta(hours=settings.jwt_expires_hours)
    payload = {
        "sub": sub,
        "role": role,
        "client_type": CLIENT_TYPE,
        "jti": str(uuid4()),
        "iat": int(issued.timestamp()),
        "exp": int(expires.timestamp()),
        "iss": settings.jwt_issuer,
        "aud": settings.jwt_audience,
    }
    token = jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_alg)
    return token, issued, expires

def decode_token(token: str) -> dict:
    return jwt.decode(
        token,
        settings.jwt_secret,
        algorithms=[settings.jwt_alg],
        issuer=settings.jwt_issuer,
        audience=settings.jwt_audience,
        options={"require": ["exp", "iat", "sub"]},
    )
