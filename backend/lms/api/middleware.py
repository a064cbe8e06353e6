import logging
from uuid import uuid4

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

log = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "An error occurred while processing your request."


class ExceptionHandlingMiddleware(BaseHTTPMiddleware):
    """Turns any exception that escapes the routers into a 500 response.

    Each incident gets a fresh ``errorId`` that is both logged and returned,
    so a caller's report can be matched to the server-side traceback.
    """

    def __init__(self, app, logger: logging.Logger | None = None):
        super().__init__(app)
        self.log = logger or log

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as e:
            error_id = str(uuid4())
            self.log.error(
                "unhandled exception error_id=%s path=%s method=%s status=500",
                error_id,
                request.url.path,
                request.method,
                exc_info=e,
                extra={"error_id": error_id},
            )
            return JSONResponse(
                status_code=500,
                content={"errorId": error_id, "message": GENERIC_ERROR_MESSAGE, "detail": str(e)},
            )
