import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from lms.domain.errors import ConcurrencyConflict, InvalidArgument, InvalidState, LoanError, NotFound

log = logging.getLogger(__name__)

STATUS_BY_ERROR: dict[type[LoanError], int] = {
    InvalidArgument: 400,
    InvalidState: 400,
    NotFound: 404,
    ConcurrencyConflict: 409,
}


def status_for(exc: LoanError) -> int:
    for cls in type(exc).__mro__:
        if cls in STATUS_BY_ERROR:
            return STATUS_BY_ERROR[cls]
    return 400


async def loan_error_handler(request: Request, exc: LoanError):
    code = status_for(exc)
    log.warning("%s %s -> %d: %s", request.method, request.url.path, code, exc)
    return JSONResponse(status_code=code, content={"message": str(exc)})


async def validation_error_handler(request: Request, exc: RequestValidationError):
    log.warning("%s %s -> 400: invalid request", request.method, request.url.path)
    return JSONResponse(
        status_code=400,
        content={
            "message": "One or more validation errors occurred.",
            "errors": jsonable_encoder(exc.errors(), custom_encoder={Exception: str}),
        },
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(LoanError, loan_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
