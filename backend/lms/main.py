from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from lms.core.config import settings
from lms.core.logging import configure_logging
from lms.api.errors import register_error_handlers
from lms.api.middleware import ExceptionHandlingMiddleware
from lms.api.routes.auth import router as auth_router
from lms.api.routes.loans import router as loans_router

app = FastAPI(
    title="LMS Loan Management API",
    version="1.0.0",
    description="Create loans, list them and record payments against their balance.",
)

register_error_handlers(app)
app.add_middleware(ExceptionHandlingMiddleware)

def add_cors(app: FastAPI, raw_origins: str | None) -> None:
    # no configured origins means any origin, without credentials
    origins = [o.strip() for o in (raw_origins or "").split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins or ["*"],
        allow_credentials=bool(origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

add_cors(app, settings.cors_origins)

@app.get("/health")
@app.get("/api/health")
def health():
    return {"status": "ok"}

app.include_router(auth_router)
app.include_router(loans_router)

@app.on_event("startup")
async def _configure_logging():
    configure_logging(settings.log_level, settings.log_format)
