"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from onboarding.api.v1 import admin, onboarding
from onboarding.core.config import settings
from onboarding.core.logging import get_logger, setup_logging
from onboarding.db.session import dispose_engine, init_db
from onboarding.pipeline.engine import UNEXPECTED_ERROR_MESSAGE
from onboarding.pipeline.errors import SubmissionError

logger = get_logger("onboarding.api")

INVALID_REQUEST_MESSAGE = "Invalid request body."


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle hooks."""
    setup_logging(settings.effective_log_level, json_output=settings.APP_ENV != "development")
    startup_logger = get_logger("startup")

    missing = settings.missing_mail_settings()
    if missing:
        if settings.FAIL_FAST_ON_MISSING_CONFIG:
            settings.require_mail_settings()
        startup_logger.warning("Mail settings incomplete", missing=missing)

    await init_db()
    startup_logger.info(
        "Application starting",
        env=settings.APP_ENV,
        mail_mode=str(settings.GRAPH_MAIL_MODE),
        form_variant=str(settings.FORM_VARIANT),
        persistence=settings.persistence_enabled,
    )
    yield
    await dispose_engine()
    startup_logger.info("Application shutting down")


app = FastAPI(
    title="HTS Onboarding API",
    description="Employee onboarding intake, HR notification and admin records",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Restrict in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(SubmissionError)
async def submission_error_handler(request: Request, exc: SubmissionError) -> JSONResponse:
    logger.info(
        "Request rejected",
        path=request.url.path,
        status_code=exc.status_code,
        error=exc.message,
        step_name=exc.step_name,
        execution_id=exc.execution_id,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message, **exc.details},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Unparseable or mis-shaped bodies never reach the form rules
    details = [
        {"loc": list(error["loc"]), "msg": error["msg"], "type": error["type"]}
        for error in exc.errors()
    ]
    logger.info("Request body rejected", path=request.url.path, errors=details)
    return JSONResponse(
        status_code=400,
        content={"error": INVALID_REQUEST_MESSAGE, "details": details},
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error", path=request.url.path, error=str(exc))
    return JSONResponse(status_code=500, content={"error": UNEXPECTED_ERROR_MESSAGE})


API_PREFIX = "/api/v1"
app.include_router(onboarding.router, prefix=API_PREFIX)
app.include_router(admin.router, prefix=API_PREFIX)


@app.get("/health", tags=["Health"])
async def health_check() -> dict[str, str]:
    """Public health-check endpoint."""
    return {"status": "ok", "env": settings.APP_ENV}
