"""FastAPI application setup."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from roster import __version__
from roster.api.models import ErrorResponse
from roster.api.routes import health, students
from roster.config import RosterConfig, load_config
from roster.logging import redact_url
from roster.service import (
    ConflictError,
    StorageError,
    StudentService,
    ValidationError,
)
from roster.service.validation import check_raw_body
from roster.store import StudentStore

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str, error: str | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(message=message, error=error).model_dump(exclude_none=True),
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Builds the store and the service on startup and closes the store on
    shutdown. A service already placed on ``app.state`` is used as is.
    """
    if getattr(app.state, "student_service", None) is not None:
        yield
        return

    config: RosterConfig = app.state.config
    # Startup
    logger.info("Opening student store at %s", redact_url(config.database_url))
    store = StudentStore(config.database_url)
    app.state.student_service = StudentService(store)

    try:
        yield
    finally:
        # Shutdown
        app.state.student_service = None
        store.close()
        logger.info("Student store closed")


def register_exception_handlers(app: FastAPI) -> None:
    """Map service errors to JSON error responses."""

    @app.exception_handler(ValidationError)
    async def validation_error_handler(_request: Request, exc: ValidationError) -> JSONResponse:
        return _error(status.HTTP_400_BAD_REQUEST, exc.message)

    @app.exception_handler(ConflictError)
    async def conflict_error_handler(_request: Request, exc: ConflictError) -> JSONResponse:
        return _error(status.HTTP_400_BAD_REQUEST, exc.message)

    @app.exception_handler(StorageError)
    async def storage_error_handler(_request: Request, exc: StorageError) -> JSONResponse:
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, exc.message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        # Field rules report before type errors for any JSON object body.
        if isinstance(exc.body, dict):
            try:
                check_raw_body(exc.body, creating=request.method == "POST")
            except ValidationError as rule_error:
                return _error(status.HTTP_400_BAD_REQUEST, rule_error.message)

        details = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        return _error(status.HTTP_400_BAD_REQUEST, "Invalid request body", details)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(_request: Request, exc: Exception) -> JSONResponse:
        logger.error("Unhandled exception: %s", exc, exc_info=exc)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def create_app(
    config: RosterConfig | None = None,
    service: StudentService | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        config: Runtime settings. Defaults to the ROSTER_* environment.
        service: Prebuilt service to serve; when given, the lifespan neither
                 opens nor closes a store.
    """
    app = FastAPI(
        title="Roster API",
        description="REST API for managing student records",
        version=__version__,
        lifespan=lifespan,
    )

    # Store config for lifespan manager
    app.state.config = config or load_config()
    app.state.student_service = service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(students.router, prefix="/api/v1")
    app.include_router(health.router, prefix="/api/v1")

    return app
