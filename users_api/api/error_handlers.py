"""Error Handlers: global exception handlers that turn every failure into the JSON error envelope.

Invariants:
    - UsersApiError → structured JSON with code, message, category, severity
    - RequestValidationError → 400 with field-level details
    - Unmatched route or method (Starlette 404/405) → 404 with the available endpoint list
    - Exception (catch-all) → 500; exception text included only in development

Design Decisions:
    - Four-layer handler: domain, framework validation, routing fallback, catch-all
    - Settings passed in at registration so tests can flip the environment per app
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from users_api.api.routes.root import list_endpoints
from users_api.config import Settings
from users_api.core.errors import (
    ErrorCategory, ErrorSeverity, FieldError, RequestValidationFailedError,
    RouteNotFoundError, UsersApiError,
)

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI, settings: Settings) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_users_api_error_handler(app)
    _register_validation_error_handler(app)
    _register_route_fallback_handler(app)
    _register_generic_error_handler(app, settings)


def _register_users_api_error_handler(app: FastAPI) -> None:

    @app.exception_handler(UsersApiError)
    async def users_api_error_handler(request: Request, exc: UsersApiError):
        """Handle all domain errors raised by routes and the store."""
        log = logger.error if exc.http_status >= 500 else logger.warning
        log(
            f"{type(exc).__name__}: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return _error_response(exc)


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle FastAPI parameter validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return _error_response(_from_request_validation_error(exc))


def _register_route_fallback_handler(app: FastAPI) -> None:

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException,
    ):
        """Unmatched paths and methods become a 404 listing what does exist."""
        if exc.status_code in (
            status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED,
        ):
            error = RouteNotFoundError(
                request.method, request.url.path, list_endpoints(request.app),
            )
            logger.info(error.message, extra={"error_code": error.code})
            return _error_response(error)
        return _error_response(UsersApiError(
            str(exc.detail), "HTTP_ERROR", ErrorCategory.INTERNAL,
            ErrorSeverity.ERROR, exc.status_code,
        ))


def _register_generic_error_handler(app: FastAPI, settings: Settings) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all: exception text only leaves the process in development."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        error = UsersApiError(
            "An unexpected error occurred", "INTERNAL_ERROR",
            ErrorCategory.INTERNAL, ErrorSeverity.CRITICAL,
            status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
        content = error.to_response()
        if settings.is_development:
            content["error"]["detail"] = str(exc)
        return JSONResponse(status_code=error.http_status, content=content)


def _error_response(error: UsersApiError) -> JSONResponse:
    return JSONResponse(status_code=error.http_status, content=error.to_response())


def _from_request_validation_error(
    exc: RequestValidationError,
) -> RequestValidationFailedError:
    return RequestValidationFailedError([
        FieldError(
            field=".".join(str(loc) for loc in e["loc"] if loc not in ("body", "query", "path")),
            message=e["msg"],
        )
        for e in exc.errors()
    ])
