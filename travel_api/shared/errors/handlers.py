"""
Centralized error handlers for FastAPI.

Maps domain-specific errors to HTTP responses.
No stack traces or internal details are exposed to clients.
All error responses use the ErrorResponse schema.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from travel_api.domain.travel.errors import (
    AlreadyAssessedError,
    InvalidTravelOrderError,
    PermissionDeniedError,
    TravelDomainError,
    TravelOrderNotFoundError,
    TravelOrderStorageError,
)
from travel_api.shared.security.auth import AuthenticationError

logger = logging.getLogger(__name__)

HTTP_400 = 400
HTTP_401 = 401
HTTP_403 = 403
HTTP_404 = 404
HTTP_405 = 405
HTTP_422 = 422
HTTP_500 = 500


def _error_response(
    status_code: int,
    error: str,
    detail: str | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Build a consistent JSON error response."""
    body: dict[str, str | None] = {"error": error}
    if detail:
        body["detail"] = detail
    return JSONResponse(status_code=status_code, content=body, headers=headers)


def register_error_handlers(app: FastAPI) -> None:
    """Register all domain error handlers on the FastAPI application.

    Args:
        app: The FastAPI application instance.
    """

    @app.exception_handler(AuthenticationError)
    async def handle_unauthenticated(
        _request: Request, exc: AuthenticationError
    ) -> JSONResponse:
        """Handle missing or invalid bearer tokens."""
        logger.info("Authentication failed: %s", exc.reason)
        return _error_response(
            HTTP_401,
            "Unauthenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    @app.exception_handler(TravelOrderNotFoundError)
    async def handle_not_found(
        _request: Request, exc: TravelOrderNotFoundError
    ) -> JSONResponse:
        """Handle travel orders missing from the looked-up scope."""
        logger.warning("Travel order not found: %s", exc.order_id)
        return _error_response(HTTP_404, "Travel order not found")

    @app.exception_handler(AlreadyAssessedError)
    async def handle_already_assessed(
        _request: Request, exc: AlreadyAssessedError
    ) -> JSONResponse:
        """Handle assessments of orders that are no longer Requested."""
        logger.warning("Travel order already assessed: %s", exc.order_id)
        return _error_response(
            HTTP_403, "Travel order already assessed", exc.message
        )

    @app.exception_handler(PermissionDeniedError)
    async def handle_permission_denied(
        _request: Request, exc: PermissionDeniedError
    ) -> JSONResponse:
        """Handle policy refusals."""
        logger.warning("Permission denied for action=%s", exc.action)
        return _error_response(HTTP_403, "Permission denied", exc.message)

    @app.exception_handler(InvalidTravelOrderError)
    async def handle_invalid_order(
        _request: Request, exc: InvalidTravelOrderError
    ) -> JSONResponse:
        """Handle business-rule violations on input."""
        logger.warning("Invalid travel order field=%s", exc.field)
        return _error_response(HTTP_422, "Invalid travel order", exc.message)

    @app.exception_handler(TravelOrderStorageError)
    async def handle_storage(
        _request: Request, exc: TravelOrderStorageError
    ) -> JSONResponse:
        """Handle persistence failures."""
        logger.error("Travel order storage error during %s: %s", exc.operation, exc.reason)
        return _error_response(HTTP_500, "Internal server error")

    @app.exception_handler(TravelDomainError)
    async def handle_travel_domain(
        _request: Request, exc: TravelDomainError
    ) -> JSONResponse:
        """Catch-all for unhandled travel domain errors."""
        logger.error("Unhandled travel domain error: %s", exc.message)
        return _error_response(HTTP_500, "Internal server error")

    @app.exception_handler(StarletteHTTPException)
    async def handle_http(
        _request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        """Handle routing errors. Unsupported methods read as bad requests."""
        if exc.status_code == HTTP_405:
            return _error_response(HTTP_400, "Invalid request")
        return _error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def handle_unexpected(
        _request: Request, exc: Exception
    ) -> JSONResponse:
        """Catch-all for unexpected errors. Never exposes internals."""
        logger.exception("Unexpected error: %s", type(exc).__name__)
        return _error_response(HTTP_500, "Internal server error")
