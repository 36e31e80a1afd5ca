"""
Error Handler Middleware

Global exception handling for the API.

Provides consistent error responses across all endpoints by catching
exceptions and converting them to standardized JSON responses.

Error Response Format:
======================
    {
        "error": {
            "code": "NOT_FOUND",
            "message": "Post with id '42' not found",
            "details": {}
        }
    }

Exception Handling:
===================
1. InkpressException subclasses → Use their status_code and to_dict()
2. Request validation (FastAPI) and pydantic ValidationError → 400
3. Other exceptions → 500 with generic message (details hidden)

Usage:
======
    from inkpress.api.middleware.error_handler import setup_exception_handlers

    app = FastAPI()
    setup_exception_handlers(app)
"""

from typing import Any, Iterable

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from inkpress.shared.core.exceptions import InkpressException
from inkpress.shared.core.logging import logger
from inkpress.shared.schemas.common import ErrorDetail, ErrorResponse


def _error_list(errors: Iterable[dict[str, Any]]) -> list[dict[str, Any]]:
    """Keep the JSON-safe part of pydantic error entries."""
    return [
        {
            "loc": [str(part) for part in error.get("loc", ())],
            "msg": error.get("msg", ""),
            "type": error.get("type", ""),
        }
        for error in errors
    ]


def _error_response(status_code: int, body: ErrorResponse) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def _validation_response(errors: list[dict[str, Any]]) -> JSONResponse:
    return _error_response(
        400,
        ErrorResponse(
            error=ErrorDetail(
                code="VALIDATION_ERROR",
                message="Request validation failed",
                details={"errors": errors},
            )
        ),
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """
    Set up global exception handlers.

    Should be called during application initialization to register
    exception handlers for all routes.

    Args:
        app: FastAPI application instance
    """

    @app.exception_handler(InkpressException)
    async def inkpress_exception_handler(
        request: Request,
        exc: InkpressException,
    ) -> JSONResponse:
        """
        Handle application exceptions.

        All custom exceptions inherit from InkpressException and include:
        - status_code: HTTP status code
        - error_code: Machine-readable error code
        - message: Human-readable message
        - details: Additional context
        """
        logger.warning(
            "Application error",
            error_code=exc.error_code,
            message=exc.message,
            status_code=exc.status_code,
            path=request.url.path,
        )
        return _error_response(exc.status_code, ErrorResponse.model_validate(exc.to_dict()))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """
        Handle request parsing errors.

        Bodies, path and query parameters are validated once, strictly;
        anything that does not match the schema is rejected with 400.
        """
        errors = _error_list(exc.errors())
        logger.warning("Validation error", errors=errors, path=request.url.path)
        return _validation_response(errors)

    @app.exception_handler(ValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: ValidationError,
    ) -> JSONResponse:
        """
        Handle pydantic validation errors raised outside request parsing.
        """
        errors = _error_list(exc.errors())
        logger.warning("Validation error", errors=errors, path=request.url.path)
        return _validation_response(errors)

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """
        Handle unexpected exceptions.

        Catches any unhandled exception and returns a generic error.
        Full error details are logged but not exposed to clients.
        """
        logger.error(
            "Unexpected error",
            error=str(exc),
            error_type=type(exc).__name__,
            path=request.url.path,
            exc_info=True,
        )
        return _error_response(
            500,
            ErrorResponse(
                error=ErrorDetail(code="INTERNAL_ERROR", message="An unexpected error occurred")
            ),
        )
