"""
Custom exception handlers for consistent API error responses.

This module provides custom exceptions and handlers to maintain
consistent error responses across the API, even when using
standard Python exceptions internally.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import HTTPException, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


# Short messages returned for malformed payloads, keyed by path prefix
INVALID_PAYLOAD_MESSAGES = {
    "/api/orders": "Invalid order payload",
    "/api/products": "Invalid product payload",
    "/api/customers": "Invalid customer payload",
    "/api/ai-assistant": "Invalid query",
}


class APIError(HTTPException):
    """Base API error with consistent structure"""

    def __init__(
        self,
        status_code: int,
        detail: str,
        error_code: Optional[str] = None,
        headers: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.error_code = error_code


class NotFoundError(APIError):
    """Resource not found error"""

    def __init__(
        self, detail: str = "Resource not found", error_code: str = "NOT_FOUND"
    ):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND, detail=detail, error_code=error_code
        )


class ValidationError(APIError):
    """Validation error"""

    def __init__(
        self, detail: str = "Validation failed", error_code: str = "VALIDATION_ERROR"
    ):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            error_code=error_code,
        )


class UniqueConstraintError(APIError):
    """A write collided with a unique column (reported as a bad request)"""

    def __init__(self, detail: str, error_code: str = "DUPLICATE"):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            error_code=error_code,
        )


def _invalid_payload_message(path: str) -> str:
    for prefix, message in INVALID_PAYLOAD_MESSAGES.items():
        if path.startswith(prefix):
            return message
    return "Invalid request payload"


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed bodies as 400 with a short, resource-specific message"""
    logger.warning(f"Invalid payload at {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "detail": _invalid_payload_message(request.url.path),
            "error_code": "VALIDATION_ERROR",
            "path": str(request.url.path),
        },
    )


async def handle_value_error(request: Request, exc: ValueError) -> JSONResponse:
    """Convert ValueError to consistent API response"""
    logger.warning(f"ValueError at {request.url.path}: {str(exc)}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "detail": str(exc),
            "error_code": "VALIDATION_ERROR",
            "path": str(request.url.path),
        },
    )


async def handle_not_found(request: Request, exc: NotFoundError) -> Response:
    """Not-found answers carry no body"""
    logger.info(f"Not found at {request.url.path}: {exc.detail}")
    return Response(status_code=status.HTTP_404_NOT_FOUND)


async def handle_api_error(request: Request, exc: APIError) -> JSONResponse:
    """Handle custom API errors"""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "detail": exc.detail,
            "error_code": exc.error_code,
            "path": str(request.url.path),
        },
        headers=exc.headers,
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """Log the cause server-side and hide it from the caller"""
    logger.exception(f"Unhandled error at {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "detail": "Internal server error",
            "error_code": "INTERNAL_ERROR",
            "path": str(request.url.path),
        },
    )


def register_exception_handlers(app):
    """Register all exception handlers with the FastAPI app"""
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(ValueError, handle_value_error)
    app.add_exception_handler(NotFoundError, handle_not_found)
    app.add_exception_handler(APIError, handle_api_error)
    app.add_exception_handler(SQLAlchemyError, handle_unexpected_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
