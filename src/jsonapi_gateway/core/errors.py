"""Error handling that renders every failure as a JSON:API error document."""

import json
from enum import Enum
from typing import Any, Optional

from fastapi import Request
from fastapi.responses import Response
from starlette.exceptions import HTTPException

JSONAPI_MEDIA_TYPE = "application/vnd.api+json"
JSONAPI_CONTENT_TYPE = f"{JSONAPI_MEDIA_TYPE}; charset=utf-8"
JSONAPI_VERSION = "1.0"


class ErrorCode(str, Enum):
    """Standardized error codes for the gateway itself."""

    VALIDATION_ERROR = "validation_error"
    REQUEST_TOO_LARGE = "request_too_large"
    DATABASE_ERROR = "database_error"
    ENGINE_OUTPUT_INVALID = "engine_output_invalid"
    HTTP_ERROR = "http_error"


def dump_document(document: dict[str, Any]) -> str:
    """Serialize a document compactly, keeping key order and non-ASCII text."""
    return json.dumps(document, separators=(",", ":"), ensure_ascii=False)


def build_error_document(
    errors: list[dict[str, Any]],
    url: str,
) -> dict[str, Any]:
    """
    Wrap error objects in a top-level envelope.

    Args:
        errors: Error objects, each with a string ``status``
        url: Request URL used as ``links.self``

    Returns:
        Error document with ``errors``, ``links`` and ``jsonapi`` members
    """
    return {
        "errors": errors,
        "links": {"self": url},
        "jsonapi": {"version": JSONAPI_VERSION},
    }


class AppError(Exception):
    """
    Structured gateway error rendered as a JSON:API error object.

    Attributes:
        code: Error code from ErrorCode enum
        message: Human-readable error message
        status: HTTP status code
        details: Additional error context, exposed as the error object's meta
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        status: int = 500,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.code = code
        self.message = message
        self.status = status
        self.details = details or {}
        super().__init__(message)

    def to_error_object(self) -> dict[str, Any]:
        """Convert error to a JSON:API error object."""
        error: dict[str, Any] = {
            "status": str(self.status),
            "code": self.code.value,
            "title": self.code.value.replace("_", " ").title(),
            "detail": self.message,
        }
        if self.details:
            error["meta"] = self.details
        return error

    def to_document(self, url: str) -> dict[str, Any]:
        """
        Convert error to a complete JSON:API error document.

        Args:
            url: The request URL where the error occurred

        Returns:
            Dictionary in JSON:API error document format
        """
        return build_error_document([self.to_error_object()], url)


class ValidationError(AppError):
    """Validation error for request data."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(
            code=ErrorCode.VALIDATION_ERROR,
            message=message,
            status=400,
            details=details,
        )


class RequestTooLargeError(AppError):
    """Error when the request body exceeds the configured limit."""

    def __init__(self, max_bytes: int) -> None:
        super().__init__(
            code=ErrorCode.REQUEST_TOO_LARGE,
            message="Request body too large",
            status=413,
            details={"max_bytes": max_bytes},
        )


class DatabaseError(AppError):
    """Database operation error."""

    def __init__(self, operation: str, reason: str) -> None:
        super().__init__(
            code=ErrorCode.DATABASE_ERROR,
            message=f"Database error during {operation}: {reason}",
            status=500,
        )


class EngineOutputError(AppError):
    """The document engine returned something that is not a JSON document."""

    def __init__(self, reason: str) -> None:
        super().__init__(
            code=ErrorCode.ENGINE_OUTPUT_INVALID,
            message=f"Invalid engine output: {reason}",
            status=500,
        )


def jsonapi_error_response(status_code: int, document: dict[str, Any]) -> Response:
    """Build a response carrying an error document with the JSON:API media type."""
    return Response(
        content=dump_document(document),
        status_code=status_code,
        media_type=JSONAPI_CONTENT_TYPE,
    )


async def app_error_handler(request: Request, exc: AppError) -> Response:
    """
    FastAPI exception handler for AppError.

    Args:
        request: The FastAPI request object
        exc: The AppError exception

    Returns:
        Response with a JSON:API error document
    """
    return jsonapi_error_response(exc.status, exc.to_document(str(request.url)))


async def http_exception_handler(request: Request, exc: HTTPException) -> Response:
    """Render framework HTTP errors (404, 405, ...) as JSON:API error documents."""
    error: dict[str, Any] = {
        "status": str(exc.status_code),
        "code": ErrorCode.HTTP_ERROR.value,
        "detail": str(exc.detail),
    }
    response = jsonapi_error_response(
        exc.status_code,
        build_error_document([error], str(request.url)),
    )
    if exc.headers:
        response.headers.update(exc.headers)
    return response
