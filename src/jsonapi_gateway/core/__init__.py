"""Core utilities for the JSON:API Gateway."""

from .errors import (
    JSONAPI_CONTENT_TYPE,
    JSONAPI_MEDIA_TYPE,
    AppError,
    DatabaseError,
    EngineOutputError,
    ErrorCode,
    RequestTooLargeError,
    ValidationError,
)

__all__ = [
    "JSONAPI_CONTENT_TYPE",
    "JSONAPI_MEDIA_TYPE",
    "AppError",
    "DatabaseError",
    "EngineOutputError",
    "ErrorCode",
    "RequestTooLargeError",
    "ValidationError",
]
