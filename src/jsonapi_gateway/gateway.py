"""Gateway adapter between HTTP requests and the JSON:API document engine.

The adapter never builds protocol content. It forwards (method, url, body)
to a document engine, derives the HTTP status from the returned document and,
when delegation fails, synthesizes a minimal error document with status 500.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Protocol, Union

import structlog

from .core.errors import (
    JSONAPI_CONTENT_TYPE,
    EngineOutputError,
    build_error_document,
    dump_document,
)
from .protocols.jsonapi import is_http_client_error, is_http_server_error

logger = structlog.get_logger(__name__)

HTTP_OK = 200
HTTP_INTERNAL_SERVER_ERROR = 500
HTTP_STATUS_MIN = 100
HTTP_STATUS_MAX = 599


class DocumentEngine(Protocol):
    """Protocol for the external component producing JSON:API documents."""

    async def produce(self, method: str, url: str, body: str) -> str:
        """Return one data or error document as JSON text."""
        ...


@dataclass(frozen=True)
class EngineDocument:
    """Successful delegation: the engine's text and the status it implies."""

    status_code: int
    body: str


@dataclass(frozen=True)
class EngineFault:
    """Failed delegation, carrying the message reported in the fault document."""

    message: str
    error_type: str


DelegationResult = Union[EngineDocument, EngineFault]


@dataclass(frozen=True)
class GatewayResponse:
    """HTTP response for one request: status, document text and media type."""

    status_code: int
    body: str
    content_type: str = JSONAPI_CONTENT_TYPE


def derive_status(text: str) -> int:
    """
    Derive the HTTP status implied by an engine document.

    Documents whose first member is ``errors`` take the highest status among
    their error objects; every other document maps to 200.

    Args:
        text: Document text returned by the engine

    Returns:
        HTTP status code

    Raises:
        EngineOutputError: If the text is not a JSON object or its error
            statuses cannot be read as a single HTTP status
    """
    try:
        document = json.loads(text)
    except json.JSONDecodeError as exc:
        raise EngineOutputError(f"not valid JSON ({exc.msg})") from exc
    if not isinstance(document, dict):
        raise EngineOutputError("document is not a JSON object")
    if next(iter(document), None) != "errors":
        return HTTP_OK

    errors = document["errors"]
    if not isinstance(errors, list) or not errors:
        raise EngineOutputError("errors must be a non-empty array")
    statuses = []
    for error in errors:
        status = error.get("status") if isinstance(error, dict) else None
        # Status members are strings of ASCII digits, e.g. "404"
        if not isinstance(status, str) or not (status.isascii() and status.isdigit()):
            raise EngineOutputError(f"unreadable error status {status!r}")
        statuses.append(int(status))
    worst = max(statuses)
    if not HTTP_STATUS_MIN <= worst <= HTTP_STATUS_MAX:
        raise EngineOutputError(f"error status {worst} is not an HTTP status")
    return worst


def build_fault_document(message: str, url: str, status: int = HTTP_INTERNAL_SERVER_ERROR) -> str:
    """Serialize the error document sent when delegation fails."""
    error = {"status": str(status), "code": message}
    return dump_document(build_error_document([error], url))


class GatewayAdapter:
    """Translate one HTTP request into one JSON:API response.

    Each call is independent: one attempt against the engine, no retries and
    no timeout of its own. Timeouts and cancellation belong to the transport.
    """

    def __init__(self, engine: DocumentEngine) -> None:
        self._engine = engine

    async def delegate(self, method: str, url: str, body: str) -> DelegationResult:
        """Run the engine once and interpret its output."""
        try:
            text = await self._engine.produce(method, url, body)
            if not isinstance(text, str):
                raise EngineOutputError(f"expected text, got {type(text).__name__}")
            return EngineDocument(status_code=derive_status(text), body=text)
        except Exception as exc:
            return EngineFault(
                message=str(exc) or type(exc).__name__,
                error_type=type(exc).__name__,
            )

    async def handle(self, method: str, url: str, body: str) -> GatewayResponse:
        """
        Handle one request.

        Args:
            method: HTTP method
            url: Full request URL, echoed as ``links.self`` on faults
            body: Raw request body

        Returns:
            GatewayResponse with status, document text and JSON:API content type
        """
        result = await self.delegate(method, url, body)

        if isinstance(result, EngineFault):
            logger.warning(
                "jsonapi_engine_fault",
                method=method,
                url=url,
                error=result.message,
                error_type=result.error_type,
            )
            return GatewayResponse(
                status_code=HTTP_INTERNAL_SERVER_ERROR,
                body=build_fault_document(result.message, url),
            )

        if is_http_server_error(result.status_code):
            logger.warning(
                "jsonapi_request_failed",
                method=method,
                url=url,
                status=result.status_code,
            )
        else:
            logger.info(
                "jsonapi_request_completed",
                method=method,
                url=url,
                status=result.status_code,
                client_error=is_http_client_error(result.status_code),
            )
        return GatewayResponse(status_code=result.status_code, body=result.body)
