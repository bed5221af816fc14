"""Catch-all JSON:API endpoint forwarding every resource request to the gateway."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response

from ...core.errors import RequestTooLargeError, ValidationError
from ...gateway import GatewayAdapter

SUPPORTED_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE"]

router = APIRouter(tags=["jsonapi"])


def get_gateway(request: Request) -> GatewayAdapter:
    """Get the gateway adapter from app state."""
    return request.app.state.gateway


async def read_body(request: Request) -> str:
    """Read the raw request body as UTF-8 text.

    Chunked requests carry no content-length, so the limit is checked again
    on the bytes actually received.
    """
    max_bytes = request.app.state.settings.request_max_bytes
    raw = await request.body()
    if len(raw) > max_bytes:
        raise RequestTooLargeError(max_bytes)
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ValidationError(
            "Request body must be UTF-8 encoded",
            details={"position": exc.start},
        ) from exc


@router.api_route("/{path:path}", methods=SUPPORTED_METHODS)
async def process_request(
    request: Request,
    body: str = Depends(read_body),
    gateway: GatewayAdapter = Depends(get_gateway),
) -> Response:
    """Forward method, full URL and raw body to the document engine."""
    result = await gateway.handle(request.method, str(request.url), body)
    return Response(
        content=result.body,
        status_code=result.status_code,
        media_type=result.content_type,
    )
