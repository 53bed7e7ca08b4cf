"""Shared route dependencies and response helpers."""

from __future__ import annotations

from typing import Any, Dict

from fastapi import Request
from fastapi.responses import JSONResponse

from storefront.core.rate_limit import client_key_from_request
from storefront.core.request_handler import HandlerResponse, RequestHandler
from storefront.schemas.errors import ErrorEnvelope


def get_request_handler(request: Request) -> RequestHandler:
    return request.app.state.request_handler


def get_client_key(request: Request) -> str:
    """Rate-limit bucket for the caller, taken from the forwarded-address header."""
    return client_key_from_request(request, request.app.state.client_address_header)


def to_json_response(result: HandlerResponse) -> JSONResponse:
    return JSONResponse(
        status_code=result.status_code,
        content=result.body,
        headers=dict(result.headers) or None,
    )


ERROR_RESPONSES: Dict[int | str, Dict[str, Any]] = {
    400: {"model": ErrorEnvelope, "description": "Invalid request data"},
    404: {"model": ErrorEnvelope, "description": "Resource not found"},
    500: {"model": ErrorEnvelope, "description": "An unexpected error occurred"},
}
