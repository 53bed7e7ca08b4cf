from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from storefront.api.deps import (
    ERROR_RESPONSES,
    get_client_key,
    get_request_handler,
    to_json_response,
)
from storefront.core.request_handler import Endpoint, RequestHandler
from storefront.schemas.contact import ContactResponse, ContactSubmission

router = APIRouter(prefix="/api", tags=["Contact"])


@router.post(
    "/contact",
    response_model=ContactResponse,
    responses=ERROR_RESPONSES,
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": ContactSubmission.model_json_schema(by_alias=True)}},
        }
    },
)
async def submit_contact(
    request: Request,
    handler: RequestHandler = Depends(get_request_handler),
    client_key: str = Depends(get_client_key),
) -> JSONResponse:
    """Submit the storefront contact form.

    The raw body is handed to the intake pipeline, which rate-limits the
    caller, validates every field and reports all violations at once.

    Returns:
        JSONResponse: ``{"message": ...}`` on success, or the error envelope.
    """
    endpoint = Endpoint(
        name="contact.submit",
        operation=request.app.state.contact_service.submit,
        schema=ContactSubmission,
        audit=True,
    )
    result = await handler.handle(endpoint, client_key=client_key, payload=await request.body())
    return to_json_response(result)
