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
from storefront.schemas.inquiry import InquiryCreate, InquiryListQuery

router = APIRouter(prefix="/api", tags=["Inquiries"])


@router.post(
    "/inquiries",
    status_code=201,
    responses=ERROR_RESPONSES,
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": InquiryCreate.model_json_schema(by_alias=True)}},
        }
    },
)
async def create_inquiry(
    request: Request,
    handler: RequestHandler = Depends(get_request_handler),
    client_key: str = Depends(get_client_key),
) -> JSONResponse:
    """Create a customer inquiry, optionally tied to a sword in the catalog."""
    endpoint = Endpoint(
        name="inquiries.create",
        operation=request.app.state.inquiry_service.create_inquiry,
        schema=InquiryCreate,
        success_status=201,
        audit=True,
    )
    result = await handler.handle(endpoint, client_key=client_key, payload=await request.body())
    return to_json_response(result)


@router.get(
    "/inquiries",
    responses=ERROR_RESPONSES,
    openapi_extra={
        "parameters": [
            {"name": "userId", "in": "query", "required": False, "schema": {"type": "string"}},
        ]
    },
)
async def list_inquiries(
    request: Request,
    handler: RequestHandler = Depends(get_request_handler),
    client_key: str = Depends(get_client_key),
) -> JSONResponse:
    endpoint = Endpoint(
        name="inquiries.list",
        operation=request.app.state.inquiry_service.list_inquiries,
        schema=InquiryListQuery,
        rate_limited=False,
    )
    result = await handler.handle(
        endpoint,
        client_key=client_key,
        payload=dict(request.query_params),
    )
    return to_json_response(result)
