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
from storefront.schemas.sword import SwordListQuery, SwordUpdate

router = APIRouter(prefix="/api/swords", tags=["Swords"])


@router.get(
    "",
    responses=ERROR_RESPONSES,
    openapi_extra={
        "parameters": [
            {"name": "page", "in": "query", "schema": {"type": "integer", "minimum": 1, "default": 1}},
            {"name": "limit", "in": "query", "schema": {"type": "integer", "minimum": 1, "maximum": 100, "default": 10}},
            {"name": "category", "in": "query", "schema": {"type": "string", "enum": ["KATANA", "WAKIZASHI", "TANTO"]}},
            {"name": "search", "in": "query", "schema": {"type": "string"}},
            {"name": "sortBy", "in": "query", "schema": {"type": "string", "enum": ["price", "createdAt"]}},
            {"name": "order", "in": "query", "schema": {"type": "string", "enum": ["asc", "desc"]}},
        ]
    },
)
async def list_swords(
    request: Request,
    handler: RequestHandler = Depends(get_request_handler),
    client_key: str = Depends(get_client_key),
) -> JSONResponse:
    """List the catalog with filtering, search, sorting and pagination.

    Returns:
        JSONResponse: ``{"swords": [...], "pagination": {...}}``.
    """
    endpoint = Endpoint(
        name="swords.list",
        operation=request.app.state.sword_service.list_swords,
        schema=SwordListQuery,
        rate_limited=False,
    )
    result = await handler.handle(
        endpoint,
        client_key=client_key,
        payload=dict(request.query_params),
    )
    return to_json_response(result)


@router.get("/{sword_id}", responses=ERROR_RESPONSES)
async def get_sword(
    sword_id: str,
    request: Request,
    handler: RequestHandler = Depends(get_request_handler),
    client_key: str = Depends(get_client_key),
) -> JSONResponse:
    endpoint = Endpoint(
        name="swords.get",
        operation=request.app.state.sword_service.get_sword,
        rate_limited=False,
    )
    result = await handler.handle(endpoint, client_key=client_key, params={"sword_id": sword_id})
    return to_json_response(result)


@router.put(
    "/{sword_id}",
    responses=ERROR_RESPONSES,
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": SwordUpdate.model_json_schema(by_alias=True)}},
        }
    },
)
async def update_sword(
    sword_id: str,
    request: Request,
    handler: RequestHandler = Depends(get_request_handler),
    client_key: str = Depends(get_client_key),
) -> JSONResponse:
    """Replace the editable fields of a sword. Id and creation time are kept."""
    endpoint = Endpoint(
        name="swords.update",
        operation=request.app.state.sword_service.update_sword,
        schema=SwordUpdate,
        audit=True,
    )
    result = await handler.handle(
        endpoint,
        client_key=client_key,
        payload=await request.body(),
        params={"sword_id": sword_id},
    )
    return to_json_response(result)


@router.delete("/{sword_id}", responses=ERROR_RESPONSES)
async def delete_sword(
    sword_id: str,
    request: Request,
    handler: RequestHandler = Depends(get_request_handler),
    client_key: str = Depends(get_client_key),
) -> JSONResponse:
    endpoint = Endpoint(
        name="swords.delete",
        operation=request.app.state.sword_service.delete_sword,
        audit=True,
    )
    result = await handler.handle(endpoint, client_key=client_key, params={"sword_id": sword_id})
    return to_json_response(result)
