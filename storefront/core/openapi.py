"""OpenAPI metadata and customization utilities.

Enriches the generated OpenAPI schema with:
- Tags metadata
- The shared ``ErrorEnvelope`` component
- An ``x-rate-limited`` marker and 429 response on every write operation

This keeps documentation concerns decoupled from the app factory.
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import FastAPI

from storefront.schemas.errors import ErrorEnvelope

WRITE_METHODS = {"post", "put", "patch", "delete"}

TAGS_METADATA = [
    {"name": "Contact", "description": "Contact form submissions."},
    {"name": "Inquiries", "description": "Customer inquiries about swords and commissions."},
    {"name": "Swords", "description": "Sword catalog browsing and maintenance."},
    {"name": "Health", "description": "Liveness checks."},
]


def apply_openapi_customizations(app: FastAPI) -> None:
    """Patch FastAPI's OpenAPI generation to add tags and rate-limit notes."""

    original_openapi = app.openapi

    def custom_openapi() -> Dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema

        schema = original_openapi()

        components = schema.setdefault("components", {})
        component_schemas = components.setdefault("schemas", {})
        component_schemas.setdefault(
            "ErrorEnvelope",
            ErrorEnvelope.model_json_schema(ref_template="#/components/schemas/{model}"),
        )

        tags = schema.setdefault("tags", [])
        existing_tag_names = {t.get("name") for t in tags}
        for tag in TAGS_METADATA:
            if tag["name"] not in existing_tag_names:
                tags.append(tag)

        error_response = {
            "description": "Too many requests from this client in the current window.",
            "content": {
                "application/json": {"schema": {"$ref": "#/components/schemas/ErrorEnvelope"}}
            },
        }
        for path, methods in schema.get("paths", {}).items():
            if not path.startswith("/api/"):
                continue
            for method, operation in methods.items():
                if method in WRITE_METHODS and isinstance(operation, dict):
                    operation["x-rate-limited"] = True
                    operation.setdefault("responses", {}).setdefault("429", error_response)

        app.openapi_schema = schema
        return schema

    app.openapi = custom_openapi  # type: ignore[assignment]
