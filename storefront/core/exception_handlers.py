"""Global exception handlers for consistent error responses.

The request handler already converts failures inside the intake pipeline.
These handlers cover everything FastAPI raises around it (unknown routes,
wrong methods, malformed path parameters, stray exceptions) so that every
response, wherever it originates, uses the same envelope and taxonomy.

Design:
- AppError subclasses → status from the taxonomy
- Starlette HTTPException → mapped by status code (404, 405, ...)
- RequestValidationError → 400 VALIDATION_ERROR with violations
- Unexpected Exception → generic 500 (safety net, details only in logs)
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from storefront.core.error_classifier import classify, report_failure
from storefront.core.errors import AppError
from storefront.core.logging import StructuredLogger

_logger = StructuredLogger(logging.getLogger(__name__))


def _endpoint_name(request: Request) -> str:
    return f"{request.method} {request.url.path}"


async def classified_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Classify ``exc`` and return the error envelope.

    Args:
        request: FastAPI request object.
        exc: Any exception raised outside the intake pipeline.

    Returns:
        JSONResponse with the classified status, envelope and headers.
    """
    classification = classify(exc)
    report_failure(
        classification,
        exc,
        endpoint=_endpoint_name(request),
        logger=_logger,
    )

    headers = dict(classification.headers)
    # Keep Allow and similar headers Starlette attaches to HTTP errors
    if isinstance(exc, StarletteHTTPException) and exc.headers:
        headers.update(exc.headers)

    return JSONResponse(
        status_code=classification.status_code,
        content=classification.envelope.to_content(),
        headers=headers or None,
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with FastAPI app.

    Order matters little to Starlette (it resolves by exception MRO), but the
    generic ``Exception`` handler is registered last for readability.

    Args:
        app: FastAPI application instance.
    """
    app.exception_handler(AppError)(classified_exception_handler)
    app.exception_handler(RequestValidationError)(classified_exception_handler)
    app.exception_handler(StarletteHTTPException)(classified_exception_handler)
    app.exception_handler(Exception)(classified_exception_handler)
