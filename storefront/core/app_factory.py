"""Application factory for the storefront API.

Centralizes app construction (metadata, middleware, handlers, routers,
shared services) so tests can build isolated apps with their own limiter,
store and logger.
"""

from __future__ import annotations

from fastapi import FastAPI

from storefront.adapters.rate_limit.base import AbstractRateLimiter
from storefront.adapters.store.base import AbstractRecordStore
from storefront.adapters.store.in_memory import InMemoryRecordStore
from storefront.api.routes import contact_router, health_router, inquiries_router, swords_router
from storefront.core.config import AppSettings, settings
from storefront.core.exception_handlers import setup_exception_handlers
from storefront.core.logging import StructuredLogger, configure_logging
from storefront.core.middleware import request_id_middleware
from storefront.core.openapi import apply_openapi_customizations
from storefront.core.rate_limit import build_rate_limiter
from storefront.core.request_handler import RequestHandler
from storefront.services.catalog import seed_catalog
from storefront.services.contact_service import ContactService
from storefront.services.inquiry_service import InquiryService
from storefront.services.sword_service import SwordService


def create_app(
    *,
    limiter: AbstractRateLimiter | None = None,
    store: AbstractRecordStore | None = None,
    logger: StructuredLogger | None = None,
    app_settings: AppSettings | None = None,
    configure_logs: bool = True,
) -> FastAPI:
    """Create and configure the FastAPI application instance.

    Args:
        limiter: Rate limiter shared by all write endpoints. Built from
            settings when omitted.
        store: Record store. A fresh in-memory store (seeded with the sample
            catalog when ``APP_SEED_CATALOG`` is set) is used when omitted.
        logger: Structured logger used by the intake pipeline.
        app_settings: Overrides the process-wide ``settings.app``.
        configure_logs: Install the root logging handlers. Tests that capture
            logs with ``caplog`` pass False.

    Returns:
        Configured FastAPI app with middleware, handlers, routers and docs.
    """
    app_settings = app_settings or settings.app

    # Logging first so subsequent init logs are formatted as desired
    if configure_logs:
        configure_logging(settings.log)

    if limiter is None:
        limiter = build_rate_limiter(app_settings)
    if store is None:
        store = InMemoryRecordStore()
        if app_settings.seed_catalog:
            seed_catalog(store)

    app = FastAPI(
        title="Storefront API",
        description=(
            "Request intake for the sword storefront: contact form, customer "
            "inquiries and catalog maintenance. Write endpoints are rate limited "
            "per client and every failure uses the same error envelope."
        ),
        version="0.1.0",
        debug=app_settings.debug,
        license_info={
            "name": "MIT License",
            "url": "https://opensource.org/licenses/MIT",
        },
    )

    app.state.store = store
    app.state.client_address_header = app_settings.client_address_header
    app.state.request_handler = RequestHandler(
        limiter,
        logger=logger,
        rate_limit_enabled=app_settings.rate_limit_enabled,
        include_rate_limit_headers=app_settings.rate_limit_include_headers,
    )
    app.state.contact_service = ContactService(logger=logger)
    app.state.inquiry_service = InquiryService(store)
    app.state.sword_service = SwordService(store)

    # Middleware
    app.middleware("http")(request_id_middleware)

    # Exception handlers
    setup_exception_handlers(app)

    # Routers
    app.include_router(contact_router)
    app.include_router(inquiries_router)
    app.include_router(swords_router)
    app.include_router(health_router)

    # OpenAPI customizations (tags, error envelope, rate-limit markers)
    apply_openapi_customizations(app)

    return app
