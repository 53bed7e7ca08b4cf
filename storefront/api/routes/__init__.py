from __future__ import annotations

from storefront.api.routes.contact import router as contact_router
from storefront.api.routes.health import router as health_router
from storefront.api.routes.inquiries import router as inquiries_router
from storefront.api.routes.swords import router as swords_router

__all__ = ["contact_router", "health_router", "inquiries_router", "swords_router"]
