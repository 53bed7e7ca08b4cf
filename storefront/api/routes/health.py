from __future__ import annotations

from fastapi import APIRouter, Request

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check(request: Request) -> dict:
    """Health check endpoint.

    Used by load balancers and monitoring systems to determine service health.
    Reports how many client windows the rate limiter currently tracks.

    Returns:
        dict: ``{"status": "ok", "tracked_clients": <int>}``.
    """

    limiter = request.app.state.request_handler.limiter
    return {"status": "ok", "tracked_clients": len(limiter)}
