"""Rate limiting wiring for the HTTP layer.

Design goals:
- Minimal coupling: the request handler depends on ``AbstractRateLimiter`` only.
- Swap-friendly: storage backend can be replaced (e.g., Redis) behind the
  abstract interface.
- One limiter per process, built at startup and injected; never a module
  global.

Rate limiting strategy:
- Fixed window per client address, shared by every write endpoint.
- The address is the first value of the forwarded-address header. Callers
  without one all share the ``unknown`` bucket.
"""

from __future__ import annotations

import hashlib

from fastapi import Request

from storefront.adapters.rate_limit.base import AbstractRateLimiter
from storefront.adapters.rate_limit.in_memory import InMemoryFixedWindowRateLimiter
from storefront.core.config import AppSettings

UNKNOWN_CLIENT_KEY = "unknown"


def build_rate_limiter(app_settings: AppSettings) -> AbstractRateLimiter:
    """Create the process-wide limiter from settings."""

    return InMemoryFixedWindowRateLimiter(
        limit=app_settings.rate_limit_requests,
        window_seconds=app_settings.rate_limit_window_seconds,
        max_keys=app_settings.rate_limit_max_clients,
    )


def resolve_client_key(forwarded_for: str | None) -> str:
    """Derive the limiter key from a forwarded-address header value.

    Args:
        forwarded_for: Raw header value, e.g. ``"1.2.3.4, 10.0.0.1"``.

    Returns:
        The first address, trimmed, or ``"unknown"`` when absent or blank.

    Examples:
        >>> resolve_client_key("1.2.3.4, 10.0.0.1")
        '1.2.3.4'
        >>> resolve_client_key(None)
        'unknown'
    """

    if not forwarded_for:
        return UNKNOWN_CLIENT_KEY
    first = forwarded_for.split(",")[0].strip()
    return first or UNKNOWN_CLIENT_KEY


def client_key_from_request(request: Request, header_name: str) -> str:
    return resolve_client_key(request.headers.get(header_name))


def hash_client_key(key: str) -> str:
    """Hash the client key for logging without exposing addresses."""
    return hashlib.sha256(key.encode()).hexdigest()[:16]
