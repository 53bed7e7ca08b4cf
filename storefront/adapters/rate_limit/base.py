"""Rate limiter interfaces.

The request handler depends on this abstraction (not the concrete
implementation) so the storage backend can be swapped later (e.g., Redis)
with minimal changes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum


class Decision(str, Enum):
    ALLOW = "allow"
    DENY = "deny"


@dataclass(frozen=True)
class ClientWindow:
    """Per-client fixed-window state.

    Attributes:
        client_key: Opaque caller identifier.
        count: Requests admitted in the current window.
        window_start: UNIX seconds when the window opened.
    """

    client_key: str
    count: int
    window_start: float


@dataclass(frozen=True)
class RateLimitResult:
    """Result of a rate limit check.

    Attributes:
        allowed: Whether the request is allowed to proceed.
        limit: Max requests per window.
        remaining: Remaining requests in the current window (0 when blocked).
        reset_at: UNIX epoch seconds when the current window resets.
        retry_after_seconds: Suggested wait time in seconds when blocked.
    """

    allowed: bool
    limit: int
    remaining: int
    reset_at: int
    retry_after_seconds: int | None

    @property
    def decision(self) -> Decision:
        return Decision.ALLOW if self.allowed else Decision.DENY


class AbstractRateLimiter(ABC):
    """Interface for rate limiters."""

    @abstractmethod
    def check(self, key: str) -> RateLimitResult:
        """Record a request for ``key`` and decide whether it may proceed.

        Args:
            key: Unique client identifier (e.g., forwarded IP address).

        Returns:
            RateLimitResult describing whether it was allowed.
        """
        raise NotImplementedError

    @abstractmethod
    def __len__(self) -> int:
        """Number of client windows currently tracked."""
        raise NotImplementedError
