"""Application-level exception types and the failure taxonomy.

Domain operations raise ``AppError`` subclasses for failures they raise on
purpose (missing records, conflicts). The request handler turns those, and
any other exception, into a classified response; see
``storefront.core.error_classifier``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar


class FailureKind(str, Enum):
    """Every failure the intake pipeline can report."""

    RATE_LIMITED = "rate_limited"
    INVALID_INPUT = "invalid_input"
    NOT_FOUND = "not_found"
    UNAUTHORIZED = "unauthorized"
    DOMAIN_FAILURE = "domain_failure"
    UNKNOWN = "unknown"


@dataclass
class AppError(Exception):
    """Base error for application/domain failures.

    Attributes:
        code: Stable, machine-readable error code.
        message: Human-readable error message, safe to show to callers.
        details: Optional structured details returned to the caller.
    """

    code: str
    message: str
    details: Any = None

    kind: ClassVar[FailureKind] = FailureKind.DOMAIN_FAILURE
    default_status: ClassVar[int] = 422

    def __post_init__(self) -> None:
        # Populate Exception args so str(error) is useful in logs/tracebacks.
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return self.default_status


class ValidationAppError(AppError):
    """Raised when input fails a rule that only the domain can check."""

    kind = FailureKind.INVALID_INPUT
    default_status = 400


class NotFoundAppError(AppError):
    """Raised when a referenced resource does not exist."""

    kind = FailureKind.NOT_FOUND
    default_status = 404


class UnauthorizedAppError(AppError):
    """Reserved for an authentication collaborator."""

    kind = FailureKind.UNAUTHORIZED
    default_status = 401


@dataclass
class DomainAppError(AppError):
    """Deliberate domain failure carrying its own HTTP status."""

    http_status: int = 422

    @property
    def status_code(self) -> int:
        return self.http_status
