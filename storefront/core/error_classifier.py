"""Failure classification and the minimal-disclosure response protocol.

``classify`` maps any failure cause onto exactly one row of the taxonomy:

    RateLimited   -> 429 RATE_LIMIT_EXCEEDED
    InvalidInput  -> 400 VALIDATION_ERROR (details = violations)
    NotFound      -> 404 NOT_FOUND
    Unauthorized  -> 401 UNAUTHORIZED
    DomainFailure -> status/code supplied by the domain error
    Unknown       -> 500 INTERNAL_SERVER_ERROR (fixed generic message)

It is pure: classifying the same cause twice yields the same result.
Operator-grade detail goes through ``report_failure`` and the structured
logger, never into the envelope.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from http import HTTPStatus
from typing import Any, Mapping

from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from storefront.adapters.rate_limit.base import RateLimitResult
from storefront.core.errors import AppError, FailureKind
from storefront.core.logging import StructuredLogger
from storefront.core.validation import BODY_FIELD, ValidationFailure, Violation
from storefront.schemas.errors import ErrorBody, ErrorEnvelope

GENERIC_ERROR_MESSAGE = "An unexpected error occurred"
RATE_LIMIT_MESSAGE = "Too many requests. Please try again later."
VALIDATION_MESSAGE = "Invalid request data"
UNAUTHORIZED_MESSAGE = "Unauthorized"

_FIXED_CODES: dict[FailureKind, str] = {
    FailureKind.RATE_LIMITED: "RATE_LIMIT_EXCEEDED",
    FailureKind.INVALID_INPUT: "VALIDATION_ERROR",
    FailureKind.NOT_FOUND: "NOT_FOUND",
    FailureKind.UNAUTHORIZED: "UNAUTHORIZED",
    FailureKind.UNKNOWN: "INTERNAL_SERVER_ERROR",
}

_FIXED_STATUS: dict[FailureKind, int] = {
    FailureKind.RATE_LIMITED: 429,
    FailureKind.INVALID_INPUT: 400,
    FailureKind.NOT_FOUND: 404,
    FailureKind.UNAUTHORIZED: 401,
    FailureKind.UNKNOWN: 500,
}


@dataclass(frozen=True)
class Classification:
    """Outcome of classifying a failure."""

    kind: FailureKind
    status_code: int
    envelope: ErrorEnvelope
    headers: Mapping[str, str] = field(default_factory=dict)

    @property
    def code(self) -> str:
        return self.envelope.error.code


def _build(
    kind: FailureKind,
    message: str,
    *,
    status_code: int | None = None,
    code: str | None = None,
    details: Any = None,
    headers: Mapping[str, str] | None = None,
) -> Classification:
    return Classification(
        kind=kind,
        status_code=status_code if status_code is not None else _FIXED_STATUS[kind],
        envelope=ErrorEnvelope(
            error=ErrorBody(
                code=code or _FIXED_CODES[kind],
                message=message,
                details=details,
            )
        ),
        headers=dict(headers or {}),
    )


def _rate_limit_headers(result: RateLimitResult) -> dict[str, str]:
    return {
        "Retry-After": str(result.retry_after_seconds or 0),
        "X-RateLimit-Limit": str(result.limit),
        "X-RateLimit-Remaining": str(result.remaining),
        "X-RateLimit-Reset": str(result.reset_at),
    }


def _classify_app_error(exc: AppError) -> Classification:
    kind = exc.kind
    if kind is FailureKind.DOMAIN_FAILURE:
        return _build(
            kind,
            exc.message,
            status_code=exc.status_code,
            code=exc.code,
            details=exc.details,
        )
    if kind is FailureKind.UNAUTHORIZED:
        return _build(kind, exc.message or UNAUTHORIZED_MESSAGE)
    if kind is FailureKind.INVALID_INPUT:
        return _build(kind, exc.message or VALIDATION_MESSAGE, details=exc.details)
    if kind is FailureKind.NOT_FOUND:
        return _build(kind, exc.message)
    if kind is FailureKind.RATE_LIMITED:
        return _build(kind, RATE_LIMIT_MESSAGE)
    return _build(FailureKind.UNKNOWN, GENERIC_ERROR_MESSAGE)


def _http_status(status_code: int) -> HTTPStatus | None:
    try:
        return HTTPStatus(status_code)
    except ValueError:
        return None


def _classify_http_exception(exc: StarletteHTTPException) -> Classification:
    status_code = exc.status_code
    if status_code >= 500:
        return _build(FailureKind.UNKNOWN, GENERIC_ERROR_MESSAGE)

    known = _http_status(status_code)
    if isinstance(exc.detail, str):
        message = exc.detail
    else:
        message = known.phrase if known else "Request failed"
    if status_code == 401:
        return _build(FailureKind.UNAUTHORIZED, UNAUTHORIZED_MESSAGE)
    if status_code == 404:
        return _build(FailureKind.NOT_FOUND, message)
    if status_code == 429:
        return _build(FailureKind.RATE_LIMITED, RATE_LIMIT_MESSAGE)
    if status_code in (400, 422):
        return _build(FailureKind.INVALID_INPUT, VALIDATION_MESSAGE)
    return _build(
        FailureKind.DOMAIN_FAILURE,
        message,
        status_code=status_code,
        code=known.name if known else f"HTTP_{status_code}",
    )


def _request_validation_details(exc: RequestValidationError) -> list[dict[str, str]]:
    return [
        Violation(
            field=".".join(str(part) for part in error.get("loc", ())) or BODY_FIELD,
            rule=str(error.get("type", "invalid")),
            message=str(error.get("msg", "Invalid value")),
        ).to_dict()
        for error in exc.errors()
    ]


def classify(cause: object, *, include_rate_limit_headers: bool = True) -> Classification:
    """Map a failure cause to its (status, envelope) classification.

    Args:
        cause: A denied ``RateLimitResult``, a ``ValidationFailure``, an
            ``AppError`` or any other object/exception (classified as Unknown).
        include_rate_limit_headers: Attach ``Retry-After``/``X-RateLimit-*``
            headers to rate-limited classifications.

    Returns:
        Classification with status code, envelope and response headers.
    """
    if isinstance(cause, RateLimitResult):
        headers = _rate_limit_headers(cause) if include_rate_limit_headers else None
        return _build(FailureKind.RATE_LIMITED, RATE_LIMIT_MESSAGE, headers=headers)

    if isinstance(cause, ValidationFailure):
        return _build(
            FailureKind.INVALID_INPUT,
            VALIDATION_MESSAGE,
            details=cause.to_details(),
        )

    if isinstance(cause, AppError):
        return _classify_app_error(cause)

    if isinstance(cause, RequestValidationError):
        return _build(
            FailureKind.INVALID_INPUT,
            VALIDATION_MESSAGE,
            details=_request_validation_details(cause),
        )

    if isinstance(cause, StarletteHTTPException):
        return _classify_http_exception(cause)

    return _build(FailureKind.UNKNOWN, GENERIC_ERROR_MESSAGE)


def report_failure(
    classification: Classification,
    cause: object,
    *,
    endpoint: str,
    logger: StructuredLogger,
    context: Mapping[str, Any] | None = None,
) -> None:
    """Write the operator-facing record of a rejected request.

    Unknown failures are logged as errors with the original exception (type,
    message, traceback); every other kind is a warning with kind and code.
    """
    log_context: dict[str, Any] = {
        **(context or {}),
        "kind": classification.kind.value,
        "error_code": classification.code,
        "status_code": classification.status_code,
        "endpoint": endpoint,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }

    if classification.kind is FailureKind.UNKNOWN:
        error = cause if isinstance(cause, BaseException) else RuntimeError(repr(cause))
        logger.log_error(error, log_context)
        return

    logger.log_warning("intake.rejected", log_context)
