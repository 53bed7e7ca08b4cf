"""Request intake orchestration.

Every write request walks the same state machine:

    RECEIVED -> RATE_CHECKED -> VALIDATED -> PROCESSED -> RESPONDED
    RECEIVED | RATE_CHECKED | VALIDATED -> REJECTED -> RESPONDED

The handler owns no cross-request state; the only shared mutable state is
the injected rate limiter. Failures never escape as exceptions: each one is
classified into the error envelope and logged through the structured logger.
"""

from __future__ import annotations

import asyncio
import functools
import inspect
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Mapping

from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel

from storefront.adapters.rate_limit.base import AbstractRateLimiter
from storefront.core.error_classifier import classify, report_failure
from storefront.core.errors import FailureKind
from storefront.core.logging import StructuredLogger
from storefront.core.rate_limit import hash_client_key
from storefront.core.validation import ValidationFailure, validate_payload


class RequestState(str, Enum):
    RECEIVED = "received"
    RATE_CHECKED = "rate_checked"
    VALIDATED = "validated"
    PROCESSED = "processed"
    REJECTED = "rejected"
    RESPONDED = "responded"


VALID_TRANSITIONS: dict[RequestState, frozenset[RequestState]] = {
    RequestState.RECEIVED: frozenset({RequestState.RATE_CHECKED, RequestState.REJECTED}),
    RequestState.RATE_CHECKED: frozenset({RequestState.VALIDATED, RequestState.REJECTED}),
    RequestState.VALIDATED: frozenset({RequestState.PROCESSED, RequestState.REJECTED}),
    RequestState.PROCESSED: frozenset({RequestState.RESPONDED}),
    RequestState.REJECTED: frozenset({RequestState.RESPONDED}),
    RequestState.RESPONDED: frozenset(),  # terminal
}


class IllegalTransitionError(RuntimeError):
    """Raised when the handler attempts a transition the state machine forbids."""


class _Trail:
    """Ordered record of the states one request has visited."""

    def __init__(self) -> None:
        self._states: list[RequestState] = [RequestState.RECEIVED]

    @property
    def current(self) -> RequestState:
        return self._states[-1]

    @property
    def states(self) -> tuple[RequestState, ...]:
        return tuple(self._states)

    def advance(self, target: RequestState) -> None:
        if target not in VALID_TRANSITIONS[self.current]:
            raise IllegalTransitionError(f"{self.current.value} -> {target.value}")
        self._states.append(target)


@dataclass(frozen=True)
class Endpoint:
    """Intake configuration for one route.

    Attributes:
        name: Stable endpoint identifier used in logs (e.g. ``contact.submit``).
        operation: Domain operation. Called as ``operation(payload, **params)``
            when a schema is set, otherwise ``operation(**params)``. May be sync
            (run in the default executor) or async.
        schema: Pydantic model validating the body/query, or None.
        success_status: HTTP status for a successful response.
        rate_limited: Whether requests count against the client's window.
        audit: Log an info record for every accepted request.
    """

    name: str
    operation: Callable[..., Any]
    schema: type[BaseModel] | None = None
    success_status: int = 200
    rate_limited: bool = True
    audit: bool = False


@dataclass(frozen=True)
class HandlerResponse:
    status_code: int
    body: Any
    headers: Mapping[str, str] = field(default_factory=dict)
    trail: tuple[RequestState, ...] = ()
    kind: FailureKind | None = None

    @property
    def ok(self) -> bool:
        return self.kind is None


class RequestHandler:
    """Compose rate limiting, validation, the domain call and classification."""

    def __init__(
        self,
        limiter: AbstractRateLimiter,
        *,
        logger: StructuredLogger | None = None,
        rate_limit_enabled: bool = True,
        include_rate_limit_headers: bool = True,
    ) -> None:
        self._limiter = limiter
        self._logger = logger or StructuredLogger(logging.getLogger(__name__))
        self._rate_limit_enabled = rate_limit_enabled
        self._include_rate_limit_headers = include_rate_limit_headers

    @property
    def limiter(self) -> AbstractRateLimiter:
        return self._limiter

    async def handle(
        self,
        endpoint: Endpoint,
        *,
        client_key: str,
        payload: Any = None,
        params: Mapping[str, Any] | None = None,
    ) -> HandlerResponse:
        """Run one request through the intake pipeline.

        Args:
            endpoint: Route configuration and domain operation.
            client_key: Rate-limit bucket for the caller.
            payload: Raw body bytes/str or a mapping of query values.
            params: Path parameters forwarded to the operation as keywords.

        Returns:
            HandlerResponse with status, JSON-ready body, headers and state trail.
        """
        trail = _Trail()

        if endpoint.rate_limited and self._rate_limit_enabled:
            try:
                decision = self._limiter.check(client_key)
            except Exception as exc:
                return self._reject(trail, endpoint, exc, client_key)
            if not decision.allowed:
                return self._reject(trail, endpoint, decision, client_key)
        trail.advance(RequestState.RATE_CHECKED)

        args: list[Any] = []
        if endpoint.schema is not None:
            outcome = validate_payload(endpoint.schema, payload)
            if isinstance(outcome, ValidationFailure):
                return self._reject(trail, endpoint, outcome, client_key)
            args.append(outcome.value)
        trail.advance(RequestState.VALIDATED)

        try:
            result = await self._invoke(endpoint, args, params or {})
            body = jsonable_encoder(result)
        except Exception as exc:
            return self._reject(trail, endpoint, exc, client_key)
        trail.advance(RequestState.PROCESSED)

        if endpoint.audit:
            self._logger.log_info(
                "intake.accepted",
                {"endpoint": endpoint.name, "status_code": endpoint.success_status},
            )

        trail.advance(RequestState.RESPONDED)
        return HandlerResponse(
            status_code=endpoint.success_status,
            body=body,
            trail=trail.states,
        )

    async def _invoke(
        self,
        endpoint: Endpoint,
        args: list[Any],
        params: Mapping[str, Any],
    ) -> Any:
        call = functools.partial(endpoint.operation, *args, **params)
        if inspect.iscoroutinefunction(endpoint.operation):
            return await call()

        loop = asyncio.get_running_loop()
        result = await loop.run_in_executor(None, call)
        if inspect.isawaitable(result):
            result = await result
        return result

    def _reject(
        self,
        trail: _Trail,
        endpoint: Endpoint,
        cause: object,
        client_key: str,
    ) -> HandlerResponse:
        trail.advance(RequestState.REJECTED)
        classification = classify(
            cause,
            include_rate_limit_headers=self._include_rate_limit_headers,
        )
        report_failure(
            classification,
            cause,
            endpoint=endpoint.name,
            logger=self._logger,
            context={"client_key_hash": hash_client_key(client_key)},
        )
        trail.advance(RequestState.RESPONDED)
        return HandlerResponse(
            status_code=classification.status_code,
            body=classification.envelope.to_content(),
            headers=dict(classification.headers),
            trail=trail.states,
            kind=classification.kind,
        )
