"""Schema validation returning explicit outcomes instead of raising.

``validate_payload`` accepts the untrusted body as raw JSON (bytes or str) or
an already-decoded mapping (query parameters) and returns either ``Valid``
wrapping the frozen model or a ``ValidationFailure`` listing every violated
rule.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Mapping, TypeVar

from pydantic import BaseModel, ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)

BODY_FIELD = "body"


@dataclass(frozen=True)
class Violation:
    """One violated rule.

    Attributes:
        field: Dotted path of the offending field (``body`` for the payload itself).
        rule: Machine-readable rule id (pydantic error type, e.g. ``string_too_short``).
        message: Human-readable explanation without the submitted value.
    """

    field: str
    rule: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "rule": self.rule, "message": self.message}


@dataclass(frozen=True)
class ValidationFailure:
    violations: tuple[Violation, ...]

    @property
    def fields(self) -> set[str]:
        return {v.field for v in self.violations}

    def to_details(self) -> list[dict[str, str]]:
        return [v.to_dict() for v in self.violations]


@dataclass(frozen=True)
class Valid(Generic[ModelT]):
    value: ModelT


def _field_path(loc: tuple[Any, ...]) -> str:
    return ".".join(str(part) for part in loc) or BODY_FIELD


def _to_violations(exc: ValidationError) -> tuple[Violation, ...]:
    return tuple(
        Violation(
            field=_field_path(tuple(error.get("loc", ()))),
            rule=str(error.get("type", "invalid")),
            message=str(error.get("msg", "Invalid value")),
        )
        for error in exc.errors(include_url=False, include_input=False)
    )


def validate_payload(
    schema: type[ModelT],
    raw: bytes | bytearray | str | Mapping[str, Any] | None,
) -> Valid[ModelT] | ValidationFailure:
    """Validate an untrusted payload against ``schema``.

    Validation is total: every failing field is reported, not just the first.
    Fields the schema does not declare are ignored.

    Args:
        schema: Pydantic model class describing the endpoint payload.
        raw: Raw JSON text/bytes, or a mapping of already-decoded values.

    Returns:
        ``Valid`` with the model instance, or ``ValidationFailure``.
    """
    try:
        if isinstance(raw, (bytes, bytearray, str)):
            value = schema.model_validate_json(raw)
        elif isinstance(raw, Mapping):
            value = schema.model_validate(dict(raw))
        else:
            return ValidationFailure(
                violations=(
                    Violation(
                        field=BODY_FIELD,
                        rule="model_type",
                        message="Payload must be a JSON object",
                    ),
                )
            )
    except ValidationError as exc:
        return ValidationFailure(violations=_to_violations(exc))

    return Valid(value=value)
