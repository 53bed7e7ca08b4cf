"""Error envelope schemas shared across API handlers."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ErrorBody(BaseModel):
    """Canonical error payload object."""

    code: str = Field(..., description="Stable, machine-readable error code.")
    message: str = Field(..., description="Human-readable message, safe for clients.")
    details: Any | None = Field(
        default=None,
        description="Optional structured context (e.g., field-level violations).",
    )


class ErrorEnvelope(BaseModel):
    """Top-level API error response envelope."""

    error: ErrorBody

    def to_content(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)
