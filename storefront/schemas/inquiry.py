"""Pydantic schemas for customer inquiries."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from storefront.schemas.contact import reject_explicit_null

# Collision-resistant ids: a leading "c" followed by at least 8 non-space chars
CUID_PATTERN = r"^[cC][^\s-]{8,}$"

InquiryInterest = Literal["KATANA", "WAKIZASHI", "TANTO", "CUSTOM", "CONSULTATION"]


class InquiryCreate(BaseModel):
    """Payload for creating an inquiry about a sword or a commission."""

    model_config = ConfigDict(
        strict=True,
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    user_id: str = Field(..., alias="userId", pattern=CUID_PATTERN)
    sword_id: str | None = Field(default=None, alias="swordId", pattern=CUID_PATTERN)
    interest: InquiryInterest
    message: str = Field(..., min_length=10, max_length=1000)

    @field_validator("sword_id", mode="before")
    @classmethod
    def sword_id_not_null(cls, value: object) -> object:
        return reject_explicit_null(value)


class InquiryListQuery(BaseModel):
    """Query string filters for listing inquiries."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    user_id: str | None = Field(default=None, alias="userId")
