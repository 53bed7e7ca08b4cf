"""Pydantic schemas for contact form submissions."""

from __future__ import annotations

from typing import Annotated, Literal

from email_validator import EmailNotValidError, validate_email
from pydantic import AfterValidator, BaseModel, ConfigDict, Field, StrictBool, field_validator

# ASCII digits only; ``\d`` would also admit other Unicode digits
PHONE_PATTERN = r"^\+?[1-9][0-9]{1,14}$"

ContactInterest = Literal["katana", "wakizashi", "tanto", "custom", "consultation"]


def _check_email(value: str) -> str:
    """Reject malformed addresses but return the submitted text unchanged."""
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        raise ValueError("value is not a valid email address") from None
    return value


EmailText = Annotated[str, AfterValidator(_check_email), Field(json_schema_extra={"format": "email"})]


def reject_explicit_null(value: object) -> object:
    """Optional fields may be omitted, but not sent as ``null``."""
    if value is None:
        raise ValueError("must be omitted rather than null")
    return value


class ContactSubmission(BaseModel):
    """Validated contact form payload.

    Strict: values are never coerced (``"true"`` and ``1`` are not booleans).
    Unknown fields are ignored.
    """

    model_config = ConfigDict(
        strict=True,
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    name: str = Field(..., min_length=2, max_length=50)
    email: EmailText
    phone: str | None = Field(
        default=None,
        pattern=PHONE_PATTERN,
        description="International phone number (E.164-like).",
    )
    interest: ContactInterest
    message: str = Field(..., min_length=10, max_length=1000)
    accept_terms: StrictBool = Field(
        ...,
        alias="acceptTerms",
        description="Must be true; the caller accepted the terms.",
    )

    @field_validator("phone", mode="before")
    @classmethod
    def phone_not_null(cls, value: object) -> object:
        return reject_explicit_null(value)

    @field_validator("accept_terms")
    @classmethod
    def terms_must_be_accepted(cls, value: bool) -> bool:
        if value is not True:
            raise ValueError("terms must be accepted")
        return value


class ContactResponse(BaseModel):
    message: str
