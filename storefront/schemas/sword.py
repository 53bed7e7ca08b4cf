"""Pydantic schemas for the sword catalog."""

from __future__ import annotations

from typing import Literal

from pydantic import (
    AnyHttpUrl,
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
    field_validator,
)

SwordCategory = Literal["KATANA", "WAKIZASHI", "TANTO"]

_HTTP_URL = TypeAdapter(AnyHttpUrl)


class SwordUpdate(BaseModel):
    """Full replacement of a sword's editable fields."""

    model_config = ConfigDict(
        strict=True,
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        allow_inf_nan=False,
    )

    name: str = Field(..., min_length=1)
    name_japanese: str = Field(..., alias="nameJapanese", min_length=1)
    category: SwordCategory
    price: float = Field(..., gt=0)
    description: str = Field(..., min_length=10)
    craftsman: str = Field(..., min_length=1)
    era: str = Field(..., min_length=1)
    image: str = Field(..., description="Absolute http(s) URL of the product image.")
    specifications: dict[str, str]
    available: bool | None = None

    @field_validator("image")
    @classmethod
    def image_must_be_http_url(cls, value: str) -> str:
        # Stored as submitted; the parsed URL would add a trailing slash
        try:
            _HTTP_URL.validate_python(value)
        except ValidationError:
            raise ValueError("image must be an absolute http(s) URL") from None
        return value


class SwordListQuery(BaseModel):
    """Query string parameters for the catalog listing.

    Lax on purpose: query values always arrive as text.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    page: int = Field(1, ge=1)
    limit: int = Field(10, ge=1, le=100)
    category: SwordCategory | None = None
    search: str | None = None
    sort_by: Literal["price", "createdAt"] = Field("createdAt", alias="sortBy")
    order: Literal["asc", "desc"] = "desc"
