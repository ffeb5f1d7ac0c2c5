"""Domain models (Pydantic v2).

Notes:
- These models describe *what* the API returns, not *how* it is fetched.
- Field aliases are the wire names used by the EAN-Search JSON responses;
  integers that arrive as JSON strings are coerced by Pydantic.
- `BasicProduct` and `FullProduct` form a tagged union on `kind`. Which one a
  JSON object becomes depends only on whether it carries a usable
  `googleCategoryId`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Generic, Literal, TypeVar, Union

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict

T = TypeVar("T")


class _ProductFields(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    barcode: str = Field(
        ...,
        min_length=1,
        alias="ean",
        description="EAN/UPC/GTIN of the product.",
    )
    name: str = Field(
        ...,
        min_length=1,
        description="Product name as stored in the database.",
    )
    category_id: int = Field(
        ...,
        ge=0,
        alias="categoryId",
        description="EAN-Search category identifier.",
    )
    category_name: str = Field(
        ...,
        min_length=1,
        alias="categoryName",
        description="EAN-Search category label.",
    )
    issuing_country: str = Field(
        ...,
        min_length=1,
        alias="issuingCountry",
        description="Two-letter code of the country that issued the barcode.",
    )

    @field_validator("category_id", mode="before")
    @classmethod
    def _reject_bool_category(cls, value: object) -> object:
        if isinstance(value, bool):
            raise ValueError("categoryId must be an integer, not a boolean")
        return value


class BasicProduct(_ProductFields):
    """Catalog entry without extended metadata (typical for search results)."""

    kind: Literal["basic"] = "basic"


class FullProduct(_ProductFields):
    """Catalog entry that also carries the Google product taxonomy id."""

    kind: Literal["full"] = "full"
    google_category_id: int = Field(
        ...,
        alias="googleCategoryId",
        description="Google product taxonomy category.",
    )


ProductResult = Annotated[Union[BasicProduct, FullProduct], Field(discriminator="kind")]
ProductList = list[ProductResult]


class FailureReason(str, Enum):
    """Why an API call did not produce a value."""

    TRANSPORT_ERROR = "transport_error"
    INVALID_JSON = "invalid_json"
    UNEXPECTED_SHAPE = "unexpected_shape"
    MISSING_FIELD = "missing_field"
    SERVICE_ERROR = "service_error"
    INVALID_ARGUMENT = "invalid_argument"


@dataclass(frozen=True)
class ApiResult(Generic[T]):
    """Outcome of one facade call: a value, or the reason there is none."""

    value: T | None = None
    failure: FailureReason | None = None
    detail: str | None = None

    @classmethod
    def success(cls, value: T) -> "ApiResult[T]":
        return cls(value=value)

    @classmethod
    def failed(cls, reason: FailureReason, detail: str | None = None) -> "ApiResult[T]":
        return cls(failure=reason, detail=detail)

    @property
    def ok(self) -> bool:
        return self.failure is None

    def unwrap_or(self, default: T) -> T:
        """Return the value, or `default` when the call failed."""

        if self.failure is not None or self.value is None:
            return default
        return self.value
