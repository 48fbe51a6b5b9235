"""API schemas for the generate API.

Pydantic models for request/response validation and serialization.
"""

from typing import Any

from pydantic import BaseModel, Field, model_validator

from commerce_generate.catalog.generator import GeneratorConfig
from commerce_generate.infrastructure.config import settings


# ============================================================================
# Common Schemas
# ============================================================================


class ErrorDetail(BaseModel):
    """Detailed error information."""

    field: str | None = Field(default=None, description="Field that caused the error")
    message: str = Field(..., description="Error message")


class ErrorResponse(BaseModel):
    """Standard error response.

    All API errors follow this format for consistency.
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: list[ErrorDetail] = Field(
        default_factory=list, description="Additional error details"
    )
    request_id: str | None = Field(
        default=None, description="Request ID for correlation"
    )


# ============================================================================
# Generate Schemas
# ============================================================================


class GenerateRequest(BaseModel):
    """Settings of a generation run, as submitted by the operator."""

    num: int = Field(default=settings.default_num, ge=0, description="Products to create")
    kill: bool = Field(default=False, description="Delete all products first")
    title_length: int = Field(
        default=settings.default_title_length,
        ge=1,
        le=255,
        description="Maximum length of product titles",
    )
    num_var: int = Field(
        default=settings.default_num_variations, ge=0, description="Variations per product"
    )
    title_var_length: int | None = Field(
        default=None,
        ge=1,
        le=255,
        description="Maximum length of variation SKUs (defaults to title_length)",
    )
    price_min: int = Field(default=settings.default_price_min, ge=0)
    price_max: int = Field(default=settings.default_price_max, ge=0)
    currency: str = Field(
        default=settings.default_currency, min_length=3, max_length=3
    )
    add_language: list[str] = Field(
        default_factory=lambda: [settings.default_language],
        description="Langcodes to pick from",
    )
    cascade: bool = Field(default=False, description="Also delete variations on kill")
    seed: int | None = Field(default=None, description="Random seed")

    @model_validator(mode="after")
    def check_price_range(self) -> "GenerateRequest":
        """Reject a reversed price range."""
        if self.price_min > self.price_max:
            raise ValueError("price_min must not be greater than price_max")
        return self

    def to_config(self, skip_fields: frozenset[str] = frozenset()) -> GeneratorConfig:
        """Convert to generator configuration.

        Args:
            skip_fields: Field names to leave unpopulated.

        Returns:
            Generator configuration.
        """
        return GeneratorConfig(
            count=self.num,
            title_length=self.title_length,
            variation_count=self.num_var,
            variation_title_length=self.title_var_length,
            price_min=self.price_min,
            price_max=self.price_max,
            currency_code=self.currency.upper(),
            languages=tuple(dict.fromkeys(self.add_language)),
            kill=self.kill,
            skip_fields=skip_fields,
            cascade_variations=self.cascade,
            seed=self.seed,
        )


class GenerateResponse(BaseModel):
    """Result of a generation run."""

    summary: str
    messages: list[str]
    deleted: int
    products_created: int
    variations_created: int
    product_ids: list[int]


class FormFieldSchema(BaseModel):
    """One field of the settings form."""

    name: str
    type: str
    title: str
    default: Any = None
    required: bool = False
    min: int | None = None
    max: int | None = None
    multiple: bool = False
    options: dict[str, str] | None = None


class SettingsFormResponse(BaseModel):
    """Settings form description."""

    fields: list[FormFieldSchema]
