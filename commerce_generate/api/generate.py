"""Generate API endpoints.

Provides the settings form description and the generate action for
commerce products.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from commerce_generate.api.schemas import (
    ErrorResponse,
    FormFieldSchema,
    GenerateRequest,
    GenerateResponse,
    SettingsFormResponse,
)
from commerce_generate.catalog.generator import parse_skip_fields
from commerce_generate.catalog.service import GenerateService
from commerce_generate.domain.exceptions import InvalidGenerateSettingsError
from commerce_generate.infrastructure.database import get_session

router = APIRouter(prefix="/generate", tags=["Generate"])


# ============================================================================
# Dependencies
# ============================================================================


def get_service(session: Annotated[AsyncSession, Depends(get_session)]) -> GenerateService:
    """Get generate service bound to the request session."""
    return GenerateService(session)


# ============================================================================
# Endpoints
# ============================================================================


@router.get(
    "/commerce/settings",
    response_model=SettingsFormResponse,
    summary="Settings form",
    description="Describe the fields accepted by the generate action.",
)
async def get_settings_form(
    service: Annotated[GenerateService, Depends(get_service)],
) -> SettingsFormResponse:
    """Describe the settings form.

    Returns:
        Form fields with defaults and options.
    """
    return SettingsFormResponse(
        fields=[FormFieldSchema(**field) for field in service.settings_form()]
    )


@router.post(
    "/commerce",
    response_model=GenerateResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        401: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
    },
    summary="Generate products",
    description="Generate commerce products, optionally deleting existing ones first.",
)
async def generate_products(
    request: GenerateRequest,
    service: Annotated[GenerateService, Depends(get_service)],
    skip_fields: Annotated[
        str | None,
        Query(alias="skip-fields", description="Comma-separated field names to skip"),
    ] = None,
) -> GenerateResponse:
    """Run the generator.

    Args:
        request: Generation settings.
        service: Generate service.
        skip_fields: Comma-separated field names to leave unpopulated.

    Returns:
        Generation result.

    Raises:
        HTTPException: If the settings name an unknown currency or language.
    """
    config = request.to_config(parse_skip_fields(skip_fields))

    try:
        result = await service.generate(config)
    except InvalidGenerateSettingsError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={
                "error_code": "INVALID_SETTINGS",
                "message": e.message,
                "details": [{"field": e.details["setting"], "message": e.details["reason"]}],
            },
        ) from e

    return GenerateResponse(**result)
