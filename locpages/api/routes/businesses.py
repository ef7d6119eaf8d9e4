"""Business profile API endpoints."""

import logging
from datetime import datetime
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel

from locpages.api.deps import (
    business_scope,
    get_business_page_service,
    get_lifecycle_service,
    to_http_exception,
)
from locpages.domain.errors import PageGenerationError
from locpages.domain.services.business_page_service import BusinessPageService
from locpages.domain.services.page_lifecycle_service import PageLifecycleService, PageSummary

logger = logging.getLogger(__name__)

router = APIRouter()


class BusinessProfileFields(BaseModel):
    """Editable business profile fields."""

    name: str | None = None
    slug: str | None = None
    primary_category: str | None = None
    description: str | None = None

    address_street: str | None = None
    address_city: str | None = None
    address_state: str | None = None
    zip_code: str | None = None
    country: str | None = None
    phone: str | None = None
    website: str | None = None
    latitude: float | None = None
    longitude: float | None = None

    hours: str | None = None
    base_hours: dict[str, Any] | None = None
    structured_hours: list[dict[str, Any]] | dict[str, Any] | None = None

    price_positioning: str | None = None
    established_year: int | None = None

    specialties: list[Any] | None = None
    services: list[Any] | None = None
    payment_methods: list[Any] | None = None
    accessibility_features: list[Any] | None = None
    languages_spoken: list[Any] | None = None
    parking_info: dict[str, Any] | None = None
    service_area: str | None = None
    service_area_details: dict[str, Any] | None = None

    awards: list[Any] | None = None
    certifications: list[Any] | None = None
    social_media: dict[str, Any] | None = None
    review_summary: dict[str, Any] | None = None
    business_faqs: list[dict[str, Any]] | None = None


class BusinessCreate(BusinessProfileFields):
    """Business creation request."""

    email: str | None = None


class BusinessUpdate(BusinessProfileFields):
    """Business profile edit request."""

    email: str | None = None


class BusinessResponse(BaseModel):
    """Business profile response."""

    id: int
    email: str
    name: str
    slug: str
    primary_category: str | None
    description: str | None
    address_street: str | None
    address_city: str
    address_state: str
    zip_code: str | None
    country: str
    phone: str | None
    website: str | None
    established_year: int | None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


@router.post("", response_model=BusinessResponse, status_code=status.HTTP_201_CREATED)
async def create_business(
    payload: BusinessCreate,
    service: Annotated[BusinessPageService, Depends(get_business_page_service)],
) -> BusinessResponse:
    """Create a business profile and its permanent profile page."""
    try:
        business = await service.create_business(payload.model_dump(exclude_unset=True))
    except PageGenerationError as e:
        raise to_http_exception(e) from e
    return BusinessResponse.model_validate(business)


@router.get("/{business_id}", response_model=BusinessResponse)
async def get_business(
    business_id: Annotated[int, Depends(business_scope)],
    service: Annotated[BusinessPageService, Depends(get_business_page_service)],
) -> BusinessResponse:
    """Get a business profile."""
    try:
        business = await service.get_business(business_id)
    except PageGenerationError as e:
        raise to_http_exception(e) from e
    return BusinessResponse.model_validate(business)


@router.put("/{business_id}", response_model=BusinessResponse)
async def update_business(
    payload: BusinessUpdate,
    business_id: Annotated[int, Depends(business_scope)],
    service: Annotated[BusinessPageService, Depends(get_business_page_service)],
) -> BusinessResponse:
    """Edit a business profile. The profile page is regenerated afterwards."""
    try:
        business = await service.update_profile(business_id, payload.model_dump(exclude_unset=True))
    except PageGenerationError as e:
        raise to_http_exception(e) from e
    return BusinessResponse.model_validate(business)


@router.get("/{business_id}/pages", response_model=list[PageSummary])
async def list_business_pages(
    business_id: Annotated[int, Depends(business_scope)],
    business_service: Annotated[BusinessPageService, Depends(get_business_page_service)],
    lifecycle: Annotated[PageLifecycleService, Depends(get_lifecycle_service)],
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
) -> list[PageSummary]:
    """List a business's pages, newest first, with lifecycle state."""
    try:
        await business_service.get_business(business_id)
    except PageGenerationError as e:
        raise to_http_exception(e) from e

    pages = await lifecycle.list_pages(business_id, skip=skip, limit=limit)
    logger.info(f"Listed {len(pages)} pages for business {business_id}")
    return pages
