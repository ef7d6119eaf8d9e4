"""Page lifecycle API endpoints."""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from locpages.api.deps import get_lifecycle_service, to_http_exception
from locpages.domain.errors import PageGenerationError
from locpages.domain.services.page_lifecycle_service import PageLifecycleService, PageSummary

router = APIRouter()


class ExtendRequest(BaseModel):
    """Extend request. Common presets: 24, 72, 168, 336, 720 hours."""

    hours: int = Field(24, gt=0)


class ReactivateRequest(BaseModel):
    """Reactivate request."""

    expires_at: datetime


@router.post("/{page_id}/extend", response_model=PageSummary)
async def extend_page(
    page_id: int,
    lifecycle: Annotated[PageLifecycleService, Depends(get_lifecycle_service)],
    payload: ExtendRequest | None = None,
) -> PageSummary:
    """Set a page to expire the given number of hours from now."""
    hours = payload.hours if payload else 24
    try:
        page = await lifecycle.extend(page_id, hours)
    except PageGenerationError as e:
        raise to_http_exception(e) from e
    return PageSummary.from_page(page)


@router.post("/{page_id}/expire", response_model=PageSummary)
async def expire_page(
    page_id: int,
    lifecycle: Annotated[PageLifecycleService, Depends(get_lifecycle_service)],
) -> PageSummary:
    """Take a page offline now."""
    try:
        page = await lifecycle.expire_now(page_id)
    except PageGenerationError as e:
        raise to_http_exception(e) from e
    return PageSummary.from_page(page)


@router.post("/{page_id}/reactivate", response_model=PageSummary)
async def reactivate_page(
    page_id: int,
    payload: ReactivateRequest,
    lifecycle: Annotated[PageLifecycleService, Depends(get_lifecycle_service)],
) -> PageSummary:
    """Bring an expired page back online with a new expiration."""
    try:
        page = await lifecycle.reactivate(page_id, payload.expires_at)
    except PageGenerationError as e:
        raise to_http_exception(e) from e
    return PageSummary.from_page(page)


@router.delete("/{page_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_page(
    page_id: int,
    lifecycle: Annotated[PageLifecycleService, Depends(get_lifecycle_service)],
) -> None:
    """Delete a page permanently."""
    try:
        await lifecycle.delete(page_id)
    except PageGenerationError as e:
        raise to_http_exception(e) from e
