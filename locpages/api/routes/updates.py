"""Update intake and draft batch API endpoints."""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from locpages.api.deps import business_scope, get_batch_service, to_http_exception
from locpages.domain.errors import PageGenerationError
from locpages.domain.models.website_info import FAQEntry
from locpages.domain.services.batch_publication_service import (
    BatchPublicationService,
    PageBatch,
    PageDraft,
)
from locpages.domain.services.page_lifecycle_service import PageSummary

router = APIRouter()


class UpdateCreate(BaseModel):
    """Update submission request."""

    content_text: str
    starts_at: datetime | None = None
    expires_at: datetime | None = None  # omit for a permanent update
    deal_terms: str | None = None
    update_category: str | None = None
    special_hours: str | None = None
    intents: list[str] | None = None  # defaults to every intent variant


class DraftEdit(BaseModel):
    """Draft edit request. Only the fields sent are changed."""

    title: str | None = None
    description: str | None = None
    slug: str | None = None
    highlights: list[str] | None = None
    faqs: list[FAQEntry] | None = None


class PublishResponse(BaseModel):
    """Pages created by publishing a batch."""

    batch_id: str
    pages: list[PageSummary]


@router.post(
    "/businesses/{business_id}/updates",
    response_model=PageBatch,
    status_code=status.HTTP_201_CREATED,
)
async def submit_update(
    payload: UpdateCreate,
    business_id: Annotated[int, Depends(business_scope)],
    service: Annotated[BatchPublicationService, Depends(get_batch_service)],
) -> PageBatch:
    """Record an update and draft one page per intent for preview."""
    try:
        update = await service.create_update(
            business_id,
            payload.content_text,
            starts_at=payload.starts_at,
            expires_at=payload.expires_at,
            deal_terms=payload.deal_terms,
            update_category=payload.update_category,
            special_hours=payload.special_hours,
        )
        return await service.draft_batch(update.id, payload.intents)
    except PageGenerationError as e:
        raise to_http_exception(e) from e


@router.get("/batches/{batch_id}", response_model=PageBatch)
async def get_batch(
    batch_id: str,
    service: Annotated[BatchPublicationService, Depends(get_batch_service)],
) -> PageBatch:
    """Get a draft batch."""
    try:
        return service.get_batch(batch_id)
    except PageGenerationError as e:
        raise to_http_exception(e) from e


@router.patch("/batches/{batch_id}/drafts/{draft_id}", response_model=PageDraft)
async def edit_draft(
    batch_id: str,
    draft_id: str,
    payload: DraftEdit,
    service: Annotated[BatchPublicationService, Depends(get_batch_service)],
) -> PageDraft:
    """Edit a draft before publishing."""
    try:
        return await service.edit_draft(batch_id, draft_id, payload.model_dump(exclude_unset=True))
    except PageGenerationError as e:
        raise to_http_exception(e) from e


@router.post("/batches/{batch_id}/drafts/{draft_id}/refresh", response_model=PageDraft)
async def refresh_draft(
    batch_id: str,
    draft_id: str,
    service: Annotated[BatchPublicationService, Depends(get_batch_service)],
) -> PageDraft:
    """Regenerate URL candidates, structured data and score for a draft."""
    try:
        return await service.refresh_draft(batch_id, draft_id)
    except PageGenerationError as e:
        raise to_http_exception(e) from e


@router.delete("/batches/{batch_id}/drafts/{draft_id}", response_model=PageBatch)
async def remove_draft(
    batch_id: str,
    draft_id: str,
    service: Annotated[BatchPublicationService, Depends(get_batch_service)],
) -> PageBatch:
    """Remove a draft from its batch."""
    try:
        return service.remove_draft(batch_id, draft_id)
    except PageGenerationError as e:
        raise to_http_exception(e) from e


@router.post("/batches/{batch_id}/publish", response_model=PublishResponse)
async def publish_batch(
    batch_id: str,
    service: Annotated[BatchPublicationService, Depends(get_batch_service)],
) -> PublishResponse:
    """Publish every remaining draft as a live page."""
    try:
        pages = await service.publish(batch_id)
    except PageGenerationError as e:
        raise to_http_exception(e) from e
    return PublishResponse(batch_id=batch_id, pages=[PageSummary.from_page(page) for page in pages])


@router.delete("/batches/{batch_id}", status_code=status.HTTP_204_NO_CONTENT)
async def discard_batch(
    batch_id: str,
    service: Annotated[BatchPublicationService, Depends(get_batch_service)],
) -> None:
    """Discard an unpublished batch."""
    try:
        await service.discard(batch_id)
    except PageGenerationError as e:
        raise to_http_exception(e) from e
