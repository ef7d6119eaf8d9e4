"""FastAPI dependencies: services, shared in-process state, error mapping."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends, HTTPException, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from locpages.core.business_context import set_business_context
from locpages.domain.errors import (
    BatchAlreadyPublishedError,
    BatchNotFoundError,
    BatchPublishError,
    BusinessNotFoundError,
    BusinessValidationError,
    ContentWriterError,
    DraftConflictError,
    DraftNotFoundError,
    DuplicateBusinessError,
    InvalidExpirationError,
    PageGenerationError,
    PageNotFoundError,
    UpdateNotFoundError,
    UpdateValidationError,
)
from locpages.domain.services.batch_publication_service import BatchPublicationService, BatchRegistry
from locpages.domain.services.business_page_service import BusinessPageService
from locpages.domain.services.page_lifecycle_service import PageLifecycleService
from locpages.infrastructure.page_events import PageChangeNotifier
from locpages.llm.content_writer import ContentWriter, LLMContentWriter
from locpages.llm.factory import get_llm_client
from locpages.persistence.database import get_db
from locpages.persistence.repositories import (
    BusinessRepository,
    BusinessUpdateRepository,
    GeneratedPageRepository,
)

# Unpublished batches and change subscriptions live in this process only
batch_registry = BatchRegistry()
page_notifier = PageChangeNotifier()


def get_batch_registry() -> BatchRegistry:
    return batch_registry


def get_page_notifier() -> PageChangeNotifier:
    return page_notifier


@lru_cache
def get_content_writer() -> ContentWriter:
    """Content writer backed by the configured LLM."""
    return LLMContentWriter(get_llm_client())


async def business_scope(business_id: Annotated[int, Path()]) -> int:
    """Tag logs for this request with the business id from the path."""
    set_business_context(business_id)
    return business_id


def get_business_page_service(
    db: Annotated[AsyncSession, Depends(get_db)],
    notifier: Annotated[PageChangeNotifier, Depends(get_page_notifier)],
) -> BusinessPageService:
    return BusinessPageService(BusinessRepository(db), GeneratedPageRepository(db), notifier=notifier)


def get_lifecycle_service(
    db: Annotated[AsyncSession, Depends(get_db)],
    notifier: Annotated[PageChangeNotifier, Depends(get_page_notifier)],
) -> PageLifecycleService:
    return PageLifecycleService(GeneratedPageRepository(db), notifier=notifier)


def get_batch_service(
    db: Annotated[AsyncSession, Depends(get_db)],
    content_writer: Annotated[ContentWriter, Depends(get_content_writer)],
    registry: Annotated[BatchRegistry, Depends(get_batch_registry)],
    notifier: Annotated[PageChangeNotifier, Depends(get_page_notifier)],
) -> BatchPublicationService:
    return BatchPublicationService(
        BusinessRepository(db),
        BusinessUpdateRepository(db),
        GeneratedPageRepository(db),
        content_writer,
        registry,
        notifier=notifier,
    )


_STATUS_BY_ERROR: tuple[tuple[type[PageGenerationError], int], ...] = (
    (BusinessValidationError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (UpdateValidationError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (InvalidExpirationError, status.HTTP_400_BAD_REQUEST),
    (DuplicateBusinessError, status.HTTP_409_CONFLICT),
    (BatchAlreadyPublishedError, status.HTTP_409_CONFLICT),
    (DraftConflictError, status.HTTP_409_CONFLICT),
    (BusinessNotFoundError, status.HTTP_404_NOT_FOUND),
    (UpdateNotFoundError, status.HTTP_404_NOT_FOUND),
    (PageNotFoundError, status.HTTP_404_NOT_FOUND),
    (BatchNotFoundError, status.HTTP_404_NOT_FOUND),
    (DraftNotFoundError, status.HTTP_404_NOT_FOUND),
    (ContentWriterError, status.HTTP_502_BAD_GATEWAY),
    (BatchPublishError, status.HTTP_502_BAD_GATEWAY),
)


def to_http_exception(error: PageGenerationError) -> HTTPException:
    """Map a domain error to an HTTP error carrying its message."""
    status_code = status.HTTP_400_BAD_REQUEST
    for error_type, code in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            status_code = code
            break

    detail: str | dict = str(error)
    if isinstance(error, (BusinessValidationError, UpdateValidationError)):
        detail = {"message": str(error), "field_errors": error.field_errors}
    elif isinstance(error, BatchPublishError):
        detail = {"message": str(error), "created_page_ids": [page.id for page in error.created_pages]}
    return HTTPException(status_code=status_code, detail=detail)
