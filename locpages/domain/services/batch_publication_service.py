"""Batch publication: draft page variants for an update, edit them, then publish.

An update is written up once per intent variant (direct, local, category,
branded-local, service-urgent, competitive). The drafts live in a PageBatch
held in memory until the user publishes or discards it; only publishing
creates GeneratedPage rows. Publishing is at-least-once: with the default
fail_open mode, pages created before a failure are kept and reported back.
"""

import asyncio
import logging
import time
import uuid
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from locpages.domain.errors import (
    BatchAlreadyPublishedError,
    BatchNotFoundError,
    BatchPublishError,
    BusinessNotFoundError,
    ContentWriterError,
    DraftConflictError,
    DraftNotFoundError,
    UpdateNotFoundError,
    UpdateValidationError,
)
from locpages.domain.models.business_record import BusinessRecord
from locpages.domain.models.website_info import FAQEntry, SuggestedUrls
from locpages.domain.services.discoverability_service import ScoreBreakdown, score_breakdown
from locpages.domain.services.page_lifecycle_service import canonical_url
from locpages.domain.services.structured_data_service import (
    MetaTags,
    SchemaBundle,
    generate_all_schemas,
    generate_meta_tags,
)
from locpages.domain.services.url_candidate_service import generate_ai_optimized_urls
from locpages.domain.services.website_info_builder import build_website_info, business_context
from locpages.infrastructure.page_events import PageChangeEvent, PageChangeNotifier
from locpages.llm.content_writer import INTENT_TYPES, ContentDraft, ContentRequest, ContentWriter
from locpages.persistence.models.business_update import BusinessUpdate
from locpages.persistence.models.generated_page import PAGE_TYPE_UPDATE, GeneratedPage
from locpages.persistence.repositories.business_repository import BusinessRepository
from locpages.persistence.repositories.business_update_repository import BusinessUpdateRepository
from locpages.persistence.repositories.generated_page_repository import GeneratedPageRepository
from locpages.settings import settings
from locpages.utils.slug import build_page_path, normalize_slug
from locpages.utils.time_utils import to_naive_utc, utc_now

logger = logging.getLogger(__name__)

FAIL_OPEN = "fail_open"
FAIL_CLOSED = "fail_closed"
FAILURE_MODES = (FAIL_OPEN, FAIL_CLOSED)

MIN_CONTENT_LENGTH = 10
MAX_CONTENT_LENGTH = 2000

EDITABLE_FIELDS = ("title", "description", "slug", "highlights", "faqs")


class BatchStatus(str, Enum):
    """Where a batch is in the preview/publish workflow."""

    DRAFTED = "drafted"
    PUBLISHING = "publishing"
    PUBLISHED = "published"
    FAILED = "failed"
    DISCARDED = "discarded"


class PageDraft(BaseModel):
    """One page variant awaiting publication."""

    id: str = Field(default_factory=lambda: uuid.uuid4().hex[:12])
    intent: str
    page_type: str = PAGE_TYPE_UPDATE
    title: str
    description: str = ""
    slug: str
    file_path: str
    url: str
    highlights: list[str] = []
    faqs: list[FAQEntry] = []
    suggested_urls: SuggestedUrls
    schemas: SchemaBundle
    meta_tags: MetaTags
    score: int
    score_breakdown: ScoreBreakdown


class PageBatch(BaseModel):
    """Drafts generated from one update, sharing a batch id."""

    batch_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    update_id: int
    business_id: int
    status: BatchStatus = BatchStatus.DRAFTED
    declared_total: int
    drafts: list[PageDraft] = []
    error: str | None = None
    created_at: datetime = Field(default_factory=utc_now)

    def find_draft(self, draft_id: str) -> PageDraft:
        for draft in self.drafts:
            if draft.id == draft_id:
                return draft
        raise DraftNotFoundError(f"Draft {draft_id} not found in batch {self.batch_id}")


class BatchRegistry:
    """In-memory home of unpublished batches.

    Also tracks which updates are mid-publication so two publishes of the
    same update cannot both proceed.
    """

    def __init__(self) -> None:
        self._batches: dict[str, PageBatch] = {}
        self._closed: dict[str, BatchStatus] = {}
        self._publishing: set[int] = set()

    def add(self, batch: PageBatch) -> None:
        self._batches[batch.batch_id] = batch

    def get(self, batch_id: str) -> PageBatch:
        """Get an open batch.

        Raises:
            BatchAlreadyPublishedError: The batch was published
            BatchNotFoundError: The batch never existed or was discarded
        """
        batch = self._batches.get(batch_id)
        if batch is not None:
            return batch
        if self._closed.get(batch_id) == BatchStatus.PUBLISHED:
            raise BatchAlreadyPublishedError(f"Batch {batch_id} is already published")
        raise BatchNotFoundError(f"Batch {batch_id} not found")

    def close(self, batch_id: str, status: BatchStatus) -> None:
        self._batches.pop(batch_id, None)
        self._closed[batch_id] = status

    def claim_publication(self, update_id: int) -> bool:
        """Mark an update as being published. False if it already is."""
        if update_id in self._publishing:
            return False
        self._publishing.add(update_id)
        return True

    def release_publication(self, update_id: int) -> None:
        self._publishing.discard(update_id)

    def __len__(self) -> int:
        return len(self._batches)


def _elapsed_ms(started: float) -> int:
    return int((time.monotonic() - started) * 1000)


def _variant_slug(
    preferred: str | None,
    suggested: SuggestedUrls,
    intent: str,
    taken: set[str],
) -> str:
    """Pick a slug unused within the batch: writer's slug, then URL candidates, then intent-suffixed."""
    candidates = [normalize_slug(preferred), suggested.primary, *suggested.alternatives]
    for candidate in candidates:
        if candidate and candidate not in taken:
            return candidate

    base = next((c for c in candidates if c), "update")
    slug = normalize_slug(f"{base}-{intent}")
    counter = 2
    while slug in taken:
        slug = normalize_slug(f"{base}-{intent}-{counter}")
        counter += 1
    return slug


class BatchPublicationService:
    """Coordinates drafting, editing and publishing of page batches."""

    def __init__(
        self,
        business_repo: BusinessRepository,
        update_repo: BusinessUpdateRepository,
        page_repo: GeneratedPageRepository,
        content_writer: ContentWriter,
        registry: BatchRegistry,
        failure_mode: str | None = None,
        notifier: PageChangeNotifier | None = None,
    ) -> None:
        self.business_repo = business_repo
        self.update_repo = update_repo
        self.page_repo = page_repo
        self.content_writer = content_writer
        self.registry = registry
        self.failure_mode = failure_mode or settings.batch_failure_mode
        if self.failure_mode not in FAILURE_MODES:
            raise ValueError(f"Unsupported batch failure mode: {self.failure_mode}")
        self.notifier = notifier

    async def _load_business(self, business_id: int) -> BusinessRecord:
        business = await self.business_repo.get_by_id(business_id)
        if business is None:
            raise BusinessNotFoundError(f"Business {business_id} not found")
        return BusinessRecord.model_validate(business)

    async def _load_update(self, update_id: int) -> BusinessUpdate:
        update = await self.update_repo.get_by_id(update_id)
        if update is None:
            raise UpdateNotFoundError(f"Update {update_id} not found")
        return update

    async def create_update(
        self,
        business_id: int,
        content_text: str,
        starts_at: datetime | None = None,
        expires_at: datetime | None = None,
        deal_terms: str | None = None,
        update_category: str | None = None,
        special_hours: str | None = None,
    ) -> BusinessUpdate:
        """Record a new pending update for a business.

        Raises:
            BusinessNotFoundError: Unknown business
            UpdateValidationError: Content length or validity window is invalid
        """
        await self._load_business(business_id)

        errors: dict[str, str] = {}
        text = (content_text or "").strip()
        if len(text) < MIN_CONTENT_LENGTH:
            errors["content_text"] = f"must be at least {MIN_CONTENT_LENGTH} characters"
        elif len(text) > MAX_CONTENT_LENGTH:
            errors["content_text"] = f"must be at most {MAX_CONTENT_LENGTH} characters"

        starts_at = to_naive_utc(starts_at) or utc_now()
        expires_at = to_naive_utc(expires_at)
        if expires_at is not None and expires_at <= starts_at:
            errors["expires_at"] = "must be after starts_at"

        if errors:
            raise UpdateValidationError(errors)

        update = await self.update_repo.create(
            business_id=business_id,
            content_text=text,
            status="pending",
            starts_at=starts_at,
            expires_at=expires_at,
            deal_terms=deal_terms,
            update_category=update_category or "general",
            special_hours=special_hours,
        )
        logger.info(f"Created update {update.id} for business {business_id}")
        return update

    def _assemble(
        self,
        business: BusinessRecord,
        update: BusinessUpdate,
        intent: str,
        content: ContentDraft,
        taken: set[str],
        slug: str | None = None,
        draft_id: str | None = None,
    ) -> PageDraft:
        """Run URL candidates, structured data and scoring over written copy."""
        suggested = generate_ai_optimized_urls(
            business_type=business.primary_category,
            update_content=update.content_text,
            location=business.location,
            specialties=business.specialties,
        )
        variant_slug = slug or _variant_slug(content.slug, suggested, intent, taken)
        file_path = build_page_path(
            business.country or "US",
            business.address_state or "",
            business.address_city or "",
            business.slug or business.name,
            variant_slug,
        )
        url = canonical_url(file_path)

        info = build_website_info(business, update, content, page_url=url, suggested_urls=suggested)
        breakdown = score_breakdown(info)

        extra: dict[str, Any] = {"id": draft_id} if draft_id else {}
        return PageDraft(
            intent=intent,
            page_type=content.page_type or PAGE_TYPE_UPDATE,
            title=content.title,
            description=content.description,
            slug=variant_slug,
            file_path=file_path,
            url=url,
            highlights=content.highlights,
            faqs=content.faqs,
            suggested_urls=suggested,
            schemas=generate_all_schemas(info, business),
            meta_tags=generate_meta_tags(info),
            score=breakdown.total,
            score_breakdown=breakdown,
            **extra,
        )

    async def draft_batch(self, update_id: int, intents: list[str] | None = None) -> PageBatch:
        """Write one draft per intent and hold them in a new batch.

        The content writer is called concurrently for all intents and every
        call is awaited before the batch counts as drafted. If any call fails
        the update is marked failed and the writer's error is raised as-is.

        Raises:
            UpdateNotFoundError: Unknown update
            BatchAlreadyPublishedError: The update's pages are already published
            UpdateValidationError: Unknown intent tags
            ContentWriterError: The content writer failed for some intent
        """
        requested = list(dict.fromkeys(intents or INTENT_TYPES))
        unknown = [intent for intent in requested if intent not in INTENT_TYPES]
        if unknown:
            raise UpdateValidationError({"intents": f"unknown intent types: {', '.join(unknown)}"})

        update = await self._load_update(update_id)
        if update.status == "completed":
            raise BatchAlreadyPublishedError(f"Update {update_id} is already published")
        business = await self._load_business(update.business_id)

        started = time.monotonic()
        await self.update_repo.set_status(update_id, "processing")

        context = business_context(business)
        results = await asyncio.gather(
            *[
                self.content_writer.write(ContentRequest(
                    update_text=update.content_text,
                    business=context,
                    intent=intent,
                    expires_at=update.expires_at,
                ))
                for intent in requested
            ],
            return_exceptions=True,
        )

        failures = [(intent, r) for intent, r in zip(requested, results) if isinstance(r, BaseException)]
        if failures:
            intent, error = failures[0]
            message = str(error) or error.__class__.__name__
            logger.error(
                f"Content writer failed for update {update_id} ({len(failures)} of {len(requested)} intents)",
                extra={"intent": intent, "error": message},
            )
            await self.update_repo.set_status(
                update_id, "failed", error_message=message, processing_time_ms=_elapsed_ms(started)
            )
            if isinstance(error, ContentWriterError):
                raise error
            raise ContentWriterError(message) from error

        batch = PageBatch(update_id=update_id, business_id=update.business_id, declared_total=len(requested))
        taken: set[str] = set()
        for intent, content in zip(requested, results):
            draft = self._assemble(business, update, intent, content, taken)
            taken.add(draft.slug)
            batch.drafts.append(draft)

        await self.update_repo.set_status(update_id, "processing", processing_time_ms=_elapsed_ms(started))
        self.registry.add(batch)
        logger.info(
            f"Drafted batch {batch.batch_id} for update {update_id}",
            extra={"draft_count": len(batch.drafts), "intents": requested},
        )
        return batch

    def get_batch(self, batch_id: str) -> PageBatch:
        return self.registry.get(batch_id)

    def _open_batch(self, batch_id: str) -> PageBatch:
        batch = self.registry.get(batch_id)
        if batch.status != BatchStatus.DRAFTED:
            raise BatchAlreadyPublishedError(f"Batch {batch_id} is {batch.status.value}")
        return batch

    async def edit_draft(self, batch_id: str, draft_id: str, changes: dict[str, Any]) -> PageDraft:
        """Edit fields of a draft and regenerate its derived data.

        Raises:
            UpdateValidationError: Unknown field or empty title/slug
            DraftConflictError: The new slug is used by another draft
        """
        batch = self._open_batch(batch_id)
        draft = batch.find_draft(draft_id)

        unknown = sorted(set(changes) - set(EDITABLE_FIELDS))
        if unknown:
            raise UpdateValidationError({field: "not editable" for field in unknown})

        title = changes.get("title", draft.title)
        if not title or not str(title).strip():
            raise UpdateValidationError({"title": "must not be empty"})

        slug = draft.slug
        if "slug" in changes:
            slug = normalize_slug(changes["slug"])
            if not slug:
                raise UpdateValidationError({"slug": "must contain letters or digits"})
            if any(other.slug == slug for other in batch.drafts if other.id != draft_id):
                raise DraftConflictError(f"Slug '{slug}' is already used by another draft in this batch")

        content = ContentDraft(
            title=str(title).strip(),
            description=changes.get("description", draft.description) or "",
            slug=slug,
            page_type=draft.page_type,
            highlights=changes.get("highlights", draft.highlights),
            faqs=changes.get("faqs", draft.faqs),
        )
        return await self._rebuild(batch, draft, content)

    async def refresh_draft(self, batch_id: str, draft_id: str) -> PageDraft:
        """Regenerate URL candidates, structured data and score for a draft."""
        batch = self._open_batch(batch_id)
        draft = batch.find_draft(draft_id)
        content = ContentDraft(
            title=draft.title,
            description=draft.description,
            slug=draft.slug,
            page_type=draft.page_type,
            highlights=draft.highlights,
            faqs=draft.faqs,
        )
        return await self._rebuild(batch, draft, content)

    async def _rebuild(self, batch: PageBatch, draft: PageDraft, content: ContentDraft) -> PageDraft:
        update = await self._load_update(batch.update_id)
        business = await self._load_business(batch.business_id)

        rebuilt = self._assemble(
            business, update, draft.intent, content, taken=set(), slug=content.slug, draft_id=draft.id
        )
        index = batch.drafts.index(draft)
        batch.drafts[index] = rebuilt
        return rebuilt

    def remove_draft(self, batch_id: str, draft_id: str) -> PageBatch:
        """Drop a draft from the batch."""
        batch = self._open_batch(batch_id)
        draft = batch.find_draft(draft_id)
        batch.drafts.remove(draft)
        batch.declared_total -= 1
        logger.info(f"Removed draft {draft_id} ({draft.intent}) from batch {batch_id}")
        return batch

    async def discard(self, batch_id: str) -> None:
        """Abandon a batch. Nothing was persisted for it, so nothing is cleaned up."""
        batch = self._open_batch(batch_id)
        batch.status = BatchStatus.DISCARDED
        self.registry.close(batch_id, BatchStatus.DISCARDED)

        update = await self.update_repo.get_by_id(batch.update_id)
        if update is not None and update.status == "processing":
            await self.update_repo.set_status(batch.update_id, "pending")
        logger.info(f"Discarded batch {batch_id}")

    def _page_data(self, draft: PageDraft) -> dict[str, Any]:
        return {
            "description": draft.description,
            "highlights": draft.highlights,
            "faqs": [faq.model_dump(mode="json") for faq in draft.faqs],
            "schemas": draft.schemas.model_dump(mode="json"),
            "meta_tags": draft.meta_tags.model_dump(mode="json"),
            "suggested_urls": draft.suggested_urls.model_dump(mode="json"),
            "score_breakdown": draft.score_breakdown.model_dump(mode="json"),
        }

    async def _free_path(self, file_path: str, update_id: int) -> str:
        """Return the path, suffixed with the update id and then a counter while taken."""
        if not await self.page_repo.file_path_taken(file_path):
            return file_path
        base = f"{file_path}-{update_id}"
        candidate = base
        counter = 2
        while await self.page_repo.file_path_taken(candidate):
            candidate = f"{base}-{counter}"
            counter += 1
        return candidate

    async def publish(self, batch_id: str) -> list[GeneratedPage]:
        """Turn every remaining draft into a GeneratedPage.

        All pages share the batch id and originating update id. A path
        already used by an earlier page gets the update id appended.

        Raises:
            BatchAlreadyPublishedError: Batch or update already published or publishing
            UpdateValidationError: The batch has no drafts left
            BatchPublishError: Publishing failed partway
        """
        batch = self._open_batch(batch_id)
        if not batch.drafts:
            raise UpdateValidationError({"drafts": "batch has no drafts to publish"})
        if not self.registry.claim_publication(batch.update_id):
            raise BatchAlreadyPublishedError(f"Update {batch.update_id} is already being published")
        batch.status = BatchStatus.PUBLISHING

        created: list[GeneratedPage] = []
        try:
            update = await self._load_update(batch.update_id)
            if update.status == "completed":
                batch.status = BatchStatus.DRAFTED
                raise BatchAlreadyPublishedError(f"Update {batch.update_id} is already published")

            started = time.monotonic()
            for draft in batch.drafts:
                file_path = await self._free_path(draft.file_path, batch.update_id)

                page = await self.page_repo.create(
                    business_id=batch.business_id,
                    update_id=batch.update_id,
                    file_path=file_path,
                    title=draft.title,
                    description=draft.description or None,
                    page_type=draft.page_type,
                    intent_type=draft.intent,
                    page_variant=draft.slug,
                    generation_batch_id=batch.batch_id,
                    page_data=self._page_data(draft),
                    discoverability_score=draft.score,
                    active=True,
                    expires_at=update.expires_at,
                )
                created.append(page)
        except BatchAlreadyPublishedError:
            raise
        except Exception as e:
            await self._handle_publish_failure(batch, created, e)
        finally:
            self.registry.release_publication(batch.update_id)

        await self.update_repo.set_status(
            batch.update_id, "completed", processing_time_ms=_elapsed_ms(started)
        )
        batch.status = BatchStatus.PUBLISHED
        self.registry.close(batch_id, BatchStatus.PUBLISHED)
        logger.info(
            f"Published batch {batch_id}: {len(created)} pages",
            extra={"update_id": batch.update_id, "page_ids": [page.id for page in created]},
        )

        if self.notifier is not None:
            for page in created:
                await self.notifier.publish(PageChangeEvent(page.business_id, page.id, "created"))
        return created

    async def _handle_publish_failure(
        self,
        batch: PageBatch,
        created: list[GeneratedPage],
        error: Exception,
    ) -> None:
        message = f"Publishing batch {batch.batch_id} failed after {len(created)} of {len(batch.drafts)} pages: {error}"
        logger.error(message, exc_info=True)

        # Created rows are already committed; keep their loaded state past the rollback
        created_ids = [page.id for page in created]
        for page in created:
            self.page_repo.session.expunge(page)
        await self.page_repo.session.rollback()

        if self.failure_mode == FAIL_CLOSED:
            for page_id in created_ids:
                await self.page_repo.delete(page_id)
            batch.status = BatchStatus.DRAFTED
            await self.update_repo.set_status(batch.update_id, "processing", error_message=str(error))
            raise BatchPublishError(message, created_pages=[]) from error

        batch.status = BatchStatus.FAILED
        batch.error = str(error)
        await self.update_repo.set_status(batch.update_id, "failed", error_message=str(error))
        raise BatchPublishError(message, created_pages=created) from error
