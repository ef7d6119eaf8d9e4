"""Page lifecycle: expiration arithmetic, visibility and state transitions.

A page is ACTIVE while it is live, EXPIRING_SOON when it goes offline within
two hours, and EXPIRED once deactivated or past its expiration time.
Reactivation moves an expired page back to ACTIVE with a new expiration time;
deletion removes the row for good.
"""

import logging
from datetime import datetime, timedelta
from enum import Enum

from pydantic import BaseModel

from locpages.domain.errors import InvalidExpirationError, PageNotFoundError
from locpages.infrastructure.page_events import PageChangeEvent, PageChangeNotifier
from locpages.persistence.models.generated_page import GeneratedPage
from locpages.persistence.repositories.generated_page_repository import GeneratedPageRepository
from locpages.settings import settings
from locpages.utils.time_utils import to_naive_utc, utc_now

logger = logging.getLogger(__name__)

EXPIRING_SOON_WINDOW = timedelta(hours=2)

# 1 day, 3 days, 1 week, 2 weeks, 1 month
EXTENSION_PRESETS_HOURS = (24, 72, 168, 336, 720)


class PageState(str, Enum):
    """Lifecycle state of a stored page."""

    ACTIVE = "active"
    EXPIRING_SOON = "expiring_soon"
    EXPIRED = "expired"


def is_expired(expires_at: datetime | None, now: datetime | None = None) -> bool:
    """True once the expiration time has been reached. Pages without one never expire."""
    if expires_at is None:
        return False
    now = to_naive_utc(now) or utc_now()
    return now >= to_naive_utc(expires_at)


def is_expiring_soon(expires_at: datetime | None, now: datetime | None = None) -> bool:
    """True when the page expires within the next two hours (and has not yet)."""
    if expires_at is None:
        return False
    now = to_naive_utc(now) or utc_now()
    remaining = to_naive_utc(expires_at) - now
    return timedelta(0) < remaining < EXPIRING_SOON_WINDOW


def is_visible(page: GeneratedPage, now: datetime | None = None) -> bool:
    """Whether the page should currently be served."""
    return bool(page.active) and page.expired_at is None and not is_expired(page.expires_at, now)


def page_state(page: GeneratedPage, now: datetime | None = None) -> PageState:
    """Derive the lifecycle state of a page."""
    if not page.active or page.expired_at is not None or is_expired(page.expires_at, now):
        return PageState.EXPIRED
    if is_expiring_soon(page.expires_at, now):
        return PageState.EXPIRING_SOON
    return PageState.ACTIVE


def format_expiration_time(expires_at: datetime | None, now: datetime | None = None) -> str:
    """Human readable time until expiration."""
    if expires_at is None:
        return "Permanent"
    now = to_naive_utc(now) or utc_now()
    expires_at = to_naive_utc(expires_at)
    seconds = (expires_at - now).total_seconds()
    if seconds <= 0:
        return "Expired"

    hours = int(seconds / 3600 + 0.5)
    days = int(seconds / 86400 + 0.5)
    if hours < 1:
        minutes = int(seconds / 60 + 0.5)
        return f"Expires in {minutes} minute{'s' if minutes != 1 else ''}"
    if hours < 24:
        return f"Expires in {hours} hour{'s' if hours != 1 else ''}"
    if days < 7:
        return f"Expires in {days} day{'s' if days != 1 else ''}"
    return expires_at.date().isoformat()


def canonical_url(file_path: str) -> str:
    """Public URL of a page route path."""
    return f"{settings.public_base_url.rstrip('/')}{file_path}"


class PageSummary(BaseModel):
    """A stored page annotated with its lifecycle state."""

    id: int
    business_id: int
    update_id: int | None
    file_path: str
    url: str
    title: str
    page_type: str
    intent_type: str | None
    generation_batch_id: str | None
    discoverability_score: int | None
    active: bool
    state: PageState
    visible: bool
    expires_at: datetime | None
    expired_at: datetime | None
    expires_label: str
    created_at: datetime

    @classmethod
    def from_page(cls, page: GeneratedPage, now: datetime | None = None) -> "PageSummary":
        return cls(
            id=page.id,
            business_id=page.business_id,
            update_id=page.update_id,
            file_path=page.file_path,
            url=canonical_url(page.file_path),
            title=page.title,
            page_type=page.page_type,
            intent_type=page.intent_type,
            generation_batch_id=page.generation_batch_id,
            discoverability_score=page.discoverability_score,
            active=page.active,
            state=page_state(page, now),
            visible=is_visible(page, now),
            expires_at=page.expires_at,
            expired_at=page.expired_at,
            expires_label=format_expiration_time(page.expires_at, now),
            created_at=page.created_at,
        )


class PageLifecycleService:
    """Applies lifecycle transitions to stored pages.

    Every mutation is a conditional update by primary key, so a page deleted
    concurrently surfaces as PageNotFoundError rather than being recreated.
    """

    def __init__(
        self,
        page_repo: GeneratedPageRepository,
        notifier: PageChangeNotifier | None = None,
    ) -> None:
        self.page_repo = page_repo
        self.notifier = notifier

    async def _notify(self, page: GeneratedPage, action: str) -> None:
        if self.notifier is not None:
            await self.notifier.publish(PageChangeEvent(page.business_id, page.id, action))

    async def get_page(self, page_id: int, business_id: int | None = None) -> GeneratedPage:
        """Get a page or raise PageNotFoundError."""
        page = await self.page_repo.get_by_id(page_id, business_id=business_id)
        if page is None:
            raise PageNotFoundError(f"Page {page_id} not found")
        return page

    async def _apply(self, page_id: int, **changes) -> GeneratedPage:
        page = await self.page_repo.update(page_id, **changes)
        if page is None:
            raise PageNotFoundError(f"Page {page_id} not found")
        return page

    async def list_pages(
        self,
        business_id: int,
        skip: int = 0,
        limit: int = 100,
        now: datetime | None = None,
    ) -> list[PageSummary]:
        """List a business's pages, newest first, with state and visibility."""
        pages = await self.page_repo.list_by_business(business_id, skip=skip, limit=limit)
        return [PageSummary.from_page(page, now) for page in pages]

    async def extend(self, page_id: int, hours: int = 24, now: datetime | None = None) -> GeneratedPage:
        """Set the page to expire `hours` from now, regardless of its previous expiration.

        An expired page becomes live again.
        """
        if hours <= 0:
            raise InvalidExpirationError("Extension must be a positive number of hours")
        await self.get_page(page_id)

        now = to_naive_utc(now) or utc_now()
        page = await self._apply(
            page_id,
            expires_at=now + timedelta(hours=hours),
            expired_at=None,
            active=True,
        )
        logger.info(f"Extended page {page_id} by {hours}h", extra={"expires_at": page.expires_at})
        await self._notify(page, "extended")
        return page

    async def expire_now(self, page_id: int, now: datetime | None = None) -> GeneratedPage:
        """Take a page offline immediately."""
        await self.get_page(page_id)

        page = await self._apply(page_id, active=False, expired_at=to_naive_utc(now) or utc_now())
        logger.info(f"Expired page {page_id}")
        await self._notify(page, "expired")
        return page

    async def reactivate(
        self,
        page_id: int,
        new_expires_at: datetime,
        now: datetime | None = None,
    ) -> GeneratedPage:
        """Bring an expired page back online until `new_expires_at`.

        Raises:
            PageNotFoundError: The page does not exist
            InvalidExpirationError: The new expiration is not in the future;
                the page is left unchanged
        """
        await self.get_page(page_id)

        now = to_naive_utc(now) or utc_now()
        new_expires_at = to_naive_utc(new_expires_at)
        if new_expires_at <= now:
            raise InvalidExpirationError("Expiration date must be in the future")

        page = await self._apply(page_id, expires_at=new_expires_at, expired_at=None, active=True)
        logger.info(f"Reactivated page {page_id}", extra={"expires_at": new_expires_at})
        await self._notify(page, "reactivated")
        return page

    async def delete(self, page_id: int) -> None:
        """Permanently delete a page."""
        page = await self.get_page(page_id)
        business_id = page.business_id

        if not await self.page_repo.delete(page_id):
            raise PageNotFoundError(f"Page {page_id} not found")
        logger.info(f"Deleted page {page_id}")
        if self.notifier is not None:
            await self.notifier.publish(PageChangeEvent(business_id, page_id, "deleted"))

    async def expire_due_pages(self, now: datetime | None = None) -> list[GeneratedPage]:
        """Mark every active page whose expiration time has passed as expired."""
        now = to_naive_utc(now) or utc_now()
        due = await self.page_repo.list_due_for_expiration(now)

        expired = []
        for candidate in due:
            page = await self.page_repo.update(candidate.id, active=False, expired_at=now)
            if page is None:
                # Deleted since the sweep started
                continue
            expired.append(page)
            await self._notify(page, "expired")

        if expired:
            logger.info(f"Expired {len(expired)} pages", extra={"page_ids": [p.id for p in expired]})
        return expired

    async def list_upcoming_expirations(
        self,
        window_minutes: int | None = None,
        now: datetime | None = None,
    ) -> list[GeneratedPage]:
        """Active pages that expire within the window."""
        if window_minutes is None:
            window_minutes = settings.upcoming_expiration_window_minutes
        now = to_naive_utc(now) or utc_now()
        return await self.page_repo.list_expiring_between(now, now + timedelta(minutes=window_minutes))

    async def find_by_path(self, file_path: str, now: datetime | None = None) -> GeneratedPage | None:
        """Resolve a route path to its page, preferring a visible one."""
        pages = await self.page_repo.list_by_file_path(file_path)
        for page in pages:
            if is_visible(page, now):
                return page
        return pages[0] if pages else None
