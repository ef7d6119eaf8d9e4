"""Tests for page lifecycle rules and transitions."""

from datetime import datetime, timedelta, timezone

import pytest

from locpages.domain.errors import InvalidExpirationError, PageNotFoundError
from locpages.domain.services.page_lifecycle_service import (
    PageLifecycleService,
    PageState,
    PageSummary,
    canonical_url,
    format_expiration_time,
    is_expired,
    is_expiring_soon,
    is_visible,
    page_state,
)
from locpages.persistence.models.generated_page import GeneratedPage
from locpages.utils.time_utils import utc_now

NOW = datetime(2026, 5, 1, 12, 0, 0)


def _page(**overrides) -> GeneratedPage:
    data = {
        "business_id": 1,
        "file_path": "/us/tx/austin/taco-shack/happy-hour",
        "title": "Happy Hour",
        "page_type": "update",
        "active": True,
        "expires_at": None,
        "expired_at": None,
    }
    data.update(overrides)
    return GeneratedPage(**data)


class TestExpirationRules:
    """Test cases for pure expiration helpers."""

    def test_permanent_pages_never_expire(self):
        """Test a page without an expiration is never expired or expiring."""
        assert not is_expired(None, NOW)
        assert not is_expiring_soon(None, NOW)

    def test_expired_at_boundary(self):
        """Test a page is expired exactly at its expiration time."""
        assert is_expired(NOW, NOW)
        assert not is_expired(NOW + timedelta(seconds=1), NOW)

    def test_expiring_soon_window(self):
        """Test the two-hour window is exclusive at both ends."""
        assert is_expiring_soon(NOW + timedelta(hours=1), NOW)
        assert not is_expiring_soon(NOW + timedelta(hours=2), NOW)
        assert not is_expiring_soon(NOW, NOW)
        assert not is_expiring_soon(NOW - timedelta(minutes=5), NOW)

    def test_timezone_aware_values_normalized(self):
        """Test aware datetimes compare against naive UTC correctly."""
        aware = datetime(2026, 5, 1, 7, 0, tzinfo=timezone(timedelta(hours=-5)))

        assert is_expired(aware, NOW)
        assert not is_expired(aware, NOW - timedelta(minutes=1))

    def test_visibility(self):
        """Test visibility requires active, unexpired and not past expiration."""
        assert is_visible(_page(), NOW)
        assert is_visible(_page(expires_at=NOW + timedelta(days=1)), NOW)
        assert not is_visible(_page(active=False), NOW)
        assert not is_visible(_page(expired_at=NOW - timedelta(hours=1)), NOW)
        assert not is_visible(_page(expires_at=NOW - timedelta(seconds=1)), NOW)

    def test_page_state(self):
        """Test state derivation."""
        assert page_state(_page(), NOW) == PageState.ACTIVE
        assert page_state(_page(expires_at=NOW + timedelta(minutes=30)), NOW) == PageState.EXPIRING_SOON
        assert page_state(_page(expires_at=NOW + timedelta(days=3)), NOW) == PageState.ACTIVE
        assert page_state(_page(expires_at=NOW - timedelta(minutes=30)), NOW) == PageState.EXPIRED
        assert page_state(_page(active=False), NOW) == PageState.EXPIRED


class TestFormatExpirationTime:
    """Test cases for the human readable expiration label."""

    def test_permanent(self):
        """Test pages without an expiration are permanent."""
        assert format_expiration_time(None, NOW) == "Permanent"

    def test_expired(self):
        """Test past expirations read as expired."""
        assert format_expiration_time(NOW, NOW) == "Expired"
        assert format_expiration_time(NOW - timedelta(days=2), NOW) == "Expired"

    def test_minutes(self):
        """Test sub-hour expirations are in minutes with pluralization."""
        assert format_expiration_time(NOW + timedelta(minutes=20), NOW) == "Expires in 20 minutes"
        assert format_expiration_time(NOW + timedelta(seconds=50), NOW) == "Expires in 1 minute"

    def test_hours(self):
        """Test hour granularity below one day."""
        assert format_expiration_time(NOW + timedelta(hours=1), NOW) == "Expires in 1 hour"
        assert format_expiration_time(NOW + timedelta(hours=5), NOW) == "Expires in 5 hours"

    def test_days(self):
        """Test day granularity below one week."""
        assert format_expiration_time(NOW + timedelta(days=1), NOW) == "Expires in 1 day"
        assert format_expiration_time(NOW + timedelta(days=3), NOW) == "Expires in 3 days"

    def test_date_beyond_a_week(self):
        """Test far expirations show the date."""
        assert format_expiration_time(NOW + timedelta(days=10), NOW) == "2026-05-11"


class TestCanonicalUrl:
    """Test cases for public URLs."""

    def test_joins_base_and_path(self):
        """Test the path is appended to the public base URL."""
        url = canonical_url("/us/tx/austin/taco-shack")

        assert url.endswith("/us/tx/austin/taco-shack")
        assert "//us" not in url


class TestPageLifecycleService:
    """Test cases for stored page transitions."""

    @pytest.fixture
    def events(self, notifier, business):
        received = []

        async def record(event):
            received.append(event)

        notifier.subscribe(business.id, record)
        return received

    @pytest.fixture
    def lifecycle(self, page_repo, notifier):
        return PageLifecycleService(page_repo, notifier=notifier)

    async def _create_page(self, page_repo, business, **overrides):
        data = {
            "business_id": business.id,
            "file_path": "/us/tx/austin/taco-shack/happy-hour",
            "title": "Happy Hour",
            "page_type": "update",
        }
        data.update(overrides)
        return await page_repo.create(**data)

    async def test_extend_sets_expiration_from_now(self, lifecycle, page_repo, business, events):
        """Test extending sets the expiration relative to now, not the old expiration."""
        page = await self._create_page(page_repo, business, expires_at=NOW + timedelta(days=30))

        extended = await lifecycle.extend(page.id, 24, now=NOW)

        assert extended.expires_at == NOW + timedelta(hours=24)
        assert extended.active is True
        assert [event.action for event in events] == ["extended"]

    async def test_extend_uses_current_time(self, lifecycle, page_repo, business):
        """Test a 24 hour extension lands within seconds of now plus a day."""
        page = await self._create_page(page_repo, business, expires_at=NOW)

        extended = await lifecycle.extend(page.id, 24)

        expected = utc_now() + timedelta(hours=24)
        assert abs((extended.expires_at - expected).total_seconds()) < 5

    async def test_extend_revives_expired_page(self, lifecycle, page_repo, business):
        """Test extending an expired page makes it visible again."""
        page = await self._create_page(
            page_repo, business, active=False, expires_at=NOW - timedelta(hours=1), expired_at=NOW - timedelta(hours=1)
        )

        extended = await lifecycle.extend(page.id, 72, now=NOW)

        assert extended.expired_at is None
        assert is_visible(extended, NOW)

    async def test_extend_rejects_non_positive_hours(self, lifecycle, page_repo, business):
        """Test zero hours is rejected."""
        page = await self._create_page(page_repo, business)

        with pytest.raises(InvalidExpirationError):
            await lifecycle.extend(page.id, 0, now=NOW)

    async def test_extend_missing_page(self, lifecycle):
        """Test extending an unknown page raises PageNotFoundError."""
        with pytest.raises(PageNotFoundError):
            await lifecycle.extend(9999, 24, now=NOW)

    async def test_expire_now(self, lifecycle, page_repo, business, events):
        """Test expiring takes the page offline and stamps expired_at."""
        page = await self._create_page(page_repo, business)

        expired = await lifecycle.expire_now(page.id, now=NOW)

        assert expired.active is False
        assert expired.expired_at == NOW
        assert page_state(expired, NOW) == PageState.EXPIRED
        assert [event.action for event in events] == ["expired"]

    async def test_reactivate(self, lifecycle, page_repo, business, events):
        """Test reactivation clears expired_at and sets the new expiration."""
        page = await self._create_page(page_repo, business, active=False, expired_at=NOW - timedelta(days=1))
        new_expiration = NOW + timedelta(days=7)

        reactivated = await lifecycle.reactivate(page.id, new_expiration, now=NOW)

        assert reactivated.active is True
        assert reactivated.expired_at is None
        assert reactivated.expires_at == new_expiration
        assert [event.action for event in events] == ["reactivated"]

    async def test_reactivate_past_date_leaves_page_unchanged(self, lifecycle, page_repo, business, events):
        """Test a past expiration is rejected without touching the page."""
        expired_at = NOW - timedelta(days=1)
        page = await self._create_page(page_repo, business, active=False, expired_at=expired_at)

        with pytest.raises(InvalidExpirationError):
            await lifecycle.reactivate(page.id, NOW - timedelta(minutes=1), now=NOW)

        stored = await page_repo.get_by_id(page.id)
        assert stored.active is False
        assert stored.expired_at == expired_at
        assert events == []

    async def test_reactivate_missing_page(self, lifecycle):
        """Test a missing page is reported before the date is checked."""
        with pytest.raises(PageNotFoundError):
            await lifecycle.reactivate(9999, NOW - timedelta(days=1), now=NOW)

    async def test_delete_twice(self, lifecycle, page_repo, business, events):
        """Test deleting removes the page and a second delete reports not found."""
        page = await self._create_page(page_repo, business)
        page_id = page.id

        await lifecycle.delete(page_id)

        assert await page_repo.get_by_id(page_id) is None
        with pytest.raises(PageNotFoundError):
            await lifecycle.delete(page_id)
        assert [(event.page_id, event.action) for event in events] == [(page_id, "deleted")]

    async def test_expire_due_pages(self, lifecycle, page_repo, business, events):
        """Test the sweep expires only active pages that are past due."""
        due = await self._create_page(page_repo, business, file_path="/a", expires_at=NOW - timedelta(minutes=1))
        future = await self._create_page(page_repo, business, file_path="/b", expires_at=NOW + timedelta(hours=3))
        permanent = await self._create_page(page_repo, business, file_path="/c")

        expired = await lifecycle.expire_due_pages(now=NOW)

        assert [page.id for page in expired] == [due.id]
        assert (await page_repo.get_by_id(due.id)).expired_at == NOW
        assert (await page_repo.get_by_id(future.id)).active is True
        assert (await page_repo.get_by_id(permanent.id)).active is True
        assert await lifecycle.expire_due_pages(now=NOW) == []
        assert [event.action for event in events] == ["expired"]

    async def test_list_upcoming_expirations(self, lifecycle, page_repo, business):
        """Test only pages expiring inside the window are listed, soonest first."""
        later = await self._create_page(page_repo, business, file_path="/a", expires_at=NOW + timedelta(minutes=50))
        sooner = await self._create_page(page_repo, business, file_path="/b", expires_at=NOW + timedelta(minutes=10))
        await self._create_page(page_repo, business, file_path="/c", expires_at=NOW + timedelta(hours=5))
        await self._create_page(page_repo, business, file_path="/d", expires_at=NOW - timedelta(minutes=5))

        upcoming = await lifecycle.list_upcoming_expirations(60, now=NOW)

        assert [page.id for page in upcoming] == [sooner.id, later.id]

    async def test_list_pages_annotates_state(self, lifecycle, page_repo, business):
        """Test listed pages carry state, visibility and label."""
        await self._create_page(page_repo, business, file_path="/a", expires_at=NOW + timedelta(minutes=20))
        await self._create_page(page_repo, business, file_path="/b", active=False, expired_at=NOW)

        summaries = await lifecycle.list_pages(business.id, now=NOW)

        assert all(isinstance(summary, PageSummary) for summary in summaries)
        by_path = {summary.file_path: summary for summary in summaries}
        assert by_path["/a"].state == PageState.EXPIRING_SOON
        assert by_path["/a"].expires_label == "Expires in 20 minutes"
        assert by_path["/b"].visible is False

    async def test_find_by_path_prefers_visible(self, lifecycle, page_repo, business):
        """Test a visible page wins over a newer expired one at the same path."""
        live = await self._create_page(page_repo, business, expires_at=NOW + timedelta(days=1))
        await self._create_page(page_repo, business, active=False, expired_at=NOW)

        found = await lifecycle.find_by_path("/us/tx/austin/taco-shack/happy-hour", now=NOW)

        assert found.id == live.id

    async def test_find_by_path_unknown(self, lifecycle):
        """Test unknown paths resolve to None."""
        assert await lifecycle.find_by_path("/us/tx/austin/nobody", now=NOW) is None

    async def test_works_without_notifier(self, page_repo, business):
        """Test transitions do not require a notifier."""
        page = await self._create_page(page_repo, business)

        expired = await PageLifecycleService(page_repo).expire_now(page.id, now=NOW)

        assert expired.active is False
