"""Tests for page change notifications."""

import pytest

from locpages.infrastructure.page_events import PageChangeEvent, PageChangeNotifier


class TestPageChangeNotifier:
    """Test cases for the page change notifier."""

    async def test_delivers_only_to_matching_business(self):
        """Test events reach subscribers of the same business only."""
        notifier = PageChangeNotifier()
        first, second = [], []

        async def on_first(event):
            first.append(event)

        async def on_second(event):
            second.append(event)

        notifier.subscribe(1, on_first)
        notifier.subscribe(2, on_second)

        await notifier.publish(PageChangeEvent(1, 10, "created"))

        assert first == [PageChangeEvent(1, 10, "created")]
        assert second == []

    async def test_unsubscribe(self):
        """Test an unsubscribed callback receives nothing."""
        notifier = PageChangeNotifier()
        received = []

        async def callback(event):
            received.append(event)

        unsubscribe = notifier.subscribe(1, callback)
        assert notifier.subscriber_count(1) == 1

        unsubscribe()
        unsubscribe()
        await notifier.publish(PageChangeEvent(1, 10, "deleted"))

        assert received == []
        assert notifier.subscriber_count(1) == 0

    async def test_failing_subscriber_does_not_block_others(self):
        """Test a raising subscriber is skipped."""
        notifier = PageChangeNotifier()
        received = []

        async def broken(event):
            raise RuntimeError("socket closed")

        async def healthy(event):
            received.append(event.action)

        notifier.subscribe(1, broken)
        notifier.subscribe(1, healthy)

        await notifier.publish(PageChangeEvent(1, 10, "expired"))

        assert received == ["expired"]

    def test_unknown_action_rejected(self):
        """Test events validate their action."""
        with pytest.raises(ValueError):
            PageChangeEvent(1, 10, "renamed")
