"""In-process change notifications for generated pages."""

import logging
from collections import defaultdict
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

logger = logging.getLogger(__name__)

PAGE_ACTIONS = ("created", "updated", "expired", "extended", "reactivated", "deleted")


@dataclass(frozen=True)
class PageChangeEvent:
    """A change to one of a business's pages."""

    business_id: int
    page_id: int
    action: str

    def __post_init__(self) -> None:
        if self.action not in PAGE_ACTIONS:
            raise ValueError(f"Unknown page action: {self.action}")


PageChangeCallback = Callable[[PageChangeEvent], Awaitable[None]]


class PageChangeNotifier:
    """Publish/subscribe for page changes, scoped by business id.

    Delivery is best-effort: subscribers that fail are logged and skipped,
    and consumers are expected to reload periodically anyway.
    """

    def __init__(self) -> None:
        self._subscribers: dict[int, list[PageChangeCallback]] = defaultdict(list)

    def subscribe(self, business_id: int, callback: PageChangeCallback) -> Callable[[], None]:
        """Register a callback for a business's page changes.

        Returns:
            A callable that removes the subscription
        """
        self._subscribers[business_id].append(callback)

        def unsubscribe() -> None:
            callbacks = self._subscribers.get(business_id)
            if callbacks and callback in callbacks:
                callbacks.remove(callback)
                if not callbacks:
                    del self._subscribers[business_id]

        return unsubscribe

    def subscriber_count(self, business_id: int) -> int:
        return len(self._subscribers.get(business_id, []))

    async def publish(self, event: PageChangeEvent) -> None:
        """Deliver an event to every subscriber of its business."""
        for callback in list(self._subscribers.get(event.business_id, [])):
            try:
                await callback(event)
            except Exception as e:
                logger.warning(
                    f"Page change subscriber failed for business {event.business_id}: {e}",
                    extra={"page_id": event.page_id, "action": event.action},
                )
