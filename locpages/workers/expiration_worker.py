"""Expiration worker for taking pages offline once they expire.

Runs on a schedule via Cloud Tasks (or any cron hitting the endpoint).
Visibility checks already treat past-due pages as expired; the sweep makes
the stored state agree.
"""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query

from locpages.api.deps import get_lifecycle_service
from locpages.domain.services.page_lifecycle_service import (
    PageLifecycleService,
    PageSummary,
    format_expiration_time,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/expire-pages")
async def expire_pages_task(
    lifecycle: Annotated[PageLifecycleService, Depends(get_lifecycle_service)],
) -> dict[str, Any]:
    """Mark every page past its expiration time as expired."""
    expired = await lifecycle.expire_due_pages()
    logger.info(f"Expiration sweep complete: {len(expired)} pages expired")
    return {"expired": len(expired), "page_ids": [page.id for page in expired]}


@router.get("/upcoming-expirations")
async def upcoming_expirations(
    lifecycle: Annotated[PageLifecycleService, Depends(get_lifecycle_service)],
    window_minutes: int | None = Query(None, ge=1, le=10080),
) -> dict[str, Any]:
    """List live pages that will expire within the window."""
    pages = await lifecycle.list_upcoming_expirations(window_minutes)
    return {
        "count": len(pages),
        "pages": [
            {
                **PageSummary.from_page(page).model_dump(mode="json", include={"id", "business_id", "url", "title"}),
                "expires_at": page.expires_at.isoformat(),
                "expires_label": format_expiration_time(page.expires_at),
            }
            for page in pages
        ],
    }
