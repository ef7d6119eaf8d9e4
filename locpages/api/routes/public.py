"""Public page resolution: /{country}/{state}/{city}/{business}[/{variant}]."""

from datetime import datetime
from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from locpages.api.deps import get_lifecycle_service
from locpages.domain.services.page_lifecycle_service import PageLifecycleService, canonical_url, is_visible
from locpages.domain.services.structured_data_service import SchemaBundle, render_json_ld_scripts
from locpages.utils.slug import build_page_path

router = APIRouter()


class PublicPageResponse(BaseModel):
    """A live page with its machine-readable data."""

    title: str
    description: str | None
    url: str
    page_type: str
    intent_type: str | None
    expires_at: datetime | None
    meta_tags: dict[str, Any] | None
    structured_data: list[dict[str, Any]]
    json_ld: str


async def _resolve(lifecycle: PageLifecycleService, file_path: str) -> PublicPageResponse:
    page = await lifecycle.find_by_path(file_path)
    if page is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Page not found")
    if not is_visible(page):
        raise HTTPException(status_code=status.HTTP_410_GONE, detail="This page has expired")

    page_data = page.page_data or {}
    documents: list[dict[str, Any]] = []
    json_ld = ""
    if page_data.get("schemas"):
        bundle = SchemaBundle.model_validate(page_data["schemas"])
        documents = bundle.documents()
        json_ld = render_json_ld_scripts(bundle)

    return PublicPageResponse(
        title=page.title,
        description=page.description,
        url=canonical_url(page.file_path),
        page_type=page.page_type,
        intent_type=page.intent_type,
        expires_at=page.expires_at,
        meta_tags=page_data.get("meta_tags"),
        structured_data=documents,
        json_ld=json_ld,
    )


@router.get("/{country}/{state}/{city}/{business}", response_model=PublicPageResponse)
async def get_business_page(
    country: str,
    state: str,
    city: str,
    business: str,
    lifecycle: Annotated[PageLifecycleService, Depends(get_lifecycle_service)],
) -> PublicPageResponse:
    """Resolve a business profile page."""
    return await _resolve(lifecycle, build_page_path(country, state, city, business))


@router.get("/{country}/{state}/{city}/{business}/{variant}", response_model=PublicPageResponse)
async def get_update_page(
    country: str,
    state: str,
    city: str,
    business: str,
    variant: str,
    lifecycle: Annotated[PageLifecycleService, Depends(get_lifecycle_service)],
) -> PublicPageResponse:
    """Resolve an update page variant."""
    return await _resolve(lifecycle, build_page_path(country, state, city, business, variant))
