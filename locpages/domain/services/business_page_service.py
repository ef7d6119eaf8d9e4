"""Business profiles and their permanent profile pages."""

import logging
from typing import Any

from locpages.domain.errors import (
    BusinessNotFoundError,
    BusinessValidationError,
    DuplicateBusinessError,
)
from locpages.domain.models.business_record import BusinessRecord
from locpages.domain.services.discoverability_service import score_breakdown
from locpages.domain.services.page_lifecycle_service import canonical_url
from locpages.domain.services.structured_data_service import generate_all_schemas, generate_meta_tags
from locpages.domain.services.website_info_builder import build_website_info
from locpages.infrastructure.page_events import PageChangeEvent, PageChangeNotifier
from locpages.persistence.models.business import Business
from locpages.persistence.models.generated_page import PAGE_TYPE_BUSINESS, GeneratedPage
from locpages.persistence.repositories.business_repository import BusinessRepository
from locpages.persistence.repositories.generated_page_repository import GeneratedPageRepository
from locpages.utils.categories import category_display_name
from locpages.utils.slug import build_page_path, slugify

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "address_city", "address_state")

PROFILE_FIELDS = (
    "email", "name", "slug", "primary_category", "description",
    "address_street", "address_city", "address_state", "zip_code", "country",
    "phone", "website", "latitude", "longitude",
    "hours", "base_hours", "structured_hours",
    "price_positioning", "established_year",
    "specialties", "services", "payment_methods", "accessibility_features",
    "languages_spoken", "parking_info", "service_area", "service_area_details",
    "awards", "certifications", "social_media", "review_summary", "business_faqs",
)


def validate_profile(data: dict[str, Any]) -> dict[str, str]:
    """Field-level errors for a business profile. Empty when valid."""
    errors: dict[str, str] = {}
    for field in REQUIRED_FIELDS:
        value = data.get(field)
        if value is None or not str(value).strip():
            errors[field] = "is required"

    email = data.get("email")
    if not email or "@" not in str(email):
        errors["email"] = "a valid email address is required"
    return errors


def business_page_title(business: BusinessRecord) -> str:
    """Title of a business's profile page."""
    category = category_display_name(business.primary_category)
    return f"{business.name} - {category} in {business.address_city}, {business.address_state}"


class BusinessPageService:
    """Creates and edits business profiles, keeping the profile page in step."""

    def __init__(
        self,
        business_repo: BusinessRepository,
        page_repo: GeneratedPageRepository,
        notifier: PageChangeNotifier | None = None,
    ) -> None:
        self.business_repo = business_repo
        self.page_repo = page_repo
        self.notifier = notifier

    async def get_business(self, business_id: int) -> Business:
        business = await self.business_repo.get_by_id(business_id)
        if business is None:
            raise BusinessNotFoundError(f"Business {business_id} not found")
        return business

    async def _unique_slug(self, slug: str, city: str, state: str, business_id: int | None = None) -> str:
        """Suffix the slug until no other business in the same city uses it."""
        candidate = slug
        counter = 2
        while True:
            existing = await self.business_repo.get_by_slug(candidate, city, state)
            if existing is None or existing.id == business_id:
                return candidate
            candidate = f"{slug}-{counter}"
            counter += 1

    async def create_business(self, data: dict[str, Any]) -> Business:
        """Create a business profile and its profile page.

        Raises:
            BusinessValidationError: Required fields missing
            DuplicateBusinessError: A profile already exists for the email
        """
        fields = {key: value for key, value in data.items() if key in PROFILE_FIELDS}
        errors = validate_profile(fields)
        if errors:
            raise BusinessValidationError(errors)

        fields["email"] = str(fields["email"]).strip().lower()
        fields["name"] = str(fields["name"]).strip()
        fields["slug"] = slugify(fields.get("slug") or fields["name"])
        fields["country"] = fields.get("country") or "US"

        if await self.business_repo.get_by_email(fields["email"]) is not None:
            raise DuplicateBusinessError(f"A business profile already exists for {fields['email']}")
        fields["slug"] = await self._unique_slug(fields["slug"], fields["address_city"], fields["address_state"])

        business = await self.business_repo.create(**fields)
        logger.info(f"Created business {business.id}: {business.name}")

        await self.ensure_business_page(business)
        return business

    async def update_profile(self, business_id: int, changes: dict[str, Any]) -> Business:
        """Apply profile edits, then regenerate the profile page.

        A failure while regenerating the page is logged and does not undo
        the edit.
        """
        business = await self.get_business(business_id)
        fields = {key: value for key, value in changes.items() if key in PROFILE_FIELDS}

        merged = {field: getattr(business, field) for field in ("email", *REQUIRED_FIELDS)}
        merged.update(fields)
        errors = validate_profile(merged)
        if errors:
            raise BusinessValidationError(errors)

        if "email" in fields:
            fields["email"] = str(fields["email"]).strip().lower()
            existing = await self.business_repo.get_by_email(fields["email"])
            if existing is not None and existing.id != business_id:
                raise DuplicateBusinessError(f"A business profile already exists for {fields['email']}")
        if fields.keys() & {"slug", "address_city", "address_state"}:
            slug = slugify(fields["slug"] or merged["name"]) if "slug" in fields else business.slug
            unique = await self._unique_slug(
                slug,
                merged["address_city"],
                merged["address_state"],
                business_id=business_id,
            )
            if "slug" in fields or unique != business.slug:
                fields["slug"] = unique

        business = await self.business_repo.update(business_id, **fields)
        if business is None:
            raise BusinessNotFoundError(f"Business {business_id} not found")
        logger.info(f"Updated business {business_id}", extra={"fields": sorted(fields)})

        try:
            await self.ensure_business_page(business)
        except Exception as e:
            logger.warning(f"Failed to regenerate profile page for business {business_id}: {e}", exc_info=True)
            await self.business_repo.session.rollback()
            business = await self.get_business(business_id)
        return business

    async def ensure_business_page(self, business: Business) -> GeneratedPage:
        """Create or refresh the single profile page of a business."""
        record = BusinessRecord.model_validate(business)
        file_path = build_page_path(
            record.country or "US",
            record.address_state or "",
            record.address_city or "",
            record.slug or record.name,
        )
        url = canonical_url(file_path)

        info = build_website_info(record, page_url=url)
        breakdown = score_breakdown(info)
        page_data = {
            "schemas": generate_all_schemas(info, record).model_dump(mode="json"),
            "meta_tags": generate_meta_tags(info).model_dump(mode="json"),
            "score_breakdown": breakdown.model_dump(mode="json"),
        }
        fields = {
            "file_path": file_path,
            "title": business_page_title(record),
            "description": record.description,
            "page_data": page_data,
            "discoverability_score": breakdown.total,
        }

        existing = await self.page_repo.get_business_page(record.id)
        if existing is not None:
            page = await self.page_repo.update(existing.id, **fields)
            action = "updated"
        else:
            page = await self.page_repo.create(
                business_id=record.id,
                update_id=None,
                page_type=PAGE_TYPE_BUSINESS,
                active=True,
                expires_at=None,
                **fields,
            )
            action = "created"

        logger.info(f"Profile page {action} for business {record.id}", extra={"file_path": file_path})
        if self.notifier is not None:
            await self.notifier.publish(PageChangeEvent(record.id, page.id, action))
        return page
