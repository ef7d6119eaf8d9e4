"""Read-only view of a business profile used during page generation."""

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from locpages.domain.models.website_info import (
    Award,
    Certification,
    FAQEntry,
    parse_awards,
    parse_certifications,
)
from locpages.utils.time_utils import utc_now


class ServiceAreaDetails(BaseModel):
    """Structured service area: a radius around the business plus extra cities."""

    model_config = ConfigDict(frozen=True)

    coverage_radius: float | None = None
    primary_city: str | None = None
    additional_cities: list[str] = []

    @field_validator("additional_cities", mode="before")
    @classmethod
    def _resolve_cities(cls, value: Any) -> list[str]:
        return _as_str_list(value)


class ReviewSummary(BaseModel):
    """Aggregate review figures collected elsewhere."""

    model_config = ConfigDict(frozen=True)

    average_rating: float | None = None
    total_reviews: int | None = None


def _as_str_list(value: Any) -> list[str]:
    if not value or not isinstance(value, (list, tuple)):
        return []
    items = []
    for item in value:
        if isinstance(item, dict):
            item = item.get("name")
        if isinstance(item, str) and item.strip():
            items.append(item.strip())
    return items


class BusinessRecord(BaseModel):
    """A business profile with loosely-typed stored columns resolved once."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: int | None = None
    name: str
    slug: str | None = None
    email: str | None = None
    primary_category: str | None = None
    description: str | None = None

    address_street: str | None = None
    address_city: str | None = None
    address_state: str | None = None
    zip_code: str | None = None
    country: str | None = "US"
    phone: str | None = None
    website: str | None = None
    latitude: float | None = None
    longitude: float | None = None

    hours: str | None = None
    base_hours: dict[str, Any] | None = None
    structured_hours: list[dict[str, Any]] | dict[str, Any] | None = None

    price_positioning: str | None = None
    established_year: int | None = None

    specialties: list[str] = []
    services: list[str] = []
    payment_methods: list[str] = []
    accessibility_features: list[str] = []
    languages_spoken: list[str] = []
    parking_info: dict[str, Any] | None = None
    service_area: str | None = None
    service_area_details: ServiceAreaDetails | None = None

    awards: list[Award] = []
    certifications: list[Certification] = []
    social_media: dict[str, str] = {}
    review_summary: ReviewSummary | None = None
    business_faqs: list[FAQEntry] = []

    @field_validator(
        "specialties", "services", "payment_methods", "accessibility_features", "languages_spoken",
        mode="before",
    )
    @classmethod
    def _resolve_str_lists(cls, value: Any) -> list[str]:
        return _as_str_list(value)

    @field_validator("awards", mode="before")
    @classmethod
    def _resolve_awards(cls, value: Any) -> list:
        return parse_awards(value)

    @field_validator("certifications", mode="before")
    @classmethod
    def _resolve_certifications(cls, value: Any) -> list:
        return parse_certifications(value)

    @field_validator("social_media", mode="before")
    @classmethod
    def _resolve_social_media(cls, value: Any) -> dict[str, str]:
        if not isinstance(value, dict):
            return {}
        return {k: v.strip() for k, v in value.items() if isinstance(v, str) and v.strip()}

    @field_validator("business_faqs", mode="before")
    @classmethod
    def _resolve_faqs(cls, value: Any) -> list:
        if not isinstance(value, (list, tuple)):
            return []
        return [
            faq for faq in value
            if isinstance(faq, FAQEntry) or (isinstance(faq, dict) and faq.get("question") and faq.get("answer"))
        ]

    @field_validator("service_area_details", "review_summary", "parking_info", mode="before")
    @classmethod
    def _drop_non_mappings(cls, value: Any) -> Any:
        if isinstance(value, BaseModel):
            return value
        return value if isinstance(value, dict) and value else None

    @property
    def location(self) -> str:
        """Location as "City, ST"."""
        return ", ".join(part for part in (self.address_city, self.address_state) if part)

    @property
    def years_in_business(self) -> int | None:
        """Years since the business was established."""
        if not self.established_year:
            return None
        return max(utc_now().year - self.established_year, 0)
