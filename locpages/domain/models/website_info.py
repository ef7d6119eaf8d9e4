"""Value objects describing the content of a page being generated.

WebsiteInfo is the working structure shared by URL candidate generation,
structured data assembly and discoverability scoring. It is never persisted
as-is.
"""

from datetime import datetime
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class NamedAward(_Frozen):
    """An award known only by its name."""

    kind: Literal["named"] = "named"
    name: str


class DetailedAward(_Frozen):
    """An award with issuer and year."""

    kind: Literal["detailed"] = "detailed"
    name: str
    issuer: str | None = None
    year: int | None = None
    category: str | None = None
    description: str | None = None


Award = Annotated[Union[NamedAward, DetailedAward], Field(discriminator="kind")]


def _coerce_year(value: Any) -> int | None:
    try:
        return int(value) if value not in (None, "") else None
    except (TypeError, ValueError):
        return None


def parse_award(raw: Any) -> NamedAward | DetailedAward | None:
    """Resolve a stored award (bare string or mapping) into its tagged variant.

    Returns None for entries without a usable name.
    """
    if isinstance(raw, (NamedAward, DetailedAward)):
        return raw
    if isinstance(raw, str):
        name = raw.strip()
        return NamedAward(name=name) if name else None
    if isinstance(raw, dict):
        name = str(raw.get("name") or "").strip()
        if not name:
            return None
        issuer = raw.get("issuer") or raw.get("awarder")
        year = _coerce_year(raw.get("year"))
        category = raw.get("category")
        if issuer or year is not None or category:
            return DetailedAward(
                name=name,
                issuer=issuer,
                year=year,
                category=category,
                description=raw.get("description"),
            )
        return NamedAward(name=name)
    return None


def parse_awards(raw: Any) -> list[NamedAward | DetailedAward]:
    """Resolve a list of stored awards, dropping unusable entries."""
    if not raw or not isinstance(raw, (list, tuple)):
        return []
    awards = [parse_award(item) for item in raw]
    return [award for award in awards if award is not None]


class Certification(_Frozen):
    """A professional certification."""

    name: str
    issuer: str | None = None
    valid_from: str | None = None
    valid_until: str | None = None


def parse_certifications(raw: Any) -> list[Certification]:
    """Resolve stored certifications (bare strings or mappings)."""
    if not raw or not isinstance(raw, (list, tuple)):
        return []
    certifications = []
    for item in raw:
        if isinstance(item, Certification):
            certifications.append(item)
        elif isinstance(item, str) and item.strip():
            certifications.append(Certification(name=item.strip()))
        elif isinstance(item, dict) and str(item.get("name") or "").strip():
            valid_from = item.get("valid_from") or item.get("validFrom") or item.get("year")
            certifications.append(Certification(
                name=str(item["name"]).strip(),
                issuer=item.get("issuer"),
                valid_from=str(valid_from) if valid_from is not None else None,
                valid_until=item.get("valid_until") or item.get("validUntil"),
            ))
    return certifications


class BusinessAuthority(_Frozen):
    """Authority signals: awards and certifications."""

    awards: list[Award] = []
    certifications: list[Certification] = []

    @field_validator("awards", mode="before")
    @classmethod
    def _resolve_awards(cls, value: Any) -> list:
        return parse_awards(value)

    @field_validator("certifications", mode="before")
    @classmethod
    def _resolve_certifications(cls, value: Any) -> list:
        return parse_certifications(value)


class Specialty(_Frozen):
    """A specialty or signature service."""

    name: str
    description: str | None = None


class CompetitiveAdvantage(_Frozen):
    """Differentiators that set the business apart."""

    unique_selling_points: list[str] = []
    competitive_advantages: list[str] = []
    specialties: list[Specialty] = []
    price_positioning: str | None = None  # budget, mid-range, premium, luxury
    business_highlights: list[str] = []


class FAQEntry(_Frozen):
    """A question and answer pair."""

    question: str
    answer: str
    category: str | None = None
    search_terms: list[str] = []


class CustomerTestimonial(_Frozen):
    """A customer review quoted on the page."""

    customer_name: str
    text: str
    customer_location: str | None = None
    rating: float | None = None
    date: str | None = None


class AIOptimization(_Frozen):
    """Keyword sets aimed at AI search engines."""

    primary_keywords: list[str] = []
    semantic_keywords: list[str] = []
    local_search_terms: list[str] = []
    target_questions: list[str] = []


class TemporalInfo(_Frozen):
    """When an update is live."""

    starts_at: datetime | None = None
    expires_at: datetime | None = None  # None = permanent
    deal_terms: str | None = None
    update_category: str | None = None
    special_hours: str | None = None


class SuggestedUrls(_Frozen):
    """A primary URL slug with ranked alternatives."""

    primary: str
    alternatives: list[str]
    reasoning: str = ""


class PreviewData(_Frozen):
    """Title, description and highlights written for the page."""

    title: str | None = None
    description: str | None = None
    highlights: list[str] = []


class ContactInfo(_Frozen):
    """Contact details supplied with an update."""

    phone: str | None = None
    email: str | None = None
    address: str | None = None


class WebsiteInfo(_Frozen):
    """Everything known about a page being generated."""

    business_name: str
    business_type: str = ""
    location: str = ""
    update_content: str | None = None
    services: list[str] = []
    hours: str | None = None
    page_url: str | None = None

    contact: ContactInfo | None = None
    temporal: TemporalInfo | None = None
    suggested_urls: SuggestedUrls | None = None
    preview: PreviewData | None = None

    authority: BusinessAuthority | None = None
    competitive: CompetitiveAdvantage | None = None
    faqs: list[FAQEntry] = []
    testimonials: list[CustomerTestimonial] = []
    ai_optimization: AIOptimization | None = None

    business_story: str | None = None
    years_in_business: int | None = None
    employee_count_range: str | None = None
    languages_spoken: list[str] = []
    service_areas: list[str] = []
