"""Assemble WebsiteInfo from a business profile, an update and written copy."""

from typing import Any

from locpages.domain.models.business_record import BusinessRecord
from locpages.domain.models.website_info import (
    BusinessAuthority,
    CompetitiveAdvantage,
    ContactInfo,
    PreviewData,
    Specialty,
    SuggestedUrls,
    TemporalInfo,
    WebsiteInfo,
)
from locpages.llm.content_writer import ContentDraft
from locpages.persistence.models.business_update import BusinessUpdate
from locpages.utils.categories import category_display_name


def business_context(business: BusinessRecord) -> dict[str, Any]:
    """Business facts handed to the content writer."""
    return {
        "name": business.name,
        "category": category_display_name(business.primary_category),
        "location": business.location,
        "description": business.description,
        "phone": business.phone,
        "website": business.website,
        "hours": business.hours,
        "services": business.services,
        "specialties": business.specialties,
    }


def build_website_info(
    business: BusinessRecord,
    update: BusinessUpdate | None = None,
    draft: ContentDraft | None = None,
    page_url: str | None = None,
    suggested_urls: SuggestedUrls | None = None,
) -> WebsiteInfo:
    """Build the working page structure.

    Args:
        business: Owning business profile
        update: Update the page is generated from (None for the profile page)
        draft: Copy written for the page
        page_url: Public URL of the page
        suggested_urls: URL candidates already derived for the page

    Returns:
        WebsiteInfo ready for schema assembly and scoring
    """
    temporal = None
    if update is not None:
        temporal = TemporalInfo(
            starts_at=update.starts_at,
            expires_at=update.expires_at,
            deal_terms=update.deal_terms,
            update_category=update.update_category,
            special_hours=update.special_hours,
        )

    preview = None
    if draft is not None:
        preview = PreviewData(
            title=draft.title,
            description=draft.description or None,
            highlights=draft.highlights,
        )

    authority = None
    if business.awards or business.certifications:
        authority = BusinessAuthority(awards=business.awards, certifications=business.certifications)

    competitive = None
    if business.specialties or business.price_positioning:
        competitive = CompetitiveAdvantage(
            specialties=[Specialty(name=name) for name in business.specialties],
            price_positioning=business.price_positioning,
        )

    faqs = list(draft.faqs) if draft is not None else []
    faqs.extend(business.business_faqs)

    return WebsiteInfo(
        business_name=business.name,
        business_type=business.primary_category or "",
        location=business.location,
        update_content=update.content_text if update is not None else business.description,
        services=business.services,
        hours=business.hours,
        page_url=page_url,
        contact=ContactInfo(phone=business.phone, email=business.email, address=business.address_street),
        temporal=temporal,
        suggested_urls=suggested_urls,
        preview=preview,
        authority=authority,
        competitive=competitive,
        faqs=faqs,
        years_in_business=business.years_in_business,
        languages_spoken=business.languages_spoken,
    )
