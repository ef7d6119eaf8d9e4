"""Schema.org structured data for generated pages.

Builds JSON-compatible documents (main business entity, FAQPage,
Organization, per-specialty Service) from a WebsiteInfo and, when available,
the owning business profile. Optional inputs that are missing are omitted
from the output, never emitted as null.
"""

import json
import logging
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from pydantic import BaseModel

from locpages.domain.models.business_record import BusinessRecord
from locpages.domain.models.website_info import (
    DetailedAward,
    FAQEntry,
    NamedAward,
    WebsiteInfo,
)
from locpages.utils.categories import price_range_for, schema_type_for

logger = logging.getLogger(__name__)

SCHEMA_CONTEXT = "https://schema.org"
DEFAULT_SERVICE_RADIUS = "25 mi"
AWARD_CATEGORY = "Business Excellence"
CERTIFICATION_CATEGORY = "Professional Certification"

WEEKDAYS = {
    "monday": "Monday",
    "tuesday": "Tuesday",
    "wednesday": "Wednesday",
    "thursday": "Thursday",
    "friday": "Friday",
    "saturday": "Saturday",
    "sunday": "Sunday",
}


class SchemaBundle(BaseModel):
    """All structured data documents for one page."""

    main: dict[str, Any]
    faq: dict[str, Any] | None = None
    organization: dict[str, Any]
    services: list[dict[str, Any]] = []

    def documents(self) -> list[dict[str, Any]]:
        """Documents in embedding order."""
        docs = [self.main]
        if self.faq:
            docs.append(self.faq)
        docs.append(self.organization)
        docs.extend(self.services)
        return docs


class MetaTags(BaseModel):
    """Meta tags aimed at AI crawlers."""

    title: str
    description: str
    keywords: str
    og_tags: dict[str, str]


def _prune(value: Any) -> Any:
    """Drop None leaves and empty containers from a document tree."""
    if isinstance(value, dict):
        pruned = {k: _prune(v) for k, v in value.items()}
        return {k: v for k, v in pruned.items() if v is not None and v != [] and v != {}}
    if isinstance(value, list):
        return [item for item in (_prune(v) for v in value) if item is not None and item != {}]
    return value


def _isoformat(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def round_rating(value: float) -> float:
    """Round a rating to one decimal place, halves away from zero."""
    return float(Decimal(str(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def _split_location(location: str) -> tuple[str | None, str | None]:
    parts = [part.strip() for part in (location or "").split(",")]
    city = parts[0] if parts and parts[0] else None
    state = parts[1] if len(parts) > 1 and parts[1] else None
    return city, state


def parse_opening_hours(base_hours: dict[str, Any] | None) -> list[dict[str, Any]]:
    """Convert a weekday → "open-close" mapping into OpeningHoursSpecification entries.

    Day names are matched case-insensitively. Days that are missing, not
    weekdays, or marked "closed" are skipped.
    """
    if not base_hours or not isinstance(base_hours, dict):
        return []

    specs = []
    for day, hours in base_hours.items():
        day_name = WEEKDAYS.get(str(day).strip().lower())
        if not day_name or not hours or not isinstance(hours, str):
            continue
        if hours.strip().lower() == "closed":
            continue
        opens, _, closes = hours.partition("-")
        specs.append({
            "@type": "OpeningHoursSpecification",
            "dayOfWeek": day_name,
            "opens": opens.strip(),
            "closes": closes.strip() or None,
        })
    return specs


def _award_entry(award: NamedAward | DetailedAward) -> dict[str, Any]:
    entry: dict[str, Any] = {"@type": "Award", "name": award.name, "category": AWARD_CATEGORY}
    if isinstance(award, DetailedAward):
        entry["awarder"] = award.issuer
        entry["dateAwarded"] = str(award.year) if award.year is not None else None
        entry["category"] = award.category or AWARD_CATEGORY
    return entry


def _faq_questions(faqs: list[FAQEntry], with_keywords: bool = False) -> list[dict[str, Any]]:
    questions = []
    for faq in faqs:
        question: dict[str, Any] = {
            "@type": "Question",
            "name": faq.question,
            "acceptedAnswer": {"@type": "Answer", "text": faq.answer},
        }
        if with_keywords and faq.search_terms:
            question["keywords"] = ", ".join(faq.search_terms)
        questions.append(question)
    return questions


def _cities(areas: list[str]) -> list[dict[str, Any]]:
    return [{"@type": "City", "name": area} for area in areas if area]


def _keywords(info: WebsiteInfo) -> str | None:
    if not info.ai_optimization:
        return None
    keywords = info.ai_optimization.primary_keywords + info.ai_optimization.semantic_keywords
    return ", ".join(keywords) if keywords else None


def _base_description(info: WebsiteInfo, business: BusinessRecord | None) -> str | None:
    if info.preview and info.preview.description:
        return info.preview.description
    if info.update_content:
        return info.update_content
    return business.description if business else None


def _area_served(schema: dict[str, Any], info: WebsiteInfo, business: BusinessRecord | None) -> None:
    details = business.service_area_details if business else None
    if details:
        area: dict[str, Any] = {
            "@type": "GeoCircle",
            "geoRadius": f"{details.coverage_radius:g} mi" if details.coverage_radius else DEFAULT_SERVICE_RADIUS,
        }
        if business.latitude is not None and business.longitude is not None:
            area["geoMidpoint"] = {
                "@type": "GeoCoordinates",
                "latitude": business.latitude,
                "longitude": business.longitude,
            }
        schema["areaServed"] = area

        cities: list[str] = []
        for city in [details.primary_city, *details.additional_cities]:
            if city and city not in cities:
                cities.append(city)
        if cities:
            schema["serviceArea"] = cities
    elif business and business.service_area:
        schema["areaServed"] = business.service_area
    elif info.service_areas:
        schema["areaServed"] = _cities(info.service_areas)


def _offer_catalog(schema: dict[str, Any], info: WebsiteInfo, business: BusinessRecord | None) -> None:
    items: list[dict[str, Any]] = []
    named: set[str] = set()

    specialties = info.competitive.specialties if info.competitive else []
    for specialty in specialties:
        named.add(specialty.name.lower())
        items.append({
            "@type": "Offer",
            "name": specialty.name,
            "description": specialty.description,
            "category": info.business_type or None,
        })

    for service in (business.services if business else info.services):
        if service.lower() in named:
            continue
        named.add(service.lower())
        items.append({"@type": "Offer", "name": service, "category": info.business_type or None})

    catalog_name = "Services and Specialties"
    temporal = info.temporal
    if info.update_content and temporal and temporal.expires_at:
        catalog_name = "Current Offers"
        items.append({
            "@type": "Offer",
            "name": (info.preview.title if info.preview and info.preview.title else info.update_content),
            "description": info.update_content,
            "validFrom": _isoformat(temporal.starts_at),
            "validThrough": _isoformat(temporal.expires_at),
            "availability": "https://schema.org/InStock",
        })

    if items:
        for position, item in enumerate(items, start=1):
            item["position"] = position
        schema["hasOfferCatalog"] = {
            "@type": "OfferCatalog",
            "name": catalog_name,
            "itemListElement": items,
        }


def generate_comprehensive_schema(
    info: WebsiteInfo,
    business: BusinessRecord | None = None,
) -> dict[str, Any]:
    """Build the main structured data document for a page.

    Args:
        info: Content of the page being generated
        business: Owning business profile, preferred over update-only values

    Returns:
        JSON-compatible document with "@context" and "@type"
    """
    business_type = info.business_type or (business.primary_category if business else "") or ""
    city, state = _split_location(info.location)
    if business:
        city = business.address_city or city
        state = business.address_state or state
    contact = info.contact

    schema: dict[str, Any] = {
        "@context": SCHEMA_CONTEXT,
        "@type": schema_type_for(business_type),
        "name": info.business_name or (business.name if business else None),
        "description": _base_description(info, business),
        "address": _prune({
            "@type": "PostalAddress",
            "streetAddress": (business.address_street if business else None) or (contact.address if contact else None),
            "addressLocality": city,
            "addressRegion": state,
            "postalCode": business.zip_code if business else None,
            "addressCountry": (business.country if business else None) or "US",
        }),
        "telephone": (business.phone if business else None) or (contact.phone if contact else None),
        "url": (business.website if business else None) or info.page_url,
    }

    if business and business.established_year:
        schema["foundingDate"] = str(business.established_year)
    if info.employee_count_range:
        schema["numberOfEmployees"] = info.employee_count_range

    positioning = (info.competitive.price_positioning if info.competitive else None) or (
        business.price_positioning if business else None
    )
    price_range = price_range_for(positioning)
    if price_range:
        schema["priceRange"] = price_range

    if business:
        if business.latitude is not None and business.longitude is not None:
            schema["geo"] = {
                "@type": "GeoCoordinates",
                "latitude": business.latitude,
                "longitude": business.longitude,
            }

        summary = business.review_summary
        if summary and summary.average_rating and summary.total_reviews:
            schema["aggregateRating"] = {
                "@type": "AggregateRating",
                "ratingValue": summary.average_rating,
                "reviewCount": summary.total_reviews,
                "bestRating": 5,
                "worstRating": 1,
            }

        social_links = list(business.social_media.values())
        if social_links:
            schema["sameAs"] = social_links
        if business.payment_methods:
            schema["paymentAccepted"] = business.payment_methods
        if business.accessibility_features:
            schema["accessibilityFeature"] = business.accessibility_features

        if business.structured_hours:
            schema["openingHoursSpecification"] = business.structured_hours
        else:
            opening_hours = parse_opening_hours(business.base_hours)
            if opening_hours:
                schema["openingHoursSpecification"] = opening_hours

    awards = list(info.authority.awards) if info.authority and info.authority.awards else []
    if not awards and business:
        awards = list(business.awards)
    certifications = list(business.certifications) if business else []
    if not certifications and info.authority:
        certifications = list(info.authority.certifications)
    if awards or certifications:
        schema["award"] = [_prune(_award_entry(award)) for award in awards] + [
            _prune({
                "@type": "Award",
                "name": cert.name,
                "awarder": cert.issuer,
                "dateAwarded": cert.valid_from,
                "category": CERTIFICATION_CATEGORY,
            })
            for cert in certifications
        ]

    if info.faqs:
        schema["mainEntity"] = _faq_questions(info.faqs)

    if info.testimonials:
        schema["review"] = [
            _prune({
                "@type": "Review",
                "author": {"@type": "Person", "name": t.customer_name},
                "reviewBody": t.text,
                "reviewRating": (
                    {"@type": "Rating", "ratingValue": t.rating, "bestRating": 5}
                    if t.rating is not None else None
                ),
                "datePublished": t.date,
            })
            for t in info.testimonials
        ]
        ratings = [t.rating for t in info.testimonials if t.rating is not None]
        if ratings:
            schema["aggregateRating"] = {
                "@type": "AggregateRating",
                "ratingValue": round_rating(sum(ratings) / len(ratings)),
                "reviewCount": len(ratings),
                "bestRating": 5,
            }

    _offer_catalog(schema, info, business)
    _area_served(schema, info, business)

    keywords = _keywords(info)
    if keywords:
        schema["keywords"] = keywords

    if info.business_story:
        base = schema.get("description")
        schema["description"] = f"{base}. {info.business_story}" if base else info.business_story

    languages = info.languages_spoken or (business.languages_spoken if business else [])
    if languages:
        schema["knowsLanguage"] = [{"@type": "Language", "name": lang} for lang in languages]

    return _prune(schema)


def generate_faq_schema(faqs: list[FAQEntry]) -> dict[str, Any]:
    """Standalone FAQPage document with per-question search keywords."""
    return {
        "@context": SCHEMA_CONTEXT,
        "@type": "FAQPage",
        "mainEntity": _faq_questions(faqs, with_keywords=True),
    }


def generate_organization_schema(
    info: WebsiteInfo,
    business: BusinessRecord | None = None,
) -> dict[str, Any]:
    """Organization document carrying authority and contact signals."""
    contact = info.contact
    awards = info.authority.awards if info.authority else []
    return _prune({
        "@context": SCHEMA_CONTEXT,
        "@type": "Organization",
        "name": info.business_name,
        "description": _base_description(info, business),
        "url": (business.website if business else None) or info.page_url,
        "foundingDate": str(business.established_year) if business and business.established_year else None,
        "numberOfEmployees": info.employee_count_range,
        "awards": [award.name for award in awards],
        "contactPoint": {
            "@type": "ContactPoint",
            "telephone": (business.phone if business else None) or (contact.phone if contact else None),
            "contactType": "customer service",
            "availableLanguage": info.languages_spoken,
        },
        "sameAs": list(business.social_media.values()) if business else [],
        "areaServed": _cities(info.service_areas),
        "keywords": _keywords(info),
    })


def generate_service_schemas(info: WebsiteInfo) -> list[dict[str, Any]]:
    """One Service document per specialty."""
    specialties = info.competitive.specialties if info.competitive else []
    return [
        _prune({
            "@context": SCHEMA_CONTEXT,
            "@type": "Service",
            "name": specialty.name,
            "description": specialty.description,
            "provider": {"@type": "Organization", "name": info.business_name},
            "category": info.business_type or None,
            "areaServed": _cities(info.service_areas),
        })
        for specialty in specialties
    ]


def generate_all_schemas(info: WebsiteInfo, business: BusinessRecord | None = None) -> SchemaBundle:
    """Generate every structured data document for a page."""
    return SchemaBundle(
        main=generate_comprehensive_schema(info, business),
        faq=generate_faq_schema(info.faqs) if info.faqs else None,
        organization=generate_organization_schema(info, business),
        services=generate_service_schemas(info),
    )


def generate_meta_tags(info: WebsiteInfo) -> MetaTags:
    """Title, description, keywords and Open Graph tags for AI crawlers."""
    preview = info.preview
    if preview and preview.title:
        title = preview.title
    elif info.update_content:
        title = f"{info.business_name} - {info.update_content}"
    else:
        title = info.business_name
    description = (preview.description if preview and preview.description else None) or info.update_content or ""

    keyword_parts: list[str] = []
    if info.ai_optimization:
        keyword_parts.extend(info.ai_optimization.primary_keywords)
        keyword_parts.extend(info.ai_optimization.local_search_terms)
    keyword_parts.extend([info.business_type, info.location])

    return MetaTags(
        title=title,
        description=description,
        keywords=", ".join(part for part in keyword_parts if part),
        og_tags={
            "og:title": title,
            "og:description": description,
            "og:type": "website",
            "og:site_name": info.business_name,
            "og:locale": "en_US",
        },
    )


def render_json_ld_scripts(bundle: SchemaBundle) -> str:
    """Serialize a bundle into JSON-LD script blocks safe to embed in HTML."""
    scripts = []
    for document in bundle.documents():
        payload = json.dumps(document, indent=2, ensure_ascii=False).replace("</", "<\\/")
        scripts.append(f'<script type="application/ld+json">{payload}</script>')
    return "\n".join(scripts)
