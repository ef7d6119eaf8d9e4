"""AI-optimized URL slug candidates for update pages."""

import time

from locpages.domain.models.website_info import SuggestedUrls, WebsiteInfo
from locpages.utils.slug import normalize_slug

STOP_WORDS = frozenset({
    "the", "and", "for", "with", "are", "our", "you", "your", "all", "new", "now",
})

CANDIDATE_COUNT = 4

REASONING = (
    "Generated based on search intent patterns: service+location, "
    "specialty+service, local SEO optimization"
)


def extract_content_words(update_content: str | None) -> list[str]:
    """Words longer than two characters that are not stop words, lower-cased."""
    if not update_content:
        return []
    return [
        word for word in update_content.lower().split()
        if len(word) > 2 and word not in STOP_WORDS
    ]


def generate_ai_optimized_urls(
    business_type: str | None,
    update_content: str | None,
    location: str | None,
    specialties: list[str] | None = None,
    keywords: list[str] | None = None,
    now_ms: int | None = None,
) -> SuggestedUrls:
    """Derive a primary slug and three alternatives, favoring local search intent.

    Service words come from the update text, or from the keywords when the
    text has none. Candidate order: service+city, specialty+service,
    service+second word, business type+city, then fixed fallbacks. Anything still missing is padded
    with time-suffixed slugs so the four results are always unique.
    """
    business_type = (business_type or "").strip().lower()
    location = (location or "").strip().lower()
    # Keywords stand in for the service words when the update text has none
    words = extract_content_words(update_content) or extract_content_words(" ".join(keywords or []))
    city = location.split(",")[0].strip()
    specialty_names = [s.strip().lower() for s in (specialties or []) if s and s.strip()]

    first_word = words[0] if words else ""
    second_word = words[1] if len(words) > 1 else ""

    candidates: list[str] = []

    # Pattern 1: service + location
    if first_word and city:
        candidates.append(f"{first_word}-{city}")

    # Pattern 2: specialty + service
    if specialty_names and first_word:
        candidates.append(f"{specialty_names[0]}-{first_word}")

    # Pattern 3: service + second word
    if first_word and second_word:
        candidates.append(f"{first_word}-{second_word}")

    # Pattern 4: business type + location
    if business_type and city:
        candidates.append(f"{business_type}-{city}")

    if len(candidates) < CANDIDATE_COUNT:
        candidates.append(f"{first_word or 'special'}-offer")
        candidates.append(f"{business_type}-service")
        candidates.append(f"local-{business_type}")
        candidates.append(f"{city}-{business_type}")

    unique: list[str] = []
    for candidate in candidates:
        slug = normalize_slug(candidate)
        if slug and slug not in unique:
            unique.append(slug)
    unique = unique[:CANDIDATE_COUNT]

    pad_base = normalize_slug(first_word) or "offer"
    suffix = (now_ms if now_ms is not None else int(time.time() * 1000)) % 1000
    while len(unique) < CANDIDATE_COUNT:
        slug = normalize_slug(f"{pad_base}-{suffix:03d}")
        if slug not in unique:
            unique.append(slug)
        suffix = (suffix + 1) % 1000

    return SuggestedUrls(
        primary=unique[0],
        alternatives=unique[1:CANDIDATE_COUNT],
        reasoning=REASONING,
    )


def suggest_urls_for(info: WebsiteInfo, now_ms: int | None = None) -> SuggestedUrls:
    """Generate URL candidates from a WebsiteInfo."""
    specialties = [s.name for s in info.competitive.specialties] if info.competitive else []
    keywords = info.ai_optimization.primary_keywords if info.ai_optimization else []
    return generate_ai_optimized_urls(
        business_type=info.business_type,
        update_content=info.update_content,
        location=info.location,
        specialties=specialties,
        keywords=keywords,
        now_ms=now_ms,
    )
