"""URL slug and location helpers for public page routes."""

import re

MAX_SLUG_LENGTH = 50
FALLBACK_SLUG = "business"

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")

UNKNOWN_LOCATION = {"city": "Unknown", "state": "XX", "country": "US"}


def normalize_slug(text: str | None) -> str:
    """Slug text without the fallback: may return an empty string."""
    if not text:
        return ""
    slug = _NON_ALNUM_RE.sub("-", text.lower()).strip("-")
    # Truncation can expose a hyphen at the cut point
    return slug[:MAX_SLUG_LENGTH].rstrip("-")


def slugify(text: str | None) -> str:
    """Convert text to a lower-case hyphenated URL slug of at most 50 characters.

    Empty, whitespace-only or punctuation-only input yields "business".
    """
    return normalize_slug(text) or FALLBACK_SLUG


def parse_location(location: str | None) -> dict[str, str]:
    """Split a free-text "City, ST[, Country]" location into its parts.

    No geocoding is done. Anything other than two or three comma-separated
    parts yields the unknown location.
    """
    if not location or not location.strip():
        return dict(UNKNOWN_LOCATION)

    parts = [part.strip() for part in location.split(",")]

    if len(parts) == 2:
        # "Austin, TX"
        return {
            "city": parts[0] or "Unknown",
            "state": (parts[1] or "XX").upper(),
            "country": "US",
        }
    if len(parts) == 3:
        # "Austin, TX, USA"
        country = (parts[2] or "US").upper()
        return {
            "city": parts[0] or "Unknown",
            "state": (parts[1] or "XX").upper(),
            "country": "US" if country == "USA" else country,
        }

    return dict(UNKNOWN_LOCATION)


def build_page_path(
    country: str,
    state: str,
    city: str,
    business_slug: str,
    variant_slug: str | None = None,
) -> str:
    """Build the public route /{country}/{state}/{city}/{business}[/{variant}]."""
    segments = [slugify(country), slugify(state), slugify(city), slugify(business_slug)]
    if variant_slug:
        segments.append(slugify(variant_slug))
    return "/" + "/".join(segments)
