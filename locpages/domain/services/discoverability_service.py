"""AI discoverability scoring for generated page content."""

from pydantic import BaseModel

from locpages.domain.models.website_info import WebsiteInfo

AUTHORITY_MAX = 30
FAQ_MAX = 25
COMPETITIVE_MAX = 20
SOCIAL_PROOF_MAX = 15
KEYWORDS_MAX = 10

QUALITY_ANSWER_LENGTH = 50
HIGH_RATING = 4


class ScoreBreakdown(BaseModel):
    """Points earned per signal category, and the bounded total."""

    authority: int = 0
    faq: int = 0
    competitive: int = 0
    social_proof: int = 0
    keywords: int = 0

    @property
    def total(self) -> int:
        raw = self.authority + self.faq + self.competitive + self.social_proof + self.keywords
        return max(0, min(100, round(raw)))


def score_breakdown(info: WebsiteInfo) -> ScoreBreakdown:
    """Score each category of discoverability signals.

    Authority: awards (5 each, max 15), certifications (3 each, max 12),
    tenure (1 per year, max 10). FAQ: 3 per FAQ (max 20) plus 1 per answer
    longer than 50 characters (max 5). Competitive: unique selling points
    (3 each, max 12) and specialties (2 each, max 8). Social proof:
    testimonials (2 each, max 10) plus 1 per rating of 4 or more (max 5).
    Keywords: 5 for more than 5 primary, 5 for more than 10 semantic.
    """
    authority = 0
    if info.authority:
        authority += min(len(info.authority.awards) * 5, 15)
        authority += min(len(info.authority.certifications) * 3, 12)
    if info.years_in_business:
        authority += min(max(info.years_in_business, 0), 10)

    faq = 0
    if info.faqs:
        faq += min(len(info.faqs) * 3, 20)
        quality = sum(1 for entry in info.faqs if len(entry.answer) > QUALITY_ANSWER_LENGTH)
        faq += min(quality, 5)

    competitive = 0
    if info.competitive:
        competitive += min(len(info.competitive.unique_selling_points) * 3, 12)
        competitive += min(len(info.competitive.specialties) * 2, 8)

    social_proof = 0
    if info.testimonials:
        social_proof += min(len(info.testimonials) * 2, 10)
        high_rated = sum(
            1 for t in info.testimonials if t.rating is not None and t.rating >= HIGH_RATING
        )
        social_proof += min(high_rated, 5)

    keywords = 0
    if info.ai_optimization:
        if len(info.ai_optimization.primary_keywords) > 5:
            keywords += 5
        if len(info.ai_optimization.semantic_keywords) > 10:
            keywords += 5

    return ScoreBreakdown(
        authority=min(authority, AUTHORITY_MAX),
        faq=min(faq, FAQ_MAX),
        competitive=min(competitive, COMPETITIVE_MAX),
        social_proof=min(social_proof, SOCIAL_PROOF_MAX),
        keywords=min(keywords, KEYWORDS_MAX),
    )


def calculate_discoverability_score(info: WebsiteInfo) -> int:
    """Discoverability score in [0, 100] for the given page content."""
    return score_breakdown(info).total
