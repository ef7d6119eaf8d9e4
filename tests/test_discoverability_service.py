"""Tests for discoverability scoring."""

from locpages.domain.models.website_info import (
    AIOptimization,
    BusinessAuthority,
    CompetitiveAdvantage,
    CustomerTestimonial,
    FAQEntry,
    Specialty,
    WebsiteInfo,
)
from locpages.domain.services.discoverability_service import (
    ScoreBreakdown,
    calculate_discoverability_score,
    score_breakdown,
)

LONG_ANSWER = "Yes. " + "We keep the grill running late on weekends for everyone. " * 2


def _info(**overrides) -> WebsiteInfo:
    return WebsiteInfo(business_name="Taco Shack", business_type="food-dining", location="Austin, TX", **overrides)


class TestDiscoverabilityScore:
    """Test cases for the discoverability score."""

    def test_no_signals_scores_zero(self):
        """Test a page with only required fields scores zero."""
        assert calculate_discoverability_score(_info()) == 0

    def test_every_category_at_cap_scores_hundred(self):
        """Test maxed signals in every category reach exactly 100."""
        info = _info(
            authority=BusinessAuthority(
                awards=[f"Award {i}" for i in range(5)],
                certifications=[f"Cert {i}" for i in range(6)],
            ),
            years_in_business=25,
            faqs=[FAQEntry(question=f"Q{i}?", answer=LONG_ANSWER) for i in range(10)],
            competitive=CompetitiveAdvantage(
                unique_selling_points=[f"USP {i}" for i in range(6)],
                specialties=[Specialty(name=f"Dish {i}") for i in range(6)],
            ),
            testimonials=[CustomerTestimonial(customer_name=f"C{i}", text="Great", rating=5) for i in range(8)],
            ai_optimization=AIOptimization(
                primary_keywords=[f"p{i}" for i in range(6)],
                semantic_keywords=[f"s{i}" for i in range(11)],
            ),
        )

        breakdown = score_breakdown(info)

        assert breakdown == ScoreBreakdown(authority=30, faq=25, competitive=20, social_proof=15, keywords=10)
        assert calculate_discoverability_score(info) == 100

    def test_authority_points(self):
        """Test awards, certifications and tenure add up."""
        info = _info(
            authority=BusinessAuthority(awards=["Best Tacos"], certifications=["ServSafe"]),
            years_in_business=4,
        )

        assert score_breakdown(info).authority == 5 + 3 + 4

    def test_tenure_capped_at_ten(self):
        """Test tenure contributes at most ten points."""
        assert score_breakdown(_info(years_in_business=40)).authority == 10

    def test_faq_quality_bonus(self):
        """Test only answers longer than 50 characters earn the bonus."""
        info = _info(faqs=[
            FAQEntry(question="Parking?", answer="Free lot."),
            FAQEntry(question="Late hours?", answer=LONG_ANSWER),
        ])

        assert score_breakdown(info).faq == 2 * 3 + 1

    def test_social_proof_counts_high_ratings(self):
        """Test ratings of four or more earn a bonus point each."""
        info = _info(testimonials=[
            CustomerTestimonial(customer_name="Ana", text="Great", rating=4),
            CustomerTestimonial(customer_name="Ben", text="Okay", rating=3),
            CustomerTestimonial(customer_name="Cy", text="Unrated"),
        ])

        assert score_breakdown(info).social_proof == 3 * 2 + 1

    def test_keyword_thresholds_are_strict(self):
        """Test exactly five primary and ten semantic keywords earn nothing."""
        at_threshold = _info(ai_optimization=AIOptimization(
            primary_keywords=[f"p{i}" for i in range(5)],
            semantic_keywords=[f"s{i}" for i in range(10)],
        ))
        over_threshold = _info(ai_optimization=AIOptimization(
            primary_keywords=[f"p{i}" for i in range(6)],
            semantic_keywords=[f"s{i}" for i in range(10)],
        ))

        assert score_breakdown(at_threshold).keywords == 0
        assert score_breakdown(over_threshold).keywords == 5

    def test_competitive_points(self):
        """Test selling points and specialties are scored separately."""
        info = _info(competitive=CompetitiveAdvantage(
            unique_selling_points=["Open late"],
            specialties=[Specialty(name="Brisket"), Specialty(name="Queso")],
        ))

        assert score_breakdown(info).competitive == 3 + 4

    def test_total_is_clamped(self):
        """Test the total never leaves the 0..100 range."""
        assert ScoreBreakdown(authority=90, faq=90).total == 100
        assert ScoreBreakdown().total == 0
