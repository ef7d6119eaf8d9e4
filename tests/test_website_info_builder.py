"""Tests for assembling page content from a profile and an update."""

from datetime import datetime

from locpages.domain.models.business_record import BusinessRecord
from locpages.domain.services.discoverability_service import calculate_discoverability_score
from locpages.domain.services.structured_data_service import generate_comprehensive_schema
from locpages.domain.services.url_candidate_service import suggest_urls_for
from locpages.domain.services.website_info_builder import build_website_info, business_context
from locpages.llm.content_writer import ContentDraft
from locpages.persistence.models.business_update import BusinessUpdate


def _business(**overrides) -> BusinessRecord:
    data = {
        "id": 7,
        "name": "Taco Shack",
        "primary_category": "food-dining",
        "address_city": "Austin",
        "address_state": "TX",
        "phone": "512-555-0100",
    }
    data.update(overrides)
    return BusinessRecord(**data)


def _update(**overrides) -> BusinessUpdate:
    data = {
        "business_id": 7,
        "content_text": "Happy hour 5-7pm! $5 margaritas",
        "starts_at": datetime(2026, 5, 1, 17),
        "expires_at": datetime(2026, 5, 1, 19),
    }
    data.update(overrides)
    return BusinessUpdate(**data)


class TestBuildWebsiteInfo:
    """Test cases for WebsiteInfo assembly."""

    def test_happy_hour_without_signals(self):
        """Test a bare profile yields a local slug, restaurant schema and zero score."""
        info = build_website_info(_business(), _update(), ContentDraft(title="Happy Hour at Taco Shack"))

        urls = suggest_urls_for(info)
        assert "austin" in urls.primary
        assert "happy" in urls.primary or "margaritas" in urls.primary
        assert generate_comprehensive_schema(info)["@type"] == "Restaurant"
        assert calculate_discoverability_score(info) == 0

    def test_update_fields(self):
        """Test update text and temporal window are carried over."""
        info = build_website_info(_business(), _update())

        assert info.location == "Austin, TX"
        assert info.update_content == "Happy hour 5-7pm! $5 margaritas"
        assert info.temporal.expires_at == datetime(2026, 5, 1, 19)
        assert info.preview is None

    def test_profile_page_uses_description(self):
        """Test without an update the business description is the content."""
        info = build_website_info(_business(description="Street tacos since 1998"))

        assert info.update_content == "Street tacos since 1998"
        assert info.temporal is None

    def test_authority_and_faqs_from_profile(self):
        """Test stored awards and FAQs enrich the page."""
        business = _business(
            awards=["Best Tacos 2023", {"name": "Readers' Choice", "year": "2022"}],
            business_faqs=[{"question": "Parking?", "answer": "Free lot out back."}, {"question": "No answer"}],
            specialties=["Brisket Tacos"],
            price_positioning="budget",
        )
        draft = ContentDraft(title="Happy Hour", faqs=[{"question": "When?", "answer": "5-7pm daily."}])

        info = build_website_info(business, _update(), draft)

        assert [award.name for award in info.authority.awards] == ["Best Tacos 2023", "Readers' Choice"]
        assert info.authority.awards[1].year == 2022
        assert [faq.question for faq in info.faqs] == ["When?", "Parking?"]
        assert info.competitive.specialties[0].name == "Brisket Tacos"
        assert info.competitive.price_positioning == "budget"


class TestBusinessContext:
    """Test cases for the facts handed to the content writer."""

    def test_context(self):
        """Test the category is shown by display name."""
        context = business_context(_business(services=["Catering"]))

        assert context["name"] == "Taco Shack"
        assert context["category"] == "Food & Dining"
        assert context["location"] == "Austin, TX"
        assert context["services"] == ["Catering"]
