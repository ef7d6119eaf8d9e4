"""Tests for slug and location helpers."""

import re

import pytest

from locpages.utils.slug import build_page_path, normalize_slug, parse_location, slugify

SLUG_RE = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")


class TestSlugify:
    """Test cases for slugify."""

    def test_basic_text(self):
        """Test lower-casing and hyphen joining."""
        assert slugify("Taco Shack") == "taco-shack"

    def test_collapses_punctuation_runs(self):
        """Test runs of non-alphanumerics become a single hyphen."""
        assert slugify("Happy hour 5-7pm!  $5 margaritas") == "happy-hour-5-7pm-5-margaritas"

    def test_strips_leading_and_trailing_hyphens(self):
        """Test no leading or trailing hyphen survives."""
        assert slugify("  --Joe's Café--  ") == "joe-s-caf"

    @pytest.mark.parametrize("text", ["", "   ", "!!!", None])
    def test_empty_input_falls_back(self, text):
        """Test empty or symbol-only input yields the fallback slug."""
        assert slugify(text) == "business"

    def test_truncates_to_50_without_trailing_hyphen(self):
        """Test long input is cut at 50 characters and never ends in a hyphen."""
        text = "a" * 49 + " bcd"
        slug = slugify(text)
        assert len(slug) <= 50
        assert not slug.endswith("-")
        assert slug == "a" * 49

    @pytest.mark.parametrize(
        "text",
        ["Taco Shack", "Happy hour 5-7pm! $5 margaritas", "x" * 80, "ÅÄÖ Bakery", "--", "a - b - c"],
    )
    def test_idempotent_and_well_formed(self, text):
        """Test slugify(slugify(x)) == slugify(x) and the output format."""
        once = slugify(text)
        assert slugify(once) == once
        assert once == "business" or (SLUG_RE.match(once) and len(once) <= 50)

    def test_normalize_slug_has_no_fallback(self):
        """Test normalize_slug returns an empty string for empty input."""
        assert normalize_slug("!!!") == ""


class TestParseLocation:
    """Test cases for parse_location."""

    def test_city_state(self):
        """Test two parts are city and state with US default."""
        assert parse_location("Austin, TX") == {"city": "Austin", "state": "TX", "country": "US"}

    def test_city_state_country_usa_normalized(self):
        """Test the literal USA is normalized to US."""
        assert parse_location("Austin, TX, USA") == {"city": "Austin", "state": "TX", "country": "US"}

    def test_city_state_other_country(self):
        """Test other countries are kept."""
        assert parse_location("Toronto, ON, CA") == {"city": "Toronto", "state": "ON", "country": "CA"}

    @pytest.mark.parametrize("location", ["", "   ", None, "Austin", "a, b, c, d"])
    def test_unknown_shapes(self, location):
        """Test anything else yields the unknown location."""
        assert parse_location(location) == {"city": "Unknown", "state": "XX", "country": "US"}

    def test_returns_fresh_dict(self):
        """Test callers cannot mutate the shared unknown location."""
        first = parse_location("")
        first["city"] = "Changed"
        assert parse_location("")["city"] == "Unknown"


class TestBuildPagePath:
    """Test cases for public route paths."""

    def test_business_path(self):
        """Test profile page path segments are slugified."""
        assert build_page_path("US", "TX", "Austin", "Taco Shack") == "/us/tx/austin/taco-shack"

    def test_variant_path(self):
        """Test the variant slug is appended."""
        assert build_page_path("US", "TX", "San Antonio", "taco-shack", "happy-austin") == (
            "/us/tx/san-antonio/taco-shack/happy-austin"
        )
