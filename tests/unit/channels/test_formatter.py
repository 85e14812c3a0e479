"""
Unit tests for src/channels/telegram/formatter.py
"""

import pytest

from src.channels.telegram.formatter import TelegramFormatter
from src.modules.listings import RatedListing


@pytest.fixture
def formatter():
    """Create a TelegramFormatter instance."""
    return TelegramFormatter()


@pytest.fixture
def must_buy_listing(sample_listing) -> RatedListing:
    """Rated MUST BUY version of the sample listing."""
    return RatedListing(
        **sample_listing.model_dump(),
        rating=10,
        label="MUST BUY",
        rating_reason="€/m² is 60% below median",
        rating_pros=["Best price in Vinča", "Large plot at low land price"],
        rating_cons=["High total price"],
        median_pps=3100,
    )


# ============================================================
# format_listing tests
# ============================================================


class TestFormatListing:
    """Tests for format_listing method."""

    def test_format_full_listing(self, formatter, must_buy_listing):
        result = formatter.format_listing(must_buy_listing)

        assert "🔥 <b>MUST BUY</b> ⭐ 10/10" in result
        assert "Kuća sa placem, Vinča" in result
        assert "€125,000" in result
        assert "€1,250/m²" in result
        assert "100 m²" in result
        assert "Plot 600 m²" in result
        assert "4.0 rooms" in result
        assert "Beograd, Opština Grocka, Vinča" in result
        assert "<i>€/m² is 60% below median</i>" in result
        assert "✅ Best price in Vinča" in result
        assert "⚠️ High total price" in result
        assert 'href="https://www.halooglasi.com/nekretnine/prodaja-kuca/kuca-vinca/5425645"' in result

    def test_format_minimal_listing(self, formatter):
        result = formatter.format_listing(RatedListing(id="1"))

        assert "⭐ 5/10" in result
        assert "MUST BUY" not in result
        assert "Untitled" in result
        assert "Price on request" in result
        assert "/m²" not in result
        assert "View listing" not in result

    def test_format_escapes_html(self, formatter):
        listing = RatedListing(
            id="1",
            title="Kuća <script>alert('XSS')</script>",
            location="Grocka & okolina",
            price=10000,
        )

        result = formatter.format_listing(listing)

        assert "<script>" not in result
        assert "&lt;script&gt;" in result
        assert "Grocka &amp; okolina" in result

    def test_location_falls_back_to_area(self, formatter):
        listing = RatedListing(id="1", title="Kuća", neighborhood="Boleč")

        assert "📍 Boleč" in formatter.format_listing(listing)

    def test_fractional_area(self, formatter):
        listing = RatedListing(id="1", title="Kuća", sqm=85.5)

        assert "85.5 m²" in formatter.format_listing(listing)


# ============================================================
# format_caption tests
# ============================================================


class TestFormatCaption:
    """Tests for format_caption method."""

    def test_caption_is_short(self, formatter, must_buy_listing):
        caption = formatter.format_caption(must_buy_listing)

        assert "MUST BUY" in caption
        assert "€125,000" in caption
        assert "View listing" in caption
        assert "Best price in Vinča" not in caption
        assert formatter.fits_caption(caption)

    def test_long_text_does_not_fit(self, formatter):
        assert formatter.fits_caption("x" * 1025) is False
