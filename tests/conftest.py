"""
Shared pytest fixtures for all tests.
"""

import pytest

from src.modules.listings import Listing


# ============================================================
# Listing Fixtures
# ============================================================


def make_listing(
    listing_id: str,
    price: float | None = None,
    pps: float | None = None,
    sqm: float | None = None,
    land: float | None = None,
    neighborhood: str = "Vinča",
    **extra,
) -> Listing:
    """Build a Listing with the fields rating cares about."""
    return Listing(
        id=listing_id,
        title=f"Kuća {listing_id}",
        link=f"https://www.halooglasi.com/nekretnine/prodaja-kuca/{listing_id}",
        neighborhood=neighborhood,
        price=price,
        price_per_sqm=pps,
        sqm=sqm,
        land_sqm=land,
        **extra,
    )


@pytest.fixture
def listing_factory():
    """Factory building Listings: listing_factory(id, price=, pps=, ...)."""
    return make_listing


@pytest.fixture
def sample_listing() -> Listing:
    """Fully populated listing."""
    return Listing(
        id="5425645",
        title="Kuća sa placem, Vinča",
        link="https://www.halooglasi.com/nekretnine/prodaja-kuca/kuca-vinca/5425645",
        location="Beograd, Opština Grocka, Vinča",
        neighborhood="Vinča",
        area_slug="beograd-grocka-vinca",
        price=125000,
        price_per_sqm=1250,
        sqm=100,
        land_sqm=600,
        rooms="4.0",
        image="https://img.example/1.jpg",
        img_count=12,
    )


@pytest.fixture
def single_area_listings(listing_factory) -> list[Listing]:
    """
    Five listings in one area, median €/m² 1000.

    Prices are pps * 100 so no total-price notes apply.
    """
    return [
        listing_factory("cheap", price=40000, pps=400, sqm=100),
        listing_factory("mid-a", price=100000, pps=1000, sqm=100),
        listing_factory("mid-b", price=100000, pps=1000, sqm=100),
        listing_factory("mid-c", price=100000, pps=1000, sqm=100),
        listing_factory("dear", price=160000, pps=1600, sqm=100),
    ]
