"""
Raw data type definitions for the listing crawler.

These TypedDicts define the structure of raw data extracted from a listing
index page. No transformation is done at this stage - values are kept as-is
from the HTML.
"""

from typing import TypedDict


class ListingRawData(TypedDict):
    """
    Raw data extracted from one listing card.

    Attributes:
        id: Listing ID from data-id (or id) attribute
        title: Title from .product-title a
        link: Absolute URL to the listing page
        price_raw: Price from .central-feature span[data-value] (e.g., "125000")
        price_per_sqm_raw: Text from .price-by-surface span (e.g., "1.250 €/m2")
        sqm_raw: Floor area value (e.g., "100 m2")
        land_sqm_raw: Plot area value (e.g., "6 ari")
        rooms_raw: Rooms value (e.g., "4.0")
        image: Thumbnail URL from .pi-img-wrapper img
        img_count_raw: Image count text from .pi-img-count-num
        location: Joined .subtitle-places entries
    """

    id: str
    title: str
    link: str
    price_raw: str
    price_per_sqm_raw: str
    sqm_raw: str
    land_sqm_raw: str
    rooms_raw: str
    image: str
    img_count_raw: str
    location: str


class PageRawData(TypedDict):
    """
    Raw data extracted from one listing index page.

    Attributes:
        items: Listing cards in document order
        total_pages: Declared page count for the area (>= 1)
    """

    items: list[ListingRawData]
    total_pages: int
